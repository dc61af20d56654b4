"""Payments app package.

Tracks gateway payments for bookings. A successful Paystack charge
confirms the booking it pays for.
"""
