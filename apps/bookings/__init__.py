"""Bookings app package.

Holds the booking engine of the marketplace: rental pricing, the
availability check against confirmed and active bookings, the status
state machine and ``BookingService``, which runs every create, update
and delete in one transaction with the car row locked.
"""
