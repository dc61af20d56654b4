"""Booking rules that do not touch the database: pricing, overlap, transitions."""
