"""Cars app package.

Car listings offered for rent by sellers. A car must be both available
(owner toggle) and verified (admin moderation) before it can be booked.
"""
