"""Reviews app package.

Ratings exchanged between renters and car owners after a completed rental.
"""
