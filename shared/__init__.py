"""
Shared Kernel

Base classes and utilities shared by every app of the marketplace:
domain value objects, typed domain errors, the unit of work and the
exception handler that turns domain errors into API responses.
"""
