"""Top-level package for Django configuration.

Settings modules for the different environments and the WSGI and ASGI
entry points of the car rental platform.
"""
