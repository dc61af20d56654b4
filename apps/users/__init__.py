"""Users app package.

Defines the custom user model with marketplace roles (admin, seller,
buyer) and the identity boundary used by the booking services. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
