# shared/common/constants.py
"""
Platform-wide constants and enumerations
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles issued by the identity provider in the JWT ``roles`` claim"""
    USER = 'user'
    BUSINESS_OWNER = 'business_owner'
    WORKER = 'worker'
    ADMIN = 'admin'


# Roles that may act on any business regardless of ownership
PRIVILEGED_ROLES = frozenset({UserRole.ADMIN.value})
