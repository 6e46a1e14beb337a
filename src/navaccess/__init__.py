"""
navaccess

Role-based navigation access resolver.

Responsibilities:
- Expose package version metadata.
- Re-export the registry, principal and result types used by host applications.
"""

__version__ = "0.1.0"

from navaccess.errors import (  # noqa: E402
    AccessControlError,
    ConflictingRoleError,
    InvalidPrincipalError,
    InvalidRoleError,
)
from navaccess.navigation import MenuKey, NavigationNode  # noqa: E402
from navaccess.principal import Account, Principal  # noqa: E402
from navaccess.registry import AccessRegistry  # noqa: E402
from navaccess.resolution import Auths, Maps  # noqa: E402
from navaccess.roles import ANY  # noqa: E402
from navaccess.rules import Authorization, RoleRule  # noqa: E402

__all__ = [
    "__version__",
    "ANY",
    "AccessControlError",
    "AccessRegistry",
    "Account",
    "Authorization",
    "Auths",
    "ConflictingRoleError",
    "InvalidPrincipalError",
    "InvalidRoleError",
    "Maps",
    "MenuKey",
    "NavigationNode",
    "Principal",
    "RoleRule",
]
