"""
navaccess.errors

Exceptions raised by the registry and rule builders.

Responsibilities:
- Separate configuration errors (registration time) from principal-contract
  errors (resolution time).
"""

from __future__ import annotations


class AccessControlError(Exception):
    """Base class for every error raised by the resolver."""


class InvalidRoleError(AccessControlError):
    """A role set is empty or holds something that is not a role identifier."""


class ConflictingRoleError(AccessControlError):
    """`any` was combined with other roles in a single registration."""


class InvalidPrincipalError(AccessControlError):
    """The supplied principal does not expose a usable identity and role."""


# --- Module Notes -----------------------------------------------------------
# None of these are retried: every failure here is a programming or configuration mistake.
