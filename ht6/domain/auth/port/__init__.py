"""Auth domain ports."""

from .membership_repository import MembershipRepository

__all__ = ["MembershipRepository"]
