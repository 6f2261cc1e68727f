"""
Accounts module: sign-in, registration and session checks.
"""

from .domain.models import Account, Session

__all__ = ["Account", "Session"]
