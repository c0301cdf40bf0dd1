"""
Ledger abort kinds.

Every failed ledger call raises one of these. Each carries a stable ``code``
used by the HTTP and CLI shells, and also inherits from the closest builtin
exception so callers can catch broadly (PermissionError, LookupError, ...).
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all ledger aborts."""

    code = "ledger_error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


# --- Authorization ---


class AuthorizationError(LedgerError, PermissionError):
    """Caller identity does not hold the required role."""

    code = "unauthorized"


class NotCampaignOwner(AuthorizationError):
    code = "not_owner"


class NotAdministrator(AuthorizationError):
    code = "not_admin"


# --- Lookup / lifecycle ---


class CampaignNotFound(LedgerError, LookupError):
    code = "campaign_not_found"


class RegistryNotInitialized(LedgerError, RuntimeError):
    code = "registry_not_initialized"


class CampaignCompleted(LedgerError, ValueError):
    code = "campaign_completed"


class GoalNotReached(LedgerError, ValueError):
    code = "goal_not_reached"


class AlreadyWithdrawn(LedgerError, ValueError):
    code = "already_withdrawn"


class InsufficientFunds(LedgerError, ValueError):
    code = "insufficient_funds"


# --- Input validation ---


class InvalidGoal(LedgerError, ValueError):
    code = "invalid_goal"


class InvalidAmount(LedgerError, ValueError):
    code = "invalid_amount"


class InvalidCampaignText(LedgerError, ValueError):
    code = "invalid_text"


class InvalidAddress(LedgerError, ValueError):
    code = "invalid_address"
