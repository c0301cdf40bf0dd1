"""
Authorization and input policy for ledger operations.

Pure checks shared by the registry, donation and withdrawal components.
"""

import re

from src.domain.entities import MAX_U64, Campaign
from src.domain.errors import (
    InvalidAddress,
    InvalidAmount,
    InvalidCampaignText,
    InvalidGoal,
    NotAdministrator,
    NotCampaignOwner,
)

_HEX_RE = re.compile(r"^[0-9a-f]{1,64}$")


def normalize_address(address: str) -> str:
    """
    Canonical account address: lower-case hex with a ``0x`` prefix.

    Raises InvalidAddress for empty, non-hex or over-long input.
    """
    raw = (address or "").strip().lower()
    if raw.startswith("0x"):
        raw = raw[2:]
    if not _HEX_RE.match(raw):
        raise InvalidAddress(f"Invalid account address: {address!r}")
    return f"0x{raw}"


def same_address(a: str, b: str) -> bool:
    return normalize_address(a) == normalize_address(b)


def require_owner(caller: str, campaign: Campaign) -> None:
    if not same_address(caller, campaign.owner):
        raise NotCampaignOwner(
            f"{normalize_address(caller)} is not the owner of campaign {campaign.campaign_id}"
        )


def require_admin(caller: str, admin: str) -> None:
    if not same_address(caller, admin):
        raise NotAdministrator(f"{normalize_address(caller)} is not the administrator")


def validate_goal(goal: int, require_positive: bool) -> None:
    if isinstance(goal, bool) or not isinstance(goal, int):
        raise InvalidGoal(f"Goal must be an integer, got {type(goal).__name__}")
    if goal < 0 or goal > MAX_U64:
        raise InvalidGoal(f"Goal {goal} is outside the u64 range")
    if require_positive and goal == 0:
        raise InvalidGoal("Goal must be greater than 0")


def validate_amount(amount: int, require_positive: bool) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"Amount must be an integer, got {type(amount).__name__}")
    if amount < 0 or amount > MAX_U64:
        raise InvalidAmount(f"Amount {amount} is outside the u64 range")
    if require_positive and amount == 0:
        raise InvalidAmount("Amount must be greater than 0")


def encode_text(value: str | bytes, field: str, max_bytes: int) -> bytes:
    """Encode title/description to bytes and enforce the byte bound."""
    data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    if not data.strip():
        raise InvalidCampaignText(f"{field} is required")
    if len(data) > max_bytes:
        raise InvalidCampaignText(f"{field} must be {max_bytes} bytes or less")
    return data
