"""
Unit tests for address normalization and input policy.
"""

import pytest

from src.domain.entities import MAX_U64, Campaign
from src.domain.errors import (
    InvalidAddress,
    InvalidAmount,
    InvalidCampaignText,
    InvalidGoal,
    NotAdministrator,
    NotCampaignOwner,
)
from src.domain.policy import (
    encode_text,
    normalize_address,
    require_admin,
    require_owner,
    same_address,
    validate_amount,
    validate_goal,
)


class TestNormalizeAddress:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("0xABC", "0xabc"),
            ("abc", "0xabc"),
            ("  0x01  ", "0x01"),
            ("0X" + "f" * 64, "0x" + "f" * 64),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert normalize_address(raw) == expected

    @pytest.mark.parametrize("raw", ["", "0x", "0xzz", "0x" + "a" * 65, "alice"])
    def test_rejects(self, raw: str) -> None:
        with pytest.raises(InvalidAddress):
            normalize_address(raw)

    def test_same_address_ignores_case_and_prefix(self) -> None:
        assert same_address("0xAbC", "abc")
        assert not same_address("0xabc", "0xabd")


class TestRoles:
    def test_owner_check(self) -> None:
        campaign = Campaign(
            campaign_id=0, owner="0xa11ce", title=b"t", description=b"d", goal=1
        )
        require_owner("0xA11CE", campaign)
        with pytest.raises(NotCampaignOwner):
            require_owner("0xb0b", campaign)

    def test_admin_check(self) -> None:
        require_admin("0xAD", "0xad")
        with pytest.raises(NotAdministrator) as exc:
            require_admin("0xb0b", "0xad")
        assert isinstance(exc.value, PermissionError)
        assert exc.value.code == "not_admin"


class TestNumbers:
    def test_goal_bounds(self) -> None:
        validate_goal(1, require_positive=True)
        validate_goal(0, require_positive=False)
        validate_goal(MAX_U64, require_positive=True)

        with pytest.raises(InvalidGoal):
            validate_goal(0, require_positive=True)
        with pytest.raises(InvalidGoal):
            validate_goal(-1, require_positive=False)
        with pytest.raises(InvalidGoal):
            validate_goal(MAX_U64 + 1, require_positive=False)

    @pytest.mark.parametrize("bad", [True, 1.5, "10", None])
    def test_amount_type(self, bad: object) -> None:
        with pytest.raises(InvalidAmount):
            validate_amount(bad, require_positive=False)  # type: ignore[arg-type]

    def test_zero_amount(self) -> None:
        validate_amount(0, require_positive=False)
        with pytest.raises(InvalidAmount):
            validate_amount(0, require_positive=True)


class TestEncodeText:
    def test_str_is_utf8_encoded(self) -> None:
        assert encode_text("Séisme", "title", 128) == "Séisme".encode()

    def test_bytes_pass_through(self) -> None:
        assert encode_text(b"raw", "title", 128) == b"raw"

    def test_blank_rejected(self) -> None:
        with pytest.raises(InvalidCampaignText):
            encode_text("   ", "title", 128)

    def test_bound_is_in_bytes(self) -> None:
        encode_text("é" * 2, "title", 4)
        with pytest.raises(InvalidCampaignText):
            encode_text("é" * 3, "title", 4)
