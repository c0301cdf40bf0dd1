"""
Tests for the campaign HTTP API.

The ledger service dependency is overridden with an in-memory ledger so the
HTTP layer (signer header, status codes, JSON shape) is tested in isolation.
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.adapters.memory_coin import InMemoryCoinAdapter
from src.api.deps import get_ledger_service
from src.api.main import app
from src.components.ledger import LedgerService

ADMIN = "0xad"
ALICE = "0xa11ce"
BOB = "0xb0b"


@pytest.fixture
def client(ledger_service: LedgerService, coins: InMemoryCoinAdapter) -> Iterator[TestClient]:
    coins.mint(BOB, 5_000)
    app.dependency_overrides[get_ledger_service] = lambda: ledger_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _as(signer: str) -> dict[str, str]:
    return {"X-Signer": signer}


@pytest.fixture
def funded_campaign(client: TestClient) -> TestClient:
    client.post("/api/ledger/initialize", headers=_as(ADMIN))
    response = client.post(
        "/api/campaigns",
        json={"title": "Flood", "description": "help", "goal": 1000},
        headers=_as(ALICE),
    )
    assert response.status_code == 201
    return client


class TestMutations:
    def test_initialize(self, client: TestClient) -> None:
        response = client.post("/api/ledger/initialize", headers=_as("0xAD"))

        assert response.status_code == 200
        assert response.json() == {"created": True, "admin": ADMIN}

        again = client.post("/api/ledger/initialize", headers=_as(ADMIN))
        assert again.json()["created"] is False

    def test_initialize_by_stranger(self, client: TestClient) -> None:
        response = client.post("/api/ledger/initialize", headers=_as(BOB))

        assert response.status_code == 403
        assert response.json()["code"] == "not_admin"

    def test_create_returns_campaign(self, funded_campaign: TestClient) -> None:
        data = funded_campaign.get("/api/campaigns/0").json()

        assert data["owner"] == ALICE
        assert data["title"] == "Flood"
        assert data["status"] == "active"
        assert data["donated"] == 0

    def test_create_before_initialize(self, client: TestClient) -> None:
        response = client.post(
            "/api/campaigns",
            json={"title": "Flood", "description": "help", "goal": 1000},
            headers=_as(ALICE),
        )
        assert response.status_code == 409
        assert response.json()["code"] == "registry_not_initialized"

    def test_zero_goal_is_rejected(self, client: TestClient) -> None:
        client.post("/api/ledger/initialize", headers=_as(ADMIN))
        response = client.post(
            "/api/campaigns",
            json={"title": "Flood", "description": "help", "goal": 0},
            headers=_as(ALICE),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_goal"

    def test_missing_signer_header(self, client: TestClient) -> None:
        response = client.post("/api/ledger/initialize")
        assert response.status_code == 422

    def test_malformed_signer(self, client: TestClient) -> None:
        response = client.post("/api/ledger/initialize", headers=_as("alice"))
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_address"

    def test_donate_and_withdraw(self, funded_campaign: TestClient) -> None:
        first = funded_campaign.post(
            "/api/campaigns/0/donations", json={"amount": 1200}, headers=_as(BOB)
        )
        assert first.status_code == 200
        assert first.json()["goal_reached_now"] is True

        payout = funded_campaign.post("/api/campaigns/0/withdraw", headers=_as(ALICE))
        assert payout.status_code == 200
        assert payout.json() == {
            "campaign_index": 0,
            "recipient": ALICE,
            "amount": 1200,
            "by_admin": False,
            "completed": True,
        }

        repeat = funded_campaign.post("/api/campaigns/0/withdraw", headers=_as(ALICE))
        assert repeat.status_code == 409
        assert repeat.json()["code"] == "already_withdrawn"

    def test_withdraw_errors(self, funded_campaign: TestClient) -> None:
        early = funded_campaign.post("/api/campaigns/0/withdraw", headers=_as(ALICE))
        assert early.status_code == 409
        assert early.json()["code"] == "goal_not_reached"

        stranger = funded_campaign.post("/api/campaigns/0/withdraw", headers=_as(BOB))
        assert stranger.status_code == 403
        assert stranger.json()["code"] == "not_owner"

    def test_admin_withdraw(self, funded_campaign: TestClient) -> None:
        funded_campaign.post("/api/campaigns/0/donations", json={"amount": 10}, headers=_as(BOB))

        denied = funded_campaign.post("/api/campaigns/0/admin-withdraw", headers=_as(BOB))
        assert denied.status_code == 403

        response = funded_campaign.post("/api/campaigns/0/admin-withdraw", headers=_as(ADMIN))
        assert response.status_code == 200
        assert response.json()["by_admin"] is True
        assert response.json()["recipient"] == ALICE

    def test_insufficient_funds(self, funded_campaign: TestClient) -> None:
        response = funded_campaign.post(
            "/api/campaigns/0/donations", json={"amount": 999_999}, headers=_as(BOB)
        )
        assert response.status_code == 409
        assert response.json()["code"] == "insufficient_funds"

    def test_negative_amount_fails_validation(self, funded_campaign: TestClient) -> None:
        response = funded_campaign.post(
            "/api/campaigns/0/donations", json={"amount": -5}, headers=_as(BOB)
        )
        assert response.status_code == 422


class TestQueries:
    def test_empty_ledger(self, client: TestClient) -> None:
        assert client.get("/api/campaigns").json() == {"items": [], "total": 0}
        assert client.get("/api/campaigns/count").json() == {"count": 0}
        assert client.get("/api/treasury").json()["total"] == 0

    def test_unknown_campaign(self, funded_campaign: TestClient) -> None:
        response = funded_campaign.get("/api/campaigns/5")

        assert response.status_code == 404
        assert response.json()["code"] == "campaign_not_found"

    def test_progress(self, funded_campaign: TestClient) -> None:
        funded_campaign.post("/api/campaigns/0/donations", json={"amount": 250}, headers=_as(BOB))
        data = funded_campaign.get("/api/campaigns/0/progress").json()

        assert data["percent"] == 25.0
        assert data["remaining"] == 750

    def test_by_owner_and_list(self, funded_campaign: TestClient) -> None:
        funded_campaign.post(
            "/api/campaigns",
            json={"title": "Quake", "description": "shelter", "goal": 5},
            headers=_as(BOB),
        )

        owned = funded_campaign.get(f"/api/owners/{ALICE}/campaigns").json()
        shouted = funded_campaign.get("/api/owners/0xA11CE/campaigns").json()
        listing = funded_campaign.get("/api/campaigns").json()

        assert owned["indices"] == [0]
        assert shouted == {"owner": ALICE, "indices": [0]}
        assert listing["total"] == 2
        assert [c["owner"] for c in listing["items"]] == [ALICE, BOB]

    def test_treasury(self, funded_campaign: TestClient) -> None:
        funded_campaign.post("/api/campaigns/0/donations", json={"amount": 40}, headers=_as(BOB))
        data = funded_campaign.get("/api/treasury").json()

        assert data["mode"] == "pooled"
        assert data["total"] == 40
        assert data["partition"] is None


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
