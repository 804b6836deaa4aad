"""Tests for deck API endpoints."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from deckdelta.config import settings
from deckdelta.main import app


@pytest.fixture
async def client():
    """Provide an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestParseEndpoint:
    async def test_parse_deck(self, client: AsyncClient, commander_deck_text: str) -> None:
        response = await client.post("/decks/parse", json={"text": commander_deck_text})

        assert response.status_code == 200
        data = response.json()
        assert data["commanders"] == ["Atraxa, Praetors' Voice"]
        assert data["mainboard_count"] == 22
        assert data["sideboard_count"] == 1
        assert data["sideboard"] == [
            {
                "key": "swords to plowshares|10",
                "name": "Swords to Plowshares",
                "quantity": 1,
                "set_code": "sta",
                "collector_number": "10",
                "is_foil": False,
            }
        ]

    async def test_parse_empty_text(self, client: AsyncClient) -> None:
        response = await client.post("/decks/parse", json={"text": ""})

        assert response.status_code == 200
        assert response.json()["mainboard"] == []

    async def test_parse_requires_text(self, client: AsyncClient) -> None:
        response = await client.post("/decks/parse", json={})
        assert response.status_code == 422

    async def test_parse_rejects_oversized_text(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "max_deck_text_length", 10)
        response = await client.post("/decks/parse", json={"text": "4 Lightning Bolt"})

        assert response.status_code == 413


class TestDiffEndpoint:
    async def test_diff(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/diff",
            json={
                "before": "1 Terror of the Peaks (otj) [149]\n2 Counterspell",
                "after": "1 Terror of the Peaks (m21) [164]\n3 Counterspell",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["hasSideboard"] is False
        assert data["mainboard"]["quantityChanges"] == [
            {"name": "Counterspell", "oldQty": 2, "newQty": 3, "delta": 1}
        ]
        assert data["mainboard"]["printingChanges"] == [
            {
                "name": "Terror of the Peaks",
                "quantity": 1,
                "oldSetCode": "otj",
                "oldCollectorNumber": "149",
                "newSetCode": "m21",
                "newCollectorNumber": "164",
            }
        ]

    async def test_diff_defaults_to_empty_decks(self, client: AsyncClient) -> None:
        response = await client.post("/decks/diff", json={"after": "4 Lightning Bolt"})

        assert response.status_code == 200
        assert response.json()["mainboard"]["cardsIn"] == [
            {"name": "Lightning Bolt", "quantity": 4}
        ]

    async def test_diff_rejects_oversized_text(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "max_deck_text_length", 5)
        response = await client.post("/decks/diff", json={"before": "", "after": "4 Lightning Bolt"})

        assert response.status_code == 413


class TestChangelogEndpoint:
    async def test_text_changelog(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/changelog",
            json={"before": "2 Counterspell", "after": "3 Counterspell"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["format"] == "text"
        assert "~ Counterspell (2 → 3, +1)" in data["content"]

    async def test_mpcfill(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/changelog",
            json={"before": "", "after": "4 Lightning Bolt", "format": "mpcfill"},
        )
        assert response.json()["content"] == "4 Lightning Bolt"

    async def test_json(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/changelog",
            json={"before": "", "after": "4 Lightning Bolt", "format": "json"},
        )
        payload = json.loads(response.json()["content"])
        assert payload["mainboard"]["cardsIn"] == [{"name": "Lightning Bolt", "quantity": 4}]

    async def test_invalid_format(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/changelog",
            json={"before": "", "after": "", "format": "pdf"},
        )
        assert response.status_code == 422
