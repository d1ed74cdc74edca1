"""
test_api.py — HTTP surface of the mood globe.

Routes are driven through ASGITransport against a store pre-loaded with a
snapshot built from the sample document, so no upstream is contacted.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from moodglobe.core.moods import MOODS
from moodglobe.main import app
from moodglobe.services.snapshots import SnapshotStore, get_store
from moodglobe.sources.collector import build_snapshot


@pytest.fixture()
def store(sample_csv, now):
    store = SnapshotStore(fallback=None, use_fallback=False)
    store.publish(build_snapshot(sample_csv, now=now))
    return store


@pytest.fixture()
async def client(store):
    """
    HTTPX async test client with the snapshot store overridden.

    Usage:
        async def test_something(client):
            response = await client.get("/moods")
    """
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["snapshot_age_seconds"] is not None
        assert data["last_error"] is None


class TestMoods:
    @pytest.mark.asyncio
    async def test_snapshot(self, client):
        response = await client.get("/moods")
        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "live"
        assert data["total_submissions"] == 6
        assert data["country_count"] == 3
        assert data["global_mood"] == "😊"
        assert data["rejected_rows"] == 1
        assert list(data["countries"]) == ["US", "FR", "ZZ"]

        us = data["countries"]["US"]
        assert us["percentages"] == {"😊": 50.0, "😐": 50.0}
        assert us["dominant_label"] == "Happy"
        assert us["center"]["lat"] == pytest.approx(39.8283)

    @pytest.mark.asyncio
    async def test_country_lookup_is_case_insensitive(self, client):
        response = await client.get("/moods/countries/fr")
        assert response.status_code == 200
        data = response.json()
        assert data["code"] == "FR"
        assert data["total"] == 3
        assert data["dominant_mood"] == "😡"
        assert data["dominant_percent"] == 66.7

    @pytest.mark.asyncio
    async def test_unknown_country(self, client):
        response = await client.get("/moods/countries/JP")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_palette(self, client):
        response = await client.get("/moods/palette")
        assert response.status_code == 200
        assert [m["emoji"] for m in response.json()] == [m.emoji for m in MOODS]

    @pytest.mark.asyncio
    async def test_no_data_is_503(self):
        empty = SnapshotStore(fallback=None, use_fallback=False)

        async def failing_refresh():
            empty.last_error = "sheet unavailable: HTTP 500"
            return None

        empty.refresh = failing_refresh
        app.dependency_overrides[get_store] = lambda: empty
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                response = await ac.get("/moods")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        assert "sheet" in response.json()["detail"]


class TestSubmit:
    @pytest.mark.asyncio
    async def test_submit_without_endpoint(self, client, monkeypatch):
        monkeypatch.setattr("moodglobe.services.submissions.SUBMIT_URL", "")
        response = await client.post(
            "/moods",
            json={"mood": "😊", "lat": 51.5, "lng": -0.1, "country_code": "gb", "country_name": "United Kingdom"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["ok"] is True
        assert data["forwarded"] is False
        assert data["country_code"] == "GB"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"mood": "😊", "lat": 100},
        {"mood": "😊", "lng": -181},
        {"mood": ""},
        {"mood": "   "},
        {"lat": 1.0},
    ])
    async def test_invalid_submissions(self, client, body):
        response = await client.post("/moods", json=body)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unexpected_error_is_500(self, client, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("moodglobe.main.submit_mood", broken)
        response = await client.post("/moods", json={"mood": "😊", "country_code": "US"})
        assert response.status_code == 500
