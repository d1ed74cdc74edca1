"""
test_submissions.py — forwarding new moods and reverse geocoding.
"""

import httpx
import pytest

from moodglobe.core.encoding import mis_decode
from moodglobe.services.submissions import (
    FALLBACK_MESSAGE,
    LocationData,
    build_submission_params,
    reverse_geocode,
    submit_mood,
)

SUBMIT_URL = "https://script.test/exec"
GEOCODER_URL = "https://geocoder.test/reverse"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it answered."""

    def __init__(self, geocode=None, submit_status=200):
        self.requests = []
        self._geocode = geocode
        self._submit_status = submit_status
        super().__init__(self._handle)

    def _handle(self, request):
        self.requests.append(request)
        if request.url.host == "geocoder.test":
            if self._geocode is None:
                return httpx.Response(500)
            return httpx.Response(200, json=self._geocode)
        return httpx.Response(self._submit_status, text="ok")

    def params(self, host):
        return [dict(r.url.params) for r in self.requests if r.url.host == host]


class TestBuildParams:
    def test_sheet_columns(self, now):
        params = build_submission_params("😊", LocationData(51.5, -0.1, "GB", "United Kingdom"), now)
        assert params == {
            "timestamp": now.isoformat(),
            "mood": "😊",
            "lat": "51.5",
            "lng": "-0.1",
            "country_code": "GB",
            "country_name": "United Kingdom",
        }

    def test_missing_country_is_blank(self, now):
        params = build_submission_params("😊", LocationData(), now)
        assert params["country_code"] == ""
        assert params["country_name"] == ""


class TestSubmitMood:
    @pytest.mark.asyncio
    async def test_forwarded_as_get(self, now):
        transport = RecordingTransport()
        result = await submit_mood(
            "😊",
            LocationData(48.8, 2.3, "fr", "France"),
            submit_url=SUBMIT_URL,
            transport=transport,
            now=now,
        )
        assert result.success and result.forwarded
        assert result.message == "Mood submitted successfully!"
        assert result.country_code == "FR"

        [sent] = transport.params("script.test")
        assert transport.requests[0].method == "GET"
        assert sent["mood"] == "😊"
        assert sent["country_code"] == "FR"
        assert sent["timestamp"] == now.isoformat()

    @pytest.mark.asyncio
    async def test_no_endpoint_logs_locally(self):
        transport = RecordingTransport()
        result = await submit_mood("😡", LocationData(country_code="US"), submit_url="", transport=transport)
        assert result.success
        assert not result.forwarded
        assert result.message == FALLBACK_MESSAGE
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_upstream_error_logs_locally(self):
        transport = RecordingTransport(submit_status=502)
        result = await submit_mood(
            "😡", LocationData(country_code="US"), submit_url=SUBMIT_URL, transport=transport
        )
        assert result.success
        assert not result.forwarded
        assert result.message == FALLBACK_MESSAGE

    @pytest.mark.asyncio
    async def test_corrupted_mood_is_repaired(self):
        result = await submit_mood(mis_decode("😴"), LocationData(country_code="DE"), submit_url="")
        assert result.mood == "😴"

    @pytest.mark.asyncio
    async def test_country_filled_by_geocoder(self):
        transport = RecordingTransport(
            geocode={"address": {"country": "Japan", "country_code": "jp"}}
        )
        result = await submit_mood(
            "😊",
            LocationData(35.6, 139.7),
            submit_url=SUBMIT_URL,
            geocoder_url=GEOCODER_URL,
            transport=transport,
        )
        assert (result.country_code, result.country_name) == ("JP", "Japan")
        [sent] = transport.params("script.test")
        assert sent["country_code"] == "JP"

    @pytest.mark.asyncio
    async def test_origin_is_not_geocoded(self):
        transport = RecordingTransport(geocode={"address": {"country_code": "xx"}})
        result = await submit_mood(
            "😊", LocationData(), submit_url="", geocoder_url=GEOCODER_URL, transport=transport
        )
        assert result.country_code is None
        assert transport.requests == []


class TestReverseGeocode:
    @pytest.mark.asyncio
    async def test_query_parameters(self):
        transport = RecordingTransport(geocode={"address": {"country": "Kenya", "country_code": "ke"}})
        assert await reverse_geocode(-1.3, 36.8, url=GEOCODER_URL, transport=transport) == ("KE", "Kenya")

        [params] = transport.params("geocoder.test")
        assert params == {
            "format": "json",
            "lat": "-1.3",
            "lon": "36.8",
            "zoom": "3",
            "addressdetails": "1",
        }

    @pytest.mark.asyncio
    async def test_failure_returns_nothing(self):
        transport = RecordingTransport(geocode=None)
        assert await reverse_geocode(1.0, 1.0, url=GEOCODER_URL, transport=transport) == (None, None)

    @pytest.mark.asyncio
    async def test_no_address(self):
        transport = RecordingTransport(geocode={"error": "Unable to geocode"})
        assert await reverse_geocode(1.0, 1.0, url=GEOCODER_URL, transport=transport) == (None, None)
