"""
test_api.py - Tests for the FastAPI backend

Tests cover:
1. Health, translations, auth and profile endpoints
2. Listing analysis in demo mode and on model failure
3. Document check, geocode fallback
4. NDJSON chat streaming
"""

import base64
import json
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient

from api.main import app, get_state, get_transport
from api.mock_data import MOCK_CHAT_REPLY, MockTransport
from tenant_guardian import config
from tenant_guardian.schemas import Language
from tenant_guardian.state import AppState, InMemoryStore
from tenant_guardian.translations import translate
from tests.synthetic_data import PNG_BYTES, FailingTransport, ScriptedTransport


SCAM_LISTING = {
    "title": "Luxury 3BHK, Koramangala - URGENT",
    "description": "Owner abroad. Pay deposit by wire transfer today to reserve.",
    "address": "80 Feet Road, Koramangala 4th Block, Bengaluru 560034",
    "price": 9000,
    "sqft": 1800,
}

SAFE_LISTING = {
    "title": "Spacious 2BHK near Indiranagar Metro",
    "description": "Fully furnished flat, 24x7 water, covered parking.",
    "address": "12th Main Road, Indiranagar, Bengaluru 560038",
    "price": 32000,
    "sqft": 1100,
    "median_price": 35000,
    "owner_name": "Ramesh Kumar",
}


@pytest.fixture
def state():
    return AppState(InMemoryStore())


@pytest.fixture
def make_client(state):
    """Client factory; logs in unless told not to."""
    def factory(transport=None, logged_in=True):
        app.dependency_overrides[get_state] = lambda: state
        app.dependency_overrides[get_transport] = lambda: transport or MockTransport()
        if logged_in:
            state.login(config.DEMO_EMAIL, config.DEMO_PASSWORD)
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


def ndjson(response):
    return [json.loads(line) for line in response.text.splitlines() if line]


# =============================================================================
# HEALTH, STRINGS, AUTH
# =============================================================================

class TestBasics:
    """Tests for health, translation and auth endpoints."""

    def test_health(self, make_client):
        """Test the health check."""
        response = make_client(logged_in=False).get("/api")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_translations(self, make_client):
        """Test that strings come back in the requested language."""
        response = make_client(logged_in=False).get("/api/translations/Hindi")
        assert response.status_code == 200
        assert response.json()["chat_error"] == translate("chat_error", Language.HINDI)

    def test_checks_require_login(self, make_client):
        """Test that model-backed endpoints need the auth flag."""
        client = make_client(logged_in=False)
        assert client.post("/api/analyze", json=SAFE_LISTING).status_code == 401
        assert client.get("/api/geocode", params={"lat": 1, "lng": 2}).status_code == 401
        assert client.get("/api/profile").status_code == 401

    def test_login_flow(self, make_client):
        """Test failed login, successful login, session and logout."""
        client = make_client(logged_in=False)
        bad = client.post("/api/auth/login", json={"email": config.DEMO_EMAIL, "password": "nope"})
        assert bad.status_code == 401
        assert bad.json()["detail"] == translate("login_invalid")

        ok = client.post(
            "/api/auth/login",
            json={"email": config.DEMO_EMAIL, "password": config.DEMO_PASSWORD}
        )
        assert ok.json() == {"authenticated": True}
        assert client.get("/api/auth/session").json() == {"authenticated": True}

        client.post("/api/auth/logout")
        assert client.get("/api/auth/session").json() == {"authenticated": False}

    def test_google_sign_in(self, make_client):
        """Test the mock account sign-in."""
        client = make_client(logged_in=False)
        response = client.post("/api/auth/google", json={"name": "Asha", "email": "asha@example.com"})
        assert response.status_code == 200
        assert response.json()["profile"]["fullName"] == "Asha"
        assert client.get("/api/auth/session").json() == {"authenticated": True}


# =============================================================================
# PROFILE
# =============================================================================

class TestProfileEndpoints:
    """Tests for the profile endpoints."""

    def test_get_default_profile(self, make_client):
        """Test the default profile and its completion."""
        body = make_client().get("/api/profile").json()
        assert body["profile"]["email"] == config.DEMO_EMAIL
        assert body["completion"] == 20

    def test_put_profile(self, make_client, state):
        """Test saving camelCase profile fields."""
        client = make_client()
        response = client.put("/api/profile", json={
            "fullName": "Asha Menon",
            "email": "asha@example.com",
            "emergencyPhone": "+91 98450 11111",
            "occupation": "Engineer"
        })
        assert response.status_code == 200
        assert response.json()["completion"] == 40
        assert state.profile.emergency_phone == "+91 98450 11111"


# =============================================================================
# MODEL-BACKED CHECKS
# =============================================================================

class TestAnalyze:
    """Tests for /api/analyze."""

    def test_scam_listing_is_high_risk(self, make_client):
        """Test that pressure wording gives a red, high-tier result."""
        response = make_client().post("/api/analyze", json=SCAM_LISTING)
        assert response.status_code == 200
        body = response.json()
        assert body["tier"] == "high"
        assert body["tier_label"] == translate("tier_high")
        assert body["assessment"]["verdictColor"] == "RED"
        assert "wire transfer" in body["assessment"]["textLog"]["keywordsFound"]

    def test_plain_listing_is_safe(self, make_client):
        """Test that a listing without red flags is safe."""
        body = make_client().post("/api/analyze", json=SAFE_LISTING).json()
        assert body["tier"] == "safe"
        assert body["assessment"]["riskScore"] == 12

    def test_photo_is_decoded(self, make_client):
        """Test that a base64 data URL reaches the transport as bytes."""
        transport = ScriptedTransport(json.dumps({
            "riskScore": 10, "verdict": "SAFE", "verdictColor": "GREEN", "summary": "ok",
            "geoLog": {"status": "PASS", "details": "ok"},
            "priceLog": {"status": "LOW_RISK", "details": "ok"},
            "textLog": {"status": "CLEAR", "details": "ok", "keywordsFound": []},
            "photoLog": {"integrityScore": 9, "details": "ok"},
            "ownershipLog": {"status": "PLAUSIBLE", "details": "ok"},
            "actionableSteps": ["Visit first."]
        }))
        photo = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
        listing = dict(SAFE_LISTING, photo_base64=photo, photo_mime_type="image/png")
        assert make_client(transport).post("/api/analyze", json=listing).status_code == 200
        _, parts, _ = transport.calls[0]
        assert parts[-1].data == PNG_BYTES

    def test_model_failure_is_502(self, make_client):
        """Test that a failed model call gives the localized error."""
        listing = dict(SAFE_LISTING, language="French")
        response = make_client(FailingTransport()).post("/api/analyze", json=listing)
        assert response.status_code == 502
        assert response.json()["error"] == translate("analysis_error", Language.FRENCH)

    def test_unexpected_error_is_502(self, make_client):
        """Test that a non-network SDK error still gives the localized 502."""
        response = make_client(FailingTransport(RuntimeError("boom"))).post("/api/analyze", json=SAFE_LISTING)
        assert response.status_code == 502
        assert response.json()["error"] == translate("analysis_error")

    def test_prices_sent_as_entered(self, make_client):
        """Test that JSON numbers reach the prompt without a trailing .0."""
        transport = ScriptedTransport("")
        make_client(transport).post("/api/analyze", json=SAFE_LISTING)
        _, parts, _ = transport.calls[0]
        assert f"Listed Price: {config.CURRENCY_SYMBOL}32000\n" in parts[1].text
        assert f"Median Area Price: {config.CURRENCY_SYMBOL}35000\n" in parts[1].text

    def test_invalid_input(self, make_client):
        """Test request validation and bad base64."""
        client = make_client()
        assert client.post("/api/analyze", json=dict(SAFE_LISTING, price=0)).status_code == 422
        bad_photo = dict(SAFE_LISTING, photo_base64="not base64!!", photo_mime_type="image/png")
        assert client.post("/api/analyze", json=bad_photo).status_code == 422


class TestDocumentAndGeocode:
    """Tests for /api/verify-document and /api/geocode."""

    def test_verify_document(self, make_client):
        """Test the demo document check."""
        response = make_client().post("/api/verify-document", json={
            "image_base64": base64.b64encode(PNG_BYTES).decode(),
            "mime_type": "image/png"
        })
        assert response.status_code == 200
        assert response.json()["verdict"] == "UNIQUE/ORIGINAL"

    def test_geocode(self, make_client):
        """Test the demo lookup."""
        response = make_client().get("/api/geocode", params={"lat": 12.9716, "lng": 77.5946})
        assert response.json()["address"] == "Demo address near 12.9716, 77.5946"

    def test_geocode_falls_back(self, make_client):
        """Test that a failing model still gives coordinates."""
        response = make_client(FailingTransport()).get(
            "/api/geocode", params={"lat": 12.9716, "lng": 77.5946}
        )
        assert response.status_code == 200
        assert response.json() == {"address": "12.9716, 77.5946", "ownerName": ""}

    def test_geocode_bounds(self, make_client):
        """Test that impossible coordinates are rejected."""
        assert make_client().get("/api/geocode", params={"lat": 91, "lng": 0}).status_code == 422


# =============================================================================
# CHAT
# =============================================================================

class TestChat:
    """Tests for the chat endpoints."""

    def test_stream_events(self, make_client):
        """Test that chunks are followed by one done event with the full text."""
        response = make_client().post("/api/chat", json={"message": "Any tips?"})
        assert response.status_code == 200
        events = ndjson(response)
        chunks = [e["text"] for e in events if e["type"] == "chunk"]
        assert events[-1] == {"type": "done", "text": MOCK_CHAT_REPLY}
        assert "".join(chunks) == MOCK_CHAT_REPLY

    def test_stream_error_event(self, make_client):
        """Test that a mid-stream failure ends with an error event."""
        response = make_client(FailingTransport(fail_after=1)).post(
            "/api/chat", json={"message": "Any tips?", "language": "Spanish"}
        )
        events = ndjson(response)
        assert events[0] == {"type": "chunk", "text": "part0 "}
        assert events[-1] == {"type": "error", "text": translate("chat_error", Language.SPANISH)}

    def test_history_is_forwarded(self, make_client):
        """Test that error turns are dropped from the forwarded history."""
        transport = ScriptedTransport(fragments=["ok"])
        make_client(transport).post("/api/chat", json={
            "message": "And the deposit?",
            "history": [
                {"role": "user", "text": "Is this legit?"},
                {"role": "assistant", "text": "Sorry", "is_error": True}
            ]
        })
        _, _, history, _ = transport.chat_calls[0]
        assert [turn.text for turn in history] == ["Is this legit?"]

    def test_reply_turn(self, make_client):
        """Test the non-streaming endpoint."""
        body = make_client().post("/api/chat/reply", json={"message": "Any tips?"}).json()
        assert body == {"role": "assistant", "text": MOCK_CHAT_REPLY, "is_error": False}

    def test_reply_turn_error(self, make_client):
        """Test that a failure is returned as an error turn."""
        body = make_client(FailingTransport()).post("/api/chat/reply", json={"message": "Hi"}).json()
        assert body["is_error"]
        assert body["text"] == translate("chat_error")
