import httpx
import pytest

from shared import submit_feedback, get_monthly_stats

from conftest import make_payload, at


@pytest.fixture
def http_client(app):
    with httpx.Client(transport=httpx.WSGITransport(app=app), base_url="http://dot.test") as client:
        yield client


def test_submit_and_fetch_stats(http_client, monkeypatch):
    monkeypatch.setattr("shared.store.utc_now", lambda: at(2026, 1, 15))

    status, body = submit_feedback(make_payload(reactivity=3), http_client=http_client)
    assert status == 200
    assert body["ok"] is True

    status, body = get_monthly_stats("2026-01", http_client=http_client)
    assert status == 200
    assert [p["project"] for p in body["projects"]] == ["Website"]
    assert body["action_plan"][0]["project"] == "Website"


def test_duplicate_returns_conflict(http_client):
    submit_feedback(make_payload(), http_client=http_client)

    status, body = submit_feedback(make_payload(), http_client=http_client)

    assert status == 409
    assert "error" in body


def test_bad_month(http_client):
    status, body = get_monthly_stats("2026-1x", http_client=http_client)

    assert status == 400
    assert "error" in body


def test_unreachable_service():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(refuse), base_url="http://dot.test") as client:
        status, body = get_monthly_stats("2026-01", http_client=client)

    assert status is None
    assert body["error"] == "Feedback service unavailable"


def test_non_json_response():
    def bad_gateway(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    with httpx.Client(transport=httpx.MockTransport(bad_gateway), base_url="http://dot.test") as client:
        status, body = get_monthly_stats("2026-01", http_client=client)

    assert status == 502
    assert body == {"error": "<html>Bad Gateway</html>"}
