"""
Tests for trips, the roster and invitations.
"""
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from fairway.core.config import settings
from fairway.core.security import create_access_token, create_invite_token


@pytest.fixture
def sent_emails(monkeypatch):
    """Capture outgoing invitation emails instead of calling the provider."""
    sent = []

    async def fake_post(self, url, headers=None, json=None, **kwargs):
        sent.append(json)
        return httpx.Response(200, json={"id": "email-1"}, request=httpx.Request("POST", url))

    monkeypatch.setattr(settings, "EMAIL_API_KEY", "test-key")
    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)
    return sent


def invite_token_from(email_payload):
    link = email_payload["html"].split('href="')[1].split('"')[0]
    return parse_qs(urlparse(link).query)["invite"][0]


def test_create_trip_adds_organizer(client, auth_headers):
    response = client.post(
        "/api/trips",
        json={"trip_name": "Bandon Dunes", "start_date": "2026-02-27", "end_date": "2026-03-09"},
        headers=auth_headers
    )

    assert response.status_code == 201
    data = response.json()
    assert data["date_range"] == "Feb 27 – Mar 9, 2026"

    detail = client.get(f"/api/trips/{data['id']}", headers=auth_headers).json()
    assert [g["name"] for g in detail["golfers"]] == ["Olivia Organizer"]
    assert detail["golfers"][0]["status"] == "accepted"


def test_create_trip_validates_dates(client, auth_headers):
    response = client.post(
        "/api/trips",
        json={"trip_name": "Backwards", "start_date": "2026-03-09", "end_date": "2026-02-27"},
        headers=auth_headers
    )
    assert response.status_code == 422

    response = client.post("/api/trips", json={"trip_name": "  "}, headers=auth_headers)
    assert response.status_code == 422


def test_list_trips_sorted_by_start(client, auth_headers):
    for name, start in [("Later", "2026-06-01"), ("Sooner", "2026-04-01")]:
        client.post("/api/trips", json={"trip_name": name, "start_date": start}, headers=auth_headers)

    response = client.get("/api/trips", headers=auth_headers)
    assert [t["trip_name"] for t in response.json()] == ["Sooner", "Later"]


def test_only_organizer_can_edit_trip(client, auth_headers, trip, sent_emails, make_user):
    _, ben_id, _ = trip["golfer_ids"]
    ben_headers = make_user("ben", email="ben@example.com")
    client.post(
        f"/api/trips/{trip['id']}/golfers/{ben_id}/invite",
        json={"email": "ben@example.com"},
        headers=auth_headers
    )

    response = client.patch(f"/api/trips/{trip['id']}", json={"trip_name": "Mine now"}, headers=ben_headers)
    assert response.status_code == 403

    response = client.patch(f"/api/trips/{trip['id']}", json={"location": "Southern Pines"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["location"] == "Southern Pines"


def test_update_trip_rejects_inverted_dates(client, auth_headers, trip):
    response = client.patch(f"/api/trips/{trip['id']}", json={"end_date": "2026-01-01"}, headers=auth_headers)
    assert response.status_code == 400


def test_roster_edit_and_remove(client, auth_headers, trip):
    organizer_id, ben_id, _ = trip["golfer_ids"]
    url = f"/api/trips/{trip['id']}/golfers"

    response = client.patch(f"{url}/{ben_id}", json={"handicap": 2}, headers=auth_headers)
    assert response.json()["handicap"] == 2

    assert client.delete(f"{url}/{organizer_id}", headers=auth_headers).status_code == 400
    assert client.delete(f"{url}/{ben_id}", headers=auth_headers).status_code == 200
    assert len(client.get(url, headers=auth_headers).json()) == 2


def test_toggle_driving(client, auth_headers, trip):
    ben_id = trip["golfer_ids"][1]
    url = f"/api/trips/{trip['id']}/golfers/{ben_id}/driving"

    assert client.post(url, headers=auth_headers).json()["is_driving"] is True
    assert client.post(url, headers=auth_headers).json()["is_driving"] is False


def test_invite_without_email_provider(client, auth_headers, trip):
    ben_id = trip["golfer_ids"][1]
    response = client.post(
        f"/api/trips/{trip['id']}/golfers/{ben_id}/invite",
        json={"email": "Ben@Example.com"},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["email_sent"] is False

    golfer = client.get(f"/api/trips/{trip['id']}/golfers", headers=auth_headers).json()[1]
    assert golfer["email"] == "ben@example.com"
    assert golfer["status"] == "invited"


def test_invite_link_joins_trip(client, auth_headers, trip, sent_emails, make_user):
    ben_id = trip["golfer_ids"][1]
    response = client.post(
        f"/api/trips/{trip['id']}/golfers/{ben_id}/invite",
        json={"email": "ben@example.com"},
        headers=auth_headers
    )
    assert response.json()["email_sent"] is True
    assert sent_emails[0]["to"] == ["ben@example.com"]
    assert "Pinehurst Weekend" in sent_emails[0]["subject"]

    # Signed up under another address, so only the link can connect the account
    ben_headers = make_user("ben", email="benjamin@example.com")
    assert client.get(f"/api/trips/{trip['id']}", headers=ben_headers).status_code == 403

    response = client.post(
        "/api/invitations/accept",
        json={"token": invite_token_from(sent_emails[0])},
        headers=ben_headers
    )
    assert response.status_code == 200
    assert response.json()["id"] == ben_id
    assert response.json()["status"] == "accepted"

    trips = client.get("/api/trips", headers=ben_headers).json()
    assert [t["id"] for t in trips] == [trip["id"]]


def test_invite_links_existing_account(client, auth_headers, trip, sent_emails, make_user):
    ben_id = trip["golfer_ids"][1]
    ben_headers = make_user("ben", email="ben@example.com")

    client.post(
        f"/api/trips/{trip['id']}/golfers/{ben_id}/invite",
        json={"email": "ben@example.com"},
        headers=auth_headers
    )

    detail = client.get(f"/api/trips/{trip['id']}", headers=ben_headers)
    assert detail.status_code == 200
    ben = next(g for g in detail.json()["golfers"] if g["id"] == ben_id)
    assert ben["status"] == "accepted"


def test_invite_email_failure_is_bad_gateway(client, auth_headers, trip, monkeypatch, make_user):
    async def failing_post(self, url, headers=None, json=None, **kwargs):
        return httpx.Response(500, text="boom", request=httpx.Request("POST", url))

    monkeypatch.setattr(settings, "EMAIL_API_KEY", "test-key")
    monkeypatch.setattr(httpx.AsyncClient, "post", failing_post)
    ben_id = trip["golfer_ids"][1]
    make_user("ben", email="ben@example.com")

    response = client.post(
        f"/api/trips/{trip['id']}/golfers/{ben_id}/invite",
        json={"email": "ben@example.com"},
        headers=auth_headers
    )
    assert response.status_code == 502

    # A failed send leaves the roster entry untouched
    ben = client.get(f"/api/trips/{trip['id']}/golfers", headers=auth_headers).json()[1]
    assert ben["id"] == ben_id
    assert ben["status"] == "accepted"
    assert ben["email"] is None
    assert ben["user_id"] is None


def test_invite_token_cannot_authenticate(client, trip):
    token = create_invite_token(trip["id"], trip["golfer_ids"][1], "ben@example.com")
    response = client.get("/api/trips", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_access_token_is_not_an_invite(client, auth_headers):
    token = create_access_token({"sub": "organizer", "user_id": 1})
    response = client.post("/api/invitations/accept", json={"token": token}, headers=auth_headers)
    assert response.status_code == 400


def test_owner_deletes_trip(client, auth_headers, trip):
    assert client.delete(f"/api/trips/{trip['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/trips/{trip['id']}", headers=auth_headers).status_code == 404


def test_signup_claims_pending_invite(client, auth_headers, trip, make_user):
    ben_id = trip["golfer_ids"][1]
    client.post(
        f"/api/trips/{trip['id']}/golfers/{ben_id}/invite",
        json={"email": "ben@example.com"},
        headers=auth_headers
    )

    ben_headers = make_user("ben", email="Ben@Example.com")

    trips = client.get("/api/trips", headers=ben_headers).json()
    assert [t["id"] for t in trips] == [trip["id"]]

    detail = client.get(f"/api/trips/{trip['id']}", headers=ben_headers).json()
    ben = next(g for g in detail["golfers"] if g["id"] == ben_id)
    assert ben["user_id"] is not None
    assert ben["status"] == "accepted"
