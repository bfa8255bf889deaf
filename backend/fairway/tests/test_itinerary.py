"""
Tests for rounds, course search, tee-time weather, lodging, dining and flights.
"""
import asyncio
from datetime import date, datetime, time
from types import SimpleNamespace

import httpx
import pytest

from fairway.core.config import settings
from fairway.core.exceptions import ExternalServiceError
from fairway.models.flight import LegType
from fairway.services import weather_service
from fairway.services.flight_service import build_flight_status, is_confirmed
from fairway.services.weather_service import location_query, pick_closest_block, round_weather


def forecast_block(dt_txt, temp, description="Clear", wind=3.2, pop=0.1):
    return {
        "dt_txt": dt_txt,
        "main": {"temp": temp},
        "weather": [{"main": description, "icon": "01d"}],
        "wind": {"speed": wind},
        "pop": pop,
    }


def schedule_round(client, headers, trip_id, course, round_date="2026-02-27", tee_time="08:00:00", golfer_ids=None):
    return client.post(
        f"/api/trips/{trip_id}/rounds",
        json={
            "course": course,
            "round_date": round_date,
            "tee_time": tee_time,
            "golfer_ids": golfer_ids or []
        },
        headers=headers
    )


def test_round_reuses_course_by_name(client, auth_headers, trip):
    organizer_id, ben_id, _ = trip["golfer_ids"]
    first = schedule_round(
        client, auth_headers, trip["id"],
        {"name": "Pinehurst No. 2", "city": "Pinehurst", "state": "NC", "zip_code": "28374"},
        golfer_ids=[organizer_id, ben_id]
    )
    assert first.status_code == 201
    assert [p["name"] for p in first.json()["players"]] == ["Olivia Organizer", "Ben Hogan"]
    assert first.json()["date_label"] == "Fri, Feb 27"
    assert first.json()["tee_time_label"] == "8:00 AM"

    second = schedule_round(
        client, auth_headers, trip["id"], {"name": "pinehurst no. 2"}, round_date="2026-02-28"
    )
    assert second.json()["course"]["id"] == first.json()["course"]["id"]

    response = client.get("/api/courses", params={"q": "hurst"}, headers=auth_headers)
    assert [c["name"] for c in response.json()] == ["Pinehurst No. 2"]
    assert client.get("/api/courses", params={"q": "p"}, headers=auth_headers).json() == []


def test_rounds_ordered_by_date_and_tee_time(client, auth_headers, trip):
    course = {"name": "Tobacco Road"}
    schedule_round(client, auth_headers, trip["id"], course, round_date="2026-02-28", tee_time="07:30:00")
    schedule_round(client, auth_headers, trip["id"], course, round_date="2026-02-27", tee_time="13:10:00")
    schedule_round(client, auth_headers, trip["id"], course, round_date="2026-02-27", tee_time="08:00:00")

    rounds = client.get(f"/api/trips/{trip['id']}/rounds", headers=auth_headers).json()

    assert [(r["round_date"], r["tee_time"]) for r in rounds] == [
        ("2026-02-27", "08:00:00"),
        ("2026-02-27", "13:10:00"),
        ("2026-02-28", "07:30:00"),
    ]


def test_round_players_must_be_on_roster(client, auth_headers, trip):
    response = schedule_round(client, auth_headers, trip["id"], {"name": "Mid Pines"}, golfer_ids=[999])
    assert response.status_code == 400


def test_update_round_replaces_pairing(client, auth_headers, trip):
    organizer_id, ben_id, sam_id = trip["golfer_ids"]
    rnd = schedule_round(
        client, auth_headers, trip["id"], {"name": "Southern Pines"}, golfer_ids=[organizer_id, ben_id]
    ).json()
    url = f"/api/trips/{trip['id']}/rounds/{rnd['id']}"

    response = client.patch(url, json={"golfer_ids": [sam_id], "tee_time": "09:40:00"}, headers=auth_headers)
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["players"]] == [sam_id]
    assert response.json()["tee_time"] == "09:40:00"

    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.get(f"/api/trips/{trip['id']}/rounds", headers=auth_headers).json() == []


def test_round_weather_endpoint(client, auth_headers, trip, monkeypatch):
    calls = []

    async def fake_fetch(query):
        calls.append(query)
        return [
            forecast_block("2026-02-27 06:00:00", 48.6),
            forecast_block("2026-02-27 09:00:00", 55.4, description="Clouds", pop=0.3),
            forecast_block("2026-02-27 12:00:00", 61.0),
        ]

    monkeypatch.setattr(weather_service, "fetch_forecast", fake_fetch)

    course = {"name": "Pinehurst No. 4", "city": "Pinehurst", "zip_code": "28374"}
    schedule_round(client, auth_headers, trip["id"], course, tee_time="08:00:00")
    schedule_round(client, auth_headers, trip["id"], course, tee_time="13:00:00")
    schedule_round(client, auth_headers, trip["id"], {"name": "Nowhere Links"}, round_date="2026-02-28")

    response = client.get(f"/api/trips/{trip['id']}/rounds/weather", headers=auth_headers)

    assert response.status_code == 200
    morning, afternoon, nowhere = response.json()
    assert calls == ["28374,us"]
    assert morning["temp"] == 55
    assert morning["description"] == "Clouds"
    assert morning["pop"] == 0.3
    assert afternoon["temp"] == 61
    assert nowhere["temp"] is None
    assert nowhere["course_name"] == "Nowhere Links"


def test_location_query_prefers_zip():
    assert location_query("Pinehurst", " 28374 ") == "28374,us"
    assert location_query(" Pinehurst ", None) == "Pinehurst"
    assert location_query(None, "") is None


def test_pick_closest_block_defaults_to_noon():
    blocks = [
        forecast_block("2026-02-27 09:00:00", 50),
        forecast_block("2026-02-27 12:00:00", 60),
        forecast_block("2026-02-28 12:00:00", 70),
    ]

    assert pick_closest_block(blocks, date(2026, 2, 27), None)["main"]["temp"] == 60
    assert pick_closest_block(blocks, date(2026, 2, 27), time(8, 0))["main"]["temp"] == 50
    assert pick_closest_block(blocks, date(2026, 3, 1), time(8, 0)) is None


def test_round_weather_flags_rounds_beyond_forecast():
    course = SimpleNamespace(name="Pine Needles", city="Southern Pines", zip_code=None)
    rnd = SimpleNamespace(id=7, course=course, round_date=date(2026, 3, 20), tee_time=time(9, 0))
    forecasts = {"Southern Pines": [forecast_block("2026-02-27 09:00:00", 50)]}

    result = asyncio.run(round_weather(rnd, forecasts, today=date(2026, 2, 26)))

    assert result["is_too_far"] is True
    assert "temp" not in result

    result = asyncio.run(round_weather(rnd, forecasts, today=date(2026, 3, 21)))
    assert result["is_too_far"] is False


def test_round_weather_degrades_without_api_key():
    course = SimpleNamespace(name="Pine Needles", city="Southern Pines", zip_code=None)
    rnd = SimpleNamespace(id=8, course=course, round_date=date(2026, 2, 27), tee_time=time(9, 0))
    forecasts = {}

    result = asyncio.run(round_weather(rnd, forecasts, today=date(2026, 2, 26)))

    assert forecasts == {"Southern Pines": []}
    assert result["course_name"] == "Pine Needles"
    assert "temp" not in result


def test_lodging_keeps_wall_clock_times(client, auth_headers, trip):
    url = f"/api/trips/{trip['id']}/lodging"
    response = client.post(
        url,
        json={
            "name": "The Carolina",
            "city": "Pinehurst",
            "check_in_time": "2026-02-27T15:00:00Z",
            "check_out_time": "2026-03-01T11:00:00-05:00"
        },
        headers=auth_headers
    )

    assert response.status_code == 201
    data = response.json()
    assert data["check_in_time"] == "2026-02-27T15:00:00"
    assert data["check_out_time"] == "2026-03-01T11:00:00"

    response = client.patch(f"{url}/{data['id']}", json={"name": "Holly Inn"}, headers=auth_headers)
    assert response.json()["name"] == "Holly Inn"
    assert client.delete(f"{url}/{data['id']}", headers=auth_headers).status_code == 200


def test_lodging_check_out_after_check_in(client, auth_headers, trip):
    response = client.post(
        f"/api/trips/{trip['id']}/lodging",
        json={
            "name": "Backwards Inn",
            "check_in_time": "2026-03-01T15:00:00",
            "check_out_time": "2026-02-27T11:00:00"
        },
        headers=auth_headers
    )
    assert response.status_code == 422


def test_dining_ordered_by_reservation(client, auth_headers, trip):
    url = f"/api/trips/{trip['id']}/dining"
    for name, when in [("1895 Grille", "2026-02-28T19:30:00"), ("Ryder Cup Lounge", "2026-02-27T18:00:00")]:
        response = client.post(url, json={"name": name, "reservation_time": when, "party_size": 3}, headers=auth_headers)
        assert response.status_code == 201

    assert [d["name"] for d in client.get(url, headers=auth_headers).json()] == ["Ryder Cup Lounge", "1895 Grille"]

    response = client.post(
        url, json={"name": "Nobody", "reservation_time": "2026-02-28T19:30:00", "party_size": -1}, headers=auth_headers
    )
    assert response.status_code == 422


def test_flight_status_board(client, auth_headers, trip):
    organizer_id, ben_id, sam_id = trip["golfer_ids"]
    url = f"/api/trips/{trip['id']}/flights"

    client.post(f"/api/trips/{trip['id']}/golfers/{organizer_id}/driving", headers=auth_headers)
    legs = [
        (ben_id, "departure", "rdu", "bos", "2026-03-01T17:00:00", "2026-03-01T19:05:00"),
        (ben_id, "arrival", "bos", "rdu", "2026-02-27T08:00:00", "2026-02-27T10:15:00"),
        (sam_id, "arrival", "ord", "rdu", "2026-02-27T06:30:00", "2026-02-27T09:45:00"),
    ]
    for golfer_id, leg, dep, arr, dep_time, arr_time in legs:
        response = client.post(
            url,
            json={
                "golfer_id": golfer_id,
                "leg_type": leg,
                "airline": "Delta",
                "flight_number": "DL100",
                "departure_airport": dep,
                "arrival_airport": arr,
                "departure_time": dep_time,
                "arrival_time": arr_time
            },
            headers=auth_headers
        )
        assert response.status_code == 201
        assert response.json()["arrival_airport"] == arr.upper()

    data = client.get(f"{url}/status", headers=auth_headers).json()

    assert data["total_golfers"] == 3
    assert data["confirmed"] == 2
    assert data["missing_info"] == 1
    assert [a["golfer_name"] for a in data["arrivals"]] == ["Sam Snead", "Ben Hogan"]
    assert [a["time_label"] for a in data["arrivals"]] == ["9:45 AM", "10:15 AM"]
    assert [d["airport"] for d in data["departures"]] == ["RDU"]


def test_flight_for_unknown_golfer(client, auth_headers, trip):
    response = client.post(
        f"/api/trips/{trip['id']}/flights",
        json={
            "golfer_id": 999,
            "leg_type": "arrival",
            "departure_time": "2026-02-27T06:30:00",
            "arrival_time": "2026-02-27T09:45:00"
        },
        headers=auth_headers
    )
    assert response.status_code == 404


def test_arrivals_today_counts_flying_golfers_only():
    today = date(2026, 2, 27)
    arrival = SimpleNamespace(
        id=1, leg_type=LegType.ARRIVAL, airline="Delta", flight_number="DL1",
        departure_airport="BOS", arrival_airport="RDU",
        departure_time=datetime(2026, 2, 27, 8, 0), arrival_time=datetime(2026, 2, 27, 10, 15)
    )
    flier = SimpleNamespace(name="Ben", is_driving=False, flights=[arrival])
    driver = SimpleNamespace(name="Olivia", is_driving=True, flights=[])

    status = build_flight_status([flier, driver], today=today)

    assert status["arrivals_today"] == 1
    assert status["confirmed"] == 1
    assert not is_confirmed(flier)
    assert is_confirmed(driver)


def test_fetch_forecast_uses_async_client(monkeypatch):
    requested = []

    async def fake_get(self, url, params=None, **kwargs):
        requested.append(params)
        return httpx.Response(
            200,
            json={"cod": "200", "list": [forecast_block("2026-02-27 09:00:00", 52)]},
            request=httpx.Request("GET", url)
        )

    monkeypatch.setattr(settings, "WEATHER_API_KEY", "test-key")
    monkeypatch.setattr(httpx.AsyncClient, "get", fake_get)

    blocks = asyncio.run(weather_service.fetch_forecast("28374,us"))

    assert blocks[0]["main"]["temp"] == 52
    assert requested[0]["q"] == "28374,us"
    assert requested[0]["appid"] == "test-key"


def test_fetch_forecast_http_error(monkeypatch):
    async def failing_get(self, url, params=None, **kwargs):
        return httpx.Response(401, json={"cod": 401}, request=httpx.Request("GET", url))

    monkeypatch.setattr(settings, "WEATHER_API_KEY", "bad-key")
    monkeypatch.setattr(httpx.AsyncClient, "get", failing_get)

    with pytest.raises(ExternalServiceError):
        asyncio.run(weather_service.fetch_forecast("Pinehurst"))
