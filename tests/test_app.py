import httpx
import pytest

from timeserver import datetime_service
from timeserver.datetime_service import wrong_timezone_message

FIXED_NS = 1_700_000_000 * 10**9 + 250_000_000


@pytest.fixture
def frozen_clock(monkeypatch):
    monkeypatch.setattr(datetime_service.time, "time_ns", lambda: FIXED_NS)


def test_doc_page_lists_routes(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "/now/iso/" in r.text
    assert "/convert/listtimezones/" in r.text


@pytest.mark.parametrize("path", ["/now/", "/convert/"])
def test_group_nodes_answer_not_found(client, path):
    r = client.get(path)
    assert r.status_code == 404
    assert r.text == "404 page not found"


def test_unregistered_path(client):
    assert client.get("/later/").status_code == 404


def test_iso(client, frozen_clock):
    r = client.get("/now/iso/", params={"outtz": "Europe/Warsaw"})
    assert r.status_code == 200
    assert r.json() == {"iso_datetime": "2023-11-14 23:13:20.25 +0100 CET"}


def test_iso_without_trailing_slash_redirects(client, frozen_clock):
    r = client.get("/now/iso")
    assert r.status_code == 200
    assert r.json() == {"iso_datetime": "2023-11-14 22:13:20.25 +0000 UTC"}


def test_iso_unknown_timezone_keeps_success_status(client):
    r = client.get("/now/iso/", params={"outtz": "Nowhere/City"})
    assert r.status_code == 200
    assert r.json() == {"error_message": wrong_timezone_message("Nowhere/City")}


def test_unix_ignores_query(client, frozen_clock):
    r = client.get("/now/unix/", params={"outtz": "Nowhere", "date": "1"})
    assert r.status_code == 200
    assert r.json() == {"unix_timestamp": 1_700_000_000}
    assert isinstance(r.json()["unix_timestamp"], int)


def test_parsed_all_sections_by_default(client, frozen_clock):
    r = client.get("/now/parsed/", params={"outtz": "UTC"})
    assert r.status_code == 200
    assert r.json() == {
        "date": {"year": 2023, "month": 11, "day": 14},
        "time": {"hour": 22, "minute": 13, "second": 20, "nano_second": 250000000.0},
        "tz": {"name": "UTC", "shift": 0},
    }


def test_parsed_selected_sections(client):
    r = client.get("/now/parsed/", params={"date": "yes", "tz": "1"})
    assert r.status_code == 200
    assert set(r.json()) == {"date", "tz"}


def test_parsed_flags_are_case_insensitive(client):
    r = client.get("/now/parsed/", params={"time": "TRUE", "date": "nope"})
    assert set(r.json()) == {"time"}


def test_parsed_unknown_timezone(client):
    r = client.get("/now/parsed/", params={"outtz": "Nowhere", "date": "1"})
    assert r.status_code == 200
    assert r.json() == {"error_message": wrong_timezone_message("Nowhere")}


def test_convert(client):
    body = {"FromTimezone": "UTC", "ToTimezone": "UTC", "DatetimeString": "2024-01-01T00:00:00"}
    r = client.post("/convert/timezone/", json=body)
    assert r.status_code == 200
    assert r.json() == {"Timezone": "UTC", "DatetimeString": "2024-01-01T00:00:00"}


def test_convert_between_zones(client):
    body = {
        "from_timezone": "Europe/Warsaw",
        "to_timezone": "America/New_York",
        "datetime_string": "2024-07-01T18:30:00",
    }
    r = client.post("/convert/timezone/", json=body)
    assert r.json() == {"Timezone": "America/New_York", "DatetimeString": "2024-07-01T12:30:00"}


def test_convert_malformed_json(client):
    r = client.post(
        "/convert/timezone/",
        content=b"{broken",
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text.startswith("invalid request body")


@pytest.mark.parametrize("field", ["from_timezone", "to_timezone"])
def test_convert_unknown_timezone(client, field):
    body = {"from_timezone": "UTC", "to_timezone": "UTC", "datetime_string": "2024-01-01T00:00:00"}
    body[field] = "Nowhere/City"
    r = client.post("/convert/timezone/", json=body)
    assert r.status_code == 400
    assert r.text == "unknown time zone Nowhere/City"


def test_convert_bad_layout(client):
    body = {"from_timezone": "UTC", "to_timezone": "UTC", "datetime_string": "01/01/2024 00:00"}
    r = client.post("/convert/timezone/", json=body)
    assert r.status_code == 400
    assert "01/01/2024 00:00" in r.text


def test_convert_requires_post(client):
    assert client.get("/convert/timezone/").status_code == 405


def test_list_timezones(client):
    r = client.get("/convert/listtimezones/")
    assert r.status_code == 200
    assert r.json() == ["Europe/Warsaw", "America/New_York", "UTC"]


@pytest.mark.anyio
async def test_convert_over_asgi(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post(
            "/convert/timezone/",
            json={
                "from_timezone": "Asia/Tokyo",
                "to_timezone": "UTC",
                "datetime_string": "2024-01-01T09:00:00",
            },
        )
    assert r.status_code == 200
    assert r.json() == {"Timezone": "UTC", "DatetimeString": "2024-01-01T00:00:00"}


@pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json"])
def test_only_compiled_routes_are_served(client, path):
    assert client.get(path).status_code == 404
