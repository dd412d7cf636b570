import requests

from tests.conftest import FakeUpstream


def test_health_does_not_touch_upstream(client, upstream_get):
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json() == {"ok": True, "upstream": "stream.example.org"}
    upstream_get.assert_not_called()


def test_health_probe_ok(client, upstream_get):
    fake = FakeUpstream(200, b"audio", {"Content-Type": "audio/mpeg"})
    upstream_get.return_value = fake

    r = client.get("/health", params={"probe": 1})

    assert r.status_code == 200
    assert r.json() == {"ok": True, "status": 200}
    assert fake.closed


def test_health_probe_upstream_error_status(client, upstream_get):
    upstream_get.return_value = FakeUpstream(503, b"")

    r = client.get("/health", params={"probe": "true"})

    assert r.status_code == 503
    assert r.json() == {"ok": False, "status": 503}


def test_health_probe_unreachable(client, upstream_get):
    upstream_get.side_effect = requests.ConnectionError("refused")

    r = client.get("/health", params={"probe": 1})

    assert r.status_code == 503
    assert r.json()["ok"] is False
    assert r.json()["status"] is None


def test_station_descriptor(client, upstream_get):
    r = client.get("/station")

    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"
    assert r.json() == {
        "name": "CFUR Radio",
        "city": "Prince George",
        "frequency": 88.7,
        "band": "fm",
        "stream_url": "http://testserver/",
    }
    upstream_get.assert_not_called()
