"""HTTP Routes — daily, admin, results, catalog and health over the ASGI app.

Invariants:
    - GET /daily follows the resolution order and answers 409 for uncommitted past dates
    - Admin routes answer 401 without the bearer token and write nothing
    - Malformed bodies and dates answer 400 with the error envelope
"""

from dailypath.core.picker import pick_daily_keys
from dailypath.infrastructure.distribution_store import SqlDistributionStore

from tests.services.fake_stores import ADMIN_HEADERS, TODAY

FIVE = ["A", "B", "C", "D", "E"]


# ─── Daily ──────────────────────────────────────────────────────

async def test_daily_today_commits(client, catalog_records, test_db):
    res = await client.get("/api/v1/daily", params={"date": TODAY})
    assert res.status_code == 200
    body = res.json()
    assert body["dateISO"] == TODAY
    assert body["source"] == "committed"
    assert body["keys"] == pick_daily_keys(catalog_records, TODAY)
    assert body["gameNumber"] == 1
    assert body["baseISO"] == TODAY
    assert res.headers["cache-control"] == "no-store"
    assert await SqlDistributionStore(test_db).get_committed(TODAY) == body["keys"]


async def test_daily_defaults_to_today(client):
    res = await client.get("/api/v1/daily")
    assert res.status_code == 200
    assert res.json()["dateISO"] == TODAY


async def test_daily_repeat_visits_agree(client, fake_catalog):
    first = (await client.get("/api/v1/daily")).json()
    fake_catalog.records = fake_catalog.records[:2]
    second = (await client.get("/api/v1/daily")).json()
    assert second["keys"] == first["keys"]


async def test_daily_uncommitted_past_is_409(client):
    res = await client.get("/api/v1/daily", params={"date": "2025-09-01"})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "UNCOMMITTED_PAST_GAME"


async def test_daily_future_is_preview(client, test_db):
    res = await client.get("/api/v1/daily", params={"date": "2025-09-20"})
    assert res.status_code == 200
    assert res.json()["source"] == "preview"
    assert await SqlDistributionStore(test_db).get_committed("2025-09-20") is None


async def test_daily_malformed_date_is_400(client):
    res = await client.get("/api/v1/daily", params={"date": "09/03/2025"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_DATE"


async def test_daily_catalog_failure_is_503(client, fake_catalog):
    fake_catalog.fail = True
    res = await client.get("/api/v1/daily")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "CATALOG_UNAVAILABLE"


# ─── Admin ──────────────────────────────────────────────────────

async def test_override_requires_token(client, test_db):
    res = await client.post("/api/v1/admin/override", json={"keys": FIVE})
    assert res.status_code == 401
    assert await SqlDistributionStore(test_db).get_override(TODAY) is None


async def test_override_rejects_wrong_token(client):
    res = await client.post(
        "/api/v1/admin/override", json={"keys": FIVE},
        headers={"Authorization": "Bearer wrong"},
    )
    assert res.status_code == 401


async def test_override_keys_then_daily_serves_them(client):
    res = await client.post(
        "/api/v1/admin/override", json={"keys": FIVE}, headers=ADMIN_HEADERS,
    )
    assert res.status_code == 200
    assert res.json() == {"dateISO": TODAY, "keys": FIVE, "source": "override"}
    daily = (await client.get("/api/v1/daily")).json()
    assert daily["source"] == "override"
    assert daily["keys"] == FIVE


async def test_override_restores_past_date(client):
    res = await client.post(
        "/api/v1/admin/override",
        json={"fromCatalog": True, "dateISO": "2025-09-01"},
        headers=ADMIN_HEADERS,
    )
    assert res.status_code == 200
    daily = await client.get("/api/v1/daily", params={"date": "2025-09-01"})
    assert daily.status_code == 200
    assert daily.json()["keys"] == res.json()["keys"]


async def test_override_by_names(client):
    res = await client.post(
        "/api/v1/admin/override",
        json={
            "names": ["Ada Stone", "Cara Lind", "Eve Park", "Gus Moreau", "Ivo Brandt"],
            "date": "2025-09-04",
        },
        headers=ADMIN_HEADERS,
    )
    assert res.status_code == 200
    assert res.json()["dateISO"] == "2025-09-04"
    assert res.json()["keys"][0] == "North U>Harbor FC"


async def test_override_unresolved_names_is_400(client, test_db):
    res = await client.post(
        "/api/v1/admin/override",
        json={"names": ["Ada Stone", "Nobody", "Eve Park", "Gus Moreau", "Ivo Brandt"]},
        headers=ADMIN_HEADERS,
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "UNRESOLVED_OVERRIDE_IDENTITY"
    assert error["context"]["details"]["unresolved"] == ["Nobody"]
    assert await SqlDistributionStore(test_db).get_override(TODAY) is None


async def test_override_wrong_length_is_400(client):
    res = await client.post(
        "/api/v1/admin/override", json={"keys": ["A", "B"]}, headers=ADMIN_HEADERS,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_override_needs_exactly_one_mode(client):
    res = await client.post(
        "/api/v1/admin/override",
        json={"keys": FIVE, "fromCatalog": True},
        headers=ADMIN_HEADERS,
    )
    assert res.status_code == 400
    res = await client.post("/api/v1/admin/override", json={}, headers=ADMIN_HEADERS)
    assert res.status_code == 400


async def test_admin_check(client):
    assert (await client.get("/api/v1/admin/check", headers=ADMIN_HEADERS)).json() == {"ok": True}
    assert (await client.post("/api/v1/admin/check", headers=ADMIN_HEADERS)).status_code == 200
    assert (await client.get("/api/v1/admin/check")).status_code == 401


# ─── Results ────────────────────────────────────────────────────

async def test_results_count_and_percentages(client):
    for correct in (True, True, False):
        res = await client.post(
            "/api/v1/results", json={"date": TODAY, "levelIndex": 0, "correct": correct},
        )
        assert res.status_code == 202
        assert res.json() == {"ok": True, "counted": True}
    res = await client.get("/api/v1/results/percentages", params={"date": TODAY})
    assert res.status_code == 200
    assert res.json() == [66.7, 0.0, 0.0, 0.0, 0.0]


async def test_results_dedup_per_player_session(client):
    payload = {"date": TODAY, "levelIndex": 4, "correct": True, "playerSession": "p1"}
    assert (await client.post("/api/v1/results", json=payload)).json()["counted"] is True
    assert (await client.post("/api/v1/results", json=payload)).json()["counted"] is False
    res = await client.get("/api/v1/results/percentages", params={"date": TODAY})
    assert res.json()[4] == 100.0


async def test_results_level_out_of_range_is_400(client):
    res = await client.post(
        "/api/v1/results", json={"date": TODAY, "levelIndex": 5, "correct": True},
    )
    assert res.status_code == 400


# ─── Catalog & health ───────────────────────────────────────────

async def test_catalog_endpoint(client, catalog_records):
    res = await client.get("/api/v1/catalog")
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == len(catalog_records)
    assert body["records"][0]["identity"] == "Ada Stone"
    assert body["records"][0]["path_tokens"] == ["North U", "Harbor FC"]


async def test_health_probes(client):
    assert (await client.get("/api/v1/health/")).json()["status"] == "healthy"
    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
