"""
Integration tests for the betting endpoints
"""

import pytest

from tests.conftest import auth_headers
from tests.fixtures.database import create_test_event

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_place_wager_and_run_out_of_funds(test_client, bettor, event):
    headers = auth_headers(bettor)
    payload = {"event_id": event.id, "predicted_outcome": "Alice", "amount": 30}

    first = await test_client.post("/api/v1/betting/wagers", json=payload, headers=headers)
    assert first.status_code == 200
    body = first.json()
    assert body["ok"] is True
    assert body["balance"] == "20.00"
    assert body["wager"]["amount"] == "30.00"
    assert body["wager"]["predicted_outcome"] == "Alice"
    assert body["wager"]["target"] == event.id

    second = await test_client.post("/api/v1/betting/wagers", json=payload, headers=headers)
    assert second.status_code == 400
    assert second.json() == {"detail": "Insufficient betting funds", "code": "insufficient_funds"}

    balance = await test_client.get("/api/v1/betting/balance", headers=headers)
    assert balance.json()["balance"] == "20.00"

    mine = await test_client.get("/api/v1/betting/wagers", headers=headers)
    assert len(mine.json()) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"predicted_outcome": "Alice", "amount": 5},
    {"event_id": 1, "amount": 5},
    {"event_id": 1, "predicted_outcome": "Alice"},
])
async def test_missing_fields(test_client, bettor, event, payload):
    response = await test_client.post("/api/v1/betting/wagers", json=payload, headers=auth_headers(bettor))
    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["abc", 0, -3, "NaN"])
async def test_invalid_amount(test_client, bettor, event, amount):
    response = await test_client.post(
        "/api/v1/betting/wagers",
        json={"event_id": event.id, "predicted_outcome": "Alice", "amount": amount},
        headers=auth_headers(bettor)
    )
    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_unknown_event_and_outcome(test_client, bettor, event):
    headers = auth_headers(bettor)

    missing = await test_client.post(
        "/api/v1/betting/wagers",
        json={"event_id": 9999, "predicted_outcome": "Alice", "amount": 5},
        headers=headers
    )
    assert missing.status_code == 404

    stranger = await test_client.post(
        "/api/v1/betting/wagers",
        json={"event_id": event.id, "predicted_outcome": "Zed", "amount": 5},
        headers=headers
    )
    assert stranger.status_code == 400
    assert stranger.json()["code"] == "invalid_outcome"


@pytest.mark.asyncio
async def test_requires_authentication(test_client, event):
    response = await test_client.post(
        "/api/v1/betting/wagers",
        json={"event_id": event.id, "predicted_outcome": "Alice", "amount": 5}
    )
    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_special_wager(test_client, bettor, special_bet):
    headers = auth_headers(bettor)

    listing = await test_client.get("/api/v1/betting/special-bets", headers=headers)
    assert [s["description"] for s in listing.json()] == ["Rain stops play"]

    response = await test_client.post(
        "/api/v1/betting/special-wagers",
        json={"special_bet_id": special_bet.id, "amount": "12.50"},
        headers=headers
    )
    assert response.status_code == 200
    wager = response.json()["wager"]
    assert wager["target"] == 0
    assert wager["target_type"] == "special"
    assert wager["predicted_outcome"] == "Rain stops play"
    assert response.json()["balance"] == "37.50"


@pytest.mark.asyncio
async def test_unknown_special_bet(test_client, bettor):
    response = await test_client.post(
        "/api/v1/betting/special-wagers",
        json={"special_bet_id": 9999, "amount": 1},
        headers=auth_headers(bettor)
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_betting_events_window(test_client, async_session, bettor, alice, bob):
    await create_test_event(async_session, [alice, bob], title="Tonight", moneylines=[-200, 170])
    await create_test_event(async_session, [alice, bob], title="Next month", days_from_today=30)

    response = await test_client.get("/api/v1/betting/events", headers=auth_headers(bettor))

    assert response.status_code == 200
    events = response.json()
    assert [e["title"] for e in events] == ["Tonight"]
    assert events[0]["participants"] == ["Alice", "Bob"]
    assert events[0]["moneyline_1"] == -200
    assert events[0]["moneyline_2"] == 170
    assert events[0]["time"] == "19:30"


@pytest.mark.asyncio
async def test_schedule_today_and_leaderboard(test_client, async_session, bettor, alice, bob):
    await create_test_event(async_session, [alice, bob], title="Today")
    await create_test_event(async_session, [alice], title="Later", days_from_today=30)
    headers = auth_headers(bettor)

    schedule = await test_client.get("/api/v1/schedule", headers=headers)
    assert [e["title"] for e in schedule.json()] == ["Today", "Later"]

    today = await test_client.get("/api/v1/events/today", headers=headers)
    assert [e["title"] for e in today.json()] == ["Today"]

    leaderboard = await test_client.get("/api/v1/leaderboard", headers=headers)
    assert leaderboard.status_code == 200
    assert leaderboard.json()[0]["rank"] == 1


@pytest.mark.asyncio
async def test_profile_update_cannot_touch_balance(test_client, bettor):
    headers = auth_headers(bettor)

    response = await test_client.put(
        "/api/v1/profile",
        json={"display_name": "Lucky", "flag": "flags/lucky.png", "balance": "1000000"},
        headers=headers
    )
    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["display_name"] == "Lucky"
    assert profile["flag"] == "flags/lucky.png"
    assert profile["balance"] == "50.00"

    users = await test_client.get("/api/v1/users", headers=headers)
    assert {"id": bettor.id, "username": "bettor", "name": "Lucky", "flag": "flags/lucky.png"} in users.json()
