"""
Integration tests for the admin endpoints
"""

import pytest

from tests.conftest import auth_headers

pytestmark = pytest.mark.integration


async def _place(client, account, event_id, outcome, amount):
    response = await client.post(
        "/api/v1/betting/wagers",
        json={"event_id": event_id, "predicted_outcome": outcome, "amount": amount},
        headers=auth_headers(account)
    )
    assert response.status_code == 200, response.text
    return response.json()["wager"]


@pytest.mark.asyncio
async def test_admin_routes_reject_ordinary_accounts(test_client, bettor):
    for method, path in [
        ("GET", "/api/v1/admin/wagers"),
        ("GET", "/api/v1/admin/accounts"),
        ("POST", f"/api/v1/admin/accounts/{bettor.id}/adjust"),
        ("DELETE", "/api/v1/admin/wagers/1"),
    ]:
        response = await test_client.request(method, path, json={"delta": 5}, headers=auth_headers(bettor))
        assert response.status_code == 403, path


@pytest.mark.asyncio
async def test_adjust_balance_round_trip_and_negative(test_client, admin_account, bettor):
    headers = auth_headers(admin_account)
    url = f"/api/v1/admin/accounts/{bettor.id}/adjust"

    up = await test_client.post(url, json={"delta": 10, "reason": "bonus"}, headers=headers)
    assert up.json() == {"ok": True, "account_id": bettor.id, "balance": "60.00"}

    down = await test_client.post(url, json={"delta": "-10"}, headers=headers)
    assert down.json()["balance"] == "50.00"

    overdrawn = await test_client.post(url, json={"delta": -70}, headers=headers)
    assert overdrawn.status_code == 200
    assert overdrawn.json()["balance"] == "-20.00"

    balance = await test_client.get(f"/api/v1/admin/accounts/{bettor.id}/balance", headers=headers)
    assert balance.json()["balance"] == "-20.00"


@pytest.mark.asyncio
async def test_adjust_validation_and_missing_account(test_client, admin_account, bettor):
    headers = auth_headers(admin_account)

    bad = await test_client.post(f"/api/v1/admin/accounts/{bettor.id}/adjust", json={"delta": "x"}, headers=headers)
    assert bad.status_code == 400

    missing_delta = await test_client.post(f"/api/v1/admin/accounts/{bettor.id}/adjust", json={}, headers=headers)
    assert missing_delta.status_code == 400

    missing = await test_client.post("/api/v1/admin/accounts/9999/adjust", json={"delta": 5}, headers=headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_credit_winnings_against_wager(test_client, admin_account, bettor, event):
    wager = await _place(test_client, bettor, event.id, "Alice", 30)
    headers = auth_headers(admin_account)

    response = await test_client.post(
        f"/api/v1/admin/wagers/{wager['id']}/adjust",
        json={"delta": 75, "reason": "Alice won at +150"},
        headers=headers
    )
    assert response.status_code == 200
    assert response.json()["account_id"] == bettor.id
    assert response.json()["balance"] == "95.00"

    logs = await test_client.get("/api/v1/admin/audit-logs?action=adjust_balance", headers=headers)
    assert logs.json()[0]["details"]["wager_id"] == wager["id"]


@pytest.mark.asyncio
async def test_adjust_against_unknown_wager_is_not_found(test_client, admin_account):
    response = await test_client.post(
        "/api/v1/admin/wagers/9999/adjust",
        json={"delta": 10},
        headers=auth_headers(admin_account)
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Wager not found"


@pytest.mark.asyncio
async def test_list_and_delete_wagers_without_refund(test_client, admin_account, bettor, event):
    wager = await _place(test_client, bettor, event.id, "Bob", 30)
    headers = auth_headers(admin_account)

    listing = await test_client.get("/api/v1/admin/wagers", headers=headers)
    assert listing.status_code == 200
    rows = listing.json()
    assert len(rows) == 1
    assert rows[0]["username"] == "bettor"
    assert rows[0]["event_title"] == "Alice vs Bob"
    assert rows[0]["amount"] == "30.00"

    deleted = await test_client.delete(f"/api/v1/admin/wagers/{wager['id']}", headers=headers)
    assert deleted.json() == {"ok": True}

    again = await test_client.delete(f"/api/v1/admin/wagers/{wager['id']}", headers=headers)
    assert again.status_code == 404

    assert (await test_client.get("/api/v1/admin/wagers", headers=headers)).json() == []
    balance = await test_client.get(f"/api/v1/admin/accounts/{bettor.id}/balance", headers=headers)
    assert balance.json()["balance"] == "20.00"


@pytest.mark.asyncio
async def test_event_crud(test_client, admin_account, alice, bob):
    headers = auth_headers(admin_account)
    payload = {
        "title": "Chess blitz",
        "event_date": "2026-11-01",
        "event_time": "18:45",
        "participant_ids": [alice.id, bob.id],
        "moneylines": [120, -140]
    }

    created = await test_client.post("/api/v1/admin/events", json=payload, headers=headers)
    assert created.status_code == 200
    event = created.json()["event"]
    assert event["date"] == "2026-11-01"
    assert event["time"] == "18:45"

    payload["title"] = "Chess rapid"
    updated = await test_client.put(f"/api/v1/admin/events/{event['id']}", json=payload, headers=headers)
    assert updated.json()["event"]["title"] == "Chess rapid"

    listing = await test_client.get("/api/v1/admin/events", headers=headers)
    assert listing.json()[0]["participants"] == ["Alice", "Bob"]

    deleted = await test_client.delete(f"/api/v1/admin/events/{event['id']}", headers=headers)
    assert deleted.json() == {"ok": True}
    assert (await test_client.get("/api/v1/admin/events", headers=headers)).json() == []


@pytest.mark.asyncio
async def test_event_participant_limits(test_client, admin_account, alice):
    headers = auth_headers(admin_account)
    base = {"title": "x", "event_date": "2026-11-01", "event_time": "18:45"}

    five = await test_client.post(
        "/api/v1/admin/events", json={**base, "participant_ids": [1, 2, 3, 4, 5]}, headers=headers
    )
    assert five.status_code == 422

    unknown = await test_client.post(
        "/api/v1/admin/events", json={**base, "participant_ids": [alice.id, 9999]}, headers=headers
    )
    assert unknown.status_code == 400


@pytest.mark.asyncio
async def test_deleting_event_keeps_wager_rows(test_client, admin_account, bettor, event):
    await _place(test_client, bettor, event.id, "Alice", 10)
    headers = auth_headers(admin_account)

    await test_client.delete(f"/api/v1/admin/events/{event.id}", headers=headers)

    rows = (await test_client.get("/api/v1/admin/wagers", headers=headers)).json()
    assert len(rows) == 1
    assert rows[0]["event_id"] is None
    assert rows[0]["event_title"] is None
    assert rows[0]["predicted_outcome"] == "Alice"


@pytest.mark.asyncio
async def test_special_bet_lifecycle(test_client, admin_account, bettor):
    headers = auth_headers(admin_account)

    zero_odds = await test_client.post(
        "/api/v1/admin/special-bets", json={"description": "Nobody scores", "odds": 0}, headers=headers
    )
    assert zero_odds.status_code == 400

    created = await test_client.post(
        "/api/v1/admin/special-bets", json={"description": "Nobody scores", "odds": 500}, headers=headers
    )
    special_bet = created.json()["special_bet"]

    placed = await test_client.post(
        "/api/v1/betting/special-wagers",
        json={"special_bet_id": special_bet["id"], "amount": 5},
        headers=auth_headers(bettor)
    )
    assert placed.status_code == 200

    deleted = await test_client.delete(f"/api/v1/admin/special-bets/{special_bet['id']}", headers=headers)
    assert deleted.json() == {"ok": True}

    rows = (await test_client.get("/api/v1/admin/wagers", headers=headers)).json()
    assert rows[0]["predicted_outcome"] == "Nobody scores"
    assert rows[0]["target"] == 0
    assert rows[0]["special_bet_id"] is None


@pytest.mark.asyncio
async def test_totals_update_leaderboard(test_client, admin_account, alice, bob):
    headers = auth_headers(admin_account)

    response = await test_client.post(
        "/api/v1/admin/totals",
        json={"entries": [
            {"account_id": alice.id, "points": 3},
            {"account_id": bob.id, "points": 8, "gold_medals": 1},
            {"points": 100},
        ]},
        headers=headers
    )
    assert response.json() == {"ok": True, "updated": 2}

    leaderboard = (await test_client.get("/api/v1/leaderboard", headers=headers)).json()
    assert [row["name"] for row in leaderboard[:2]] == ["Bob", "Alice"]
    assert leaderboard[0]["gold_medals"] == 1

    accounts = (await test_client.get("/api/v1/admin/accounts", headers=headers)).json()
    assert {a["username"] for a in accounts} == {"admin", "alice", "bob"}
