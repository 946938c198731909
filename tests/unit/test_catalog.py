"""
Unit tests for catalog administration, schedule windows and totals
"""

from datetime import date, time, timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from podium.core.errors import InternalError, NotFoundError, ValidationError
from podium.repos.account_repo import get_account_by_id, get_leaderboard
from podium.repos.event_repo import get_event_by_id, get_events, resolve_participant_names
from podium.repos.special_bet_repo import get_special_bets
from podium.services import catalog
from tests.fixtures.database import count_audit_logs, create_test_account, create_test_event


@pytest.mark.asyncio
async def test_create_event_records_audit(async_session, admin_account, alice, bob):
    event = await catalog.create_event(
        async_session,
        admin_account,
        title="  Final  ",
        event_date=date(2026, 6, 1),
        event_time=time(20, 0),
        participant_ids=[alice.id, bob.id],
        moneylines=[-110, 105]
    )

    assert event.title == "Final"
    assert event.participant_ids == [alice.id, bob.id]
    assert event.moneylines == [-110, 105, None, None]
    assert await count_audit_logs(async_session, "create_event") == 1


@pytest.mark.asyncio
async def test_create_event_rejects_five_participants(async_session, admin_account):
    accounts = [await create_test_account(async_session, f"p{i}") for i in range(5)]

    with pytest.raises(ValidationError):
        await catalog.create_event(
            async_session,
            admin_account,
            title="Crowded",
            event_date=date(2026, 6, 1),
            event_time=time(20, 0),
            participant_ids=[a.id for a in accounts]
        )


@pytest.mark.asyncio
@pytest.mark.parametrize("participant_ids", [[9999], "duplicate"])
async def test_create_event_rejects_bad_participants(async_session, admin_account, alice, participant_ids):
    if participant_ids == "duplicate":
        participant_ids = [alice.id, alice.id]

    with pytest.raises(ValidationError):
        await catalog.create_event(
            async_session,
            admin_account,
            title="Bad",
            event_date=date(2026, 6, 1),
            event_time=time(20, 0),
            participant_ids=participant_ids
        )


@pytest.mark.asyncio
async def test_create_event_requires_title(async_session, admin_account):
    with pytest.raises(ValidationError):
        await catalog.create_event(
            async_session, admin_account, title=" ", event_date=date(2026, 6, 1), event_time=time(20, 0)
        )


@pytest.mark.asyncio
async def test_update_event_replaces_fields(async_session, admin_account, event, alice):
    updated = await catalog.update_event(
        async_session,
        admin_account,
        event.id,
        title="Alice solo",
        event_date=event.event_date,
        event_time=time(9, 15),
        participant_ids=[alice.id],
        moneylines=[100]
    )

    assert updated.title == "Alice solo"
    assert updated.participant_ids == [alice.id]
    assert updated.moneylines == [100, None, None, None]
    assert updated.to_dict()["time"] == "09:15"


@pytest.mark.asyncio
async def test_update_missing_event(async_session, admin_account):
    with pytest.raises(NotFoundError):
        await catalog.update_event(
            async_session, admin_account, 9999, title="x", event_date=date(2026, 6, 1), event_time=time(20, 0)
        )


@pytest.mark.asyncio
async def test_delete_event(async_session, admin_account, event):
    event_id = event.id
    await catalog.delete_event(async_session, admin_account, event_id)

    assert await get_event_by_id(async_session, event_id) is None
    assert await count_audit_logs(async_session, "delete_event") == 1

    with pytest.raises(NotFoundError):
        await catalog.delete_event(async_session, admin_account, event_id)


@pytest.mark.asyncio
async def test_upcoming_events_window(async_session, alice, bob):
    await create_test_event(async_session, [alice, bob], title="yesterday", days_from_today=-1)
    await create_test_event(async_session, [alice, bob], title="today", days_from_today=0)
    await create_test_event(async_session, [alice, bob], title="in a week", days_from_today=7)
    await create_test_event(async_session, [alice, bob], title="too far", days_from_today=8)

    events = await catalog.upcoming_events(async_session)

    assert [e.title for e in events] == ["today", "in a week"]


def test_betting_window_spans_configured_days():
    start, end = catalog.betting_window(date(2026, 1, 30))
    assert start == date(2026, 1, 30)
    assert end == date(2026, 2, 6)


def test_local_today_honours_timezone():
    # UTC+14 and UTC-10 without DST: always exactly one calendar day apart
    assert catalog.local_today("Pacific/Kiritimati") - catalog.local_today("Pacific/Honolulu") == timedelta(days=1)


@pytest.mark.asyncio
async def test_participant_names_fall_back_to_id(async_session, alice):
    event = await create_test_event(async_session, [alice])
    event.participant_ids = [alice.id, 4242]

    names = await resolve_participant_names(async_session, [event])

    assert names[event.id] == ["Alice", "4242"]


@pytest.mark.asyncio
async def test_create_special_bet(async_session, admin_account):
    special_bet = await catalog.create_special_bet(async_session, admin_account, "First goal before 10'", -120)

    assert special_bet.odds == -120
    assert special_bet.created_by == admin_account.id
    assert [s.id for s in await get_special_bets(async_session)] == [special_bet.id]
    assert await count_audit_logs(async_session, "create_special_bet") == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("description, odds", [("", 100), ("Something", 0), ("Something", None)])
async def test_create_special_bet_validation(async_session, admin_account, description, odds):
    with pytest.raises(ValidationError):
        await catalog.create_special_bet(async_session, admin_account, description, odds)


@pytest.mark.asyncio
async def test_delete_missing_special_bet(async_session, admin_account):
    with pytest.raises(NotFoundError):
        await catalog.delete_special_bet(async_session, admin_account, 9999)


@pytest.mark.asyncio
async def test_apply_totals_adds_deltas_and_skips_blank_entries(async_session, admin_account, alice, bob):
    updated = await catalog.apply_totals(async_session, admin_account, [
        {"account_id": alice.id, "points": 10, "gold_medals": 1},
        {"account_id": None, "points": 99},
        {"account_id": bob.id, "points": 25},
        {"account_id": 9999, "points": 5},
    ])
    await catalog.apply_totals(async_session, admin_account, [{"account_id": alice.id, "points": 5}])

    assert updated == 2
    refreshed_alice = await get_account_by_id(async_session, alice.id)
    assert refreshed_alice.total_points == 15
    assert refreshed_alice.gold_medals == 1

    leaderboard = await get_leaderboard(async_session)
    assert [a.username for a in leaderboard[:2]] == ["bob", "alice"]


@pytest.mark.asyncio
async def test_create_event_rolls_back_when_audit_fails(async_session, admin_account, alice):
    with patch("podium.services.catalog.stage_audit_log", side_effect=SQLAlchemyError("audit down")):
        with pytest.raises(InternalError):
            await catalog.create_event(
                async_session,
                admin_account,
                title="Unaudited",
                event_date=date(2026, 6, 1),
                event_time=time(20, 0),
                participant_ids=[alice.id]
            )

    assert await get_events(async_session) == []
    assert await count_audit_logs(async_session) == 0


@pytest.mark.asyncio
async def test_update_event_rolls_back_when_audit_fails(async_session, admin_account, event):
    event_id = event.id

    with patch("podium.services.catalog.stage_audit_log", side_effect=SQLAlchemyError("audit down")):
        with pytest.raises(InternalError):
            await catalog.update_event(
                async_session,
                admin_account,
                event_id,
                title="Renamed",
                event_date=date(2026, 6, 1),
                event_time=time(20, 0)
            )

    unchanged = await get_event_by_id(async_session, event_id)
    assert unchanged.title == "Alice vs Bob"


@pytest.mark.asyncio
async def test_create_special_bet_rolls_back_when_audit_fails(async_session, admin_account):
    with patch("podium.services.catalog.stage_audit_log", side_effect=SQLAlchemyError("audit down")):
        with pytest.raises(InternalError):
            await catalog.create_special_bet(async_session, admin_account, "Unaudited", 150)

    assert await get_special_bets(async_session) == []
