"""
Betting ledger service

Wager placement is the only multi-statement write in the system: the
balance debit and the ledger insert commit together or not at all. The
debit is a conditional UPDATE (``balance >= amount``) so the funds check
and the debit are a single statement.

Admin adjustments are unchecked: any signed delta is applied with no
floor, and every adjustment is audit-logged.
There is no settlement path; admins credit winnings by adjustment.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.errors import (
    InsufficientFundsError,
    InternalError,
    InvalidOutcomeError,
    NotFoundError,
    PodiumError,
    ValidationError,
)
from podium.core.metrics import ADJUSTMENT_COUNT, WAGER_COUNT
from podium.models.account import Account
from podium.models.enums import WagerTarget
from podium.models.wager import Wager
from podium.repos import account_repo, event_repo, special_bet_repo, wager_repo
from podium.repos.audit_log_repo import stage_audit_log

# Configure logging
logger = logging.getLogger(__name__)

# Balances and wagers are kept to the cent
CENT = Decimal("0.01")


def _to_decimal(value, field: str) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing {field}")
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {field}")
    if not number.is_finite():
        raise ValidationError(f"Invalid {field}")
    return number.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount(value) -> Decimal:
    """
    Validate a wager amount.

    Raises:
        ValidationError: missing, non-numeric, non-finite or not positive
    """
    amount = _to_decimal(value, "wager amount")
    if amount <= 0:
        raise ValidationError("Invalid wager amount")
    return amount


def parse_delta(value) -> Decimal:
    """
    Validate an admin adjustment delta. Any sign is accepted; zero is a no-op and rejected.
    """
    delta = _to_decimal(value, "adjustment delta")
    if delta == 0:
        raise ValidationError("Adjustment delta must be non-zero")
    return delta


async def get_balance(session: AsyncSession, account_id: int) -> Decimal:
    """
    Current balance of an account.

    Raises:
        NotFoundError: no such account
    """
    balance = await account_repo.get_balance(session, account_id)
    if balance is None:
        raise NotFoundError("Account not found")
    return balance


async def _match_participant(session: AsyncSession, event, predicted_outcome: str) -> str:
    """Return the participant name the prediction refers to, by display name or username."""
    accounts = await account_repo.get_accounts_by_ids(session, event.participant_ids or [])
    for pid in event.participant_ids or []:
        account = accounts.get(int(pid))
        if account and predicted_outcome in (account.name, account.username):
            return account.name
    raise InvalidOutcomeError("Predicted outcome is not a participant of this event")


async def _commit_placement(
    session: AsyncSession,
    account: Account,
    amount: Decimal,
    predicted_outcome: str,
    target_type: str,
    event_id: Optional[int] = None,
    special_bet_id: Optional[int] = None
) -> Wager:
    """Debit and insert as one transaction."""
    # Rollback expires ORM instances
    account_id = account.id
    try:
        if not await account_repo.debit_balance_if_sufficient(session, account_id, amount):
            # Balance moved between the pre-check and the debit
            await session.rollback()
            raise InsufficientFundsError()

        wager = await wager_repo.add_wager(
            session,
            account_id=account_id,
            predicted_outcome=predicted_outcome,
            amount=amount,
            target_type=target_type,
            event_id=event_id,
            special_bet_id=special_bet_id
        )
        await session.commit()
    except PodiumError:
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error placing {target_type} wager for account {account_id}: {e}")
        WAGER_COUNT.labels(kind=target_type, status="error").inc()
        raise InternalError() from e

    await session.refresh(account)
    await session.refresh(wager)
    return wager


async def _load_account_with_funds(session: AsyncSession, account_id: int, amount: Decimal, kind: str) -> Account:
    account = await account_repo.get_account_by_id(session, account_id)
    if not account:
        raise NotFoundError("Account not found")

    balance = await account_repo.get_balance(session, account_id)
    if balance < amount:
        logger.info(f"Rejected {kind} wager of {amount} for account {account_id}: balance {balance}")
        WAGER_COUNT.labels(kind=kind, status="insufficient_funds").inc()
        raise InsufficientFundsError()
    return account


async def place_wager(
    session: AsyncSession,
    account_id: int,
    event_id: int,
    predicted_outcome: str,
    amount
) -> Wager:
    """
    Place a wager on one participant of an event.

    All validation happens before any write; the debit and the ledger row
    then commit together.

    Args:
        session: Database session
        account_id: Placing account
        event_id: Target event
        predicted_outcome: Participant display name (or username)
        amount: Wager amount; anything Decimal() accepts

    Returns:
        The committed Wager

    Raises:
        ValidationError: bad amount or empty prediction
        NotFoundError: account or event does not exist
        InvalidOutcomeError: prediction is not one of the event's participants
        InsufficientFundsError: amount exceeds the balance
        InternalError: the store failed; nothing was applied
    """
    kind = WagerTarget.EVENT.value
    wager_amount = parse_amount(amount)
    outcome = (predicted_outcome or "").strip()
    if not outcome:
        raise ValidationError("Missing predicted outcome")

    event = await event_repo.get_event_by_id(session, event_id)
    if not event:
        raise NotFoundError("Event not found")
    outcome = await _match_participant(session, event, outcome)

    account = await _load_account_with_funds(session, account_id, wager_amount, kind)

    try:
        wager = await _commit_placement(
            session, account, wager_amount, outcome, kind, event_id=event.id
        )
    except InsufficientFundsError:
        WAGER_COUNT.labels(kind=kind, status="insufficient_funds").inc()
        raise

    logger.info(f"Account {account_id} wagered {wager_amount} on event {event.id} ({outcome}); wager {wager.id}")
    WAGER_COUNT.labels(kind=kind, status="placed").inc()
    return wager


async def place_special_wager(
    session: AsyncSession,
    account_id: int,
    special_bet_id: int,
    amount
) -> Wager:
    """
    Place a wager on a special bet.

    The ledger row stores the special bet's description as its predicted
    outcome, so the wager stays readable after the special bet is deleted.

    Raises:
        ValidationError, NotFoundError, InsufficientFundsError, InternalError
    """
    kind = WagerTarget.SPECIAL.value
    wager_amount = parse_amount(amount)

    special_bet = await special_bet_repo.get_special_bet_by_id(session, special_bet_id)
    if not special_bet:
        raise NotFoundError("Special bet not found")

    account = await _load_account_with_funds(session, account_id, wager_amount, kind)

    try:
        wager = await _commit_placement(
            session,
            account,
            wager_amount,
            special_bet.description,
            kind,
            special_bet_id=special_bet.id
        )
    except InsufficientFundsError:
        WAGER_COUNT.labels(kind=kind, status="insufficient_funds").inc()
        raise

    logger.info(f"Account {account_id} wagered {wager_amount} on special bet {special_bet.id}; wager {wager.id}")
    WAGER_COUNT.labels(kind=kind, status="placed").inc()
    return wager


async def adjust_balance(
    session: AsyncSession,
    account_id: int,
    delta,
    admin: Account,
    wager_id: Optional[int] = None,
    reason: Optional[str] = None
) -> Decimal:
    """
    Apply a signed correction to an account balance.

    No floor and no clamp: a balance may go negative. The referenced
    wager, if any, is recorded in the audit log but not modified.

    Returns:
        The balance after the adjustment

    Raises:
        ValidationError: delta missing or not a finite number
        NotFoundError: no such account
        InternalError: the store failed; nothing was applied
    """
    amount = parse_delta(delta)

    account = await account_repo.get_account_by_id(session, account_id)
    if not account:
        raise NotFoundError("Account not found")

    try:
        await account_repo.add_to_balance(session, account_id, amount)
        new_balance = await account_repo.get_balance(session, account_id)
        stage_audit_log(
            session,
            admin_id=admin.id,
            actor=admin.username,
            action="adjust_balance",
            details={
                "account_id": account_id,
                "delta": str(amount),
                "wager_id": wager_id,
                "reason": reason,
                "balance_after": str(new_balance)
            }
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error adjusting balance of account {account_id}: {e}")
        raise InternalError() from e

    await session.refresh(account)
    logger.warning(
        f"Admin {admin.username} adjusted account {account_id} by {amount} "
        f"(wager={wager_id}, reason={reason!r}); balance now {new_balance}"
    )
    ADJUSTMENT_COUNT.inc()
    return new_balance


async def list_wagers(session: AsyncSession, limit: int = 1000, offset: int = 0) -> List[Wager]:
    """Every ledger row, oldest first, with username and event title attached."""
    return await wager_repo.get_all_wagers(session, limit=limit, offset=offset)


async def list_wagers_for_account(session: AsyncSession, account_id: int, limit: int = 100, offset: int = 0) -> List[Wager]:
    return await wager_repo.get_wagers_for_account(session, account_id, limit=limit, offset=offset)


async def delete_wager(session: AsyncSession, wager_id: int, admin: Account) -> None:
    """
    Remove a ledger row. The stake is not returned to the account.

    Raises:
        NotFoundError: no such wager
        InternalError: the store failed
    """
    wager = await wager_repo.get_wager_by_id(session, wager_id)
    if not wager:
        raise NotFoundError("Wager not found")

    details = {
        "wager_id": wager.id,
        "account_id": wager.account_id,
        "target_type": wager.target_type,
        "event_id": wager.event_id,
        "special_bet_id": wager.special_bet_id,
        "predicted_outcome": wager.predicted_outcome,
        "amount": str(wager.amount)
    }

    try:
        await wager_repo.remove_wager(session, wager_id)
        stage_audit_log(session, admin_id=admin.id, actor=admin.username, action="delete_wager", details=details)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error deleting wager {wager_id}: {e}")
        raise InternalError() from e

    logger.warning(f"Admin {admin.username} deleted wager {wager_id} (no balance reversal)")
