from typing import Optional, Sequence

from sqlalchemy.orm import Session

from .balances import BalanceProvider, CheckpointBalanceProvider
from .calculator import (
    Draw,
    DrawCalculation,
    DrawCalculator,
    DrawSettings,
    DrawSettingsStore,
    normalize_address,
)
from .models import BalanceCheckpoint


def record_balance_checkpoint(
    session: Session, user: str, timestamp: int, balance: int
) -> BalanceCheckpoint:
    """Store the balance of ``user`` effective from ``timestamp``.

    An existing checkpoint for the same user and timestamp is overwritten so
    that re-indexing the same block is idempotent.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session.
    user : str
        Account address.
    timestamp : int
        Time from which ``balance`` applies.
    balance : int
        Balance as an 18-decimal fixed-point integer.

    Returns
    -------
    BalanceCheckpoint
        The persisted checkpoint.
    """

    if balance < 0:
        raise ValueError("balance must not be negative")
    address = normalize_address(user)

    checkpoint = (
        session.query(BalanceCheckpoint)
        .filter(
            BalanceCheckpoint.user_address == address,
            BalanceCheckpoint.timestamp == timestamp,
        )
        .one_or_none()
    )
    if checkpoint is None:
        checkpoint = BalanceCheckpoint(
            user_address=address, timestamp=timestamp, balance=balance
        )
        session.add(checkpoint)
    else:
        checkpoint.balance = balance

    session.flush()
    return checkpoint


def submit_draw_settings(session: Session, caller: str, settings: DrawSettings) -> int:
    """Replace the active draw settings on behalf of ``caller``.

    ``caller`` must be the recorded owner. On a fresh database the owner is
    taken from ``DRAWCALC_OWNER`` and recorded with the first snapshot.
    Returns the version of the stored snapshot. Raises the store's
    authorization and validation errors unchanged.
    """
    store = DrawSettingsStore(session)
    return store.set_draw_settings(caller, settings)


def settle_user_prizes(
    session: Session,
    user: str,
    draws: Sequence[Draw],
    pick_indices: Sequence[Sequence[int]],
    *,
    balance_provider: Optional[BalanceProvider] = None,
) -> DrawCalculation:
    """Compute what ``user`` is owed for ``draws`` using the stored settings.

    Balances are read from the checkpoint table unless ``balance_provider``
    is supplied (for example a :class:`~drawcalc.ticket.api.TicketClient`).
    Nothing is written to the database.
    """

    store = DrawSettingsStore(session)
    provider = balance_provider or CheckpointBalanceProvider(session)
    calculator = DrawCalculator(store, provider)
    return calculator.calculate_breakdown(user, draws, pick_indices)
