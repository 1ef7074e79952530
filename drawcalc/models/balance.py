"""Database model for checkpointed ticket balances."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    BigInteger,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    Index,
    select,
)
from sqlalchemy.orm import Mapped, Session, mapped_column

from .base import Base
from .types import UInt256


class BalanceCheckpoint(Base):
    """A user's ticket balance, effective from ``timestamp`` onwards."""

    __tablename__ = "balance_checkpoints"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_address: Mapped[str] = mapped_column(String(42), nullable=False)
    """Lower-cased account address."""

    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    """Time at which the balance became effective."""

    balance: Mapped[int] = mapped_column(UInt256, nullable=False)
    """Balance (18-decimal fixed point) from ``timestamp`` until the next checkpoint."""

    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint(
            "user_address", "timestamp", name="uq_balance_checkpoint_user_timestamp"
        ),
        Index("ix_balance_checkpoints_user_timestamp", "user_address", "timestamp"),
    )

    def __init__(
        self,
        *,
        user_address: str,
        timestamp: int,
        balance: int,
        recorded_at: Optional[datetime] = None,
    ) -> None:
        self.user_address = user_address
        self.timestamp = timestamp
        self.balance = balance
        if recorded_at is not None:
            self.recorded_at = recorded_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<BalanceCheckpoint(user_address={user}, timestamp={ts}, balance={bal})>".format(
            user=self.user_address,
            ts=self.timestamp,
            bal=self.balance,
        )

    @classmethod
    def balance_at(cls, session: Session, user_address: str, timestamp: int) -> int:
        """Return the balance of ``user_address`` as of ``timestamp``.

        The latest checkpoint at or before ``timestamp`` wins; a user with no
        such checkpoint has a balance of ``0``.
        """

        stmt = (
            select(cls.balance)
            .where(cls.user_address == user_address, cls.timestamp <= timestamp)
            .order_by(cls.timestamp.desc())
            .limit(1)
        )
        balance = session.scalar(stmt)
        return balance if balance is not None else 0


__all__ = ["BalanceCheckpoint"]
