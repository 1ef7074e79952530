"""Database model for versioned draw settings snapshots."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, DateTime, Integer, String, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from .base import Base
from .types import UInt256

if TYPE_CHECKING:
    from drawcalc.calculator.settings import DrawSettings


class DrawSettingsSnapshot(Base):
    """Immutable record of one accepted draw settings replacement.

    The row with the highest ``id`` is the active snapshot; older rows are
    kept for audit and are never updated.
    """

    __tablename__ = "draw_settings_snapshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    """Primary key, doubling as the settings version."""

    range: Mapped[int] = mapped_column(Integer, nullable=False)
    """Modulus used to normalize extracted digits."""

    match_cardinality: Mapped[int] = mapped_column(Integer, nullable=False)
    """Number of digits compared per pick."""

    pick_cost: Mapped[int] = mapped_column(UInt256, nullable=False)
    """Balance required per claimable pick (18-decimal fixed point)."""

    distributions: Mapped[list] = mapped_column(JSON, nullable=False)
    """Tier fractions as decimal strings, grand prize first."""

    nibble_mask_value: Mapped[int] = mapped_column(Integer, nullable=False)
    nibble_size: Mapped[int] = mapped_column(Integer, nullable=False)

    set_by: Mapped[Optional[str]] = mapped_column(String(42), nullable=True)
    """Address of the administrator who stored the snapshot."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    """Timestamp when the snapshot was stored."""

    def __init__(
        self,
        *,
        range: int,
        match_cardinality: int,
        pick_cost: int,
        distributions: list,
        nibble_mask_value: int,
        nibble_size: int,
        set_by: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> None:
        self.range = range
        self.match_cardinality = match_cardinality
        self.pick_cost = pick_cost
        self.distributions = [str(value) for value in distributions]
        self.nibble_mask_value = nibble_mask_value
        self.nibble_size = nibble_size
        self.set_by = set_by
        if created_at is not None:
            self.created_at = created_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<DrawSettingsSnapshot(id={id}, range={range}, match_cardinality={card})>".format(
            id=self.id,
            range=self.range,
            card=self.match_cardinality,
        )

    @classmethod
    def from_settings(
        cls, settings: "DrawSettings", *, set_by: Optional[str] = None
    ) -> "DrawSettingsSnapshot":
        """Create an unsaved snapshot row holding ``settings``."""
        return cls(
            range=settings.range,
            match_cardinality=settings.match_cardinality,
            pick_cost=settings.pick_cost,
            distributions=list(settings.distributions),
            nibble_mask_value=settings.nibble_mask_value,
            nibble_size=settings.nibble_size,
            set_by=set_by,
        )

    def to_settings(self) -> "DrawSettings":
        """Return the stored parameters as a detached :class:`DrawSettings`."""
        from drawcalc.calculator.settings import DrawSettings

        return DrawSettings(
            range=self.range,
            match_cardinality=self.match_cardinality,
            pick_cost=self.pick_cost,
            distributions=tuple(int(value) for value in self.distributions),
            nibble_mask_value=self.nibble_mask_value,
            nibble_size=self.nibble_size,
        )

    @classmethod
    def latest(cls, session: Session) -> Optional["DrawSettingsSnapshot"]:
        """Return the active (most recently stored) snapshot, if any."""
        return session.scalars(select(cls).order_by(cls.id.desc())).first()

    @classmethod
    def get_version(
        cls, session: Session, version: int
    ) -> Optional["DrawSettingsSnapshot"]:
        """Return the snapshot stored as ``version``."""
        return session.get(cls, version)


class DrawSettingsOwner(Base):
    """The administrator allowed to replace draw settings.

    Holds a single row with ``id`` 1. It is written together with the first
    accepted snapshot and is not changed afterwards.
    """

    __tablename__ = "draw_settings_owner"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    address: Mapped[str] = mapped_column(String(42), nullable=False)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __init__(self, *, address: str) -> None:
        self.id = 1
        self.address = address

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return f"<DrawSettingsOwner(address={self.address})>"

    @classmethod
    def current(cls, session: Session) -> Optional["DrawSettingsOwner"]:
        """Return the recorded owner, if one has been assigned."""
        return session.get(cls, 1)


__all__ = ["DrawSettingsOwner", "DrawSettingsSnapshot"]
