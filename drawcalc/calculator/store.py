"""Versioned storage for the active draw settings."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ..config import AppConfig
from ..errors import AuthorizationError, DrawSettingsNotSetError
from ..models.draw_settings import DrawSettingsOwner, DrawSettingsSnapshot
from .settings import DrawSettings, validate_draw_settings
from .user_number import normalize_address

logger = logging.getLogger(__name__)

SettingsListener = Callable[[int, DrawSettings], None]


class DrawSettingsStore:
    """Owner-guarded slot holding the active :class:`DrawSettings`.

    Every accepted replacement is stored as a new
    :class:`~drawcalc.models.DrawSettingsSnapshot` row; the most recent row is
    the active snapshot. Rows are never modified in place, so earlier
    versions remain available for auditing.

    The administrator is recorded in the database together with the first
    accepted snapshot. From then on only the recorded address may replace the
    settings, whatever owner a later store instance is constructed with.
    """

    def __init__(self, session: Session, owner: Optional[str] = None) -> None:
        """Create a store bound to a SQLAlchemy session.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session used for lookups and persistence.
        owner : str, optional
            Administrator to record when no owner has been stored yet.
            Defaults to ``DRAWCALC_OWNER`` from the environment. Ignored once
            an owner is recorded.
        """

        self._session = session
        self._proposed_owner = normalize_address(owner) if owner is not None else None
        self._listeners: list[SettingsListener] = []

    @property
    def owner(self) -> Optional[str]:
        """The recorded administrator, or the one that would be recorded."""
        record = DrawSettingsOwner.current(self._session)
        if record is not None:
            return record.address
        if self._proposed_owner is not None:
            return self._proposed_owner
        configured = AppConfig.from_env().owner
        return normalize_address(configured) if configured else None

    def is_owner(self, caller: str) -> bool:
        return _same_address(caller, self.owner)

    def subscribe(self, listener: SettingsListener) -> None:
        """Register ``listener`` to be called with ``(version, settings)``
        after each accepted replacement.

        A listener that raises is logged and skipped; it cannot undo an
        accepted replacement.
        """
        self._listeners.append(listener)

    def initialize(self, settings: DrawSettings) -> int:
        """Store the first snapshot on behalf of the owner."""
        owner = self.owner
        if owner is None:
            raise AuthorizationError("no draw settings owner is configured")
        return self.set_draw_settings(owner, settings)

    def set_draw_settings(self, caller: str, settings: DrawSettings) -> int:
        """Validate ``settings`` and make them the active snapshot.

        All checks run before anything is written, so a rejected update
        leaves the previous snapshot active.

        Parameters
        ----------
        caller : str
            Address of the account requesting the change.
        settings : DrawSettings
            Proposed settings.

        Returns
        -------
        int
            Version number of the stored snapshot.

        Raises
        ------
        AuthorizationError
            If ``caller`` is not the recorded owner, or no owner is known.
        DistributionsExceedTotalError
            If the distributions sum to more than 100%.
        RangeTooLargeError
            If ``settings.range`` is greater than 15.
        InvalidDrawSettingsError
            If another parameter is outside its domain.
        """

        owner = self.owner
        if not _same_address(caller, owner):
            logger.warning(f"Rejected draw settings update from non-owner {caller}")
            raise AuthorizationError(f"{caller} is not the draw settings owner")
        try:
            validate_draw_settings(settings)
        except ValueError as exc:
            logger.warning(f"Rejected draw settings update: {exc}")
            raise

        snapshot = DrawSettingsSnapshot.from_settings(settings, set_by=owner)
        self._session.add(snapshot)
        if DrawSettingsOwner.current(self._session) is None:
            self._session.add(DrawSettingsOwner(address=owner))
            logger.info(f"Draw settings owner recorded: {owner}")
        self._session.flush()

        logger.info(
            f"DrawSettingsSet version={snapshot.id} range={settings.range} "
            f"match_cardinality={settings.match_cardinality} "
            f"tiers={len(settings.distributions)}"
        )
        self._notify(snapshot.id, settings)
        return snapshot.id

    def get_draw_settings(self, version: Optional[int] = None) -> DrawSettings:
        """Return the active settings, or the snapshot stored as ``version``.

        Raises
        ------
        DrawSettingsNotSetError
            If no matching snapshot exists.
        """

        snapshot = self._snapshot(version)
        return snapshot.to_settings()

    def get_active_version(self) -> Optional[int]:
        """Return the version of the active snapshot, ``None`` when unset."""
        snapshot = DrawSettingsSnapshot.latest(self._session)
        return snapshot.id if snapshot is not None else None

    def get_active(self) -> tuple[int, DrawSettings]:
        """Return ``(version, settings)`` of the active snapshot in one lookup."""
        snapshot = self._snapshot(None)
        return snapshot.id, snapshot.to_settings()

    def _notify(self, version: int, settings: DrawSettings) -> None:
        for listener in self._listeners:
            try:
                listener(version, settings)
            except Exception:
                logger.exception(f"Draw settings listener failed for version {version}")

    def _snapshot(self, version: Optional[int]) -> DrawSettingsSnapshot:
        if version is None:
            snapshot = DrawSettingsSnapshot.latest(self._session)
            if snapshot is None:
                raise DrawSettingsNotSetError("draw settings have not been set")
            return snapshot
        snapshot = DrawSettingsSnapshot.get_version(self._session, version)
        if snapshot is None:
            raise DrawSettingsNotSetError(f"no draw settings stored as version {version}")
        return snapshot


def _same_address(caller: str, owner: Optional[str]) -> bool:
    if owner is None:
        return False
    try:
        return normalize_address(caller) == owner
    except (TypeError, ValueError):
        return False


__all__ = ["DrawSettingsStore", "SettingsListener"]
