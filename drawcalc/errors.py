"""Exceptions raised by the settlement engine."""

from __future__ import annotations


class DrawCalcError(Exception):
    """Base class for all settlement engine errors."""


class AuthorizationError(DrawCalcError, PermissionError):
    """Raised when someone other than the owner tries to change settings."""


class DrawSettingsValidationError(DrawCalcError, ValueError):
    """Raised when proposed draw settings violate a validation rule."""


class DistributionsExceedTotalError(DrawSettingsValidationError):
    """The distribution table sums to more than 100%."""


class RangeTooLargeError(DrawSettingsValidationError):
    """The digit range exceeds what a single digit can represent."""


class InvalidDrawSettingsError(DrawSettingsValidationError):
    """The settings are structurally unusable (zero range, zero pick cost, ...)."""


class DrawSettingsNotSetError(DrawCalcError, LookupError):
    """No draw settings snapshot has been stored yet."""


class DrawInputMismatchError(DrawCalcError, ValueError):
    """Per-draw input sequences do not have matching lengths."""


class BalanceLookupError(DrawCalcError, RuntimeError):
    """A balance provider returned an unusable answer."""


class InsufficientPicksError(DrawCalcError):
    """A user claimed more picks for a draw than their balance allows.

    Attributes
    ----------
    draw_index : int
        Position of the offending draw in the submitted batch.
    requested : int
        Number of picks claimed for that draw.
    allowed : int
        Number of picks the user's balance entitles them to.
    """

    def __init__(self, draw_index: int, requested: int, allowed: int) -> None:
        self.draw_index = draw_index
        self.requested = requested
        self.allowed = allowed
        super().__init__(
            f"insufficient user picks for draw {draw_index}: "
            f"requested {requested}, allowed {allowed}"
        )


__all__ = [
    "AuthorizationError",
    "BalanceLookupError",
    "DistributionsExceedTotalError",
    "DrawCalcError",
    "DrawInputMismatchError",
    "DrawSettingsNotSetError",
    "DrawSettingsValidationError",
    "InsufficientPicksError",
    "InvalidDrawSettingsError",
    "RangeTooLargeError",
]
