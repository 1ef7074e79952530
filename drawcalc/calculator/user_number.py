"""Helpers for deriving a user's pseudo-random number for a pick."""

from __future__ import annotations

import re

from Crypto.Hash import keccak

from ..constants import UINT256_MAX

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")


def normalize_address(user: str) -> str:
    """Normalize a raw account address by trimming and lower-casing.

    Parameters
    ----------
    user : str
        Account address in ``0x`` prefixed hex form (20 bytes).

    Raises
    ------
    TypeError
        If ``user`` is not a string.
    ValueError
        If ``user`` is not a 20-byte hex address.
    """

    if user is None:
        raise ValueError("user must not be None")
    if not isinstance(user, str):
        raise TypeError("user must be a string")
    normalized = user.strip().lower()
    if not _ADDRESS_RE.match(normalized):
        raise ValueError(f"invalid account address: {user!r}")
    return normalized


def _keccak256(payload: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=payload).digest()


def derive_user_random_number(user: str, pick_index: int) -> int:
    """Calculate the deterministic 256-bit number of ``user`` for a pick.

    The 20-byte address is hashed with Keccak-256 on its own first, then the
    digest is hashed again together with the pick index encoded as a 32-byte
    big-endian word. Only the address and the pick index feed the hash, so
    nothing chosen after a winning number is published can influence the
    result.

    Parameters
    ----------
    user : str
        The user's account address.
    pick_index : int
        Index of the pick claimed by the user.

    Returns
    -------
    int
        Number in ``[0, 2**256)``.
    """

    address = normalize_address(user)
    if isinstance(pick_index, bool) or not isinstance(pick_index, int):
        raise TypeError("pick_index must be an integer")
    if pick_index < 0 or pick_index > UINT256_MAX:
        raise ValueError("pick_index must fit in an unsigned 256-bit integer")

    address_hash = _keccak256(bytes.fromhex(address[2:]))
    seed = address_hash + pick_index.to_bytes(32, "big")
    return int.from_bytes(_keccak256(seed), "big")


__all__ = ["derive_user_random_number", "normalize_address"]
