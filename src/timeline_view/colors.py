from __future__ import annotations

from typing import Sequence

OWNER_PALETTE: tuple[str, ...] = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#FFA07A",
    "#98D8C8",
    "#F7DC6F",
    "#BB8FCE",
    "#85C1E2",
    "#EE7A27",
    "#AED6F1",
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def owner_hash(owner: str) -> int:
    """
    Rolling `code + (hash << 5) - hash` over UTF-16 code units.

    The shift wraps to a signed 32-bit integer; the sum itself does not, so the
    result is stable for a given name across processes and platforms.
    """
    encoded = owner.encode("utf-16-le")
    value = 0
    for idx in range(0, len(encoded), 2):
        code = encoded[idx] | (encoded[idx + 1] << 8)
        value = code + (_to_int32(_to_int32(value) << 5) - value)
    return value


def color_for(owner: str, palette: Sequence[str] = OWNER_PALETTE) -> str:
    """Palette colour for an owner. Different owners may share a colour."""
    return palette[abs(owner_hash(owner)) % len(palette)]
