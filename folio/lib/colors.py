"""Packed ARGB color decoding.

Portfolio documents store colors as a single 32-bit integer laid out as
``[alpha][red][green][blue]`` from the most to the least significant byte.
"""

from __future__ import annotations

_MASK_32 = 0xFFFFFFFF


def _channels(packed: int) -> tuple[int, int, int, int]:
    """Split a packed color into ``(alpha, red, green, blue)`` bytes."""
    # Signed 32-bit values are read through their low 32 bits
    packed &= _MASK_32
    return (
        (packed >> 24) & 0xFF,
        (packed >> 16) & 0xFF,
        (packed >> 8) & 0xFF,
        packed & 0xFF,
    )


def decode_hex(packed: int | None) -> str | None:
    """Return the opaque ``#rrggbb`` form of a packed color, or ``None``."""
    if packed is None:
        return None
    _, red, green, blue = _channels(packed)
    return f"#{red:02x}{green:02x}{blue:02x}"


def decode_rgba(packed: int | None) -> str | None:
    """Return the CSS ``rgba(r, g, b, a)`` form of a packed color, or ``None``.

    Alpha is the high byte divided by 255, rendered with two decimals.
    """
    if packed is None:
        return None
    alpha, red, green, blue = _channels(packed)
    return f"rgba({red}, {green}, {blue}, {alpha / 255:.2f})"


def with_default(value: str | None, default: str) -> str:
    """Return *value* unless it is ``None``."""
    return default if value is None else value


def parse_packed(text: str) -> int:
    """Parse a packed color written as decimal or ``0x``-prefixed hex."""
    text = text.strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    if text.startswith("#"):
        return int(text[1:], 16)
    return int(text)
