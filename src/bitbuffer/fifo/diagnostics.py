"""Text rendering of buffer slot snapshots for debug logging."""

from __future__ import annotations

from bitbuffer.core.types import SlotInfo


def format_slots(slots: list[SlotInfo]) -> str:
    """Render slots as ``[ 7{0} 6{3P} 5{6N} ]``.

    Each entry is the stored value followed by its bit offset in braces.
    ``P`` marks a popped slot, ``N`` the slot the next push overwrites.
    """
    parts = []
    for s in slots:
        flags = ("P" if s.popped else "") + ("N" if s.next_write else "")
        parts.append(f"{s.value}{{{s.bit_offset}{flags}}}")
    if not parts:
        return "[]"
    return "[ " + " ".join(parts) + " ]"
