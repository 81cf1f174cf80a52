"""Background gradients for quote cards."""

from __future__ import annotations

import random

GRADIENTS = [
    # Blues & purples
    "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
    "linear-gradient(135deg, #5B86E5 0%, #36D1DC 100%)",
    "linear-gradient(135deg, #6B73FF 0%, #000DFF 100%)",
    "linear-gradient(135deg, #7F7FD5 0%, #86A8E7 50%, #91EAE4 100%)",
    # Greens & teals
    "linear-gradient(135deg, #2af598 0%, #009efd 100%)",
    "linear-gradient(135deg, #11998e 0%, #38ef7d 100%)",
    "linear-gradient(135deg, #00b09b 0%, #96c93d 100%)",
    "linear-gradient(135deg, #56ab2f 0%, #a8e6cf 100%)",
    # Pinks & reds
    "linear-gradient(135deg, #f093fb 0%, #f5576c 100%)",
    "linear-gradient(135deg, #ff6a88 0%, #ff99ac 100%)",
    "linear-gradient(135deg, #ee0979 0%, #ff6a00 100%)",
    "linear-gradient(135deg, #fc4a1a 0%, #f7b733 100%)",
    # Cyans & blues
    "linear-gradient(135deg, #4facfe 0%, #00f2fe 100%)",
    "linear-gradient(135deg, #0052D4 0%, #65C7F7 50%, #9CECFB 100%)",
    "linear-gradient(135deg, #00c6ff 0%, #0072ff 100%)",
    "linear-gradient(135deg, #2193b0 0%, #6dd5ed 100%)",
    # Oranges & yellows
    "linear-gradient(135deg, #f7971e 0%, #ffd200 100%)",
    "linear-gradient(135deg, #ff9966 0%, #ff5e62 100%)",
    "linear-gradient(135deg, #F2994A 0%, #F2C94C 100%)",
    "linear-gradient(135deg, #c31432 0%, #240b36 100%)",
]


def _string_hash(value: str) -> int:
    """32-bit signed ``h = 31 * h + c`` hash, as browsers compute it for ids."""
    h = 0
    for ch in value:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def gradient_for_id(item_id: str | int | None) -> str:
    """Stable gradient for an item that was saved without one."""
    if item_id is None or item_id == "":
        return GRADIENTS[0]
    return GRADIENTS[abs(_string_hash(str(item_id))) % len(GRADIENTS)]


def random_gradient(previous: str | None = None) -> str:
    """Random gradient, never the same as ``previous``."""
    choices = [g for g in GRADIENTS if g != previous] or GRADIENTS
    return random.choice(choices)