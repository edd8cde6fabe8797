# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_cipher

"""
Participant validation and conversation id generation.

Account addresses are ledger public keys: base58 text that decodes to exactly
32 bytes.
"""

import time
from typing import Callable, Optional, Sequence

import base58

PUBLIC_KEY_LENGTH = 32


def is_valid_address(address: object) -> bool:
    """Returns True if ``address`` is base58 text decoding to a 32-byte public key."""
    if not isinstance(address, str) or not address:
        return False
    # b58decode strips trailing whitespace; a padded address would derive a different key
    if address != address.strip():
        return False
    try:
        decoded = base58.b58decode(address)
    except ValueError:
        return False
    return len(decoded) == PUBLIC_KEY_LENGTH


def validate_participants(participants: Optional[Sequence[str]]) -> bool:
    """
    Checks that every participant is a well-formed account address.

    Returns:
        False for a missing or empty list, or if any single entry is malformed.
    """
    if not participants:
        return False
    return all(is_valid_address(participant) for participant in participants)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def rolling_hash(text: str) -> int:
    """
    32-bit signed rolling hash: ``h = int32(h * 31 + unit)`` over UTF-16 code units.

    Not collision resistant.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return h


def generate_conversation_id(
    address_a: str,
    address_b: str,
    clock: Callable[[], float] = time.time,
) -> str:
    """
    Builds a traceable conversation id for two participants.

    The id is ``chat-{abs(hash)}-{millis}``. The hash part only depends on the
    pair of addresses; the time part makes every call different.

    Args:
        address_a: One participant address.
        address_b: The other participant address.
        clock: Wall-clock source in seconds. Defaults to time.time.

    Returns:
        The conversation id.
    """
    combined = "-".join(sorted([address_a, address_b]))
    millis = int(clock() * 1000)
    return f"chat-{abs(rolling_hash(combined))}-{millis}"
