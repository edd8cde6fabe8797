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
Envelope codec.

An envelope is ``base64(nonce || ciphertext || tag)``, a single string that can
be stored wherever message text goes.
"""

import base64
import binascii
from typing import Tuple

from coreason_cipher.cipher import NONCE_SIZE, TAG_SIZE
from coreason_cipher.exceptions import AuthenticationFailure

# Nonce plus the minimum overhead the heuristic accepts.
MIN_ENCRYPTED_LENGTH = 20

_ASCII_WHITESPACE = str.maketrans("", "", " \t\n\f\r")


def _b64decode(text: str) -> bytes:
    """
    Decodes base64 the way browsers do.

    ASCII whitespace is ignored and missing trailing padding is restored.
    Characters outside the alphabet, misplaced padding and a length of
    1 mod 4 are rejected.
    """
    data = text.translate(_ASCII_WHITESPACE)
    remainder = len(data) % 4
    if remainder == 1 or (remainder and "=" in data):
        raise binascii.Error("Incorrect base64 length or padding")
    return base64.b64decode(data + "=" * (-len(data) % 4), validate=True)


def encode_envelope(nonce: bytes, ciphertext: bytes) -> str:
    """Packs nonce and ciphertext into one base64 string."""
    return base64.b64encode(nonce + ciphertext).decode("ascii")


def decode_envelope(text: str) -> Tuple[bytes, bytes]:
    """
    Splits an envelope into (nonce, ciphertext with tag).

    Raises:
        AuthenticationFailure: If the text is not base64 or is too short to hold a nonce and tag.
    """
    try:
        raw = _b64decode(text)
    except (binascii.Error, ValueError) as e:
        raise AuthenticationFailure(f"Envelope is not valid base64: {e}") from e

    if len(raw) < NONCE_SIZE + TAG_SIZE:
        raise AuthenticationFailure(f"Envelope too short: {len(raw)} bytes")
    return raw[:NONCE_SIZE], raw[NONCE_SIZE:]


def looks_encrypted(text: object) -> bool:
    """
    Best-effort check for whether ``text`` is an envelope.

    True when the text is at least 20 characters, decodes as base64 and the
    decoded payload is at least 20 bytes. Base64-looking plaintext is
    misclassified as encrypted; callers decide what to do with that.
    """
    if not isinstance(text, str) or len(text) < MIN_ENCRYPTED_LENGTH:
        return False
    try:
        decoded = _b64decode(text)
    except (binascii.Error, ValueError):
        return False
    return len(decoded) >= MIN_ENCRYPTED_LENGTH
