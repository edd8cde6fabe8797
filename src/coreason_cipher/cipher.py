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
AES-256-GCM sealing of message bytes.

Every call to ``seal`` draws a fresh 12-byte nonce. ``unseal`` verifies the
128-bit tag before any plaintext is returned; a mismatch never yields bytes.
"""

import os
from typing import Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from coreason_cipher.exceptions import AuthenticationFailure, CryptoOperationError

NONCE_SIZE = 12
TAG_SIZE = 16


def seal(plaintext: bytes, key: bytes) -> Tuple[bytes, bytes]:
    """
    Encrypts and authenticates ``plaintext`` under ``key``.

    Args:
        plaintext: The message bytes.
        key: A 256-bit key.

    Returns:
        A tuple of (nonce, ciphertext with the tag appended).

    Raises:
        CryptoOperationError: If the primitive rejects the key or fails.
    """
    nonce = os.urandom(NONCE_SIZE)
    try:
        ciphertext = AESGCM(key).encrypt(nonce, plaintext, None)
    except Exception as e:
        raise CryptoOperationError(f"AES-GCM encryption failed: {e}") from e
    return nonce, ciphertext


def unseal(nonce: bytes, ciphertext: bytes, key: bytes) -> bytes:
    """
    Verifies and decrypts ``ciphertext`` (tag included) under ``key``.

    Raises:
        AuthenticationFailure: On a wrong key, tampered data or malformed input.
    """
    if len(nonce) != NONCE_SIZE:
        raise AuthenticationFailure(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    if len(ciphertext) < TAG_SIZE:
        raise AuthenticationFailure("Ciphertext is shorter than the authentication tag")
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise AuthenticationFailure("Authentication tag mismatch") from e
    except (ValueError, TypeError) as e:
        raise AuthenticationFailure(f"AES-GCM decryption failed: {e}") from e
