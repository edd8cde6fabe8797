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
CoReason Cipher: client-side confidentiality for chat message payloads.

Derives a conversation key from public conversation context, seals message
text with AES-256-GCM and packs the result into a single base64 envelope.
"""

from coreason_cipher.exceptions import (
    AuthenticationFailure,
    CipherError,
    CryptoOperationError,
    EncryptionError,
    InputError,
)
from coreason_cipher.main import MessageCipher, MessageCipherAsync
from coreason_cipher.models import DecryptionResult, EncryptionResult

__all__ = [
    "AuthenticationFailure",
    "CipherError",
    "CryptoOperationError",
    "DecryptionResult",
    "EncryptionError",
    "EncryptionResult",
    "InputError",
    "MessageCipher",
    "MessageCipherAsync",
]
