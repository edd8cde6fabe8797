# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_cipher

"""Exception hierarchy for the cipher subsystem."""


class CipherError(Exception):
    """Base class for all cipher errors."""


class EncryptionError(CipherError):
    """Raised when a message cannot be encrypted. The caller has no ciphertext to send."""


class InputError(EncryptionError, ValueError):
    """Raised when a required argument is missing or empty, before any cryptographic work."""


class CryptoOperationError(EncryptionError):
    """Raised when the underlying primitive fails while encrypting."""


class AuthenticationFailure(CipherError):
    """
    Raised when an envelope cannot be opened.

    Covers a wrong key, a tampered or truncated envelope and malformed base64.
    The orchestrator converts it into a failed DecryptionResult.
    """
