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
Key derivation.

A conversation key is the SHA-256 digest of the canonical context string. No
salt and no secret material are involved, so the key is only as secret as the
conversation id and participant addresses.
"""

import hashlib

KEY_SIZE = 32


def derive_key(canonical: str) -> bytes:
    """
    Derives a 256-bit AES key from a canonical context string.

    Args:
        canonical: Output of ``canonical_context``.

    Returns:
        32 key bytes. Identical input always yields identical output.
    """
    return hashlib.sha256(canonical.encode("utf-8")).digest()
