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
Data models for CoReason Cipher.

This module defines the Pydantic models exchanged with callers: the
conversation context used for key derivation, the results of encryption and
decryption, and the stored-message shapes used when sealing and opening chat
messages.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DECRYPTION_FAILED = "[Decryption Failed]"
ENCRYPTED_PLACEHOLDER = "[Encrypted Message]"


class ConversationContext(BaseModel):
    """
    The public context a conversation key is derived from.

    Attributes:
        conversation_id: Identifier of the chat.
        participants: Account addresses of the chat members, in any order.
    """

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    participants: List[str]

    @property
    def sorted_participants(self) -> List[str]:
        """Participants in lexicographic order, independent of call-site ordering."""
        return sorted(self.participants)


class EncryptionMeta(BaseModel):
    """
    Metadata stored alongside an encrypted message.

    Attributes:
        encrypted: Always True for output of the cipher.
        method: Tag naming the scheme that produced the envelope.
        timestamp: When the envelope was produced (UTC).
    """

    model_config = ConfigDict(frozen=True)

    encrypted: bool = True
    method: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EncryptionResult(BaseModel):
    """Outcome of a successful encryption call."""

    model_config = ConfigDict(frozen=True)

    encrypted_content: str
    encryption_meta: EncryptionMeta


class DecryptionResult(BaseModel):
    """
    Outcome of a decryption call. Failure is a value, never an exception.

    Attributes:
        decrypted_content: The plaintext, or DECRYPTION_FAILED on failure.
        success: Whether the envelope authenticated and decoded.
        error: Failure description when success is False.
    """

    model_config = ConfigDict(frozen=True)

    decrypted_content: str
    success: bool
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "DecryptionResult":
        return cls(decrypted_content=DECRYPTION_FAILED, success=False, error=error)


class StoredMessage(BaseModel):
    """A message as it comes back from storage or the realtime channel."""

    id: Optional[str] = None
    conversation_id: str
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def flagged_encrypted(self) -> bool:
        return bool(self.metadata.get("encrypted"))


class SealedMessage(BaseModel):
    """Outgoing message content plus the metadata to store with it."""

    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class OpenedMessage(BaseModel):
    """
    A stored message after decryption was attempted.

    Attributes:
        content: Plaintext, or ENCRYPTED_PLACEHOLDER if the envelope could not be opened.
        encrypted: Whether the stored content was treated as an envelope.
    """

    content: str
    encrypted: bool
