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
Sealing outgoing and opening stored chat messages.

This module applies the cipher to whole messages: it attaches the encryption
metadata that is stored next to the content, and decides on the way back
whether stored content needs decrypting at all.
"""

from typing import TYPE_CHECKING, Sequence

from coreason_cipher.envelope import looks_encrypted
from coreason_cipher.models import ENCRYPTED_PLACEHOLDER, OpenedMessage, SealedMessage, StoredMessage
from coreason_cipher.utils.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from coreason_cipher.main import MessageCipher


class MessageSealer:
    """
    Seals and opens chat messages using a MessageCipher.
    """

    def __init__(self, cipher: "MessageCipher") -> None:
        """
        Initializes the MessageSealer.

        Args:
            cipher: The MessageCipher whose key cache is used.
        """
        self.cipher = cipher

    def seal(
        self,
        content: str,
        conversation_id: str,
        participants: Sequence[str],
        encrypt: bool = True,
    ) -> SealedMessage:
        """
        Prepares message content for storage.

        Args:
            content: The plaintext message.
            conversation_id: Identifier of the chat.
            participants: Account addresses of the chat members.
            encrypt: Whether to encrypt. When False the content passes through.

        Returns:
            The content to store and the metadata to store with it.

        Raises:
            EncryptionError: If encryption was requested and failed.
        """
        if not encrypt:
            return SealedMessage(content=content, metadata={"encrypted": False})

        result = self.cipher.encrypt(content, conversation_id, participants)
        return SealedMessage(
            content=result.encrypted_content,
            metadata=result.encryption_meta.model_dump(mode="json"),
        )

    def open(self, message: StoredMessage, participants: Sequence[str]) -> OpenedMessage:
        """
        Recovers the readable content of a stored message.

        Content that is neither flagged as encrypted nor looks like an envelope
        is returned untouched. Anything else is decrypted; if that fails the
        placeholder text is returned instead of the raw envelope.

        Args:
            message: The stored message.
            participants: Account addresses of the chat members.

        Returns:
            The readable content and whether it was treated as encrypted.
        """
        if not message.flagged_encrypted and not looks_encrypted(message.content):
            return OpenedMessage(content=message.content, encrypted=False)

        result = self.cipher.decrypt(message.content, message.conversation_id, participants)
        if result.success:
            return OpenedMessage(content=result.decrypted_content, encrypted=True)

        logger.warning(f"Could not open stored message {message.id}: {result.error}")
        return OpenedMessage(content=ENCRYPTED_PLACEHOLDER, encrypted=True)
