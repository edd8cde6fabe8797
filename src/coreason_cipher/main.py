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
Main entry point for CoReason Cipher.

This module exposes the `MessageCipher` class, which derives a conversation key
from the chat context, seals message text with AES-256-GCM and opens envelopes
again. `MessageCipherAsync` offers the same operations to async callers, and the
module-level functions back the ``coreason-cipher`` command line.
"""

import argparse
import asyncio
import time
from datetime import datetime, timezone
from types import TracebackType
from typing import Callable, List, Optional, Sequence, Type

from coreason_cipher import cipher as aead
from coreason_cipher.config import settings
from coreason_cipher.context import canonicalize
from coreason_cipher.envelope import decode_envelope, encode_envelope, looks_encrypted
from coreason_cipher.exceptions import CryptoOperationError, EncryptionError, InputError
from coreason_cipher.key_cache import KeyCache
from coreason_cipher.messages import MessageSealer
from coreason_cipher.models import (
    ConversationContext,
    DecryptionResult,
    EncryptionMeta,
    EncryptionResult,
    OpenedMessage,
    SealedMessage,
    StoredMessage,
)
from coreason_cipher.utils.logger import logger
from coreason_cipher.validation import generate_conversation_id, validate_participants


class MessageCipher:
    """
    The main interface for message confidentiality.
    Coordinates the context normalizer, KeyCache, AES-GCM cipher and envelope codec.
    """

    def __init__(
        self,
        key_cache: Optional[KeyCache] = None,
        context_prefix: Optional[str] = None,
        method_tag: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initializes the MessageCipher.

        Args:
            key_cache: Cache of derived keys. A new KeyCache is created if None.
            context_prefix: Prefix of the canonical context string. Defaults to settings.
            method_tag: Method recorded in encryption metadata. Defaults to settings.
            clock: Wall-clock source in seconds, used for timestamps and conversation ids.
        """
        self.key_cache = key_cache if key_cache is not None else KeyCache()
        self.context_prefix = context_prefix if context_prefix is not None else settings.context_prefix
        self.method_tag = method_tag if method_tag is not None else settings.method_tag
        self._clock = clock
        self.sealer = MessageSealer(self)

    def _key_for(self, conversation_id: str, participants: Sequence[str]) -> bytes:
        context = ConversationContext(conversation_id=conversation_id, participants=list(participants))
        canonical = canonicalize(context, self.context_prefix)
        return self.key_cache.get_or_derive(canonical)

    def encrypt(self, content: str, conversation_id: str, participants: Sequence[str]) -> EncryptionResult:
        """
        Encrypts a message for storage.

        Args:
            content: The plaintext message.
            conversation_id: Identifier of the chat.
            participants: Account addresses of the chat members, in any order.

        Returns:
            The envelope text plus encryption metadata.

        Raises:
            InputError: If content, conversation_id or participants is empty.
            CryptoOperationError: If the cipher fails (Fail Closed).
        """
        if not content or not conversation_id or not participants:
            raise InputError("Missing required parameters for encryption")

        try:
            key = self._key_for(conversation_id, participants)
            nonce, ciphertext = aead.seal(content.encode("utf-8"), key)
            envelope = encode_envelope(nonce, ciphertext)
        except EncryptionError as e:
            logger.error(f"Message encryption failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Message encryption failed: {e}")
            raise CryptoOperationError(f"Encryption failed: {e}") from e

        logger.debug(f"Encrypted message of {len(content)} chars for {len(participants)} participants.")
        meta = EncryptionMeta(
            method=self.method_tag,
            timestamp=datetime.fromtimestamp(self._clock(), tz=timezone.utc),
        )
        return EncryptionResult(encrypted_content=envelope, encryption_meta=meta)

    def decrypt(self, envelope_text: str, conversation_id: str, participants: Sequence[str]) -> DecryptionResult:
        """
        Decrypts a message envelope.

        Never raises. A wrong key, a tampered or truncated envelope and missing
        arguments all produce a result with ``success=False`` and the fixed
        failure text as content.

        Args:
            envelope_text: The envelope produced by `encrypt`.
            conversation_id: Identifier of the chat.
            participants: Account addresses of the chat members, in any order.

        Returns:
            The decryption result.
        """
        try:
            if not envelope_text or not conversation_id or not participants:
                raise InputError("Missing required parameters for decryption")

            key = self._key_for(conversation_id, participants)
            nonce, ciphertext = decode_envelope(envelope_text)
            plaintext = aead.unseal(nonce, ciphertext, key).decode("utf-8")
        except Exception as e:
            logger.warning(f"Message decryption failed: {type(e).__name__}: {e}")
            return DecryptionResult.failed(str(e) or type(e).__name__)

        return DecryptionResult(decrypted_content=plaintext, success=True)

    @staticmethod
    def looks_encrypted(text: str) -> bool:
        """Heuristic check for envelope-shaped text. See `envelope.looks_encrypted`."""
        return looks_encrypted(text)

    @staticmethod
    def validate_participants(participants: Sequence[str]) -> bool:
        """True if every participant is a well-formed account address."""
        return validate_participants(participants)

    def generate_conversation_id(self, address_a: str, address_b: str) -> str:
        """Builds a ``chat-{hash}-{millis}`` id for two participants."""
        return generate_conversation_id(address_a, address_b, clock=self._clock)

    def seal_message(
        self,
        content: str,
        conversation_id: str,
        participants: Sequence[str],
        encrypt: bool = True,
    ) -> SealedMessage:
        """Prepares message content and metadata for storage."""
        return self.sealer.seal(content, conversation_id, participants, encrypt)

    def open_message(self, message: StoredMessage, participants: Sequence[str]) -> OpenedMessage:
        """Recovers the readable content of a stored message."""
        return self.sealer.open(message, participants)


class MessageCipherAsync:
    """
    Async interface to MessageCipher.

    Encryption and decryption run in a worker thread so the event loop is not
    blocked. Use as an async context manager; the key cache is cleared on exit.
    """

    def __init__(
        self,
        key_cache: Optional[KeyCache] = None,
        context_prefix: Optional[str] = None,
        method_tag: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._cipher = MessageCipher(key_cache, context_prefix, method_tag, clock)

    @property
    def cipher(self) -> MessageCipher:
        return self._cipher

    @property
    def key_cache(self) -> KeyCache:
        return self._cipher.key_cache

    async def __aenter__(self) -> "MessageCipherAsync":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self._cipher.key_cache.clear()

    async def encrypt(self, content: str, conversation_id: str, participants: Sequence[str]) -> EncryptionResult:
        """Async version of `MessageCipher.encrypt`."""
        return await asyncio.to_thread(self._cipher.encrypt, content, conversation_id, participants)

    async def decrypt(self, envelope_text: str, conversation_id: str, participants: Sequence[str]) -> DecryptionResult:
        """Async version of `MessageCipher.decrypt`. Never raises."""
        return await asyncio.to_thread(self._cipher.decrypt, envelope_text, conversation_id, participants)

    async def seal_message(
        self,
        content: str,
        conversation_id: str,
        participants: Sequence[str],
        encrypt: bool = True,
    ) -> SealedMessage:
        return await asyncio.to_thread(self._cipher.seal_message, content, conversation_id, participants, encrypt)

    async def open_message(self, message: StoredMessage, participants: Sequence[str]) -> OpenedMessage:
        return await asyncio.to_thread(self._cipher.open_message, message, participants)

    def looks_encrypted(self, text: str) -> bool:
        return self._cipher.looks_encrypted(text)

    def validate_participants(self, participants: Sequence[str]) -> bool:
        return self._cipher.validate_participants(participants)

    def generate_conversation_id(self, address_a: str, address_b: str) -> str:
        return self._cipher.generate_conversation_id(address_a, address_b)


# --- Command line ---


def encrypt(content: str, conversation_id: str, participants: List[str]) -> None:
    result = MessageCipher().encrypt(content, conversation_id, participants)
    print(f"Encrypted Content: {result.encrypted_content}")
    print(f"Method: {result.encryption_meta.method}")


def decrypt(envelope_text: str, conversation_id: str, participants: List[str]) -> None:
    result = MessageCipher().decrypt(envelope_text, conversation_id, participants)
    print(f"Decrypted Content: {result.decrypted_content}")
    if not result.success:
        print(f"Error: {result.error}")


def check(text: str) -> None:
    print(f"Looks Encrypted: {looks_encrypted(text)}")


def chat_id(address_a: str, address_b: str) -> None:
    print(f"Conversation ID: {generate_conversation_id(address_a, address_b)}")


def validate(participants: List[str]) -> None:
    print(f"Participants Valid: {validate_participants(participants)}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coreason-cipher", description="Encrypt and decrypt chat messages.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_encrypt = subparsers.add_parser("encrypt", help="Encrypt a message")
    p_encrypt.add_argument("content")
    p_encrypt.add_argument("--conversation-id", required=True)
    p_encrypt.add_argument("--participant", dest="participants", action="append", required=True)

    p_decrypt = subparsers.add_parser("decrypt", help="Decrypt an envelope")
    p_decrypt.add_argument("envelope")
    p_decrypt.add_argument("--conversation-id", required=True)
    p_decrypt.add_argument("--participant", dest="participants", action="append", required=True)

    p_check = subparsers.add_parser("check", help="Check whether text looks encrypted")
    p_check.add_argument("text")

    p_chat_id = subparsers.add_parser("chat-id", help="Generate a conversation id for two addresses")
    p_chat_id.add_argument("address_a")
    p_chat_id.add_argument("address_b")

    p_validate = subparsers.add_parser("validate", help="Validate participant addresses")
    p_validate.add_argument("participants", nargs="+")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        if args.command == "encrypt":
            encrypt(args.content, args.conversation_id, args.participants)
        elif args.command == "decrypt":
            decrypt(args.envelope, args.conversation_id, args.participants)
        elif args.command == "check":
            check(args.text)
        elif args.command == "chat-id":
            chat_id(args.address_a, args.address_b)
        elif args.command == "validate":
            validate(args.participants)
    except EncryptionError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
