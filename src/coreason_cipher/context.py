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
Context normalization.

Builds the canonical string a conversation key is derived from. Participants
are sorted first, so both sides of a chat arrive at the same string no matter
who initiates.
"""

from typing import Optional, Sequence

from coreason_cipher.config import settings
from coreason_cipher.models import ConversationContext

SEPARATOR = "-"


def canonical_context(
    conversation_id: str,
    participants: Sequence[str],
    prefix: Optional[str] = None,
) -> str:
    """
    Returns the canonical context string for a conversation.

    Format: ``{prefix}-{conversation_id}-{p1}-{p2}...`` with participants sorted
    lexicographically. Addresses are not validated here.

    Args:
        conversation_id: Identifier of the chat.
        participants: Account addresses, in any order.
        prefix: Fixed prefix. Defaults to the configured context prefix.

    Returns:
        The canonical string used as key derivation input.
    """
    context = ConversationContext(conversation_id=conversation_id, participants=list(participants))
    return canonicalize(context, prefix)


def canonicalize(context: ConversationContext, prefix: Optional[str] = None) -> str:
    """Canonical context string for a ConversationContext."""
    active_prefix = settings.context_prefix if prefix is None else prefix
    members = SEPARATOR.join(context.sorted_participants)
    return f"{active_prefix}{SEPARATOR}{context.conversation_id}{SEPARATOR}{members}"
