from typing import List

from coreason_cipher.validation import (
    generate_conversation_id,
    is_valid_address,
    rolling_hash,
    validate_participants,
)


def test_valid_addresses(participants: List[str], outsider: str) -> None:
    assert validate_participants(participants) is True
    assert validate_participants(participants + [outsider]) is True
    assert is_valid_address("11111111111111111111111111111111") is True


def test_empty_or_missing_list() -> None:
    assert validate_participants([]) is False
    assert validate_participants(None) is False


def test_one_malformed_entry_fails(participants: List[str]) -> None:
    assert validate_participants(participants + ["not-a-wallet"]) is False


def test_invalid_addresses() -> None:
    assert is_valid_address("") is False
    assert is_valid_address("0OIl0OIl") is False  # characters outside base58
    assert is_valid_address("abc") is False  # decodes, but not 32 bytes
    assert is_valid_address("1" * 33) is False  # 33 zero bytes
    assert is_valid_address("ñandú") is False
    assert is_valid_address(None) is False


def test_addresses_with_surrounding_whitespace_are_rejected(participants: List[str]) -> None:
    alice, bob = participants
    assert is_valid_address(alice + "\n") is False
    assert is_valid_address(alice + " ") is False
    assert is_valid_address(" " + alice) is False
    assert validate_participants([alice + "\n", bob]) is False
    assert validate_participants([alice, bob]) is True


def test_rolling_hash_known_values() -> None:
    assert rolling_hash("") == 0
    assert rolling_hash("a-b") == 94710
    assert rolling_hash("hello") == 99162322


def test_rolling_hash_wraps_to_signed_32_bit() -> None:
    assert rolling_hash("polygenelubricants") == -(2**31)
    assert -(2**31) <= rolling_hash("x" * 500) < 2**31


def test_generate_conversation_id_format() -> None:
    conversation_id = generate_conversation_id("b", "a", clock=lambda: 1700000000.0)
    assert conversation_id == "chat-94710-1700000000000"


def test_generate_conversation_id_order_independent_hash() -> None:
    forward = generate_conversation_id("addrA", "addrB", clock=lambda: 1.0)
    backward = generate_conversation_id("addrB", "addrA", clock=lambda: 1.0)
    assert forward == backward


def test_generate_conversation_id_uses_absolute_hash() -> None:
    conversation_id = generate_conversation_id("x" * 40, "y" * 40, clock=lambda: 2.5)
    _, hash_part, millis = conversation_id.split("-")
    assert int(hash_part) >= 0
    assert millis == "2500"


def test_generate_conversation_id_varies_with_time() -> None:
    first = generate_conversation_id("a", "b", clock=lambda: 1.0)
    second = generate_conversation_id("a", "b", clock=lambda: 2.0)
    assert first != second
    assert first.rsplit("-", 1)[0] == second.rsplit("-", 1)[0]
