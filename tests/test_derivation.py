import hashlib

from coreason_cipher.context import canonical_context
from coreason_cipher.derivation import KEY_SIZE, derive_key


def test_derive_key_is_sha256_of_utf8() -> None:
    canonical = "stork-chat-room-1-addrA-addrB"
    assert derive_key(canonical) == hashlib.sha256(canonical.encode("utf-8")).digest()


def test_derive_key_length() -> None:
    assert len(derive_key("anything")) == KEY_SIZE == 32


def test_derive_key_deterministic() -> None:
    canonical = canonical_context("room-1", ["addrA", "addrB"])
    assert derive_key(canonical) == derive_key(canonical)


def test_reversed_participants_yield_same_key() -> None:
    sorted_key = derive_key(canonical_context("room-1", ["addrA", "addrB"]))
    reversed_key = derive_key(canonical_context("room-1", ["addrB", "addrA"]))
    assert sorted_key == reversed_key


def test_distinct_contexts_yield_distinct_keys() -> None:
    keys = {
        derive_key(canonical_context("room-1", ["addrA", "addrB"])),
        derive_key(canonical_context("room-2", ["addrA", "addrB"])),
        derive_key(canonical_context("room-1", ["addrA", "addrC"])),
    }
    assert len(keys) == 3


def test_derive_key_non_ascii() -> None:
    canonical = "stork-chat-sala-ñ-ü"
    assert derive_key(canonical) == hashlib.sha256(canonical.encode("utf-8")).digest()
