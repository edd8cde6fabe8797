from typing import Generator, List
from unittest.mock import MagicMock

import pytest
from loguru import logger

from coreason_cipher.derivation import derive_key
from coreason_cipher.key_cache import KeyCache
from coreason_cipher.main import MessageCipher

# Real ledger public keys (32 bytes once base58-decoded).
ALICE = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
BOB = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
CAROL = "So11111111111111111111111111111111111111112"


@pytest.fixture
def participants() -> List[str]:
    return [ALICE, BOB]


@pytest.fixture
def counting_derive() -> MagicMock:
    # Real derivation, observable through call_count / call_args_list
    return MagicMock(side_effect=derive_key)


@pytest.fixture
def cipher(counting_derive: MagicMock) -> MessageCipher:
    return MessageCipher(key_cache=KeyCache(derive=counting_derive))


@pytest.fixture
def log_sink() -> Generator[List[str], None, None]:
    logs: List[str] = []
    handler_id = logger.add(lambda msg: logs.append(str(msg)), level="DEBUG")
    yield logs
    logger.remove(handler_id)


@pytest.fixture
def outsider() -> str:
    return CAROL
