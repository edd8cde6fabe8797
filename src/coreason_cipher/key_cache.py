# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_cipher

"""Bounded cache of derived conversation keys.

The KeyCache keeps at most ``max_size`` keys in memory and evicts the entry
that was inserted first when a new key would exceed that bound. Eviction is
strictly by insertion order: reading a key does not refresh its position.
"""

import threading
from typing import Callable, MutableMapping, Optional

from cachetools import FIFOCache

from coreason_cipher.config import settings
from coreason_cipher.derivation import derive_key
from coreason_cipher.utils.logger import logger


class KeyCache:
    """Maps canonical context strings to derived keys.

    One instance is owned by each MessageCipher. All access goes through
    ``get_or_derive``, which holds a lock across the lookup, the derivation and
    the insert so that concurrent callers never derive the same key twice.
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        derive: Callable[[str], bytes] = derive_key,
    ) -> None:
        """Initializes the KeyCache.

        Args:
            max_size: Maximum number of keys held. Defaults to the configured key_cache_size (100).
            derive: Function turning a canonical string into a key. Injectable for tests.
        """
        size = settings.key_cache_size if max_size is None else max_size
        if size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = size
        # FIFOCache implements MutableMapping; eviction order is insertion order
        self._storage: MutableMapping[str, bytes] = FIFOCache(maxsize=size)
        self._derive = derive
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    def get_or_derive(self, canonical: str) -> bytes:
        """Returns the key for ``canonical``, deriving and caching it on a miss.

        Args:
            canonical: The canonical context string.

        Returns:
            The derived key bytes.
        """
        with self._lock:
            key = self._storage.get(canonical)
            if key is not None:
                return key

            key = self._derive(canonical)
            if len(self._storage) >= self.max_size:
                logger.debug(f"Key cache full ({self.max_size} entries). Evicting oldest key.")
            # FIFOCache evicts the first inserted entry before adding a new one.
            self._storage[canonical] = key
            return key

    def clear(self) -> None:
        """Drops every cached key."""
        with self._lock:
            self._storage.clear()

    def __contains__(self, canonical: object) -> bool:
        with self._lock:
            return canonical in self._storage

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)
