"""Base interface for key-value adapters."""

import logging
import random
from abc import ABC, abstractmethod
from enum import Enum
from functools import partial
from typing import Any, Optional, Sequence, Union

from kvalue.core.cache import DEFAULT_CACHE_EXPIRE_MS, MISS, MemoCache
from kvalue.core.config import CacheOptions
from kvalue.core.expiration import compute_lifetime, is_expired
from kvalue.core.limiter import apply_limits, limiter_options
from kvalue.core.merge import merge as apply_merge
from kvalue.core.models import EncoderOptions, Envelope, KeyPresence, KeyValue
from kvalue.core.validation import is_many, validate_key

logger = logging.getLogger(__name__)

Key = Union[str, Sequence[str]]


class AdapterState(str, Enum):
    """Adapter lifecycle."""

    UNCONFIGURED = "unconfigured"
    READY = "ready"
    CLOSED = "closed"


class Adapter(ABC):
    """Abstract base class for key-value adapters.

    The base class implements the public contract (validation, memo cache,
    merge, lifetimes, limiter, and the single/multi-key return shapes) on top
    of a handful of storage primitives that each backend provides:

    - ``_fetch``: load envelopes for a list of keys
    - ``_persist``: write envelopes for a batch of keys atomically
    - ``_remove`` / ``_remove_all``: delete rows
    - ``_list_keys``: list every stored key

    A single key returns a bare value (or bool); a list or tuple of keys
    returns a list of ``KeyValue`` (or ``KeyPresence``) in input order.

    Example:
        >>> async with MemoryAdapter() as kv:
        ...     await kv.set("greeting", {"text": "hello"}, lifetime=60000)
        ...     await kv.get("greeting")
        {'text': 'hello'}
    """

    def __init__(
        self,
        cache: bool = False,
        cache_expire: int = DEFAULT_CACHE_EXPIRE_MS,
        namespace: str = "kvalue",
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize adapter state.

        Args:
            cache: Enable the memo cache for every ``get``
            cache_expire: Memo cache entry lifetime in milliseconds
            namespace: Name used in log lines and error messages
            rng: Random source for randomized listings
        """
        self.cache_options = CacheOptions(cache=cache, cache_expire=cache_expire)
        self.memcache = MemoCache()
        self.namespace = namespace
        self.state = AdapterState.UNCONFIGURED
        self._rng = rng

    # -- lifecycle ---------------------------------------------------------

    @abstractmethod
    async def configure(self) -> None:
        """Prepare the backend. Safe to call more than once."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
        pass

    async def health_check(self) -> bool:
        """Check if the adapter is configured and usable."""
        return self.state is AdapterState.READY

    async def __aenter__(self) -> "Adapter":
        await self.configure()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def __iter__(self):
        raise TypeError(
            f"{type(self).__name__} is not iterable; use `await adapter.entries()` "
            "or `await adapter.keys()` with `get()` to walk stored values"
        )

    # -- storage primitives ------------------------------------------------

    @property
    @abstractmethod
    def encoder(self) -> EncoderOptions:
        """Encoding descriptor attached to new envelopes."""
        pass

    @abstractmethod
    async def _fetch(self, keys: list[str]) -> dict[str, Optional[Envelope]]:
        pass

    @abstractmethod
    async def _persist(self, envelopes: dict[str, Envelope]) -> None:
        pass

    @abstractmethod
    async def _remove(self, keys: list[str]) -> None:
        pass

    @abstractmethod
    async def _remove_all(self) -> None:
        pass

    @abstractmethod
    async def _list_keys(self) -> list[str]:
        pass

    # -- helpers -----------------------------------------------------------

    def _make(self, value: Any, lifetime: Any) -> Envelope:
        return Envelope(ctx=value, lifetime=lifetime, encoder=self.encoder)

    async def _expire(self, key: str) -> None:
        """Lazily delete an expired key; failures are logged, not raised."""
        logger.debug("Key '%s' expired in %s, deleting", key, self.namespace)
        self.memcache.delete(key)
        try:
            await self._remove([key])
        except Exception as e:
            logger.warning("Failed to delete expired key '%s' in %s: %s", key, self.namespace, e)

    async def _resolve(
        self,
        keys: list[str],
        default: Any,
        use_cache: bool,
        cache_expire: int,
    ) -> dict[str, Any]:
        results: dict[str, Any] = {}
        pending: list[str] = []

        for key in dict.fromkeys(keys):
            if use_cache:
                cached = self.memcache.get(key)
                if cached is not MISS:
                    logger.debug("Cache hit for '%s' in %s", key, self.namespace)
                    results[key] = cached
                    continue
                logger.debug("Cache miss for '%s' in %s", key, self.namespace)
            pending.append(key)

        if not pending:
            return results

        envelopes = await self._fetch(pending)
        for key in pending:
            envelope = envelopes.get(key)
            if envelope is None:
                results[key] = default
                continue
            if is_expired(envelope):
                await self._expire(key)
                results[key] = default
                continue
            if use_cache:
                self.memcache.set(key, envelope.ctx, cache_expire)
            results[key] = envelope.ctx

        return results

    # -- public contract ---------------------------------------------------

    async def get(
        self,
        key: Key,
        default: Any = None,
        cache: Optional[bool] = None,
        cache_expire: Optional[int] = None,
    ) -> Any:
        """Get the value stored at a key or list of keys.

        Args:
            key: A key, or a list/tuple of keys
            default: Returned for missing or expired keys
            cache: Use the memo cache for this call (defaults to the
                adapter setting; ``False`` always reads the backend)
            cache_expire: Memo cache lifetime in milliseconds for entries
                populated by this call

        Returns:
            The value for a single key, or a list of ``KeyValue`` in input
            order for several keys

        Raises:
            ValidationError: If the key is malformed
        """
        validate_key(key)
        use_cache = self.cache_options.cache if cache is None else cache
        ttl = self.cache_options.cache_expire if cache_expire is None else cache_expire

        if is_many(key):
            resolved = await self._resolve(list(key), default, use_cache, ttl)
            return [KeyValue(key=k, value=resolved[k]) for k in key]

        resolved = await self._resolve([key], default, use_cache, ttl)
        return resolved[key]

    async def set(
        self,
        key: Key,
        value: Any,
        lifetime: Optional[int | float] = None,
        merge: bool = False,
    ) -> None:
        """Store a value at a key or list of keys.

        Args:
            key: A key, or a list/tuple of keys that all receive ``value``
            value: The value to store
            lifetime: Milliseconds until the entry expires (None = never)
            merge: Recursively merge a mapping ``value`` into the stored
                mapping of each key

        Raises:
            ValidationError: If the key or lifetime is malformed
        """
        validate_key(key)
        expiry = compute_lifetime(lifetime)
        keys = list(dict.fromkeys(key)) if is_many(key) else [key]

        envelopes: dict[str, Envelope] = {}
        for k in keys:
            merged = await apply_merge(merge, partial(self.get, k, cache=False), value)
            envelopes[k] = self._make(merged, expiry)

        await self._persist(envelopes)
        for k in keys:
            self.memcache.delete(k)

    async def has(self, key: Key) -> Union[bool, list[KeyPresence]]:
        """Check whether a key or list of keys holds a live value.

        Expired entries count as absent and are deleted.

        Raises:
            ValidationError: If the key is malformed
        """
        validate_key(key)
        keys = list(dict.fromkeys(key)) if is_many(key) else [key]

        envelopes = await self._fetch(keys)
        present: dict[str, bool] = {}
        for k in keys:
            envelope = envelopes.get(k)
            if envelope is not None and is_expired(envelope):
                await self._expire(k)
                envelope = None
            present[k] = envelope is not None

        if is_many(key):
            return [KeyPresence(key=k, has=present[k]) for k in key]
        return present[key]

    async def delete(self, key: Key) -> None:
        """Delete a key or list of keys. Deleting a missing key is a no-op.

        Raises:
            ValidationError: If the key is malformed
        """
        validate_key(key)
        keys = list(dict.fromkeys(key)) if is_many(key) else [key]
        await self._remove(keys)
        for k in keys:
            self.memcache.delete(k)

    async def clear(self) -> None:
        """Delete every entry and empty the memo cache."""
        await self._remove_all()
        self.memcache.clear()

    async def keys(self, limit: Optional[int] = None, randomize: bool = False) -> list[str]:
        """List stored keys.

        Args:
            limit: Maximum number of keys (0 returns none, None returns all)
            randomize: Uniformly shuffle every key before applying ``limit``

        Returns:
            Keys in backend order unless randomized
        """
        options = limiter_options(limit, randomize)
        return apply_limits(await self._list_keys(), options, self._rng)

    async def entries(
        self, limit: Optional[int] = None, randomize: bool = False
    ) -> list[tuple[str, Any]]:
        """List ``(key, value)`` pairs, limited like ``keys()``."""
        keys = await self.keys(limit=limit, randomize=randomize)
        resolved = await self._resolve(
            keys, None, self.cache_options.cache, self.cache_options.cache_expire
        )
        return [(k, resolved[k]) for k in keys]

    async def values(self, limit: Optional[int] = None, randomize: bool = False) -> list[Any]:
        """List stored values, limited like ``keys()``."""
        return [value for _, value in await self.entries(limit=limit, randomize=randomize)]
