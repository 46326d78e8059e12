"""In-process memory adapter."""

import logging
import random
from typing import Optional

from kvalue.adapters.base import Adapter, AdapterState
from kvalue.core.cache import DEFAULT_CACHE_EXPIRE_MS
from kvalue.core.models import EncoderOptions, Envelope

logger = logging.getLogger(__name__)


class MemoryAdapter(Adapter):
    """Adapter keeping envelopes in a dict owned by the instance.

    Envelopes are stored without the codec's armor. Values are deep-copied on
    the way in and out, so mutating a value after ``set`` or after ``get``
    never changes what is stored.

    Example:
        ```python
        kv = MemoryAdapter()
        await kv.configure()

        await kv.set("session:42", {"user": "ada"}, lifetime=30000)
        await kv.set("session:42", {"theme": "dark"}, merge=True)
        await kv.get("session:42")  # {"user": "ada", "theme": "dark"}
        ```
    """

    def __init__(
        self,
        cache: bool = False,
        cache_expire: int = DEFAULT_CACHE_EXPIRE_MS,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(cache=cache, cache_expire=cache_expire, namespace="memory", rng=rng)
        self._entries: dict[str, Envelope] = {}

    @property
    def encoder(self) -> EncoderOptions:
        return EncoderOptions(use=False)

    async def configure(self) -> None:
        if self.state is not AdapterState.READY:
            logger.info("Memory adapter ready")
        self.state = AdapterState.READY

    async def close(self) -> None:
        self.state = AdapterState.CLOSED
        logger.info("Memory adapter closed (%d entries)", len(self._entries))

    async def _fetch(self, keys: list[str]) -> dict[str, Optional[Envelope]]:
        result: dict[str, Optional[Envelope]] = {}
        for key in keys:
            envelope = self._entries.get(key)
            result[key] = envelope.model_copy(deep=True) if envelope is not None else None
        return result

    async def _persist(self, envelopes: dict[str, Envelope]) -> None:
        # copy the whole batch first so a failing copy writes nothing
        copies = {key: envelope.model_copy(deep=True) for key, envelope in envelopes.items()}
        self._entries.update(copies)

    async def _remove(self, keys: list[str]) -> None:
        for key in keys:
            self._entries.pop(key, None)

    async def _remove_all(self) -> None:
        self._entries.clear()

    async def _list_keys(self) -> list[str]:
        return list(self._entries)
