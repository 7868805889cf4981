"""Redis-backed persistence for per-owner selection ledgers."""

from __future__ import annotations

import json
import logging

import redis.asyncio as redis
from pydantic import ValidationError

from src.config import settings
from src.models.selection import SelectionState
from src.services.clients.redis_client import get_redis_client

logger = logging.getLogger(__name__)


class SelectionStore:
    """Wrapper responsible for persisting selection state in Redis."""

    def __init__(self, client: redis.Redis):
        self._client = client
        self._prefix = settings.SELECTION_KEY_PREFIX
        self._ttl = settings.SELECTION_TTL_SECONDS

    def _key(self, owner_id: str) -> str:
        return f"{self._prefix}{owner_id}"

    async def load(self, owner_id: str) -> SelectionState:
        """Return the stored state; absent or malformed data loads as empty."""

        raw = await self._client.get(self._key(owner_id))
        if not raw:
            return SelectionState()
        try:
            return SelectionState.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as exc:
            logger.warning(
                "Discarding malformed selection state for %s: %s",
                owner_id,
                exc,
                extra={"owner_id": owner_id},
            )
            return SelectionState()

    async def save(self, owner_id: str, state: SelectionState) -> None:
        await self._client.set(
            self._key(owner_id),
            state.model_dump_json(),
            ex=self._ttl,
        )

    async def clear(self, owner_id: str) -> None:
        await self._client.delete(self._key(owner_id))


def get_selection_store() -> SelectionStore:
    return SelectionStore(get_redis_client())
