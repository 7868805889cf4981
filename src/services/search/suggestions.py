"""Templated query completions for the search box."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from src.config import settings
from src.services.search.debounce import Debouncer

MAX_SUGGESTIONS = 6


def generate_suggestions(
    partial_query: str,
    *,
    min_length: int | None = None,
    limit: int | None = None,
    location: str | None = None,
    price_ceiling: str | None = None,
) -> list[str]:
    """Derive completions by appending common qualifiers to the raw input.

    This is a heuristic affordance, not a catalog lookup: picking a
    suggestion just fills the query field and re-runs filtering.
    """

    query = (partial_query or "").strip()
    min_length = settings.SUGGESTION_MIN_QUERY_LENGTH if min_length is None else min_length
    if len(query) < max(min_length, 1):
        return []

    location = location or settings.SUGGESTION_LOCATION
    price_ceiling = price_ceiling or settings.SUGGESTION_PRICE_CEILING
    candidates = [
        f"{query} used",
        f"{query} new",
        f"{query} automatic",
        f"{query} in {location}",
        f"{query} under {price_ceiling}",
        f"{query} latest model",
    ]
    limit = settings.SUGGESTION_LIMIT if limit is None else limit
    return candidates[: max(0, min(limit, MAX_SUGGESTIONS))]


class SuggestionService:
    """Suggestion generator gated behind a debounce window."""

    def __init__(
        self,
        *,
        wait_seconds: float | None = None,
        on_result: Callable[[tuple[str, list[str]]], Awaitable[None]] | None = None,
        generator: Callable[[str], list[str]] = generate_suggestions,
    ) -> None:
        self._generator = generator
        wait = settings.suggestion_debounce_seconds if wait_seconds is None else wait_seconds
        self._debouncer: Debouncer[str, tuple[str, list[str]]] = Debouncer(
            self._compute, wait, on_result=on_result
        )

    def suggest(self, partial_query: str) -> list[str]:
        return self._generator(partial_query)

    def schedule(self, partial_query: str) -> asyncio.Task[tuple[str, list[str]]]:
        """Debounced variant of ``suggest``; supersedes any pending keystroke."""

        return self._debouncer.submit(partial_query)

    def cancel(self) -> None:
        self._debouncer.cancel()

    async def close(self) -> None:
        await self._debouncer.close()

    def _compute(self, partial_query: str) -> tuple[str, list[str]]:
        return partial_query, self._generator(partial_query)
