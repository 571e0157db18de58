"""
Bounded-concurrency batch translation.

Requests are split into consecutive groups of ``concurrency`` items. All
requests of a group run concurrently and the whole group settles before
the next one starts, so at most ``concurrency`` calls are ever in
flight. A failed call does not abort anything: its slot in the output is
filled with ``TranslationResponse.placeholder()`` and the failure is
logged.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence, TypeVar

from loctrans.models import TranslationRequest, TranslationResponse
from loctrans.translate.base import Translator

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split ``items`` into consecutive lists of at most ``size`` items."""
    if size < 1:
        raise ValueError(f"Chunk size must be a positive integer, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class BatchDispatcher:
    """Run translation requests through a translator, group by group.
    
    Attributes:
        translator: Backend used for every request
        concurrency: Group size, i.e. the maximum number of calls in flight
        failures: Number of placeholders produced since creation
    """
    
    def __init__(self, translator: Translator, concurrency: int = 3):
        if not isinstance(concurrency, int) or concurrency < 1:
            raise ValueError(f"Concurrency limit must be a positive integer, got {concurrency!r}")
        self.translator = translator
        self.concurrency = concurrency
        self.failures = 0
    
    async def translate_batch(
        self,
        requests: Sequence[TranslationRequest],
    ) -> list[TranslationResponse]:
        """Translate all requests; ``output[i]`` answers ``requests[i]``."""
        results: list[TranslationResponse] = []
        groups = chunked(requests, self.concurrency)
        
        for number, group in enumerate(groups, start=1):
            logger.debug("Dispatching group %d/%d (%d requests)", number, len(groups), len(group))
            outcomes = await asyncio.gather(
                *(self.translator.translate(request) for request in group),
                return_exceptions=True,
            )
            for request, outcome in zip(group, outcomes):
                results.append(self._settle(request, outcome))
        
        return results
    
    def _settle(self, request: TranslationRequest, outcome) -> TranslationResponse:
        if isinstance(outcome, Exception):
            self.failures += 1
            logger.warning(
                "Translation failed (%s -> %s, %s): %s",
                request.source_lang, request.target_lang, request.context or request.text[:40], outcome,
            )
            return TranslationResponse.placeholder(model=self.translator.model)
        if isinstance(outcome, BaseException):
            # cancellation and interpreter exits are not per-request failures
            raise outcome
        return outcome
