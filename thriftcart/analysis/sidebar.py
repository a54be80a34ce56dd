"""Analysis sidebar state: the selected record, its result and the in-flight requests."""
import asyncio
import logging
from typing import Dict, Optional, Set

from thriftcart.analysis.adapter import AnalysisAdapter, AnalysisRequest
from thriftcart.analysis.schemas import AnalysisResult
from thriftcart.catalog.models import ListingRecord

logger = logging.getLogger(__name__)


class AnalysisSidebar:
    """
    Several analyses may be in flight at once (one per record the user clicked).
    A finished analysis is cached for as long as the sidebar stays open, but it
    only becomes the displayed ``result`` if its record is still the selected
    one. Closing the sidebar cancels everything in flight and drops the cache.
    """

    def __init__(self, adapter: AnalysisAdapter):
        self.adapter = adapter
        self.is_open = False
        self.selected: Optional[ListingRecord] = None
        self.result: Optional[AnalysisResult] = None
        self._cache: Dict[str, AnalysisResult] = {}
        self._tasks: Set[asyncio.Task] = set()
        self._generation = 0

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def open(self, record: ListingRecord, domain_hint: Optional[str] = None) -> Optional[AnalysisResult]:
        """Select ``record`` and analyze it. Returns None if the response went stale or was cancelled."""
        self.is_open = True
        self.selected = record
        cached = self._cache.get(record.identity)
        if cached is not None:
            self.result = cached
            return cached

        self.result = None
        generation = self._generation
        request = AnalysisRequest(record, domain_hint)
        task = asyncio.ensure_future(self.adapter.run(request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info("Analysis for %s cancelled: sidebar closed", record.identity)
                return None
            raise
        if generation != self._generation:
            return None
        return self._commit(request, result)

    def _commit(self, request: AnalysisRequest, result: AnalysisResult) -> Optional[AnalysisResult]:
        self._cache[request.key] = result
        if self.is_open and self.selected is not None and self.selected.identity == request.key:
            self.result = result
            return result
        logger.info("Discarding stale analysis for %s", request.key)
        return None

    def close(self) -> None:
        self._generation += 1
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._cache.clear()
        self.is_open = False
        self.selected = None
        self.result = None
