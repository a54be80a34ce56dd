"""
Per-record analysis: live chat-completion call with a heuristic offline path.

``AnalysisAdapter.analyze`` never raises for backend problems. Network errors,
rate limits that survive retries, malformed JSON and a missing credential all
resolve to ``fallback_analysis()``; only task cancellation propagates.
"""
import json
import logging
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from langchain_core.prompts import ChatPromptTemplate

from thriftcart.analysis.heuristics import heuristic_analysis
from thriftcart.analysis.schemas import AnalysisResult, fallback_analysis, normalize_analysis
from thriftcart.app.settings import settings
from thriftcart.catalog.models import DeliveryListing, EcommerceListing, ListingRecord, RideListing
from thriftcart.errors import AnalysisError
from thriftcart.prompts.analysis_prompt import (
    ANALYSIS_SYSTEM,
    ANALYSIS_USER_TEMPLATE,
    DEFAULT_RUBRICS,
    DOMAIN_LABELS,
)
from thriftcart.tools.llm import ainvoke_with_retry, build_chat_llm

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


class AnalysisState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    DEGRADED = "degraded"


class AnalysisRequest:
    """One analysis invocation: idle -> requesting -> succeeded | degraded."""

    def __init__(self, record: ListingRecord, domain_hint: Optional[str] = None):
        self.record = record
        self.domain = domain_hint or record.domain
        self.state = AnalysisState.IDLE
        self.result: Optional[AnalysisResult] = None

    @property
    def key(self) -> str:
        return self.record.identity

    def finish(self, result: AnalysisResult, degraded: bool = False) -> AnalysisResult:
        self.result = result
        self.state = AnalysisState.DEGRADED if degraded else AnalysisState.SUCCEEDED
        return result


def format_record(record: ListingRecord) -> str:
    lines = [
        f"Name: {record.display_name}",
        f"Platform: {record.platform}",
        f"Price: {record.price:g} INR",
        f"Rating: {record.rating:g}/5" if record.rating else "Rating: N/A",
        f"Available: {'yes' if record.available else 'no'}",
    ]
    if isinstance(record, DeliveryListing):
        lines += [
            f"Delivery Time: {record.duration_text or 'N/A'}",
            f"Category: {record.category or 'N/A'}",
            f"Features: {', '.join(record.attributes) or 'N/A'}",
        ]
    elif isinstance(record, RideListing):
        lines += [
            f"Vehicle Type: {record.vehicle_type}",
            f"Route: {record.pickup_location} -> {record.destination} ({record.distance_km:g} km)",
            f"Travel Time: {record.travel_minutes:g} minutes",
            f"Pickup Wait: {record.pickup_wait_minutes:g} minutes",
        ]
    elif isinstance(record, EcommerceListing):
        lines += [
            f"Brand: {record.brand_name or 'N/A'}",
            f"Model: {record.model_number or 'N/A'}",
            f"Category: {record.category} / {record.sub_category}",
            f"Original Price: {record.original_price:g} INR" if record.original_price else "Original Price: N/A",
            f"Discount: {record.discount:g}%" if record.discount else "Discount: none",
            f"Estimated Delivery: {record.duration_text or 'N/A'}",
            f"Description: {record.description or 'N/A'}",
        ]
    return "\n".join(lines)


def parse_content(content: Any) -> Dict[str, Any]:
    if isinstance(content, dict):
        return content
    if not isinstance(content, str) or not content.strip():
        raise AnalysisError("No content in analysis response")
    try:
        data = json.loads(_FENCE.sub("", content.strip()))
    except json.JSONDecodeError as exc:
        raise AnalysisError(f"Invalid JSON in analysis response: {exc}") from exc
    if not isinstance(data, dict):
        raise AnalysisError("Analysis response is not a JSON object")
    return data


class AnalysisAdapter:
    """
    Produces an AnalysisResult for a single record.

    Backend selection follows ``settings.analysis_backend``: ``heuristic``
    never touches the network, ``llm`` always calls the remote model (and
    degrades when no key is configured), ``auto`` calls the remote model only
    when a key or an explicit ``llm`` is available.
    """

    def __init__(
        self,
        llm=None,
        backend: Optional[str] = None,
        api_key: Optional[str] = None,
        rubrics: Optional[Mapping[str, List[str]]] = None,
    ):
        self._llm = llm
        self.backend = backend or settings.analysis_backend
        self.api_key = api_key if api_key is not None else settings.groq_api_key
        self.rubrics = dict(rubrics or DEFAULT_RUBRICS)
        self.prompt = ChatPromptTemplate.from_messages(
            [("system", ANALYSIS_SYSTEM), ("user", ANALYSIS_USER_TEMPLATE)]
        )

    @property
    def live(self) -> bool:
        if self.backend == "heuristic":
            return False
        if self.backend == "llm":
            return True
        return self._llm is not None or bool(self.api_key)

    def _get_llm(self):
        if self._llm is None:
            if not self.api_key:
                raise AnalysisError("Analysis API key is not configured (set GROQ_API_KEY)")
            self._llm = build_chat_llm(
                temperature=settings.analysis_temperature,
                max_tokens=settings.analysis_max_tokens,
                json_mode=True,
            )
        return self._llm

    def build_messages(self, record: ListingRecord, domain: str) -> list:
        rubric = self.rubrics.get(domain) or self.rubrics.get(record.domain) or []
        label = DOMAIN_LABELS.get(domain, DOMAIN_LABELS[record.domain])
        return self.prompt.format_messages(
            domain_label=label,
            record_block=format_record(record),
            rubric="\n".join(f"{i}. {dim}" for i, dim in enumerate(rubric, 1)),
        )

    async def run(self, request: AnalysisRequest) -> AnalysisResult:
        request.state = AnalysisState.REQUESTING
        try:
            if not self.live:
                return request.finish(heuristic_analysis(request.record))
            llm = self._get_llm()
            messages = self.build_messages(request.record, request.domain)
            logger.info("Requesting %s analysis for %s", request.domain, request.key)
            content = await ainvoke_with_retry(llm, messages)
            result = normalize_analysis(parse_content(content))
        except Exception as exc:  # noqa: BLE001
            logger.error("Analysis failed for %s, returning fallback: %s", request.key, exc)
            return request.finish(fallback_analysis(), degraded=True)
        return request.finish(result)

    async def analyze(self, record: ListingRecord, domain_hint: Optional[str] = None) -> AnalysisResult:
        return await self.run(AnalysisRequest(record, domain_hint))
