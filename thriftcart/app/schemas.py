from typing import Dict, List, Optional

from pydantic import BaseModel, SerializeAsAny

from thriftcart.account.session import Session
from thriftcart.analysis.schemas import AnalysisResult
from thriftcart.catalog.models import DeliveryListing, ListingRecord, RideListing
from thriftcart.search.grouping import ChartPoint


class SignInRequest(BaseModel):
    credential: str


class SessionStatus(BaseModel):
    signed_in: bool
    session: Optional[Session] = None


class SuggestionsResponse(BaseModel):
    suggestions: List[str]


class DeliverySearchResponse(BaseModel):
    items: List[DeliveryListing]
    chart: List[ChartPoint] = []
    platform_links: Dict[str, str] = {}


class RideOption(BaseModel):
    ride: RideListing
    booking_url: str


class RideSearchResponse(BaseModel):
    items: List[RideOption]


class Comparison(BaseModel):
    canonical_key: str
    members: List[SerializeAsAny[ListingRecord]]
    best_platform: Optional[str] = None
    best_price: Optional[float] = None


class EcommerceSearchResponse(BaseModel):
    groups: List[Comparison]
    chart: List[ChartPoint] = []


class AnalysisResponse(BaseModel):
    identity: Optional[str] = None
    is_open: bool = False
    stale: bool = False
    result: Optional[AnalysisResult] = None


class QuantityRequest(BaseModel):
    quantity: int


class AssistantRequest(BaseModel):
    query: str


class AssistantResponse(BaseModel):
    answer: str
