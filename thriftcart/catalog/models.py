"""Tagged record types produced by the catalog loader."""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Domain = Literal["delivery", "ride", "ecommerce"]


class ListingRecord(BaseModel):
    """A single platform's offer for one item or service."""

    model_config = ConfigDict(frozen=True)

    domain: Domain
    identity: str
    display_name: str
    platform: str
    price: float = Field(..., ge=0)
    duration_text: str = ""
    duration_minutes: Optional[float] = None
    rating: float = Field(0.0, ge=0, le=5)
    attributes: List[str] = []
    available: bool = True


class DeliveryListing(ListingRecord):
    domain: Literal["delivery"] = "delivery"
    category: str = ""
    weight: str = ""


class RideListing(ListingRecord):
    domain: Literal["ride"] = "ride"
    pickup_location: str
    destination: str
    distance_km: float = Field(..., ge=0)
    vehicle_type: str
    travel_minutes: float = Field(..., ge=0)
    pickup_wait_minutes: float = Field(..., ge=0)


class EcommerceListing(ListingRecord):
    domain: Literal["ecommerce"] = "ecommerce"
    brand_name: str = ""
    model_number: str = ""
    description: str = ""
    category: str = ""
    sub_category: str = ""
    material: str = ""
    original_price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0, le=100)
    review_count: Optional[int] = Field(None, ge=0)
    url: str = ""
    image_url: Optional[str] = None


class VehicleOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_type: str
    price: float = Field(..., ge=0)
    travel_minutes: float = Field(..., ge=0)
    pickup_wait_minutes: float = Field(..., ge=0)


class RouteQuote(BaseModel):
    """One platform's quote for one pickup/destination pair."""

    model_config = ConfigDict(frozen=True)

    platform: str
    pickup_location: str
    destination: str
    distance_km: float = Field(..., ge=0)
    vehicle_options: List[VehicleOption] = []
