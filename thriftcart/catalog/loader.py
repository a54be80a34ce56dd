"""Load bundled (or remote) JSON catalogs into tagged record types."""
import json
import logging
import pathlib
from typing import Any, Callable, Dict, List, TypeVar

import httpx

from thriftcart.app.settings import settings
from thriftcart.catalog.models import DeliveryListing, EcommerceListing, RouteQuote, VehicleOption
from thriftcart.catalog.parsing import clean_text, parse_amount, parse_minutes
from thriftcart.errors import LoadError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Per-record failures: missing keys, wrong types (including non-object entries),
# unparseable numbers, model validation.
_RECORD_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


def read_dataset(ref: str | pathlib.Path) -> Any:
    """Read a JSON document from a filesystem path or an http(s) URL."""
    ref = str(ref)
    try:
        if ref.startswith(("http://", "https://")):
            with httpx.Client(timeout=settings.request_timeout) as client:
                resp = client.get(ref)
                resp.raise_for_status()
                return resp.json()
        return json.loads(pathlib.Path(ref).read_text(encoding="utf-8"))
    except (OSError, httpx.HTTPError, ValueError) as exc:
        raise LoadError(ref, str(exc)) from exc


def _section(data: Any, key: str, ref: str) -> List[Dict[str, Any]]:
    rows = data.get(key) if isinstance(data, dict) else None
    if not isinstance(rows, list):
        raise LoadError(ref, f"expected a '{key}' array at the top level")
    return rows


def load_delivery(ref: str | pathlib.Path) -> List[DeliveryListing]:
    ref = str(ref)
    data = read_dataset(ref)
    records: List[DeliveryListing] = []
    for platform in _section(data, "platforms", ref):
        try:
            platform_name = clean_text(platform["platform_name"])
            categories = platform.get("categories") or []
            if not isinstance(categories, list):
                raise TypeError("categories is not an array")
        except _RECORD_ERRORS as exc:
            logger.warning("Dropping delivery platform entry in %s: %s", ref, exc)
            continue
        index = 0
        for category in categories:
            products = category.get("products") if isinstance(category, dict) else None
            if not isinstance(products, list):
                logger.warning("Dropping %s category entry in %s: no product array", platform_name, ref)
                continue
            for product in products:
                i = index
                index += 1
                try:
                    if not isinstance(product, dict):
                        raise TypeError(f"expected an object, got {type(product).__name__}")
                    weight = clean_text(product.get("weight"))
                    records.append(
                        DeliveryListing(
                            identity=f"{platform_name}-{i}",
                            display_name=clean_text(product["product_name"]),
                            platform=platform_name,
                            price=parse_amount(product["cost"]),
                            duration_text=clean_text(str(product["delivery_time"])),
                            duration_minutes=parse_minutes(product["delivery_time"]),
                            rating=product.get("rating") or 0.0,
                            attributes=[a for a in [weight, *product.get("offers", [])] if a],
                            available=product.get("in_stock", True),
                            category=clean_text(category.get("name")),
                            weight=weight,
                        )
                    )
                except _RECORD_ERRORS as exc:
                    logger.warning("Dropping delivery record %s-%d from %s: %s", platform_name, i, ref, exc)
    logger.info("Loaded %d delivery listings from %s", len(records), ref)
    return records


def _vehicle(raw: Dict[str, Any]) -> VehicleOption:
    if not isinstance(raw, dict):
        raise TypeError(f"expected an object, got {type(raw).__name__}")
    return VehicleOption(
        vehicle_type=clean_text(raw["vehicle_type"]),
        price=parse_amount(raw["cost_inr"]),
        travel_minutes=parse_minutes(raw["travel_time_minutes"]),
        pickup_wait_minutes=parse_minutes(raw["pickup_time_minutes"]),
    )


def load_routes(ref: str | pathlib.Path) -> List[RouteQuote]:
    ref = str(ref)
    data = read_dataset(ref)
    quotes: List[RouteQuote] = []
    for i, ride in enumerate(_section(data, "rides", ref)):
        try:
            if not isinstance(ride, dict):
                raise TypeError(f"expected an object, got {type(ride).__name__}")
            options = []
            for raw in ride.get("vehicles") or []:
                try:
                    options.append(_vehicle(raw))
                except _RECORD_ERRORS as exc:
                    logger.warning("Dropping vehicle option in ride %d from %s: %s", i, ref, exc)
            quotes.append(
                RouteQuote(
                    platform=clean_text(ride["platform"]),
                    pickup_location=clean_text(ride["pickup_location"]),
                    destination=clean_text(ride["destination"]),
                    distance_km=parse_amount(ride["distance_km"]),
                    vehicle_options=options,
                )
            )
        except _RECORD_ERRORS as exc:
            logger.warning("Dropping ride %d from %s: %s", i, ref, exc)
    logger.info("Loaded %d route quotes from %s", len(quotes), ref)
    return quotes


def load_ecommerce(ref: str | pathlib.Path) -> List[EcommerceListing]:
    ref = str(ref)
    data = read_dataset(ref)
    records: List[EcommerceListing] = []
    for i, item in enumerate(_section(data, "products", ref)):
        try:
            if not isinstance(item, dict):
                raise TypeError(f"expected an object, got {type(item).__name__}")
            platform = clean_text(item["platform"])
            delivery = item.get("estimated_delivery")
            sizes = item.get("sizes_available") or []
            colors = item.get("color_options") or []
            original = item.get("original_price")
            records.append(
                EcommerceListing(
                    identity=f"{platform}-{i}",
                    display_name=clean_text(item["product_name"]),
                    platform=platform,
                    price=parse_amount(item["cost_inr"]),
                    duration_text=clean_text(delivery),
                    duration_minutes=parse_minutes(delivery) if delivery else None,
                    rating=item.get("rating") or 0.0,
                    attributes=[*sizes, *colors],
                    available=item.get("in_stock", True),
                    brand_name=clean_text(item.get("brand_name")),
                    model_number=clean_text(item.get("model_number")),
                    description=clean_text(item.get("description")),
                    category=clean_text(item.get("category")),
                    sub_category=clean_text(item.get("sub_category")),
                    material=clean_text(item.get("material")),
                    original_price=parse_amount(original) if original is not None else None,
                    discount=item.get("discount"),
                    review_count=item.get("review_count"),
                    url=item.get("url", ""),
                    image_url=item.get("image_url"),
                )
            )
        except _RECORD_ERRORS as exc:
            logger.warning("Dropping ecommerce record %d from %s: %s", i, ref, exc)
    logger.info("Loaded %d ecommerce listings from %s", len(records), ref)
    return records


def load_or_empty(loader: Callable[[str], List[T]], ref: str | pathlib.Path) -> List[T]:
    """Run a loader, treating a LoadError as an empty catalog."""
    try:
        return loader(str(ref))
    except LoadError as exc:
        logger.error("%s; continuing with an empty catalog", exc)
        return []
