"""Route matching and flattening for ride quotes."""
import re
from typing import Iterable, List, Literal, Optional

from thriftcart.catalog.models import RideListing, RouteQuote
from thriftcart.search.engine import SortKey, sort_records

LocationKind = Literal["pickup", "destination"]


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.casefold()).strip("-")


def flatten(quote: RouteQuote) -> List[RideListing]:
    """One RideListing row per vehicle option of a quote."""
    rows = []
    for i, option in enumerate(quote.vehicle_options):
        rows.append(
            RideListing(
                identity=f"{_slug(quote.platform)}-{_slug(quote.pickup_location)}-{_slug(quote.destination)}-{i}",
                display_name=option.vehicle_type,
                platform=quote.platform,
                price=option.price,
                duration_text=f"{option.travel_minutes:g} minutes",
                duration_minutes=option.travel_minutes,
                attributes=[option.vehicle_type],
                pickup_location=quote.pickup_location,
                destination=quote.destination,
                distance_km=quote.distance_km,
                vehicle_type=option.vehicle_type,
                travel_minutes=option.travel_minutes,
                pickup_wait_minutes=option.pickup_wait_minutes,
            )
        )
    return rows


def search_routes(
    quotes: Iterable[RouteQuote],
    pickup: str,
    destination: str,
    vehicle_type: Optional[str] = None,
    sort_key: Optional[SortKey | str] = None,
) -> List[RideListing]:
    pickup, destination = pickup.strip().casefold(), destination.strip().casefold()
    if not pickup or not destination:
        return []
    wanted = vehicle_type.strip().casefold() if vehicle_type else ""
    rows: List[RideListing] = []
    for quote in quotes:
        if quote.pickup_location.casefold() != pickup or quote.destination.casefold() != destination:
            continue
        rows.extend(r for r in flatten(quote) if not wanted or r.vehicle_type.casefold() == wanted)
    if sort_key is not None:
        rows = sort_records(rows, sort_key)
    return rows


def location_suggestions(quotes: Iterable[RouteQuote], text: str, kind: LocationKind = "pickup") -> List[str]:
    needle = text.casefold()
    seen: dict[str, None] = {}
    for quote in quotes:
        location = quote.pickup_location if kind == "pickup" else quote.destination
        if needle in location.casefold():
            seen.setdefault(location, None)
    return list(seen)
