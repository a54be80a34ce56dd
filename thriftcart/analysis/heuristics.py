"""Deterministic offline analysis computed from a record's own numeric fields."""
from typing import Callable, Dict, List

from thriftcart.analysis.schemas import Alternative, AnalysisFeature, AnalysisResult, Sentiment
from thriftcart.catalog.models import DeliveryListing, EcommerceListing, ListingRecord, RideListing
from thriftcart.errors import AnalysisError

UNRATED_DEFAULT = 4.0


def _clamp(score: float) -> float:
    return min(100.0, max(0.0, score))


def _mean(features: List[AnalysisFeature]) -> float:
    return round(sum(f.score for f in features) / len(features), 1)


def _band(value: float, good_below: float, ok_below: float) -> Sentiment:
    if value < good_below:
        return "positive"
    if value < ok_below:
        return "neutral"
    return "negative"


def _rating_feature(rating: float) -> AnalysisFeature:
    sentiment: Sentiment = "positive" if rating >= 4.5 else ("neutral" if rating >= 3.5 else "negative")
    return AnalysisFeature(
        name="Product Rating",
        description=f"Rated {rating:.1f}/5.0",
        sentiment=sentiment,
        score=_clamp(rating / 5 * 100),
        explanation={
            "positive": "Excellent customer feedback",
            "neutral": "Average customer satisfaction",
            "negative": "Below average reviews",
        }[sentiment],
    )


def _availability_feature(available: bool) -> AnalysisFeature:
    return AnalysisFeature(
        name="Availability",
        description="In Stock" if available else "Out of Stock",
        sentiment="positive" if available else "negative",
        score=95.0 if available else 30.0,
        explanation="Ready to ship" if available else "Currently unavailable",
    )


def analyze_ecommerce(record: EcommerceListing) -> AnalysisResult:
    price = record.price
    discount = record.discount or 0.0
    if record.original_price:
        original = record.original_price
    elif discount < 100:
        original = price / (1 - discount / 100)
    else:
        original = price
    good_deal = discount >= 20 or price < original * 0.8
    rating = record.rating or UNRATED_DEFAULT

    if good_deal:
        price_sentiment, price_score, price_note = "positive", 90.0, "Great deal compared to market price"
    elif discount > 0:
        price_sentiment, price_score, price_note = "neutral", 70.0, "Standard pricing"
    else:
        price_sentiment, price_score, price_note = "negative", 40.0, "Could find better deals"

    off = f" ({discount:g}% off)" if discount > 0 else ""
    features = [
        AnalysisFeature(
            name="Price Value",
            description=f"Current price: ₹{price:,.0f}{off}",
            sentiment=price_sentiment,
            score=price_score,
            explanation=price_note,
        ),
        _rating_feature(rating),
        _availability_feature(record.available),
    ]

    if good_deal and rating >= 4.0:
        overall: Sentiment = "positive"
    elif rating >= 3.0:
        overall = "neutral"
    else:
        overall = "negative"
    reviews = "excellent" if rating >= 4.0 else ("decent" if rating >= 3.0 else "mixed")

    return AnalysisResult(
        overall_sentiment=overall,
        overall_score=_mean(features),
        features=features,
        summary=(
            f"{record.display_name} is "
            f"{'a good deal at the current price' if good_deal else 'priced at market rate'} "
            f"with {reviews} customer reviews."
        ),
        recommendation="Recommended" if good_deal else "Consider alternatives",
        pros=[
            "Good discount available" if good_deal else "Competitive pricing",
            "Highly rated by customers" if rating >= 4.0 else "Decent customer feedback",
            "Available for immediate purchase" if record.available else "Check back soon for restock",
        ],
        cons=[
            "Limited stock remaining" if good_deal else "Limited time offers available",
            "Some customers reported issues" if rating < 3.5 else "Check product reviews for details",
        ],
        best_for="Shoppers looking for " + ("a great deal" if good_deal else "this specific product"),
        alternatives=[Alternative(name="Similar Products", reason="Compare with similar items for better value")],
    )


def _travel_time_score(travel: float, distance_km: float) -> float:
    # Expected time between 30 km/h (fastest) and 10 km/h (slowest reasonable)
    distance = distance_km or 1.0
    fastest = max(5, round(distance / 30 * 60))
    slowest = round(distance / 10 * 60)
    if travel <= fastest:
        return 100.0
    if travel >= slowest:
        return 10.0
    return float(round(100 - 90 * (travel - fastest) / (slowest - fastest)))


def analyze_ride(record: RideListing) -> AnalysisResult:
    price = record.price
    travel = record.travel_minutes
    wait = record.pickup_wait_minutes

    price_sentiment = _band(price, 200, 400)
    time_score = _travel_time_score(travel, record.distance_km)
    time_sentiment: Sentiment = "positive" if time_score > 70 else ("neutral" if time_score > 40 else "negative")
    wait_sentiment = _band(wait, 5, 15)

    features = [
        AnalysisFeature(
            name="Price",
            description=f"₹{price:,.0f}",
            sentiment=price_sentiment,
            score=_clamp(100 - price / 10),
            explanation={
                "positive": "Great price for this route",
                "neutral": "Average pricing",
                "negative": "Higher than typical pricing",
            }[price_sentiment],
        ),
        AnalysisFeature(
            name="Travel Time",
            description=f"{travel:g} minutes",
            sentiment=time_sentiment,
            score=_clamp(time_score),
            explanation={
                "positive": "Faster than average for this distance",
                "neutral": "Average travel time",
                "negative": "Longer than typical for this distance",
            }[time_sentiment],
        ),
        AnalysisFeature(
            name="Pickup Time",
            description=f"{wait:g} min wait",
            sentiment=wait_sentiment,
            score=_clamp(100 - wait * 5),
            explanation={
                "positive": "Quick pickup time",
                "neutral": "Average wait time",
                "negative": "Longer than typical wait",
            }[wait_sentiment],
        ),
    ]
    overall_score = _mean(features)
    good = overall_score > 70
    area = record.pickup_location.split(",")[0]

    return AnalysisResult(
        overall_sentiment="positive" if good else ("neutral" if overall_score > 40 else "negative"),
        overall_score=overall_score,
        features=features,
        summary=(
            f"{record.platform}'s {record.vehicle_type} service from {record.pickup_location} to "
            f"{record.destination} is {'a good option' if good else 'available'} with an estimated "
            f"{travel:g} minute travel time."
        ),
        recommendation="Recommended" if good else "Consider alternatives",
        pros=[
            f"₹{price:g} for {record.distance_km:g}km",
            f"{travel:g} minute estimated travel time",
            f"{wait:g} minute estimated pickup time",
        ],
        cons=[
            "Higher than average price" if price_sentiment == "negative" else "Standard pricing",
            "Longer than average travel time" if time_sentiment == "negative" else "Standard travel time",
        ],
        best_for=f"Quick {record.vehicle_type.lower()} trips in {area}" if good else "When other options aren't available",
        alternatives=[
            Alternative(
                name="Other Vehicle Types",
                reason="Consider different vehicle classes for better pricing or availability",
            ),
            Alternative(name="Alternative Times", reason="Prices and availability may vary at different times"),
        ],
    )


def analyze_delivery(record: DeliveryListing) -> AnalysisResult:
    minutes = record.duration_minutes if record.duration_minutes is not None else 30.0
    speed_sentiment = _band(minutes, 15, 30)
    price_sentiment = _band(record.price, 50, 200)
    rating = record.rating or UNRATED_DEFAULT

    features = [
        AnalysisFeature(
            name="Delivery Speed",
            description=f"Delivered in about {minutes:g} minutes",
            sentiment=speed_sentiment,
            score=_clamp(100 - minutes * 2),
            explanation={
                "positive": "Faster than average delivery time",
                "neutral": "Typical quick-commerce delivery time",
                "negative": "Slower than most quick-delivery options",
            }[speed_sentiment],
        ),
        AnalysisFeature(
            name="Pricing",
            description=f"₹{record.price:g}" + (f" for {record.weight}" if record.weight else ""),
            sentiment=price_sentiment,
            score=_clamp(100 - record.price / 5),
            explanation={
                "positive": "Low cost item",
                "neutral": "Average pricing compared to competitors",
                "negative": "Premium priced item",
            }[price_sentiment],
        ),
        _rating_feature(rating),
        _availability_feature(record.available),
    ]
    overall_score = _mean(features)
    good = overall_score > 70

    return AnalysisResult(
        overall_sentiment="positive" if good else ("neutral" if overall_score > 40 else "negative"),
        overall_score=overall_score,
        features=features,
        summary=(
            f"{record.display_name} on {record.platform} arrives in about {minutes:g} minutes "
            f"at ₹{record.price:g}."
        ),
        recommendation="Recommended" if good else "Consider alternatives",
        pros=[f for f in [
            "Fast delivery times" if speed_sentiment == "positive" else "",
            "Highly rated by customers" if rating >= 4.0 else "",
            "In stock" if record.available else "",
        ] if f],
        cons=[f for f in [
            "Slower delivery than competitors" if speed_sentiment == "negative" else "",
            "Premium pricing" if price_sentiment == "negative" else "",
            "Currently unavailable" if not record.available else "",
        ] if f],
        best_for="Time-sensitive grocery runs" if speed_sentiment == "positive" else "Planned grocery orders",
        alternatives=[
            Alternative(name="Other Platforms", reason="The same item may be cheaper or faster elsewhere"),
        ],
    )


HEURISTICS: Dict[type, Callable[..., AnalysisResult]] = {
    DeliveryListing: analyze_delivery,
    RideListing: analyze_ride,
    EcommerceListing: analyze_ecommerce,
}


def heuristic_analysis(record: ListingRecord) -> AnalysisResult:
    for kind, analyze in HEURISTICS.items():
        if isinstance(record, kind):
            return analyze(record)
    raise AnalysisError(f"No offline analysis for {type(record).__name__} {record.identity}")
