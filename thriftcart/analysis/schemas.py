from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Sentiment = Literal["positive", "neutral", "negative"]
SENTIMENTS = ("positive", "neutral", "negative")


class _CamelModel(BaseModel):
    # Remote JSON and API output use camelCase keys
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisFeature(_CamelModel):
    name: str
    description: str = ""
    sentiment: Sentiment = "neutral"
    score: float = Field(50.0, ge=0, le=100)
    explanation: str = ""


class Alternative(_CamelModel):
    name: str
    reason: str = ""


class AnalysisResult(_CamelModel):
    overall_sentiment: Sentiment = "neutral"
    overall_score: float = Field(50.0, ge=0, le=100)
    features: List[AnalysisFeature] = []
    summary: str = ""
    recommendation: str = ""
    pros: List[str] = []
    cons: List[str] = []
    best_for: str = ""
    alternatives: List[Alternative] = []


def _clamp_score(value: Any, default: float = 50.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        score = float(value)
    except (TypeError, ValueError):
        return default
    if score != score:  # NaN
        return default
    return min(100.0, max(0.0, score))


def _sentiment(value: Any) -> Sentiment:
    return value if value in SENTIMENTS else "neutral"


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None and str(v).strip()]


def normalize_analysis(payload: Dict[str, Any]) -> AnalysisResult:
    """
    Coerce a loosely shaped JSON answer into an AnalysisResult.

    Missing or malformed fields fall back to defaults instead of failing:
    features default to an empty list, scores are clamped to [0, 100] (50 when
    missing or not numeric), unknown sentiments become "neutral", and a missing
    overall score is the mean of the feature scores.
    """
    raw_features = payload.get("features")
    features = []
    for raw in raw_features if isinstance(raw_features, list) else []:
        if not isinstance(raw, dict):
            continue
        features.append(
            AnalysisFeature(
                name=_text(raw.get("name"), "Unnamed Feature"),
                description=_text(raw.get("description"), ""),
                sentiment=_sentiment(raw.get("sentiment")),
                score=_clamp_score(raw.get("score")),
                explanation=_text(raw.get("explanation"), "No explanation provided"),
            )
        )

    if "overallScore" in payload:
        overall = _clamp_score(payload.get("overallScore"))
    elif features:
        overall = round(sum(f.score for f in features) / len(features), 1)
    else:
        overall = 50.0

    alternatives = []
    raw_alts = payload.get("alternatives")
    for raw in raw_alts if isinstance(raw_alts, list) else []:
        if isinstance(raw, dict) and isinstance(raw.get("name"), str):
            alternatives.append(Alternative(name=raw["name"], reason=_text(raw.get("reason"), "")))

    return AnalysisResult(
        overall_sentiment=_sentiment(payload.get("overallSentiment")),
        overall_score=overall,
        features=features,
        summary=_text(payload.get("summary"), "No summary available"),
        recommendation=_text(payload.get("recommendation"), "No recommendation"),
        pros=_text_list(payload.get("pros")),
        cons=_text_list(payload.get("cons")),
        best_for=_text(payload.get("bestFor"), "General use"),
        alternatives=alternatives,
    )


def fallback_analysis() -> AnalysisResult:
    """Degraded result returned whenever the live analysis cannot be used."""
    return AnalysisResult(
        overall_sentiment="neutral",
        overall_score=50.0,
        summary="Analysis unavailable. Please try again later.",
        recommendation="Not Available",
        features=[
            AnalysisFeature(
                name="Service Availability",
                description="Unable to analyze at this time",
                sentiment="neutral",
                score=50.0,
                explanation="Analysis service is currently unavailable",
            )
        ],
        pros=[],
        cons=["Analysis service unavailable"],
        best_for="General use",
        alternatives=[],
    )
