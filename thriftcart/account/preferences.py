"""Per-user preferences stored in an external document store keyed by session uid."""
from typing import Any, Dict, List, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserPreferences(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    # grocery
    preferred_grocery_stores: List[str] = ["bigbasket", "blinkit"]
    grocery_budget: int = Field(2000, ge=500, le=10000)
    delivery_time_preference: Literal["morning", "afternoon", "evening", "night"] = "evening"
    # ride
    preferred_ride_apps: List[str] = ["uber", "rapido"]
    preferred_ride_type: Literal["bike", "auto", "hatchback", "sedan", "suv"] = "bike"
    driver_rating_threshold: float = Field(4.0, ge=1, le=5)
    # ecommerce
    preferred_ecommerce_platforms: List[str] = ["amazon", "flipkart"]
    preferred_delivery_speed: Literal["same-day", "1-2-days", "standard", "no-rush"] = "standard"
    product_categories: List[str] = ["electronics", "fashion"]
    # notifications
    email_notifications: bool = True
    push_notifications: bool = True


class PreferenceStore(Protocol):
    def get(self, uid: str) -> Dict[str, Any]: ...

    def update(self, uid: str, values: Dict[str, Any]) -> None: ...


class InMemoryPreferenceStore:
    def __init__(self):
        self._docs: Dict[str, Dict[str, Any]] = {}

    def get(self, uid: str) -> Dict[str, Any]:
        return dict(self._docs.get(uid, {}))

    def update(self, uid: str, values: Dict[str, Any]) -> None:
        self._docs.setdefault(uid, {}).update(values)


def load_preferences(store: PreferenceStore, uid: str) -> UserPreferences:
    """Stored values layered over the defaults."""
    return UserPreferences.model_validate(store.get(uid))


def save_preferences(store: PreferenceStore, uid: str, changes: Dict[str, Any]) -> UserPreferences:
    """Validate ``changes`` over the stored document and persist the full result (camelCase keys)."""
    fields = UserPreferences.model_fields
    # stored documents use aliases, and aliases win over field names during validation
    changes = {fields[k].alias if k in fields else k: v for k, v in changes.items()}
    merged = {**store.get(uid), **changes}
    prefs = UserPreferences.model_validate(merged)
    store.update(uid, prefs.model_dump(by_alias=True))
    return prefs
