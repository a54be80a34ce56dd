import pytest
from pydantic import ValidationError

from thriftcart.account.preferences import (
    InMemoryPreferenceStore,
    UserPreferences,
    load_preferences,
    save_preferences,
)
from thriftcart.account.session import InMemorySessionProvider, Session, SessionService
from thriftcart.errors import SessionError

ALICE = Session(uid="u1", display_name="Alice", email="alice@example.com")


def test_sign_in_notifies_subscribers():
    provider = InMemorySessionProvider({"token": ALICE})
    seen = []
    unsubscribe = provider.subscribe(seen.append)
    assert seen == [None]

    assert provider.sign_in("token") == ALICE
    assert provider.current_session() == ALICE
    provider.sign_out()
    assert provider.current_session() is None
    assert seen == [None, ALICE, None]

    unsubscribe()
    provider.sign_in("token")
    assert len(seen) == 3


def test_unknown_credential_is_rejected():
    service = SessionService(InMemorySessionProvider({"token": ALICE}))
    with pytest.raises(SessionError, match="unknown account"):
        service.sign_in("wrong")
    assert service.current_session() is None


class BrokenProvider(InMemorySessionProvider):
    def sign_in(self, credential):
        raise ConnectionError("identity provider unreachable")

    def sign_out(self):
        raise ConnectionError("identity provider unreachable")


def test_provider_failures_become_session_errors():
    service = SessionService(BrokenProvider())
    with pytest.raises(SessionError, match="Sign-in failed. Please try again."):
        service.sign_in("token")
    with pytest.raises(SessionError, match="Sign-out failed"):
        service.sign_out()


def test_preferences_default_when_nothing_stored():
    prefs = load_preferences(InMemoryPreferenceStore(), "u1")
    assert prefs == UserPreferences()
    assert prefs.grocery_budget == 2000
    assert prefs.preferred_ride_type == "bike"
    assert prefs.preferred_ecommerce_platforms == ["amazon", "flipkart"]


def test_save_preferences_merges_and_persists_camel_case():
    store = InMemoryPreferenceStore()
    save_preferences(store, "u1", {"groceryBudget": 3500})
    prefs = save_preferences(store, "u1", {"preferred_ride_type": "auto"})
    assert prefs.grocery_budget == 3500
    assert prefs.preferred_ride_type == "auto"

    doc = store.get("u1")
    assert doc["groceryBudget"] == 3500
    assert doc["preferredRideType"] == "auto"
    assert load_preferences(store, "u2") == UserPreferences()


def test_invalid_preferences_are_not_saved():
    store = InMemoryPreferenceStore()
    with pytest.raises(ValidationError):
        save_preferences(store, "u1", {"groceryBudget": 100})
    with pytest.raises(ValidationError):
        save_preferences(store, "u1", {"driverRatingThreshold": 6})
    assert store.get("u1") == {}
