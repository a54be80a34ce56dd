"""Application state shared by the HTTP layer: catalogs, cart, analysis sidebar, account."""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from thriftcart.account.preferences import InMemoryPreferenceStore, PreferenceStore
from thriftcart.account.session import InMemorySessionProvider, Session, SessionService
from thriftcart.analysis.adapter import AnalysisAdapter
from thriftcart.analysis.sidebar import AnalysisSidebar
from thriftcart.app.settings import Settings, settings as default_settings
from thriftcart.assistant import ShoppingAssistant
from thriftcart.cart import Cart
from thriftcart.catalog.loader import load_delivery, load_ecommerce, load_or_empty, load_routes
from thriftcart.catalog.models import DeliveryListing, EcommerceListing, ListingRecord, RouteQuote
from thriftcart.search.rides import flatten

logger = logging.getLogger(__name__)


@dataclass
class Catalogs:
    delivery: List[DeliveryListing] = field(default_factory=list)
    routes: List[RouteQuote] = field(default_factory=list)
    ecommerce: List[EcommerceListing] = field(default_factory=list)

    @classmethod
    def load(cls, cfg: Settings) -> "Catalogs":
        return cls(
            delivery=load_or_empty(load_delivery, cfg.delivery_dataset),
            routes=load_or_empty(load_routes, cfg.rides_dataset),
            ecommerce=load_or_empty(load_ecommerce, cfg.ecommerce_dataset),
        )

    def index(self) -> Dict[str, ListingRecord]:
        records: List[ListingRecord] = [*self.delivery, *self.ecommerce]
        for quote in self.routes:
            records.extend(flatten(quote))
        index: Dict[str, ListingRecord] = {}
        for record in records:
            existing = index.setdefault(record.identity, record)
            if existing is not record:
                logger.warning(
                    "Duplicate identity %s: keeping the %s listing, ignoring the %s listing",
                    record.identity,
                    existing.domain,
                    record.domain,
                )
        return index


@dataclass
class AppState:
    catalogs: Catalogs
    sessions: SessionService
    preferences: PreferenceStore
    analysis: AnalysisSidebar
    assistant: ShoppingAssistant
    cart: Cart = field(default_factory=Cart)
    _index: Optional[Dict[str, ListingRecord]] = None

    def find(self, identity: str) -> Optional[ListingRecord]:
        if self._index is None:
            self._index = self.catalogs.index()
        return self._index.get(identity)


def build_state(
    cfg: Settings = default_settings,
    catalogs: Optional[Catalogs] = None,
    sessions: Optional[SessionService] = None,
    preferences: Optional[PreferenceStore] = None,
    adapter: Optional[AnalysisAdapter] = None,
    assistant: Optional[ShoppingAssistant] = None,
) -> AppState:
    catalogs = catalogs if catalogs is not None else Catalogs.load(cfg)
    logger.info(
        "Catalogs ready: %d delivery, %d routes, %d ecommerce",
        len(catalogs.delivery),
        len(catalogs.routes),
        len(catalogs.ecommerce),
    )
    if sessions is None:
        accounts = {}
        if cfg.demo_credential:
            accounts[cfg.demo_credential] = Session(uid="demo", display_name="Demo User", email="user@gmail.com")
        sessions = SessionService(InMemorySessionProvider(accounts))
    return AppState(
        catalogs=catalogs,
        sessions=sessions,
        preferences=preferences or InMemoryPreferenceStore(),
        analysis=AnalysisSidebar(adapter or AnalysisAdapter()),
        assistant=assistant or ShoppingAssistant(),
    )
