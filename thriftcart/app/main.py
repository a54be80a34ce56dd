import logging
from typing import Annotated, Any, Dict, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from thriftcart.account.preferences import UserPreferences, load_preferences, save_preferences
from thriftcart.account.session import Session
from thriftcart.app.logging import configure_logging, event
from thriftcart.app.schemas import (
    AnalysisResponse,
    AssistantRequest,
    AssistantResponse,
    Comparison,
    DeliverySearchResponse,
    EcommerceSearchResponse,
    QuantityRequest,
    RideOption,
    RideSearchResponse,
    SessionStatus,
    SignInRequest,
    SuggestionsResponse,
)
from thriftcart.app.settings import settings
from thriftcart.cart import OrderSummary
from thriftcart.catalog.links import booking_url, platform_link
from thriftcart.errors import CartError, SessionError
from thriftcart.search.engine import SortKey, search, suggest
from thriftcart.search.grouping import chart_points, chart_series, cheapest, group
from thriftcart.search.rides import location_suggestions, search_routes
from thriftcart.state import AppState, build_state

configure_logging(settings.log_level)

app = FastAPI(title="ThriftCart Comparison Service")
state = build_state()
logger = logging.getLogger(__name__)


def get_state() -> AppState:
    return state


StateDep = Annotated[AppState, Depends(get_state)]


def require_session(st: StateDep) -> Session:
    session = st.sessions.current_session()
    if session is None:
        raise HTTPException(status_code=401, detail="Sign in required")
    return session


SessionDep = Annotated[Session, Depends(require_session)]


@app.exception_handler(SessionError)
async def session_error_handler(_request, exc: SessionError):
    return JSONResponse(status_code=401, content={"detail": str(exc)})


@app.exception_handler(CartError)
async def cart_error_handler(_request, exc: CartError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def _suggestions(records, q: str) -> SuggestionsResponse:
    if len(q.strip()) < settings.suggestion_min_chars:
        return SuggestionsResponse(suggestions=[])
    return SuggestionsResponse(suggestions=suggest(records, q, limit=settings.suggestion_limit))


@app.get("/health")
def health():
    return {"status": "ok"}


# --- auth -----------------------------------------------------------------


@app.post("/auth/sign-in", response_model=Session)
def sign_in(payload: SignInRequest, st: StateDep):
    session = st.sessions.sign_in(payload.credential)
    event("sign_in", {"uid": session.uid})
    return session


@app.post("/auth/sign-out", response_model=SessionStatus)
def sign_out(st: StateDep):
    st.sessions.sign_out()
    st.analysis.close()
    st.cart.clear()
    return SessionStatus(signed_in=False)


@app.get("/auth/session", response_model=SessionStatus)
def current_session(st: StateDep):
    session = st.sessions.current_session()
    return SessionStatus(signed_in=session is not None, session=session)


# --- delivery -------------------------------------------------------------


@app.get("/delivery/search", response_model=DeliverySearchResponse)
def delivery_search(
    st: StateDep,
    _session: SessionDep,
    q: str = "",
    max_price: Annotated[Optional[float], Query(ge=0)] = None,
    sort: SortKey = SortKey.TIME,
):
    # blank input is never submitted as a search
    if not q.strip():
        return DeliverySearchResponse(items=[])
    items = search(st.catalogs.delivery, q, max_price=max_price, sort_key=sort)
    return DeliverySearchResponse(
        items=items,
        chart=chart_points(items),
        platform_links={r.platform: platform_link(r.platform) for r in items},
    )


@app.get("/delivery/suggestions", response_model=SuggestionsResponse)
def delivery_suggestions(st: StateDep, _session: SessionDep, q: str = ""):
    return _suggestions(st.catalogs.delivery, q)


# --- rides ----------------------------------------------------------------


@app.get("/rides/search", response_model=RideSearchResponse)
def ride_search(
    st: StateDep,
    _session: SessionDep,
    pickup: str,
    destination: str,
    vehicle_type: Optional[str] = None,
    sort: Optional[SortKey] = None,
):
    rides = search_routes(st.catalogs.routes, pickup, destination, vehicle_type=vehicle_type, sort_key=sort)
    return RideSearchResponse(items=[RideOption(ride=r, booking_url=booking_url(r)) for r in rides])


@app.get("/rides/locations", response_model=SuggestionsResponse)
def ride_locations(
    st: StateDep,
    _session: SessionDep,
    q: str = "",
    kind: Literal["pickup", "destination"] = "pickup",
):
    return SuggestionsResponse(suggestions=location_suggestions(st.catalogs.routes, q, kind))


# --- ecommerce ------------------------------------------------------------


@app.get("/ecommerce/search", response_model=EcommerceSearchResponse)
def ecommerce_search(
    st: StateDep,
    _session: SessionDep,
    q: str = "",
    max_price: Annotated[Optional[float], Query(ge=0)] = None,
    sort: SortKey = SortKey.PRICE,
):
    if not q.strip():
        return EcommerceSearchResponse(groups=[])
    groups = group(search(st.catalogs.ecommerce, q, max_price=max_price, sort_key=sort))
    comparisons = []
    for g in groups:
        best = cheapest(g)
        comparisons.append(
            Comparison(
                canonical_key=g.canonical_key,
                members=g.members,
                best_platform=best.platform if best else None,
                best_price=best.price if best else None,
            )
        )
    return EcommerceSearchResponse(groups=comparisons, chart=chart_series(groups))


@app.get("/ecommerce/suggestions", response_model=SuggestionsResponse)
def ecommerce_suggestions(st: StateDep, _session: SessionDep, q: str = ""):
    return _suggestions(st.catalogs.ecommerce, q)


# --- analysis sidebar -----------------------------------------------------


@app.post("/analysis/{identity}", response_model=AnalysisResponse)
async def analyze(identity: str, st: StateDep, _session: SessionDep, domain: Optional[str] = None):
    record = st.find(identity)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Unknown listing {identity}")
    result = await st.analysis.open(record, domain)
    return AnalysisResponse(identity=identity, is_open=st.analysis.is_open, stale=result is None, result=result)


@app.get("/analysis", response_model=AnalysisResponse)
def analysis_status(st: StateDep, _session: SessionDep):
    sidebar = st.analysis
    return AnalysisResponse(
        identity=sidebar.selected.identity if sidebar.selected else None,
        is_open=sidebar.is_open,
        result=sidebar.result,
    )


@app.delete("/analysis", response_model=AnalysisResponse)
def close_analysis(st: StateDep, _session: SessionDep):
    st.analysis.close()
    return AnalysisResponse(is_open=False)


# --- cart -----------------------------------------------------------------


@app.get("/cart", response_model=OrderSummary)
def get_cart(st: StateDep, _session: SessionDep):
    return st.cart.summary()


@app.post("/cart/items/{identity}", response_model=OrderSummary)
def add_to_cart(identity: str, st: StateDep, _session: SessionDep):
    record = st.find(identity)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Unknown listing {identity}")
    st.cart.add(record)
    return st.cart.summary()


@app.patch("/cart/items/{identity}", response_model=OrderSummary)
def update_quantity(identity: str, payload: QuantityRequest, st: StateDep, _session: SessionDep):
    if not st.cart.update_quantity(identity, payload.quantity):
        raise HTTPException(status_code=400, detail="Quantity must be at least 1")
    return st.cart.summary()


@app.delete("/cart/items/{identity}", response_model=OrderSummary)
def remove_from_cart(identity: str, st: StateDep, _session: SessionDep):
    st.cart.remove(identity)
    return st.cart.summary()


@app.delete("/cart", response_model=OrderSummary)
def clear_cart(st: StateDep, _session: SessionDep):
    st.cart.clear()
    return st.cart.summary()


@app.post("/cart/checkout", response_model=OrderSummary)
def checkout(st: StateDep, session: SessionDep):
    order = st.cart.checkout()
    event("checkout", {"uid": session.uid, "item_count": order.item_count, "total": order.total})
    return order


# --- profile --------------------------------------------------------------


@app.get("/preferences", response_model=UserPreferences)
def get_preferences(st: StateDep, session: SessionDep):
    return load_preferences(st.preferences, session.uid)


@app.put("/preferences", response_model=UserPreferences)
def put_preferences(changes: Dict[str, Any], st: StateDep, session: SessionDep):
    try:
        return save_preferences(st.preferences, session.uid, changes)
    except ValidationError as exc:
        logger.warning("Rejected preferences update for %s: %d errors", session.uid, exc.error_count())
        raise HTTPException(status_code=422, detail=str(exc))


# --- assistant ------------------------------------------------------------


@app.post("/assistant", response_model=AssistantResponse)
async def assistant(payload: AssistantRequest, st: StateDep, _session: SessionDep):
    return AssistantResponse(answer=await st.assistant.answer(payload.query))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
