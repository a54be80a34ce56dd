import json

import pytest

from thriftcart.catalog.models import DeliveryListing, EcommerceListing, RideListing


class FakeMessage:
    def __init__(self, content):
        self.content = content


class FakeLLM:
    """Stands in for a chat model: records calls, returns canned content or raises."""

    def __init__(self, content=None, exc=None):
        self.content = content
        self.exc = exc
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.exc is not None:
            raise self.exc
        return FakeMessage(self.content)


def delivery(name, platform, price, minutes=10, rating=4.0, identity=None, available=True):
    return DeliveryListing(
        identity=identity or f"{platform}-{name}",
        display_name=name,
        platform=platform,
        price=price,
        duration_text=f"{minutes} minutes",
        duration_minutes=minutes,
        rating=rating,
        available=available,
    )


@pytest.fixture
def milk_records():
    return [
        delivery("Milk", "Zepto", 40, identity="Zepto-0"),
        delivery("Milk", "Blinkit", 35, identity="Blinkit-0"),
    ]


@pytest.fixture
def mixed_records():
    return [
        delivery("Amul Taaza Milk", "Zepto", 40, minutes=10, rating=4.5),
        delivery("Amul Butter", "Zepto", 58, minutes=10, rating=4.6),
        delivery("Amul Taaza Milk", "Blinkit", 35, minutes=8, rating=4.4),
        delivery("Mother Dairy Curd", "Blinkit", 35, minutes=8, rating=4.4),
        delivery("amul taaza milk", "Swiggy Instamart", 42, minutes=15, rating=4.5),
        delivery("Farm Fresh Eggs", "Zepto", 84, minutes=12, rating=4.3),
    ]


@pytest.fixture
def ride():
    return RideListing(
        identity="uber-koramangala-indiranagar-0",
        display_name="UberGo",
        platform="Uber",
        price=165,
        duration_text="22 minutes",
        duration_minutes=22,
        attributes=["UberGo"],
        pickup_location="Koramangala, Bengaluru",
        destination="Indiranagar, Bengaluru",
        distance_km=6.2,
        vehicle_type="UberGo",
        travel_minutes=22,
        pickup_wait_minutes=4,
    )


@pytest.fixture
def product():
    return EcommerceListing(
        identity="Flipkart-1",
        display_name="boAt Rockerz 450 Bluetooth Headphones",
        platform="Flipkart",
        price=1249,
        original_price=3990,
        discount=68,
        rating=4.2,
        available=True,
        duration_text="2-3 days",
        duration_minutes=2880,
    )


@pytest.fixture
def write_dataset(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
