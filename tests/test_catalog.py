import pytest

from thriftcart.app.settings import FIXTURES_DIR
from thriftcart.catalog.links import booking_url, platform_link
from thriftcart.catalog.loader import load_delivery, load_ecommerce, load_or_empty, load_routes
from thriftcart.catalog.parsing import parse_amount, parse_minutes
from thriftcart.errors import LoadError


def test_parse_amount():
    assert parse_amount("Rs 120") == 120.0
    assert parse_amount("Rs. 45") == 45.0
    assert parse_amount("₹1,299") == 1299.0
    assert parse_amount(40) == 40.0
    assert parse_amount(" 12.5 ") == 12.5


@pytest.mark.parametrize("text", ["free", "Rs free", "120 Rs", "", "USD 5", "Rs -5"])
def test_parse_amount_rejects_leftovers(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_minutes():
    assert parse_minutes("30 minutes") == 30.0
    assert parse_minutes("10-15 min") == 10.0
    assert parse_minutes("8 mins") == 8.0
    assert parse_minutes("2-4 hours") == 120.0
    assert parse_minutes("2-3 days") == 2880.0
    assert parse_minutes(22) == 22.0
    with pytest.raises(ValueError):
        parse_minutes("soon")


def test_load_bundled_delivery():
    records = load_delivery(FIXTURES_DIR / "quickdelivery.json")
    assert len(records) == 12
    first = records[0]
    assert first.identity == "Zepto-0"
    assert first.display_name == "Amul Taaza Milk"
    assert first.price == 40.0
    assert first.duration_minutes == 10.0
    assert first.attributes == ["500 ml"]
    assert first.category == "Dairy"
    # index runs across categories within a platform
    assert records[3].identity == "Zepto-3"
    assert records[5].identity == "Blinkit-0"
    assert len({r.identity for r in records}) == len(records)


def test_load_bundled_routes_and_products():
    quotes = load_routes(FIXTURES_DIR / "ridedata.json")
    assert len(quotes) == 5
    assert quotes[0].platform == "Uber"
    assert [v.vehicle_type for v in quotes[0].vehicle_options] == ["UberGo", "Premier", "Auto"]

    products = load_ecommerce(FIXTURES_DIR / "ecomdata.json")
    assert len(products) == 6
    jeans = products[2]
    assert jeans.identity == "Myntra-2"
    assert jeans.attributes == ["30", "32", "34", "Indigo"]
    assert jeans.duration_minutes == 3 * 1440
    assert products[3].available is False
    assert products[5].original_price is None


def test_bad_delivery_records_are_dropped(write_dataset, caplog):
    path = write_dataset(
        "delivery.json",
        {
            "platforms": [
                {
                    "platform_name": "Zepto",
                    "categories": [
                        {
                            "name": "Dairy",
                            "products": [
                                {"product_name": "Milk", "cost": "Rs 40", "delivery_time": "10 minutes"},
                                {"product_name": "Curd", "cost": "Rs free", "delivery_time": "10 minutes"},
                                {"product_name": "Paneer", "cost": "Rs 90", "delivery_time": "whenever"},
                                {"product_name": "Ghee", "cost": "Rs 500", "delivery_time": "10 minutes", "rating": 7},
                                {"cost": "Rs 10", "delivery_time": "10 minutes"},
                            ],
                        }
                    ],
                }
            ]
        },
    )
    records = load_delivery(path)
    assert [r.display_name for r in records] == ["Milk"]
    assert "Dropping delivery record" in caplog.text


def test_bad_vehicle_option_is_dropped(write_dataset):
    path = write_dataset(
        "rides.json",
        {
            "rides": [
                {
                    "platform": "Ola",
                    "pickup_location": "A",
                    "destination": "B",
                    "distance_km": 5,
                    "vehicles": [
                        {"vehicle_type": "Mini", "cost_inr": 120, "travel_time_minutes": 20, "pickup_time_minutes": 4},
                        {"vehicle_type": "Auto", "cost_inr": "cheap", "travel_time_minutes": 20, "pickup_time_minutes": 4},
                    ],
                },
                {"platform": "Uber", "pickup_location": "A"},
            ]
        },
    )
    quotes = load_routes(path)
    assert len(quotes) == 1
    assert [v.vehicle_type for v in quotes[0].vehicle_options] == ["Mini"]


def test_missing_or_malformed_dataset_raises_load_error(tmp_path, write_dataset):
    with pytest.raises(LoadError):
        load_delivery(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(LoadError):
        load_ecommerce(broken)

    with pytest.raises(LoadError):
        load_routes(write_dataset("wrong.json", {"routes": []}))


def test_load_or_empty_swallows_load_error(tmp_path, caplog):
    assert load_or_empty(load_delivery, tmp_path / "missing.json") == []
    assert "empty catalog" in caplog.text


def test_platform_links(ride):
    assert platform_link("Zepto") == "https://www.zeptonow.com/"
    assert platform_link("Swiggy Instamart") == "https://www.swiggy.com/instamart"
    assert platform_link("Big Mart") == "https://www.bigmart.com"
    assert booking_url(ride).endswith("drop[formatted_address]=Indiranagar%2C%20Bengaluru")


def test_non_object_entries_are_dropped(write_dataset, caplog):
    milk = {"product_name": "Milk", "cost": "Rs 40", "delivery_time": "10 minutes", "rating": None}
    path = write_dataset(
        "delivery.json",
        {
            "platforms": [
                None,
                "Blinkit",
                {"platform_name": "Dunzo", "categories": "Dairy"},
                {
                    "platform_name": "Zepto",
                    "categories": [
                        None,
                        {"name": "Snacks", "products": "chips"},
                        {"name": "Dairy", "products": [None, "curd", milk]},
                    ],
                },
            ]
        },
    )
    records = load_or_empty(load_delivery, path)
    assert [(r.identity, r.display_name) for r in records] == [("Zepto-2", "Milk")]
    # a null rating reads as unrated instead of dropping the record
    assert records[0].rating == 0.0
    assert "expected an object" in caplog.text

    rides = write_dataset(
        "rides.json",
        {
            "rides": [
                "oops",
                None,
                {
                    "platform": "Ola",
                    "pickup_location": "A",
                    "destination": "B",
                    "distance_km": 5,
                    "vehicles": [
                        None,
                        {"vehicle_type": "Mini", "cost_inr": 120, "travel_time_minutes": 20, "pickup_time_minutes": 4},
                    ],
                },
            ]
        },
    )
    quotes = load_or_empty(load_routes, rides)
    assert [(q.platform, len(q.vehicle_options)) for q in quotes] == [("Ola", 1)]

    products = write_dataset("products.json", {"products": [42, None, ["Amazon"]]})
    assert load_or_empty(load_ecommerce, products) == []


def test_compound_durations_are_rejected():
    with pytest.raises(ValueError):
        parse_minutes("1 hr 30 min")
