"""Outbound links to the platforms a listing came from."""
from urllib.parse import quote

from thriftcart.catalog.models import RideListing

DELIVERY_PLATFORM_LINKS = {
    "zepto": "https://www.zeptonow.com/",
    "blinkit": "https://blinkit.com/",
    "zomato": "https://www.zomato.com/order-food-online",
    "swiggy instamart": "https://www.swiggy.com/instamart",
    "dunzo": "https://www.dunzo.com/",
    "jiomart": "https://www.jiomart.com/",
    "bigbasket": "https://www.bigbasket.com/",
    "amazon fresh": "https://www.amazon.in/amazonfresh",
    "flipkart grocery": "https://www.flipkart.com/grocery-supermart-store",
}


def _homepage(platform: str) -> str:
    return f"https://www.{platform.lower().replace(' ', '')}.com"


def platform_link(platform: str) -> str:
    return DELIVERY_PLATFORM_LINKS.get(platform.lower(), _homepage(platform))


def booking_url(ride: RideListing) -> str:
    pickup = quote(ride.pickup_location, safe="")
    drop = quote(ride.destination, safe="")
    urls = {
        "ola": f"https://book.olacabs.com/?pickup_name={pickup}&drop_name={drop}",
        "uber": f"https://m.uber.com/ul/?action=setPickup&pickup=my_location&drop[formatted_address]={drop}",
        "rapido": "https://www.rapido.bike/",
        "namma yatri": "https://nammayatri.in/",
    }
    return urls.get(ride.platform.lower(), _homepage(ride.platform))
