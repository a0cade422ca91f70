"""Canned results shown when the search API cannot be reached."""

SAMPLE_RESULTS = {
    "tours": [
        {
            "_id": "sample-tour-1",
            "title": "California Sunset Cruise",
            "location": "Los Angeles, CA",
            "category": "Cruise",
            "price": {"amount": 89, "currency": "USD", "per": "person"},
        },
        {
            "_id": "sample-tour-2",
            "title": "NYC Food Tour",
            "location": "New York, NY",
            "category": "Food",
            "price": {"amount": 65, "currency": "USD", "per": "person"},
        },
        {
            "_id": "sample-tour-3",
            "title": "Grand Canyon Adventure",
            "location": "Arizona, USA",
            "category": "Adventure",
            "price": {"amount": 120, "currency": "USD", "per": "person"},
        },
    ],
    "hotels": [
        {
            "_id": "sample-hotel-1",
            "name": "Luxury Beach Resort",
            "location": {"city": "Miami", "country": "USA"},
            "price": {"perNight": 250, "currency": "USD"},
        },
        {
            "_id": "sample-hotel-2",
            "name": "Downtown Hotel",
            "location": {"city": "New York", "country": "USA"},
            "price": {"perNight": 180, "currency": "USD"},
        },
    ],
    "cars": [
        {
            "_id": "sample-car-1",
            "brand": "BMW",
            "model": "3 Series",
            "year": 2024,
            "location": {"city": "San Francisco", "country": "USA"},
            "price": {"amount": 89, "currency": "USD", "per": "day"},
        },
        {
            "_id": "sample-car-2",
            "brand": "Audi",
            "model": "A4",
            "year": 2023,
            "location": {"city": "Los Angeles", "country": "USA"},
            "price": {"amount": 95, "currency": "USD", "per": "day"},
        },
    ],
}


def sample_results_for(tab: str) -> dict:
    """Sample results for the tab; tabs without samples get the sample tours."""
    if tab in SAMPLE_RESULTS:
        return {tab: SAMPLE_RESULTS[tab]}
    return {"tours": SAMPLE_RESULTS["tours"]}
