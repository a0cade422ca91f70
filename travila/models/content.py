from typing import ClassVar, Dict, List, Optional, Type
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field, validator
from pydantic.alias_generators import to_camel


class ContentType(str, Enum):
    TOURS = "tours"
    HOTELS = "hotels"
    CARS = "cars"
    ACTIVITIES = "activities"
    TICKETS = "tickets"

    @property
    def singular(self) -> str:
        return _SINGULAR[self]

    @classmethod
    def parse(cls, tag: str) -> Optional["ContentType"]:
        """Return the matching type for a tag, or None when the tag is unknown."""
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            return None


_SINGULAR = {
    ContentType.TOURS: "tour",
    ContentType.HOTELS: "hotel",
    ContentType.CARS: "car",
    ContentType.ACTIVITIES: "activity",
    ContentType.TICKETS: "ticket",
}

# Fixed order used for grouping, rendering and the filter catalog
CONTENT_TYPE_ORDER: List[ContentType] = list(ContentType)


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    CAD = "CAD"
    AUD = "AUD"


class Difficulty(str, Enum):
    EASY = "Easy"
    MODERATE = "Moderate"
    INTERMEDIATE = "Intermediate"
    HARD = "Hard"
    EXPERT = "Expert"


class Transmission(str, Enum):
    MANUAL = "Manual"
    AUTOMATIC = "Automatic"
    SEMI_AUTOMATIC = "Semi-Automatic"
    CVT = "CVT"


class FuelType(str, Enum):
    PETROL = "Petrol"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"
    HYBRID = "Hybrid"
    LPG = "LPG"
    CNG = "CNG"


class TicketType(str, Enum):
    FLIGHT = "flight"
    TRAIN = "train"
    BUS = "bus"
    EVENT = "event"
    ATTRACTION = "attraction"
    SHOW = "show"
    CONCERT = "concert"


CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
}


class ContentModel(BaseModel):
    """Base for stored documents: camelCase on the wire, unknown fields kept."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        validate_default = True
        extra = "allow"


class Rating(ContentModel):
    score: float = Field(0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    badge: Optional[str] = None
    stars: Optional[int] = Field(None, ge=1, le=5)


class Price(ContentModel):
    amount: float = Field(..., ge=0)
    currency: Currency = Currency.USD
    per: Optional[str] = None


class HotelPrice(ContentModel):
    per_night: float = Field(..., ge=0)
    currency: Currency = Currency.USD


class TicketPrice(ContentModel):
    amount: float = Field(..., ge=0)
    currency: Currency = Currency.USD
    original_price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0, le=100)


class CityLocation(ContentModel):
    city: str
    country: str
    address: Optional[str] = None

    def label(self) -> str:
        return f"{self.city}, {self.country}"


class Duration(ContentModel):
    days: Optional[int] = Field(None, ge=0)
    nights: Optional[int] = Field(None, ge=0)
    hours: Optional[float] = Field(None, ge=0)


class Images(ContentModel):
    main: Optional[str] = None
    gallery: List[str] = Field(default_factory=list)


class SearchableItem(ContentModel):
    """Common identity of the five content variants.

    Field names for title, location and price differ per variant, so every
    subclass provides its own projection methods instead of relying on a
    shared shape.
    """

    content_type: ClassVar[ContentType]

    id: str = Field(..., alias="_id")

    def display_title(self) -> str:
        raise NotImplementedError

    def location_label(self) -> str:
        raise NotImplementedError

    def price_amount(self) -> float:
        raise NotImplementedError

    def price_unit(self) -> Optional[str]:
        return None

    def price_currency(self) -> str:
        raise NotImplementedError

    def suggestion_subtitle(self) -> str:
        return self.location_label()

    def rating_score(self) -> Optional[float]:
        rating = getattr(self, "rating", None)
        return rating.score if rating is not None else None


class Tour(SearchableItem):
    content_type: ClassVar[ContentType] = ContentType.TOURS

    title: str = Field(..., max_length=100)
    location: str = Field(..., max_length=100)
    category: str
    description: str = Field("", max_length=2000)
    price: Price
    rating: Rating = Field(default_factory=Rating)
    duration: Optional[Duration] = None
    image: Optional[str] = None
    highlights: List[str] = Field(default_factory=list)
    is_featured: bool = False
    is_top_rated: bool = False
    availability: bool = True

    def display_title(self) -> str:
        return self.title

    def location_label(self) -> str:
        return self.location

    def price_amount(self) -> float:
        return self.price.amount

    def price_unit(self) -> Optional[str]:
        return self.price.per or "person"

    def price_currency(self) -> str:
        return self.price.currency

    def suggestion_subtitle(self) -> str:
        return f"{self.location} • {self.category}"


class Hotel(SearchableItem):
    content_type: ClassVar[ContentType] = ContentType.HOTELS

    name: str = Field(..., max_length=100)
    location: CityLocation
    price: HotelPrice
    rating: Rating = Field(default_factory=Rating)
    amenities: List[str] = Field(default_factory=list)
    images: Optional[Images] = None
    is_top_rated: bool = False
    availability: bool = True
    check_in: str = "15:00"
    check_out: str = "11:00"

    def display_title(self) -> str:
        return self.name

    def location_label(self) -> str:
        return self.location.label()

    def price_amount(self) -> float:
        return self.price.per_night

    def price_unit(self) -> Optional[str]:
        return "night"

    def price_currency(self) -> str:
        return self.price.currency


class CarSpecifications(ContentModel):
    transmission: Optional[Transmission] = None
    fuel_type: Optional[FuelType] = None
    seats: Optional[int] = Field(None, ge=1, le=50)
    mileage: Optional[float] = Field(None, ge=0)


class Car(SearchableItem):
    content_type: ClassVar[ContentType] = ContentType.CARS

    brand: str = Field(..., max_length=50)
    model: str = Field(..., max_length=100)
    year: int = Field(..., ge=1900)
    location: CityLocation
    price: Price
    rating: Rating = Field(default_factory=Rating)
    specifications: Optional[CarSpecifications] = None
    features: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    is_recent_launch: bool = False
    availability: bool = True

    def display_title(self) -> str:
        return f"{self.brand} {self.model}"

    def location_label(self) -> str:
        return self.location.label()

    def price_amount(self) -> float:
        return self.price.amount

    def price_unit(self) -> Optional[str]:
        return self.price.per or "day"

    def price_currency(self) -> str:
        return self.price.currency

    def suggestion_subtitle(self) -> str:
        return self.location.city


class Activity(SearchableItem):
    content_type: ClassVar[ContentType] = ContentType.ACTIVITIES

    title: str = Field(..., max_length=100)
    category: str = Field(..., max_length=50)
    location: CityLocation
    description: str = Field("", max_length=2000)
    difficulty: Optional[Difficulty] = None
    duration: Optional[Duration] = None
    price: Price
    rating: Rating = Field(default_factory=Rating)
    images: Optional[Images] = None
    is_popular: bool = False
    is_featured: bool = False
    availability: bool = True

    def display_title(self) -> str:
        return self.title

    def location_label(self) -> str:
        return self.location.label()

    def price_amount(self) -> float:
        return self.price.amount

    def price_unit(self) -> Optional[str]:
        return self.price.per or "person"

    def price_currency(self) -> str:
        return self.price.currency

    def suggestion_subtitle(self) -> str:
        return f"{self.location.city} • {self.category}"


class Endpoint(ContentModel):
    location: str
    code: Optional[str] = None
    date_time: datetime
    terminal: Optional[str] = None
    gate: Optional[str] = None

    @validator("date_time")
    def assume_utc(cls, v: datetime) -> datetime:
        # Naive timestamps are stored as UTC so departures stay comparable
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class Provider(ContentModel):
    name: str
    code: Optional[str] = None
    logo: Optional[str] = None


class Ticket(SearchableItem):
    content_type: ClassVar[ContentType] = ContentType.TICKETS

    type: TicketType
    departure: Endpoint
    arrival: Endpoint
    provider: Provider
    travel_class: str = Field(..., alias="class", max_length=50)
    price: TicketPrice
    available_seats: int = Field(0, ge=0)
    total_seats: Optional[int] = Field(None, ge=1)
    amenities: List[str] = Field(default_factory=list)
    is_available: bool = True
    is_featured: bool = False

    def display_title(self) -> str:
        return f"{self.departure.location} → {self.arrival.location}"

    def location_label(self) -> str:
        return self.departure.location

    def price_amount(self) -> float:
        return self.price.amount

    def price_currency(self) -> str:
        return self.price.currency

    def suggestion_subtitle(self) -> str:
        return f"{self.provider.name} • {self.type}"

    def rating_score(self) -> Optional[float]:
        return None


MODEL_BY_TYPE: Dict[ContentType, Type[SearchableItem]] = {
    ContentType.TOURS: Tour,
    ContentType.HOTELS: Hotel,
    ContentType.CARS: Car,
    ContentType.ACTIVITIES: Activity,
    ContentType.TICKETS: Ticket,
}


def format_price(amount: float, currency: str, unit: Optional[str] = None) -> str:
    """Format a price the way result cards show it, e.g. ``$250 / night``."""
    symbol = CURRENCY_SYMBOLS.get(currency)
    number = f"{amount:,.0f}" if float(amount).is_integer() else f"{amount:,.2f}"
    label = f"{symbol}{number}" if symbol else f"{number} {currency}"
    if unit:
        label += f" / {unit}"
    return label
