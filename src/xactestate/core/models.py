"""
Data Models for the Xact Estate backend

Dataclass definitions for listings, leads, and calculator results.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, List


@dataclass
class AgencyRef:
    """Agency shown on a listing card."""

    id: str
    name: str
    slug: str
    logo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class AgentContact:
    """Contact block on a property detail page."""

    name: str
    phone: str
    email: str
    image: str
    agency: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class PropertySummary:
    """A listing as shown on a search result card."""

    id: str
    title: str
    slug: str
    location: str
    address: str
    price: float
    type: str
    listing_type: str
    beds: int = 0
    baths: int = 0
    area: float = 0
    image: str = ""
    tag: str = ""
    agency: Optional[AgencyRef] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase payload used by the frontend."""
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "location": self.location,
            "address": self.address,
            "price": self.price,
            "type": self.type,
            "listingType": self.listing_type,
            "beds": self.beds,
            "baths": self.baths,
            "area": self.area,
            "image": self.image,
            "tag": self.tag,
            "agency": self.agency.to_dict() if self.agency else None,
        }


@dataclass
class SimilarProperty:
    """Compact card for the "similar properties" strip."""

    id: str
    title: str
    slug: str
    location: str
    price: float
    type: str
    listing_type: str
    beds: int = 0
    baths: int = 0
    area: float = 0
    image: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "location": self.location,
            "price": self.price,
            "type": self.type,
            "listingType": self.listing_type,
            "beds": self.beds,
            "baths": self.baths,
            "area": self.area,
            "image": self.image,
        }


@dataclass
class PropertyDetail:
    """Full public view of a published listing."""

    id: str
    title: str
    slug: str
    description: Optional[str]
    location: str
    address: str
    price: float
    type: str
    listing_type: str
    beds: int
    baths: int
    area: float
    images: List[str]
    features: List[str]
    agent: AgentContact
    land_area: Optional[float] = None
    year_built: Optional[int] = None
    energy_class: Optional[str] = None
    floor: Optional[int] = None
    total_floors: Optional[int] = None
    similar: List[SimilarProperty] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the property detail payload; absent optionals are omitted."""
        data = {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "location": self.location,
            "address": self.address,
            "price": self.price,
            "type": self.type,
            "listingType": self.listing_type,
            "beds": self.beds,
            "baths": self.baths,
            "area": self.area,
            "features": self.features,
            "images": self.images,
            "agent": self.agent.to_dict(),
        }
        optional = {
            "landArea": self.land_area,
            "yearBuilt": self.year_built,
            "energyClass": self.energy_class,
            "floor": self.floor,
            "totalFloors": self.total_floors,
        }
        data.update({k: v for k, v in optional.items() if v})
        return data


@dataclass
class SearchFilters:
    """Parsed property search parameters."""

    listing_type: Optional[str] = None
    property_type: Optional[str] = None
    location: Optional[str] = None
    min_beds: Optional[int] = None
    max_price: Optional[int] = None
    min_area: Optional[int] = None
    featured: bool = False
    sort_by: str = "newest"
    page: int = 1
    limit: int = 12


@dataclass
class SearchPage:
    """One page of search results."""

    properties: List[PropertySummary]
    total: int
    page: int
    limit: int
    total_pages: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "properties": [p.to_dict() for p in self.properties],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


@dataclass
class MarketStats:
    """Homepage counters and category tiles."""

    active_listings: str
    property_value: str
    satisfied_clients: str
    categories: Dict[str, int]
    total_agencies: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stats": {
                "activeListings": self.active_listings,
                "propertyValue": self.property_value,
                "satisfiedClients": self.satisfied_clients,
            },
            "categories": self.categories,
            "totalAgencies": self.total_agencies,
        }


@dataclass
class ContactSubmission:
    """Validated contact form submission."""

    name: str
    email: str
    message: str
    phone: Optional[str] = None
    inquiry_type: str = "general"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class EstimateRequest:
    """Validated request for a property valuation."""

    name: str
    email: str
    property_type: str
    address: str
    city: str
    phone: Optional[str] = None
    postal_code: Optional[str] = None
    living_area: Optional[float] = None
    land_area: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    year_built: Optional[int] = None
    floor: Optional[int] = None
    condition: Optional[str] = None
    parking: Optional[str] = None
    outdoor: Optional[str] = None
    timeline: Optional[str] = None
    features: List[str] = field(default_factory=list)
    description: Optional[str] = None
    images: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class PropertyInquiry:
    """A visitor's message about a specific listing."""

    property_id: str
    from_name: str
    from_email: str
    content: str
    from_phone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class MortgageQuote:
    """Result of the mortgage calculator."""

    property_price: float
    down_payment_pct: float
    loan_term_years: int
    annual_rate: float
    loan_amount: float
    monthly_payment: float
    num_payments: int
    total_payment: float
    total_interest: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the calculator payload."""
        return {
            "propertyPrice": self.property_price,
            "downPayment": self.down_payment_pct,
            "loanTerm": self.loan_term_years,
            "rate": self.annual_rate,
            "loanAmount": self.loan_amount,
            "monthlyPayment": self.monthly_payment,
            "numPayments": self.num_payments,
            "totalPayment": self.total_payment,
            "totalInterest": self.total_interest,
        }


@dataclass
class CommissionQuote:
    """Result of the seller commission calculator."""

    price: float
    rate: float
    commission: float
    negotiable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class RateLimitResult:
    """Outcome of a rate limit check."""

    success: bool
    remaining: int
    reset_in: int  # seconds until the window resets

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
