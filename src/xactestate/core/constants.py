"""
Shared Constants for the Xact Estate backend

Contains all constant values used across the application.
"""

from typing import Dict, List, Tuple

# Listing types
LISTING_SALE: str = "SALE"
LISTING_RENT: str = "RENT"
LISTING_TYPES: Dict[str, str] = {
    LISTING_SALE: "For Sale",
    LISTING_RENT: "For Rent",
}

# Property types stored on listings, with display labels
PROPERTY_TYPES: Dict[str, str] = {
    "APARTMENT": "Apartment",
    "HOUSE": "House",
    "VILLA": "Villa",
    "STUDIO": "Studio",
    "PENTHOUSE": "Penthouse",
    "DUPLEX": "Duplex",
    "TRIPLEX": "Triplex",
    "LOFT": "Loft",
    "OFFICE": "Office",
    "RETAIL": "Retail",
    "WAREHOUSE": "Warehouse",
    "LAND": "Land",
    "PARKING": "Parking",
    "COMMERCIAL": "Commercial",
    "OTHER": "Other",
}

PROPERTY_CATEGORIES: Dict[str, str] = {
    "RESIDENTIAL": "Residential",
    "COMMERCIAL": "Commercial",
    "INVESTMENT": "Investment",
    "LAND": "Land",
}
DEFAULT_CATEGORY: str = "RESIDENTIAL"

# Listing lifecycle
STATUS_DRAFT: str = "DRAFT"
STATUS_PENDING_REVIEW: str = "PENDING_REVIEW"
STATUS_PUBLISHED: str = "PUBLISHED"
STATUS_REJECTED: str = "REJECTED"
STATUS_RESERVED: str = "RESERVED"
STATUS_SOLD: str = "SOLD"
STATUS_RENTED: str = "RENTED"
STATUS_EXPIRED: str = "EXPIRED"
STATUS_ARCHIVED: str = "ARCHIVED"

PROPERTY_STATUSES: Dict[str, str] = {
    STATUS_DRAFT: "Draft",
    STATUS_PENDING_REVIEW: "Pending Review",
    STATUS_PUBLISHED: "Published",
    STATUS_REJECTED: "Rejected",
    STATUS_RESERVED: "Reserved",
    STATUS_SOLD: "Sold",
    STATUS_RENTED: "Rented",
    STATUS_EXPIRED: "Expired",
    STATUS_ARCHIVED: "Archived",
}

# Dashboard status filter -> stored statuses
DASHBOARD_STATUS_FILTERS: Dict[str, Tuple[str, ...]] = {
    "active": (STATUS_PUBLISHED,),
    "pending": (STATUS_DRAFT, STATUS_PENDING_REVIEW),
    "sold": (STATUS_SOLD, STATUS_RENTED),
}

ENERGY_CLASSES: Dict[str, str] = {
    "A_PLUS_PLUS": "A++",
    "A_PLUS": "A+",
    "A": "A",
    "B": "B",
    "C": "C",
    "D": "D",
    "E": "E",
    "F": "F",
    "G": "G",
    "I": "I",
    "NOT_APPLICABLE": "Not Available",
}

# Estimate (valuation lead) form options
ESTIMATE_CONDITIONS: List[str] = [
    "New / Renovated",
    "Good condition",
    "Needs light refresh",
    "Needs full renovation",
]
ESTIMATE_TIMELINES: Dict[str, str] = {
    "asap": "As soon as possible",
    "1-3 months": "Within 1-3 months",
    "3-6 months": "Within 3-6 months",
    "6+ months": "6+ months",
    "just curious": "Just curious about the value",
}
ESTIMATE_PARKING: Dict[str, str] = {
    "none": "None",
    "1 indoor": "1 indoor spot",
    "2 indoor": "2 indoor spots",
    "outdoor": "Outdoor only",
    "garage": "Private garage",
}
ESTIMATE_OUTDOOR: Dict[str, str] = {
    "none": "None",
    "balcony": "Balcony",
    "terrace": "Terrace",
    "garden": "Garden",
    "terrace+garden": "Terrace + Garden",
}

INQUIRY_TYPES: List[str] = ["buying", "selling", "valuation", "renting", "investment", "general"]
DEFAULT_INQUIRY_TYPE: str = "general"

# Longest loan the mortgage calculator accepts
MAX_LOAN_TERM_YEARS: int = 50

# Luxembourg banks for the mortgage calculator: (name, annual rate %)
DEFAULT_BANK: Tuple[str, float] = ("Select a bank", 3.5)
BANKS: List[Tuple[str, float]] = [
    DEFAULT_BANK,
    ("BGL BNP Paribas", 3.2),
    ("Banque de Luxembourg", 3.4),
    ("Spuerkeess (BCEE)", 3.1),
    ("ING Luxembourg", 3.5),
    ("Raiffeisen", 3.3),
    ("BIL", 3.4),
]

# Default agency contact when a listing has no assigned agent
AGENCY_NAME: str = "Xact"
DEFAULT_AGENT_CONTACT: Dict[str, str] = {
    "name": "Xact Real Estate",
    "phone": "+352 621 000 000",
    "email": "info@xact.lu",
    "image": "/xact-logo.svg",
    "agency": AGENCY_NAME,
}

# Form field limits
MAX_NAME_LENGTH: int = 100
MAX_EMAIL_LENGTH: int = 255
MAX_ADDRESS_LENGTH: int = 300
MAX_MESSAGE_LENGTH: int = 5000
MAX_PHONE_LENGTH: int = 30

MAX_ESTIMATE_IMAGES: int = 10
MAX_LISTING_PHOTOS: int = 20
MIN_LISTING_PHOTOS: int = 3

# Per-email cooldowns for stored submissions (seconds)
CONTACT_COOLDOWN: int = 300
ESTIMATE_COOLDOWN: int = 3600
INQUIRY_COOLDOWN: int = 60

SATISFIED_CLIENTS: str = "98%"

# Database table names
TABLE_MESSAGES: str = "messages"
TABLE_CONTACT_SUBMISSIONS: str = "contact_submissions"
TABLE_ESTIMATE_REQUESTS: str = "estimate_requests"
