"""
Listing Forms

``validate_listing`` checks a create/update payload from the seller dashboard
or the admin property form. ``ListingWizard`` holds the state of the
five-step "new listing" wizard and decides when the seller may move on.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from xactestate.core.constants import (
    DEFAULT_CATEGORY,
    ENERGY_CLASSES,
    LISTING_SALE,
    LISTING_TYPES,
    MAX_ADDRESS_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_LISTING_PHOTOS,
    MAX_MESSAGE_LENGTH,
    MAX_NAME_LENGTH,
    MIN_LISTING_PHOTOS,
    PROPERTY_CATEGORIES,
    PROPERTY_TYPES,
)
from xactestate.exceptions import ValidationError
from xactestate.forms.validators import (
    check_max_lengths,
    clean_text,
    enum_code,
    is_blank,
    missing_fields,
    optional_float,
    optional_int,
    string_list,
    validate_email,
)

MAX_TITLE_LENGTH = 200

# Payload key -> column name
LISTING_FIELDS: Dict[str, str] = {
    "title": "title",
    "description": "description",
    "type": "type",
    "category": "category",
    "listingType": "listing_type",
    "price": "price",
    "bedrooms": "bedrooms",
    "bathrooms": "bathrooms",
    "livingArea": "living_area",
    "landArea": "land_area",
    "floor": "floor",
    "totalFloors": "total_floors",
    "yearBuilt": "year_built",
    "energyClass": "energy_class",
    "address": "address",
    "city": "city",
    "postalCode": "postal_code",
    "features": "features",
    "images": "images",
}

REQUIRED_ON_CREATE = ("title", "description", "type", "listingType", "price", "address", "city")

_REQUIRED_MESSAGES = {
    "title": "Title is required",
    "description": "Description is required",
    "type": "Property type is required",
    "listingType": "Listing type is required",
    "price": "Valid price is required",
    "address": "Address is required",
    "city": "City is required",
}


def _clean_field(key: str, value: Any) -> Any:
    if key in ("title", "description", "address", "city", "postalCode"):
        return clean_text(value)
    if key == "type":
        return enum_code(value, PROPERTY_TYPES, "type")
    if key == "category":
        return enum_code(value, PROPERTY_CATEGORIES, "category") or DEFAULT_CATEGORY
    if key == "listingType":
        return enum_code(value, LISTING_TYPES, "listingType")
    if key == "energyClass":
        return enum_code(value, ENERGY_CLASSES, "energyClass")
    if key == "price":
        price = optional_float(value, "price")
        if price is None or price <= 0:
            raise ValidationError("Valid price is required", field="price", value=value)
        return price
    if key in ("livingArea", "landArea"):
        return optional_float(value, key, minimum=0)
    if key in ("bedrooms", "bathrooms", "totalFloors"):
        return optional_int(value, key, minimum=0)
    if key in ("floor", "yearBuilt"):
        return optional_int(value, key)
    if key == "features":
        return string_list(value, "features")
    if key == "images":
        return string_list(value, "images", max_items=MAX_LISTING_PHOTOS)
    raise KeyError(key)


def validate_listing(data: Any, partial: bool = False) -> Dict[str, Any]:
    """Validate a listing payload and map it to column names.

    Args:
        data: Payload with camelCase keys.
        partial: Update mode; only the supplied keys are validated and returned.

    Returns:
        Dict keyed by column name (``listing_type``, ``living_area``, ...).
        ``features`` and ``images`` stay lists.

    Raises:
        ValidationError: On a missing required field or an invalid value.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    if not partial:
        for key in REQUIRED_ON_CREATE:
            if is_blank(data.get(key)):
                raise ValidationError(_REQUIRED_MESSAGES[key], field=key)
    else:
        # Required fields may be omitted on update, but not blanked
        for key in REQUIRED_ON_CREATE:
            if key in data and is_blank(data[key]):
                raise ValidationError(_REQUIRED_MESSAGES[key], field=key)

    check_max_lengths(data, {
        "title": MAX_TITLE_LENGTH,
        "address": MAX_ADDRESS_LENGTH,
        "description": MAX_MESSAGE_LENGTH,
    })

    cleaned: Dict[str, Any] = {}
    for key, column in LISTING_FIELDS.items():
        if key not in data:
            continue
        cleaned[column] = _clean_field(key, data[key])
        # Markup-only text is blank once sanitized
        if key in REQUIRED_ON_CREATE and cleaned[column] is None:
            raise ValidationError(_REQUIRED_MESSAGES[key], field=key)

    if not partial:
        cleaned.setdefault("category", DEFAULT_CATEGORY)
        cleaned.setdefault("features", [])
        cleaned.setdefault("images", [])
    return cleaned


@dataclass
class WizardPhoto:
    """A photo picked in the wizard, before upload."""

    filename: str
    content_type: str
    url: Optional[str] = None

    @property
    def is_image(self) -> bool:
        return self.content_type.lower().startswith("image/")


PhotoInput = Union[WizardPhoto, Mapping[str, Any]]


def _to_photo(item: PhotoInput) -> WizardPhoto:
    if isinstance(item, WizardPhoto):
        return item
    return WizardPhoto(
        filename=str(item.get("filename") or item.get("name") or ""),
        content_type=str(item.get("content_type") or item.get("type") or ""),
        url=item.get("url"),
    )


def _empty_form() -> Dict[str, Any]:
    return {
        # Basic info
        "title": "",
        "listingType": LISTING_SALE,
        "propertyType": "",
        "price": "",
        # Location
        "location": "",
        "address": "",
        "zipCode": "",
        # Details
        "size": "",
        "bedrooms": "",
        "bathrooms": "",
        "floor": "",
        "totalFloors": "",
        "yearBuilt": "",
        "energyClass": "",
        "selectedFeatures": [],
        # Description & contact
        "description": "",
        "contactName": "",
        "contactEmail": "",
        "contactPhone": "",
    }


STEP_REQUIREMENTS: Dict[int, tuple] = {
    1: ("title", "propertyType", "price", "listingType"),
    2: ("location", "address"),
    3: ("size", "bedrooms"),
    4: (),
    5: ("description", "contactName", "contactEmail", "contactPhone"),
}
TOTAL_STEPS = len(STEP_REQUIREMENTS)
PHOTO_STEP = 4


@dataclass
class ListingWizard:
    """State of the five-step new listing wizard.

    Steps: 1 basic info, 2 location, 3 details, 4 photos, 5 description and
    contact. The seller can only advance past a step once it is valid.
    """

    step: int = 1
    data: Dict[str, Any] = field(default_factory=_empty_form)
    photos: List[WizardPhoto] = field(default_factory=list)

    def update(self, **fields: Any) -> None:
        unknown = set(fields) - set(self.data)
        if unknown:
            raise ValidationError(f"Unknown wizard field: {sorted(unknown)[0]}", field=sorted(unknown)[0])
        self.data.update(fields)

    def missing_fields(self, step: Optional[int] = None) -> List[str]:
        """Fields (or ``"photos"``) still needed to complete ``step``."""
        step = self.step if step is None else step
        if step not in STEP_REQUIREMENTS:
            return []
        missing = missing_fields(self.data, STEP_REQUIREMENTS[step])
        if step == PHOTO_STEP and len(self.photos) < MIN_LISTING_PHOTOS:
            missing.append("photos")
        return missing

    def is_step_valid(self, step: Optional[int] = None) -> bool:
        return not self.missing_fields(step)

    def advance(self) -> int:
        """Move to the next step.

        Raises:
            ValidationError: If the current step is incomplete.
        """
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                f"Step {self.step} is incomplete: {', '.join(missing)}",
                field=missing[0],
            )
        self.step = min(self.step + 1, TOTAL_STEPS)
        return self.step

    def back(self) -> int:
        self.step = max(self.step - 1, 1)
        return self.step

    def toggle_feature(self, feature: str) -> List[str]:
        selected = list(self.data["selectedFeatures"])
        if feature in selected:
            selected.remove(feature)
        else:
            selected.append(feature)
        self.data["selectedFeatures"] = selected
        return selected

    def add_photos(self, items: Iterable[PhotoInput]) -> int:
        """Append image files, ignoring non-images, up to the photo cap.

        Returns:
            Number of photos now attached.
        """
        added = [p for p in (_to_photo(i) for i in items) if p.is_image]
        self.photos = (self.photos + added)[:MAX_LISTING_PHOTOS]
        return len(self.photos)

    def remove_photo(self, index: int) -> None:
        if not 0 <= index < len(self.photos):
            raise IndexError(f"No photo at position {index}")
        del self.photos[index]

    def move_photo(self, index: int, direction: str) -> None:
        """Swap a photo with its neighbour; moves past either end are ignored."""
        if direction not in ("up", "down"):
            raise ValueError(f"Invalid direction: {direction}")
        if not 0 <= index < len(self.photos):
            raise IndexError(f"No photo at position {index}")
        if (direction == "up" and index == 0) or (
            direction == "down" and index == len(self.photos) - 1
        ):
            return
        swap = index - 1 if direction == "up" else index + 1
        self.photos[index], self.photos[swap] = self.photos[swap], self.photos[index]

    def reset(self) -> None:
        self.step = 1
        self.data = _empty_form()
        self.photos = []

    def is_complete(self) -> bool:
        return all(self.is_step_valid(step) for step in STEP_REQUIREMENTS)

    def to_listing_payload(self) -> Dict[str, Any]:
        """Build the validated listing payload for submission.

        Returns:
            Column-keyed listing (see ``validate_listing``) plus a ``contact``
            dict with the seller's name, email and phone.

        Raises:
            ValidationError: If any step is incomplete or a value is invalid.
        """
        for step in STEP_REQUIREMENTS:
            missing = self.missing_fields(step)
            if missing:
                raise ValidationError(f"Step {step} is incomplete: {', '.join(missing)}", field=missing[0])

        form = self.data
        validate_email(form["contactEmail"], field="contactEmail")
        check_max_lengths(form, {"contactName": MAX_NAME_LENGTH, "contactEmail": MAX_EMAIL_LENGTH})

        listing = validate_listing({
            "title": form["title"],
            "description": form["description"],
            "type": form["propertyType"],
            "listingType": form["listingType"],
            "price": form["price"],
            "address": form["address"],
            "city": form["location"],
            "postalCode": form["zipCode"],
            "livingArea": form["size"],
            "bedrooms": form["bedrooms"],
            "bathrooms": form["bathrooms"],
            "floor": form["floor"],
            "totalFloors": form["totalFloors"],
            "yearBuilt": form["yearBuilt"],
            "energyClass": form["energyClass"],
            "features": form["selectedFeatures"],
            "images": [p.url for p in self.photos if p.url],
        })
        listing["contact"] = {
            "name": clean_text(form["contactName"]),
            "email": form["contactEmail"].strip().lower(),
            "phone": clean_text(form["contactPhone"]),
        }
        return listing
