"""
Lead Capture Forms

Validation for the public contact form, the valuation (estimate) request and
the per-listing inquiry form. Each validator takes the raw JSON payload with
the frontend's camelCase keys and returns a sanitized model.
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from xactestate.core.constants import (
    DEFAULT_INQUIRY_TYPE,
    ESTIMATE_CONDITIONS,
    ESTIMATE_OUTDOOR,
    ESTIMATE_PARKING,
    ESTIMATE_TIMELINES,
    INQUIRY_TYPES,
    MAX_ADDRESS_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_ESTIMATE_IMAGES,
    MAX_MESSAGE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    PROPERTY_TYPES,
)
from xactestate.core.models import ContactSubmission, EstimateRequest, PropertyInquiry
from xactestate.exceptions import ValidationError
from xactestate.forms.validators import (
    check_max_lengths,
    clean_text,
    enum_code,
    is_blank,
    optional_choice,
    optional_float,
    optional_int,
    require_fields,
    string_list,
    validate_email,
)
from xactestate.utils.sanitize import sanitize_email, sanitize_phone


def _ensure_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return data


def _clean_texts(data: Mapping[str, Any], fields: Sequence[str]) -> Dict[str, Optional[str]]:
    """Sanitized values for ``fields``; markup-only input comes back as None."""
    return {field: clean_text(data.get(field)) for field in fields}


def _clean_phone(value: Any, field: str = "phone"):
    if is_blank(value):
        return None
    phone = str(value)
    if len(phone) > MAX_PHONE_LENGTH:
        raise ValidationError("Phone number too long", field=field, value=len(phone))
    return sanitize_phone(phone) or None


def validate_contact(data: Any) -> ContactSubmission:
    """Validate a contact form submission.

    Raises:
        ValidationError: On missing fields, bad email, overlong fields or an
            unknown inquiry type.
    """
    data = _ensure_mapping(data)
    text = _clean_texts(data, ("name", "message"))
    require_fields({**data, **text}, ("name", "email", "message"), "Name, email, and message are required")
    validate_email(data["email"])
    check_max_lengths(data, {
        "name": MAX_NAME_LENGTH,
        "email": MAX_EMAIL_LENGTH,
        "message": MAX_MESSAGE_LENGTH,
    })
    phone = _clean_phone(data.get("phone"))

    inquiry_type = optional_choice(data.get("inquiryType"), INQUIRY_TYPES, "inquiryType")

    return ContactSubmission(
        name=text["name"],
        email=sanitize_email(data["email"]),
        message=text["message"],
        phone=phone,
        inquiry_type=inquiry_type or DEFAULT_INQUIRY_TYPE,
    )


def validate_estimate(data: Any) -> EstimateRequest:
    """Validate a property valuation request.

    Numeric fields accept numbers or numeric strings; blanks become None.
    Option fields (condition, timeline, parking, outdoor) must be known values.
    At most ``MAX_ESTIMATE_IMAGES`` image URLs are kept.
    """
    data = _ensure_mapping(data)
    # The estimate page posts "location"; the API name is "city"
    if is_blank(data.get("city")) and not is_blank(data.get("location")):
        data = {**data, "city": data["location"]}

    text = _clean_texts(data, ("name", "address", "city"))
    require_fields(
        {**data, **text},
        ("name", "email", "propertyType", "address", "city"),
        "Name, email, property type, address, and city are required",
    )
    validate_email(data["email"])
    check_max_lengths(data, {
        "name": MAX_NAME_LENGTH,
        "email": MAX_EMAIL_LENGTH,
        "address": MAX_ADDRESS_LENGTH,
    })

    living_area = data.get("livingArea", data.get("size"))
    extras = data.get("description", data.get("extras"))

    return EstimateRequest(
        name=text["name"],
        email=sanitize_email(data["email"]),
        property_type=enum_code(data["propertyType"], PROPERTY_TYPES, "propertyType"),
        address=text["address"],
        city=text["city"],
        phone=_clean_phone(data.get("phone")),
        postal_code=clean_text(data.get("postalCode")),
        living_area=optional_float(living_area, "livingArea", minimum=0),
        land_area=optional_float(data.get("landArea"), "landArea", minimum=0),
        bedrooms=optional_int(data.get("bedrooms"), "bedrooms", minimum=0),
        bathrooms=optional_int(data.get("bathrooms"), "bathrooms", minimum=0),
        year_built=optional_int(data.get("yearBuilt"), "yearBuilt"),
        floor=optional_int(data.get("floor"), "floor"),
        condition=optional_choice(data.get("condition"), ESTIMATE_CONDITIONS, "condition"),
        parking=optional_choice(data.get("parking"), ESTIMATE_PARKING, "parking"),
        outdoor=optional_choice(data.get("outdoor"), ESTIMATE_OUTDOOR, "outdoor"),
        timeline=optional_choice(data.get("timeline"), ESTIMATE_TIMELINES, "timeline"),
        features=string_list(data.get("features"), "features"),
        description=clean_text(extras),
        images=string_list(data.get("images"), "images", max_items=MAX_ESTIMATE_IMAGES),
    )


def validate_inquiry(data: Any) -> PropertyInquiry:
    """Validate a visitor's message about a listing."""
    data = _ensure_mapping(data)
    text = _clean_texts(data, ("fromName", "content"))
    require_fields({**data, **text}, ("propertyId", "fromName", "fromEmail", "content"), "Missing required fields")
    validate_email(data["fromEmail"], field="fromEmail")
    check_max_lengths(data, {
        "fromName": MAX_NAME_LENGTH,
        "fromEmail": MAX_EMAIL_LENGTH,
        "content": MAX_MESSAGE_LENGTH,
    })

    return PropertyInquiry(
        property_id=str(data["propertyId"]).strip(),
        from_name=text["fromName"],
        from_email=sanitize_email(data["fromEmail"]),
        content=text["content"],
        from_phone=_clean_phone(data.get("fromPhone"), field="fromPhone"),
    )
