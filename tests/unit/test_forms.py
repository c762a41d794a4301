"""
Unit tests for the contact, estimate and inquiry forms.
"""

import pytest

from xactestate.exceptions import ValidationError
from xactestate.forms import validate_contact, validate_estimate, validate_inquiry
from xactestate.forms.validators import (
    enum_code,
    optional_choice,
    optional_float,
    optional_int,
    string_list,
    validate_email,
)


class TestValidators:
    """Tests for shared field validators."""

    @pytest.mark.parametrize("email", ["anne@example.lu", "a.b+c@sub.domain.com"])
    def test_valid_email(self, email):
        validate_email(email)

    @pytest.mark.parametrize("email", ["anne", "anne@", "anne@example", "an ne@example.lu", None])
    def test_invalid_email(self, email):
        with pytest.raises(ValidationError) as exc_info:
            validate_email(email)
        assert exc_info.value.message == "Invalid email format"

    def test_optional_int(self):
        assert optional_int("3", "bedrooms") == 3
        assert optional_int(2.0, "bedrooms") == 2
        assert optional_int("", "bedrooms") is None
        assert optional_int(None, "bedrooms") is None

    def test_optional_int_rejects_garbage(self):
        with pytest.raises(ValidationError) as exc_info:
            optional_int("three", "bedrooms")
        assert exc_info.value.field == "bedrooms"

    def test_optional_int_minimum(self):
        with pytest.raises(ValidationError):
            optional_int("-1", "bedrooms", minimum=0)

    def test_optional_float(self):
        assert optional_float("95,5", "livingArea") == pytest.approx(95.5)
        assert optional_float("  ", "livingArea") is None
        with pytest.raises(ValidationError):
            optional_float("big", "livingArea")

    def test_optional_choice_returns_canonical(self):
        assert optional_choice("GOOD CONDITION", ["Good condition"], "condition") == "Good condition"
        assert optional_choice("", ["Good condition"], "condition") is None

    def test_enum_code_accepts_code_or_label(self):
        types = {"APARTMENT": "Apartment", "HOUSE": "House"}
        assert enum_code("Apartment", types, "type") == "APARTMENT"
        assert enum_code("house", types, "type") == "HOUSE"
        with pytest.raises(ValidationError):
            enum_code("Castle", types, "type")

    def test_string_list(self):
        assert string_list(["a", " ", "<b>b</b>"], "features") == ["a", "b"]
        assert string_list(None, "features") == []
        assert string_list(["1", "2", "3"], "images", max_items=2) == ["1", "2"]
        with pytest.raises(ValidationError):
            string_list("Balcony", "features")


class TestValidateContact:
    """Tests for validate_contact function."""

    def test_valid_submission(self, contact_payload):
        submission = validate_contact(contact_payload)
        assert submission.name == "Jean Muller"
        assert submission.email == "jean.muller@example.lu"
        assert submission.phone == "+352 621 123 456"
        assert submission.inquiry_type == "buying"

    def test_inquiry_type_defaults_to_general(self, contact_payload):
        del contact_payload["inquiryType"]
        assert validate_contact(contact_payload).inquiry_type == "general"

    def test_unknown_inquiry_type(self, contact_payload):
        contact_payload["inquiryType"] = "spam"
        with pytest.raises(ValidationError):
            validate_contact(contact_payload)

    @pytest.mark.parametrize("field", ["name", "email", "message"])
    def test_required_fields(self, contact_payload, field):
        contact_payload[field] = "   "
        with pytest.raises(ValidationError) as exc_info:
            validate_contact(contact_payload)
        assert exc_info.value.message == "Name, email, and message are required"

    def test_invalid_email(self, contact_payload):
        contact_payload["email"] = "not-an-email"
        with pytest.raises(ValidationError, match="Invalid email format"):
            validate_contact(contact_payload)

    def test_message_too_long(self, contact_payload):
        contact_payload["message"] = "x" * 5001
        with pytest.raises(ValidationError, match="Field length exceeded"):
            validate_contact(contact_payload)

    def test_phone_too_long(self, contact_payload):
        contact_payload["phone"] = "1" * 31
        with pytest.raises(ValidationError, match="Phone number too long"):
            validate_contact(contact_payload)

    @pytest.mark.parametrize("field", ["name", "message"])
    def test_markup_only_counts_as_missing(self, contact_payload, field):
        contact_payload[field] = "<b></b>"
        with pytest.raises(ValidationError) as exc_info:
            validate_contact(contact_payload)
        assert exc_info.value.message == "Name, email, and message are required"
        assert exc_info.value.field == field

    def test_strips_markup(self, contact_payload):
        contact_payload["message"] = "<script>alert(1)</script>Hello"
        assert validate_contact(contact_payload).message == "alert(1)Hello"

    def test_body_must_be_object(self):
        with pytest.raises(ValidationError):
            validate_contact(["not", "a", "dict"])


class TestValidateEstimate:
    """Tests for validate_estimate function."""

    def test_maps_page_field_names(self, estimate_payload):
        estimate = validate_estimate(estimate_payload)
        assert estimate.city == "Bertrange"
        assert estimate.living_area == pytest.approx(95)
        assert estimate.description == "Renovated kitchen in 2021"

    def test_property_type_stored_as_code(self, estimate_payload):
        assert validate_estimate(estimate_payload).property_type == "APARTMENT"

    def test_coerces_numbers(self, estimate_payload):
        estimate = validate_estimate(estimate_payload)
        assert estimate.bedrooms == 2
        assert estimate.bathrooms == 1
        assert estimate.year_built == 2005
        assert estimate.land_area is None

    def test_options(self, estimate_payload):
        estimate = validate_estimate(estimate_payload)
        assert estimate.condition == "Good condition"
        assert estimate.parking == "1 indoor"
        assert estimate.outdoor == "balcony"
        assert estimate.timeline == "3-6 months"

    def test_unknown_option(self, estimate_payload):
        estimate_payload["timeline"] = "yesterday"
        with pytest.raises(ValidationError) as exc_info:
            validate_estimate(estimate_payload)
        assert exc_info.value.field == "timeline"

    def test_missing_city(self, estimate_payload):
        del estimate_payload["location"]
        with pytest.raises(ValidationError) as exc_info:
            validate_estimate(estimate_payload)
        assert exc_info.value.message == "Name, email, property type, address, and city are required"

    def test_markup_only_address_counts_as_missing(self, estimate_payload):
        estimate_payload["address"] = "<span></span>"
        with pytest.raises(ValidationError) as exc_info:
            validate_estimate(estimate_payload)
        assert exc_info.value.field == "address"

    def test_address_too_long(self, estimate_payload):
        estimate_payload["address"] = "a" * 301
        with pytest.raises(ValidationError, match="Field length exceeded"):
            validate_estimate(estimate_payload)

    def test_images_capped_at_ten(self, estimate_payload):
        estimate_payload["images"] = [f"/img/{i}.jpg" for i in range(15)]
        assert len(validate_estimate(estimate_payload).images) == 10

    def test_bad_number(self, estimate_payload):
        estimate_payload["bedrooms"] = "lots"
        with pytest.raises(ValidationError):
            validate_estimate(estimate_payload)


class TestValidateInquiry:
    """Tests for validate_inquiry function."""

    def test_valid(self):
        inquiry = validate_inquiry({
            "propertyId": "prop-1",
            "fromName": "Luc",
            "fromEmail": "LUC@example.lu",
            "content": "Is it still available?",
        })
        assert inquiry.property_id == "prop-1"
        assert inquiry.from_email == "luc@example.lu"
        assert inquiry.from_phone is None

    def test_missing_fields(self):
        with pytest.raises(ValidationError, match="Missing required fields"):
            validate_inquiry({"propertyId": "prop-1", "fromName": "Luc"})

    def test_markup_only_content_counts_as_missing(self):
        with pytest.raises(ValidationError, match="Missing required fields"):
            validate_inquiry({
                "propertyId": "prop-1",
                "fromName": "Luc",
                "fromEmail": "luc@example.lu",
                "content": "<p> </p>",
            })

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_inquiry({
                "propertyId": "prop-1",
                "fromName": "Luc",
                "fromEmail": "luc",
                "content": "Hi",
            })
        assert exc_info.value.field == "fromEmail"
