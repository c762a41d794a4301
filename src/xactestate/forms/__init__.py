"""
Form validation for lead capture and listing submission.
"""

from xactestate.forms.leads import validate_contact, validate_estimate, validate_inquiry
from xactestate.forms.listing import ListingWizard, WizardPhoto, validate_listing

__all__ = [
    "validate_contact",
    "validate_estimate",
    "validate_inquiry",
    "ListingWizard",
    "WizardPhoto",
    "validate_listing",
]
