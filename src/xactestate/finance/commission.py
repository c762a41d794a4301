"""
Seller Commission Calculator

The agency charges a flat share of the sale price, paid at closing.
Prices above the configured threshold qualify for a negotiated rate.
"""

from typing import Any, Optional

from xactestate.config import get_config
from xactestate.core.models import CommissionQuote
from xactestate.exceptions import ValidationError
from xactestate.finance.mortgage import require_number
from xactestate.utils.formatting import format_number_de


def calculate_commission(price: Any, rate: Optional[Any] = None) -> CommissionQuote:
    """Calculate the agency commission on a sale price.

    Args:
        price: Sale price in euros.
        rate: Commission as a fraction (0.03 = 3%). Defaults to the configured rate.

    Returns:
        CommissionQuote; ``negotiable`` is set above the negotiation threshold.

    Raises:
        ValidationError: If the price is negative or the rate is outside [0, 1].

    Example:
        >>> calculate_commission(750000).commission
        22500.0
    """
    finance = get_config().finance
    value = require_number(price, "price")
    commission_rate = finance.commission_rate if rate is None else require_number(rate, "rate")

    if value < 0:
        raise ValidationError("Price cannot be negative", field="price", value=value)
    if not 0 <= commission_rate <= 1:
        raise ValidationError("Commission rate must be between 0 and 1", field="rate", value=commission_rate)

    return CommissionQuote(
        price=value,
        rate=commission_rate,
        commission=value * commission_rate,
        negotiable=value > finance.negotiable_threshold,
    )


def describe_commission(quote: CommissionQuote) -> dict:
    """Payload for the pricing page calculator, with de-LU formatted amounts."""
    data = quote.to_dict()
    data["formattedPrice"] = format_number_de(quote.price)
    data["formattedCommission"] = format_number_de(quote.commission)
    data["ratePercent"] = round(quote.rate * 100, 4)
    return data
