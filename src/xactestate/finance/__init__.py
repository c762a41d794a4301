"""
Mortgage and commission calculators.
"""

from xactestate.finance.mortgage import (
    calculate_mortgage,
    amortization_schedule,
    monthly_payment,
    list_banks,
    get_bank_rate,
)
from xactestate.finance.commission import calculate_commission, describe_commission

__all__ = [
    "calculate_mortgage",
    "amortization_schedule",
    "monthly_payment",
    "list_banks",
    "get_bank_rate",
    "calculate_commission",
    "describe_commission",
]
