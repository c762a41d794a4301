"""
Mortgage Calculator

Fixed-rate annuity loan maths behind the homepage mortgage widget.

Usage:
    from xactestate.finance.mortgage import calculate_mortgage

    quote = calculate_mortgage(750_000, down_payment_pct=20, loan_term_years=25,
                               annual_rate=3.2)
    quote.monthly_payment
"""

import math
from typing import Any, Dict, List, Optional

from xactestate.config import get_config
from xactestate.core.constants import BANKS, DEFAULT_BANK, MAX_LOAN_TERM_YEARS
from xactestate.core.models import MortgageQuote
from xactestate.exceptions import CalculationError, ValidationError
from xactestate.logging_config import get_logger

logger = get_logger(__name__)


def require_number(value: Any, field: str) -> float:
    """Coerce a calculator input to a finite float or raise ValidationError."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field, value=value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", field=field, value=value) from None
    if number != number or number in (float("inf"), float("-inf")):
        raise ValidationError(f"{field} must be a finite number", field=field, value=value)
    return number


def monthly_payment(loan_amount: float, annual_rate: float, num_payments: int) -> float:
    """Annuity payment for a loan repaid in ``num_payments`` monthly instalments.

    A zero rate repays the principal in equal parts.

    Raises:
        CalculationError: If there are no payments or the result is not finite.
    """
    if num_payments <= 0:
        raise CalculationError("Number of payments must be positive")
    if loan_amount <= 0:
        return 0.0

    rate = annual_rate / 100 / 12
    if rate == 0:
        return loan_amount / num_payments

    try:
        growth = (1 + rate) ** num_payments
        payment = loan_amount * (rate * growth) / (growth - 1)
    except OverflowError:
        raise CalculationError("Loan terms are out of range") from None
    if not math.isfinite(payment):
        raise CalculationError("Loan terms are out of range")
    return payment


def calculate_mortgage(
    property_price: Any,
    down_payment_pct: Any = None,
    loan_term_years: Any = None,
    annual_rate: Any = DEFAULT_BANK[1],
) -> MortgageQuote:
    """Calculate the monthly payment and totals for a property purchase.

    Args:
        property_price: Purchase price in euros.
        down_payment_pct: Share of the price paid upfront, 0-100.
        loan_term_years: Repayment period in years.
        annual_rate: Nominal yearly interest rate in percent.

    Returns:
        MortgageQuote with loan amount, monthly payment and totals.

    Raises:
        ValidationError: If an input is missing, non-numeric or out of range.
        CalculationError: If the inputs overflow the payment formula.
    """
    finance = get_config().finance
    if down_payment_pct is None:
        down_payment_pct = finance.default_down_payment_pct
    if loan_term_years is None:
        loan_term_years = finance.default_loan_term_years

    price = require_number(property_price, "propertyPrice")
    down = require_number(down_payment_pct, "downPayment")
    years = require_number(loan_term_years, "loanTerm")
    rate = require_number(annual_rate, "rate")

    if price < 0:
        raise ValidationError("Property price cannot be negative", field="propertyPrice", value=price)
    if not 0 <= down <= 100:
        raise ValidationError("Down payment must be between 0 and 100%", field="downPayment", value=down)
    if years < 1 or years != int(years):
        raise ValidationError("Loan term must be a whole number of years", field="loanTerm", value=years)
    if years > MAX_LOAN_TERM_YEARS:
        raise ValidationError(
            f"Loan term cannot exceed {MAX_LOAN_TERM_YEARS} years", field="loanTerm", value=years
        )
    if rate < 0:
        raise ValidationError("Interest rate cannot be negative", field="rate", value=rate)

    years = int(years)
    loan_amount = price * (1 - down / 100)
    num_payments = years * 12
    payment = monthly_payment(loan_amount, rate, num_payments)
    total_payment = payment * num_payments
    if not math.isfinite(total_payment):
        raise CalculationError("Loan terms are out of range")

    return MortgageQuote(
        property_price=price,
        down_payment_pct=down,
        loan_term_years=years,
        annual_rate=rate,
        loan_amount=loan_amount,
        monthly_payment=payment,
        num_payments=num_payments,
        total_payment=total_payment,
        total_interest=total_payment - loan_amount,
    )


def amortization_schedule(
    loan_amount: float,
    annual_rate: float,
    loan_term_years: int,
) -> List[Dict[str, Any]]:
    """Yearly breakdown of principal, interest and remaining balance.

    Returns:
        One row per year with ``year``, ``principalPaid``, ``interestPaid``
        and ``remainingBalance``; the final balance is zero.
    """
    if not 1 <= int(loan_term_years) <= MAX_LOAN_TERM_YEARS:
        raise ValidationError(
            f"Loan term must be between 1 and {MAX_LOAN_TERM_YEARS} years",
            field="loanTerm",
            value=loan_term_years,
        )
    num_payments = int(loan_term_years) * 12
    payment = monthly_payment(loan_amount, annual_rate, num_payments)
    rate = annual_rate / 100 / 12

    balance = float(max(loan_amount, 0))
    rows = []
    for year in range(1, int(loan_term_years) + 1):
        principal_paid = 0.0
        interest_paid = 0.0
        for _ in range(12):
            if balance <= 0:
                break
            interest = balance * rate
            principal = min(payment - interest, balance)
            balance -= principal
            principal_paid += principal
            interest_paid += interest
        if year == int(loan_term_years) or balance < 0.005:
            balance = 0.0
        rows.append({
            "year": year,
            "principalPaid": round(principal_paid, 2),
            "interestPaid": round(interest_paid, 2),
            "remainingBalance": round(balance, 2),
        })
    return rows


def list_banks() -> List[Dict[str, Any]]:
    """Banks offered in the calculator with their indicative rates."""
    return [{"name": name, "rate": rate} for name, rate in BANKS]


def get_bank_rate(name: Optional[str]) -> float:
    """Rate for a bank by name; unknown or empty names get the default rate."""
    rates: Dict[str, float] = dict(BANKS)
    if name and name in rates:
        return rates[name]
    if name:
        logger.debug("Unknown bank %r, using default rate", name)
    return DEFAULT_BANK[1]
