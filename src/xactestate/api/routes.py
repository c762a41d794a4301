"""
API Routes for the Xact Estate public site

Provides REST API endpoints for:
- Property search and detail pages
- Homepage statistics and location list
- Mortgage and commission calculators
- Contact, valuation and listing inquiry forms
"""

from typing import Any, Dict

from flask import Blueprint, jsonify, request

from xactestate.config import get_config
from xactestate.core.database import get_connection, init_schema
from xactestate.core.locations import LOCATIONS
from xactestate.exceptions import DatabaseError, RateLimitError, ValidationError
from xactestate.finance import (
    amortization_schedule,
    calculate_commission,
    calculate_mortgage,
    describe_commission,
    get_bank_rate,
    list_banks,
)
from xactestate.forms import validate_contact, validate_estimate, validate_inquiry
from xactestate.listings import (
    create_inquiry,
    get_market_stats,
    get_property_detail,
    parse_filters,
    save_contact_submission,
    save_estimate_request,
    search_properties,
)
from xactestate.logging_config import get_logger
from xactestate.utils.rate_limit import get_client_ip, get_rate_limiter

logger = get_logger(__name__)

# Create blueprint
api = Blueprint("api", __name__, url_prefix="/api")

STATS_CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


def _json_body() -> Dict[str, Any]:
    """The request's JSON object.

    Raises:
        ValidationError: If the body is not a JSON object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").lower() in ("true", "1", "yes")


def enforce_rate_limit(preset: str) -> None:
    """Count this request against the client IP for ``preset``.

    Raises:
        RateLimitError: If the client is over the limit.
    """
    if not get_config().rate_limit.enabled:
        return
    client_ip = get_client_ip(request.headers, request.remote_addr)
    result = get_rate_limiter().check_preset(client_ip, preset)
    if not result.success:
        logger.warning("Rate limit exceeded for %s on %s", client_ip, preset)
        raise RateLimitError("Too many requests. Please try again later.", retry_after=result.reset_in)


# Health
@api.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    try:
        with get_connection() as conn:
            conn.execute("SELECT 1")
        return jsonify({"status": "healthy", "database": True})
    except DatabaseError as e:
        logger.warning("Health check failed: %s", e)
        return jsonify({
            "status": "unhealthy",
            "database": False,
            "error": str(e),
        }), 503


# Property Data Endpoints
@api.route("/properties", methods=["GET"])
def get_properties():
    """Search published listings."""
    filters = parse_filters(request.args)
    with get_connection() as conn:
        page = search_properties(conn, filters)
    return jsonify({"status": "success", **page.to_dict()})


@api.route("/properties/<slug>", methods=["GET"])
def get_property(slug: str):
    """Get a published listing with similar properties."""
    with get_connection() as conn:
        detail = get_property_detail(conn, slug)
    return jsonify({
        "status": "success",
        "property": detail.to_dict(),
        "similarProperties": [p.to_dict() for p in detail.similar],
    })


@api.route("/stats", methods=["GET"])
def get_stats():
    """Homepage counters and category tiles."""
    with get_connection() as conn:
        stats = get_market_stats(conn)
    response = jsonify({"status": "success", **stats.to_dict()})
    response.headers["Cache-Control"] = STATS_CACHE_CONTROL
    return response


@api.route("/locations", methods=["GET"])
def get_locations():
    """Localities offered in the search and listing forms."""
    return jsonify({"status": "success", "locations": LOCATIONS})


# Calculators
@api.route("/banks", methods=["GET"])
def get_banks():
    return jsonify({"status": "success", "banks": list_banks()})


@api.route("/calculators/mortgage", methods=["POST"])
def mortgage_calculator():
    """Monthly payment for a purchase; optional yearly amortization schedule."""
    data = _json_body()
    rate = data.get("rate")
    if rate is None:
        rate = get_bank_rate(data.get("bank"))

    quote = calculate_mortgage(
        data.get("propertyPrice"),
        down_payment_pct=data.get("downPayment"),
        loan_term_years=data.get("loanTerm"),
        annual_rate=rate,
    )
    result: Dict[str, Any] = {"status": "success", "quote": quote.to_dict()}

    if _flag(request.args.get("schedule")) or _flag(data.get("schedule")):
        result["schedule"] = amortization_schedule(
            quote.loan_amount, quote.annual_rate, quote.loan_term_years
        )
    return jsonify(result)


@api.route("/calculators/commission", methods=["POST"])
def commission_calculator():
    """Seller commission on a sale price."""
    data = _json_body()
    quote = calculate_commission(data.get("price"), data.get("rate"))
    return jsonify({"status": "success", "commission": describe_commission(quote)})


# Lead capture
@api.route("/contact", methods=["POST"])
def submit_contact():
    """Contact form."""
    enforce_rate_limit("contact")
    submission = validate_contact(_json_body())
    with get_connection() as conn:
        submission_id = save_contact_submission(conn, submission)
    return jsonify({"message": "Message sent successfully", "id": submission_id}), 201


@api.route("/estimate", methods=["POST"])
def submit_estimate():
    """Property valuation request."""
    enforce_rate_limit("estimate")
    estimate = validate_estimate(_json_body())
    with get_connection() as conn:
        request_id = save_estimate_request(conn, estimate)
    return jsonify({"message": "Estimate request submitted successfully", "id": request_id}), 201


@api.route("/inquiries", methods=["POST"])
def submit_inquiry():
    """Message to a listing's owner."""
    enforce_rate_limit("message")
    inquiry = validate_inquiry(_json_body())
    with get_connection() as conn:
        message = create_inquiry(conn, inquiry)
    return jsonify(message), 201


def register_routes(app):
    """Register API routes with Flask app."""
    app.register_blueprint(api)

    # Make sure the tables exist
    try:
        with get_connection() as conn:
            created = init_schema(conn)
        if created:
            logger.info("Initialized tables: %s", ", ".join(created))
    except DatabaseError as e:
        logger.warning("Failed to initialize database schema: %s", e)

    logger.info("API routes registered")
