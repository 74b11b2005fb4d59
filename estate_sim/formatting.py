"""Human-readable formatting for history messages and console output."""

from estate_sim.models.enums import PropertyType

PROPERTY_TYPE_LABELS = {
    PropertyType.APARTMENT: "Apartment",
    PropertyType.TOWNHOUSE: "Townhouse",
    PropertyType.SINGLE_FAMILY: "Single-Family Home",
    PropertyType.LUXURY: "Luxury Residence",
}


def format_currency(amount: float) -> str:
    """Format an amount as whole dollars, e.g. ``$1,250`` or ``-$40``."""
    rounded = round(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a 0-100 value, e.g. ``82.5%``."""
    return f"{value:.{decimals}f}%"


def format_interest_rate(rate: float) -> str:
    """Format an annual rate fraction, e.g. ``0.0375`` as ``3.75%``."""
    return f"{rate * 100:.2f}%"


def format_rate_offset(offset: float) -> str:
    """Format a rent premium, e.g. ``0.02`` as ``2.0%``."""
    return f"{offset * 100:.1f}%"


def format_lease_countdown(months: int) -> str:
    """Describe the months left on a lease."""
    if months <= 0:
        return "Lease ending"
    if months == 1:
        return "1 month remaining"
    return f"{months} months remaining"


def format_property_type(property_type: PropertyType) -> str:
    return PROPERTY_TYPE_LABELS.get(property_type, str(property_type.value).replace("_", " ").title())
