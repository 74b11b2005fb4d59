"""Numeric helpers shared by the engine."""


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def round_currency(amount: float) -> float:
    """Round to cents."""
    return round(amount, 2)


def round_rate(rate: float) -> float:
    """Round an annual rate to four decimal places."""
    return round(rate, 4)
