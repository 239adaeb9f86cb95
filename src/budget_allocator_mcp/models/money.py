"""
Money value types shared by the budget models.

Amounts are rounded to cents when validated, so stored allocations and the
bounds they are checked against always agree.
"""

from typing import Annotated

from pydantic import AfterValidator, Field

DEFAULT_CURRENCY = "USD"


def to_cents(amount: float) -> float:
    """Round an amount to two decimal places."""
    return round(amount, 2)


# Allocations and balances
Amount = Annotated[float, Field(ge=0, le=1_000_000_000), AfterValidator(to_cents)]

# Transaction amounts must be strictly positive
PositiveAmount = Annotated[float, Field(gt=0, le=1_000_000_000), AfterValidator(to_cents)]

CurrencyCode = Annotated[str, Field(pattern=r"^[A-Z]{3}$")]
