"""
Transaction model for spending and income records.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from budget_allocator_mcp.models.category import new_id
from budget_allocator_mcp.models.money import PositiveAmount

TransactionType = Literal["expense", "income"]


class Transaction(BaseModel):
    """
    A single money movement recorded against a category.

    Expenses increase the spent amount of their category (and subcategory,
    when given). Income transactions are only logged.
    """

    model_config = {"strict": True, "populate_by_name": True}

    # Required fields
    amount: PositiveAmount
    category_id: str
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")

    id: str = Field(default_factory=new_id)
    description: str = ""
    subcategory_id: Optional[str] = None
    type: TransactionType = "expense"
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: List[str]) -> List[str]:
        """Strip whitespace and drop empty or repeated tags."""
        seen: List[str] = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"

    @property
    def month_key(self) -> str:
        """Month of the transaction as YYYY-MM."""
        return self.date[:7]
