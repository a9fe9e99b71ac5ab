"""
Salary Value Object
Immutable pay figure with period and negotiability
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from core.exceptions import ValidationException


class SalaryType(str, Enum):
    """Pay period of a salary amount"""
    MONTHLY = "monthly"
    ANNUAL = "annual"


@dataclass(frozen=True)
class Salary:
    """Salary value object"""

    amount: float
    type: SalaryType = SalaryType.MONTHLY
    currency: str = "INR"
    is_negotiable: bool = False

    def __post_init__(self):
        """Validate salary amount and period"""
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float)):
            raise ValidationException("salary.amount", "must be a number")

        if self.amount < 0:
            raise ValidationException("salary.amount", "cannot be negative")

        if not isinstance(self.type, SalaryType):
            try:
                object.__setattr__(self, "type", SalaryType(self.type))
            except ValueError:
                raise ValidationException("salary.type", f"unknown salary type: {self.type}")

    def annual_amount(self) -> float:
        """Normalize to a yearly figure"""
        if self.type == SalaryType.MONTHLY:
            return self.amount * 12
        return self.amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "type": self.type.value,
            "currency": self.currency,
            "isNegotiable": self.is_negotiable,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_currency: str = "INR") -> "Salary":
        return cls(
            amount=data.get("amount", 0),
            type=data.get("type") or SalaryType.MONTHLY,
            currency=data.get("currency") or default_currency,
            is_negotiable=bool(data.get("isNegotiable", False)),
        )

    def __str__(self) -> str:
        suffix = " (negotiable)" if self.is_negotiable else ""
        return f"{self.currency} {self.amount:,.0f}/{self.type.value}{suffix}"
