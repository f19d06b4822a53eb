"""
Pydantic models for stored records.

Records keep the camelCase field names of the stored JSON so blobs
written by earlier versions of the application load unchanged.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from triarb.core.types import ConversionRate, Currency
from triarb.utils.time import utc_now


class CurrencyRecord(BaseModel):
    """Serialized Currency."""

    id: str
    name: str
    icon: str = ""
    is_custom_icon: bool = Field(default=False, alias="isCustomIcon")
    gold_cost_per_unit: float = Field(default=0.0, ge=0.0, alias="goldCostPerUnit")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_domain(cls, currency: Currency) -> "CurrencyRecord":
        """Build a record from a domain currency."""
        return cls(
            id=currency.id,
            name=currency.name,
            icon=currency.icon,
            is_custom_icon=currency.is_custom_icon,
            gold_cost_per_unit=currency.gold_cost_per_unit,
            created_at=currency.created_at,
        )

    def to_domain(self) -> Currency:
        """Convert to a domain currency."""
        return Currency(
            id=self.id,
            name=self.name,
            icon=self.icon,
            gold_cost_per_unit=self.gold_cost_per_unit,
            is_custom_icon=self.is_custom_icon,
            created_at=self.created_at,
        )


class RateRecord(BaseModel):
    """Serialized ConversionRate."""

    from_currency_id: str = Field(alias="fromCurrencyId")
    to_currency_id: str = Field(alias="toCurrencyId")
    rate: float = Field(gt=0.0)
    from_quantity: float | None = Field(default=None, alias="fromQuantity")
    to_quantity: float | None = Field(default=None, alias="toQuantity")
    last_updated: datetime = Field(default_factory=utc_now, alias="lastUpdated")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_domain(cls, rate: ConversionRate) -> "RateRecord":
        """Build a record from a domain rate."""
        return cls(
            from_currency_id=rate.from_currency_id,
            to_currency_id=rate.to_currency_id,
            rate=rate.rate,
            from_quantity=rate.from_quantity,
            to_quantity=rate.to_quantity,
            last_updated=rate.last_updated,
        )

    def to_domain(self) -> ConversionRate:
        """Convert to a domain rate."""
        return ConversionRate(
            from_currency_id=self.from_currency_id,
            to_currency_id=self.to_currency_id,
            rate=self.rate,
            from_quantity=self.from_quantity,
            to_quantity=self.to_quantity,
            last_updated=self.last_updated,
        )
