"""Currency book management and icon lookup."""

from triarb.market.book import CurrencyBook, find_rate_outliers, generate_currency_id
from triarb.market.icons import DirectoryIconResolver, icon_for


__all__ = [
    "CurrencyBook",
    "DirectoryIconResolver",
    "find_rate_outliers",
    "generate_currency_id",
    "icon_for",
]
