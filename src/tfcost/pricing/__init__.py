from .catalog import (
    HOURS_PER_MONTH,
    PRICING_CATALOG,
    AWS_PRICING,
    GCP_PRICING,
    AZURE_PRICING,
    PricingCatalog,
    get_price_entry,
    unit_price,
    merge_pricing_overrides,
)

__all__ = [
    "HOURS_PER_MONTH",
    "PRICING_CATALOG",
    "AWS_PRICING",
    "GCP_PRICING",
    "AZURE_PRICING",
    "PricingCatalog",
    "get_price_entry",
    "unit_price",
    "merge_pricing_overrides",
]
