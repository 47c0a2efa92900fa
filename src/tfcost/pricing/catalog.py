"""Static pricing catalog: provider -> resource type -> size/tier key -> unit price.

Entries are either instance prices (`hourly`, `monthly`), capacity rates
(`per_gb_monthly`) or a single `default` fixed fee. Prices are simplified
on-demand USD list prices.
"""

import copy
from typing import Dict, Any, Optional, Tuple

HOURS_PER_MONTH = 730

PriceTable = Dict[str, Dict[str, Dict[str, float]]]
PricingCatalog = Dict[str, PriceTable]

AWS_PRICING: PriceTable = {
    "aws_instance": {
        "t2.micro": {"hourly": 0.0116, "monthly": 8.47},
        "t2.small": {"hourly": 0.023, "monthly": 16.79},
        "t2.medium": {"hourly": 0.0464, "monthly": 33.87},
        "t3.micro": {"hourly": 0.0104, "monthly": 7.59},
        "t3.small": {"hourly": 0.0208, "monthly": 15.18},
        "t3.medium": {"hourly": 0.0416, "monthly": 30.37},
        "m5.large": {"hourly": 0.096, "monthly": 70.08},
        "m5.xlarge": {"hourly": 0.192, "monthly": 140.16},
        "c5.large": {"hourly": 0.085, "monthly": 62.05},
        "r5.large": {"hourly": 0.126, "monthly": 91.98},
    },
    "aws_rds_instance": {
        "db.t3.micro": {"hourly": 0.017, "monthly": 12.41},
        "db.t3.small": {"hourly": 0.034, "monthly": 24.82},
        "db.t3.medium": {"hourly": 0.068, "monthly": 49.64},
        "db.r5.large": {"hourly": 0.24, "monthly": 175.2},
        "db.r5.xlarge": {"hourly": 0.48, "monthly": 350.4},
    },
    "aws_s3_bucket": {
        "standard": {"per_gb_monthly": 0.023},
        "ia": {"per_gb_monthly": 0.0125},
        "glacier": {"per_gb_monthly": 0.004},
    },
    "aws_ebs_volume": {
        "gp2": {"per_gb_monthly": 0.1},
        "gp3": {"per_gb_monthly": 0.08},
        "io1": {"per_gb_monthly": 0.125},
        "io2": {"per_gb_monthly": 0.125},
    },
    "aws_lb": {
        "application": {"hourly": 0.0225, "monthly": 16.43},
        "network": {"hourly": 0.0225, "monthly": 16.43},
    },
    "aws_nat_gateway": {
        "default": {"hourly": 0.045, "monthly": 32.85},
    },
    "aws_vpc_endpoint": {
        "interface": {"hourly": 0.01, "monthly": 7.3},
        # Gateway endpoints are free
        "gateway": {"monthly": 0},
    },
}

GCP_PRICING: PriceTable = {
    "google_compute_instance": {
        "e2-micro": {"hourly": 0.008, "monthly": 5.84},
        "e2-small": {"hourly": 0.0168, "monthly": 12.26},
        "e2-medium": {"hourly": 0.0336, "monthly": 24.53},
        "e2-standard-2": {"hourly": 0.0672, "monthly": 49.06},
        "e2-standard-4": {"hourly": 0.1344, "monthly": 98.11},
        "n1-standard-1": {"hourly": 0.0475, "monthly": 34.68},
        "n1-standard-2": {"hourly": 0.095, "monthly": 69.35},
        "n1-standard-4": {"hourly": 0.19, "monthly": 138.7},
        "n2-standard-2": {"hourly": 0.097, "monthly": 70.81},
        "n2-standard-4": {"hourly": 0.194, "monthly": 141.62},
        "n2-standard-8": {"hourly": 0.388, "monthly": 283.24},
        "c2-standard-4": {"hourly": 0.1687, "monthly": 123.15},
        "c2-standard-8": {"hourly": 0.3374, "monthly": 246.3},
        "c2-standard-16": {"hourly": 0.6748, "monthly": 492.6},
    },
    # GKE management fee; tiers share one price today
    "google_container_cluster": {
        "zonal": {"hourly": 0.1, "monthly": 73.0},
        "regional": {"hourly": 0.1, "monthly": 73.0},
        "autopilot": {"hourly": 0.1, "monthly": 73.0},
    },
    "google_container_node_pool": {
        "e2-medium": {"hourly": 0.0336, "monthly": 24.53},
        "e2-standard-2": {"hourly": 0.0672, "monthly": 49.06},
        "e2-standard-4": {"hourly": 0.1344, "monthly": 98.11},
        "n1-standard-1": {"hourly": 0.0475, "monthly": 34.68},
        "n1-standard-2": {"hourly": 0.095, "monthly": 69.35},
        "n1-standard-4": {"hourly": 0.19, "monthly": 138.7},
        "n2-standard-2": {"hourly": 0.097, "monthly": 70.81},
        "n2-standard-4": {"hourly": 0.194, "monthly": 141.62},
        "c2-standard-4": {"hourly": 0.1687, "monthly": 123.15},
    },
    "google_compute_disk": {
        "pd-standard": {"per_gb_monthly": 0.04},
        "pd-balanced": {"per_gb_monthly": 0.1},
        "pd-ssd": {"per_gb_monthly": 0.17},
        # Base price, varies by IOPS
        "pd-extreme": {"per_gb_monthly": 0.125},
    },
    "google_sql_database_instance": {
        "db-f1-micro": {"hourly": 0.015, "monthly": 10.95},
        "db-g1-small": {"hourly": 0.05, "monthly": 36.5},
        "db-n1-standard-1": {"hourly": 0.0825, "monthly": 60.23},
        "db-n1-standard-2": {"hourly": 0.165, "monthly": 120.45},
        "db-n1-standard-4": {"hourly": 0.33, "monthly": 240.9},
        "db-n1-highmem-2": {"hourly": 0.1975, "monthly": 144.18},
        "db-n1-highmem-4": {"hourly": 0.395, "monthly": 288.35},
    },
    "google_storage_bucket": {
        "standard": {"per_gb_monthly": 0.02},
        "nearline": {"per_gb_monthly": 0.01},
        "coldline": {"per_gb_monthly": 0.004},
        "archive": {"per_gb_monthly": 0.0012},
    },
    "google_compute_global_forwarding_rule": {
        "http_https": {"hourly": 0.025, "monthly": 18.25},
    },
    "google_compute_forwarding_rule": {
        "network": {"hourly": 0.025, "monthly": 18.25},
        "internal": {"hourly": 0.025, "monthly": 18.25},
    },
    "google_compute_router": {
        "default": {"hourly": 0.015, "monthly": 10.95},
    },
    "google_compute_router_nat": {
        "default": {"hourly": 0.045, "monthly": 32.85},
    },
    # First 25 zones free, then $0.20/zone
    "google_dns_managed_zone": {
        "default": {"monthly": 0.2},
    },
    "google_filestore_instance": {
        "basic_hdd": {"per_gb_monthly": 0.2},
        "basic_ssd": {"per_gb_monthly": 0.3},
        "high_scale_ssd": {"per_gb_monthly": 0.6},
    },
}

# azurerm_ resources are recognized but not yet priced
AZURE_PRICING: PriceTable = {}

PRICING_CATALOG: PricingCatalog = {
    "aws": AWS_PRICING,
    "google": GCP_PRICING,
    "azure": AZURE_PRICING,
}


def get_price_entry(
    catalog: PricingCatalog,
    provider: str,
    resource_type: str,
    key: str,
) -> Optional[Dict[str, float]]:
    """Look up a single catalog entry, or None when absent."""
    return catalog.get(provider, {}).get(resource_type, {}).get(key)


def unit_price(entry: Dict[str, float]) -> Tuple[float, float]:
    """
    Return (monthly, hourly) for an instance-style entry.

    Entries carrying only a monthly price derive the hourly price from it.
    """
    monthly = float(entry.get("monthly", 0.0))
    hourly = entry.get("hourly")
    if hourly is None:
        return monthly, monthly / HOURS_PER_MONTH
    return monthly, float(hourly)


def merge_pricing_overrides(overrides: Optional[Dict[str, Any]], base: Optional[PricingCatalog] = None) -> PricingCatalog:
    """
    Return a new catalog with overrides deep-merged over the base catalog.

    The base catalog is never mutated.

    Args:
        overrides: Nested provider -> resource_type -> key -> price mapping
        base: Catalog to start from (default: built-in catalog)

    Returns:
        Merged pricing catalog
    """
    merged = copy.deepcopy(base if base is not None else PRICING_CATALOG)
    for provider, tables in (overrides or {}).items():
        provider_tables = merged.setdefault(provider, {})
        for resource_type, entries in (tables or {}).items():
            type_entries = provider_tables.setdefault(resource_type, {})
            for key, price in (entries or {}).items():
                type_entries[key] = dict(price)
    return merged
