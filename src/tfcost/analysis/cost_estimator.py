"""Estimate the cost of a single resource from the pricing catalog."""

import re
from typing import Dict, Any, Optional, Callable, Tuple
from ..contracts.cost import CostEstimate, CloudProvider, Confidence
from ..pricing.catalog import HOURS_PER_MONTH, PRICING_CATALOG, PricingCatalog, unit_price
from ..utils.logging import get_logger

logger = get_logger("analysis.cost_estimator")

# Resource type prefix -> provider, tested in order
PROVIDER_PREFIXES: Tuple[Tuple[str, CloudProvider], ...] = (
    ("aws_", CloudProvider.AWS),
    ("google_", CloudProvider.GOOGLE),
    ("azurerm_", CloudProvider.AZURE),
)

# Prices used when a size/tier key is not in the catalog: (monthly, hourly)
AWS_INSTANCE_FALLBACK = (20.0, 0.027)
AWS_RDS_FALLBACK = (25.0, 0.034)
AWS_EBS_FALLBACK_RATE = 0.08
AWS_LB_FALLBACK = (16.43, 0.0225)
AWS_S3_BASE = (5.0, 0.007)
GCP_MACHINE_FALLBACK = (25.0, 0.034)
GCP_SQL_FALLBACK = (20.0, 0.027)
GCP_DISK_FALLBACK_RATE = 0.04
GCS_FALLBACK_MONTHLY = 2.0
GCS_ASSUMED_SIZE_GB = 100
FILESTORE_FALLBACK_RATE = 0.2
DEFAULT_NODE_COUNT = 3

# Priced fields returned by a handler; address and name are filled in by the caller
Pricing = Dict[str, Any]
Handler = Callable[[str, Dict[str, Any], Dict[str, Dict[str, float]]], Optional[Pricing]]


def get_provider_from_resource_type(resource_type: str) -> CloudProvider:
    """Map a resource type prefix to its provider."""
    for prefix, provider in PROVIDER_PREFIXES:
        if resource_type.startswith(prefix):
            return provider
    return CloudProvider.UNKNOWN


def _parse_int(value: Any, default: int) -> int:
    """Leading integer of a value (e.g. "100GB" -> 100); default when absent or not positive."""
    if isinstance(value, bool) or value is None:
        return default
    match = re.match(r"\s*([+-]?\d+)", str(value))
    if not match:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def _first_block(value: Any) -> Dict[str, Any]:
    """First element of a nested Terraform block, which may be a list or an object."""
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, dict) else {}


def _size_key(attributes: Dict[str, Any], name: str, default: str) -> str:
    value = attributes.get(name)
    return str(value) if value else default


def _priced(
    monthly: float,
    hourly: float,
    details: str,
    confidence: Confidence,
    instance_type: Optional[str] = None,
) -> Pricing:
    return {
        "monthly_cost": max(monthly, 0.0),
        "hourly_cost": max(hourly, 0.0),
        "details": details,
        "confidence": confidence,
        "instance_type": instance_type,
    }


def _sized(
    prices: Dict[str, Dict[str, float]],
    size: str,
    fallback: Tuple[float, float],
    label: str,
    unknown_label: str,
) -> Pricing:
    """Price a resource whose cost depends on a size/tier key."""
    entry = prices.get(size)
    if entry is None:
        monthly, hourly = fallback
        return _priced(monthly, hourly, f"{unknown_label}: {size}", Confidence.LOW, size)
    monthly, hourly = unit_price(entry)
    return _priced(monthly, hourly, f"{label} {size}", Confidence.HIGH, size)


def _per_gb_rate(entry: Optional[Dict[str, float]]) -> Optional[float]:
    """Per-GB monthly rate of a capacity entry, or None when it has none."""
    if entry is None or entry.get("per_gb_monthly") is None:
        return None
    return float(entry["per_gb_monthly"])


def _capacity(monthly: float, details: str, confidence: Confidence) -> Pricing:
    """Price a capacity-based resource; hourly is derived from monthly."""
    return _priced(monthly, monthly / HOURS_PER_MONTH, details, confidence)


def _fixed(
    prices: Dict[str, Dict[str, float]],
    sub_type: str,
    default_sub_type: str,
    fallback: Tuple[float, float],
    details: str,
) -> Pricing:
    """
    Price a fixed-fee resource.

    An exact sub-type match is high confidence; otherwise the default
    sub-type's price is substituted with medium confidence.
    """
    entry = prices.get(sub_type)
    if entry is not None:
        monthly, hourly = unit_price(entry)
        return _priced(monthly, hourly, details, Confidence.HIGH)
    default_entry = prices.get(default_sub_type)
    monthly, hourly = unit_price(default_entry) if default_entry is not None else fallback
    return _priced(monthly, hourly, details, Confidence.MEDIUM)


# AWS

def _aws_instance(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    instance_type = _size_key(attributes, "instance_type", "t3.micro")
    return _sized(prices, instance_type, AWS_INSTANCE_FALLBACK, "EC2 instance", "Unknown instance type")


def _aws_rds_instance(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    instance_class = _size_key(attributes, "instance_class", "db.t3.micro")
    return _sized(prices, instance_class, AWS_RDS_FALLBACK, "RDS instance", "Unknown RDS instance class")


def _aws_ebs_volume(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    volume_type = _size_key(attributes, "type", "gp3")
    size = _parse_int(attributes.get("size"), 20)
    rate = _per_gb_rate(prices.get(volume_type))
    if rate is None:
        return _capacity(size * AWS_EBS_FALLBACK_RATE, f"Unknown EBS volume type: {volume_type}", Confidence.LOW)
    return _capacity(size * rate, f"EBS {volume_type} volume {size}GB", Confidence.HIGH)


def _aws_lb(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    lb_type = _size_key(attributes, "load_balancer_type", "application")
    return _fixed(prices, lb_type, "application", AWS_LB_FALLBACK, f"{lb_type} load balancer")


def _aws_nat_gateway(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    return _fixed(prices, "default", "default", (32.85, 0.045), "NAT Gateway")


def _aws_vpc_endpoint(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    endpoint_type = _size_key(attributes, "vpc_endpoint_type", "Interface").lower()
    return _fixed(prices, endpoint_type, "interface", (7.3, 0.01), f"VPC {endpoint_type} endpoint")


def _aws_s3_bucket(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    # Cost depends on usage; only a base estimate is possible
    monthly, hourly = AWS_S3_BASE
    return _priced(monthly, hourly, "S3 bucket (base estimate, actual cost depends on usage)", Confidence.LOW)


# Google Cloud

def _gcp_compute_instance(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    machine_type = _size_key(attributes, "machine_type", "e2-medium")
    return _sized(prices, machine_type, GCP_MACHINE_FALLBACK, "Compute Engine", "Unknown machine type")


def classify_gke_cluster(attributes: Dict[str, Any]) -> str:
    """
    Classify a GKE cluster as autopilot, regional or zonal.

    A cluster without a `zone` attribute is treated as regional.
    """
    if attributes.get("enable_autopilot"):
        return "autopilot"
    if not attributes.get("zone"):
        return "regional"
    return "zonal"


def _gcp_container_cluster(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    cluster_type = classify_gke_cluster(attributes)
    entry = prices.get(cluster_type)
    monthly, hourly = unit_price(entry) if entry is not None else (73.0, 0.1)
    confidence = Confidence.HIGH if entry is not None else Confidence.MEDIUM
    return _priced(monthly, hourly, f"GKE {cluster_type} cluster management fee", confidence, cluster_type)


def _gcp_node_pool(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    node_config = _first_block(attributes.get("node_config"))
    machine_type = _size_key(node_config, "machine_type", "e2-medium")
    node_count = (
        _parse_int(attributes.get("node_count"), 0)
        or _parse_int(attributes.get("initial_node_count"), 0)
        or DEFAULT_NODE_COUNT
    )

    entry = prices.get(machine_type)
    if entry is None:
        monthly, hourly = GCP_MACHINE_FALLBACK
        return _priced(
            monthly * node_count,
            hourly * node_count,
            f"Unknown machine type: {machine_type} ({node_count} nodes)",
            Confidence.LOW,
            machine_type,
        )

    monthly, hourly = unit_price(entry)
    return _priced(
        monthly * node_count,
        hourly * node_count,
        f"GKE node pool: {node_count} x {machine_type}",
        Confidence.HIGH,
        f"{machine_type} x{node_count}",
    )


def _gcp_compute_disk(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    disk_type = _size_key(attributes, "type", "pd-standard")
    size = _parse_int(attributes.get("size"), 100)
    rate = _per_gb_rate(prices.get(disk_type))
    if rate is None:
        return _capacity(size * GCP_DISK_FALLBACK_RATE, f"Unknown disk type: {disk_type} ({size}GB)", Confidence.LOW)
    return _capacity(size * rate, f"Persistent disk {disk_type} {size}GB", Confidence.HIGH)


def _gcp_sql_instance(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    tier = _size_key(_first_block(attributes.get("settings")), "tier", "db-f1-micro")
    return _sized(prices, tier, GCP_SQL_FALLBACK, "Cloud SQL", "Unknown Cloud SQL tier")


def _gcp_storage_bucket(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    storage_class = _size_key(attributes, "storage_class", "STANDARD")
    rate = _per_gb_rate(prices.get(storage_class.lower()))
    # Actual usage is unknown, assume a fixed bucket size
    monthly = GCS_ASSUMED_SIZE_GB * rate if rate is not None else GCS_FALLBACK_MONTHLY
    return _capacity(
        monthly,
        f"Cloud Storage {storage_class} (estimated {GCS_ASSUMED_SIZE_GB}GB)",
        Confidence.LOW,
    )


def _gcp_global_forwarding_rule(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    return _fixed(prices, "http_https", "http_https", (18.25, 0.025), "Load Balancer forwarding rule")


_FORWARDING_RULE_SCHEMES = {"EXTERNAL": "network", "INTERNAL": "internal"}


def _gcp_forwarding_rule(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    scheme = _size_key(attributes, "load_balancing_scheme", "EXTERNAL").upper()
    sub_type = _FORWARDING_RULE_SCHEMES.get(scheme, scheme.lower())
    return _fixed(prices, sub_type, "network", (18.25, 0.025), "Load Balancer forwarding rule")


def _gcp_router(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    return _fixed(prices, "default", "default", (10.95, 0.015), "Cloud Router")


def _gcp_router_nat(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    return _fixed(prices, "default", "default", (32.85, 0.045), "Cloud NAT Gateway")


def _gcp_dns_managed_zone(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    return _fixed(prices, "default", "default", (0.2, 0.2 / HOURS_PER_MONTH), "Cloud DNS managed zone")


def _gcp_filestore(resource_type: str, attributes: Dict[str, Any], prices: Dict[str, Dict[str, float]]) -> Pricing:
    tier = _size_key(attributes, "tier", "BASIC_HDD")
    capacity_gb = _parse_int(_first_block(attributes.get("file_shares")).get("capacity_gb"), 1024)
    rate = _per_gb_rate(prices.get(tier.lower()))
    confidence = Confidence.HIGH
    if rate is None:
        rate = _per_gb_rate(prices.get("basic_hdd"))
        confidence = Confidence.LOW
    if rate is None:
        rate = FILESTORE_FALLBACK_RATE
    return _capacity(capacity_gb * rate, f"Filestore {tier} {capacity_gb}GB", confidence)


# Resource type -> (catalog table, handler)
RESOURCE_HANDLERS: Dict[CloudProvider, Dict[str, Tuple[str, Handler]]] = {
    CloudProvider.AWS: {
        "aws_instance": ("aws_instance", _aws_instance),
        "aws_rds_instance": ("aws_rds_instance", _aws_rds_instance),
        "aws_db_instance": ("aws_rds_instance", _aws_rds_instance),
        "aws_ebs_volume": ("aws_ebs_volume", _aws_ebs_volume),
        "aws_lb": ("aws_lb", _aws_lb),
        "aws_nat_gateway": ("aws_nat_gateway", _aws_nat_gateway),
        "aws_vpc_endpoint": ("aws_vpc_endpoint", _aws_vpc_endpoint),
        "aws_s3_bucket": ("aws_s3_bucket", _aws_s3_bucket),
    },
    CloudProvider.GOOGLE: {
        "google_compute_instance": ("google_compute_instance", _gcp_compute_instance),
        "google_container_cluster": ("google_container_cluster", _gcp_container_cluster),
        "google_container_node_pool": ("google_container_node_pool", _gcp_node_pool),
        "google_compute_disk": ("google_compute_disk", _gcp_compute_disk),
        "google_sql_database_instance": ("google_sql_database_instance", _gcp_sql_instance),
        "google_storage_bucket": ("google_storage_bucket", _gcp_storage_bucket),
        "google_compute_global_forwarding_rule": ("google_compute_global_forwarding_rule", _gcp_global_forwarding_rule),
        "google_compute_forwarding_rule": ("google_compute_forwarding_rule", _gcp_forwarding_rule),
        "google_compute_router": ("google_compute_router", _gcp_router),
        "google_compute_router_nat": ("google_compute_router_nat", _gcp_router_nat),
        "google_dns_managed_zone": ("google_dns_managed_zone", _gcp_dns_managed_zone),
        "google_filestore_instance": ("google_filestore_instance", _gcp_filestore),
    },
    CloudProvider.AZURE: {},
}


def estimate_resource_cost(
    resource_type: str,
    attributes: Optional[Dict[str, Any]] = None,
    resource_address: Optional[str] = None,
    resource_name: Optional[str] = None,
    catalog: Optional[PricingCatalog] = None,
) -> Optional[CostEstimate]:
    """
    Estimate the monthly and hourly cost of one resource.

    Returns None when the resource is not billable or not modelled: the
    provider prefix is unrecognized or the provider has no pricing for the
    resource type. Unrecognized sizes/tiers never fail; they degrade to a
    default price with low or medium confidence.

    Args:
        resource_type: Terraform resource type, e.g. aws_instance
        attributes: Resource attributes (state attributes or plan "after" values)
        resource_address: Address to report (default: resource type)
        resource_name: Name to report (default: empty)
        catalog: Pricing catalog (default: built-in catalog)

    Returns:
        CostEstimate or None
    """
    provider = get_provider_from_resource_type(resource_type)
    handler_entry = RESOURCE_HANDLERS.get(provider, {}).get(resource_type)
    if handler_entry is None:
        logger.debug(f"No pricing model for {resource_type} (provider: {provider.value})")
        return None

    table_name, handler = handler_entry
    prices = (catalog if catalog is not None else PRICING_CATALOG).get(provider.value, {}).get(table_name, {})
    pricing = handler(resource_type, attributes or {}, prices)
    if pricing is None:
        return None

    return CostEstimate(
        resource_address=resource_address or resource_type,
        resource_type=resource_type,
        resource_name=resource_name or "",
        provider=provider,
        **pricing,
    )
