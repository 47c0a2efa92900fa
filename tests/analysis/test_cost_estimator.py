"""Tests for single-resource cost estimation."""

import pytest
from tfcost.analysis.cost_estimator import (
    estimate_resource_cost,
    get_provider_from_resource_type,
    classify_gke_cluster,
)
from tfcost.contracts.cost import CloudProvider
from tfcost.pricing import HOURS_PER_MONTH, merge_pricing_overrides


class TestProviderDetection:
    """Test provider detection and unmodelled resources."""

    def test_prefixes(self):
        """Test recognized prefixes."""
        assert get_provider_from_resource_type("aws_instance") == CloudProvider.AWS
        assert get_provider_from_resource_type("google_compute_disk") == CloudProvider.GOOGLE
        assert get_provider_from_resource_type("azurerm_linux_virtual_machine") == CloudProvider.AZURE
        assert get_provider_from_resource_type("kubernetes_deployment") == CloudProvider.UNKNOWN

    def test_unknown_provider_is_none(self):
        """Test unknown providers are not billable."""
        assert estimate_resource_cost("kubernetes_deployment", {"replicas": 3}) is None

    def test_unmapped_type_is_none(self):
        """Test known provider without pricing for the type."""
        assert estimate_resource_cost("aws_iam_role", {}) is None
        assert estimate_resource_cost("azurerm_linux_virtual_machine", {"size": "Standard_B1s"}) is None


class TestSizedResources:
    """Test instance-style pricing."""

    def test_aws_instance_hit(self):
        """Test exact catalog match is high confidence."""
        estimate = estimate_resource_cost(
            "aws_instance", {"instance_type": "m5.large"},
            resource_address="aws_instance.web", resource_name="web",
        )
        assert estimate.monthly_cost == 70.08
        assert estimate.hourly_cost == 0.096
        assert estimate.confidence == "high"
        assert estimate.instance_type == "m5.large"
        assert estimate.provider == "aws"
        assert estimate.resource_address == "aws_instance.web"
        assert estimate.resource_name == "web"

    def test_aws_instance_unknown_type(self):
        """Test unknown instance type falls back to the default price."""
        estimate = estimate_resource_cost("aws_instance", {"instance_type": "z9.mega"})
        assert estimate.confidence == "low"
        assert estimate.monthly_cost == 20
        assert "z9.mega" in estimate.details

    def test_aws_instance_default_type(self):
        """Test missing instance_type uses t3.micro."""
        estimate = estimate_resource_cost("aws_instance", {})
        assert estimate.instance_type == "t3.micro"
        assert estimate.monthly_cost == 7.59

    def test_rds_and_db_instance_alias(self):
        """Test RDS pricing for both resource type names."""
        rds = estimate_resource_cost("aws_rds_instance", {"instance_class": "db.t3.small"})
        db = estimate_resource_cost("aws_db_instance", {"instance_class": "db.t3.small"})
        assert rds.monthly_cost == db.monthly_cost == 24.82

        unknown = estimate_resource_cost("aws_db_instance", {"instance_class": "db.x99.huge"})
        assert unknown.monthly_cost == 25
        assert unknown.confidence == "low"

    def test_cloud_sql_tier(self):
        """Test tier from settings block, list or object shaped."""
        as_list = estimate_resource_cost("google_sql_database_instance", {"settings": [{"tier": "db-g1-small"}]})
        as_dict = estimate_resource_cost("google_sql_database_instance", {"settings": {"tier": "db-g1-small"}})
        default = estimate_resource_cost("google_sql_database_instance", {})
        assert as_list.monthly_cost == as_dict.monthly_cost == 36.5
        assert default.instance_type == "db-f1-micro"

    def test_gcp_machine_fallback(self):
        """Test unknown machine type fallback."""
        estimate = estimate_resource_cost("google_compute_instance", {"machine_type": "m3-ultramem-32"})
        assert estimate.monthly_cost == 25
        assert estimate.confidence == "low"


class TestCapacityResources:
    """Test size-based pricing."""

    @pytest.mark.parametrize("resource_type,attributes", [
        ("aws_ebs_volume", {"type": "gp2", "size": 100}),
        ("aws_ebs_volume", {"type": "st1", "size": 500}),
        ("google_compute_disk", {"type": "pd-ssd", "size": "250"}),
        ("google_storage_bucket", {"storage_class": "NEARLINE"}),
        ("google_filestore_instance", {"tier": "BASIC_SSD", "file_shares": [{"capacity_gb": 2048}]}),
    ])
    def test_hourly_is_monthly_over_730(self, resource_type, attributes):
        """Test the hourly price derivation."""
        estimate = estimate_resource_cost(resource_type, attributes)
        assert abs(estimate.hourly_cost - estimate.monthly_cost / HOURS_PER_MONTH) < 1e-9

    def test_ebs_volume(self):
        """Test EBS price by size and type."""
        estimate = estimate_resource_cost("aws_ebs_volume", {"type": "gp2", "size": 100})
        assert estimate.monthly_cost == pytest.approx(10.0)
        assert estimate.confidence == "high"

    def test_ebs_defaults(self):
        """Test EBS defaults to 20GB gp3."""
        estimate = estimate_resource_cost("aws_ebs_volume", {})
        assert estimate.monthly_cost == pytest.approx(1.6)

    def test_ebs_unknown_type(self):
        """Test unknown volume type uses the fallback rate."""
        estimate = estimate_resource_cost("aws_ebs_volume", {"type": "st1", "size": 500})
        assert estimate.monthly_cost == pytest.approx(40.0)
        assert estimate.confidence == "low"

    def test_unparseable_size_uses_default(self):
        """Test non-numeric and negative sizes fall back to the default size."""
        junk = estimate_resource_cost("google_compute_disk", {"size": "lots"})
        negative = estimate_resource_cost("google_compute_disk", {"size": -50})
        assert junk.monthly_cost == pytest.approx(4.0)
        assert negative.monthly_cost == pytest.approx(4.0)

    def test_gcs_bucket(self):
        """Test GCS assumes 100GB and is always low confidence."""
        standard = estimate_resource_cost("google_storage_bucket", {"storage_class": "STANDARD"})
        unknown = estimate_resource_cost("google_storage_bucket", {"storage_class": "MYSTERY"})
        assert standard.monthly_cost == pytest.approx(2.0)
        assert standard.confidence == "low"
        assert unknown.monthly_cost == 2.0
        assert unknown.confidence == "low"

    def test_filestore(self):
        """Test filestore capacity pricing and tier fallback."""
        default = estimate_resource_cost("google_filestore_instance", {})
        unknown = estimate_resource_cost("google_filestore_instance", {"tier": "ENTERPRISE"})
        assert default.monthly_cost == pytest.approx(1024 * 0.2)
        assert default.confidence == "high"
        assert unknown.monthly_cost == pytest.approx(1024 * 0.2)
        assert unknown.confidence == "low"

    def test_s3_bucket_base_estimate(self):
        """Test S3 flat base estimate."""
        estimate = estimate_resource_cost("aws_s3_bucket", {"bucket": "logs"})
        assert estimate.monthly_cost == 5.0
        assert estimate.confidence == "low"


class TestFixedFeeResources:
    """Test fixed-fee pricing."""

    def test_lb_types(self):
        """Test explicit and defaulted load balancer types."""
        network = estimate_resource_cost("aws_lb", {"load_balancer_type": "network"})
        default = estimate_resource_cost("aws_lb", {})
        gateway = estimate_resource_cost("aws_lb", {"load_balancer_type": "gateway"})
        assert network.confidence == "high"
        assert default.confidence == "high"
        assert gateway.confidence == "medium"
        assert gateway.monthly_cost == 16.43

    def test_nat_gateway(self):
        """Test NAT gateway fixed fee."""
        estimate = estimate_resource_cost("aws_nat_gateway", {})
        assert estimate.monthly_cost == 32.85
        assert estimate.confidence == "high"

    def test_vpc_endpoint(self):
        """Test endpoint types are case-insensitive and gateway is free."""
        interface = estimate_resource_cost("aws_vpc_endpoint", {"vpc_endpoint_type": "Interface"})
        gateway = estimate_resource_cost("aws_vpc_endpoint", {"vpc_endpoint_type": "Gateway"})
        other = estimate_resource_cost("aws_vpc_endpoint", {"vpc_endpoint_type": "GatewayLoadBalancer"})
        assert interface.monthly_cost == 7.3
        assert gateway.monthly_cost == 0
        assert gateway.hourly_cost == 0
        assert other.monthly_cost == 7.3
        assert other.confidence == "medium"

    def test_forwarding_rule_scheme(self):
        """Test forwarding rule schemes."""
        internal = estimate_resource_cost("google_compute_forwarding_rule", {"load_balancing_scheme": "INTERNAL"})
        managed = estimate_resource_cost("google_compute_forwarding_rule", {"load_balancing_scheme": "EXTERNAL_MANAGED"})
        assert internal.confidence == "high"
        assert managed.confidence == "medium"
        assert managed.monthly_cost == 18.25

    def test_dns_zone(self):
        """Test monthly-only entries derive hourly."""
        estimate = estimate_resource_cost("google_dns_managed_zone", {})
        assert estimate.monthly_cost == 0.2
        assert estimate.hourly_cost == pytest.approx(0.2 / 730)


class TestKubernetes:
    """Test GKE cluster and node pool pricing."""

    def test_classification(self):
        """Test cluster classification."""
        assert classify_gke_cluster({"enable_autopilot": True, "zone": "us-central1-a"}) == "autopilot"
        assert classify_gke_cluster({"zone": "us-central1-a"}) == "zonal"
        assert classify_gke_cluster({"location": "us-central1"}) == "regional"

    def test_cluster_fee(self):
        """Test every tier is priced at the management fee."""
        for attributes in ({"enable_autopilot": True}, {"zone": "a"}, {}):
            estimate = estimate_resource_cost("google_container_cluster", attributes)
            assert estimate.monthly_cost == 73.0
            assert estimate.hourly_cost == 0.1

    def test_node_pool(self):
        """Test node pool price scales with node count."""
        estimate = estimate_resource_cost(
            "google_container_node_pool",
            {"node_count": 2, "node_config": [{"machine_type": "n1-standard-2"}]},
        )
        assert estimate.monthly_cost == pytest.approx(138.7)
        assert estimate.instance_type == "n1-standard-2 x2"
        assert estimate.confidence == "high"

    def test_node_pool_defaults(self):
        """Test default machine type and three nodes."""
        estimate = estimate_resource_cost("google_container_node_pool", {})
        assert estimate.instance_type == "e2-medium x3"
        assert estimate.monthly_cost == pytest.approx(24.53 * 3)

    def test_node_pool_initial_count_and_unknown_machine(self):
        """Test initial_node_count and unknown machine fallback."""
        estimate = estimate_resource_cost(
            "google_container_node_pool",
            {"initial_node_count": 4, "node_config": [{"machine_type": "a2-highgpu-1g"}]},
        )
        assert estimate.monthly_cost == pytest.approx(100.0)
        assert estimate.confidence == "low"


class TestCatalogOverride:
    """Test estimation against a custom catalog."""

    def test_override_price(self):
        """Test an overridden entry is used."""
        catalog = merge_pricing_overrides({"aws": {"aws_instance": {"z9.mega": {"hourly": 2.0, "monthly": 1460.0}}}})
        estimate = estimate_resource_cost("aws_instance", {"instance_type": "z9.mega"}, catalog=catalog)
        assert estimate.monthly_cost == 1460.0
        assert estimate.confidence == "high"

    def test_capacity_override_without_per_gb_rate(self):
        """Test a capacity entry lacking per_gb_monthly uses the fallback rate."""
        catalog = merge_pricing_overrides({
            "aws": {"aws_ebs_volume": {"gp3": {"monthly": 5.0}}},
            "google": {
                "google_compute_disk": {"pd-standard": {"monthly": 5.0}},
                "google_storage_bucket": {"standard": {"monthly": 5.0}},
                "google_filestore_instance": {"basic_hdd": {"monthly": 5.0}},
            },
        })

        ebs = estimate_resource_cost("aws_ebs_volume", {"type": "gp3", "size": 10}, catalog=catalog)
        disk = estimate_resource_cost("google_compute_disk", {"size": 10}, catalog=catalog)
        bucket = estimate_resource_cost("google_storage_bucket", {}, catalog=catalog)
        filestore = estimate_resource_cost("google_filestore_instance", {}, catalog=catalog)

        assert ebs.monthly_cost == pytest.approx(0.8)
        assert ebs.confidence == "low"
        assert disk.monthly_cost == pytest.approx(0.4)
        assert disk.confidence == "low"
        assert bucket.monthly_cost == 2.0
        assert filestore.monthly_cost == pytest.approx(1024 * 0.2)
        assert filestore.confidence == "low"

    def test_negative_catalog_price_clamped(self):
        """Test a negative catalog price never yields a negative cost."""
        catalog = merge_pricing_overrides({"aws": {"aws_nat_gateway": {"default": {"monthly": -1.0}}}})
        estimate = estimate_resource_cost("aws_nat_gateway", {}, catalog=catalog)
        assert estimate.monthly_cost == 0.0
        assert estimate.hourly_cost == 0.0
