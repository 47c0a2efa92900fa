"""Tests for state normalization."""

import copy
import pytest
from tfcost.ingest.state_normalizer import (
    normalize_state,
    normalize_module_path,
    normalize_resource,
    resolve_provider_version,
    extract_providers,
)


@pytest.fixture
def legacy_state():
    """Legacy tfstate v4 document."""
    return {
        "version": 4,
        "terraform_version": "1.5.7",
        "serial": 12,
        "lineage": "3f1c-lineage",
        "resources": [
            {
                "mode": "managed",
                "type": "aws_instance",
                "name": "web",
                "instances": [
                    {
                        "attributes": {"instance_type": "t3.micro"},
                        "dependencies": ["aws_security_group.web"],
                    }
                ],
            },
            {
                "mode": "managed",
                "type": "aws_security_group",
                "name": "web",
                "module": "vpc",
                "instances": [{"attributes": {"name": "web-sg"}}],
            },
        ],
    }


@pytest.fixture
def show_json_state():
    """`terraform show -json` document."""
    return {
        "format_version": "1.0",
        "terraform_version": "1.6.0",
        "values": {
            "root_module": {
                "resources": [
                    {
                        "address": "google_compute_instance.vm",
                        "type": "google_compute_instance",
                        "name": "vm",
                        "values": {"machine_type": "e2-small"},
                    }
                ]
            }
        },
    }


class TestNormalizeState:
    """Test full-document normalization."""

    def test_legacy_format(self, legacy_state):
        """Test legacy top-level resources array."""
        state = normalize_state(legacy_state)

        assert state.version == 4
        assert state.terraform_version == "1.5.7"
        assert state.serial == 12
        assert state.lineage == "3f1c-lineage"
        assert [r.id for r in state.resources] == ["aws_instance.web", "aws_security_group.web"]
        assert state.resources[0].attributes == {"instance_type": "t3.micro"}
        assert state.resources[0].dependencies == ["aws_security_group.web"]

    def test_show_json_format(self, show_json_state):
        """Test values.root_module.resources array and format_version fallback."""
        state = normalize_state(show_json_state)

        assert state.version == "1.0"
        assert len(state.resources) == 1
        assert state.resources[0].attributes == {"machine_type": "e2-small"}

    def test_id_is_type_dot_name(self, legacy_state):
        """Test every resource id is derived from type and name."""
        state = normalize_state(legacy_state)
        for resource in state.resources:
            assert resource.id == f"{resource.type}.{resource.name}"

    def test_defaults_for_missing_type_and_name(self):
        """Test positional fallback name and unknown type."""
        state = normalize_state({"resources": [{"instances": []}, {"type": "aws_lb"}]})

        assert state.resources[0].type == "unknown"
        assert state.resources[0].name == "resource-0"
        assert state.resources[0].id == "unknown.resource-0"
        assert state.resources[1].name == "resource-1"

    def test_malformed_resource_skipped(self):
        """Test a malformed entry is skipped without failing the batch."""
        raw = {
            "resources": [
                "not-a-resource",
                {"type": "aws_instance", "name": "bad", "dependencies": "oops"},
                {"type": "aws_instance", "name": "good"},
            ]
        }
        state = normalize_state(raw)

        assert [r.id for r in state.resources] == ["aws_instance.good"]

    def test_non_object_document_returns_empty_state(self):
        """Test unexpected top-level shape yields an empty state."""
        state = normalize_state(["not", "a", "state"])

        assert state.resources == []
        assert state.modules == []
        assert state.providers == []
        assert state.terraform_version == "unknown"
        assert state.serial == 1

    def test_scalar_fallbacks(self):
        """Test scalar fields fall back through synonymous keys."""
        state = normalize_state({"terraform": {"version": "1.4.0"}})

        assert state.version == 4
        assert state.terraform_version == "1.4.0"
        assert state.lineage == "unknown"

    def test_off_type_header_fields_defaulted(self):
        """Test mistyped header fields default without dropping resources."""
        state = normalize_state({
            "serial": "abc",
            "lineage": 42,
            "terraform_version": ["1.5.7"],
            "version": 4.5,
            "format_version": "1.0",
            "resources": [{"type": "aws_instance", "name": "web"}],
        })

        assert state.serial == 1
        assert state.lineage == "unknown"
        assert state.terraform_version == "unknown"
        assert state.version == "1.0"
        assert [r.id for r in state.resources] == ["aws_instance.web"]
        assert [p.name for p in state.providers] == ["aws"]

    def test_resources_not_a_list(self):
        """Test non-list resources default to empty."""
        state = normalize_state({"resources": {"oops": True}})
        assert state.resources == []

    def test_idempotent(self, legacy_state):
        """Test normalizing the same document twice yields identical output."""
        raw = copy.deepcopy(legacy_state)
        first = normalize_state(legacy_state)
        second = normalize_state(legacy_state)

        assert first.model_dump() == second.model_dump()
        assert legacy_state == raw


class TestModules:
    """Test module path normalization and module synthesis."""

    def test_module_prefix_added(self):
        """Test bare module names gain the module. prefix."""
        assert normalize_module_path("vpc") == "module.vpc"

    def test_module_prefix_kept(self):
        """Test already-prefixed module paths are unchanged."""
        assert normalize_module_path("module.vpc") == "module.vpc"

    def test_empty_module(self):
        """Test missing module stays None."""
        assert normalize_module_path(None) is None
        assert normalize_module_path("") is None

    def test_resource_module_normalized(self):
        """Test module normalization through a resource entry."""
        resource = normalize_resource({"type": "aws_subnet", "name": "a", "module": "vpc"}, 0)
        assert resource.module == "module.vpc"

    def test_modules_synthesized(self, legacy_state):
        """Test modules are built from resource module paths."""
        state = normalize_state(legacy_state)

        assert len(state.modules) == 1
        module = state.modules[0]
        assert module.name == "vpc"
        assert module.path == "module.vpc"
        assert [r.id for r in module.resources] == ["aws_security_group.web"]


class TestProviders:
    """Test provider resolution."""

    def test_version_resolution_order(self):
        """Test version label priority."""
        assert resolve_provider_version("~> 5.0") == "~> 5.0"
        assert resolve_provider_version({"version": "5.1", "source": "hashicorp/aws"}) == "5.1"
        assert resolve_provider_version({"version_constraint": ">= 4"}) == ">= 4"
        assert resolve_provider_version({"source": "hashicorp/google"}) == "hashicorp/google"
        assert resolve_provider_version({"constraints": "~> 1"}) == "~> 1"
        assert resolve_provider_version({}) == "unknown"

    def test_first_source_wins(self):
        """Test earlier provider sources are never overwritten."""
        raw = {
            "terraform": {"required_providers": {"aws": {"version": "5.0"}}},
            "providers": {"aws": "4.0", "google": "6.0"},
        }
        providers = {p.name: p.version for p in extract_providers(raw, [])}

        assert providers == {"aws": "5.0", "google": "6.0"}

    def test_array_source_skipped(self):
        """Test a provider source given as a list is ignored."""
        raw = {
            "providers": ["aws", "google"],
            "provider_hash": {"google": "6.0"},
        }
        providers = {p.name: p.version for p in extract_providers(raw, [])}

        assert providers == {"google": "6.0"}

    def test_detected_from_resources(self, legacy_state):
        """Test providers inferred from resource type prefixes."""
        legacy_state["resources"].append({"type": "random_id", "name": "suffix"})
        state = normalize_state(legacy_state)

        assert [(p.name, p.version) for p in state.providers] == [("aws", "detected from resources")]
