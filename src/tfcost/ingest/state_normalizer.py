"""Translate raw Terraform state JSON into the canonical state model."""

from typing import Dict, Any, List, Optional, Tuple
from .models import TerraformResource, TerraformModule, TerraformProvider, TerraformState
from ..utils.errors import NormalizationError
from ..utils.logging import get_logger

logger = get_logger("ingest.state_normalizer")

MODULE_PREFIX = "module."

# Resource-type prefixes that are not cloud providers
NON_PROVIDER_PREFIXES = {"data", "local", "null", "random", "template", "external"}

# Locations searched for resource arrays, first list found wins
RESOURCE_SOURCES: Tuple[Tuple[str, ...], ...] = (
    ("resources",),
    ("values", "root_module", "resources"),
)

# Locations searched for provider mappings, in priority order
PROVIDER_SOURCES: Tuple[Tuple[str, ...], ...] = (
    ("terraform", "required_providers"),
    ("configuration", "provider_config"),
    ("values", "root_module", "providers"),
    ("provider_hash",),
    ("providers",),
    ("configuration", "terraform", "required_providers"),
)

# Provider entry fields that can carry a version label, in priority order
PROVIDER_VERSION_KEYS = ("version", "version_constraint", "source", "constraints")


def _dig(data: Any, path: Tuple[str, ...]) -> Any:
    """Follow a key path through nested dicts, returning None on any miss."""
    current = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _scalar(*values: Any, types: Tuple[type, ...], default: Any) -> Any:
    """Return the first truthy value of one of the given types, or default."""
    for value in values:
        if value and not isinstance(value, bool) and isinstance(value, types):
            return value
    return default


def _extract_resource_entries(raw_state: Dict[str, Any]) -> List[Any]:
    for path in RESOURCE_SOURCES:
        entries = _dig(raw_state, path)
        if isinstance(entries, list):
            return entries
    return []


def normalize_module_path(module: Optional[str]) -> Optional[str]:
    """Ensure a module path starts with 'module.'."""
    if not module:
        return None
    if not isinstance(module, str):
        raise NormalizationError(f"module must be a string, got {type(module).__name__}")
    if module.startswith(MODULE_PREFIX):
        return module
    return f"{MODULE_PREFIX}{module}"


def _resource_attributes(entry: Dict[str, Any]) -> Dict[str, Any]:
    instances = entry.get("instances")
    first_instance = instances[0] if isinstance(instances, list) and instances else None
    candidates = (
        first_instance.get("attributes") if isinstance(first_instance, dict) else None,
        entry.get("values"),
    )
    for candidate in candidates:
        if isinstance(candidate, dict):
            return candidate
    return {}


def _resource_dependencies(entry: Dict[str, Any]) -> List[str]:
    dependencies = entry.get("dependencies")
    if dependencies is None:
        # tfstate v4 keeps dependencies per instance
        instances = entry.get("instances")
        if isinstance(instances, list) and instances and isinstance(instances[0], dict):
            dependencies = instances[0].get("dependencies")
    if dependencies is None:
        return []
    if not isinstance(dependencies, list):
        raise NormalizationError("dependencies must be a list")
    return list(dependencies)


def normalize_resource(entry: Any, index: int) -> TerraformResource:
    """
    Normalize a single raw resource entry.

    Args:
        entry: Raw resource object from the state
        index: Position of the entry in its source array (used for the fallback name)

    Returns:
        Canonical TerraformResource

    Raises:
        NormalizationError: If the entry is malformed
    """
    if not isinstance(entry, dict):
        raise NormalizationError(f"resource entry must be an object, got {type(entry).__name__}")

    resource_type = entry.get("type") or "unknown"
    resource_name = entry.get("name") or f"resource-{index}"

    return TerraformResource(
        id=f"{resource_type}.{resource_name}",
        name=resource_name,
        type=resource_type,
        module=normalize_module_path(entry.get("module")),
        dependencies=_resource_dependencies(entry),
        attributes=_resource_attributes(entry),
    )


def build_modules(resources: List[TerraformResource]) -> List[TerraformModule]:
    """Synthesize module objects from the module paths referenced by resources."""
    module_paths: Dict[str, None] = {}
    for resource in resources:
        if resource.module and resource.module.strip():
            module_paths.setdefault(resource.module.strip(), None)

    modules = []
    for path in module_paths:
        name = path[len(MODULE_PREFIX):] if path.startswith(MODULE_PREFIX) else path
        modules.append(TerraformModule(
            name=name,
            path=path,
            resources=[r for r in resources if r.module == path],
        ))
    return modules


def resolve_provider_version(data: Any) -> str:
    """Pick a version label from a provider entry."""
    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        for key in PROVIDER_VERSION_KEYS:
            value = data.get(key)
            if value:
                return str(value)
    return "unknown"


def extract_providers(raw_state: Dict[str, Any], resources: List[TerraformResource]) -> List[TerraformProvider]:
    """
    Resolve providers from the known provider locations.

    The first occurrence of a provider name wins; later sources never overwrite
    it. When no source yields any provider, providers are inferred from the
    resource type prefixes.
    """
    providers: Dict[str, TerraformProvider] = {}

    for path in PROVIDER_SOURCES:
        source = _dig(raw_state, path)
        if not isinstance(source, dict):
            continue
        for name, data in source.items():
            if name not in providers:
                providers[name] = TerraformProvider(name=name, version=resolve_provider_version(data))

    if not providers:
        for resource in resources:
            prefix = resource.type.split("_")[0]
            if prefix and prefix not in NON_PROVIDER_PREFIXES and prefix not in providers:
                providers[prefix] = TerraformProvider(name=prefix, version="detected from resources")

    return list(providers.values())


def empty_state(raw_state: Any = None) -> TerraformState:
    """Build an all-empty canonical state, keeping any usable scalar fields."""
    raw = raw_state if isinstance(raw_state, dict) else {}
    return TerraformState(
        version=_scalar(raw.get("version"), types=(int, str), default=4),
        terraform_version=_scalar(raw.get("terraform_version"), types=(str,), default="unknown"),
        serial=_scalar(raw.get("serial"), types=(int,), default=1),
        lineage=_scalar(raw.get("lineage"), types=(str,), default="unknown"),
    )


def normalize_state(raw_state: Any) -> TerraformState:
    """
    Normalize raw Terraform state JSON into the canonical state model.

    Accepts both the legacy state format (top-level `resources`) and the
    `terraform show -json` format (`values.root_module.resources`).

    - Malformed resource entries are skipped, never failing the batch
    - Modules are synthesized from resource module paths
    - Providers are resolved from six possible locations
    - An unexpected document shape yields an empty state

    Args:
        raw_state: Parsed Terraform state JSON

    Returns:
        Canonical TerraformState
    """
    if not isinstance(raw_state, dict):
        logger.warning(f"State document is not an object ({type(raw_state).__name__}), returning empty state")
        return empty_state()

    try:
        resources: List[TerraformResource] = []
        for index, entry in enumerate(_extract_resource_entries(raw_state)):
            try:
                resources.append(normalize_resource(entry, index))
            except Exception as e:
                logger.warning(f"Skipping malformed resource at index {index}: {e}")
                continue

        modules = build_modules(resources)
        providers = extract_providers(raw_state, resources)

        state = TerraformState(
            version=_scalar(raw_state.get("version"), raw_state.get("format_version"), types=(int, str), default=4),
            terraform_version=_scalar(
                raw_state.get("terraform_version"),
                _dig(raw_state, ("terraform", "version")),
                types=(str,),
                default="unknown",
            ),
            serial=_scalar(raw_state.get("serial"), types=(int,), default=1),
            lineage=_scalar(raw_state.get("lineage"), types=(str,), default="unknown"),
            resources=resources,
            modules=modules,
            providers=providers,
        )
    except Exception as e:
        logger.warning(f"Failed to normalize state, returning empty state: {e}")
        return empty_state(raw_state)

    logger.info(
        f"Normalized state: {len(state.resources)} resources, "
        f"{len(state.modules)} modules, {len(state.providers)} providers"
    )
    return state
