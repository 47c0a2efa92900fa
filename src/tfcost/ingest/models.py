"""Pydantic models for canonical Terraform state and plan data."""

from enum import Enum
from typing import List, Optional, Dict, Any, Union
from pydantic import BaseModel, Field


class ResourceAction(str, Enum):
    """Terraform plan action types (first entry of change.actions)."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    READ = "read"
    NO_OP = "no-op"


class TerraformResource(BaseModel):
    """Canonical resource record normalized from state or plan JSON."""
    id: str = Field(..., description="Resource identifier: type.name")
    name: str = Field(..., description="Resource name")
    type: str = Field(..., description="Provider-prefixed resource type, e.g. aws_instance")
    module: Optional[str] = Field(None, description="Dotted module path starting with 'module.'")
    dependencies: List[str] = Field(default_factory=list, description="Resource ids this resource depends on")
    attributes: Dict[str, Any] = Field(default_factory=dict, description="Resource attributes")


class TerraformModule(BaseModel):
    """Module synthesized from the module paths referenced by resources."""
    name: str = Field(..., description="Module display name without 'module.' prefix")
    path: str = Field(..., description="Module path, e.g. module.vpc")
    resources: List[TerraformResource] = Field(default_factory=list)


class TerraformProvider(BaseModel):
    """Provider name with its resolved version label."""
    name: str
    version: str = "unknown"


class TerraformState(BaseModel):
    """Canonical Terraform state."""
    version: Union[int, str] = 4
    terraform_version: str = "unknown"
    serial: int = 1
    lineage: str = "unknown"
    resources: List[TerraformResource] = Field(default_factory=list)
    modules: List[TerraformModule] = Field(default_factory=list)
    providers: List[TerraformProvider] = Field(default_factory=list)


class ResourceChange(BaseModel):
    """Single managed-resource change extracted from a plan."""
    address: str = Field(..., description="Fully-qualified resource address")
    type: str = Field(..., description="Resource type")
    name: str = Field(..., description="Resource name")
    provider: str = Field(..., description="Provider name")
    action: ResourceAction = Field(ResourceAction.NO_OP, description="First planned action")
    before_values: Optional[Dict[str, Any]] = Field(None, description="Attributes before the change")
    after_values: Optional[Dict[str, Any]] = Field(None, description="Attributes after the change")
    module: Optional[str] = Field(None, description="Module name extracted from the address")
    
    class Config:
        """Pydantic config."""
        use_enum_values = True


class PlanSummary(BaseModel):
    """Counts of planned changes by action."""
    add: int = Field(default=0, ge=0)
    change: int = Field(default=0, ge=0)
    destroy: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class TerraformPlan(BaseModel):
    """Parsed Terraform plan."""
    format_version: str = "unknown"
    terraform_version: str = "unknown"
    resource_changes: List[ResourceChange] = Field(default_factory=list)
    summary: PlanSummary = Field(default_factory=PlanSummary)
    raw_plan: Dict[str, Any] = Field(default_factory=dict, description="Original plan JSON")
