"""Pydantic models for cost estimation output (JSON-serializable, camelCase on the wire)."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class Confidence(str, Enum):
    """How closely an estimate matched the pricing catalog."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CloudProvider(str, Enum):
    """Provider derived from the resource type prefix."""
    AWS = "aws"
    GOOGLE = "google"
    AZURE = "azure"
    UNKNOWN = "unknown"


class CostEstimate(BaseModel):
    """Estimated cost of a single billable resource."""
    resource_address: str = Field(..., alias="resourceAddress", description="Resource address, e.g. aws_instance.web")
    resource_type: str = Field(..., alias="resourceType")
    resource_name: str = Field(..., alias="resourceName")
    provider: CloudProvider = Field(..., description="Cloud provider")
    instance_type: Optional[str] = Field(None, alias="instanceType", description="Size/tier label")
    monthly_cost: float = Field(..., ge=0, alias="monthlyCost")
    hourly_cost: float = Field(..., ge=0, alias="hourlyCost")
    details: str = Field("", description="Human-readable pricing basis")
    confidence: Confidence = Field(..., description="high: exact catalog match, medium: partial, low: default substituted")

    class Config:
        """Pydantic config."""
        use_enum_values = True
        populate_by_name = True


class CostBreakdown(BaseModel):
    """Monthly cost split into categories."""
    compute: float = Field(default=0.0, ge=0)
    storage: float = Field(default=0.0, ge=0)
    network: float = Field(default=0.0, ge=0)
    database: float = Field(default=0.0, ge=0)
    other: float = Field(default=0.0, ge=0)

    def total(self) -> float:
        return self.compute + self.storage + self.network + self.database + self.other


class CostSummary(BaseModel):
    """Aggregated cost of a set of estimates."""
    total_monthly_cost: float = Field(default=0.0, ge=0, alias="totalMonthlyCost")
    total_hourly_cost: float = Field(default=0.0, ge=0, alias="totalHourlyCost")
    resource_count: int = Field(default=0, ge=0, alias="resourceCount", description="Number of billable resources")
    estimates: List[CostEstimate] = Field(default_factory=list)
    breakdown: CostBreakdown = Field(default_factory=CostBreakdown)

    class Config:
        """Pydantic config."""
        populate_by_name = True

    @classmethod
    def empty(cls) -> "CostSummary":
        """Summary of no resources."""
        return cls()


class CostDifference(BaseModel):
    """Planned minus current monthly cost."""
    monthly: float = Field(default=0.0, description="Signed monthly delta")
    percentage: float = Field(default=0.0, description="Signed percentage change, 0 when current total is 0")


class ChangedResources(BaseModel):
    """Estimates touched by a plan, grouped by action."""
    added: List[CostEstimate] = Field(default_factory=list)
    removed: List[CostEstimate] = Field(default_factory=list)
    modified: List[CostEstimate] = Field(default_factory=list)


class CostComparison(BaseModel):
    """Current versus planned cost for a Terraform plan."""
    current: CostSummary
    planned: CostSummary
    difference: CostDifference = Field(default_factory=CostDifference)
    changed_resources: ChangedResources = Field(default_factory=ChangedResources, alias="changedResources")

    class Config:
        """Pydantic config."""
        populate_by_name = True
