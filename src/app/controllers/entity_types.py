"""
Entity type descriptors for the collection controller.

Each descriptor names the table, a pydantic schema of the fields a user may
submit (required fields have no default), a label for user notices and,
where pages need a row to exist, a lazy default row.
"""

from dataclasses import dataclass
from datetime import date
from typing import Annotated, Any, Callable, Dict, List, Optional, Type

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from src.domain.entities import (
    ClientType,
    ExperienceCategory,
    FeaturePriority,
    FinancialEntryType,
    TaskStatus,
)


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


Required = Annotated[str, AfterValidator(_not_blank)]


class RecordFields(BaseModel):
    """User-editable fields; bookkeeping columns are not accepted"""

    model_config = ConfigDict(extra="forbid")


class ProblemFields(RecordFields):
    description: str = ""
    current_solution: str = ""
    impact: str = ""
    examples: str = ""
    frequency: str = ""
    segment: str = ""
    severity: str = ""


class CustomerSegmentFields(RecordFields):
    name: Required
    description: str = ""
    area: str = ""
    client_type: ClientType
    will_serve: bool = False
    justification: str = ""
    relations: List[str] = Field(default_factory=list)


class TargetAudienceFields(RecordFields):
    customer_segment_id: Optional[int] = None
    segment: str = ""
    age_range: str = ""
    education: str = ""
    location: str = ""
    job_title: str = ""
    company_size: str = ""
    industry: str = ""
    consumption_habits: str = ""
    buying_role: str = ""
    tasks_and_responsibilities: str = ""


class ChannelFields(RecordFields):
    name: Required
    description: str = ""
    channel_type: str = ""
    objective: str = ""


class FinancialEntryFields(RecordFields):
    name: Required
    entry_type: FinancialEntryType
    category: Required
    entry_date: date
    amount: float = Field(ge=0)


class MetricPoint(BaseModel):
    month: str = Field(pattern=r"^\d{4}-\d{2}$")
    value: float


class MetricFields(RecordFields):
    name: Required
    description: str = ""
    area: str = ""
    values: List[MetricPoint] = Field(default_factory=list)


class TaskFields(RecordFields):
    name: Required
    description: str = ""
    status: TaskStatus = TaskStatus.to_do
    due_date: Optional[date] = None
    assignee: str = ""


class CompetitorMatrixFields(RecordFields):
    name: str = ""
    columns: List[str] = Field(default_factory=list)
    rows: List[str] = Field(default_factory=list)
    cells: Dict[str, Dict[str, bool]] = Field(default_factory=dict)


class BenefitFields(RecordFields):
    title: Required
    description: str = ""
    competitive_edge: str = ""


class FeatureFields(RecordFields):
    title: Required
    description: str = ""
    app_version: str = ""
    priority: FeaturePriority = FeaturePriority.medium


class CustomerExperienceFields(RecordFields):
    title: Required
    description: str = ""
    category: ExperienceCategory = ExperienceCategory.need


def default_competitor_matrix() -> Dict[str, Any]:
    return {
        "name": "",
        "columns": ["Column 1"],
        "rows": ["Row 1"],
        "cells": {"Row 1": {"Column 1": False}},
    }


@dataclass(frozen=True)
class EntityType:
    name: str
    table: str
    schema: Type[RecordFields]
    label: str
    default_row: Optional[Callable[[], Dict[str, Any]]] = None

    def validate(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Wire-ready field values; raises pydantic.ValidationError"""
        return self.schema.model_validate(fields).model_dump(mode="json")

    @property
    def field_names(self) -> List[str]:
        return list(self.schema.model_fields)


PROBLEM = EntityType(
    "problem", "problems", ProblemFields, "problem",
    default_row=lambda: ProblemFields().model_dump(mode="json"),
)
CUSTOMER_SEGMENT = EntityType(
    "customer_segment", "customer_segments", CustomerSegmentFields, "customer segment"
)
TARGET_AUDIENCE = EntityType(
    "target_audience", "target_audiences", TargetAudienceFields, "target audience"
)
CHANNEL = EntityType("channel", "channels", ChannelFields, "channel")
FINANCIAL_ENTRY = EntityType(
    "financial_entry", "financial_entries", FinancialEntryFields, "financial entry"
)
METRIC = EntityType("metric", "metrics", MetricFields, "metric")
TASK = EntityType("task", "tasks", TaskFields, "task")
COMPETITOR_MATRIX = EntityType(
    "competitor_matrix", "competitor_matrices", CompetitorMatrixFields,
    "competitor analysis", default_row=default_competitor_matrix,
)
BENEFIT = EntityType("benefit", "benefits", BenefitFields, "benefit")
FEATURE = EntityType("feature", "features", FeatureFields, "feature")
CUSTOMER_EXPERIENCE = EntityType(
    "customer_experience", "customer_experiences", CustomerExperienceFields,
    "customer experience",
)

ENTITY_TYPES: Dict[str, EntityType] = {
    entity_type.name: entity_type
    for entity_type in (
        PROBLEM,
        CUSTOMER_SEGMENT,
        TARGET_AUDIENCE,
        CHANNEL,
        FINANCIAL_ENTRY,
        METRIC,
        TASK,
        COMPETITOR_MATRIX,
        BENEFIT,
        FEATURE,
        CUSTOMER_EXPERIENCE,
    )
}
