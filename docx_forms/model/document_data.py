"""Generation request payload: issue records plus template-specific form fields."""
from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IssueStatus(str, Enum):
    """Issue lifecycle states, using the upstream wire values."""

    PENDING = "待处理"
    IN_PROGRESS = "整改中"
    PENDING_REVIEW = "待复核"
    CLOSED = "已闭环"
    MERGED = "已合并"


class Issue(BaseModel):
    """A single reported site problem, already normalized by the issue source."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str = ""
    description: str = ""
    location: str = ""
    responsible_party: str = Field("", alias="responsibleParty")
    status: IssueStatus = IssueStatus.PENDING
    record_timestamp: Optional[datetime] = Field(None, alias="recordTimestamp")
    reporter_name: Optional[str] = Field(None, alias="reporterName")
    project_id: Optional[str] = Field(None, alias="projectId")
    image_urls: List[str] = Field(default_factory=list, alias="imageUrls")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        # Upstream event ids arrive as integers.
        if isinstance(value, int):
            return str(value)
        return value


class DocumentData(BaseModel):
    """Everything a template may read. Only ``validate`` decides what is required."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    issues: List[Issue] = Field(default_factory=list)
    project_name: Optional[str] = Field(None, alias="projectName")

    inspection_location: Optional[str] = Field(None, alias="inspectionLocation")
    inspection_start_date: Optional[date] = Field(None, alias="inspectionStartDate")
    inspection_end_date: Optional[date] = Field(None, alias="inspectionEndDate")
    inspection_items: Optional[List[str]] = Field(None, alias="inspectionItems")
    inspection_date: Optional[date] = Field(None, alias="inspectionDate")
    inspector_name: Optional[str] = Field(None, alias="inspectorName")
    findings: Optional[str] = None
    improvement_suggestions: Optional[str] = Field(None, alias="improvementSuggestions")

    notice_title: Optional[str] = Field(None, alias="noticeTitle")
    notice_content: Optional[str] = Field(None, alias="noticeContent")
    supervisor_name: Optional[str] = Field(None, alias="supervisorName")
    notice_date: Optional[date] = Field(None, alias="noticeDate")
    recipient_name: Optional[str] = Field(None, alias="recipientName")
    subject: Optional[str] = None

    @field_validator("issues", mode="before")
    @classmethod
    def _issues_default(cls, value: Any) -> Any:
        # Issue sources send null for "no issues".
        return [] if value is None else value

    @field_validator(
        "inspection_start_date",
        "inspection_end_date",
        "inspection_date",
        "notice_date",
        mode="before",
    )
    @classmethod
    def _calendar_date(cls, value: Any) -> Any:
        """Keep the calendar date of datetimes and ISO timestamps."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value

    def get_field(self, field_name: str) -> Any:
        """Look a field up by its wire name (``projectName``) or attribute name."""
        attribute = field_attribute(field_name)
        if attribute is None:
            raise KeyError(field_name)
        return getattr(self, attribute)


def _alias_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for attribute, info in DocumentData.model_fields.items():
        index[attribute] = attribute
        if info.alias:
            index[info.alias] = attribute
    return index


_FIELD_INDEX = _alias_index()


def field_attribute(field_name: str) -> Optional[str]:
    """Map a wire field name to the model attribute, ``None`` when unknown."""
    return _FIELD_INDEX.get(field_name)
