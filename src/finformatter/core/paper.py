"""Paper, journal and analysis result domain models."""

import json
from typing import Any, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from finformatter.core.config import ProviderConfig
from finformatter.core.enums import InputMode, SegmentType
from finformatter.utils.text_utils import content_to_text


class JournalRules(BaseModel):
    """Formatting constraints of one journal."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title_limit: int = Field(..., gt=0)
    abstract_limit: int = Field(..., gt=0)
    heading_sequence: List[str] = Field(..., min_length=1)
    font: str
    citation: str
    references_rule: str = ""
    table_fig_rule: str = ""
    math_rule: str = ""
    footnote_rule: str = ""
    other_rule: str = ""

    use_three_line_table: bool = Field(default=True, alias="useThreeLineTable")
    variable_italic: bool = Field(default=True, alias="variableItalic")

    def to_prompt_json(self) -> str:
        """Serialize rules for the model prompt, keeping the camelCase flags."""
        return json.dumps(self.model_dump(by_alias=True), ensure_ascii=False)


class Journal(BaseModel):
    """Target journal with its rule set."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    rules: JournalRules


class Segment(BaseModel):
    """One structurally classified unit of the reformatted paper.

    The payload is produced by the model and only loosely typed: ``content``
    may be a string, list or object; ``data`` is expected to be a 2-D grid of
    cell strings for tables but is not enforced here.
    """

    model_config = ConfigDict(extra="allow")

    type: str = SegmentType.BODY.value
    content: Any = ""
    caption: Optional[Any] = None
    source: Optional[Any] = None
    data: Optional[Any] = None
    style: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def wrap_bare_values(cls, value: Any) -> Any:
        """Treat a non-object element as a body paragraph."""
        if isinstance(value, dict) or isinstance(value, Segment):
            return value
        return {"type": SegmentType.BODY.value, "content": value}

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> str:
        if v is None:
            return SegmentType.BODY.value
        return str(v).strip().lower()

    @field_validator("style", mode="before")
    @classmethod
    def stringify_style(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @property
    def text(self) -> str:
        """Content flattened to display text."""
        return content_to_text(self.content)

    @property
    def caption_text(self) -> str:
        return content_to_text(self.caption).strip()

    @property
    def source_text(self) -> str:
        return content_to_text(self.source).strip()

    @property
    def rows(self) -> List[List[str]]:
        """Table grid as strings; empty when ``data`` is missing or not a grid."""
        if not isinstance(self.data, list):
            return []

        rows = []
        for row in self.data:
            if isinstance(row, list):
                rows.append([content_to_text(cell) for cell in row])
            elif row is not None:
                rows.append([content_to_text(row)])
        return rows


class StatusReport(BaseModel):
    """Model's compliance report for the target journal."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title_count: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("titleCount", "title_count")
    )
    abstract_count: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("abstractCount", "abstract_count")
    )
    major_changes: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("majorChanges", "major_changes"),
    )
    is_compliant: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("isCompliant", "is_compliant")
    )
    compliance_summary: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("complianceSummary", "compliance_summary"),
    )

    @field_validator("major_changes", mode="before")
    @classmethod
    def string_list(cls, v: Any) -> List[str]:
        return _keep_strings(v)


class PaperMetadata(BaseModel):
    """Front matter extracted by the model."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: Optional[str] = None
    authors: Optional[str] = None
    abstract: Optional[str] = None
    keywords: Optional[str] = None
    jel_codes: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("jelCodes", "jel_codes")
    )

    @field_validator("title", "authors", "abstract", "keywords", "jel_codes", mode="before")
    @classmethod
    def flatten(cls, v: Any) -> Optional[str]:
        # Models sometimes return author or keyword lists
        if isinstance(v, list):
            return "; ".join(content_to_text(item) for item in v if item not in (None, ""))
        return None if v is None else content_to_text(v, separator="; ")


def _drop_invalid(value: Any, handler: Any) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return None


def _keep_strings(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    return [content_to_text(item) for item in value if item not in (None, "")]


class AnalysisResult(BaseModel):
    """Structured reformatting result returned by a provider.

    ``segments`` is the only mandatory field. Every other block is
    best-effort: when the model returns something unusable it is dropped
    instead of failing the whole result.
    """

    model_config = ConfigDict(populate_by_name=True)

    metadata: Optional[PaperMetadata] = None
    status_report: Optional[StatusReport] = Field(
        default=None,
        validation_alias=AliasChoices("statusReport", "status_report"),
        serialization_alias="statusReport",
    )
    segments: List[Segment]
    audit_alerts: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("audit_alerts", "auditAlerts"),
    )
    title_suggestions: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("titleSuggestions", "title_suggestions"),
        serialization_alias="titleSuggestions",
    )

    @field_validator("metadata", "status_report", mode="wrap")
    @classmethod
    def best_effort_block(cls, value: Any, handler: Any) -> Any:
        return _drop_invalid(value, handler)

    @field_validator("audit_alerts", "title_suggestions", mode="before")
    @classmethod
    def string_list(cls, v: Any) -> List[str]:
        return _keep_strings(v)

    def to_payload(self) -> dict:
        """Dump in the wire shape the model produced (camelCase blocks)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class AnalysisRequest(BaseModel):
    """One user-triggered analysis.

    ``providers`` is a snapshot taken when the request is built, so an edit
    to the configuration store does not affect an analysis in flight.
    """

    text: str
    mode: InputMode = InputMode.FULL
    providers: List[ProviderConfig] = Field(default_factory=list)

    def active_providers(self) -> List[ProviderConfig]:
        """Enabled, credentialed providers in fallback order."""
        return [p for p in self.providers if p.is_active]


class ProviderFailure(BaseModel):
    """Diagnostic for one failed provider attempt."""

    provider: str
    model_name: str
    error_type: str
    reason: str
    status_code: Optional[int] = None

    @classmethod
    def from_error(cls, config: ProviderConfig, error: Exception) -> "ProviderFailure":
        return cls(
            provider=config.provider,
            model_name=config.model_name,
            error_type=type(error).__name__,
            reason=str(error),
            status_code=getattr(error, "status_code", None),
        )
