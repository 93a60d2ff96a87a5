"""
Normalized record variants produced by provider mappers and the fallback dataset.

Every record carries an immutable, source-prefixed `id` and its `source`
(provenance). `kind` discriminates the variants. JSON field names are camelCase
(legalOptions, successRate, settlementRange, ...) to match the front end.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from injury_info.services.text_utils import create_slug, parse_list


class Source(str, Enum):
    """Provenance of a record. Spreadsheet and CRM rank equally; fallback only when both yield nothing."""

    SPREADSHEET = "spreadsheet"
    CRM = "crm"
    FALLBACK = "fallback"


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)


def _to_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return parse_list(value)
    return [_to_text(v) for v in value if _to_text(v)]


Text = Annotated[str, BeforeValidator(_to_text)]
TextList = Annotated[list[str], BeforeValidator(_to_list)]


class RecordModel(BaseModel):
    """Shared config: camelCase aliases, accept either name on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArticleContent(RecordModel):
    overview: Text = ""
    symptoms: TextList = Field(default_factory=list)
    causes: TextList = Field(default_factory=list)
    treatments: TextList = Field(default_factory=list)
    legal_options: TextList = Field(default_factory=list)
    settlements: Text = ""


class Article(RecordModel):
    """Medical, legal or manufacturer article. The slug is always derived from the title."""

    kind: Literal["article"] = "article"
    id: str = Field(..., frozen=True)
    source: Source = Field(..., frozen=True)
    title: Text
    description: Text = ""
    category: Text = "medical"
    date: Text = ""
    url: Text = ""
    content: ArticleContent = Field(default_factory=ArticleContent)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def slug(self) -> str:
        return create_slug(self.title)


class LawFirm(RecordModel):
    kind: Literal["law_firm"] = "law_firm"
    id: str = Field(..., frozen=True)
    source: Source = Field(..., frozen=True)
    name: Text
    location: Text = ""
    phone: Text = ""
    website: Text = ""
    specialties: TextList = Field(default_factory=list)
    experience: Text = ""
    success_rate: Text = ""
    notable_settlements: TextList = Field(default_factory=list)


class SettlementRecord(RecordModel):
    kind: Literal["settlement"] = "settlement"
    id: str = Field(..., frozen=True)
    source: Source = Field(..., frozen=True)
    condition: Text
    state: Text = ""
    settlement_range: Text = ""
    average_settlement: Text = ""
    total_cases: Text = ""
    year: Text = ""
