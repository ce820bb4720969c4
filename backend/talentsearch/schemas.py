import enum
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models import CandidateStatus


class CandidateIn(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    company: str | None = None
    profile: str | None = None
    degree: str | None = None
    passing_year: int | None = None
    experience: str | None = None
    current_package: str | None = None
    expected_ctc: str | None = None
    gap: str | None = None
    skills: str | None = None
    resume_url: str | None = None
    status: CandidateStatus | None = None
    source_hr_id: int | None = None
    notes: str | None = None
    employment_history: str | None = None
    education: str | None = None
    experience_level: str | None = None
    notice_period: str | None = None


class CandidateOut(CandidateIn):
    id: int
    status: CandidateStatus
    percentage: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SkillMatchType(str, enum.Enum):
    ALL = "ALL"
    ANY = "ANY"


class SearchFilters(BaseModel):
    """Every filter the advanced search understands.

    Unknown keys are rejected rather than ignored, so a misspelt filter
    name surfaces as an error instead of silently widening the search.
    """

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel)

    # evaluated by the database
    locations: List[str] = []
    primary_skills: List[str] = []
    skill_match_type: SkillMatchType = SkillMatchType.ANY
    secondary_skills: List[str] = []
    qualification: Optional[str] = None
    min_passing_year: Optional[int] = None
    max_passing_year: Optional[int] = None
    company: Optional[str] = None
    profile: Optional[str] = None
    application_status: List[CandidateStatus] = []
    experience_level: List[str] = []
    notice_period: List[str] = []
    degree: List[str] = []
    education_gap: List[str] = []
    employment_history: List[Literal["yes", "no"]] = []

    # derived: parsed from free text after the fetch
    min_experience: Optional[float] = None
    min_current_ctc: Optional[float] = Field(default=None, alias="minCurrentCTC")
    max_current_ctc: Optional[float] = Field(default=None, alias="maxCurrentCTC")
    min_expected_ctc: Optional[float] = Field(default=None, alias="minExpectedCTC")
    max_expected_ctc: Optional[float] = Field(default=None, alias="maxExpectedCTC")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchRequest(CamelModel):
    query: str = ""
    # Kept untyped here so filter problems come back as a degraded result
    # rather than a 422.
    filters: dict = {}
    sort_by: Optional[str] = None
    page: int = Field(default=1, ge=1)
    page_size: Optional[int] = Field(default=None, ge=1)


class CandidateResult(CamelModel):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    profile: str | None = None
    company: str | None = None
    experience: str | None = None
    experience_level: str | None = None
    current_package: str | None = None
    expected_ctc: str | None = Field(default=None, alias="expectedCTC")
    location: str | None = None
    notice_period: str | None = None
    primary_skills: str | None = None
    education: str | None = None
    degree: str | None = None
    passing_year: int | None = None
    percentage: float | None = None
    gap: str | None = None
    employment_history: str | None = None
    status: str
    updated_at: datetime | None = None
    highlighted_text: str


class SearchPage(CamelModel):
    results: List[CandidateResult] = []
    total_count: int = 0
    page: int = 1
    total_pages: int = 0
    execution_time_ms: int = 0
    error: str | None = None
