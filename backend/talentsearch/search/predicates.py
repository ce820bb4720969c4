"""
Translate a candidate filter set into a database predicate.

Filters the database can evaluate become SQLAlchemy conditions, ANDed
together. Filters that need a number parsed out of free text (experience,
salaries) cannot be expressed in SQL and are handed back unevaluated as
residual filters for the in-memory pass.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from sqlalchemy import and_, func, or_, true
from sqlalchemy.sql.elements import ColumnElement

from ..extract.text import LIKE_ESCAPE, clean_values, like_pattern, normalize, search_term
from ..models import Candidate
from ..schemas import SearchFilters, SkillMatchType

STORAGE_FILTERS = frozenset({
    "locations",
    "primarySkills",
    "skillMatchType",
    "secondarySkills",
    "qualification",
    "minPassingYear",
    "maxPassingYear",
    "company",
    "profile",
    "applicationStatus",
    "experienceLevel",
    "noticePeriod",
    "degree",
    "educationGap",
    "employmentHistory",
})

DERIVED_FILTERS = frozenset({
    "minExperience",
    "minCurrentCTC",
    "maxCurrentCTC",
    "minExpectedCTC",
    "maxExpectedCTC",
})

TEXT_SEARCH_COLUMNS = (
    Candidate.first_name,
    Candidate.last_name,
    Candidate.email,
    Candidate.phone,
    Candidate.skills,
    Candidate.profile,
    Candidate.company,
)


@dataclass(frozen=True)
class MinExperience:
    years: float


@dataclass(frozen=True)
class CurrencyRange:
    field: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None


ResidualFilter = Union[MinExperience, CurrencyRange]


@dataclass
class CandidatePredicate:
    conditions: List[ColumnElement] = field(default_factory=list)

    def add(self, condition: ColumnElement) -> None:
        self.conditions.append(condition)

    def clause(self) -> ColumnElement:
        if not self.conditions:
            return true()
        return and_(*self.conditions)


def _contains(column, value: str) -> ColumnElement:
    return column.ilike(like_pattern(value), escape=LIKE_ESCAPE)


def _any_contains(column, values: List[str]) -> ColumnElement:
    return or_(*[_contains(column, v) for v in values])


def text_query_condition(query: str) -> Optional[ColumnElement]:
    q = search_term(query)
    if not q:
        return None
    return or_(*[_contains(col, q) for col in TEXT_SEARCH_COLUMNS])


def employment_history_condition(choices: List[str]) -> Optional[ColumnElement]:
    col = Candidate.employment_history
    conditions = []
    if "yes" in choices:
        # Anything that is not literally "no" counts, JSON history included.
        conditions.append(or_(
            col == "yes",
            and_(col.isnot(None), col != "no", col != "yes"),
        ))
    if "no" in choices:
        conditions.append(col == "no")
    if not conditions:
        return None
    return or_(*conditions)


def build_predicate(
    filters: SearchFilters,
    owner_restriction: Optional[int] = None,
    query: str = "",
) -> Tuple[CandidatePredicate, List[ResidualFilter]]:
    predicate = CandidatePredicate()

    # Ownership goes first and is never conditional on the other filters.
    if owner_restriction is not None:
        predicate.add(Candidate.source_hr_id == owner_restriction)

    text_cond = text_query_condition(query)
    if text_cond is not None:
        predicate.add(text_cond)

    locations = clean_values(filters.locations)
    if locations:
        predicate.add(_any_contains(Candidate.location, locations))

    skills = clean_values(filters.primary_skills)
    if skills:
        conds = [_contains(Candidate.skills, s) for s in skills]
        if filters.skill_match_type == SkillMatchType.ALL:
            predicate.add(and_(*conds))
        else:
            predicate.add(or_(*conds))

    secondary = clean_values(filters.secondary_skills)
    if secondary:
        predicate.add(_any_contains(Candidate.skills, secondary))

    if normalize(filters.qualification):
        predicate.add(_contains(Candidate.degree, filters.qualification))

    if filters.min_passing_year is not None and filters.max_passing_year is not None:
        predicate.add(Candidate.passing_year.between(filters.min_passing_year, filters.max_passing_year))

    if normalize(filters.company):
        predicate.add(_contains(Candidate.company, filters.company))

    if normalize(filters.profile):
        predicate.add(_contains(Candidate.profile, filters.profile))

    if filters.application_status:
        predicate.add(Candidate.status.in_(list(dict.fromkeys(filters.application_status))))

    levels = clean_values(filters.experience_level)
    if levels:
        predicate.add(_any_contains(Candidate.experience_level, levels))

    periods = clean_values(filters.notice_period)
    if periods:
        predicate.add(_any_contains(Candidate.notice_period, periods))

    degrees = clean_values(filters.degree)
    if degrees:
        predicate.add(func.lower(Candidate.degree).in_(degrees))

    gaps = clean_values(filters.education_gap)
    if gaps:
        predicate.add(_any_contains(Candidate.gap, gaps))

    history = employment_history_condition(filters.employment_history)
    if history is not None:
        predicate.add(history)

    return predicate, residual_filters(filters)


def residual_filters(filters: SearchFilters) -> List[ResidualFilter]:
    residual: List[ResidualFilter] = []
    if filters.min_experience is not None:
        residual.append(MinExperience(filters.min_experience))
    if filters.min_current_ctc is not None or filters.max_current_ctc is not None:
        residual.append(CurrencyRange("current_package", filters.min_current_ctc, filters.max_current_ctc))
    if filters.min_expected_ctc is not None or filters.max_expected_ctc is not None:
        residual.append(CurrencyRange("expected_ctc", filters.min_expected_ctc, filters.max_expected_ctc))
    return residual
