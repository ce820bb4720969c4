from talentsearch.models import CandidateStatus
from talentsearch.schemas import SearchFilters
from talentsearch.search.predicates import (
    DERIVED_FILTERS,
    STORAGE_FILTERS,
    CurrencyRange,
    MinExperience,
    build_predicate,
)


def _names(store, filters=None, owner=None, query=""):
    predicate, _ = build_predicate(SearchFilters.model_validate(filters or {}), owner, query)
    rows, _ = store.find_matching(predicate.clause())
    return sorted(c.first_name for c in rows)


def test_filter_names_are_classified_exactly_once():
    aliases = {f.alias for f in SearchFilters.model_fields.values()}
    assert STORAGE_FILTERS | DERIVED_FILTERS == aliases
    assert not STORAGE_FILTERS & DERIVED_FILTERS


def test_no_filters_matches_everything(store, make_candidate):
    make_candidate(first_name="a")
    make_candidate(first_name="b")
    predicate, residual = build_predicate(SearchFilters())
    assert predicate.conditions == []
    assert residual == []
    assert _names(store) == ["a", "b"]


class TestSkills:
    def test_all_requires_every_skill(self, store, make_candidate):
        make_candidate(first_name="java_only", skills="Java, Spring")
        make_candidate(first_name="both", skills="Java, SQL")
        filters = {"primarySkills": ["java", "sql"], "skillMatchType": "ALL"}
        assert _names(store, filters) == ["both"]

    def test_any_is_default(self, store, make_candidate):
        make_candidate(first_name="java_only", skills="Java, Spring")
        make_candidate(first_name="both", skills="Java, SQL")
        make_candidate(first_name="neither", skills="Go")
        assert _names(store, {"primarySkills": ["java", "sql"]}) == ["both", "java_only"]

    def test_secondary_skills_are_anded_with_primary(self, store, make_candidate):
        make_candidate(first_name="a", skills="Java, Docker")
        make_candidate(first_name="b", skills="Java")
        filters = {"primarySkills": ["java"], "secondarySkills": ["docker", "k8s"]}
        assert _names(store, filters) == ["a"]


class TestEmploymentHistory:
    def test_yes_matches_json_history(self, store, make_candidate):
        make_candidate(first_name="json", employment_history='{"company":"X"}')
        make_candidate(first_name="yes", employment_history="yes")
        make_candidate(first_name="no", employment_history="no")
        make_candidate(first_name="null", employment_history=None)
        assert _names(store, {"employmentHistory": ["yes"]}) == ["json", "yes"]

    def test_no_matches_literal_no(self, store, make_candidate):
        make_candidate(first_name="json", employment_history='{"company":"X"}')
        make_candidate(first_name="no", employment_history="no")
        assert _names(store, {"employmentHistory": ["no"]}) == ["no"]

    def test_both(self, store, make_candidate):
        make_candidate(first_name="json", employment_history='[{"company":"X"}]')
        make_candidate(first_name="no", employment_history="no")
        make_candidate(first_name="null", employment_history=None)
        assert _names(store, {"employmentHistory": ["yes", "no"]}) == ["json", "no"]


class TestPassingYear:
    def test_inclusive_range(self, store, make_candidate):
        for year in (2018, 2019, 2021, 2022):
            make_candidate(first_name=str(year), passing_year=year)
        filters = {"minPassingYear": 2019, "maxPassingYear": 2021}
        assert _names(store, filters) == ["2019", "2021"]

    def test_single_bound_is_ignored(self, store, make_candidate):
        make_candidate(first_name="old", passing_year=2010)
        make_candidate(first_name="new", passing_year=2023)
        predicate, _ = build_predicate(SearchFilters.model_validate({"minPassingYear": 2020}))
        assert predicate.conditions == []
        assert _names(store, {"maxPassingYear": 2015}) == ["new", "old"]


class TestFieldFilters:
    def test_locations_or(self, store, make_candidate):
        make_candidate(first_name="pune", location="Pune, MH")
        make_candidate(first_name="mumbai", location="Navi Mumbai")
        make_candidate(first_name="delhi", location="Delhi")
        assert _names(store, {"locations": ["PUNE", "mumbai"]}) == ["mumbai", "pune"]

    def test_status_in(self, store, make_candidate):
        make_candidate(first_name="p")
        make_candidate(first_name="h", status=CandidateStatus.HIRED)
        make_candidate(first_name="o", status=CandidateStatus.OFFERED)
        assert _names(store, {"applicationStatus": ["HIRED", "OFFERED"]}) == ["h", "o"]

    def test_degree_is_case_insensitive_equality(self, store, make_candidate):
        make_candidate(first_name="btech", degree="B.Tech")
        make_candidate(first_name="mtech", degree="M.Tech")
        assert _names(store, {"degree": ["b.tech"]}) == ["btech"]

    def test_qualification_is_substring_on_degree(self, store, make_candidate):
        make_candidate(first_name="btech", degree="B.Tech")
        make_candidate(first_name="mca", degree="MCA")
        assert _names(store, {"qualification": "tech"}) == ["btech"]

    def test_blank_values_are_ignored(self, store, make_candidate):
        make_candidate(first_name="a", company="Acme")
        predicate, _ = build_predicate(
            SearchFilters.model_validate({"company": "  ", "locations": ["", " "], "profile": ""})
        )
        assert predicate.conditions == []

    def test_inner_whitespace_is_matched_as_typed(self, store, make_candidate):
        make_candidate(first_name="double", skills="Spring  Boot")
        make_candidate(first_name="single", skills="Spring Boot")
        assert _names(store, {"primarySkills": ["spring  boot"]}) == ["double"]

    def test_wildcards_are_literal(self, store, make_candidate):
        make_candidate(first_name="pct", notice_period="100% remote")
        make_candidate(first_name="other", notice_period="1000 days")
        assert _names(store, {"noticePeriod": ["100%"]}) == ["pct"]

    def test_gap_and_levels(self, store, make_candidate):
        make_candidate(first_name="a", gap="No gap", experience_level="Senior")
        make_candidate(first_name="b", gap="1 year gap", experience_level="Junior")
        filters = {"educationGap": ["no gap"], "experienceLevel": ["senior", "lead"]}
        assert _names(store, filters) == ["a"]


class TestQueryAndOwner:
    def test_text_query_spans_fields(self, store, make_candidate):
        make_candidate(first_name="Asha", skills="Python")
        make_candidate(first_name="Ravi", company="PythonWorks")
        make_candidate(first_name="Meera", email="meera@example.com")
        assert _names(store, query="python") == ["Asha", "Ravi"]
        assert _names(store, query="EXAMPLE.COM") == ["Meera"]

    def test_owner_restriction_is_first_and_always_applied(self, store, make_candidate):
        make_candidate(first_name="mine", source_hr_id=7, skills="java")
        make_candidate(first_name="theirs", source_hr_id=8, skills="java")
        predicate, _ = build_predicate(SearchFilters.model_validate({"primarySkills": ["java"]}), 7)
        assert len(predicate.conditions) == 2
        assert _names(store, {"primarySkills": ["java"]}, owner=7) == ["mine"]
        assert _names(store, owner=9) == []


def test_derived_filters_become_residual():
    filters = SearchFilters.model_validate({
        "minExperience": 2,
        "maxCurrentCTC": 900000,
        "minExpectedCTC": 500000,
        "maxExpectedCTC": 1200000,
    })
    predicate, residual = build_predicate(filters)
    assert predicate.conditions == []
    assert residual == [
        MinExperience(2.0),
        CurrencyRange("current_package", None, 900000.0),
        CurrencyRange("expected_ctc", 500000.0, 1200000.0),
    ]
