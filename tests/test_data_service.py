import json

import pytest

from resume_content.config.settings import Settings
from resume_content.models.filters import FilterOptions
from resume_content.services.cache_service import CacheService
from resume_content.services.content_source import FileContentSource
from resume_content.services.data_service import DataService
from resume_content.utils.data_validator import DataValidator
from resume_content.utils.file_utils import load_json
from resume_content.utils.paths import CONTENT_DIR


class CountingSource(FileContentSource):
    """File source that records every successful fetch."""

    def __init__(self, base_dir):
        super().__init__(base_dir)
        self.fetched = []

    def fetch(self, name):
        text = super().fetch(name)
        self.fetched.append(name)
        return text


def make_service(content_dir, tmp_path, clock, year, vocabulary):
    settings = Settings(content_dir=content_dir, output_dir=tmp_path / "output", languages=["en", "pt"])
    return DataService(
        settings,
        source=CountingSource(content_dir),
        cache=CacheService(ttl_ms=60_000, clock=clock),
        validator=DataValidator(year=year),
        vocabulary=vocabulary,
    )


@pytest.fixture
def service(tmp_path, clock, year, vocabulary):
    return make_service(CONTENT_DIR, tmp_path, clock, year, vocabulary)


def test_load_resume_from_markdown(service):
    result = service.load_resume("en")
    assert result.success
    assert result.data.personal_info.name == "Marina Costa"
    assert service.source.fetched == ["resume-en.md"]


def test_injected_collaborators_are_kept(service):
    assert service.cache.ttl_ms == 60_000
    assert len(service.cache) == 0
    assert isinstance(service.source, CountingSource)


def test_second_load_is_served_from_cache(service, clock):
    first = service.load_resume("pt")
    second = service.load_resume("pt")
    assert second.data == first.data
    assert second.data is not first.data
    assert service.source.fetched == ["resume-pt.md"]

    service.load_resume("pt", force_refresh=True)
    assert service.source.fetched == ["resume-pt.md", "resume-pt.md"]

    clock.advance(60_001)
    service.load_resume("pt")
    assert len(service.source.fetched) == 3

    stats = service.cache_stats()
    assert stats.hits == 1


def test_callers_cannot_change_cached_data(service):
    first = service.load_projects("en")
    first.data.clear()
    assert len(service.load_projects("en").data) == 3

    hit = service.load_projects("en")
    hit.data[0].technologies.append("COBOL")
    hit.data.pop()
    again = service.load_projects("en")
    assert len(again.data) == 3
    assert "COBOL" not in again.data[0].technologies

    resume = service.load_resume("en")
    resume.data.experience.clear()
    assert len(service.load_resume("en").data.experience) == 3
    assert service.source.fetched.count("projects.md") == 1


def test_unsupported_language(service):
    result = service.load_resume("fr")
    assert not result.success
    assert result.errors[0].field == "general"
    assert "Unsupported language" in result.errors[0].message
    assert service.source.fetched == []


def test_missing_content_is_a_general_error(tmp_path, clock, year, vocabulary):
    empty = tmp_path / "empty"
    empty.mkdir()
    service = make_service(empty, tmp_path, clock, year, vocabulary)

    result = service.load_projects("en")
    assert not result.success
    assert len(result.errors) == 1
    assert result.errors[0].field == "general"
    assert result.errors[0].message.startswith("Failed to load projects data")

    assert service.metrics("en") is None
    assert service.filter_experience("en", FilterOptions()) is None


def test_json_exports_take_precedence(tmp_path, clock, year, vocabulary, service):
    content = tmp_path / "content"
    exported = service.export_json("en", content)
    assert set(exported) == {"resume", "projects"}

    payload = load_json(exported["resume"])
    payload["personalInfo"]["name"] = "Marina C."
    (content / "resume-en.json").write_text(json.dumps(payload), encoding="utf-8")

    projects = load_json(exported["projects"])
    (content / "projects-en.json").write_text(json.dumps({"projects": projects}), encoding="utf-8")

    from_json = make_service(content, tmp_path, clock, year, vocabulary)
    resume = from_json.load_resume("en")
    assert resume.success
    assert resume.data.personal_info.name == "Marina C."
    assert [project.title for project in from_json.load_projects("en").data] == [
        "Real-Time Payments Settlement",
        "Checkout Performance Program",
        "Core Banking Integration",
    ]


def test_invalid_json_and_validation_failures(tmp_path, clock, year, vocabulary):
    content = tmp_path / "content"
    content.mkdir()
    (content / "resume-en.json").write_text("{not json", encoding="utf-8")
    (content / "resume-pt.json").write_text(json.dumps({
        "personalInfo": {"name": "Ana", "email": "ana@example.com"},
        "experience": [{"position": "Dev", "company": "X", "period": {"start": "1800", "end": "2020"}}],
    }), encoding="utf-8")
    service = make_service(content, tmp_path, clock, year, vocabulary)

    broken = service.load_resume("en")
    assert not broken.success
    assert broken.errors[0].message.startswith("Invalid JSON")

    invalid = service.load_resume("pt")
    assert not invalid.success
    assert "experience[0].period.start" in [error.field for error in invalid.errors]
    assert len(service.cache) == 0


def test_load_dataset_is_consistent(service):
    dataset = service.load_dataset("en")
    assert dataset.success
    assert dataset.consistency_warnings == []


def test_search_across_datasets(service):
    results = service.search("kafka", "en")
    assert results.experience == []
    assert [result.item.title for result in results.projects] == ["Real-Time Payments Settlement"]
    assert results.skills[0].item.category == "Data"
    assert results.total_results == 2

    payments = service.search("payments", "en")
    assert [result.item.company for result in payments.experience] == ["Nubank"]


def test_filters_are_enriched_and_ordered(service):
    everything = service.filter_experience("en", FilterOptions())
    assert [item.company for item in everything.items] == ["Nubank", "Magazine Luiza", "Accenture"]
    assert all(item.company_size for item in everything.items)

    react = service.filter_experience("en", FilterOptions(technologies=["React"]))
    assert [item.company for item in react.items] == ["Magazine Luiza"]

    finance = service.filter_projects("en", FilterOptions(industries=["Finance"]))
    assert [project.title for project in finance.items] == ["Core Banking Integration", "Real-Time Payments Settlement"]
    assert finance.items[0].tags[-1] == "Long-term"

    experts = service.filter_skills("en", FilterOptions(skill_levels=["Expert"]))
    assert experts.filtered_count == 4


def test_facets_and_metrics(service):
    facets = service.facet_options("en")
    assert facets.companies == ["Accenture", "Magazine Luiza", "Nubank"]

    summary = service.metrics("en")
    assert summary.projects.total_projects == 3
    assert summary.experience.companies_worked == 3
    assert "Finance" in summary.industries


def test_preload_refresh_and_clear(service):
    status = service.preload()
    assert status == {
        "en": {"resume": True, "projects": True},
        "pt": {"resume": True, "projects": True},
    }
    assert len(service.cache) == 4

    assert service.refresh("pt") == {"resume": True, "projects": True}

    service.clear_cache()
    assert len(service.cache) == 0


def test_export_writes_camel_case_json(service, tmp_path):
    written = service.export_json("pt")
    assert written["resume"] == tmp_path / "output" / "resume-pt.json"

    resume = load_json(written["resume"])
    assert resume["personalInfo"]["name"] == "Marina Costa"
    assert resume["experience"][0]["period"]["end"] == "Present"

    projects = load_json(written["projects"])
    assert all("clientType" in project for project in projects)
