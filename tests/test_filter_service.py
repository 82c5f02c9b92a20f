import pytest

from resume_content.models.filters import DateRange, FilterOptions
from resume_content.models.project import Project
from resume_content.models.resume import ExperienceItem, Period, Skill, SkillCategory
from resume_content.services.enrichment_service import EnrichmentService
from resume_content.services.filter_service import FilterService


def make_experience():
    rows = [
        ("Frontend Engineer", "Acme", ["React", "TypeScript"], "2015", "2017"),
        ("Senior Engineer", "Acme", ["Python"], "2017", "2019"),
        ("Engineering Manager", "Globex", ["React"], "2019", "Present"),
        ("Developer", "Initech", ["React Native"], "2012", "2015"),
        ("Consultant", "Accenture", ["Java"], "2010", "2012"),
        ("Tech Lead", "Acme Digital", ["React", "Node.js"], "2008", "2010"),
        ("Intern", "Hooli", ["PHP"], "2007", "2008"),
        ("Data Engineer", "Acme", ["Kafka", "React"], "2005", "2007"),
        ("Analyst", "Umbrella", ["Excel"], "2003", "2005"),
        ("Freelancer", "Self", ["React"], "unknown", "2003"),
    ]
    return [
        ExperienceItem(
            id=f"exp-{index}",
            position=position,
            company=company,
            technologies=technologies,
            period=Period(start=start, end=end),
        )
        for index, (position, company, technologies, start, end) in enumerate(rows, 1)
    ]


def ids(results):
    return [item.id for item in results.items]


def test_filters_are_associative():
    service = FilterService(year=2025)
    experience = make_experience()
    by_tech = FilterOptions(technologies=["React"])
    by_company = FilterOptions(companies=["Acme"])

    stepwise = service.filter_experience(service.filter_experience(experience, by_tech).items, by_company)
    combined = service.filter_experience(experience, by_tech.merge(by_company))

    assert ids(stepwise) == ids(combined) == ["exp-1", "exp-6", "exp-8"]
    assert combined.total_count == 10
    assert combined.filtered_count == 3
    assert combined.applied_filters == ["Company: Acme", "Technology: React"]


def test_merge_rejects_conflicting_predicates():
    with pytest.raises(ValueError):
        FilterOptions(technologies=["React"]).merge(FilterOptions(technologies=["Vue"]))


def test_no_filters_returns_everything():
    results = FilterService(year=2025).filter_experience(make_experience(), FilterOptions())
    assert results.filtered_count == 10
    assert results.applied_filters == []


def test_date_range_overlap_excludes_unparsable_periods():
    service = FilterService(year=2025)
    options = FilterOptions(date_range=DateRange(start="2016", end="2018"))
    results = service.filter_experience(make_experience(), options)
    assert ids(results) == ["exp-1", "exp-2"]
    assert results.applied_filters == ["Date Range: 2016 - 2018"]

    open_ended = service.filter_experience(make_experience(), FilterOptions(date_range=DateRange(start="2020")))
    assert ids(open_ended) == ["exp-3"]


def test_derived_fields_are_inferred_when_missing():
    service = FilterService(EnrichmentService(), year=2025)
    experience = make_experience()

    managers = service.filter_experience(experience, FilterOptions(role_types=["Manager"]))
    assert ids(managers) == ["exp-3"]

    enterprise = service.filter_experience(experience, FilterOptions(company_sizes=["Enterprise"]))
    assert ids(enterprise) == ["exp-5"]


def test_search_term_is_and_combined():
    results = FilterService(year=2025).filter_experience(
        make_experience(), FilterOptions(technologies=["React"], search_term="engineer")
    )
    assert ids(results) == ["exp-1", "exp-3", "exp-8"]
    assert results.applied_filters[-1] == 'Search: "engineer"'


def test_project_filters():
    projects = [
        Project(id="a", title="Ledger", client_type="Enterprise", project_type="Platform",
                industry="Finance", technologies=["Python"]),
        Project(id="b", title="Storefront", client_type="Startup", project_type="Web",
                industry="Retail", technologies=["React"]),
        Project(id="c", title="Risk engine", client_type="Enterprise", project_type="Platform",
                industry="Finance", technologies=["Python", "React"]),
    ]
    options = FilterOptions(industries=["finance"], technologies=["React"])
    results = FilterService(year=2025).filter_projects(projects, options)
    assert [project.id for project in results.items] == ["c"]
    assert results.applied_filters == ["Industry: finance", "Technology: React"]


def test_skill_filters_use_exact_levels():
    categories = [
        SkillCategory(name="Languages", skills=[
            Skill(name="Python", level="Expert"),
            Skill(name="Go", level="Advanced"),
        ]),
        SkillCategory(name="Cloud", skills=[Skill(name="AWS", level="Expert")]),
    ]
    service = FilterService(year=2025)

    experts = service.filter_skills(categories, FilterOptions(skill_levels=["Expert"]))
    assert [skill.name for skill in experts.items] == ["Python", "AWS"]
    assert experts.items[1].category == "Cloud"

    cloud = service.filter_skills(categories, FilterOptions(skill_categories=["cloud"]))
    assert [skill.name for skill in cloud.items] == ["AWS"]


def test_facet_options_are_sorted_and_distinct():
    experience = make_experience()[:3]
    projects = [Project(title="X", client_type="Startup", project_type="Web", industry="Retail",
                        technologies=["Vue"])]
    categories = [SkillCategory(name="Languages", skills=[Skill(name="Python")])]

    facets = FilterService(year=2025).facet_options(experience, projects, categories)
    assert facets.companies == ["Acme", "Globex"]
    assert facets.technologies == ["Python", "React", "TypeScript", "Vue"]
    assert facets.client_types == ["Startup"]
    assert facets.skill_categories == ["Languages"]
