from resume_content.models.resume import PRESENT
from resume_content.services.resume_extractor import ResumeExtractor, parse_resume_markdown
from resume_content.utils.data_validator import DataValidator


SAMPLE = """# John Smith

Platform Engineer
john@example.com
Location: Austin, TX

## Experience

**Staff Engineer at Globex | 2021 - Present**
Owns the data platform.
**Technologies:** Python, Postgres
- Cut cloud spend by 35% with autoscaling on Kubernetes
- Runs the on-call rotation

**Freelance Work | 2018 - 2021**
- Consulting for small shops

## Skills
- Python (Expert, 10 years), Docker, Go (Intermediate)

## Languages
**English:** Native
"""


def test_parse_resume_markdown_on_sample():
    result = parse_resume_markdown(SAMPLE)
    assert result.success
    resume = result.data

    assert resume.personal_info.name == "John Smith"
    assert resume.personal_info.title == "Platform Engineer"
    assert resume.personal_info.email == "john@example.com"
    assert resume.personal_info.location == "Austin, TX"


def test_experience_entries_and_skipped_candidates(vocabulary):
    extraction = ResumeExtractor(vocabulary).extract_experience(
        "**Staff Engineer at Globex | 2021 - Present**\n"
        "Owns the data platform.\n"
        "**Technologies:** Python, Postgres\n"
        "- Cut cloud spend by 35% with autoscaling on Kubernetes\n"
        "- Runs the on-call rotation\n"
        "**Freelance Work | 2018 - 2021**\n"
        "- Consulting for small shops\n"
    )

    assert len(extraction.records) == 1
    item = extraction.records[0]
    assert item.id == "exp-1"
    assert (item.position, item.company) == ("Staff Engineer", "Globex")
    assert (item.period.start, item.period.end) == ("2021", PRESENT)
    assert item.description == "Owns the data platform."
    assert item.achievements[0].metric == "35%"
    assert item.responsibilities == ["Runs the on-call rotation"]
    assert item.technologies == ["Python", "PostgreSQL", "Kubernetes"]

    assert len(extraction.skipped) == 1
    assert extraction.skipped[0].reasons == ["missing company"]


def test_skills_with_annotations(vocabulary):
    extraction = ResumeExtractor(vocabulary).extract_skills(
        "- Python (Expert, 10 years), Docker, Go (Intermediate)\n", "Skills"
    )
    category = extraction.records[0]
    assert category.name == "Skills"
    skills = {skill.name: skill for skill in category.skills}
    assert skills["Python"].level == "Expert"
    assert skills["Python"].years_of_experience == 10
    assert skills["Docker"].level == "Advanced"
    assert skills["Go"].level == "Intermediate"


def test_languages_accept_several_formats(vocabulary):
    languages = ResumeExtractor(vocabulary).extract_languages(
        "**English:** Native\n- Spanish - Intermediate\n- French (Basic)\n- German\n"
    )
    assert [(language.name, language.proficiency) for language in languages] == [
        ("English", "Native"),
        ("Spanish", "Intermediate"),
        ("French", "Basic"),
        ("German", "Fluent"),
    ]


def test_front_matter_overrides_personal_info(vocabulary):
    markdown = "---\nname: Johnny Smith\nemail: johnny@example.com\n---\n# John Smith\njohn@example.com\n"
    resume, _ = ResumeExtractor(vocabulary).extract(markdown)
    assert resume.personal_info.name == "Johnny Smith"
    assert resume.personal_info.email == "johnny@example.com"


def test_front_matter_urls_are_normalized(vocabulary):
    markdown = "---\nwebsite: marina.dev\ngithub: github.com/marina\n---\n# Marina\nmarina@example.com\n"
    info = ResumeExtractor(vocabulary).extract(markdown)[0].personal_info
    assert info.website == "https://marina.dev"
    assert info.github == "https://github.com/marina"
    assert DataValidator(year=2025).validate_personal_info(info) == []


def test_dotted_phone_is_not_captured(vocabulary):
    markdown = "# Ana Lima\nana@example.com | +1.555.123.4567\n\n## Experience\n**Dev at Acme | 2020 - 2022**\n"
    result = parse_resume_markdown(markdown, vocabulary)
    info = result.data.personal_info
    assert info.phone == ""
    assert DataValidator(year=2025).validate_personal_info(info) == []


def test_empty_markdown_fails_with_general_error():
    result = parse_resume_markdown("nothing useful here")
    assert not result.success
    assert [error.field for error in result.errors] == ["general"]


def test_english_sample_content(resume_en_md, vocabulary):
    resume, skipped = ResumeExtractor(vocabulary).extract(resume_en_md)

    assert skipped == []
    info = resume.personal_info
    assert info.name == "Marina Costa"
    assert info.title == "Senior Software Engineer"
    assert info.phone == "+55 11 98765-4321"
    assert info.linkedin == "https://linkedin.com/in/marinacosta"
    assert info.github == "https://github.com/marinacosta"
    assert info.website == "https://marina.dev"

    assert [item.company for item in resume.experience] == ["Nubank", "Magazine Luiza", "Accenture"]
    assert resume.experience[0].location == "São Paulo, SP"
    assert "Apache Kafka" in resume.experience[0].technologies

    assert [item.type for item in resume.education] == ["degree", "certification"]
    assert resume.education[0].institution == "Universidade de São Paulo"
    assert resume.education[0].gpa == "8.7/10"

    assert [category.name for category in resume.skills] == ["Languages", "Frameworks", "Cloud & DevOps", "Data"]
    assert len(resume.languages) == 3
    assert len(resume.activities) == 2


def test_portuguese_sample_content(resume_pt_md, vocabulary):
    resume, skipped = ResumeExtractor(vocabulary).extract(resume_pt_md)

    assert skipped == []
    assert resume.summary.title == "Resumo de Qualificações"
    first = resume.experience[0]
    assert (first.position, first.company) == ("Engenheira de Software Sênior", "Nubank")
    assert first.period.end == PRESENT

    python = resume.skills[0].skills[0]
    assert (python.name, python.level, python.years_of_experience) == ("Python", "Expert", 9)
    assert resume.languages[0].name == "Português"
    assert resume.activities[1] == "Palestrante na Python Brasil 2022"
