from resume_content.utils.markdown import find_section, parse_front_matter, section_with_children, split_sections


SAMPLE = """Preamble that belongs to no section

# Jane Doe
Staff Engineer

## Experience

### Lead at Acme | 2019 - 2021
- Shipped things

## Skills
Python, Go
"""


def test_split_sections_levels_and_content():
    document = split_sections(SAMPLE)
    titles = [(section.title, section.level) for section in document.sections]
    assert titles == [
        ("Jane Doe", 1),
        ("Experience", 2),
        ("Lead at Acme | 2019 - 2021", 3),
        ("Skills", 2),
    ]
    assert document.sections[0].content == "Staff Engineer\n"
    assert document.sections[1].content == ""
    assert document.sections[3].content == "Python, Go\n"


def test_lines_before_first_heading_are_dropped():
    document = split_sections(SAMPLE)
    assert all("Preamble" not in section.content for section in document.sections)
    assert document.raw_content == SAMPLE


def test_no_heading_yields_no_sections():
    assert split_sections("just text\nmore text").sections == []
    assert split_sections("").sections == []


def test_front_matter_is_parsed():
    document = split_sections("---\nname: Jane\nemail: jane@example.com\n---\n# Jane\nBody\n")
    assert document.front_matter == {"name": "Jane", "email": "jane@example.com"}
    assert [section.title for section in document.sections] == ["Jane"]


def test_malformed_front_matter_is_ignored():
    front_matter, body = parse_front_matter("---\nname: [unclosed\n---\n# Title\n")
    assert front_matter == {}
    assert body.startswith("# Title")


def test_non_mapping_front_matter_is_ignored():
    front_matter, _ = parse_front_matter("---\n- a\n- b\n---\n# Title\n")
    assert front_matter == {}


def test_find_section_uses_keyword_priority():
    sections = split_sections("## Professional Profile\nx\n## Work Experience\ny\n").sections
    found = find_section(sections, ["experience", "professional"])
    assert found.title == "Work Experience"
    assert find_section(sections, ["education"]) is None


def test_section_with_children_renders_child_headings_bold():
    sections = split_sections(SAMPLE).sections
    body = section_with_children(sections, sections[1])
    assert body == "**Lead at Acme | 2019 - 2021**\n- Shipped things\n"
