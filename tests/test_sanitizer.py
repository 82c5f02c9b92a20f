from resume_content.models.resume import Period, PersonalInfo, ResumeData
from resume_content.utils.sanitizer import normalize_data, normalize_text, sanitize_data, sanitize_text


def test_sanitize_text_drops_tags_and_scripts():
    text = "Hello <b>world</b><script>alert('x')</script><style>p {}</style>!"
    assert sanitize_text(text) == "Hello world!"


def test_normalize_text_collapses_whitespace():
    assert normalize_text("  a \t  b  \n\n\n  c  ") == "a b\nc"
    assert normalize_text("x\r\ny") == "x\ny"


def test_sanitize_data_walks_nested_structures():
    data = {"name": "<i>Ana</i>", "tags": ["  a  b ", ("<p>t</p>",)], "count": 3, "flag": None}
    assert sanitize_data(data) == {"name": "Ana", "tags": ["a b", ("t",)], "count": 3, "flag": None}


def test_sanitize_data_does_not_mutate_input():
    data = {"items": ["<b>x</b>"]}
    sanitize_data(data)
    assert data == {"items": ["<b>x</b>"]}


def test_sanitize_data_rebuilds_models():
    resume = ResumeData(
        personal_info=PersonalInfo(name="  <b>Ana</b>  Silva ", email="ana@example.com"),
        activities=["<em>Volunteer</em>   work"],
    )
    cleaned = sanitize_data(resume)
    assert isinstance(cleaned, ResumeData)
    assert cleaned.personal_info.name == "Ana Silva"
    assert cleaned.activities == ["Volunteer work"]
    assert resume.personal_info.name == "  <b>Ana</b>  Silva "


def test_sanitize_and_normalize_are_idempotent():
    samples = [
        "<div>  Lead   <span>engineer</span> </div>\n\n\nat Acme",
        {"period": Period(start=" 2019 ", end="Present ")},
        ["&lt;b&gt;escaped&lt;/b&gt;", "plain"],
    ]
    for sample in samples:
        once = normalize_data(sanitize_data(sample))
        twice = normalize_data(sanitize_data(once))
        assert once == twice
