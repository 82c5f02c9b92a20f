from resume_content.models.project import Project
from resume_content.services.search_service import SearchService, field_value, find_all_indices


def test_prefix_match_ranks_first():
    items = [{"title": "React Native Development"}, {"title": "Full Stack with React"}, {"title": "React Developer"}]
    results = SearchService().search(items, "React", ["title"])

    assert results[0].item["title"] == "React Developer"
    assert results[0].score > results[1].score
    assert [result.item["title"] for result in results[1:]] == ["React Native Development", "Full Stack with React"]


def test_score_tiers():
    service = SearchService()
    exact, _ = service.score_text("React", "react")
    prefix, _ = service.score_text("React Developer", "react")
    word, _ = service.score_text("Full Stack with React", "react")
    substring, _ = service.score_text("Preact", "react")

    assert exact > prefix > word > substring > 0
    assert service.score_text("Vue", "react") == (0.0, [])


def test_blank_term_returns_everything_with_score_one():
    items = [{"title": "a"}, {"title": "b"}]
    results = SearchService().search(items, "   ", ["title"])
    assert [(result.item, result.score, result.matches) for result in results] == [
        ({"title": "a"}, 1, []),
        ({"title": "b"}, 1, []),
    ]


def test_non_matching_items_are_excluded():
    results = SearchService().search([{"title": "Go"}, {"title": "Rust"}], "rust", ["title"])
    assert [result.item["title"] for result in results] == ["Rust"]


def test_list_fields_score_two_per_element():
    item = {"technologies": ["React", "React Native", "Vue"]}
    results = SearchService().search([item], "react", ["technologies"])
    assert results[0].score == 4
    assert [match.value for match in results[0].matches] == ["React", "React Native"]


def test_match_indices_and_overlaps():
    assert find_all_indices("aaaa", "aa") == [(0, 2), (1, 3), (2, 4)]
    results = SearchService().search([{"title": "Data and data"}], "data", ["title"])
    assert results[0].matches[0].indices == [(0, 4), (9, 13)]


def test_models_and_camel_case_fields():
    project = Project(title="Checkout", client_type="Retail")
    assert field_value(project, "clientType") == "Retail"
    assert field_value({"client_type": "Retail"}, "clientType") == "Retail"

    results = SearchService().search([project], "retail", ["clientType"])
    assert results[0].matches[0].field == "clientType"


def test_ties_keep_input_order():
    items = [{"title": "Python one"}, {"title": "Python two"}]
    results = SearchService().search(items, "python", ["title"])
    assert [result.item["title"] for result in results] == ["Python one", "Python two"]
