from resume_content.services.vocabulary import TechnologyVocabulary, Vocabulary


def test_technologies_in_order_of_first_mention(vocabulary):
    text = "Deployed Go services on k8s, with a React front end and Postgres storage"
    assert vocabulary.technologies.match(text) == ["Go", "Kubernetes", "React", "PostgreSQL"]


def test_react_native_is_distinct_from_react(vocabulary):
    assert vocabulary.technologies.match("Built apps in React Native") == ["React", "React Native"]
    assert vocabulary.technologies.match("Spring Boot APIs") == ["Spring Boot"]


def test_case_sensitive_short_names(vocabulary):
    assert vocabulary.technologies.match("let's go to the AI summit") == ["AI"]
    assert vocabulary.technologies.match("said the ai") == []


def test_canonical_names(vocabulary):
    assert vocabulary.technologies.canonical(" postgres ") == "PostgreSQL"
    assert vocabulary.technologies.canonical("nodejs") == "Node.js"
    assert vocabulary.technologies.canonical("Airflow") == "Airflow"


def test_inference_tables(vocabulary):
    assert vocabulary.infer_industry("Regional Bank") == "Finance"
    assert vocabulary.infer_industry("Bakery") == "Other"
    assert vocabulary.infer_company_size("Google Brasil") == "Large"
    assert vocabulary.infer_company_size("Corner Shop") is None
    assert vocabulary.infer_role_type("VP of Engineering", "") == "Director"
    assert vocabulary.infer_role_type("Engineer", "Mentoring two interns") == "Team Lead"
    assert vocabulary.infer_role_type("Engineer", "Writes code") == "Individual Contributor"
    assert vocabulary.is_remote("Fully distributed team")
    assert not vocabulary.is_remote("São Paulo office")


def test_custom_vocabulary_file(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text('{"technologies": {"Elixir": ["\\\\belixir\\\\b"]}, "trending": ["Elixir"]}', encoding="utf-8")

    vocabulary = Vocabulary.load(path)
    assert vocabulary.technologies.names == ["Elixir"]
    assert vocabulary.trending_in(["elixir", "Go"]) == ["Elixir"]
    assert vocabulary.infer_industry("anything") == "Other"


def test_empty_text_matches_nothing():
    technologies = TechnologyVocabulary({"Go": [r"\bgolang\b"]})
    assert technologies.match("") == []
    assert not technologies.matches_any("plain prose")
    assert technologies.matches_any("services in Golang")
