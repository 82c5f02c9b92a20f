import pytest

from resume_content.services.vocabulary import load_vocabulary
from resume_content.utils.paths import CONTENT_DIR


FIXED_YEAR = 2025


class FakeClock:
    """Epoch-millisecond clock advanced by hand."""

    def __init__(self, now: int = 1_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def year():
    return FIXED_YEAR


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def vocabulary():
    return load_vocabulary()


@pytest.fixture
def resume_en_md():
    return (CONTENT_DIR / "resume-en.md").read_text(encoding="utf-8")


@pytest.fixture
def resume_pt_md():
    return (CONTENT_DIR / "resume-pt.md").read_text(encoding="utf-8")


@pytest.fixture
def projects_md():
    return (CONTENT_DIR / "projects.md").read_text(encoding="utf-8")


@pytest.fixture
def projects_pt_md():
    return (CONTENT_DIR / "projects-pt.md").read_text(encoding="utf-8")
