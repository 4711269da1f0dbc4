import pytest

from trivia_profile.services.category_service import (
    CANONICAL_TO_ICON, UNKNOWN_ICON, CategoryNormalizer, get_category_normalizer,
)


@pytest.fixture
def normalizer():
    return CategoryNormalizer()


@pytest.mark.parametrize("label, expected", [
    ("science", "Science & Nature"),
    ("  SCIENCE  ", "Science & Nature"),
    ("Film_and_TV", "Film & TV"),
    ("books", "Literature"),
    ("General Knowledge", "General Knowledge"),
])
def test_normalize_known_labels(normalizer, label, expected):
    assert normalizer.normalize(label) == expected


def test_unknown_label_passes_through_unchanged(normalizer):
    assert normalizer.normalize("Quantum Knitting") == "Quantum Knitting"


def test_icon_for_known_and_unknown(normalizer):
    assert normalizer.icon_for("History") == "clock"
    assert normalizer.icon_for("Quantum Knitting") == UNKNOWN_ICON


def test_tables_are_read_only(normalizer):
    with pytest.raises(TypeError):
        normalizer.aliases["new"] = "History"


def test_alternate_taxonomy(small_normalizer):
    assert small_normalizer.normalize("Sci") == "Science & Nature"
    assert small_normalizer.normalize("history") == "history"
    assert small_normalizer.icon_for("History") == UNKNOWN_ICON


def test_default_normalizer_is_shared():
    assert get_category_normalizer() is get_category_normalizer()


class RecordingStore:
    def __init__(self):
        self.categories = []
        self.aliases = []

    def get_or_create_category(self, name, icon=None):
        self.categories.append((name, icon))
        return len(self.categories)

    def add_alias(self, alias, canonical_name):
        self.aliases.append((alias, canonical_name))
        return True


def test_seed_creates_every_category_then_every_alias(normalizer):
    recorder = RecordingStore()
    normalizer.seed(recorder)

    assert dict(recorder.categories) == CANONICAL_TO_ICON
    assert len(recorder.aliases) == len(normalizer.aliases)
    assert ("books", "Literature") in recorder.aliases
