"""Shared pytest fixtures for tokenest tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"
TEXT_FIXTURES_DIR = FIXTURES_DIR / "text"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def text_fixtures_dir() -> Path:
    """Return path to text fixtures."""
    return TEXT_FIXTURES_DIR


@pytest.fixture
def load_text_fixture() -> callable:
    """Factory fixture to load text fixture files.

    Usage:
        def test_something(load_text_fixture):
            content = load_text_fixture("german_umlauts.txt")
    """

    def _load(name: str) -> str:
        path = TEXT_FIXTURES_DIR / name
        return path.read_text(encoding="utf-8")

    return _load


@pytest.fixture
def short_english_text(load_text_fixture: callable) -> str:
    """Short English sentence (11 estimated tokens)."""
    return load_text_fixture("english_short.txt")


@pytest.fixture
def german_umlaut_text(load_text_fixture: callable) -> str:
    """German sentence dense with umlauts (49 estimated tokens)."""
    return load_text_fixture("german_umlauts.txt")


@pytest.fixture
def mixed_scripts_text(load_text_fixture: callable) -> str:
    """Multi-line text mixing Latin, CJK, Hangul, Kana, Arabic, emoji and numbers."""
    return load_text_fixture("mixed_scripts.txt")


@pytest.fixture
def property_texts(
    short_english_text: str, german_umlaut_text: str, mixed_scripts_text: str
) -> list[str]:
    """Texts used for property checks across all operations."""
    return [
        short_english_text,
        german_umlaut_text,
        mixed_scripts_text,
        "   leading and trailing whitespace   ",
        "a",
        "...!!!???",
        "internationalization",
        "line one\n\nline two\r\n\ttabbed",
        '{"key": [1, 2, 3], "nested": {"x": null}}',
        "def f(x):\n    return x ** 2  # square",
    ]
