import pytest

from vfolders.domain.naming import MAX_NAME_LENGTH, clean_name


def test_clean_name_collapses_whitespace_and_strips_separators() -> None:
    assert clean_name("  Tax\t2024 / Q1 ") == "Tax 2024 Q1"


def test_clean_name_rejects_empty() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        clean_name(" / ")


def test_clean_name_rejects_too_long() -> None:
    with pytest.raises(ValueError, match="at most"):
        clean_name("x" * (MAX_NAME_LENGTH + 1))
