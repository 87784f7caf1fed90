"""Tests for display-language selection."""

import pytest

from habitica_mcp.i18n import Localizer, primary_language


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("en", "en"),
        ("EN", "en"),
        ("en_US.UTF-8", "en"),
        ("pt-BR", "pt"),
        ("de_DE@euro", "de"),
        ("", "en"),
    ],
)
def test_primary_language(tag: str, expected: str) -> None:
    assert primary_language(tag) == expected


def test_localizer_defaults_to_english() -> None:
    localizer = Localizer()
    assert localizer.language == "en"
    assert localizer.t("Get tasks list") == "Get tasks list"


def test_unknown_language_passes_text_through() -> None:
    localizer = Localizer("fr_FR.UTF-8")
    assert localizer.language == "fr"
    assert localizer.t("Task ID") == "Task ID"
    assert repr(localizer) == "Localizer(language='fr')"
