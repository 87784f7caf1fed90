"""Display-string localization for Habitica MCP.

Only English is shipped. The lookup is keyed by the configured language so
that catalogues for other languages can be added without touching callers.
"""

from collections.abc import Mapping
from types import MappingProxyType

from habitica_mcp.config import DEFAULT_LANGUAGE

# language -> {english text -> translated text}
_CATALOGUES: Mapping[str, Mapping[str, str]] = MappingProxyType({DEFAULT_LANGUAGE: {}})


def primary_language(tag: str) -> str:
    """Reduce a locale tag such as ``en_US.UTF-8`` or ``pt-BR`` to ``en`` / ``pt``."""
    for separator in (".", "@", "_", "-"):
        tag = tag.split(separator, 1)[0]
    return tag.lower() or DEFAULT_LANGUAGE


class Localizer:
    """Translate user-facing strings into the configured display language."""

    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        self.language = primary_language(language)
        self._catalogue = _CATALOGUES.get(self.language, {})

    def __repr__(self) -> str:
        return f"Localizer(language={self.language!r})"

    def t(self, text: str) -> str:
        """Return ``text`` in the display language, or unchanged when no translation exists."""
        return self._catalogue.get(text, text)
