"""Localized text lookup for labels and rendered strings."""

from __future__ import annotations

from record_attributes.config import settings

# Built-in strings; applications extend or override these per language
DEFAULT_CATALOGUE: dict[str, dict[str, str]] = {
    "en": {
        "datagrid_summary": "[start] - [end] of [count] (page [page] of [pages])",
        "search_from": "from",
        "search_to": "to",
        "error_obligatoryfield": "Required field is empty",
    },
    "nl": {
        "datagrid_summary": "[start] - [end] van [count] (pagina [page] van [pages])",
        "search_from": "van",
        "search_to": "tot",
        "error_obligatoryfield": "Verplicht veld is niet ingevuld",
    },
}


def humanize(key: str) -> str:
    """Turn an identifier such as ``first_name`` into ``First name``."""
    text = key.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


class Translator:
    """Looks up localized text by key, optionally scoped to a module."""

    def __init__(
        self,
        language: str | None = None,
        catalogue: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self.language = language or settings.language
        self._catalogue: dict[str, dict[str, str]] = {
            lang: dict(entries) for lang, entries in DEFAULT_CATALOGUE.items()
        }
        for lang, entries in (catalogue or {}).items():
            self._catalogue.setdefault(lang, {}).update(entries)

    def builtin_text(self, key: str) -> str:
        """Return the built-in text for ``key``, ignoring application overrides.

        Falls back to English, then the humanized key.
        """
        for language in (self.language, "en"):
            entries = DEFAULT_CATALOGUE.get(language, {})
            if key in entries:
                return entries[key]
        return humanize(key)

    def text(self, key: str, module: str = "", default: str | None = None) -> str:
        """Return the text for ``key``.

        Lookup order: ``module.key``, ``key``, ``default``, then the
        humanized key.
        """
        entries = self._catalogue.get(self.language, {})
        if module and f"{module}.{key}" in entries:
            return entries[f"{module}.{key}"]
        if key in entries:
            return entries[key]
        if default is not None:
            return default
        return humanize(key)
