"""
Supported language catalog.

Codes are ISO 639-1. Common languages are offered first in pickers.
"""

from typing import Dict, List, NamedTuple


class Language(NamedTuple):
    code: str
    name: str
    is_common: bool


LANGUAGES: List[Language] = [
    Language("en", "English", True),
    Language("es", "Spanish", True),
    Language("fr", "French", True),
    Language("de", "German", True),
    Language("it", "Italian", True),
    Language("pt", "Portuguese", True),
    Language("ru", "Russian", True),
    Language("zh", "Chinese", True),
    Language("ja", "Japanese", True),
    Language("ko", "Korean", True),
    Language("ar", "Arabic", True),
    Language("hi", "Hindi", True),
    Language("bn", "Bengali", False),
    Language("nl", "Dutch", False),
    Language("sv", "Swedish", False),
    Language("pl", "Polish", False),
    Language("tr", "Turkish", False),
    Language("uk", "Ukrainian", False),
    Language("vi", "Vietnamese", False),
    Language("th", "Thai", False),
    Language("id", "Indonesian", False),
    Language("ms", "Malay", False),
    Language("fa", "Persian", False),
    Language("he", "Hebrew", False),
    Language("ur", "Urdu", False),
    Language("el", "Greek", False),
    Language("cs", "Czech", False),
    Language("hu", "Hungarian", False),
    Language("ro", "Romanian", False),
    Language("fi", "Finnish", False),
    Language("da", "Danish", False),
    Language("no", "Norwegian", False),
]

LANGUAGES_BY_CODE: Dict[str, Language] = {lang.code: lang for lang in LANGUAGES}


def is_supported_language(code: str) -> bool:
    return code in LANGUAGES_BY_CODE


def search_languages(query: str = "") -> List[Language]:
    """Filter the catalog by case-insensitive match on code or name."""
    query = query.strip().lower()
    if not query:
        return list(LANGUAGES)
    return [
        lang for lang in LANGUAGES
        if query in lang.name.lower() or query == lang.code
    ]
