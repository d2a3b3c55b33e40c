"""Language prefixes on application paths.

The default language is never prefixed; every other language owns a
leading ``/<code>`` segment::

    encode('/resources', Language.EN)     # '/en/resources'
    encode('/en/resources', Language.KO)  # '/resources'
    decode_language_from_path('/jp/')     # Language.JP
"""

from marketlocale.languages import DEFAULT_LANGUAGE, PREFIXED_LANGUAGES, Language

_PREFIX_CODES: dict[str, Language] = {lang.value: lang for lang in PREFIXED_LANGUAGES}


def split_language_prefix(path: str) -> tuple[Language | None, str]:
    """Return ``(language, remainder)``; ``language`` is None when there is no prefix."""
    if not isinstance(path, str) or not path.startswith("/"):
        return None, path
    head, sep, tail = path[1:].partition("/")
    language = _PREFIX_CODES.get(head)
    if language is None:
        return None, path
    return language, f"/{tail}" if sep else "/"


def decode_language_from_path(path: str) -> Language | None:
    return split_language_prefix(path)[0]


def strip_language_prefix(path: str) -> str:
    return split_language_prefix(path)[1]


def _strip_all_prefixes(path: str) -> str:
    language, bare = split_language_prefix(path)
    while language is not None:
        language, bare = split_language_prefix(bare)
    return bare


def encode(path: str, language: Language) -> str:
    # Relative paths are rooted first so a leading code is read as a prefix.
    if not path.startswith("/"):
        path = f"/{path}"
    bare = _strip_all_prefixes(path)
    if language == DEFAULT_LANGUAGE:
        return bare
    prefix = f"/{Language(language).value}"
    if bare == "/":
        return prefix
    return prefix + bare


def has_prefix_for(path: str, language: Language) -> bool:
    return language != DEFAULT_LANGUAGE and decode_language_from_path(path) == language


def format_url(path: str, language: Language) -> str:
    """``encode`` that leaves paths already carrying ``language``'s prefix untouched."""
    if has_prefix_for(path, language):
        return path
    return encode(path, language)
