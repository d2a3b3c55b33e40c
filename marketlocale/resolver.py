"""Dotted-key resolution against a ``TranslationIndex``.

Fallback rules:

- language not in the index      → the key, unchanged
- ``"home"`` not found            → ``"home"``
- ``"nav.home"`` not found        → ``"home"``
- ``"a.b.c"`` not found           → ``"c"``
- deeper than three segments     → last segment

``resolve`` never raises.
"""

import logging

from marketlocale.languages import Language
from marketlocale.translations import Branch, Leaf, TranslationIndex, TranslationNode

logger = logging.getLogger("marketlocale.resolver")

MAX_DEPTH = 3


def _leaf_text(node: TranslationNode | None) -> str | None:
    # Empty strings count as missing.
    if isinstance(node, Leaf) and node.text:
        return node.text
    return None


def _walk(index: TranslationIndex, root: Branch, segments: list[str]) -> str | None:
    node: TranslationNode | None = root
    for segment in segments:
        if not isinstance(node, Branch):
            return None
        node = index.child(node, segment)
    return _leaf_text(node)


def resolve(index: TranslationIndex, language: Language | str, path: str) -> str:
    try:
        root = index.root(language)
    except TypeError:
        # Unhashable language values cannot name a tree.
        root = None
    if root is None:
        logger.debug("No translations for language %r", language)
        return path if isinstance(path, str) else str(path)

    try:
        segments = path.split(".")
        if len(segments) == 1:
            return _walk(index, root, segments) or segments[0]

        if len(segments) <= MAX_DEPTH:
            text = _walk(index, root, segments)
            if text is not None:
                return text

        logger.debug("Unresolved translation key %r for %s", path, language)
        return segments[-1]
    except Exception:
        logger.debug("Translation lookup failed for %r in %r", path, language, exc_info=True)
        return _last_segment(path)


def _last_segment(path: object) -> str:
    if not isinstance(path, str):
        return str(path)
    return path.rsplit(".", 1)[-1]
