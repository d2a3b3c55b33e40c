"""Translation index: reads nested trees from ``locales/<lang>.json``.

Each language maps to a tree whose leaves are strings and whose inner
nodes are further mappings.  Trees are free to differ in shape between
languages; a key that exists for one language may be missing for another.

Usage::

    from marketlocale.translations import TranslationIndex

    index = TranslationIndex.load()           # packaged tables
    index = TranslationIndex.from_mapping({'ko': {'nav': {'home': '홈'}}})

    root = index.root(Language.KO)
    nav = index.child(root, 'nav')            # Branch(...)
    index.child(nav, 'home')                  # Leaf(text='홈')
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

from marketlocale.languages import Language, parse_language

logger = logging.getLogger("marketlocale.translations")

LOCALES_DIR = Path(__file__).resolve().parent / "locales"


@dataclass(frozen=True)
class Leaf:
    text: str


@dataclass(frozen=True)
class Branch:
    children: Mapping[str, "TranslationNode"]


TranslationNode = Union[Leaf, Branch]


def build_node(raw: Mapping[str, Any], trail: str = "") -> Branch:
    """Convert a nested dict of strings into a read-only ``Branch``."""
    children: dict[str, TranslationNode] = {}
    for key, value in raw.items():
        where = f"{trail}.{key}" if trail else str(key)
        if isinstance(value, str):
            children[str(key)] = Leaf(value)
        elif isinstance(value, Mapping):
            children[str(key)] = build_node(value, where)
        else:
            logger.warning("Skipping non-string translation value at %s (%s)", where, type(value).__name__)
    return Branch(MappingProxyType(children))


def _load_json(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    return {}


class TranslationIndex:
    """Read-only ``language → tree`` lookup table."""

    def __init__(self, trees: Mapping[Language, Branch]) -> None:
        self._trees: Mapping[Language, Branch] = MappingProxyType(dict(trees))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, Any]]) -> "TranslationIndex":
        trees: dict[Language, Branch] = {}
        for code, tree in raw.items():
            language = parse_language(code)
            if language is None:
                logger.warning("Ignoring translations for unsupported language %r", code)
                continue
            if not isinstance(tree, Mapping):
                logger.warning("Ignoring translations for %s: expected a mapping", language)
                continue
            trees[language] = build_node(tree)
        return cls(trees)

    @classmethod
    def load(cls, locales_dir: Path | str | None = None) -> "TranslationIndex":
        search = Path(locales_dir) if locales_dir else LOCALES_DIR
        raw: dict[str, dict[str, Any]] = {}
        for language in Language:
            path = search / f"{language.value}.json"
            if not path.is_file():
                logger.info("No translation table for %s in %s", language, search)
                continue
            raw[language.value] = _load_json(path)
        return cls.from_mapping(raw)

    @property
    def languages(self) -> list[Language]:
        return list(self._trees)

    def root(self, language: Language) -> Branch | None:
        return self._trees.get(language)

    @staticmethod
    def child(node: TranslationNode, segment: str) -> TranslationNode | None:
        if isinstance(node, Branch):
            return node.children.get(segment)
        return None

    def export(self, language: Language) -> dict[str, Any] | None:
        """Return the tree for ``language`` as plain nested dicts."""
        root = self._trees.get(language)
        if root is None:
            return None
        return _to_plain(root)


def _to_plain(node: Branch) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, child in node.children.items():
        result[key] = child.text if isinstance(child, Leaf) else _to_plain(child)
    return result
