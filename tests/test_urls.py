"""Unit tests for marketlocale.urls."""

import pytest

from marketlocale.languages import DEFAULT_LANGUAGE, Language
from marketlocale.urls import (
    decode_language_from_path,
    encode,
    format_url,
    has_prefix_for,
    split_language_prefix,
    strip_language_prefix,
)

PATHS = [
    "",
    "/",
    "/resources",
    "/resources/42",
    "resources",
    "/en",
    "/en/",
    "/en/resources",
    "/jp/services?page=2",
    "/ko/resources",
    "/english",
    "//en",
    "/en/jp/resources",
    "/services#top",
    "en",
    "jp",
    "en/x",
    "jp/resources",
    "ko/resources",
    "en/jp/x",
]


class TestDecode:
    @pytest.mark.parametrize("path, expected", [
        ("/en", Language.EN),
        ("/en/", Language.EN),
        ("/en/resources", Language.EN),
        ("/jp/services/3", Language.JP),
        ("/resources", None),
        ("/", None),
        ("", None),
        ("/ko/resources", None),
        ("/english", None),
        ("/jpn/x", None),
        ("en/resources", None),
        ("//en", None),
        ("/EN/resources", None),
    ])
    def test_decode(self, path, expected):
        assert decode_language_from_path(path) == expected

    def test_split_returns_remainder(self):
        assert split_language_prefix("/en/resources/1") == (Language.EN, "/resources/1")

    def test_split_bare_prefix_remainder_is_root(self):
        assert split_language_prefix("/jp") == (Language.JP, "/")

    def test_strip_without_prefix_is_identity(self):
        assert strip_language_prefix("/resources") == "/resources"

    def test_non_string(self):
        assert decode_language_from_path(None) is None


class TestEncode:
    def test_adds_prefix(self):
        assert encode("/resources", Language.EN) == "/en/resources"

    def test_default_strips_prefix(self):
        assert encode("/en/resources", Language.KO) == "/resources"

    def test_replaces_other_prefix(self):
        assert encode("/jp/resources", Language.EN) == "/en/resources"

    def test_root_gets_bare_prefix(self):
        assert encode("/", Language.JP) == "/jp"

    def test_empty_path(self):
        assert encode("", Language.EN) == "/en"
        assert encode("", Language.KO) == "/"

    def test_default_root(self):
        assert encode("/en", Language.KO) == "/"

    def test_relative_path_gets_separator(self):
        assert encode("resources", Language.EN) == "/en/resources"

    def test_query_kept(self):
        assert encode("/services?page=2", Language.JP) == "/jp/services?page=2"

    def test_accepts_plain_code(self):
        assert encode("/services", "en") == "/en/services"

    def test_stacked_prefixes_are_all_removed(self):
        assert encode("/en/jp/resources", Language.KO) == "/resources"

    def test_relative_path_with_code_is_a_prefix(self):
        assert encode("jp/resources", Language.EN) == "/en/resources"
        assert encode("en", Language.EN) == "/en"
        assert encode("en/x", Language.KO) == "/x"

    def test_default_roots_relative_path(self):
        assert encode("resources", Language.KO) == "/resources"


class TestEncodeProperties:
    @pytest.mark.parametrize("path", PATHS)
    @pytest.mark.parametrize("language", list(Language))
    def test_idempotent(self, path, language):
        once = encode(path, language)
        assert encode(once, language) == once

    @pytest.mark.parametrize("path", PATHS)
    @pytest.mark.parametrize("language", [lang for lang in Language if lang != DEFAULT_LANGUAGE])
    def test_round_trip(self, path, language):
        assert decode_language_from_path(encode(path, language)) == language

    @pytest.mark.parametrize("path", PATHS)
    def test_default_never_prefixed(self, path):
        assert decode_language_from_path(encode(path, DEFAULT_LANGUAGE)) is None


class TestFormatUrl:
    def test_already_prefixed_unchanged(self):
        assert format_url("/en/", Language.EN) == "/en/"

    def test_other_prefix_replaced(self):
        assert format_url("/jp/services", Language.EN) == "/en/services"

    def test_default(self):
        assert format_url("/en/services", Language.KO) == "/services"

    def test_has_prefix_for_default_is_false(self):
        assert has_prefix_for("/", Language.KO) is False
        assert has_prefix_for("/en/x", Language.EN) is True

    @pytest.mark.parametrize("path", PATHS)
    @pytest.mark.parametrize("language", list(Language))
    def test_idempotent(self, path, language):
        once = format_url(path, language)
        assert format_url(once, language) == once

    def test_relative_code_replaced(self):
        assert format_url("jp/resources", Language.EN) == "/en/resources"
