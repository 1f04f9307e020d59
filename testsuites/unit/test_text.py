import re

import pytest

from storefront_tools.common import escape_regex, exact_pattern, literal_pattern


@pytest.mark.parametrize(
    "value",
    [
        "Spree T-Shirt (Blue)",
        "Price: $19.99 + tax",
        "a.b*c?d[e]f{g}h|i^j\\k",
        "Pack of 2+1",
        "",
    ],
)
def test_escape_regex_matches_only_the_literal(value):
    pattern = re.compile(f"^{escape_regex(value)}$")
    assert pattern.match(value)


def test_escaped_dot_does_not_match_any_character():
    assert not re.search(escape_regex("1.5"), "105")


def test_literal_pattern_is_case_insensitive_and_trimmed():
    pattern = literal_pattern("  Denim Shirt (M) ")
    assert pattern.search("Men's DENIM SHIRT (m) - blue")
    assert not pattern.search("Denim Shirt M")


def test_literal_pattern_case_sensitive():
    assert not literal_pattern("Shirt", ignore_case=False).search("shirt")


def test_exact_pattern_rejects_substrings():
    pattern = exact_pattern("S")
    assert pattern.match("s")
    assert not pattern.match("XS")
