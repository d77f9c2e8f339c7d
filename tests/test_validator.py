from fpattern.config import DOS, MatcherConfig
from fpattern.validator import (
    MISSING_NEGATED_SUBPATTERN,
    MISSING_QUOTED_CHAR,
    NULL_PATTERN,
    UNTERMINATED_SET,
    find_defect,
    isvalid,
)


def test_null_and_empty_patterns():
    assert not isvalid(None)
    assert find_defect(None).code == NULL_PATTERN
    assert isvalid("")


def test_plain_and_wildcard_patterns_are_valid():
    for pat in ("abc", "*.txt", "f??.c", "a]b", "a-b", "**"):
        assert isvalid(pat), pat


def test_unterminated_set():
    assert not isvalid("[abc")
    assert not isvalid("[")
    assert not isvalid("[!")
    assert not isvalid("a[b-")
    d = find_defect("ab[cd")
    assert d.code == UNTERMINATED_SET
    assert d.position == 2


def test_closed_sets():
    assert isvalid("[abc]")
    assert isvalid("[!abc]")
    assert isvalid("[a-z0-9]")
    assert isvalid("[-]")
    assert isvalid("[]")


def test_range_consumes_close_bracket_as_endpoint():
    # 'x-]' is a range ending at ']', so the set is still open.
    assert not isvalid("a[x-]b")
    assert isvalid("a[x-]]")


def test_quote_inside_set_escapes_bracket():
    cfg = DOS
    assert isvalid("a[`]]x", cfg)
    assert isvalid("a[x`-]b", cfg)
    assert not isvalid("a[`]x", cfg)
    assert not isvalid("[`", cfg)


def test_dangling_quote():
    assert not isvalid("abc\\")
    d = find_defect("ab\\")
    assert d.code == MISSING_QUOTED_CHAR
    assert d.position == 2
    assert isvalid("a\\\\")
    assert isvalid("\\[abc")


def test_quote_character_follows_config():
    assert isvalid("abc`")
    assert not isvalid("abc`", DOS)
    assert isvalid("abc\\", DOS)


def test_dangling_negation():
    assert not isvalid("!")
    d = find_defect("abc!")
    assert d.code == MISSING_NEGATED_SUBPATTERN
    assert d.position == 3
    assert isvalid("!a")
    assert isvalid("!!a")
    assert isvalid("!!")


def test_first_negated_character_is_not_a_token():
    assert isvalid("![abc")
    assert isvalid("!\\")
    assert not isvalid("!a[bc")
    # The quote is the negated character, so the bracket opens a set.
    assert not isvalid("!`[", DOS)
    d = find_defect("!`[", DOS)
    assert d.code == UNTERMINATED_SET
    assert d.position == 2


def test_separators_are_plain_characters_to_the_validator():
    cfg = MatcherConfig(delimiters=True)
    assert isvalid("a/b", cfg)
    assert isvalid("/", cfg)
