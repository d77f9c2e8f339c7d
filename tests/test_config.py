import pytest

from fpattern.config import DOS, SUB, UNIX, MatcherConfig, load_config, parse_config_obj, preset
from fpattern.errors import ConfigError


def test_defaults():
    cfg = MatcherConfig()
    assert not cfg.delimiters
    assert cfg.quote == "\\"
    assert cfg.sub_closure == SUB
    assert not cfg.case_sensitive
    assert cfg.memoize


def test_presets():
    assert UNIX.quote == "\\" and UNIX.separators == "/"
    assert DOS.quote == "`" and DOS.separators == "/\\"
    assert preset("DOS") is DOS
    with pytest.raises(ConfigError):
        preset("vms")


def test_invalid_configs_are_rejected():
    with pytest.raises(ConfigError):
        MatcherConfig(quote="*")
    with pytest.raises(ConfigError):
        MatcherConfig(quote="``")
    with pytest.raises(ConfigError):
        MatcherConfig(sub_closure="[")
    with pytest.raises(ConfigError):
        MatcherConfig(separators="")
    with pytest.raises(ConfigError):
        MatcherConfig(separators="/\\:")
    with pytest.raises(ConfigError):
        MatcherConfig(quote="~", sub_closure="~")


def test_set_and_dot_characters_are_reserved():
    for ch in ("-", "."):
        with pytest.raises(ConfigError):
            MatcherConfig(quote=ch)
        with pytest.raises(ConfigError):
            MatcherConfig(sub_closure=ch)


def test_separators_cannot_be_operators_in_delimiter_mode():
    for seps in ("*", "?", "/-", "!"):
        with pytest.raises(ConfigError, match="separator"):
            MatcherConfig(delimiters=True, separators=seps)
    # Without delimiter mode separators are never consulted.
    assert MatcherConfig(separators="*").separators == "*"


def test_quote_cannot_double_as_separator_in_delimiter_mode():
    cfg = MatcherConfig(separators="/\\")
    assert cfg.quote == "\\"
    with pytest.raises(ConfigError):
        cfg.with_options(delimiters=True)
    assert DOS.with_options(delimiters=True).delimiters


def test_closure_stops():
    cfg = MatcherConfig(sub_closure="~")
    assert cfg.closure_stops("*") == frozenset()
    assert cfg.closure_stops("~") == frozenset(".")
    cfg = DOS.with_options(delimiters=True, sub_closure="~")
    assert cfg.closure_stops("*") == frozenset("/\\")
    assert cfg.closure_stops("~") == frozenset("/\\.")


def test_parse_config_obj_accepts_nested_and_flat_forms():
    flat = parse_config_obj({"preset": "dos", "delimiters": True}, source="cfg.yaml")
    nested = parse_config_obj({"fpattern": {"preset": "dos", "delimiters": True}}, source="cfg.yaml")
    assert flat == nested
    assert flat.quote == "`"
    assert flat.delimiters
    assert parse_config_obj(None, source="cfg.yaml") == MatcherConfig()


def test_parse_config_obj_errors_name_the_source():
    with pytest.raises(ConfigError, match="cfg.yaml: unknown option 'colour'"):
        parse_config_obj({"colour": "red"}, source="cfg.yaml")
    with pytest.raises(ConfigError, match="cfg.yaml: 'delimiters' must be a bool"):
        parse_config_obj({"delimiters": "yes please"}, source="cfg.yaml")
    with pytest.raises(ConfigError, match="cfg.yaml"):
        parse_config_obj({"quote": "*"}, source="cfg.yaml")
    with pytest.raises(ConfigError, match="expected a mapping"):
        parse_config_obj(["quote"], source="cfg.yaml")


def test_load_config(tmp_path):
    assert load_config(tmp_path / "missing.yaml") == MatcherConfig()

    p = tmp_path / ".fpattern.yaml"
    p.write_text("preset: dos\ndelimiters: true\nsub_closure: \"~\"\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg == DOS.with_options(delimiters=True, sub_closure="~")

    bad = tmp_path / "bad.yaml"
    bad.write_text("quote: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(bad)
