import pytest

from decodegen.catalog import Variant
from decodegen.errors import MalformedPatternError
from decodegen.formats import (
    covered,
    format_bits,
    generalizes,
    matches,
    normalize,
    parse,
)


def test_parse_add_pattern() -> None:
    mask, value = parse("0000_11rd_dddd_rrrr")
    assert mask == 0xFC00
    assert value == 0x0C00


def test_parse_ignores_whitespace_and_underscores() -> None:
    assert parse("0000 11rd dddd rrrr") == parse("000011rddddd_rrrr")


def test_parse_niladic_pattern_fixes_every_bit() -> None:
    mask, value = parse("1001_0101_0000_1000")
    assert mask == 0xFFFF
    assert value == 0x9508


def test_value_never_sets_unfixed_bits() -> None:
    mask, value = parse("1k1k_1k1k_1k1k_1k1k")
    assert mask == 0xAAAA
    assert value & ~mask == 0


@pytest.mark.parametrize(
    "pattern",
    [
        "0000_11rd_dddd_rrr",  # 15 positions
        "0000_11rd_dddd_rrrr_0",  # 17 positions
        "",
    ],
)
def test_wrong_length_is_malformed(pattern: str) -> None:
    with pytest.raises(MalformedPatternError) as excinfo:
        parse(pattern, name="BROKEN")
    assert excinfo.value.name == "BROKEN"
    assert "BROKEN" in str(excinfo.value)


def test_unexpected_character_is_malformed() -> None:
    with pytest.raises(MalformedPatternError):
        normalize("0000_11Rd_dddd_rrrr")


def test_custom_separators_replace_the_default_set() -> None:
    assert normalize("0000.11rd.dddd.rrrr", separators=frozenset(".")) == "000011rdddddrrrr"
    with pytest.raises(MalformedPatternError):
        normalize("0000.11rd.dddd.rrrr")
    with pytest.raises(MalformedPatternError):
        parse("0000_11rd_dddd_rrrr", separators=frozenset("."))


def test_variant_reports_its_name_when_malformed() -> None:
    with pytest.raises(MalformedPatternError) as excinfo:
        Variant("SHORT", "0101")
    assert excinfo.value.name == "SHORT"
    assert excinfo.value.pattern == "0101"


def test_covered_checks_fixed_value_under_mask() -> None:
    add = Variant("ADD", "0000_11rd_dddd_rrrr")
    assert covered(add, 0xF000, 0x0000)
    assert covered(add, 0xFC00, 0x0C00)
    assert not covered(add, 0xFC00, 0x0800)


def test_every_variant_covers_itself() -> None:
    for pattern in ("0000_0000_0000_0000", "10q0_qq0d_dddd_1qqq", "1111_00kk_kkkk_ksss"):
        variant = Variant("V", pattern)
        assert covered(variant, variant.fixed_mask, variant.fixed_value)


def test_matches_uses_only_fixed_bits() -> None:
    ldi = Variant("LDI", "1110_kkkk_dddd_kkkk")
    assert matches(ldi, 0xE000)
    assert matches(ldi, 0xEFFF)
    assert not matches(ldi, 0xC000)


def test_generalizes_is_reflexive_and_directional() -> None:
    brbs = Variant("BRBS", "1111_00kk_kkkk_ksss")
    breq = Variant("BREQ", "1111_00kk_kkkk_k001")
    brbc = Variant("BRBC", "1111_01kk_kkkk_ksss")
    assert generalizes(brbs, brbs)
    assert generalizes(brbs, breq)
    assert not generalizes(breq, brbs)
    assert not generalizes(brbs, brbc)


def test_format_bits_pads_to_word_width() -> None:
    assert format_bits(0x0C00) == "0b0000110000000000"
    assert format_bits(0) == "0b" + "0" * 16
