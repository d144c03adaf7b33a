import pytest

from decodegen.catalog import Variant
from decodegen.extract import (
    BitRun,
    ExtractStep,
    OperandField,
    operand_mask,
    plan_variant,
    plan_variants,
    runs_from_mask,
)

ADD = Variant("ADD", "0000 11rd dddd rrrr")


def test_add_operands_reassemble_scattered_bits() -> None:
    plan = plan_variant(ADD)
    assert plan.extract(0b0000_1101_0011_0010) == {"r": 2, "d": 19}


def test_add_runs_are_low_to_high() -> None:
    plan = plan_variant(ADD)
    r, d = plan.fields
    assert r.name == "r"
    assert r.runs == (BitRun(0, 4), BitRun(9, 1))
    assert d.runs == (BitRun(4, 5),)
    assert r.width == 5
    assert d.width == 5


def test_shift_sequence_follows_accumulated_width() -> None:
    r = plan_variant(ADD).fields[0]
    assert r.steps == (ExtractStep(mask=0x000F, shift=0), ExtractStep(mask=0x0200, shift=5))


def test_first_pattern_occurrence_becomes_high_bits() -> None:
    r = plan_variant(ADD).fields[0]
    assert r.extract(0x0200) == 0b10000
    assert r.extract(0x0001) == 0b00001


def test_three_run_displacement() -> None:
    ldd = Variant("LDD_Y", "10q0_qq0d_dddd_1qqq")
    q = plan_variant(ldd).fields[0]
    assert q.name == "q"
    assert q.runs == (BitRun(0, 3), BitRun(10, 2), BitRun(13, 1))
    # q = 0b1_10_101 = 53
    word = 0x8008 | (1 << 13) | (0b10 << 10) | 0b101
    assert q.extract(word) == 53


def test_io_address_across_two_runs() -> None:
    in_ = Variant("IN", "1011_0aad_dddd_aaaa")
    plan = plan_variant(in_)
    # A = 0b11_0101, Rd = 17
    word = 0xB000 | (0b11 << 9) | (17 << 4) | 0b0101
    assert plan.extract(word) == {"a": 0b110101, "d": 17}


def test_niladic_variant_has_empty_plan() -> None:
    plan = plan_variant(Variant("RET", "1001_0101_0000_1000"))
    assert plan.is_niladic
    assert plan.extract(0x9508) == {}


def test_fields_follow_first_appearance_order() -> None:
    plan = plan_variant(Variant("OUT", "1011_1aar_rrrr_aaaa"))
    assert [f.name for f in plan.fields] == ["a", "r"]


def test_operand_mask_maps_pattern_index_to_word_bit() -> None:
    assert operand_mask("k" + "0" * 15, "k") == 0x8000
    assert operand_mask("0" * 15 + "k", "k") == 0x0001
    assert operand_mask("0000_11rd_dddd_rrrr".replace("_", ""), "d") == 0x01F0


def test_runs_from_mask_handles_edges() -> None:
    assert runs_from_mask(0) == ()
    assert runs_from_mask(0xFFFF) == (BitRun(0, 16),)
    assert runs_from_mask(0x8001) == (BitRun(0, 1), BitRun(15, 1))


def test_negative_shift_moves_bits_up() -> None:
    step = ExtractStep(mask=0x0001, shift=-3)
    assert step.apply(0x0001) == 0b1000


def test_field_from_mask_and_combined_mask() -> None:
    field = OperandField.from_mask("k", 0x0F0F)
    assert field.mask == 0x0F0F
    assert field.extract(0x0A05) == 0xA5


@pytest.mark.parametrize("start,width", [(-1, 1), (0, 0), (15, 2), (16, 1)])
def test_bit_run_range_checks(start: int, width: int) -> None:
    with pytest.raises(ValueError):
        BitRun(start, width)


def test_plan_variants_indexes_by_name() -> None:
    plans = plan_variants([ADD, Variant("NOP", "0000_0000_0000_0000")])
    assert set(plans) == {"ADD", "NOP"}
    assert plans["NOP"].is_niladic
