"""
Single-word encodings of the 8-bit AVR instruction set.

Only the first word of two-word instructions (``LDS``, ``STS``, ``JMP``,
``CALL``) is described. Aliases that only constrain operand bits (``BREQ``,
``SEC``, ``SER``, ``LD Y``) are listed alongside the instruction they
specialise and declare that relation, so they resolve to the general form.
Aliases that need two operand fields to be equal (``CLR``, ``LSL``, ``TST``)
cannot be expressed as a pattern and are left out, as are the pure synonyms
``BRLO``/``BRSH``, ``SBR`` and ``CBR``.
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..catalog import Catalog, Variant

# (name, pattern, category)
_ENCODINGS: Tuple[Tuple[str, str, str], ...] = (
    ("NOP", "0000_0000_0000_0000", "none"),
    ("MOVW", "0000_0001_dddd_rrrr", "rd_rr_pair"),
    ("MULS", "0000_0010_dddd_rrrr", "rd_rr_high"),
    ("MULSU", "0000_0011_0ddd_0rrr", "rd_rr_mul"),
    ("FMUL", "0000_0011_0ddd_1rrr", "rd_rr_mul"),
    ("FMULS", "0000_0011_1ddd_0rrr", "rd_rr_mul"),
    ("FMULSU", "0000_0011_1ddd_1rrr", "rd_rr_mul"),
    ("CPC", "0000_01rd_dddd_rrrr", "rd_rr"),
    ("SBC", "0000_10rd_dddd_rrrr", "rd_rr"),
    ("ADD", "0000_11rd_dddd_rrrr", "rd_rr"),
    ("CPSE", "0001_00rd_dddd_rrrr", "rd_rr"),
    ("CP", "0001_01rd_dddd_rrrr", "rd_rr"),
    ("SUB", "0001_10rd_dddd_rrrr", "rd_rr"),
    ("ADC", "0001_11rd_dddd_rrrr", "rd_rr"),
    ("AND", "0010_00rd_dddd_rrrr", "rd_rr"),
    ("EOR", "0010_01rd_dddd_rrrr", "rd_rr"),
    ("OR", "0010_10rd_dddd_rrrr", "rd_rr"),
    ("MOV", "0010_11rd_dddd_rrrr", "rd_rr"),
    ("CPI", "0011_kkkk_dddd_kkkk", "rd_k8"),
    ("SBCI", "0100_kkkk_dddd_kkkk", "rd_k8"),
    ("SUBI", "0101_kkkk_dddd_kkkk", "rd_k8"),
    ("ORI", "0110_kkkk_dddd_kkkk", "rd_k8"),
    ("ANDI", "0111_kkkk_dddd_kkkk", "rd_k8"),
    ("LDD_Z", "10q0_qq0d_dddd_0qqq", "load_disp"),
    ("LDD_Y", "10q0_qq0d_dddd_1qqq", "load_disp"),
    ("STD_Z", "10q0_qq1r_rrrr_0qqq", "store_disp"),
    ("STD_Y", "10q0_qq1r_rrrr_1qqq", "store_disp"),
    ("LD_Z", "1000_000d_dddd_0000", "load"),
    ("LD_Y", "1000_000d_dddd_1000", "load"),
    ("ST_Z", "1000_001r_rrrr_0000", "store"),
    ("ST_Y", "1000_001r_rrrr_1000", "store"),
    ("LDS", "1001_000d_dddd_0000", "load_abs"),
    ("LD_Z_INC", "1001_000d_dddd_0001", "load"),
    ("LD_Z_DEC", "1001_000d_dddd_0010", "load"),
    ("LPM_Z", "1001_000d_dddd_0100", "load"),
    ("LPM_Z_INC", "1001_000d_dddd_0101", "load"),
    ("ELPM_Z", "1001_000d_dddd_0110", "load"),
    ("ELPM_Z_INC", "1001_000d_dddd_0111", "load"),
    ("LD_Y_INC", "1001_000d_dddd_1001", "load"),
    ("LD_Y_DEC", "1001_000d_dddd_1010", "load"),
    ("LD_X", "1001_000d_dddd_1100", "load"),
    ("LD_X_INC", "1001_000d_dddd_1101", "load"),
    ("LD_X_DEC", "1001_000d_dddd_1110", "load"),
    ("POP", "1001_000d_dddd_1111", "rd"),
    ("STS", "1001_001r_rrrr_0000", "store_abs"),
    ("ST_Z_INC", "1001_001r_rrrr_0001", "store"),
    ("ST_Z_DEC", "1001_001r_rrrr_0010", "store"),
    ("XCH", "1001_001d_dddd_0100", "rd"),
    ("LAS", "1001_001d_dddd_0101", "rd"),
    ("LAC", "1001_001d_dddd_0110", "rd"),
    ("LAT", "1001_001d_dddd_0111", "rd"),
    ("ST_Y_INC", "1001_001r_rrrr_1001", "store"),
    ("ST_Y_DEC", "1001_001r_rrrr_1010", "store"),
    ("ST_X", "1001_001r_rrrr_1100", "store"),
    ("ST_X_INC", "1001_001r_rrrr_1101", "store"),
    ("ST_X_DEC", "1001_001r_rrrr_1110", "store"),
    ("PUSH", "1001_001r_rrrr_1111", "rr"),
    ("COM", "1001_010d_dddd_0000", "rd"),
    ("NEG", "1001_010d_dddd_0001", "rd"),
    ("SWAP", "1001_010d_dddd_0010", "rd"),
    ("INC", "1001_010d_dddd_0011", "rd"),
    ("ASR", "1001_010d_dddd_0101", "rd"),
    ("LSR", "1001_010d_dddd_0110", "rd"),
    ("ROR", "1001_010d_dddd_0111", "rd"),
    ("DEC", "1001_010d_dddd_1010", "rd"),
    ("JMP", "1001_010k_kkkk_110k", "jump_abs"),
    ("CALL", "1001_010k_kkkk_111k", "jump_abs"),
    ("BSET", "1001_0100_0sss_1000", "sreg"),
    ("BCLR", "1001_0100_1sss_1000", "sreg"),
    ("SEC", "1001_0100_0000_1000", "none"),
    ("SEZ", "1001_0100_0001_1000", "none"),
    ("SEN", "1001_0100_0010_1000", "none"),
    ("SEV", "1001_0100_0011_1000", "none"),
    ("SES", "1001_0100_0100_1000", "none"),
    ("SEH", "1001_0100_0101_1000", "none"),
    ("SET", "1001_0100_0110_1000", "none"),
    ("SEI", "1001_0100_0111_1000", "none"),
    ("CLC", "1001_0100_1000_1000", "none"),
    ("CLZ", "1001_0100_1001_1000", "none"),
    ("CLN", "1001_0100_1010_1000", "none"),
    ("CLV", "1001_0100_1011_1000", "none"),
    ("CLS", "1001_0100_1100_1000", "none"),
    ("CLH", "1001_0100_1101_1000", "none"),
    ("CLT", "1001_0100_1110_1000", "none"),
    ("CLI", "1001_0100_1111_1000", "none"),
    ("IJMP", "1001_0100_0000_1001", "none"),
    ("EIJMP", "1001_0100_0001_1001", "none"),
    ("DES", "1001_0100_kkkk_1011", "k4"),
    ("RET", "1001_0101_0000_1000", "none"),
    ("RETI", "1001_0101_0001_1000", "none"),
    ("ICALL", "1001_0101_0000_1001", "none"),
    ("EICALL", "1001_0101_0001_1001", "none"),
    ("SLEEP", "1001_0101_1000_1000", "none"),
    ("BREAK", "1001_0101_1001_1000", "none"),
    ("WDR", "1001_0101_1010_1000", "none"),
    ("LPM", "1001_0101_1100_1000", "none"),
    ("ELPM", "1001_0101_1101_1000", "none"),
    ("SPM", "1001_0101_1110_1000", "none"),
    ("SPM_Z_INC", "1001_0101_1111_1000", "none"),
    ("ADIW", "1001_0110_kkdd_kkkk", "rd_k6"),
    ("SBIW", "1001_0111_kkdd_kkkk", "rd_k6"),
    ("CBI", "1001_1000_aaaa_abbb", "io_bit"),
    ("SBIC", "1001_1001_aaaa_abbb", "io_bit"),
    ("SBI", "1001_1010_aaaa_abbb", "io_bit"),
    ("SBIS", "1001_1011_aaaa_abbb", "io_bit"),
    ("MUL", "1001_11rd_dddd_rrrr", "rd_rr"),
    ("IN", "1011_0aad_dddd_aaaa", "io"),
    ("OUT", "1011_1aar_rrrr_aaaa", "io"),
    ("RJMP", "1100_kkkk_kkkk_kkkk", "jump_rel"),
    ("RCALL", "1101_kkkk_kkkk_kkkk", "jump_rel"),
    ("LDI", "1110_kkkk_dddd_kkkk", "rd_k8"),
    ("SER", "1110_1111_dddd_1111", "rd"),
    ("BRBS", "1111_00kk_kkkk_ksss", "branch_sreg"),
    ("BRBC", "1111_01kk_kkkk_ksss", "branch_sreg"),
    ("BRCS", "1111_00kk_kkkk_k000", "branch"),
    ("BREQ", "1111_00kk_kkkk_k001", "branch"),
    ("BRMI", "1111_00kk_kkkk_k010", "branch"),
    ("BRVS", "1111_00kk_kkkk_k011", "branch"),
    ("BRLT", "1111_00kk_kkkk_k100", "branch"),
    ("BRHS", "1111_00kk_kkkk_k101", "branch"),
    ("BRTS", "1111_00kk_kkkk_k110", "branch"),
    ("BRIE", "1111_00kk_kkkk_k111", "branch"),
    ("BRCC", "1111_01kk_kkkk_k000", "branch"),
    ("BRNE", "1111_01kk_kkkk_k001", "branch"),
    ("BRPL", "1111_01kk_kkkk_k010", "branch"),
    ("BRVC", "1111_01kk_kkkk_k011", "branch"),
    ("BRGE", "1111_01kk_kkkk_k100", "branch"),
    ("BRHC", "1111_01kk_kkkk_k101", "branch"),
    ("BRTC", "1111_01kk_kkkk_k110", "branch"),
    ("BRID", "1111_01kk_kkkk_k111", "branch"),
    ("BLD", "1111_100d_dddd_0bbb", "rd_bit"),
    ("BST", "1111_101d_dddd_0bbb", "rd_bit"),
    ("SBRC", "1111_110r_rrrr_0bbb", "rr_bit"),
    ("SBRS", "1111_111r_rrrr_0bbb", "rr_bit"),
)

# General form -> the specialisations it subsumes.
ALIASES: Dict[str, Tuple[str, ...]] = {
    "LDD_Z": ("LD_Z",),
    "LDD_Y": ("LD_Y",),
    "STD_Z": ("ST_Z",),
    "STD_Y": ("ST_Y",),
    "LDI": ("SER",),
    "BSET": ("SEC", "SEZ", "SEN", "SEV", "SES", "SEH", "SET", "SEI"),
    "BCLR": ("CLC", "CLZ", "CLN", "CLV", "CLS", "CLH", "CLT", "CLI"),
    "BRBS": ("BRCS", "BREQ", "BRMI", "BRVS", "BRLT", "BRHS", "BRTS", "BRIE"),
    "BRBC": ("BRCC", "BRNE", "BRPL", "BRVC", "BRGE", "BRHC", "BRTC", "BRID"),
}


def avr_variants() -> Tuple[Variant, ...]:
    return tuple(
        Variant(name, pattern, category, subsumes=ALIASES.get(name, ()))
        for name, pattern, category in _ENCODINGS
    )


def avr_catalog() -> Catalog:
    return Catalog(avr_variants(), name="avr")


__all__ = ["ALIASES", "avr_catalog", "avr_variants"]
