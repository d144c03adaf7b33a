import pytest

from decodegen.catalog import Catalog, Variant
from decodegen.numbering import DecodeNode, DecodeTable, build_table, number, to_nodes
from decodegen.splitter import split

BRANCHES = Catalog(
    [
        Variant("RJMP", "1100_kkkk_kkkk_kkkk", "jump_rel"),
        Variant("BRBS", "1111_00kk_kkkk_ksss", "branch_sreg"),
        Variant("BREQ", "1111_00kk_kkkk_k001", "branch"),
        Variant("BRBC", "1111_01kk_kkkk_ksss", "branch_sreg"),
        Variant("RCALL", "1101_kkkk_kkkk_kkkk", "jump_rel"),
    ],
    name="branches",
)


def test_root_is_zero_and_numbering_is_preorder() -> None:
    root = split(BRANCHES)
    numbering = number(root)
    assert numbering[root] == 0
    # root -> {0xC000: RJMP, 0xD000: RCALL, 0xF000: {BRBS, BRBC}}
    ids = {node.winner.name: numbering[node] for node in numbering if node.is_terminal}
    assert ids == {"RJMP": 1, "RCALL": 2, "BRBS": 4, "BRBC": 5}
    assert sorted(numbering.values()) == list(range(6))


def test_table_nodes_carry_masks_and_entries() -> None:
    table = build_table(BRANCHES)
    assert table.name == "branches"
    assert table.root.mask == 0xF000
    assert table.root.entries == ((0xC000, 1), (0xD000, 2), (0xF000, 3))
    inner = table.node(3)
    assert inner.mask == 0xFC00
    assert inner.entries == ((0xF000, 4), (0xF400, 5))
    brbs = table.node(4)
    assert brbs.is_terminal
    assert brbs.mask == 0
    assert brbs.winner == "BRBS"
    assert brbs.candidates == ("BRBS", "BREQ")


def test_child_for_uses_the_node_mask() -> None:
    table = build_table(BRANCHES)
    assert table.root.child_for(0xF123) == 3
    assert table.root.child_for(0x0123) is None


def test_plans_and_categories_cover_the_whole_catalog() -> None:
    table = build_table(BRANCHES)
    assert set(table.plans) == {v.name for v in BRANCHES}
    assert table.categories["BREQ"] == "branch"
    assert [f.name for f in table.plans["BRBS"].fields] == ["k", "s"]


def test_terminals_iterate_in_id_order() -> None:
    table = build_table(BRANCHES)
    assert [node.winner for node in table.terminals()] == ["RJMP", "RCALL", "BRBS", "BRBC"]


def test_repeated_builds_are_identical() -> None:
    assert build_table(BRANCHES) == build_table(BRANCHES)


def test_to_nodes_matches_numbering() -> None:
    root = split(BRANCHES)
    nodes = to_nodes(root, number(root))
    assert [node.id for node in nodes] == list(range(len(nodes)))


def test_table_rejects_misnumbered_nodes() -> None:
    with pytest.raises(ValueError):
        DecodeTable(nodes=(DecodeNode(id=1, mask=0, winner="X"),))


def test_plain_sequences_get_a_default_name() -> None:
    table = build_table(list(BRANCHES)[:1])
    assert table.name == "catalog"
    assert len(table.nodes) == 1
    assert table.root.winner == "RJMP"
