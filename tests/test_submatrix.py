import pytest

from nonmyopic.payoffs import PayoffMatrix3x3
from nonmyopic.submatrix import SubmatrixExtractor, SubmatrixMapping, extract_submatrices

EXPECTED_SHAPES = [
    ((0, 1), (0, 1)),
    ((0, 2), (0, 1)),
    ((0, 1), (0, 2)),
    ((0, 2), (0, 2)),
    ((0, 1), (1, 2)),
    ((0, 2), (1, 2)),
    ((1, 2), (0, 1)),
    ((1, 2), (0, 2)),
    ((1, 2), (1, 2)),
]


def test_all_four_cell_combinations_are_enumerated():
    combos = SubmatrixExtractor.cell_combinations()
    assert len(combos) == 126
    assert combos[0] == (0, 1, 2, 3)
    assert combos[-1] == (5, 6, 7, 8)


def test_only_axis_aligned_blocks_are_kept(extended_coordination):
    submatrices = extract_submatrices(extended_coordination)
    shapes = [(s.mapping.rows, s.mapping.cols) for s in submatrices]
    assert shapes == EXPECTED_SHAPES


def test_canonical_corner_order(extended_coordination):
    for submatrix in extract_submatrices(extended_coordination):
        (r0, r1), (c0, c1) = submatrix.mapping.rows, submatrix.mapping.cols
        assert r0 < r1 and c0 < c1
        assert submatrix.mapping.positions == ((r0, c0), (r0, c1), (r1, c0), (r1, c1))


def test_payoffs_are_copied_unchanged(extended_coordination):
    for submatrix in extract_submatrices(extended_coordination):
        for i in range(2):
            for j in range(2):
                row, col = submatrix.mapping.positions[i * 2 + j]
                assert submatrix.game.cell(i, j) == extended_coordination.cell(row, col)


def test_first_submatrix_is_top_left_block(extended_coordination):
    first = extract_submatrices(extended_coordination)[0]
    assert first.game.to_list() == [[[3.0, 3.0], [0.0, 5.0]], [[5.0, 0.0], [1.0, 1.0]]]


def test_submatrices_are_frozen(extended_coordination):
    first = extract_submatrices(extended_coordination)[0]
    with pytest.raises(ValueError):
        first.game.set(0, 0, 0, 1.0)


def test_dedupe_flag_keeps_each_shape_once(extended_coordination):
    literal = extract_submatrices(extended_coordination)
    deduped = extract_submatrices(extended_coordination, deduplicate=True)
    assert [s.mapping for s in deduped] == [s.mapping for s in literal]
    assert len({(s.mapping.rows, s.mapping.cols) for s in deduped}) == len(deduped)


def test_extractor_uses_snapshot_of_parent(extended_coordination):
    extractor = SubmatrixExtractor(extended_coordination)
    extended_coordination.set(0, 0, 0, 100.0)
    assert extractor.extract()[0].game.get(0, 0, 0) == 3.0


def test_to_parent():
    mapping = SubmatrixMapping(((0, 1), (0, 2), (2, 1), (2, 2)))
    assert mapping.rows == (0, 2)
    assert mapping.cols == (1, 2)
    assert mapping.to_parent(0, 0) == (0, 1)
    assert mapping.to_parent(1, 0) == (2, 1)
    assert mapping.to_parent(1, 1) == (2, 2)


def test_empty_game_still_yields_nine_blocks():
    assert len(extract_submatrices(PayoffMatrix3x3())) == 9
