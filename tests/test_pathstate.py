import numpy as np
import pytest

from boggle.pathstate import PathStateTable


def test_visit_and_read():
    table = PathStateTable(max_word_length=4, max_size=3)
    table.reset(4, 3)
    assert not table[(2, 1, 1)]
    table.visit((2, 1, 1))
    assert table[(2, 1, 1)]
    assert table.reachable(2) == [(1, 1)]


def test_reset_clears_used_region():
    table = PathStateTable(max_word_length=4, max_size=4)
    table.reset(4, 4)
    for k in range(4):
        table.visit((k, k, k))
    table.reset(3, 4)
    for k in range(3):
        assert table.reachable(k) == []


def test_reset_keeps_capacity():
    table = PathStateTable(max_word_length=8, max_size=5)
    table.reset(4, 3)
    assert table.capacity == (8, 5)
    table.reset(6, 5)
    assert table.capacity == (8, 5)


def test_reset_grows_when_needed():
    table = PathStateTable(max_word_length=4, max_size=3)
    table.reset(4, 3)
    table.visit((3, 2, 2))
    table.reset(10, 6)
    assert table.capacity == (10, 6)
    assert table.word_length == 10
    assert table.size == 6
    assert not table.layer(3).any()


@pytest.mark.parametrize("idx", [(4, 0, 0), (0, 3, 0), (0, 0, 3), (-1, 0, 0)])
def test_out_of_bounds_raises(idx):
    table = PathStateTable(max_word_length=8, max_size=8)
    table.reset(4, 3)
    with pytest.raises(IndexError):
        table[idx]
    with pytest.raises(IndexError):
        table.visit(idx)


def test_layer_limited_to_active_board():
    table = PathStateTable(max_word_length=8, max_size=8)
    table.reset(5, 3)
    assert table.layer(0).shape == (3, 3)
    with pytest.raises(IndexError):
        table.layer(5)


def test_mark_layer():
    table = PathStateTable()
    table.reset(2, 3)
    assert not table.mark_layer(0, np.zeros((3, 3), dtype=bool))
    mask = np.zeros((3, 3), dtype=bool)
    mask[0, 2] = True
    assert table.mark_layer(1, mask)
    assert table[(1, 0, 2)]
