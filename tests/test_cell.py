import pytest

from jetflow.cell import DEFAULT_NUM_Q, PPP, RHO, Cell, Face


def test_default_cell_has_zeroed_arrays():
    c = Cell()
    assert c.prim == [0.0] * DEFAULT_NUM_Q
    assert c.gradr == [0.0] * DEFAULT_NUM_Q
    assert c.riph == 0.0


def test_num_q_sets_array_sizes():
    c = Cell(num_q=6)
    assert c.size == 6
    assert len(c.cons) == 6
    assert len(c.rk_cons) == 6


def test_size_taken_from_prim():
    c = Cell(prim=[1.0, 2.0, 0.0, 0.0, 0.5])
    assert c.size == 5
    assert c.cons == [0.0] * 5


def test_mismatched_arrays_rejected():
    with pytest.raises(ValueError):
        Cell(prim=[1.0, 2.0, 3.0, 4.0], cons=[1.0, 2.0])


def test_clear_zeroes_everything():
    c = Cell(prim=[1.0, 2.0, 3.0, 4.0], riph=2.5, dr=0.5, wiph=0.1, rk_riph=2.4)
    c.cons[RHO] = 7.0
    c.grad[PPP] = 3.0
    c.clear()
    assert c.prim == [0.0] * 4
    assert c.cons == [0.0] * 4
    assert c.grad == [0.0] * 4
    assert (c.riph, c.dr, c.wiph, c.rk_riph) == (0.0, 0.0, 0.0, 0.0)


def test_copy_is_independent():
    c = Cell(prim=[1.0, 2.0, 3.0, 4.0], riph=1.5, dr=0.25)
    d = c.copy()
    assert d == c
    d.prim[RHO] = 9.0
    d.riph = 3.0
    assert c.prim[RHO] == 1.0
    assert c.riph == 1.5


def test_face_links_cells():
    left = Cell(riph=1.0)
    right = Cell(riph=2.0)
    f = Face(left, right, area=0.5, dx_left=0.1, dx_right=0.2, centroid=(1.0, 0.5, 0.0))
    assert f.left.riph == 1.0
    assert f.right.riph == 2.0
    assert f.centroid[1] == 0.5