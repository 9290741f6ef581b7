import math

import pytest

from jetflow.initial_tables import (
    RadialTable,
    ReadTable,
    ReadTable2D,
    count_lines,
    read_2d_table,
    read_radial_table,
)


ROWS = [
    (1.0, 10.0, 1.0, 1.0, 0.1, 0.2, 0.3),
    (2.0, 20.0, 2.0, 2.0, 0.2, 0.3, 0.4),
    (3.0, 30.0, 3.0, 3.0, 0.3, 0.4, 0.5),
    (4.0, 40.0, 4.0, 4.0, 0.4, 0.5, 0.6),
    (5.0, 50.0, 5.0, 5.0, 0.5, 0.6, 0.7),
]


@pytest.fixture
def radial_path(tmp_path):
    path = tmp_path / "initial.dat"
    path.write_text("".join(" ".join(str(v) for v in row) + "\n" for row in ROWS))
    return path


@pytest.fixture
def table2d_path(tmp_path):
    path = tmp_path / "table.dat"
    lines = ["3 4.77 1.0"]
    for i in range(3):
        for j in range(3):
            lines.append(f"{i} {j} {1.0 + i + 2 * j}")
    path.write_text("\n".join(lines) + "\n")
    return path


def test_count_lines(radial_path):
    assert count_lines(radial_path) == len(ROWS)


def test_read_radial_table_columns(radial_path):
    table = read_radial_table(radial_path)
    assert len(table) == len(ROWS)
    assert table.r == tuple(row[0] for row in ROWS)
    assert table.nickel == tuple(row[6] for row in ROWS)


def test_read_radial_table_rejects_short_rows(tmp_path):
    path = tmp_path / "bad.dat"
    path.write_text("1 2 3\n")
    with pytest.raises(ValueError):
        read_radial_table(path)


def test_radial_table_needs_two_rows():
    with pytest.raises(ValueError):
        RadialTable((1.0,), (1.0,), (1.0,), (1.0,), (1.0,), (1.0,), (1.0,))


def test_interpolation_between_rows(radial_path):
    ic = ReadTable.from_file(radial_path, num_n=3, seed=3)
    prim = ic.initial((2.5, 0.0, 0.0))
    assert prim[0] == pytest.approx((ROWS[1][1] + ROWS[2][1]) / 2)
    assert prim[1] == pytest.approx((ROWS[1][2] + ROWS[2][2]) / 2)
    assert prim[2] == pytest.approx((ROWS[1][3] + ROWS[2][3]) / 2, rel=1e-3)
    assert prim[4:] == pytest.approx([(a + b) / 2 for a, b in zip(ROWS[1][4:], ROWS[2][4:])])


def test_innermost_zone_is_static(radial_path):
    ic = ReadTable.from_file(radial_path)
    prim = ic.initial((1.5, 0.0, 0.0))
    assert prim[2] == 0.0
    assert prim[0] == pytest.approx((ROWS[0][1] + ROWS[1][1]) / 2)


def test_beyond_table_is_wind(radial_path):
    ic = ReadTable.from_file(radial_path, num_n=3)
    prim = ic.initial((10.0, 0.0, 0.0))
    assert prim[0] == pytest.approx(1e18 / 100.0)
    assert prim[1] == pytest.approx(prim[0] * ROWS[3][2] / ROWS[3][1])
    assert prim[2] == 0.0
    assert prim[4:] == pytest.approx(list(ROWS[3][4:]))


def test_same_seed_same_perturbation(radial_path):
    a = ReadTable.from_file(radial_path, seed=7).initial((2.5, 0.0, 0.0))
    b = ReadTable.from_file(radial_path, seed=7).initial((2.5, 0.0, 0.0))
    assert a == b


def test_read_2d_table(table2d_path):
    table = read_2d_table(table2d_path)
    assert table.nx == 3
    assert table.mass == 4.77
    assert table.rho[2][1] == pytest.approx(1.0 + 2 + 2 * 1)


def test_read_2d_table_rejects_missing_entries(tmp_path):
    path = tmp_path / "short.dat"
    path.write_text("3 1.0 1.0\n0 0 1.0\n")
    with pytest.raises(ValueError):
        read_2d_table(path)


def test_read_2d_table_rejects_bad_header(tmp_path):
    path = tmp_path / "header.dat"
    path.write_text("three 1.0\n")
    with pytest.raises(ValueError):
        read_2d_table(path)


def test_2d_symmetric_about_equator(table2d_path):
    ic = ReadTable2D.from_file(table2d_path, rmin=0.01)
    north = ic.initial((0.5, 0.4, 0.0))
    south = ic.initial((0.5, math.pi - 0.4, 0.0))
    assert north[0] == pytest.approx(south[0])
    assert north[1] == pytest.approx(south[1])


def test_2d_grid_point_density(table2d_path):
    table = read_2d_table(table2d_path)
    ic = ReadTable2D(table=table, rmin=0.01)
    prim = ic.initial((1.0 / 3.0, math.pi / 2, 0.0))
    wind = prim[0] - table.rho[1][0]
    assert 0.0 < wind < 1e-10
    assert prim[1] == pytest.approx(prim[0] * 1e-8, rel=1e-6)


def test_2d_bomb_raises_central_pressure(table2d_path):
    ic = ReadTable2D.from_file(table2d_path, rmin=0.05)
    assert ic.initial((0.01, 0.5, 0.0))[1] > ic.initial((0.5, 0.5, 0.0))[1]