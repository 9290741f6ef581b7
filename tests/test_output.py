import pytest

from jetflow.domain import Domain, Parameters
from jetflow.geometry import CartesianGeometry
from jetflow.output import output, radial_average


class VolumeHydro:
    """Conserved variables are the primitives times the volume."""

    def cons2prim(self, cons, r, th, dV, prim):
        return [c / dV for c in cons]


def _make_domain(nr, t_edges=(0.0, 1.0), p_edges=(0.0, 1.0), num_r=4, **kwargs):
    params = Parameters(
        rmin=1.0,
        rmax=2.0,
        num_r=num_r,
        thmin=t_edges[0],
        thmax=t_edges[-1],
        phimax=p_edges[-1],
    )
    domain = Domain(params=params, nr=list(nr), t_edges=list(t_edges),
                    p_edges=list(p_edges), **kwargs)
    domain.setup()
    for track in domain.cells:
        prev = params.rmin
        for c in track:
            c.dr = c.riph - prev
            prev = c.riph
    return domain


def _fill_uniform(domain, geometry, values):
    for j in range(domain.n_theta):
        thm, thp = domain.theta_edges(j)
        for k in range(domain.n_phi):
            phm, php = domain.phi_edges(k)
            for c in domain.track(j, k):
                dV = geometry.dV((c.riph, thp, php), (c.riph - c.dr, thm, phm))
                c.prim[:] = list(values)
                c.cons[:] = [v * dV for v in values]


def _values(domain):
    return [1.0 + 0.5 * q for q in range(domain.num_q)]


def test_radial_average_conserves_totals():
    geometry = CartesianGeometry()
    domain = _make_domain([10], num_r=3)
    for i, c in enumerate(domain.track(0, 0)):
        c.cons[:] = [float(i + q) for q in range(domain.num_q)]
    profile = radial_average(domain, geometry, 3)
    for q in range(domain.num_q):
        expected = sum(c.cons[q] for c in domain.track(0, 0)[1:])
        total = sum(row[q] for row in profile.cons)
        assert total == pytest.approx(expected)


def test_radial_average_bounds_from_first_track():
    geometry = CartesianGeometry()
    domain = _make_domain([8])
    profile = radial_average(domain, geometry, 5)
    track = domain.track(0, 0)
    assert profile.rmin == track[0].riph
    assert profile.rmax == track[-1].riph
    assert profile.num_r == 5
    assert profile.bin_edges(4)[1] == pytest.approx(profile.rmax)


def test_radial_average_uniform_state_is_recovered():
    geometry = CartesianGeometry()
    domain = _make_domain([12], num_r=4)
    values = _values(domain)
    _fill_uniform(domain, geometry, values)
    profile = radial_average(domain, geometry, 4)
    p = domain.params
    for i in range(4):
        rm, rp = profile.bin_edges(i)
        dV = geometry.dV((rp, p.thmax, p.phimax), (rm, p.thmin, 0.0))
        assert [v / dV for v in profile.prim_volume[i]] == pytest.approx(values)
        assert [v / dV for v in profile.cons[i]] == pytest.approx(values)


def test_radial_average_rejects_bad_bins():
    domain = _make_domain([6])
    with pytest.raises(ValueError):
        radial_average(domain, CartesianGeometry(), 0)


def test_radial_average_rejects_flat_track():
    domain = _make_domain([4])
    for c in domain.track(0, 0):
        c.riph = 1.5
    with pytest.raises(ValueError):
        radial_average(domain, CartesianGeometry(), 3)


def test_output_writes_cell_dump(tmp_path):
    geometry = CartesianGeometry()
    domain = _make_domain([5, 7], t_edges=(0.0, 0.5, 1.0))
    _fill_uniform(domain, geometry, [1.0] * domain.num_q)
    cell_path, profile_path = output(domain, geometry, VolumeHydro(), tmp_path / "snap")
    assert cell_path == tmp_path / "snap.dat"
    assert profile_path == tmp_path / "snap_1d.dat"
    lines = cell_path.read_text().splitlines()
    assert len(lines) == 12
    assert sum(line.startswith("# ") for line in lines) == 2
    fields = lines[1].split()
    assert len(fields) == 6 + domain.num_q
    assert fields[6] == "1.000000e+00"


def test_output_radial_profile_matches_uniform_state(tmp_path):
    geometry = CartesianGeometry()
    domain = _make_domain([10], num_r=4)
    values = _values(domain)
    _fill_uniform(domain, geometry, values)
    _, profile_path = output(domain, geometry, VolumeHydro(), tmp_path / "run")
    rows = [list(map(float, line.split())) for line in profile_path.read_text().splitlines()]
    assert len(rows) == 4
    for row in rows:
        assert len(row) == 1 + 2 * domain.num_q
        recovered = row[1::2]
        averaged = row[2::2]
        assert recovered == pytest.approx(values, rel=1e-5)
        assert averaged == pytest.approx(values, rel=1e-5)


def test_output_other_rank_appends_without_profile(tmp_path):
    geometry = CartesianGeometry()
    domain = _make_domain([4])
    _fill_uniform(domain, geometry, [1.0] * domain.num_q)
    output(domain, geometry, VolumeHydro(), tmp_path / "multi")
    domain.rank = 1
    cell_path, profile_path = output(domain, geometry, VolumeHydro(), tmp_path / "multi")
    assert profile_path is None
    assert len(cell_path.read_text().splitlines()) == 8