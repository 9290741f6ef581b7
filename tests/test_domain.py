import pytest

from jetflow.domain import (
    Domain,
    Parameters,
    cart_r,
    hybrid_r,
    log_r,
    target_x,
)


def make_domain(nt=2, np_=1, n=4, tmp_path=None, **params):
    p = Parameters(rmin=1.0, rmax=3.0, **params)
    kwargs = {}
    if tmp_path is not None:
        kwargs["abort_path"] = tmp_path / "abort"
    domain = Domain(
        p,
        [n] * (nt * np_),
        [0.1 * (j + 1) for j in range(nt + 1)],
        [0.2 * k for k in range(np_ + 1)],
        **kwargs,
    )
    domain.setup()
    return domain


def test_cart_r_endpoints():
    assert cart_r(0.0, 2.0, 5.0) == pytest.approx(2.0)
    assert cart_r(1.0, 2.0, 5.0) == pytest.approx(5.0)


def test_log_r_midpoint_is_geometric_mean():
    assert log_r(0.5, 1.0, 100.0) == pytest.approx(10.0)
    assert log_r(0.0, 1.0, 100.0) == pytest.approx(1.0)


def test_hybrid_r_endpoints():
    assert hybrid_r(0.0, 1.0, 50.0, 5.0) == pytest.approx(1.0)
    assert hybrid_r(1.0, 1.0, 50.0, 5.0) == pytest.approx(50.0)


@pytest.mark.parametrize("x0", [0.2, 0.5, 0.9])
@pytest.mark.parametrize("weight", [0.0, 0.5, 1.0])
def test_target_x_keeps_endpoints(x0, weight):
    assert target_x(0.0, x0, weight) == pytest.approx(0.0)
    assert target_x(1.0, x0, weight) == pytest.approx(1.0)


def test_target_x_zero_weight_is_identity():
    assert target_x(0.37, 0.8, 0.0) == pytest.approx(0.37)


def test_setup_track_monotonic_and_ends_at_rmax():
    domain = make_domain(nt=3, n=6)
    for j in range(3):
        radii = [c.riph for c in domain.track(j, 0)]
        assert radii == sorted(radii)
        assert radii[-1] == pytest.approx(3.0)
        assert radii[0] == pytest.approx(cart_r(1.0 / 6.0, 1.0, 3.0))
        assert all(c.wiph == 0.0 for c in domain.track(j, 0))


def test_setup_log_zoning():
    domain = make_domain(n=5, log_zoning=1.0)
    track = domain.track(0, 0)
    assert track[0].riph == pytest.approx(log_r(0.2, 1.0, 3.0))
    assert track[-1].riph == pytest.approx(3.0)


def test_setup_staggers_interior_cells_between_columns():
    domain = make_domain(nt=2, n=4)
    even, odd = domain.track(0, 0), domain.track(1, 0)
    assert even[1].riph < odd[1].riph
    assert even[0].riph == pytest.approx(odd[0].riph)
    assert even[-1].riph == pytest.approx(odd[-1].riph)


def test_setup_resets_clock_and_counters():
    domain = make_domain(t_min=0.5, t_max=4.0, point_mass=1.0, num_snaps=7)
    assert domain.t == 0.5
    assert domain.t_init == 0.5
    assert domain.t_fin == 4.0
    assert domain.n_snp == 7
    assert (domain.nrpt, domain.nsnp, domain.nchk) == (-1, -1, -1)
    assert domain.g_point_mass == pytest.approx(2.0e33)
    assert domain.final_step is False


def test_setup_cells_use_num_q():
    p = Parameters(rmin=1.0, rmax=2.0)
    domain = Domain(p, [3], [0.0, 1.0], [0.0, 1.0], num_q=6)
    domain.setup()
    assert all(len(c.prim) == 6 for c in domain.track(0, 0))


def test_track_indexing_over_phi():
    p = Parameters(rmin=1.0, rmax=2.0)
    domain = Domain(p, [2, 3, 4, 5], [0.0, 0.5, 1.0], [0.0, 1.0, 2.0])
    domain.setup()
    assert [len(domain.track(j, k)) for k in range(2) for j in range(2)] == [2, 3, 4, 5]


def test_edges_and_errors():
    domain = make_domain(nt=2)
    assert domain.theta_edges(0) == (domain.t_edges[0], domain.t_edges[1])
    assert domain.phi_edges(0) == (domain.p_edges[0], domain.p_edges[1])
    with pytest.raises(IndexError):
        domain.theta_edges(2)
    with pytest.raises(IndexError):
        domain.track(0, 1)


def test_nr_must_match_grid():
    with pytest.raises(ValueError):
        Domain(Parameters(), [4, 4, 4], [0.0, 1.0], [0.0, 1.0])


def test_parameters_reject_inverted_range():
    with pytest.raises(ValueError):
        Parameters(rmin=2.0, rmax=1.0)


def test_check_dt_keeps_short_step(tmp_path):
    domain = make_domain(tmp_path=tmp_path, t_max=1.0)
    assert domain.check_dt(0.3) == pytest.approx(0.3)
    assert domain.final_step is False


def test_check_dt_truncates_last_step(tmp_path):
    domain = make_domain(tmp_path=tmp_path, t_max=1.0)
    domain.t = 0.9
    dt = domain.check_dt(0.3)
    assert domain.t + dt == pytest.approx(1.0)
    assert domain.final_step is True


def test_check_dt_abort_file(tmp_path):
    domain = make_domain(tmp_path=tmp_path, t_max=1.0)
    (tmp_path / "abort").write_text("")
    assert domain.check_dt(0.1) == pytest.approx(0.1)
    assert domain.final_step is True


def test_check_dt_abort_file_only_on_first_rank(tmp_path):
    domain = make_domain(tmp_path=tmp_path, t_max=1.0)
    domain.rank = 1
    (tmp_path / "abort").write_text("")
    domain.check_dt(0.1)
    assert domain.final_step is False