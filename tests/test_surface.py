import numpy as np
import pytest

from wobblywindows.analysis.bezier import bernstein_basis, basis_weight_table
from wobblywindows.analysis.surface import SurfaceEvaluator
from wobblywindows.model.grid import SpringGrid


@pytest.mark.parametrize("tiles_x, tiles_y", [(1, 1), (6, 6), (10, 10), (3, 17)])
def test_weights_partition_of_unity(tiles_x, tiles_y):
    weights = basis_weight_table(tiles_x, tiles_y)

    assert weights.shape == (tiles_y + 1, tiles_x + 1, 16)
    np.testing.assert_allclose(weights.sum(axis=-1), 1.0, atol=1e-9)
    assert np.all(weights >= 0.0)


def test_bernstein_basis_values():
    np.testing.assert_allclose(bernstein_basis(0.0), [1.0, 0.0, 0.0, 0.0])
    np.testing.assert_allclose(bernstein_basis(1.0), [0.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(bernstein_basis(0.5), [0.125, 0.375, 0.375, 0.125])
    assert bernstein_basis(np.linspace(0.0, 1.0, 5)).shape == (5, 4)


def test_weights_are_row_major_outer_product():
    weights = basis_weight_table(4, 2)
    by = bernstein_basis(0.5)   # tile row 1 of 2
    bx = bernstein_basis(0.25)  # tile column 1 of 4
    np.testing.assert_allclose(weights[1, 1], np.outer(by, bx).ravel())


def test_corner_tiles_select_corner_control_points():
    weights = basis_weight_table(6, 6)
    assert weights[0, 0, 0] == pytest.approx(1.0)
    assert weights[0, -1, 3] == pytest.approx(1.0)
    assert weights[-1, 0, 12] == pytest.approx(1.0)
    assert weights[-1, -1, 15] == pytest.approx(1.0)


@pytest.mark.parametrize("tiles_x, tiles_y", [(0, 3), (3, 0), (2.5, 3), (True, 3)])
def test_invalid_tile_counts_rejected(tiles_x, tiles_y):
    with pytest.raises(ValueError):
        basis_weight_table(tiles_x, tiles_y)


def test_round_trip_on_undeformed_net():
    grid = SpringGrid(300.0, 200.0)
    evaluator = SurfaceEvaluator(6, 5, 300.0, 200.0)
    evaluator.evaluate(grid.positions)

    np.testing.assert_allclose(evaluator.displaced, evaluator.rest, atol=1e-9)
    for ix in range(7):
        for iy in range(6):
            u, v = ix / 6, iy / 5
            x, y = evaluator.sample(u, v)
            assert x == pytest.approx(u * 300.0)
            assert y == pytest.approx(v * 200.0)
            assert evaluator.displacement_at(u, v) == pytest.approx((0.0, 0.0), abs=1e-9)


def test_translated_net_translates_surface():
    grid = SpringGrid(300.0, 200.0)
    evaluator = SurfaceEvaluator(6, 6, 300.0, 200.0)
    evaluator.evaluate(grid.positions + [12.0, -4.0])
    np.testing.assert_allclose(evaluator.displaced - evaluator.rest, np.broadcast_to([12.0, -4.0], evaluator.rest.shape))


def test_surface_stays_inside_control_hull():
    rng = np.random.default_rng(7)
    points = rng.uniform(-50.0, 350.0, size=(16, 2))
    evaluator = SurfaceEvaluator(8, 8, 300.0, 200.0)
    evaluator.evaluate(points)

    assert evaluator.displaced[..., 0].min() >= points[:, 0].min() - 1e-9
    assert evaluator.displaced[..., 0].max() <= points[:, 0].max() + 1e-9
    assert evaluator.displaced[..., 1].min() >= points[:, 1].min() - 1e-9
    assert evaluator.displaced[..., 1].max() <= points[:, 1].max() + 1e-9


@pytest.mark.parametrize("u, v, expected", [
    (0.0, 0.0, (0, 0)),
    (0.5, 1.0, (3, 6)),
    (0.49, 0.51, (3, 3)),
    (0.25, 0.75, (2, 5)),
    (-0.3, 1.7, (0, 6)),
])
def test_tile_index_rounds_and_clamps(u, v, expected):
    evaluator = SurfaceEvaluator(6, 6, 300.0, 200.0)
    assert evaluator.tile_index(u, v) == expected


def test_vertex_scales_to_paint_size():
    grid = SpringGrid(200.0, 100.0)
    evaluator = SurfaceEvaluator(4, 4, 200.0, 100.0)
    evaluator.evaluate(grid.positions)

    assert evaluator.vertex(1.0, 1.0, 400.0, 300.0) == pytest.approx((400.0, 300.0))
    assert evaluator.vertex(0.5, 0.5, 200.0, 100.0, offset=(-10.0, 5.0)) == pytest.approx((90.0, 55.0))


def test_evaluate_rejects_wrong_shape():
    evaluator = SurfaceEvaluator(4, 4, 200.0, 100.0)
    with pytest.raises(ValueError):
        evaluator.evaluate(np.zeros((9, 2)))


def test_plot_draws_mesh(monkeypatch):
    import matplotlib.pyplot as plt

    monkeypatch.setattr(plt, "show", lambda: None)
    grid = SpringGrid(200.0, 100.0)
    evaluator = SurfaceEvaluator(4, 4, 200.0, 100.0)
    evaluator.evaluate(grid.positions)
    evaluator.plot(grid.positions)

    assert len(plt.gca().lines) == 5 + 5 + 1
    plt.close("all")
