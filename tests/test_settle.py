import numpy as np
import pytest

from wobblywindows.effects.settle import SettleAnimator


def test_overshoot_and_frequency():
    animator = SettleAnimator(10.0, -4.0, friction=3.5)
    assert animator.stop_delta_x == pytest.approx(15.0)
    assert animator.stop_delta_y == pytest.approx(-6.0)
    assert animator.frequency == pytest.approx(45.0)


def test_delta_formula_truncates_toward_zero():
    animator = SettleAnimator(10.0, -10.0, friction=1.0)
    p = 0.3
    wave = (1.0 - (1.0 - p) ** 3) * np.sin(p * 20.0)
    dx, dy = animator.delta_at(p)
    assert dx == float(int(15.0 * wave))
    assert dy == float(int(-15.0 * wave))


def test_starts_at_zero():
    assert SettleAnimator(50.0, 50.0, friction=3.5).delta_at(0.0) == (0.0, 0.0)


@pytest.mark.parametrize("friction", [1.0, 3.5, 10.0])
def test_delta_bounded_by_stop_delta(friction):
    animator = SettleAnimator(-37.0, 21.0, friction=friction)
    for p in np.linspace(0.0, 1.0, 401):
        dx, dy = animator.delta_at(p)
        assert abs(dx) <= abs(animator.stop_delta_x)
        assert abs(dy) <= abs(animator.stop_delta_y)


def test_timeline():
    animator = SettleAnimator(1.0, 1.0, friction=3.5)
    assert animator.progress(-5.0) == 0.0
    assert animator.progress(500.0) == pytest.approx(0.5)
    assert animator.progress(5000.0) == 1.0
    assert animator.is_complete(999.0) is False
    assert animator.is_complete(1000.0) is True


def test_invalid_duration_rejected():
    with pytest.raises(ValueError):
        SettleAnimator(1.0, 1.0, friction=3.5, duration=0.0)


def test_curve_and_plot(monkeypatch):
    import matplotlib.pyplot as plt

    animator = SettleAnimator(20.0, 0.0, friction=3.5)
    progress, deltas = animator.curve(50)
    assert progress.shape == deltas.shape == (50,)
    assert np.all(np.abs(deltas) <= 30.0)

    monkeypatch.setattr(plt, "show", lambda: None)
    animator.plot()
    plt.close("all")
