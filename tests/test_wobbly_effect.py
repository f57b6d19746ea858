import pytest

from wobblywindows.config import EffectSettings, WOBBLY_TIMELINE_DURATION
from wobblywindows.effects.wobbly import WobblyEffect
from wobblywindows.model.operations import Operation

FRAME = 16.0


def run_to_end(effect: WobblyEffect, start: float = 0.0) -> float:
    elapsed = start
    while effect.advance(elapsed).still_animating:
        elapsed += FRAME
    return elapsed


@pytest.mark.parametrize("operation", [Operation.RESIZE_E, Operation.RESIZE_NW])
def test_resize_operation_rejected(settings, frame, operation):
    with pytest.raises(ValueError):
        WobblyEffect(operation, settings, frame, pointer=(150.0, 60.0))


def test_move_requires_pointer(settings, frame):
    with pytest.raises(ValueError):
        WobblyEffect(Operation.MOVE, settings, frame)


def test_move_grabs_under_pointer(settings, frame):
    effect = WobblyEffect(Operation.MOVE, settings, frame, pointer=(100.0, 50.0))

    assert effect.model.immobile_object == 0
    assert effect.ended is False
    assert effect.evaluator.tiles_x == settings.x_tiles
    assert effect.model.solver.stiffness == pytest.approx(settings.spring_k * 0.5)


def test_move_stays_alive_while_grabbed(settings, frame):
    effect = WobblyEffect(Operation.MOVE, settings, frame, pointer=(200.0, 100.0))

    for i in range(50):
        assert effect.advance(i * FRAME).still_animating
    assert effect.is_alive


def test_surface_lags_behind_the_drag(settings, frame):
    effect = WobblyEffect(Operation.MOVE, settings, frame, pointer=(300.0, 150.0))
    effect.advance(0.0)

    effect.on_move(110.0, 50.0)
    assert (effect.offset_x, effect.offset_y) == (-10.0, 0.0)
    effect.advance(FRAME)

    # the grabbed corner follows exactly, the opposite one has barely moved
    assert effect.displacement_at(1.0, 1.0) == pytest.approx((0.0, 0.0), abs=1e-9)
    dx, _ = effect.displacement_at(0.0, 0.0)
    assert -10.0 <= dx < 0.0


def test_move_redraw_waits_for_actor(settings, frame):
    effect = WobblyEffect(Operation.MOVE, settings, frame, pointer=(200.0, 100.0))
    effect.on_move(120.0, 50.0)

    assert effect.advance(FRAME, actor_position=(100.0, 50.0)).needs_redraw is False
    assert effect.advance(2 * FRAME, actor_position=(120.0, 50.0)).needs_redraw is True
    assert effect.advance(3 * FRAME).needs_redraw is True


def test_release_settles_then_terminates(settings, frame):
    effect = WobblyEffect(Operation.MOVE, settings, frame, pointer=(200.0, 100.0))
    for i in range(1, 11):
        effect.on_move(100.0 + 8.0 * i, 50.0)
        effect.advance(i * FRAME)
    assert effect.movement is True

    effect.end()
    elapsed = run_to_end(effect, 11 * FRAME)

    assert elapsed < WOBBLY_TIMELINE_DURATION
    assert effect.is_alive is False
    assert effect.model is None


@pytest.mark.parametrize("operation", [Operation.MAXIMIZED, Operation.UNMAXIMIZED])
def test_maximize_transitions_end_by_themselves(settings, frame, operation):
    effect = WobblyEffect(operation, settings, frame)
    assert effect.ended is True
    assert effect.movement is True

    first = effect.advance(0.0)
    assert first.still_animating and first.needs_redraw

    run_to_end(effect, FRAME)
    assert effect.is_alive is False


def test_maximized_uses_fine_tessellation(frame):
    effect = WobblyEffect(Operation.MAXIMIZED, EffectSettings(x_tiles=4, y_tiles=4), frame)
    assert (effect.evaluator.tiles_x, effect.evaluator.tiles_y) == (10, 10)


def test_timeline_cutoff(settings, frame):
    effect = WobblyEffect(Operation.MOVE, settings, frame, pointer=(200.0, 100.0))
    assert effect.advance(WOBBLY_TIMELINE_DURATION - 1.0).still_animating
    assert effect.advance(WOBBLY_TIMELINE_DURATION).still_animating is False
    assert effect.is_alive is False


def test_destroyed_effect_is_identity(settings, frame):
    effect = WobblyEffect(Operation.UNMAXIMIZED, settings, frame)
    effect.advance(0.0)
    effect.destroy()
    effect.destroy()

    assert effect.deform_vertex(0.5, 0.25, 400.0, 200.0) == (200.0, 50.0)
    assert effect.displacement_at(0.5, 0.5) == (0.0, 0.0)
    assert effect.advance(FRAME).still_animating is False
    effect.on_move(0.0, 0.0)
    effect.end()


def test_deform_vertex_scales_to_paint_size(settings, frame):
    effect = WobblyEffect(Operation.MOVE, settings, frame, pointer=(200.0, 100.0))
    effect.advance(0.0)
    assert effect.deform_vertex(1.0, 1.0, 400.0, 300.0) == pytest.approx((400.0, 300.0))
