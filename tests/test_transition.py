import pytest

from metaballmenu.blob import FusedBlob, TwoCircles
from metaballmenu.geometry import Circle, Point
from metaballmenu.render import FillCircle, FillPath, draw_commands
from metaballmenu.transition import (
    MenuSelector,
    Transition,
    TransitionParams,
    frame_input,
    selector_radius,
)

CENTERS = [Point(36.0, 36.0), Point(108.0, 36.0), Point(180.0, 36.0)]


def _run(selector: MenuSelector, dt: float = 0.05, limit: int = 100) -> int:
    frames = 0
    while selector.animating and frames < limit:
        selector.step(dt)
        frames += 1
    return frames


def test_selector_radius() -> None:
    assert selector_radius(24, 16, 8) == 20.0
    assert selector_radius(10, 30) == 15.0
    with pytest.raises(ValueError):
        selector_radius(-1, 10)
    with pytest.raises(ValueError):
        selector_radius(10, 10, padding=-2)


def test_frame_input_interpolates() -> None:
    a, b = Point(0.0, 10.0), Point(100.0, 10.0)
    start = frame_input(a, b, 20.0, 0.0)
    assert start.origin == Circle(a, 20.0)
    assert start.destination == Circle(b, 0.0)

    mid = frame_input(a, b, 20.0, 0.5)
    assert mid.origin.center == Point(50.0, 10.0)
    assert mid.origin.radius == pytest.approx(10.0)
    assert mid.destination.radius == pytest.approx(10.0)

    end = frame_input(a, b, 20.0, 3.0)
    assert end.t == 1.0
    assert end.origin.radius == 0.0
    assert end.destination.radius == 20.0


def test_transition_advances_and_finishes_once() -> None:
    calls = []
    tr = Transition(CENTERS[0], CENTERS[1], 20.0,
                    params=TransitionParams(duration=0.5),
                    on_finished=lambda: calls.append(1))
    assert tr.advance(0.25) == pytest.approx(0.5)
    assert tr.active
    assert calls == []
    assert tr.advance(0.5) == 1.0
    assert tr.finished
    assert calls == [1]
    assert tr.advance(1.0) == 1.0
    assert calls == [1]


def test_transition_t_never_decreases() -> None:
    bouncy = lambda x: 0.9 if x < 0.5 else 0.4  # noqa: E731
    tr = Transition(CENTERS[0], CENTERS[1], 20.0, easing=bouncy)
    seen = [tr.advance(0.1) for _ in range(4)]
    assert seen == sorted(seen)
    assert seen[-1] == pytest.approx(0.9)
    assert tr.advance(1.0) == 1.0


def test_transition_easing_is_applied() -> None:
    tr = Transition(CENTERS[0], CENTERS[1], 20.0, easing=lambda x: x * x)
    assert tr.advance(0.25) == pytest.approx(0.25)


def test_transition_cancel_skips_callback() -> None:
    calls = []
    tr = Transition(CENTERS[0], CENTERS[1], 20.0, on_finished=lambda: calls.append(1))
    tr.advance(0.1)
    tr.cancel()
    assert tr.cancelled
    assert not tr.active
    t = tr.t
    assert tr.advance(5.0) == t
    assert calls == []


def test_transition_step_results() -> None:
    tr = Transition(CENTERS[0], CENTERS[1], 20.0)
    assert isinstance(tr.step(0.0), TwoCircles)
    assert isinstance(tr.step(0.25), FusedBlob)
    last = tr.step(1.0)
    assert isinstance(last, TwoCircles)
    assert last.origin.radius == 0.0
    assert last.destination == Circle(CENTERS[1], 20.0)


def test_transition_validation() -> None:
    with pytest.raises(ValueError):
        TransitionParams(duration=0.0).validate()
    with pytest.raises(ValueError):
        Transition(CENTERS[0], CENTERS[1], -1.0)


def test_draw_commands_order() -> None:
    tr = Transition(CENTERS[0], CENTERS[1], 20.0)
    fused = tr.step(0.25)
    cmds = draw_commands(fused)
    assert [type(c) for c in cmds] == [FillCircle, FillCircle, FillPath]
    assert cmds[0].circle == fused.origin
    assert cmds[1].circle == fused.destination
    assert cmds[2].path == fused.path

    apart = draw_commands(TwoCircles(Circle(CENTERS[0], 5.0), Circle(CENTERS[1], 0.0)))
    assert [type(c) for c in apart] == [FillCircle, FillCircle]


def test_menu_selector_idle_draws_selector() -> None:
    sel = MenuSelector(CENTERS, 20.0, selected=1)
    assert sel.step(0.1) == [FillCircle(Circle(CENTERS[1], 20.0))]
    assert sel.select(1) is None


def test_menu_selector_transition_completes() -> None:
    selected = []
    sel = MenuSelector(CENTERS, 20.0)
    sel.add_listener(selected.append)
    tr = sel.select(2)
    assert tr is not None
    assert tr.origin_center == CENTERS[0]
    assert sel.animating
    frames = _run(sel)
    assert 0 < frames < 100
    assert not sel.animating
    assert selected == [2]
    assert sel.step(0.05) == [FillCircle(Circle(CENTERS[2], 20.0))]


def test_menu_selector_interrupts_running_transition() -> None:
    selected = []
    sel = MenuSelector(CENTERS, 20.0)
    sel.add_listener(selected.append)
    first = sel.select(1)
    sel.step(0.1)
    second = sel.select(2)
    assert first.cancelled
    assert second.origin_center == CENTERS[1]
    _run(sel)
    assert selected == [2]


def test_menu_selector_bad_index() -> None:
    sel = MenuSelector(CENTERS, 20.0)
    with pytest.raises(IndexError):
        sel.select(3)
    with pytest.raises(IndexError):
        MenuSelector(CENTERS, 20.0, selected=-1)
    with pytest.raises(ValueError):
        MenuSelector([], 20.0)
