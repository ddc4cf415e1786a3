"""
Transition driver — the host-side state that feeds the blob generator.

A transition moves the selector from one menu item to another.  Each
frame the host advances it by the elapsed wall-clock time; the driver
turns that into a progress fraction ``t``, builds the two circles for the
frame and asks :func:`metaballmenu.blob.compute` for the shape:

  - the transitional circle leaves the origin, travels towards the
    destination and shrinks from ``R`` to 0
  - the destination circle grows from 0 to ``R``

Easing is injected as a plain callable mapping [0, 1] → [0, 1].
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .blob import BlendInput, BlendResult, BlobParams, clamp_unit, compute_input
from .geometry import Circle, Point
from .render import DrawCommand, FillCircle, draw_commands

logger = logging.getLogger(__name__)

Easing = Callable[[float], float]


def linear(t: float) -> float:
    return t


def selector_radius(width: float, height: float, padding: float = 0.0) -> float:
    """Radius of the selector circle drawn behind an item.

    Half of the larger side of the item's bounding box, plus *padding*
    as breathing space.
    """
    if width < 0 or height < 0:
        raise ValueError(f"Item size must be non-negative, got {width}x{height}")
    if padding < 0:
        raise ValueError(f"padding must be non-negative, got {padding}")
    return max(width, height) / 2.0 + padding


def frame_input(
    origin_center: Point,
    destination_center: Point,
    radius: float,
    t: float,
) -> BlendInput:
    """Circles for one frame of a transition at progress *t*."""
    t = clamp_unit(t)
    moving = Circle(origin_center.lerp(destination_center, t), radius * (1.0 - t))
    target = Circle(destination_center, radius * t)
    return BlendInput(moving, target, t)


# ---------------------------------------------------------------------------
# Transition
# ---------------------------------------------------------------------------

@dataclass
class TransitionParams:
    """Timing of a selector transition (seconds)."""
    duration: float = 0.5

    def validate(self) -> None:
        if self.duration <= 0:
            raise ValueError("duration must be positive")


class Transition:
    """One origin → destination transition.

    Parameters:
        origin_center:      Center of the previously selected item.
        destination_center: Center of the newly selected item.
        radius:             Selector radius at rest.
        params:             Timing (or defaults).
        easing:             Monotonic [0, 1] → [0, 1] mapping (default linear).
        blob_params:        Shape constants passed to the generator.
        on_finished:        Called once when ``t`` reaches 1.
    """

    def __init__(
        self,
        origin_center: Point,
        destination_center: Point,
        radius: float,
        params: Optional[TransitionParams] = None,
        easing: Optional[Easing] = None,
        blob_params: Optional[BlobParams] = None,
        on_finished: Optional[Callable[[], None]] = None,
    ) -> None:
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        self.params = params or TransitionParams()
        self.params.validate()
        if blob_params is not None:
            blob_params.validate()
        self.origin_center = origin_center
        self.destination_center = destination_center
        self.radius = radius
        self.easing = easing or linear
        self.blob_params = blob_params
        self.on_finished = on_finished
        self.elapsed: float = 0.0
        self._t: float = 0.0
        self._finished = False
        self._cancelled = False

    @property
    def t(self) -> float:
        return self._t

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        return not (self._finished or self._cancelled)

    def advance(self, dt: float) -> float:
        """Move the clock forward by *dt* seconds and return the new ``t``."""
        if not self.active:
            return self._t
        self.elapsed += max(0.0, dt)
        raw = min(1.0, self.elapsed / self.params.duration)
        eased = clamp_unit(self.easing(raw))
        if eased < self._t:
            logger.debug("easing went backwards (%.3f < %.3f), holding", eased, self._t)
        self._t = max(self._t, eased)
        if raw >= 1.0:
            # Land exactly on the destination whatever the easing returns
            self._t = 1.0
            self._finished = True
            logger.info("Transition finished after %.3fs", self.elapsed)
            if self.on_finished is not None:
                self.on_finished()
        return self._t

    def cancel(self) -> None:
        if self.active:
            self._cancelled = True
            logger.info("Transition cancelled at t=%.3f", self._t)

    def frame(self) -> BlendInput:
        return frame_input(self.origin_center, self.destination_center, self.radius, self._t)

    def result(self) -> BlendResult:
        return compute_input(self.frame(), self.blob_params)

    def step(self, dt: float) -> BlendResult:
        self.advance(dt)
        return self.result()


# ---------------------------------------------------------------------------
# Menu selector
# ---------------------------------------------------------------------------

class MenuSelector:
    """Selection state of a row of menu items.

    Holds the item centers, the selected index and at most one running
    transition.  ``step`` yields what to paint this frame.
    """

    def __init__(
        self,
        centers: Sequence[Point],
        radius: float,
        params: Optional[TransitionParams] = None,
        easing: Optional[Easing] = None,
        blob_params: Optional[BlobParams] = None,
        selected: int = 0,
    ) -> None:
        if not centers:
            raise ValueError("MenuSelector needs at least one item")
        self.centers: List[Point] = list(centers)
        self.radius = radius
        self.params = params or TransitionParams()
        self.params.validate()
        self.easing = easing
        self.blob_params = blob_params
        self._check_index(selected)
        self.selected = selected
        self.transition: Optional[Transition] = None
        self._listeners: List[Callable[[int], None]] = []

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.centers):
            raise IndexError(f"No menu item at index {index} ({len(self.centers)} items)")

    def add_listener(self, callback: Callable[[int], None]) -> None:
        """Register *callback(index)*, called when a transition completes."""
        self._listeners.append(callback)

    @property
    def animating(self) -> bool:
        return self.transition is not None and self.transition.active

    def select(self, index: int) -> Optional[Transition]:
        """Start moving the selector to *index*.

        A transition already in flight is dropped; the new one starts
        from the current selection.  Returns ``None`` when *index* is
        already selected and idle.
        """
        self._check_index(index)
        if index == self.selected and not self.animating:
            return None
        if self.transition is not None:
            self.transition.cancel()

        origin = self.centers[self.selected]
        self.selected = index
        self.transition = Transition(
            origin, self.centers[index], self.radius,
            params=self.params,
            easing=self.easing,
            blob_params=self.blob_params,
            on_finished=lambda: self._finished(index),
        )
        logger.info("Selection %d started (%.1f px away)",
                    index, origin.distance_to(self.centers[index]))
        return self.transition

    def _finished(self, index: int) -> None:
        for cb in self._listeners:
            cb(index)

    def step(self, dt: float) -> List[DrawCommand]:
        """Advance by *dt* seconds and return this frame's draw commands."""
        if self.animating:
            result = self.transition.step(dt)
            if not self.transition.active:
                self.transition = None
            return draw_commands(result)
        return [FillCircle(Circle(self.centers[self.selected], self.radius))]
