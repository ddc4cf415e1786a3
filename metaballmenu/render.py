"""
Draw primitives handed to a renderer, in painting order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from .blob import BlendResult, ClosedPath, FusedBlob
from .geometry import Circle


@dataclass(frozen=True)
class FillCircle:
    circle: Circle


@dataclass(frozen=True)
class FillPath:
    path: ClosedPath


DrawCommand = Union[FillCircle, FillPath]


def draw_commands(result: BlendResult) -> List[DrawCommand]:
    """Origin circle, destination circle, then the joining path if any."""
    commands: List[DrawCommand] = [
        FillCircle(result.origin),
        FillCircle(result.destination),
    ]
    if isinstance(result, FusedBlob):
        commands.append(FillPath(result.path))
    return commands
