from __future__ import annotations

from dataclasses import dataclass, field

from .pieces import Color

Coordinate = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Jump:
    start: Coordinate
    end: Coordinate

    @property
    def is_capture(self) -> bool:
        return abs(self.end[0] - self.start[0]) == 2

    @property
    def captured(self) -> Coordinate | None:
        if not self.is_capture:
            return None
        return ((self.start[0] + self.end[0]) // 2, (self.start[1] + self.end[1]) // 2)

    def __str__(self) -> str:
        connector = " x " if self.is_capture else " - "
        return f"{self.start[0]},{self.start[1]}{connector}{self.end[0]},{self.end[1]}"


@dataclass(slots=True)
class MoveResult:
    """Outcome of one applied move, including any automatic chain captures."""

    color: Color
    start: Coordinate
    jumps: list[Jump] = field(default_factory=list)
    captured: list[Color] = field(default_factory=list)
    promoted: bool = False

    @property
    def end(self) -> Coordinate:
        return self.jumps[-1].end if self.jumps else self.start

    @property
    def is_capture(self) -> bool:
        return bool(self.captured)

    @property
    def is_chain(self) -> bool:
        return len(self.jumps) > 1

    def __str__(self) -> str:
        connector = " x " if self.is_capture else " - "
        path = [self.start] + [jump.end for jump in self.jumps]
        return connector.join(f"{row},{col}" for row, col in path)
