"""Screen geometry of the fretboard, independent of pygame."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..note_types import FretCoordinate

Rect = Tuple[int, int, int, int]  # x, y, width, height


def fret_weights(fret_count: int) -> List[float]:
    """Relative widths of frets 1..N, shrinking up the neck like a real one.

    Falls back to twelve equal columns for a non-positive count.
    """
    if fret_count <= 0:
        return [1.0 / 12] * 12
    weights = [2 ** (-(i + 1) / 12) for i in range(fret_count)]
    total = sum(weights)
    return [w / total for w in weights]


@dataclass
class BoardGeometry:
    """Places strings, frets and the range selector rows inside a box."""

    x: int
    y: int
    width: int
    string_count: int
    fret_count: int  # columns including the open string
    row_height: int = 40
    label_width: int = 40
    open_width: int = 50
    gap: int = 4

    def __post_init__(self):
        self._edges = self._column_edges()

    def _column_edges(self) -> List[Tuple[int, int]]:
        """Left and right pixel edge of each fret column, open string first."""
        left = self.x + self.label_width
        edges = [(left, left + self.open_width)]
        remaining = self.width - self.label_width - self.open_width - self.gap
        cursor = left + self.open_width + self.gap
        for weight in fret_weights(self.fret_count - 1)[: self.fret_count - 1]:
            w = max(int(remaining * weight), 1)
            edges.append((cursor, cursor + w - self.gap))
            cursor += w
        return edges

    @property
    def start_row_y(self) -> int:
        return self.y

    @property
    def board_y(self) -> int:
        return self.y + self.row_height

    @property
    def end_row_y(self) -> int:
        return self.board_y + self.string_count * self.row_height

    @property
    def height(self) -> int:
        return (self.string_count + 2) * self.row_height

    def fret_rect(self, coordinate: FretCoordinate) -> Rect:
        left, right = self._edges[coordinate.fret_index]
        top = self.board_y + coordinate.string_index * self.row_height
        return left, top + self.gap // 2, right - left, self.row_height - self.gap

    def label_rect(self, string_index: int) -> Rect:
        top = self.board_y + string_index * self.row_height
        return self.x, top, self.label_width, self.row_height

    def selector_rect(self, row: str, fret_index: int) -> Rect:
        left, right = self._edges[fret_index]
        top = self.start_row_y if row == "start" else self.end_row_y
        return left, top + self.gap, right - left, self.row_height - 2 * self.gap

    def _column_at(self, px: int) -> Optional[int]:
        for index, (left, right) in enumerate(self._edges):
            if left <= px < right:
                return index
        return None

    def hit_fret(self, px: int, py: int) -> Optional[FretCoordinate]:
        """The fret under a pixel, or None."""
        if not self.board_y <= py < self.end_row_y:
            return None
        column = self._column_at(px)
        if column is None:
            return None
        return FretCoordinate((py - self.board_y) // self.row_height, column)

    def hit_selector(self, px: int, py: int) -> Optional[Tuple[str, int]]:
        """``("start" | "end", fret)`` under a pixel in a selector row, or None."""
        if self.start_row_y <= py < self.board_y:
            row = "start"
        elif self.end_row_y <= py < self.end_row_y + self.row_height:
            row = "end"
        else:
            return None
        column = self._column_at(px)
        if column is None:
            return None
        return row, column
