from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from bombline.components.piece import Piece

Position = Tuple[int, int]


@dataclass(slots=True)
class Grid:
    """Fixed rows x cols matrix of optional pieces, indexed cells[row][col].

    Row 0 is the gravity edge: collapsed columns settle toward it.
    """
    rows: int
    cols: int
    cells: List[List[Optional[Piece]]] = field(default_factory=list)

    def in_bounds(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < self.rows and 0 <= col < self.cols

    def positions(self):
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)
