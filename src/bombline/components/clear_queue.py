from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from bombline.components.grid import Grid
from bombline.constants import CLEAR_INTERVAL


@dataclass(slots=True)
class ClearQueue:
    """FIFO of cleared cells waiting for their paced pop.

    pending_grid holds the collapsed board computed when the match resolved;
    it replaces the live grid once the queue drains.
    """
    positions: List[Tuple[int, int]] = field(default_factory=list)
    interval: float = CLEAR_INTERVAL
    elapsed: float = 0.0
    pending_grid: Optional[Grid] = None

    @property
    def busy(self) -> bool:
        return bool(self.positions) or self.pending_grid is not None
