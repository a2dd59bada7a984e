from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(slots=True)
class CellLine:
    """Ordered grid positions visited by the attempt in progress.

    Empty whenever no attempt is running.
    """
    visited: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return bool(self.visited)

    @property
    def last(self) -> Tuple[int, int] | None:
        return self.visited[-1] if self.visited else None
