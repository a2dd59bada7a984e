from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple


class PieceColor(Enum):
    PINK = "pink"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    ORANGE = "orange"
    PURPLE = "purple"
    CYAN = "cyan"
    RED = "red"


class PieceShape(Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    X = "x"
    PLUS = "plus"
    DIAMOND = "diamond"
    # Reserved for the bomb marker; never rolled for ordinary pieces.
    BOMB = "bomb"


class PieceSound(Enum):
    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"
    G = "g"


COLOR_RGB = {
    PieceColor.PINK: (255, 20, 147),
    PieceColor.GREEN: (57, 255, 20),
    PieceColor.BLUE: (77, 77, 255),
    PieceColor.YELLOW: (255, 255, 0),
    PieceColor.ORANGE: (255, 153, 51),
    PieceColor.PURPLE: (199, 21, 133),
    PieceColor.CYAN: (0, 255, 255),
    PieceColor.RED: (255, 16, 60),
}

SPAWNABLE_SHAPES: Tuple[PieceShape, ...] = tuple(shape for shape in PieceShape if shape is not PieceShape.BOMB)


@dataclass(frozen=True, slots=True)
class Piece:
    """A grid piece with three matchable attributes.

    The id is stable for the piece's whole life, including rerolls; a piece's
    position is never stored here and is found by scanning the grid.
    """
    color: PieceColor
    shape: PieceShape
    sound: PieceSound
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def shares_attribute(self, other: Piece) -> bool:
        return self.similarity(other) > 0

    def similarity(self, other: Piece | None) -> int:
        if other is None:
            return 0
        return (
            int(self.color == other.color)
            + int(self.shape == other.shape)
            + int(self.sound == other.sound)
        )

    def rerolled(self, rng: random.Random) -> Piece:
        """Return this piece with a fresh color and shape; id and sound are kept."""
        return replace(self, color=rng.choice(list(PieceColor)), shape=rng.choice(SPAWNABLE_SHAPES))

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return COLOR_RGB[self.color]


def random_piece(rng: random.Random) -> Piece:
    # Ids come from the seeded rng so whole boards are reproducible in tests.
    return Piece(
        color=rng.choice(list(PieceColor)),
        shape=rng.choice(SPAWNABLE_SHAPES),
        sound=rng.choice(list(PieceSound)),
        id=uuid.UUID(int=rng.getrandbits(128), version=4),
    )
