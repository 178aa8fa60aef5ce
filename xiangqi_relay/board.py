"""Board state store: the shared 10x9 Xiangqi grid.

Row 0 is black's back rank, row 9 is red's. The board never checks piece
movement rules, turn order or check; it only relocates what it is told to.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from xiangqi_relay.exceptions import InvalidMoveError

BOARD_ROWS = 10
BOARD_COLS = 9


class Side(str, Enum):
    RED = 'red'
    BLACK = 'black'


class PieceKind(str, Enum):
    GENERAL = 'K'
    ADVISOR = 'A'
    ELEPHANT = 'B'
    HORSE = 'N'
    CHARIOT = 'R'
    CANNON = 'C'
    SOLDIER = 'P'


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    side: Side

    def to_dict(self) -> Dict[str, str]:
        return {'type': self.kind.value, 'color': self.side.value}


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return 0 <= self.row < BOARD_ROWS and 0 <= self.col < BOARD_COLS


@dataclass(frozen=True)
class Move:
    source: Square
    target: Square


BACK_RANK = (
    PieceKind.CHARIOT,
    PieceKind.HORSE,
    PieceKind.ELEPHANT,
    PieceKind.ADVISOR,
    PieceKind.GENERAL,
    PieceKind.ADVISOR,
    PieceKind.ELEPHANT,
    PieceKind.HORSE,
    PieceKind.CHARIOT,
)
CANNON_COLS = (1, 7)
SOLDIER_COLS = (0, 2, 4, 6, 8)

Grid = List[List[Optional[Piece]]]


def _black_half() -> Dict[Square, PieceKind]:
    """Starting squares of black's pieces; red's are the same rows mirrored."""
    layout: Dict[Square, PieceKind] = {}
    for col, kind in enumerate(BACK_RANK):
        layout[Square(0, col)] = kind
    for col in CANNON_COLS:
        layout[Square(2, col)] = PieceKind.CANNON
    for col in SOLDIER_COLS:
        layout[Square(3, col)] = PieceKind.SOLDIER
    return layout


def starting_grid() -> Grid:
    grid: Grid = [[None] * BOARD_COLS for _ in range(BOARD_ROWS)]
    for square, kind in _black_half().items():
        grid[square.row][square.col] = Piece(kind, Side.BLACK)
        grid[BOARD_ROWS - 1 - square.row][square.col] = Piece(kind, Side.RED)
    return grid


class Board:
    def __init__(self):
        self.grid: Grid = starting_grid()

    def reset(self) -> None:
        """Replace the whole grid with the canonical starting layout."""
        self.grid = starting_grid()

    def piece_at(self, square: Square) -> Optional[Piece]:
        if not square.is_within_bounds():
            raise InvalidMoveError(f"Square {square} is outside the board")
        return self.grid[square.row][square.col]

    def apply(self, move: Move) -> bool:
        """Relocate the piece on ``move.source`` to ``move.target``.

        Whatever stood on the target is discarded. Returns False, leaving the
        board untouched, when the source is empty or equals the target.
        """
        for square in (move.source, move.target):
            if not square.is_within_bounds():
                raise InvalidMoveError(f"Square {square} is outside the board")
        piece = self.grid[move.source.row][move.source.col]
        # a piece moved onto its own square stays put, it is never removed
        if piece is None or move.source == move.target:
            return False
        self.grid[move.target.row][move.target.col] = piece
        self.grid[move.source.row][move.source.col] = None
        return True

    def snapshot(self) -> Tuple[Tuple[Optional[Piece], ...], ...]:
        return tuple(tuple(row) for row in self.grid)

    def to_dict(self) -> List[List[Optional[Dict[str, Any]]]]:
        return [[piece.to_dict() if piece else None for piece in row] for row in self.grid]

    def render(self) -> str:
        """Text grid, upper-case letters for red and lower-case for black."""
        lines = []
        for row in self.grid:
            cells = []
            for piece in row:
                if piece is None:
                    cells.append('.')
                elif piece.side == Side.RED:
                    cells.append(piece.kind.value)
                else:
                    cells.append(piece.kind.value.lower())
            lines.append(' '.join(cells))
        return '\n'.join(lines)
