from woodpuzzle.models.board import DIRECTIONS, Board, CapacityError
from woodpuzzle.models.piece import Match, Piece, shape_code, shape_size
from woodpuzzle.models.puzzle import REFERENCE_PUZZLE, PieceSpec, PuzzleSpec

__all__ = [
    "Board",
    "CapacityError",
    "DIRECTIONS",
    "Match",
    "Piece",
    "PieceSpec",
    "PuzzleSpec",
    "REFERENCE_PUZZLE",
    "shape_code",
    "shape_size",
]
