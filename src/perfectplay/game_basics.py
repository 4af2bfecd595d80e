"""
Game basics: board representation, parsing, rules, winner/draw checks, validity.
Teaching notes:
- State is a list of 9 cells: 0=empty, 1=X, 2=O. X always starts.
- A "ply" is a half-move (one player's turn).
- Valid states have counts either equal (X to move) or X has one more (O to move).
"""
from typing import List, Optional, Sequence, Tuple

EMPTY = 0
X = 1
O = 2

# rows, then columns, then diagonals
WIN_PATTERNS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

_GLYPHS = {
    '0': EMPTY, '.': EMPTY, '-': EMPTY, '_': EMPTY, ' ': EMPTY,
    '1': X, 'X': X, 'x': X,
    '2': O, 'O': O, 'o': O,
}
_SYMBOLS = {EMPTY: ' ', X: 'X', O: 'O'}


class InvalidBoardError(ValueError):
    """Raised for malformed board text or boards no legal game can reach."""


def empty_board() -> List[int]:
    return [EMPTY] * 9


def opponent(player: int) -> int:
    return O if player == X else X


def player_name(player: int) -> str:
    return {X: 'X', O: 'O'}.get(player, '-')


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in board)


def parse_board(text: str) -> List[int]:
    """Parse a 9-character board string.

    Accepts digits (``100020000``) as well as glyphs (``X...O....``).
    Raises InvalidBoardError on anything else.
    """
    raw = text.strip('\n\r')
    if len(raw) != 9:
        raise InvalidBoardError(f"Board must have exactly 9 cells, got {len(raw)}: {text!r}")
    try:
        return [_GLYPHS[c] for c in raw]
    except KeyError as e:
        raise InvalidBoardError(f"Unknown cell glyph {e.args[0]!r} in board {text!r}") from None


def check_shape(board: Sequence[int]) -> None:
    if len(board) != 9:
        raise InvalidBoardError(f"Board must have exactly 9 cells, got {len(board)}")
    for v in board:
        if type(v) is not int or v not in (EMPTY, X, O):
            raise InvalidBoardError(f"Cell values must be 0, 1 or 2, got {v!r}")


def get_winner(board: Sequence[int]) -> int:
    for a, b, c in WIN_PATTERNS:
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v
    return EMPTY


def is_draw(board: Sequence[int]) -> bool:
    return EMPTY not in board and get_winner(board) == EMPTY


def is_terminal(board: Sequence[int]) -> bool:
    return get_winner(board) != EMPTY or EMPTY not in board


def legal_moves(board: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    cells = list(board)
    return cells.count(X), cells.count(O)


def next_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O


def _count_wins(board: Sequence[int], player: int) -> int:
    return sum(1 for pat in WIN_PATTERNS if all(board[i] == player for i in pat))


def board_problem(board: Sequence[int]) -> Optional[str]:
    """Describe why a board is unreachable, or return None if it is fine."""
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return f"impossible piece counts X={x_count} O={o_count}"
    x_wins = _count_wins(board, X)
    o_wins = _count_wins(board, O)
    if x_wins and o_wins:
        return "both players have a completed line"
    if x_wins and x_count != o_count + 1:
        return "X has a line but O moved after it"
    if o_wins and x_count != o_count:
        return "O has a line but X moved after it"
    return None


def is_valid_state(board: Sequence[int]) -> bool:
    if len(board) != 9 or any(type(v) is not int or v not in (EMPTY, X, O) for v in board):
        return False
    return board_problem(board) is None


def validate_board(board: Sequence[int]) -> None:
    check_shape(board)
    problem = board_problem(board)
    if problem is not None:
        raise InvalidBoardError(f"Unreachable board {serialize_board(board)}: {problem}")


def pretty(board: Sequence[int]) -> str:
    s = [_SYMBOLS[v] for v in board]
    rows = ['|'.join(s[r * 3:r * 3 + 3]) for r in range(3)]
    return '\n-+-+-\n'.join(rows)
