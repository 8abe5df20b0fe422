"""Board representation, win detection and heuristic scoring."""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 4
GOAL = 3
ALLOW_EXCEED = True
N_GRIDS = BOARD_SIZE * BOARD_SIZE

EMPTY = " "
DRAW = "D"
PLAYERS = ("X", "O")

if not 0 < BOARD_SIZE <= 26:
    raise ValueError("board size must be within 1..26")
if not 0 < GOAL <= BOARD_SIZE:
    raise ValueError("goal must be within 1..BOARD_SIZE")


@dataclass(frozen=True)
class Line:
    """A direction on the board and the range of its segment start cells."""

    i_shift: int
    j_shift: int
    i_lower_bound: int
    j_lower_bound: int
    i_upper_bound: int
    j_upper_bound: int

    def starts(self):
        """Yield every (i, j) cell where a segment of GOAL cells can begin."""
        for i in range(self.i_lower_bound, self.i_upper_bound):
            for j in range(self.j_lower_bound, self.j_upper_bound):
                yield i, j

    def cells(self, i: int, j: int, length: int = GOAL):
        """Yield board indices of the segment starting at (i, j)."""
        for k in range(length):
            yield get_index(i + k * self.i_shift, j + k * self.j_shift)


LINES = (
    Line(1, 0, 0, 0, BOARD_SIZE - GOAL + 1, BOARD_SIZE),  # column
    Line(0, 1, 0, 0, BOARD_SIZE, BOARD_SIZE - GOAL + 1),  # row
    Line(1, 1, 0, 0, BOARD_SIZE - GOAL + 1, BOARD_SIZE - GOAL + 1),  # primary
    Line(1, -1, 0, GOAL - 1, BOARD_SIZE - GOAL + 1, BOARD_SIZE),  # secondary
)


def get_index(i: int, j: int) -> int:
    return i * BOARD_SIZE + j


def get_col(index: int) -> int:
    return index % BOARD_SIZE


def get_row(index: int) -> int:
    return index // BOARD_SIZE


def new_table() -> list[str]:
    """Return an empty board."""
    return [EMPTY] * N_GRIDS


def other_player(player: str) -> str:
    """Return the opponent of ``player``."""
    if player == "X":
        return "O"
    if player == "O":
        return "X"
    raise ValueError(f"not a player: {player!r}")


def _lookup(table, i: int, j: int, default: str) -> str:
    if 0 <= i < BOARD_SIZE and 0 <= j < BOARD_SIZE:
        return table[get_index(i, j)]
    return default


def _segment_winner(table, i: int, j: int, line: Line) -> str:
    last = table[get_index(i, j)]
    if last == EMPTY:
        return EMPTY
    if any(table[idx] != last for idx in line.cells(i, j)):
        return EMPTY
    if not ALLOW_EXCEED:
        before = _lookup(table, i - line.i_shift, j - line.j_shift, EMPTY)
        after = _lookup(
            table, i + GOAL * line.i_shift, j + GOAL * line.j_shift, EMPTY
        )
        if last in (before, after):
            return EMPTY
    return last


def check_win(table) -> str:
    """Return the winner, 'D' for a draw, or ' ' if the game goes on."""
    for line in LINES:
        for i, j in line.starts():
            winner = _segment_winner(table, i, j, line)
            if winner != EMPTY:
                return winner
    if EMPTY in table:
        return EMPTY
    return DRAW


def calculate_win_value(win: str, player: str) -> float:
    """Return 1.0 for a win of ``player``, 0.0 for a loss, 0.5 otherwise."""
    if win == player:
        return 1.0
    if player in PLAYERS and win == other_player(player):
        return 0.0
    return 0.5


def available_moves(table) -> list[int]:
    """Return the indices of empty cells in ascending order."""
    return [i for i, cell in enumerate(table) if cell == EMPTY]


def eval_line_segment_score(table, player: str, i: int, j: int, line: Line) -> int:
    """Score one segment: powers of ten for one side's marks, 0 if mixed."""
    score = 0
    for idx in line.cells(i, j):
        curr = table[idx]
        if curr == player:
            if score < 0:
                return 0
            score = score * 10 if score else 1
        elif curr != EMPTY:
            if score > 0:
                return 0
            score = score * 10 if score else -1
    return score


def get_score(table, player: str) -> int:
    """Heuristic value of the board from the point of view of ``player``."""
    return sum(
        eval_line_segment_score(table, player, i, j, line)
        for line in LINES
        for i, j in line.starts()
    )


def render_board(table) -> str:
    """Return the board drawn with ANSI colours, with row and column labels."""
    if BOARD_SIZE < 10:
        label_width = 2
    elif BOARD_SIZE < 100:
        label_width = 3
    else:
        label_width = 4
    out = []
    for i in range(BOARD_SIZE):
        parts = [f"{i + 1:>{label_width}} | "]
        for j in range(BOARD_SIZE):
            parts.append("\x1b[47m" if (i + j) & 1 else "\x1b[107m")
            cell = table[get_index(i, j)]
            if cell == "O":
                parts.append("\x1b[31m ○ \x1b[39m")
            elif cell == "X":
                parts.append("\x1b[34m × \x1b[39m")
            else:
                parts.append("   ")
            parts.append("\x1b[49m")
        out.append("".join(parts) + "\n")
    extra = "-" * (label_width - 2)
    out.append(extra + "---+-" + "---" * BOARD_SIZE + "\n")
    header = " " * (label_width - 2) + "    "
    header += "".join(f" {chr(ord('A') + c):>2}" for c in range(BOARD_SIZE))
    out.append(header + "\n")
    return "".join(out)