# win_detector.py
"""
Prize pattern detection for a single ticket.

Patterns: Early Five, Top/Middle/Bottom Line, Full House. A pattern is
reported once, the first time it becomes satisfied, and stays won for the
rest of the game even if cells are unmarked afterwards.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from settings import TICKET_COLS, TICKET_ROWS
from ticket_generator import MarkedState, Ticket, empty_marked_state

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

EARLY_FIVE_COUNT = 5
LINE_TYPES = ("top-line", "middle-line", "bottom-line")
PATTERN_TYPES = ("early-five",) + LINE_TYPES + ("full-house",)

PATTERN_NAMES = {
    "early-five": "Early Five",
    "top-line": "Top Line",
    "middle-line": "Middle Line",
    "bottom-line": "Bottom Line",
    "full-house": "Full House",
}
PATTERN_DESCRIPTIONS = {
    "early-five": "First 5 numbers marked",
    "top-line": "Complete top line",
    "middle-line": "Complete middle line",
    "bottom-line": "Complete bottom line",
    "full-house": "All numbers marked",
}

# fixed amounts (rupees) used when no pool is configured
DEFAULT_PRIZES = {
    "early-five": 500,
    "top-line": 800,
    "middle-line": 800,
    "bottom-line": 800,
    "full-house": 2500,
}
# percent of the collected entry fees
PRIZE_SHARES = {
    "full-house": 50,
    "top-line": 15,
    "middle-line": 15,
    "bottom-line": 15,
    "early-five": 5,
}


@dataclass(frozen=True)
class WinPattern:
    type: str
    name: str
    description: str
    cells: Tuple[Cell, ...]
    prize: int


def prize_pool(entry_fee, player_count: int) -> Dict[str, int]:
    """Split entry_fee * player_count across the five patterns."""
    if entry_fee < 0 or player_count < 0:
        raise ValueError("entry_fee and player_count must be >= 0")
    total = entry_fee * player_count
    return {ptype: math.floor(total * PRIZE_SHARES[ptype] / 100) for ptype in PATTERN_TYPES}


def _pattern(ptype: str, cells: Sequence[Cell], prizes: Dict[str, int]) -> WinPattern:
    return WinPattern(
        type=ptype,
        name=PATTERN_NAMES[ptype],
        description=PATTERN_DESCRIPTIONS[ptype],
        cells=tuple(cells),
        prize=prizes.get(ptype, 0),
    )


def marked_cells_in_call_order(ticket: Ticket, marked: MarkedState,
                               called_numbers: Sequence[int]) -> List[Cell]:
    """Marked number cells ordered by when their number was called.

    Cells whose number was never called sort last, by value.
    """
    order = {n: i for i, n in enumerate(called_numbers)}
    cells = [(r, c) for r in range(TICKET_ROWS) for c in range(TICKET_COLS)
             if ticket[r][c] is not None and marked[r][c]]
    return sorted(cells, key=lambda rc: (order.get(ticket[rc[0]][rc[1]], len(order)), ticket[rc[0]][rc[1]]))


def satisfied_patterns(ticket: Ticket, marked: MarkedState, called_numbers: Sequence[int],
                       prizes: Optional[Dict[str, int]] = None) -> List[WinPattern]:
    """Every pattern the current marks satisfy, in PATTERN_TYPES order."""
    if prizes is None:
        prizes = DEFAULT_PRIZES
    found = []

    ordered = marked_cells_in_call_order(ticket, marked, called_numbers)
    if len(ordered) >= EARLY_FIVE_COUNT:
        found.append(_pattern("early-five", ordered[:EARLY_FIVE_COUNT], prizes))

    all_cells = []
    for r, ptype in enumerate(LINE_TYPES):
        cells = [(r, c) for c in range(TICKET_COLS) if ticket[r][c] is not None]
        all_cells.extend(cells)
        # an empty row can never be a line
        if cells and all(marked[rr][cc] for rr, cc in cells):
            found.append(_pattern(ptype, cells, prizes))

    if all_cells and all(marked[r][c] for r, c in all_cells):
        found.append(_pattern("full-house", all_cells, prizes))
    return found


class WinDetector:
    """Tracks which patterns one ticket has already won this game."""

    def __init__(self, prizes: Optional[Dict[str, int]] = None):
        self.prizes = dict(DEFAULT_PRIZES if prizes is None else prizes)
        self._completed: Dict[str, WinPattern] = {}

    @property
    def completed(self) -> List[WinPattern]:
        return list(self._completed.values())

    def is_completed(self, ptype: str) -> bool:
        return ptype in self._completed

    def evaluate(self, ticket: Ticket, marked: MarkedState,
                 called_numbers: Sequence[int]) -> List[WinPattern]:
        """Return the patterns newly completed by this update, all at once."""
        newly = [p for p in satisfied_patterns(ticket, marked, called_numbers, self.prizes)
                 if p.type not in self._completed]
        for p in newly:
            self._completed[p.type] = p
        if newly:
            logger.debug("Newly completed: %s", ", ".join(p.type for p in newly))
        return newly

    def reset(self) -> None:
        self._completed.clear()


class TicketPlay:
    """One player's ticket during a game: marks plus won patterns."""

    def __init__(self, ticket: Ticket, auto_mark: bool = True,
                 prizes: Optional[Dict[str, int]] = None):
        self.ticket = ticket
        self.auto_mark = auto_mark
        self.marked = empty_marked_state()
        self.detector = WinDetector(prizes)

    def find_cell(self, number: int) -> Optional[Cell]:
        for r in range(TICKET_ROWS):
            for c in range(TICKET_COLS):
                if self.ticket[r][c] == number:
                    return r, c
        return None

    def on_number_called(self, number: int, called_numbers: Sequence[int]) -> List[WinPattern]:
        if self.auto_mark:
            cell = self.find_cell(number)
            if cell is not None:
                r, c = cell
                self.marked[r][c] = True
        return self.detector.evaluate(self.ticket, self.marked, called_numbers)

    def toggle_cell(self, row: int, col: int, called_numbers: Sequence[int]) -> List[WinPattern]:
        """Manual click. Blank or not-yet-called cells are ignored."""
        if not (0 <= row < TICKET_ROWS and 0 <= col < TICKET_COLS):
            return []
        value = self.ticket[row][col]
        if value is None or value not in called_numbers:
            return []
        self.marked[row][col] = not self.marked[row][col]
        return self.detector.evaluate(self.ticket, self.marked, called_numbers)

    @property
    def marked_count(self) -> int:
        return sum(1 for r in range(TICKET_ROWS) for c in range(TICKET_COLS)
                   if self.ticket[r][c] is not None and self.marked[r][c])

    @property
    def completed(self) -> List[WinPattern]:
        return self.detector.completed

    def is_winning_cell(self, row: int, col: int) -> Optional[str]:
        for pattern in self.detector.completed:
            if (row, col) in pattern.cells:
                return pattern.type
        return None

    def reset(self) -> None:
        self.marked = empty_marked_state()
        self.detector.reset()
