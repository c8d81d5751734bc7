# ticket_generator.py
"""
Tambola ticket generation and validation.

A ticket is a 3 x 9 grid of numbers with None for blank cells:
- exactly 5 numbers in every row (15 per ticket)
- column c only holds c*10+1 .. c*10+10 (the last column is 81..90)
- no number repeats on a ticket
- numbers in a column ascend from the top row to the bottom row
"""

import logging
import random
from typing import List, Optional, Set, Tuple

from settings import NUMBERS_PER_ROW, TICKETS_PER_SHEET, TICKET_COLS, TICKET_ROWS

logger = logging.getLogger(__name__)

Ticket = List[List[Optional[int]]]
MarkedState = List[List[bool]]

COLUMN_RANGES = [(1,10),(11,20),(21,30),(31,40),(41,50),(51,60),(61,70),(71,80),(81,90)]
MAX_GENERATION_ATTEMPTS = 100

_default_rng = random.Random()


class TicketGenerationError(RuntimeError):
    """No valid ticket could be built within the attempt limit."""


def column_range(col: int) -> Tuple[int, int]:
    return COLUMN_RANGES[col]


def ticket_numbers(ticket: Ticket) -> Set[int]:
    return set(n for row in ticket for n in row if n is not None)


def empty_marked_state() -> MarkedState:
    return [[False] * TICKET_COLS for _ in range(TICKET_ROWS)]


def _row_count(row) -> int:
    return sum(1 for x in row if x is not None)


# -------------------------
# Generation steps
# -------------------------
def _place_columns(rng: random.Random) -> Ticket:
    # 1-3 numbers per column, each on a distinct random row
    grid = [[None] * TICKET_COLS for _ in range(TICKET_ROWS)]
    for col in range(TICKET_COLS):
        lo, hi = COLUMN_RANGES[col]
        cnt = rng.choice((1, 2, 3))
        rows = rng.sample(range(TICKET_ROWS), cnt)
        nums = rng.sample(range(lo, hi + 1), cnt)
        for r, n in zip(rows, nums):
            grid[r][col] = n
    return grid


def _balance_rows(grid: Ticket, rng: random.Random) -> bool:
    """Fill or clear random cells until every row holds 5 numbers.

    Returns False when a short row has no empty cell left whose column still
    has an unused number.
    """
    for row in grid:
        while _row_count(row) < NUMBERS_PER_ROW:
            used = ticket_numbers(grid)
            candidates = []
            for col, value in enumerate(row):
                if value is not None:
                    continue
                lo, hi = COLUMN_RANGES[col]
                pool = [n for n in range(lo, hi + 1) if n not in used]
                if pool:
                    candidates.append((col, pool))
            if not candidates:
                return False
            col, pool = rng.choice(candidates)
            row[col] = rng.choice(pool)
        while _row_count(row) > NUMBERS_PER_ROW:
            filled = [c for c, v in enumerate(row) if v is not None]
            row[rng.choice(filled)] = None
    return True


def _sort_columns(grid: Ticket) -> None:
    # reorders values inside each column only; blank positions stay put
    for col in range(TICKET_COLS):
        rows = [r for r in range(TICKET_ROWS) if grid[r][col] is not None]
        values = sorted(grid[r][col] for r in rows)
        for r, v in zip(rows, values):
            grid[r][col] = v


def generate_single_ticket(rng: Optional[random.Random] = None,
                           max_attempts: int = MAX_GENERATION_ATTEMPTS) -> Ticket:
    if rng is None:
        rng = _default_rng
    for attempt in range(1, max_attempts + 1):
        grid = _place_columns(rng)
        if _balance_rows(grid, rng):
            _sort_columns(grid)
            if validate_ticket(grid) and columns_ascending(grid):
                return grid
        logger.debug("Ticket attempt %d rejected, regenerating", attempt)
    raise TicketGenerationError(f"Could not build a valid ticket in {max_attempts} attempts")


def generate_multiple_tickets(count: int, rng: Optional[random.Random] = None) -> List[Ticket]:
    if count < 0:
        raise ValueError(f"Ticket count must be >= 0, got {count}")
    tickets = [generate_single_ticket(rng) for _ in range(count)]
    logger.debug("Generated %d tickets", len(tickets))
    return tickets


def generate_ticket_sheets(count: int, tickets_per_sheet: int = TICKETS_PER_SHEET,
                           rng: Optional[random.Random] = None) -> List[List[Ticket]]:
    """Generate ``count`` tickets grouped into printable sheets."""
    if tickets_per_sheet < 1:
        raise ValueError(f"tickets_per_sheet must be >= 1, got {tickets_per_sheet}")
    tickets = generate_multiple_tickets(count, rng)
    return [tickets[i:i + tickets_per_sheet] for i in range(0, len(tickets), tickets_per_sheet)]


# -------------------------
# Validation
# -------------------------
def validate_ticket(ticket) -> bool:
    """Check grid shape, 5 numbers per row, column ranges and duplicates.

    Never raises: anything malformed is simply not a valid ticket.
    """
    if not isinstance(ticket, (list, tuple)) or len(ticket) != TICKET_ROWS:
        return False
    seen = set()
    for row in ticket:
        if not isinstance(row, (list, tuple)) or len(row) != TICKET_COLS:
            return False
        if _row_count(row) != NUMBERS_PER_ROW:
            return False
        for col, value in enumerate(row):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            lo, hi = COLUMN_RANGES[col]
            if not lo <= value <= hi:
                return False
            if value in seen:
                return False
            seen.add(value)
    return True


def columns_ascending(ticket: Ticket) -> bool:
    for col in range(TICKET_COLS):
        values = [ticket[r][col] for r in range(TICKET_ROWS) if ticket[r][col] is not None]
        if any(a >= b for a, b in zip(values, values[1:])):
            return False
    return True
