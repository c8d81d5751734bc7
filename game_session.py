# game_session.py
"""
One game of Tambola: a number caller plus the tickets in play.

The session listens to its own caller; every new draw is pushed to each
ticket, and patterns the tickets newly complete are collected as WinEvents.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from number_caller import CallerState, NumberCaller
from ticket_generator import generate_multiple_tickets
from win_detector import TicketPlay, WinPattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WinEvent:
    ticket_id: str
    pattern: WinPattern
    call_index: int


class GameSession:
    def __init__(self, ticket_count: int, rng: Optional[random.Random] = None,
                 clock: Optional[Callable] = None, auto_mark: bool = True,
                 prizes: Optional[Dict[str, int]] = None, ticket_prefix: str = "T"):
        if ticket_count < 1:
            raise ValueError(f"ticket_count must be >= 1, got {ticket_count}")
        self.caller = NumberCaller(rng=rng, clock=clock)
        self.tickets: Dict[str, TicketPlay] = {}
        for i, ticket in enumerate(generate_multiple_tickets(ticket_count, rng), start=1):
            self.tickets[f"{ticket_prefix}{i:04d}"] = TicketPlay(ticket, auto_mark=auto_mark, prizes=prizes)
        self.win_events: List[WinEvent] = []
        self._pending: List[WinEvent] = []
        self._seen_calls = 0
        self._unsubscribe = self.caller.subscribe(self._on_caller_update)
        logger.info("Game session started with %d tickets", len(self.tickets))

    def _on_caller_update(self, state: CallerState) -> None:
        if len(state.called_numbers) <= self._seen_calls:
            # reset or exhausted-pool notification, nothing new to mark
            self._seen_calls = len(state.called_numbers)
            return
        self._seen_calls = len(state.called_numbers)
        # only the wins of the latest update are handed back to callers
        self._pending = []
        number = state.current_number
        for tid, play in self.tickets.items():
            for pattern in play.on_number_called(number, state.called_numbers):
                self._record(tid, pattern, self._seen_calls)

    def _record(self, ticket_id: str, pattern: WinPattern, call_index: int) -> WinEvent:
        event = WinEvent(ticket_id, pattern, call_index)
        self.win_events.append(event)
        self._pending.append(event)
        logger.info("%s completed %s on call #%d", ticket_id, pattern.name, call_index)
        return event

    def _take_pending(self) -> List[WinEvent]:
        events, self._pending = self._pending, []
        return events

    def draw(self) -> Tuple[Optional[int], List[WinEvent]]:
        self._pending = []
        number = self.caller.pick_random_number()
        return number, self._take_pending()

    def toggle_cell(self, ticket_id: str, row: int, col: int) -> List[WinEvent]:
        play = self.tickets[ticket_id]
        self._pending = []
        called = self.caller.called_numbers
        for pattern in play.toggle_cell(row, col, called):
            self._record(ticket_id, pattern, len(called))
        return self._take_pending()

    def reset(self) -> None:
        """Start a new round with the same tickets."""
        for play in self.tickets.values():
            play.reset()
        self.win_events = []
        self._pending = []
        self.caller.reset()

    def winners(self) -> Dict[str, WinEvent]:
        first: Dict[str, WinEvent] = {}
        for event in self.win_events:
            first.setdefault(event.pattern.type, event)
        return first

    def close(self) -> None:
        self._unsubscribe()
