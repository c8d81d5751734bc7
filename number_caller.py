# number_caller.py
"""
Number caller: draws 1..90 one at a time without replacement.

The caller is Active while numbers remain and Complete once the pool is
empty; only reset() makes it Active again. Every draw and reset notifies
subscribers synchronously with a snapshot of the new state.
"""

import logging
import random
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Set

logger = logging.getLogger(__name__)

TOTAL_NUMBERS = 90
# display grouping only, unrelated to ticket columns
DISPLAY_BANDS = [(1,18),(19,36),(37,54),(55,72),(73,90)]


@dataclass(frozen=True)
class NumberCall:
    number: int
    timestamp: datetime
    call_index: int


@dataclass
class CallerState:
    called_numbers: List[int] = field(default_factory=list)
    current_number: Optional[int] = None
    available_numbers: Set[int] = field(default_factory=lambda: set(range(1, TOTAL_NUMBERS + 1)))
    is_active: bool = True
    call_history: List[NumberCall] = field(default_factory=list)

    def copy(self) -> "CallerState":
        return CallerState(
            called_numbers=list(self.called_numbers),
            current_number=self.current_number,
            available_numbers=set(self.available_numbers),
            is_active=self.is_active,
            call_history=list(self.call_history),
        )


Listener = Callable[[CallerState], None]


class NumberCaller:
    def __init__(self, rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock if clock is not None else datetime.now
        self._state = CallerState()
        self._listeners: List[List[Listener]] = []

    # -------------------------
    # Mutations
    # -------------------------
    def pick_random_number(self) -> Optional[int]:
        state = self._state
        if not state.available_numbers:
            if state.is_active:
                logger.info("All %d numbers called", TOTAL_NUMBERS)
            state.is_active = False
            self._notify()
            return None

        # sorted so a seeded rng gives the same sequence every run
        n = self._rng.choice(sorted(state.available_numbers))
        state.available_numbers.discard(n)
        state.called_numbers.append(n)
        state.current_number = n
        state.call_history.append(NumberCall(n, self._clock(), len(state.called_numbers)))
        if not state.available_numbers:
            state.is_active = False
            logger.info("All %d numbers called", TOTAL_NUMBERS)
        logger.debug("Called %d (call #%d)", n, len(state.called_numbers))
        self._notify()
        return n

    def reset(self) -> None:
        self._state = CallerState()
        logger.info("Number caller reset")
        self._notify()

    # -------------------------
    # Subscriptions
    # -------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        token = [listener]
        self._listeners.append(token)

        def unsubscribe() -> None:
            # identity match so a listener registered twice only loses this registration
            self._listeners = [t for t in self._listeners if t is not token]

        return unsubscribe

    def _notify(self) -> None:
        for token in list(self._listeners):
            # skip listeners removed by an earlier listener in this round
            if not any(t is token for t in self._listeners):
                continue
            token[0](self._state.copy())

    # -------------------------
    # Queries
    # -------------------------
    def get_state(self) -> CallerState:
        return self._state.copy()

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def current_number(self) -> Optional[int]:
        return self._state.current_number

    @property
    def called_numbers(self) -> List[int]:
        return list(self._state.called_numbers)

    def is_number_called(self, number: int) -> bool:
        return number in self._state.called_numbers

    def get_recent_calls(self, count: int = 5) -> List[NumberCall]:
        if count <= 0:
            return []
        return list(reversed(self._state.call_history[-count:]))

    def get_numbers_by_range(self) -> Dict[str, List[int]]:
        bands = OrderedDict((f"{lo}-{hi}", []) for lo, hi in DISPLAY_BANDS)
        for n in self._state.called_numbers:
            for lo, hi in DISPLAY_BANDS:
                if lo <= n <= hi:
                    bands[f"{lo}-{hi}"].append(n)
                    break
        return bands

    def get_game_stats(self) -> dict:
        state = self._state
        history = state.call_history
        return {
            "total_called": len(state.called_numbers),
            "remaining": len(state.available_numbers),
            "progress_percentage": len(state.called_numbers) / TOTAL_NUMBERS * 100,
            "is_complete": not state.is_active and not state.available_numbers,
            "average_call_time": self._average_call_time(),
            "game_start_time": history[0].timestamp if history else None,
            "last_call_time": history[-1].timestamp if history else None,
        }

    def _average_call_time(self) -> float:
        """Mean seconds between consecutive calls, 0.0 with fewer than two calls."""
        history = self._state.call_history
        if len(history) < 2:
            return 0.0
        total = sum((b.timestamp - a.timestamp).total_seconds() for a, b in zip(history, history[1:]))
        return total / (len(history) - 1)
