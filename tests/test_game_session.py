import random
from collections import Counter

import pytest

from game_session import GameSession
from ticket_generator import validate_ticket
from win_detector import PATTERN_TYPES


def _play_out(session):
    events = []
    while True:
        n, new = session.draw()
        if n is None:
            assert new == []
            return events
        events.extend(new)


def test_ticket_ids_and_valid_tickets():
    session = GameSession(3, rng=random.Random(1))
    assert list(session.tickets) == ["T0001", "T0002", "T0003"]
    assert all(validate_ticket(p.ticket) for p in session.tickets.values())


def test_full_game_reports_each_pattern_once_per_ticket():
    session = GameSession(4, rng=random.Random(21))
    events = _play_out(session)
    counts = Counter((e.ticket_id, e.pattern.type) for e in events)
    assert set(counts) == {(tid, p) for tid in session.tickets for p in PATTERN_TYPES}
    assert all(v == 1 for v in counts.values())
    assert events == session.win_events
    for tid, play in session.tickets.items():
        assert play.marked_count == 15
        by_type = {e.pattern.type: e.call_index for e in events if e.ticket_id == tid}
        assert by_type["early-five"] <= min(by_type[t] for t in PATTERN_TYPES)
        assert by_type["full-house"] == max(by_type.values())
        assert 15 <= by_type["full-house"] <= 90


def test_draw_events_carry_call_index():
    session = GameSession(2, rng=random.Random(5))
    for _ in range(90):
        n, events = session.draw()
        for e in events:
            assert e.call_index == len(session.caller.called_numbers)
            number_cells = [session.tickets[e.ticket_id].ticket[r][c] for r, c in e.pattern.cells]
            assert n in number_cells or e.pattern.type == "early-five"


def test_winners_are_first_event_per_pattern():
    session = GameSession(3, rng=random.Random(8))
    events = _play_out(session)
    winners = session.winners()
    assert set(winners) == set(PATTERN_TYPES)
    for ptype, event in winners.items():
        assert event is next(e for e in events if e.pattern.type == ptype)


def test_reset_keeps_tickets_and_clears_play():
    session = GameSession(2, rng=random.Random(3))
    grids = {tid: p.ticket for tid, p in session.tickets.items()}
    for _ in range(40):
        session.draw()
    session.reset()
    assert {tid: p.ticket for tid, p in session.tickets.items()} == grids
    assert all(p.marked_count == 0 and p.completed == [] for p in session.tickets.values())
    assert session.win_events == []
    assert session.caller.get_state().called_numbers == []
    # a new round plays out normally
    assert len(_play_out(session)) == 2 * len(PATTERN_TYPES)


def test_manual_marking_through_session():
    session = GameSession(1, rng=random.Random(4), auto_mark=False)
    play = session.tickets["T0001"]
    row0 = [(0, c) for c in range(9) if play.ticket[0][c] is not None]
    # uncalled cells cannot be marked
    assert session.toggle_cell("T0001", *row0[0]) == []
    assert play.marked_count == 0

    events = []
    while not all(play.ticket[r][c] in session.caller.called_numbers for r, c in row0):
        session.draw()
    assert play.marked_count == 0
    for r, c in row0:
        events += session.toggle_cell("T0001", r, c)
    assert [e.pattern.type for e in events] == ["early-five", "top-line"]
    assert all(e.ticket_id == "T0001" for e in events)


def test_unknown_ticket_id():
    session = GameSession(1, rng=random.Random(4))
    with pytest.raises(KeyError):
        session.toggle_cell("T9999", 0, 0)


def test_close_stops_listening():
    session = GameSession(1, rng=random.Random(6))
    session.close()
    for _ in range(90):
        n, events = session.draw()
        assert events == []
    assert session.tickets["T0001"].marked_count == 0


def test_needs_at_least_one_ticket():
    with pytest.raises(ValueError):
        GameSession(0)


def test_sessions_do_not_share_state():
    a = GameSession(1, rng=random.Random(1))
    b = GameSession(1, rng=random.Random(1))
    a.draw()
    assert b.caller.get_state().called_numbers == []
    assert b.tickets["T0001"].marked_count == 0


def test_draw_reports_only_its_own_wins():
    session = GameSession(1, rng=random.Random(3))
    for _ in range(60):
        session.caller.pick_random_number()
    earlier = list(session.win_events)
    assert earlier
    n, events = session.draw()
    assert n is not None
    assert all(e.call_index == 61 for e in events)
    assert not any(e in earlier for e in events)


def test_toggle_does_not_pick_up_wins_from_direct_draws():
    session = GameSession(1, rng=random.Random(3))
    for _ in range(90):
        session.caller.pick_random_number()
    assert len(session.win_events) == len(PATTERN_TYPES)
    ticket = session.tickets["T0001"].ticket
    row, col = next((r, c) for r in range(3) for c in range(9) if ticket[r][c] is not None)
    # unmarking never wins anything
    assert session.toggle_cell("T0001", row, col) == []
