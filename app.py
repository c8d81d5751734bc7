# app.py
"""
Tambola — game screen (Streamlit)
- Admin-key protected host controls (enter key in sidebar)
- New game: ticket count, entry fee / players for the prize pool, auto-mark
- Number caller with themed announcements, number board, recent calls, bands
- Player tickets with manual marking (only called numbers can be marked)
- Prizes: Early Five, Top/Middle/Bottom Line, Full House
- Exports: tickets CSV, ticket PNGs (ZIP), call history CSV
"""

import logging

import streamlit as st

from announcements import announcement_for
from game_session import GameSession
from settings import (ADMIN_KEY, DEFAULT_TICKET_COUNT, MAX_TICKET_COUNT, RECENT_CALLS_SHOWN,
                      TICKET_COLS, TICKET_ROWS, configure_logging)
from ticket_export import (call_history_dataframe, create_tickets_zip, render_ticket_image,
                           tickets_to_dataframe)
from win_detector import DEFAULT_PRIZES, PATTERN_NAMES, PATTERN_TYPES, prize_pool

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Tambola", layout="wide")

# -------------------------
# SECTION-STYLES
# -------------------------
st.markdown(
    """
    <style>
    :root {
        --bg: #f8fbff; --card-bg: #ffffff; --muted: #475569;
        --primary: #0078D4; --border: #e6eef8;
    }
    .stApp { background: var(--bg); color: var(--muted); }
    .card {
        background: var(--card-bg); border-radius: 10px; padding: 14px;
        box-shadow: 0 4px 10px rgba(16,24,40,0.04);
        border: 1px solid var(--border); margin-bottom: 12px;
    }
    .title { font-size: 20px; font-weight:700; color: var(--primary); }
    .section-title { color: var(--primary); font-weight:700; margin-bottom:8px; }
    .num-board { display:grid; grid-template-columns: repeat(10, 1fr); gap:6px; margin-top:8px; }
    .num-tile {
        background: #f1f7ff; border-radius: 8px; padding: 6px; text-align: center;
        font-weight:700; color: var(--primary); border: 1px solid var(--border);
    }
    .num-tile.called { background: linear-gradient(180deg, #e6f2ff, #d7ecff); color: #033a6b; }
    .num-tile.last { border: 1px solid #004a99; box-shadow: 0 8px 30px rgba(0,72,164,0.12); }
    .announce { font-size: 22px; font-weight: 800; color: #033a6b; }
    .small { font-size:12px; color: #60748a; }
    </style>
    """,
    unsafe_allow_html=True,
)

# -------------------------
# SESSION STATE INIT
# -------------------------
st.session_state.setdefault("admin_unlocked", False)
st.session_state.setdefault("last_events", [])
st.session_state.setdefault("entry_fee", 0)
st.session_state.setdefault("player_count", 0)


def start_new_game(ticket_count: int, auto_mark: bool, entry_fee: int, player_count: int):
    old = st.session_state.get("game")
    if old is not None:
        old.close()
    prizes = prize_pool(entry_fee, player_count) if entry_fee and player_count else DEFAULT_PRIZES
    st.session_state.game = GameSession(ticket_count, auto_mark=auto_mark, prizes=prizes)
    st.session_state.last_events = []


if "game" not in st.session_state:
    start_new_game(DEFAULT_TICKET_COUNT, True, 0, 0)

game: GameSession = st.session_state.game


def show_events(events):
    for ev in events:
        st.balloons()
        st.success(f"🎉 {ev.ticket_id} won {ev.pattern.name} (₹{ev.pattern.prize:,}) on call #{ev.call_index}")


# -------------------------
# SIDEBAR: Admin unlock + host controls
# -------------------------
with st.sidebar:
    st.markdown('<div class="card"><div class="title">Tambola — Host</div></div>', unsafe_allow_html=True)
    key = st.text_input("Admin Key", type="password")
    if st.button("Unlock Admin"):
        if key == ADMIN_KEY:
            st.session_state.admin_unlocked = True; st.success("Admin unlocked ✅")
        else:
            logger.warning("Rejected admin unlock attempt"); st.error("Invalid admin key")

    if st.session_state.admin_unlocked:
        st.subheader("New Game")
        gen_n = st.number_input("Tickets", min_value=1, max_value=MAX_TICKET_COUNT, value=len(game.tickets))
        fee = st.number_input("Entry fee (₹)", min_value=0, value=st.session_state.entry_fee)
        players = st.number_input("Players", min_value=0, value=st.session_state.player_count)
        auto = st.checkbox("Auto-mark tickets", value=True)
        if st.button("Start New Game"):
            st.session_state.entry_fee = int(fee); st.session_state.player_count = int(players)
            start_new_game(int(gen_n), auto, int(fee), int(players))
            st.success(f"Generated {int(gen_n)} tickets")
            st.rerun()
        st.markdown("---")
        st.subheader("Number Caller")
        if st.button("Call Random Number"):
            n, events = game.draw()
            if n is None:
                st.warning("All numbers called")
            else:
                st.session_state.last_events = events
        if st.button("Reset Round (keep tickets)"):
            game.reset(); st.session_state.last_events = []; st.success("Called numbers cleared")

# -------------------------
# HEADER + current call
# -------------------------
state = game.caller.get_state()
current = state.current_number
st.markdown('<div class="card"><div class="title">🎲 Tambola</div></div>', unsafe_allow_html=True)
if current is not None:
    st.markdown(f'<div class="card announce">{current} — {announcement_for(current)}</div>', unsafe_allow_html=True)
elif not state.is_active:
    st.info("Game complete — all numbers called")
show_events(st.session_state.last_events)
st.session_state.last_events = []  # celebrate once, not on every rerun

# -------------------------
# Number board + stats
# -------------------------
col_board, col_stats = st.columns([2,1])
with col_board:
    st.markdown('<div class="section-title">Number Board</div>', unsafe_allow_html=True)
    called = set(state.called_numbers)
    nums_html = '<div class="num-board">'
    for n in range(1,91):
        cls = "num-tile"
        if n in called: cls += " called"
        if current and n == current: cls += " last"
        nums_html += f'<div class="{cls}">{n}</div>'
    nums_html += '</div>'
    st.markdown(nums_html, unsafe_allow_html=True)

with col_stats:
    st.markdown('<div class="section-title">Game Stats</div>', unsafe_allow_html=True)
    stats = game.caller.get_game_stats()
    st.write("Numbers called:", stats["total_called"], " · Left:", stats["remaining"])
    st.progress(int(stats["progress_percentage"]))
    if stats["average_call_time"]:
        st.write(f"Avg time between calls: {stats['average_call_time']:.1f}s")
    recent = game.caller.get_recent_calls(RECENT_CALLS_SHOWN)
    st.write("Recent:", ", ".join(str(c.number) for c in recent) if recent else "—")
    for band, nums in game.caller.get_numbers_by_range().items():
        st.markdown(f'<span class="small">{band}: {", ".join(map(str, nums)) or "—"}</span>', unsafe_allow_html=True)

st.markdown('---')

# -------------------------
# Player tickets
# -------------------------
st.markdown('<div class="section-title">Your Tickets</div>', unsafe_allow_html=True)
for tid, play in game.tickets.items():
    won = ", ".join(p.name for p in play.completed)
    st.markdown(f"**{tid}** · {play.marked_count}/15 marked" + (f" · 🏆 {won}" if won else ""))
    for r in range(TICKET_ROWS):
        cols = st.columns(TICKET_COLS)
        for c in range(TICKET_COLS):
            v = play.ticket[r][c]
            with cols[c]:
                if v is None:
                    st.button(" ", key=f"cell_{tid}_{r}_{c}", disabled=True)
                    continue
                label = f"✔ {v}" if play.marked[r][c] else str(v)
                if st.button(label, key=f"cell_{tid}_{r}_{c}", disabled=v not in called):
                    st.session_state.last_events = game.toggle_cell(tid, r, c)
                    st.rerun()

st.markdown('---')

# -------------------------
# Prizes
# -------------------------
st.markdown('<div class="section-title">Prizes</div>', unsafe_allow_html=True)
winners = game.winners()
prizes = next(iter(game.tickets.values())).detector.prizes
for ptype in PATTERN_TYPES:
    ev = winners.get(ptype)
    line = f"**{PATTERN_NAMES[ptype]}** — ₹{prizes.get(ptype, 0):,}"
    if ev:
        st.success(f"{line}: won by {ev.ticket_id} on call #{ev.call_index}")
    else:
        st.write(f"{line}: not yet won")

st.markdown('---')

# -------------------------
# Exports
# -------------------------
st.markdown('<div class="section-title">Exports</div>', unsafe_allow_html=True)
grids = {tid: play.ticket for tid, play in game.tickets.items()}
df = tickets_to_dataframe(grids)
st.dataframe(df)
st.download_button("Download Tickets CSV", df.to_csv(index=False).encode(), "tickets.csv", "text/csv")
if st.button("Prepare Ticket PNGs (ZIP)"):
    st.download_button("Download ZIP", create_tickets_zip(grids), "tickets_images.zip", "application/zip")
if state.call_history:
    hist = call_history_dataframe(state.call_history)
    st.download_button("Download Call History CSV", hist.to_csv(index=False).encode(), "calls.csv", "text/csv")
sel = st.selectbox("Preview ticket image", list(grids.keys()))
if sel:
    st.image(render_ticket_image(grids[sel], sel, game.tickets[sel].marked))
