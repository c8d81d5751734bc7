from streamlit.testing.v1 import AppTest

from game_session import WinEvent
from win_detector import WinPattern


def _won_messages(at):
    return [s.value for s in at.success if " won " in s.value]


def test_win_celebrated_once():
    at = AppTest.from_file("../app.py", default_timeout=30)
    at.run()
    assert _won_messages(at) == []

    pattern = WinPattern("top-line", "Top Line", "Complete top line", ((0, 0),), 800)
    at.session_state["last_events"] = [WinEvent("T0001", pattern, 12)]
    at.run()
    assert _won_messages(at) == ["🎉 T0001 won Top Line (₹800) on call #12"]

    # any later interaction reruns the script without repeating the message
    at.run()
    assert _won_messages(at) == []
