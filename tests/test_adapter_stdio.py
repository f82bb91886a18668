import io
import textwrap

from takuzu_master.adapter_stdio import StdioAdapter
from takuzu_master.hints import StaticHintProvider

SOLVED = textwrap.dedent(
    """
    W W B W B B
    B B W B W W
    W B W B W B
    B W B W B W
    W B B W W B
    B W W B B W
    """
).split()


def _run_adapter_with_lines(lines, **kwargs):
    stdin = io.StringIO("\n".join(lines) + "\n")
    stdout = io.StringIO()
    stderr = io.StringIO()
    kwargs.setdefault("hint_provider", StaticHintProvider("Look at row 2."))
    adapter = StdioAdapter(stdin=stdin, stdout=stdout, stderr=stderr, **kwargs)
    exit_code = adapter.run()
    return exit_code, stdout.getvalue().strip().splitlines(), stderr.getvalue().strip()


def test_clicks_and_board_dump():
    lines = ["NEW", "# comment", "", "CLICK 0 0", "CLICK B1", "CLICK B1", "SHOW"]
    code, out, _ = _run_adapter_with_lines(lines)
    assert code == 0
    assert out[:4] == ["OK SETUP 6", "OK A1 W", "OK B1 W", "OK B1 B"]
    assert out[4] == "BOARD"
    assert out[5] == "W B . . . ."
    assert len(out) == 11


def test_preset_then_start():
    code, out, _ = _run_adapter_with_lines(["PRESET easy", "START", "START"])
    assert code == 0
    assert out == ["OK SETUP EASY", "OK PLAYING", "OK PLAYING"]


def test_start_reports_setup_conflicts():
    code, out, _ = _run_adapter_with_lines(["CLICK A1", "CLICK B1", "CLICK C1", "START"])
    assert code == 0
    assert out[3] == "ERRORS 1"
    assert out[4] == "ERROR CONSECUTIVE There are 3 equal tiles in a row in row 1."


def test_gated_rejection_rings_alarm():
    lines = [
        "POLICY gated",
        "CLICK A1",
        "CLICK B1",
        "CLICK C2",
        "CLICK C2",
        "CLICK C3",
        "CLICK C3",
        "START",
        "CLICK C1",
    ]
    code, out, err = _run_adapter_with_lines(lines)
    assert code == 0
    assert out[0] == "OK POLICY gated"
    assert out[7] == "OK PLAYING"
    assert out[8] == "REJECTED C1 ."
    assert "ALARM" in err


def test_check_incomplete_board():
    code, out, _ = _run_adapter_with_lines(["START", "CHECK"])
    assert code == 0
    assert out[1:] == ["ERRORS 0", "INCOMPLETE 36"]


def test_full_solution_wins():
    lines = []
    for idx, token in enumerate(SOLVED):
        r, c = divmod(idx, 6)
        clicks = 1 if token == "W" else 2
        lines.extend([f"CLICK {r} {c}"] * clicks)
    lines.extend(["START", "CHECK", "CLICK 0 0"])
    code, out, _ = _run_adapter_with_lines(lines)
    assert code == 0
    assert out[-4:] == ["OK PLAYING", "ERRORS 0", "WON", "OK A1 W"]


def test_hint_is_single_line():
    code, out, _ = _run_adapter_with_lines(["HINT"], hint_provider=StaticHintProvider("Look at\n  row 2."))
    assert code == 0
    assert out == ["HINT Look at row 2."]


def test_reset_returns_to_setup():
    code, out, _ = _run_adapter_with_lines(["NEW 4", "CLICK 0 0", "RESET", "SHOW"])
    assert code == 0
    assert out[2] == "OK SETUP 4"
    assert out[4:] == [". . . ."] * 4


def test_unknown_command_reports_error():
    code, out, err = _run_adapter_with_lines(["NEW", "FLY away", "SHOW"])
    assert code == 1
    assert out[-1] == "ERROR Unknown command 'FLY'"
    assert "ERROR Unknown command" in err


def test_illegal_input_reports_error_even_when_quiet():
    for line in ["CLICK 9 9", "CLICK 1 x", "CLICK Z9", "POLICY random", "NEW 5", "PRESET nope"]:
        code, out, err = _run_adapter_with_lines([line], quiet=True)
        assert code == 1, line
        assert out[-1].startswith("ERROR "), line
        assert err.startswith("ERROR "), line


def test_check_full_board_during_setup():
    lines = []
    for idx, token in enumerate(SOLVED):
        r, c = divmod(idx, 6)
        lines.extend([f"CLICK {r} {c}"] * (1 if token == "W" else 2))
    lines.append("CHECK")
    code, out, _ = _run_adapter_with_lines(lines)
    assert code == 0
    assert out[-2:] == ["ERRORS 0", "OK SETUP"]
