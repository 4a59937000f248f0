from rich.console import Console

from emulator.reporter import ConsoleReporter, Snapshot, TraceRecorder, render, take_snapshot
from emulator.tape import Tape


def make_snapshot(final=False, accepted=False):
    return take_snapshot(2, Tape("101"), 1, 7, final=final, accepted=accepted)


class TestSnapshot:

    def test_window_has_31_cells_centered_on_head(self):
        snapshot = make_snapshot()
        assert len(snapshot.window) == 31
        assert snapshot.center == "0"
        assert snapshot.window[15] == "0"

    def test_custom_width(self):
        snapshot = take_snapshot(1, Tape("1"), 0, 0, width=2)
        assert snapshot.window == ("_", "_", "1", "_", "_")

    def test_result(self):
        assert make_snapshot(accepted=True).result == "ACCEPTED"
        assert make_snapshot().result == "REJECTED"

    def test_to_dict(self):
        data = make_snapshot(final=True, accepted=True).to_dict()
        assert data["state"] == 2
        assert data["steps"] == 7
        assert len(data["window"]) == 31
        assert data["result"] == "ACCEPTED"


class TestRender:

    def test_final_render(self):
        text = render(make_snapshot(final=True, accepted=True))
        lines = text.splitlines()
        assert lines[0] == "HALT  ->  ACCEPTED"
        assert "State  : q2" in lines
        assert "Steps  : 7" in lines
        assert "Head   : 1" in lines
        window_line = lines[3]
        assert window_line == "_" * 14 + "101" + "_" * 14
        assert lines[4] == " " * 15 + "^"

    def test_stopped_render(self):
        snapshot = take_snapshot(2, Tape("101"), 1, 7, final=True, accepted=True, stopped=True)
        assert snapshot.result == "NO HALT"
        assert render(snapshot).splitlines()[0] == "STOPPED  ->  NO HALT"
        assert snapshot.to_dict()["stopped"] is True

    def test_step_render(self):
        text = render(make_snapshot())
        assert text.splitlines()[0] == "Step 7 | q2"

    def test_blank_glyph(self):
        text = render(make_snapshot(final=True), blank_glyph="⊔")
        assert "⊔" * 14 + "101" in text
        assert "_" not in text.splitlines()[3]


class TestReporters:

    def test_console_reporter(self):
        console = Console(record=True, width=120)
        reporter = ConsoleReporter(console)
        reporter(make_snapshot())
        reporter(make_snapshot(final=True))
        output = console.export_text()
        assert "Step 7 | q2" in output
        assert "HALT  ->  REJECTED" in output

    def test_trace_recorder_forwards(self):
        seen = []
        recorder = TraceRecorder(forward=seen.append)
        snapshot = Snapshot(1, 0, 0, ("_",))
        recorder(snapshot)
        assert recorder.snapshots == [snapshot]
        assert seen == [snapshot]
        assert recorder.final is None
