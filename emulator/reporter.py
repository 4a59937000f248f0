from typing import NamedTuple

from rich.console import Console

WINDOW = 15


class Snapshot(NamedTuple):
    state: int
    head: int
    steps: int
    window: tuple
    final: bool = False
    accepted: bool = False
    stopped: bool = False

    @property
    def result(self):
        if self.stopped:
            return "NO HALT"
        return "ACCEPTED" if self.accepted else "REJECTED"

    @property
    def center(self):
        return self.window[len(self.window) // 2]

    def to_dict(self):
        return {
            "state": self.state,
            "head": self.head,
            "steps": self.steps,
            "window": "".join(self.window),
            "final": self.final,
            "stopped": self.stopped,
            "result": self.result,
        }


def take_snapshot(state, tape, head, steps, final=False, accepted=False, width=WINDOW, stopped=False):
    return Snapshot(state, head, steps, tuple(tape.window(head, width)), final, accepted, stopped)


def render(snapshot, blank_glyph="_", blank="_"):
    """Render a snapshot as plain text (result, state, window, head, steps)."""
    cells = "".join(blank_glyph if symbol == blank else symbol for symbol in snapshot.window)
    width = len(snapshot.window) // 2
    lines = []
    if snapshot.final:
        # A stopped run was cut off by a step cap and has no result.
        label = "STOPPED" if snapshot.stopped else "HALT"
        lines.append(f"{label}  ->  {snapshot.result}")
        lines.append(f"State  : q{snapshot.state}")
        lines.append(f"Steps  : {snapshot.steps}")
    else:
        lines.append(f"Step {snapshot.steps} | q{snapshot.state}")
    lines.append(cells)
    lines.append(" " * width + "^")
    lines.append(f"Head   : {snapshot.head}")
    lines.append("-" * len(snapshot.window))
    return "\n".join(lines)


class ConsoleReporter:
    """Prints every snapshot it receives to a rich console."""

    def __init__(self, console=None, blank_glyph="_", blank="_"):
        self.console = console or Console()
        self.blank_glyph = blank_glyph
        self.blank = blank

    def __call__(self, snapshot):
        text = render(snapshot, self.blank_glyph, self.blank)
        if snapshot.final:
            if snapshot.stopped:
                color = "yellow"
            else:
                color = "green" if snapshot.accepted else "red"
            head, _, rest = text.partition("\n")
            self.console.print(f"[bold {color}]{head}[/bold {color}]")
            self.console.print(rest, markup=False, highlight=False)
        else:
            self.console.print(text, markup=False, highlight=False)


class TraceRecorder:
    """Keeps every snapshot, optionally forwarding it to another reporter."""

    def __init__(self, forward=None):
        self.snapshots = []
        self.forward = forward

    def __call__(self, snapshot):
        self.snapshots.append(snapshot)
        if self.forward is not None:
            self.forward(snapshot)

    @property
    def steps(self):
        return [snapshot for snapshot in self.snapshots if not snapshot.final]

    @property
    def final(self):
        for snapshot in reversed(self.snapshots):
            if snapshot.final:
                return snapshot
        return None
