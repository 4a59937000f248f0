from dataclasses import dataclass

from emulator.codec import LECTURE
from emulator.reporter import WINDOW, take_snapshot
from emulator.tape import Tape


@dataclass
class RunResult:
    accepted: bool
    halted: bool
    state: int
    head: int
    steps: int
    tape: str

    @property
    def result(self):
        if not self.halted:
            return "NO HALT"
        return "ACCEPTED" if self.accepted else "REJECTED"

    def to_dict(self):
        return {
            "result": self.result,
            "accepted": self.accepted,
            "halted": self.halted,
            "state": self.state,
            "head": self.head,
            "steps": self.steps,
            "tape": self.tape,
        }


class Machine:
    """Runs a decoded transition table against one tape.

    The table is only read, so several machines may share it. There is
    no step limit: run() returns only once no transition applies.
    """

    def __init__(self, table, word="", codec=LECTURE, window=WINDOW):
        self.table = table
        self.codec = codec
        self.window = window
        self.reset(word)

    def reset(self, word=""):
        self.tape = Tape(word, blank=self.codec.blank)
        self.head = 0
        self.state = self.codec.initial_state
        self.steps = 0
        self.halted = False

    @property
    def accepted(self):
        return self.state == self.codec.accept_state

    def step(self):
        """Apply one transition. Returns False (and halts) if none matches."""
        if self.halted:
            return False
        transition = self.table.lookup(self.state, self.tape.read(self.head))
        if transition is None:
            self.halted = True
            return False

        self.tape.write(self.head, transition.write)
        self.head += transition.direction.delta
        self.state = transition.to_state
        self.steps += 1
        return True

    def run(self, step_mode=False, reporter=None):
        while True:
            if step_mode and reporter is not None:
                reporter(self.snapshot())
            if not self.step():
                break
        if reporter is not None:
            reporter(self.snapshot(final=True))
        return self.result()

    def snapshot(self, final=False):
        """Current configuration. A final snapshot of a machine that has not
        halted is marked as stopped."""
        return take_snapshot(
            self.state, self.tape, self.head, self.steps,
            final=final, accepted=self.accepted, width=self.window,
            stopped=final and not self.halted,
        )

    def result(self):
        return RunResult(
            accepted=self.halted and self.accepted,
            halted=self.halted,
            state=self.state,
            head=self.head,
            steps=self.steps,
            tape=self.tape.contents(),
        )
