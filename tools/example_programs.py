# tools/example_programs.py

from dataclasses import dataclass, field

from emulator.codec import LECTURE, TQUAD, Direction
from emulator.decoder import Transition, decode
from tools.encoder import encode


def rules(*specs):
    return [Transition(f, r, t, w, Direction(d)) for f, r, t, w, d in specs]


@dataclass
class ExampleProgram:
    name: str
    description: str
    transitions: list
    codec: object = LECTURE
    inputs: list = field(default_factory=list)

    @property
    def bits(self):
        return encode(self.transitions, self.codec)

    def table(self):
        return decode(self.bits, self.codec)


ACCEPT_ONE = ExampleProgram(
    "accept-one",
    "Reads a single 1 and moves into the accepting state.",
    rules(
        (1, "1", 2, "1", "R"),
    ),
    inputs=["1", "0"],
)

REJECT = ExampleProgram(
    "reject",
    "Only knows what to do with a 0, so any other first symbol halts at once.",
    rules(
        (1, "0", 1, "0", "R"),
    ),
    inputs=["1"],
)

SCAN = ExampleProgram(
    "scan",
    "Walks right over the 1s, then steps back left onto the last one and accepts.",
    rules(
        (1, "1", 1, "1", "R"),
        (1, "_", 2, "_", "L"),
    ),
    inputs=["111", ""],
)

FIRST_WINS = ExampleProgram(
    "first-wins",
    "Two rules for (q1, 0); only the first is ever applied.",
    rules(
        (1, "0", 2, "1", "R"),
        (1, "0", 1, "_", "L"),
    ),
    inputs=["0"],
)

# Unary squaring. q3 writes the 0 separator after the input, q5 marks the
# next input 1 as A, q6/q7/q8 copy one 1 to the output per input cell
# (B and C mark copied 1 and A cells), q4 restores the marks.
SQUARE = ExampleProgram(
    "square",
    "Unary n -> n*n: leaves n*n ones to the right of a 0 separator.",
    rules(
        (1, "1", 3, "1", "R"),
        (1, "_", 2, "_", "R"),
        (3, "1", 3, "1", "R"),
        (3, "_", 4, "0", "L"),
        (4, "1", 4, "1", "L"),
        (4, "A", 4, "A", "L"),
        (4, "B", 4, "1", "L"),
        (4, "C", 4, "A", "L"),
        (4, "_", 5, "_", "R"),
        (5, "A", 5, "A", "R"),
        (5, "1", 6, "A", "L"),
        (5, "0", 2, "0", "R"),
        (6, "1", 6, "1", "L"),
        (6, "A", 6, "A", "L"),
        (6, "B", 6, "B", "L"),
        (6, "C", 6, "C", "L"),
        (6, "0", 6, "0", "L"),
        (6, "_", 7, "_", "R"),
        (7, "1", 8, "B", "R"),
        (7, "A", 8, "C", "R"),
        (7, "B", 7, "B", "R"),
        (7, "C", 7, "C", "R"),
        (7, "0", 4, "0", "L"),
        (8, "1", 8, "1", "R"),
        (8, "A", 8, "A", "R"),
        (8, "B", 8, "B", "R"),
        (8, "C", 8, "C", "R"),
        (8, "0", 8, "0", "R"),
        (8, "_", 6, "1", "L"),
    ),
    inputs=["", "1", "11", "111", "1111"],
)

BINARY_INCREMENT = ExampleProgram(
    "binary-increment",
    "Adds one to a binary number written most significant bit first.",
    rules(
        (1, "0", 1, "0", "R"),
        (1, "1", 1, "1", "R"),
        (1, "_", 3, "_", "L"),
        (3, "1", 3, "0", "L"),
        (3, "0", 4, "1", "L"),
        (3, "_", 4, "1", "L"),
        (4, "0", 4, "0", "L"),
        (4, "1", 4, "1", "L"),
        (4, "_", 2, "_", "R"),
    ),
    inputs=["0", "1011", "111"],
)

# The marking machine from the Tquad exercise (q0 start, q5 accept).
TQUAD_MARKER = ExampleProgram(
    "tquad-marker",
    "Marks every 1 as X in repeated sweeps, accepting in q5.",
    rules(
        (0, "1", 1, "X", "R"),
        (0, "X", 0, "X", "R"),
        (0, "_", 5, "_", "R"),
        (1, "1", 1, "1", "R"),
        (1, "X", 1, "X", "R"),
        (1, "_", 2, "_", "L"),
        (2, "1", 2, "1", "L"),
        (2, "X", 2, "X", "L"),
        (2, "_", 3, "_", "R"),
        (3, "1", 1, "X", "R"),
        (3, "X", 3, "X", "R"),
        (3, "_", 5, "_", "R"),
    ),
    codec=TQUAD,
    inputs=["11", "1111111111"],
)

EXAMPLES = {
    example.name: example
    for example in (ACCEPT_ONE, REJECT, SCAN, FIRST_WINS, SQUARE, BINARY_INCREMENT, TQUAD_MARKER)
}


def get_example(name):
    try:
        return EXAMPLES[name]
    except KeyError:
        raise ValueError(f"Unknown example '{name}', expected one of: {', '.join(EXAMPLES)}") from None
