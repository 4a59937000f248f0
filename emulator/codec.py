from dataclasses import dataclass, field
from enum import Enum

BLANK = "_"

# Extended symbols stop at 'Z'; further letters would run into '_'.
EXTENDED_LETTERS = 26


class EncodingError(ValueError):
    """Raised when a bit string is not a valid machine encoding."""

    def __init__(self, message, segment=None, fragment=None):
        if segment is not None:
            message = f"segment {segment}: {message}"
        super().__init__(message)
        self.segment = segment
        self.fragment = fragment


class Direction(Enum):
    LEFT = "L"
    RIGHT = "R"

    @property
    def delta(self):
        return -1 if self is Direction.LEFT else 1


@dataclass(frozen=True, eq=False)
class Codec:
    """Convention used to map zero counts onto states, symbols and moves.

    Every variant difference (symbol table, initial/accepting state,
    state numbering, sentinel bit) lives here so the decoder and the
    machine stay the same for all of them.
    """

    name: str
    symbols: dict = field(default_factory=dict)
    extended: bool = True
    blank: str = BLANK
    initial_state: int = 1
    accept_state: int = 2
    state_offset: int = 0
    strip_sentinel: bool = False

    def symbol_for(self, n):
        if n < 1:
            raise EncodingError("zero-length symbol field")
        if n in self.symbols:
            return self.symbols[n]
        first = max(self.symbols) + 1 if self.symbols else 1
        if self.extended and n - first < EXTENDED_LETTERS:
            return chr(ord("A") + n - first)
        raise EncodingError(f"unknown symbol code {n}")

    def zeros_for_symbol(self, symbol):
        for n, s in self.symbols.items():
            if s == symbol:
                return n
        if self.extended and len(symbol) == 1 and "A" <= symbol <= "Z":
            first = max(self.symbols) + 1 if self.symbols else 1
            return first + ord(symbol) - ord("A")
        raise EncodingError(f"symbol {symbol!r} is not in the {self.name} alphabet")

    def direction_for(self, n):
        if n == 1:
            return Direction.LEFT
        if n == 2:
            return Direction.RIGHT
        if n < 1:
            raise EncodingError("zero-length direction field")
        raise EncodingError(f"direction code {n} is invalid (1=L, 2=R)")

    def zeros_for_direction(self, direction):
        return 1 if Direction(direction) is Direction.LEFT else 2

    def state_for(self, n):
        if n < 1:
            raise EncodingError("zero-length state field")
        return n - self.state_offset

    def zeros_for_state(self, state):
        n = state + self.state_offset
        if n < 1:
            raise EncodingError(f"state {state} cannot be encoded by the {self.name} codec")
        return n

    def alphabet(self):
        """Symbols of the explicit table, followed by the extended letters."""
        letters = []
        if self.extended:
            letters = [chr(ord("A") + i) for i in range(EXTENDED_LETTERS)]
        return list(self.symbols.values()) + letters


LECTURE = Codec(
    name="lecture",
    symbols={1: "0", 2: "1", 3: BLANK},
)

SENTINEL = Codec(
    name="sentinel",
    symbols={1: "0", 2: "1", 3: BLANK},
    strip_sentinel=True,
)

TQUAD = Codec(
    name="tquad",
    symbols={1: BLANK, 2: "1", 3: "X", 4: "Y"},
    extended=False,
    initial_state=0,
    accept_state=5,
    state_offset=1,
)

CODECS = {codec.name: codec for codec in (LECTURE, SENTINEL, TQUAD)}


def get_codec(name):
    if isinstance(name, Codec):
        return name
    try:
        return CODECS[name]
    except KeyError:
        raise ValueError(f"Unknown codec '{name}', expected one of: {', '.join(CODECS)}") from None


def symbol_for(n):
    return LECTURE.symbol_for(n)


def direction_for(n):
    return LECTURE.direction_for(n)


def zeros_for_symbol(symbol):
    return LECTURE.zeros_for_symbol(symbol)
