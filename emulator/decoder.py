from typing import NamedTuple

from emulator.codec import LECTURE, Direction, EncodingError

SEPARATOR = "111"
FIELD_COUNT = 5


class Transition(NamedTuple):
    from_state: int
    read: str
    to_state: int
    write: str
    direction: Direction

    @property
    def key(self):
        return (self.from_state, self.read)

    def __str__(self):
        return f"δ(q{self.from_state}, {self.read}) = (q{self.to_state}, {self.write}, {self.direction.value})"


class TransitionTable:
    """Read-only δ-function keyed by (state, read symbol).

    Each key keeps its candidates in insertion order; only the first one
    is ever executed.
    """

    def __init__(self, transitions=()):
        rules = {}
        order = []
        for from_state, read, to_state, write, direction in transitions:
            transition = Transition(from_state, read, to_state, write, Direction(direction))
            rules.setdefault(transition.key, []).append(transition)
            order.append(transition)
        self._rules = {key: tuple(candidates) for key, candidates in rules.items()}
        self._order = tuple(order)

    def lookup(self, state, symbol):
        candidates = self._rules.get((state, symbol))
        if not candidates:
            return None
        return candidates[0]

    def candidates(self, state, symbol):
        return self._rules.get((state, symbol), ())

    def keys(self):
        return list(self._rules)

    def states(self):
        found = set()
        for transition in self._order:
            found.add(transition.from_state)
            found.add(transition.to_state)
        return sorted(found)

    def symbols(self):
        found = []
        for transition in self._order:
            for symbol in (transition.read, transition.write):
                if symbol not in found:
                    found.append(symbol)
        return found

    def duplicates(self):
        """Keys that carry more than one candidate transition."""
        return [key for key, candidates in self._rules.items() if len(candidates) > 1]

    def __iter__(self):
        return iter(self._order)

    def __len__(self):
        return len(self._order)

    def __contains__(self, key):
        return key in self._rules

    def __eq__(self, other):
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return self._rules == other._rules

    def __repr__(self):
        return f"TransitionTable({len(self)} transitions, {len(self._rules)} keys)"


def _split_fields(segment, index):
    fields = segment.split("1")
    if len(fields) != FIELD_COUNT:
        raise EncodingError(
            f"expected {FIELD_COUNT} fields, found {len(fields)} in {segment!r}",
            segment=index,
            fragment=segment,
        )
    for field in fields:
        if not field:
            raise EncodingError(f"zero-length field in {segment!r}", segment=index, fragment=segment)
    return [len(field) for field in fields]


def decode_transition(segment, codec=LECTURE, index=None):
    """Decode one `0^i 1 0^j 1 0^k 1 0^l 1 0^m` block."""
    i, j, k, l, m = _split_fields(segment, index)
    try:
        return Transition(
            codec.state_for(i),
            codec.symbol_for(j),
            codec.state_for(k),
            codec.symbol_for(l),
            codec.direction_for(m),
        )
    except EncodingError as e:
        raise EncodingError(str(e), segment=index, fragment=segment) from None


def decode(bits, codec=LECTURE):
    """Decode a transition-table bit string into a TransitionTable.

    The caller strips whitespace and other non-bit characters; anything
    outside '0'/'1' is rejected here. Transitions are separated by '111'.
    """
    for position, char in enumerate(bits):
        if char not in "01":
            raise EncodingError(f"invalid character {char!r} at position {position}")
    if not bits:
        raise EncodingError("empty encoding, no transitions")

    transitions = []
    for index, segment in enumerate(bits.split(SEPARATOR)):
        if not segment:
            continue
        transitions.append(decode_transition(segment, codec, index))

    if not transitions:
        raise EncodingError("encoding contains no transitions")
    return TransitionTable(transitions)
