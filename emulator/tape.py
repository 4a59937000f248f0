from emulator.codec import BLANK


class Tape:
    """Unbounded tape stored as a sparse dict of non-blank cells."""

    def __init__(self, word="", blank=BLANK):
        self.blank = blank
        self.cells = {}
        for position, symbol in enumerate(word):
            self.write(position, symbol)

    def read(self, position):
        return self.cells.get(position, self.blank)

    def write(self, position, symbol):
        if symbol == self.blank:
            self.cells.pop(position, None)
        else:
            self.cells[position] = symbol

    def window(self, head, width=15):
        """Return the 2*width+1 symbols centred on head."""
        return [self.read(position) for position in range(head - width, head + width + 1)]

    def bounds(self):
        if not self.cells:
            return None
        return min(self.cells), max(self.cells)

    def contents(self):
        """Tape text from the leftmost to the rightmost non-blank cell."""
        bounds = self.bounds()
        if bounds is None:
            return ""
        lo, hi = bounds
        return "".join(self.read(position) for position in range(lo, hi + 1))

    def count(self, symbol):
        return sum(1 for value in self.cells.values() if value == symbol)

    def copy(self):
        clone = Tape(blank=self.blank)
        clone.cells = dict(self.cells)
        return clone

    def __getitem__(self, position):
        return self.read(position)

    def __setitem__(self, position, symbol):
        self.write(position, symbol)

    def __len__(self):
        return len(self.cells)

    def __repr__(self):
        return f"Tape({self.contents()!r})"
