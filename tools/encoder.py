# tools/encoder.py

import argparse
import re
from pathlib import Path

from emulator.codec import LECTURE, Direction, get_codec
from emulator.decoder import SEPARATOR, Transition

RULE_PATTERN = re.compile(
    r"^q?(?P<from_state>\d+)\s+(?P<read>\S)\s*->\s*q?(?P<to_state>\d+)\s+(?P<write>\S)\s+(?P<direction>[LR])$"
)


def encode_transition(transition, codec=LECTURE):
    from_state, read, to_state, write, direction = transition
    fields = [
        codec.zeros_for_state(from_state),
        codec.zeros_for_symbol(read),
        codec.zeros_for_state(to_state),
        codec.zeros_for_symbol(write),
        codec.zeros_for_direction(direction),
    ]
    return "1".join("0" * n for n in fields)


def encode(transitions, codec=LECTURE):
    """Encode transitions in order; the last field carries no trailing '1'."""
    return SEPARATOR.join(encode_transition(t, codec) for t in transitions)


def parse_rules(text, codec=LECTURE):
    """Parse `q1 1 -> q2 1 R` rule lines into transitions."""
    transitions = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        match = RULE_PATTERN.match(line)
        if match is None:
            raise ValueError(f"Line {line_no}: cannot parse rule '{line}'")
        transitions.append(Transition(
            int(match["from_state"]),
            match["read"],
            int(match["to_state"]),
            match["write"],
            Direction(match["direction"]),
        ))
    if not transitions:
        raise ValueError("Rule text contains no transitions")
    # Reject symbols the codec cannot encode.
    for transition in transitions:
        codec.zeros_for_symbol(transition.read)
        codec.zeros_for_symbol(transition.write)
    return transitions


def encode_rule_file(path, codec=LECTURE):
    with open(path, "r", encoding="utf-8") as f:
        return encode(parse_rules(f.read(), codec), codec)


# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Encode a rule file into the binary machine notation")
    parser.add_argument("rules", help="Rule file, one 'q1 1 -> q2 1 R' rule per line")
    parser.add_argument("--codec", default="lecture", help="Codec variant (default: lecture)")
    parser.add_argument("--output", help="Write the encoding to this file instead of stdout")
    args = parser.parse_args()

    bits = encode_rule_file(args.rules, get_codec(args.codec))
    if args.output:
        Path(args.output).write_text(bits + "\n", encoding="utf-8")
        print(f"[INFO] Wrote {len(bits):,} bits to {args.output}")
    else:
        print(bits)


if __name__ == "__main__":
    main()
