# tools/simulate_inputs.py

import argparse
import hashlib
from pathlib import Path

from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from emulator.codec import LECTURE, get_codec
from emulator.decoder import decode
from emulator.machine import Machine
from logger.logger import JSONLogger
from tools.loader import coerce_input, prepare_program, read_program


def program_fingerprint(bits):
    return hashlib.sha256(bits.encode("utf-8")).hexdigest()


# === Step-capped driver ===
def run_bounded(machine, max_steps=None):
    """Step until halt or until max_steps transitions have been applied.

    Returns True if the machine halted. max_steps of None/0 means no cap.
    """
    while not max_steps or machine.steps < max_steps:
        if not machine.step():
            return True
    return False


def console_message(msg):
    print(f"[{Path.cwd().name}] {msg}")


# === Main Simulation Runner ===
def simulate_inputs(bits, inputs, codec=LECTURE, max_steps=1000000, logger=None, show_progress=True):
    table = decode(bits, codec)
    fingerprint = program_fingerprint(bits)
    results = []

    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Inputs"),
            TimeElapsedColumn(),
            disable=not show_progress,
    ) as progress:

        task = progress.add_task("[cyan]Simulating...", total=len(inputs))

        for word in inputs:
            machine = Machine(table, word, codec=codec)
            run_bounded(machine, max_steps)

            entry = {"input": word, "program": fingerprint}
            entry.update(machine.result().to_dict())
            results.append(entry)

            progress.update(task, advance=1)

    if logger is not None:
        # === BULK WRITE once per batch ===
        logger.log_halting([entry for entry in results if entry["halted"]])
        logger.log_non_halting([entry for entry in results if not entry["halted"]])

    capped = sum(1 for entry in results if not entry["halted"])
    if capped:
        console_message(f"[WARNING] {capped} input(s) hit the {max_steps:,} step cap.")
    return results


# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Run one encoded machine against several input words with a step cap.")
    parser.add_argument("--program", required=True, help="Encoded program, literal or file path")
    parser.add_argument("--inputs", nargs="+", required=True, help="Input words (use '' for the empty word)")
    parser.add_argument("--codec", default="lecture", help="Codec variant (default: lecture)")
    parser.add_argument("--max_steps", type=int, default=1000000, help="Maximum steps per input (0 = no cap)")
    parser.add_argument("--decimal", default="auto", choices=["auto", "always", "never"], help="Decimal input coercion")
    parser.add_argument("--log_dir", default="logs/", help="Directory for JSONL results")
    args = parser.parse_args()

    codec = get_codec(args.codec)
    bits = prepare_program(read_program(args.program), codec)
    inputs = [coerce_input(word, args.decimal) for word in args.inputs]

    results = simulate_inputs(bits, inputs, codec=codec, max_steps=args.max_steps,
                              logger=JSONLogger(args.log_dir, "utm_"))
    for entry in results:
        console_message(f"{entry['input']!r}: {entry['result']} q{entry['state']} after {entry['steps']:,} steps")
    console_message("[SUCCESS] All inputs simulated. Results saved.")


if __name__ == "__main__":
    main()
