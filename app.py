# app.py

import argparse
import sys
import time
import uuid
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table

from config.config_loader import load_config, save_config
from emulator.codec import CODECS, EncodingError, get_codec
from emulator.decoder import decode
from emulator.machine import Machine
from emulator.reporter import ConsoleReporter
from logger.logger import JSONLogger
from tools.encoder import encode_rule_file
from tools.example_programs import EXAMPLES, get_example
from tools.loader import coerce_input, load, prepare_program, read_program
from tools.simulate_inputs import program_fingerprint, simulate_inputs
from tools.table_inspect import latex_table, pretty_print_table

console = Console()

CONFIG_PATH = Path(__file__).resolve().parent / "config" / "runtime_config.json"


# === Utilities ===
def load_runtime_config(path=CONFIG_PATH):
    try:
        return load_config(str(path))
    except FileNotFoundError:
        console.print(f"[red]Error: {path} not found![/red]")
        sys.exit(1)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Error: invalid configuration: {e}[/red]")
        sys.exit(1)


def make_reporter(config, step_mode, logger=None, run_id=None):
    """Console reporter with step pacing and optional snapshot logging."""
    printer = ConsoleReporter(console, blank_glyph=config["blank_glyph"])
    delay = config["step_delay_ms"] / 1000

    def report(snapshot):
        printer(snapshot)
        if logger is not None:
            logger.log_snapshot(snapshot, run_id)
        if step_mode and not snapshot.final and delay:
            time.sleep(delay)

    return report


def execute(machine, step_mode, reporter, max_steps=0):
    """Run to halt, or stop after max_steps when a cap is configured."""
    if not max_steps:
        return machine.run(step_mode=step_mode, reporter=reporter)

    while machine.steps < max_steps:
        if step_mode:
            reporter(machine.snapshot())
        if not machine.step():
            break
    reporter(machine.snapshot(final=True))
    if not machine.halted:
        console.print(f"[yellow]Stopped after {max_steps:,} steps without halting.[/yellow]")
    return machine.result()


def run_program(table, word, codec, config, step_mode, bits):
    logger = None
    if config["log_runs"]:
        logger = JSONLogger(config["output_directory"], config["log_file_prefix"])
    run_id = uuid.uuid4().hex[:12]

    machine = Machine(table, word, codec=codec, window=config["window"])
    reporter = make_reporter(config, step_mode, logger, run_id)
    result = execute(machine, step_mode, reporter, config["max_steps"])

    if logger is not None:
        logger.log_run(result, program_fingerprint(bits), word, codec.name)
    return result


def show_main_menu():
    console.print("\n[bold cyan]Universal Turing Machine Emulator[/bold cyan]")
    console.print("[1] Run Encoded Program")
    console.print("[2] Run Example Program")
    console.print("[3] Inspect Transition Table")
    console.print("[4] Encode Rule File")
    console.print("[5] Edit Config")
    console.print("[6] Exit")


def handle_run(config):
    console.print("\n[bold]Run Encoded Program[/bold]")

    codec = get_codec(config["codec"])
    source = Prompt.ask("Program (bit string or file)", default=config["program_file"])
    word = Prompt.ask("Input word", default="")
    step_mode = Confirm.ask("Step mode?", default=config["step_mode"])

    try:
        bits = prepare_program(read_program(source), codec)
        table = decode(bits, codec)
    except OSError as e:
        console.print(f"[red]Could not read {source}: {e}[/red]")
        return
    except EncodingError as e:
        console.print(f"[red]Invalid encoding: {e}[/red]")
        return

    word = coerce_input(word, config["decimal_input"])
    console.print(f"[cyan]Loaded {len(table)} transitions, input {word!r}[/cyan]")
    run_program(table, word, codec, config, step_mode, bits)


def handle_example(config):
    console.print("\n[bold]Run Example Program[/bold]")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Index", justify="center")
    table.add_column("Example", justify="center")
    table.add_column("Codec", justify="center")
    table.add_column("Description")

    examples = list(EXAMPLES.values())
    for idx, example in enumerate(examples):
        table.add_row(str(idx), example.name, example.codec.name, example.description)
    console.print(table)

    idx_choice = IntPrompt.ask("\nChoose an example by Index")
    if idx_choice < 0 or idx_choice >= len(examples):
        console.print("[red]Invalid choice.[/red]")
        return

    example = examples[idx_choice]
    default_word = example.inputs[0] if example.inputs else ""
    word = Prompt.ask("Input word", default=default_word)
    step_mode = Confirm.ask("Step mode?", default=config["step_mode"])
    word = coerce_input(word, config["decimal_input"])

    console.print(f"[dim]{example.bits}[/dim]")
    run_program(example.table(), word, example.codec, config, step_mode, example.bits)


def handle_inspect(config):
    console.print("\n[bold]Inspect Transition Table[/bold]")

    codec = get_codec(config["codec"])
    source = Prompt.ask("Program (bit string or file)", default=config["program_file"])
    try:
        table, _ = load(source, codec=codec)
    except OSError as e:
        console.print(f"[red]Could not read {source}: {e}[/red]")
        return
    except EncodingError as e:
        console.print(f"[red]Invalid encoding: {e}[/red]")
        return
    pretty_print_table(table, console)


def handle_encode(config):
    console.print("\n[bold]Encode Rule File[/bold]")

    codec = get_codec(config["codec"])
    path = Prompt.ask("Rule file")
    try:
        bits = encode_rule_file(path, codec)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not encode {path}: {e}[/red]")
        return
    console.print(bits, markup=False, highlight=False)


def handle_edit_config(config, path=CONFIG_PATH):
    console.print("\n[bold]Edit Configuration[/bold]")

    codec = Prompt.ask("Codec", choices=list(CODECS), default=config["codec"])
    step_mode = Confirm.ask("Step mode by default?", default=config["step_mode"])
    step_delay_ms = IntPrompt.ask("Step delay (ms)", default=config["step_delay_ms"])
    window = IntPrompt.ask("Tape window half-width", default=config["window"])
    max_steps = IntPrompt.ask("Max steps (0 = no cap)", default=config["max_steps"])
    decimal_input = Prompt.ask("Decimal input", choices=["auto", "always", "never"], default=config["decimal_input"])
    program_file = Prompt.ask("Default program file", default=config["program_file"])
    log_runs = Confirm.ask("Log runs?", default=config["log_runs"])

    updated = dict(config)
    updated.update({
        "codec": codec,
        "step_mode": step_mode,
        "step_delay_ms": step_delay_ms,
        "window": window,
        "max_steps": max_steps,
        "decimal_input": decimal_input,
        "program_file": program_file,
        "log_runs": log_runs
    })

    try:
        save_config(updated, str(path))
    except (ValueError, TypeError) as e:
        console.print(f"[red]Configuration not saved: {e}[/red]")
        return
    console.print("[green]Configuration updated successfully.[/green]")


def interactive_main(config_path=CONFIG_PATH):
    config = load_runtime_config(config_path)

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5", "6"], default="6")

        if choice == "1":
            handle_run(config)
        elif choice == "2":
            handle_example(config)
        elif choice == "3":
            handle_inspect(config)
        elif choice == "4":
            handle_encode(config)
        elif choice == "5":
            handle_edit_config(config, config_path)
            config = load_runtime_config(config_path)
        elif choice == "6":
            console.print("[bold green]Goodbye![/bold green]")
            break


# === CLI Mode for Automation ===
def cli_main(args):
    config = load_runtime_config(args.config)
    if args.max_steps is not None:
        config["max_steps"] = args.max_steps
    step_mode = config["step_mode"] if args.step is None else args.step

    if args.list_examples:
        for example in EXAMPLES.values():
            console.print(f"[cyan]{example.name}[/cyan] ({example.codec.name}): {example.description}")
        return 0

    if args.encode:
        codec = get_codec(args.codec or config["codec"])
        console.print(encode_rule_file(args.encode, codec), markup=False, highlight=False)
        return 0

    if args.example:
        example = get_example(args.example)
        codec = example.codec
        bits = example.bits
    else:
        codec = get_codec(args.codec or config["codec"])
        bits = prepare_program(read_program(args.program), codec)
    table = decode(bits, codec)

    if args.inspect:
        pretty_print_table(table, console)
        if args.latex:
            console.print(latex_table(table), markup=False, highlight=False)
        return 0

    if args.batch:
        inputs = [coerce_input(word, config["decimal_input"]) for word in args.batch]
        logger = JSONLogger(config["output_directory"], config["log_file_prefix"]) if config["log_runs"] else None
        results = simulate_inputs(bits, inputs, codec=codec, max_steps=config["max_steps"], logger=logger)
        summary = Table(show_header=True, header_style="bold magenta")
        for column in ("Input", "Result", "State", "Head", "Steps", "Tape"):
            summary.add_column(column, justify="center")
        for entry in results:
            summary.add_row(repr(entry["input"]), entry["result"], f"q{entry['state']}", str(entry["head"]),
                            f"{entry['steps']:,}", entry["tape"])
        console.print(summary)
        return 0

    word = coerce_input(args.input, config["decimal_input"])
    run_program(table, word, codec, config, step_mode, bits)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Universal Turing Machine Emulator")
    parser.add_argument("--program", help="Encoded program: bit string or path to a file holding one")
    parser.add_argument("--example", help="Run a built-in example program instead of --program")
    parser.add_argument("--list-examples", action="store_true", help="List the built-in example programs")
    parser.add_argument("--input", default="", help="Input word written to the tape from position 0")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--step", dest="step", action="store_true", default=None, help="Report after every step")
    mode.add_argument("--run", dest="step", action="store_false", default=None, help="Report only the final configuration")
    parser.add_argument("--codec", choices=list(CODECS), help="Codec variant (default from config)")
    parser.add_argument("--max-steps", type=int, help="Stop after this many steps (0 = no cap)")
    parser.add_argument("--inspect", action="store_true", help="Print the transition table instead of running")
    parser.add_argument("--latex", action="store_true", help="With --inspect, also print a LaTeX table")
    parser.add_argument("--encode", metavar="RULEFILE", help="Encode a rule file and print the bit string")
    parser.add_argument("--batch", nargs="+", metavar="WORD", help="Run the program on several input words")
    parser.add_argument("--config", default=str(CONFIG_PATH), help="Path to runtime_config.json")
    args = parser.parse_args(argv)

    if not (args.program or args.example or args.encode or args.list_examples):
        interactive_main(args.config)
        return 0

    try:
        return cli_main(args)
    except EncodingError as e:
        console.print(f"[red]Invalid encoding: {e}[/red]")
        return 1
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
