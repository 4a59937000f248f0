import argparse

from rich.console import Console
from rich.table import Table

from emulator.codec import get_codec
from tools.loader import load


def format_action(transition):
    if transition is None:
        return "HALT"
    return f"{transition.write}{transition.direction.value}q{transition.to_state}"


def table_rows(table):
    """One row per source state: [state label, action per read symbol]."""
    symbols = table.symbols()
    from_states = sorted({t.from_state for t in table})
    rows = []
    for state in from_states:
        row = [f"q{state}"]
        for symbol in symbols:
            action = format_action(table.lookup(state, symbol))
            extra = len(table.candidates(state, symbol)) - 1
            if extra > 0:
                action += f" (+{extra})"
            row.append(action)
        rows.append(row)
    return symbols, rows


def pretty_print_table(table, console=None):
    """Pretty print the transition table as a state x symbol grid."""
    console = console or Console()
    symbols, rows = table_rows(table)

    grid = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    grid.add_column("State", justify="center")
    for symbol in symbols:
        grid.add_column(symbol, justify="center")
    for row in rows:
        grid.add_row(*row)
    console.print(grid)

    duplicates = table.duplicates()
    if duplicates:
        console.print(f"[yellow]{len(duplicates)} key(s) have more than one rule; the first one is used.[/yellow]")


def _latex_escape(text):
    return text.replace("_", r"\_")


def latex_table(table):
    symbols, rows = table_rows(table)
    lines = [r"\begin{array}{c|" + "c" * len(symbols) + "}"]
    lines.append("State/Symbol & " + " & ".join(f"\\text{{{_latex_escape(s)}}}" for s in symbols) + r" \\ \hline")
    for row in rows:
        lines.append(" & ".join(_latex_escape(cell) for cell in row) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description="Transition table inspector")
    parser.add_argument("program", help="Encoded program, literal or file path")
    parser.add_argument("--codec", default="lecture", help="Codec variant (default: lecture)")
    parser.add_argument("--latex", action="store_true", help="Also print a LaTeX table")
    args = parser.parse_args()

    table, _ = load(args.program, codec=get_codec(args.codec))
    print(f"[INFO] {len(table)} transitions over states {table.states()}")
    pretty_print_table(table)
    if args.latex:
        print("\n=== LaTeX Table ===")
        print(latex_table(table))


if __name__ == "__main__":
    main()
