#!/usr/bin/env python3
"""Estimate a hand's equity against a hand or a range."""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from railbird.game.cards import Card, parse_cards
from railbird.game.equity import (
    EquityConfig,
    EquityResult,
    RangeEquityResult,
    RangeStrategy,
    equity_vs_range,
    exact_equity,
    heads_up_equity,
)


def main():
    parser = argparse.ArgumentParser(
        description="Estimate hand equity against a hand or a range"
    )
    parser.add_argument(
        "hand",
        help="Hero's hole cards (e.g., 'AsKs')",
    )
    parser.add_argument(
        "villain",
        help="Villain's hole cards ('QhQd') or a range ('QQ+,AKs,A5s-A2s')",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Board cards (e.g., 'AsKhTd' or 'As Kh Td')",
    )
    parser.add_argument(
        "-n", "--trials",
        type=int,
        default=10000,
        help="Monte Carlo trials (default: 10000)",
    )
    parser.add_argument(
        "--exhaustive",
        action="store_true",
        help="Range mode: run every combo instead of sampling combos",
    )
    parser.add_argument(
        "--per-combo",
        type=int,
        default=100,
        help="Trials per combo with --exhaustive (default: 100)",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        help="Hand vs hand only: enumerate every runout (flop onward)",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=1,
        help="Worker processes (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible results",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        hand = parse_cards(args.hand)
        board = parse_cards(args.board)
        villain_cards = _parse_villain_cards(args.villain)

        if len(hand) != 2:
            console.print("[red]Hero hand must be exactly 2 cards[/]")
            return 1

        board_display = " ".join(str(c) for c in board) or "(preflop)"
        console.print(f"[bold]Hero:[/] {' '.join(str(c) for c in hand)}")
        console.print(f"[bold]Villain:[/] {args.villain}")
        console.print(f"[bold]Board:[/] {board_display}")
        console.print()

        config = EquityConfig(
            strategy=RangeStrategy.EXHAUSTIVE if args.exhaustive else RangeStrategy.SAMPLED,
            trials_per_combo=args.per_combo,
            total_trials=args.trials,
            workers=args.workers,
            seed=args.seed,
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Running equity calculation...")

            if villain_cards and args.exact:
                result = exact_equity(hand, villain_cards, board)
            elif villain_cards:
                result = heads_up_equity(
                    hand,
                    villain_cards,
                    board,
                    trials=args.trials,
                    rng=np.random.default_rng(args.seed),
                    workers=args.workers,
                )
            else:
                entries = [e for e in args.villain.split(",") if e.strip()]
                result = equity_vs_range(hand, entries, board, config=config)

    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    _display_result(console, result)
    return 0


def _parse_villain_cards(text: str) -> list[Card]:
    """Concrete villain cards, or an empty list if text is a range."""
    compact = text.replace(" ", "")
    if len(compact) != 4 or "," in compact:
        return []
    try:
        return parse_cards(compact)
    except ValueError:
        return []


def _display_result(console: Console, result: EquityResult) -> None:
    """Display equity counters and percentage."""
    table = Table(title="Equity", show_header=False)
    table.add_column("Stat", style="cyan")
    table.add_column("Value", justify="right")

    if isinstance(result, RangeEquityResult):
        table.add_row("Range combos", str(result.range_size))
    table.add_row("Trials", f"{result.trials:,}")
    table.add_row("Wins", f"{result.wins:,}")
    table.add_row("Ties", f"{result.ties:,}")
    table.add_row("Losses", f"{result.losses:,}")

    color = "green" if result.equity >= 50 else "red"
    table.add_row("Equity", f"[{color}]{result.equity:.2f}%[/]")

    console.print(table)

    if isinstance(result, RangeEquityResult) and result.range_size == 0:
        console.print("[yellow]Every combo in the range is blocked by hero's cards or the board[/]")


if __name__ == "__main__":
    sys.exit(main())
