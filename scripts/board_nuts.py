#!/usr/bin/env python3
"""Show the nuts and texture of a board."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from railbird.game.board import BoardTexture, describe_board, find_nuts
from railbird.game.cards import ensure_distinct, parse_cards
from railbird.game.evaluator import evaluate


def main():
    parser = argparse.ArgumentParser(
        description="Find the nuts and describe a board"
    )
    parser.add_argument(
        "board",
        help="Board cards (e.g., 'AsKhTd' or 'As Kh Td')",
    )
    parser.add_argument(
        "--hand",
        help="Also evaluate these hole cards on the board (e.g., 'QsJs')",
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
        board = parse_cards(args.board)
        if len(board) < 3:
            console.print("[red]Board must have at least 3 cards[/]")
            return 1

        console.print(f"[bold]Board:[/] {' '.join(str(c) for c in board)}")
        console.print()

        _display_texture(console, describe_board(board))

        hole, nuts = find_nuts(board)
        console.print(Panel(
            f"[bold]{hole}[/] makes [green]{nuts.name}[/]\n"
            f"[dim]{' '.join(str(c) for c in nuts.cards)}[/]",
            title="[bold]The Nuts[/]",
            border_style="green",
        ))

        if args.hand:
            hand = parse_cards(args.hand)
            ensure_distinct(hand, board)
            evaluated = evaluate([*hand, *board])
            gap = "[green]the nuts[/]" if evaluated.score == nuts.score else "[yellow]not the nuts[/]"
            console.print(f"[bold]Your hand:[/] {evaluated} - {gap}")

    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    return 0


def _display_texture(console: Console, texture: BoardTexture) -> None:
    """Display board texture flags."""
    table = Table(title="Board Texture", show_header=False)
    table.add_column("Feature", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Paired", "yes" if texture.paired else "no")
    table.add_row("Flush draws", str(texture.flush_draws))
    table.add_row("Monotone", "yes" if texture.monotone else "no")
    table.add_row("Straight possible", "yes" if texture.straight_possible else "no")
    table.add_row("Dry", "yes" if texture.is_dry else "no")

    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
