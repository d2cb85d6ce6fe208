"""Hand evaluation and equity engine."""

from .cards import (
    Card,
    Hand,
    Rank,
    Suit,
    InvalidNotation,
    DuplicateCardError,
    make_deck,
    shuffle,
    draw,
    remove_cards,
    parse_cards,
    notation_of,
    expand_notation,
    expand_range,
    parse_range,
    get_all_hands,
)
from .evaluator import (
    HandCategory,
    EvaluatedHand,
    InvalidCardCount,
    evaluate,
    compare,
    find_winners,
)
from .board import BoardTexture, find_nuts, describe_board
from .equity import (
    EquityCalculator,
    EquityConfig,
    EquityResult,
    RangeEquityResult,
    RangeStrategy,
    heads_up_equity,
    exact_equity,
    equity_vs_range,
)

__all__ = [
    "Card",
    "Hand",
    "Rank",
    "Suit",
    "InvalidNotation",
    "DuplicateCardError",
    "make_deck",
    "shuffle",
    "draw",
    "remove_cards",
    "parse_cards",
    "notation_of",
    "expand_notation",
    "expand_range",
    "parse_range",
    "get_all_hands",
    "HandCategory",
    "EvaluatedHand",
    "InvalidCardCount",
    "evaluate",
    "compare",
    "find_winners",
    "BoardTexture",
    "find_nuts",
    "describe_board",
    "EquityCalculator",
    "EquityConfig",
    "EquityResult",
    "RangeEquityResult",
    "RangeStrategy",
    "heads_up_equity",
    "exact_equity",
    "equity_vs_range",
]
