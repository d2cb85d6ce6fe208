"""Board reading: the nuts and board texture."""

import logging
from collections import Counter
from dataclasses import dataclass
from itertools import combinations
from typing import Optional, Sequence

from .cards import Card, Hand, Rank, ensure_distinct, make_deck, remove_cards
from .evaluator import EvaluatedHand, evaluate


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardTexture:
    """Summary of how coordinated a board is."""
    paired: bool
    flush_draws: int          # Suits with 2+ cards on board
    straight_possible: bool
    monotone: bool            # 3+ cards, all one suit

    @property
    def is_dry(self) -> bool:
        return not (self.paired or self.flush_draws or self.straight_possible)


def _check_board(board: Sequence[Card]) -> None:
    if len(board) > 5:
        raise ValueError(f"Board cannot have more than 5 cards, got {len(board)}")
    ensure_distinct(board)


def find_nuts(board: Sequence[Card]) -> Optional[tuple[Hand, EvaluatedHand]]:
    """
    Find the best possible hole cards on a board.

    Tries every two-card combination left in the deck, so it is meant for
    interactive use, not inner loops.

    Args:
        board: 3-5 board cards

    Returns:
        (hole cards, evaluated hand) for the nuts, or None if the board has
        fewer than 3 cards
    """
    board = list(board)
    _check_board(board)
    if len(board) < 3:
        return None

    remaining = remove_cards(make_deck(), board)
    best: Optional[EvaluatedHand] = None
    best_hole: Optional[tuple[Card, Card]] = None

    for hole in combinations(remaining, 2):
        evaluated = evaluate([*hole, *board])
        if best is None or evaluated.score > best.score:
            best = evaluated
            best_hole = hole

    logger.debug("Nuts on %s: %s with %s", board, best, best_hole)
    return Hand(*best_hole), best


def count_flush_draws(board: Sequence[Card]) -> int:
    """Number of suits with at least two cards on the board."""
    suits = Counter(card.suit for card in board)
    return sum(1 for count in suits.values() if count >= 2)


def is_board_paired(board: Sequence[Card]) -> bool:
    """Check whether any rank appears twice on the board."""
    ranks = Counter(card.rank for card in board)
    return any(count >= 2 for count in ranks.values())


def has_straight_possibility(board: Sequence[Card]) -> bool:
    """
    Check whether two hole cards could complete a straight.

    True when three distinct board ranks fit inside one five-rank window,
    with the ace also playing low for the wheel.
    """
    ranks = {int(card.rank) for card in board}
    if Rank.ACE in ranks:
        ranks.add(1)

    for low in range(1, 11):
        window = sum(1 for r in range(low, low + 5) if r in ranks)
        if window >= 3:
            return True
    return False


def describe_board(board: Sequence[Card]) -> BoardTexture:
    """Summarise the texture of a board."""
    board = list(board)
    _check_board(board)
    suits = {card.suit for card in board}
    return BoardTexture(
        paired=is_board_paired(board),
        flush_draws=count_flush_draws(board),
        straight_possible=has_straight_possibility(board),
        monotone=len(board) >= 3 and len(suits) == 1,
    )
