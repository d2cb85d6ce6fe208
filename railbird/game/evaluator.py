"""
Five-to-seven card hand evaluation.

Every 5-card hand is classified into a category plus tie-break kickers and
linearised into one integer score:

    score = category * 15**5 + sum(kicker[i] * 15**(4 - i))

Ranks never exceed 14, so base 15 keeps each kicker in its own digit and
score order matches hand strength order, tie-breaks included. Six and
seven card inputs are solved by brute force over their 5-card subsets.
"""

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from operator import attrgetter
from typing import Iterable, Optional, Sequence

from .cards import Card, Rank


SCORE_BASE = 15


class HandCategory(IntEnum):
    """Hand categories, weakest first."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


HAND_NAMES = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}


class InvalidCardCount(ValueError):
    """Raised when evaluate gets fewer than 5 or more than 7 cards."""


@dataclass(frozen=True)
class EvaluatedHand:
    """The best 5-card hand and its comparable score."""
    category: HandCategory
    kickers: tuple[Rank, ...]  # Most significant first
    cards: tuple[Card, ...]    # The 5 cards making the hand
    score: int

    @property
    def name(self) -> str:
        return HAND_NAMES[self.category]

    def __str__(self) -> str:
        cards = " ".join(str(c) for c in self.cards)
        return f"{self.name} ({cards})"


def hand_name(category: HandCategory) -> str:
    """Display name for a hand category."""
    return HAND_NAMES[HandCategory(category)]


def compute_score(category: HandCategory, kickers: Sequence[int]) -> int:
    """Linearise a category and its kickers into one integer."""
    score = int(category) * SCORE_BASE ** 5
    for i, kicker in enumerate(kickers[:5]):
        score += int(kicker) * SCORE_BASE ** (4 - i)
    return score


def find_straight(ranks: Iterable[int]) -> Optional[Rank]:
    """
    High card of the best straight among ranks, or None.

    The wheel (A-2-3-4-5) counts as a 5-high straight; only here is the
    ace allowed to play low.
    """
    distinct = sorted(set(ranks), reverse=True)

    for i in range(len(distinct) - 4):
        if distinct[i] - distinct[i + 4] == 4:
            return Rank(distinct[i])

    if Rank.ACE in distinct and all(r in distinct for r in (2, 3, 4, 5)):
        return Rank.FIVE

    return None


def _evaluate_five(cards: Sequence[Card]) -> EvaluatedHand:
    ranks = [card.rank for card in cards]
    # Groups ordered by size, then rank: quads/trips/pairs lead, kickers follow
    groups = sorted(Counter(ranks).items(), key=lambda g: (g[1], g[0]), reverse=True)
    top_count = groups[0][1]
    second_count = groups[1][1] if len(groups) > 1 else 0

    is_flush = len({card.suit for card in cards}) == 1
    straight_high = find_straight(ranks)

    if is_flush and straight_high is not None:
        if straight_high == Rank.ACE:
            category = HandCategory.ROYAL_FLUSH
        else:
            category = HandCategory.STRAIGHT_FLUSH
        kickers = (straight_high,)
    elif top_count == 4:
        category = HandCategory.FOUR_OF_A_KIND
        kickers = (groups[0][0], groups[1][0])
    elif top_count == 3 and second_count == 2:
        category = HandCategory.FULL_HOUSE
        kickers = (groups[0][0], groups[1][0])
    elif is_flush:
        category = HandCategory.FLUSH
        kickers = tuple(sorted(ranks, reverse=True))
    elif straight_high is not None:
        category = HandCategory.STRAIGHT
        kickers = (straight_high,)
    elif top_count == 3:
        category = HandCategory.THREE_OF_A_KIND
        kickers = (groups[0][0], groups[1][0], groups[2][0])
    elif top_count == 2 and second_count == 2:
        category = HandCategory.TWO_PAIR
        kickers = (groups[0][0], groups[1][0], groups[2][0])
    elif top_count == 2:
        category = HandCategory.ONE_PAIR
        kickers = tuple(rank for rank, _ in groups[:4])
    else:
        category = HandCategory.HIGH_CARD
        kickers = tuple(sorted(ranks, reverse=True))

    return EvaluatedHand(
        category=category,
        kickers=kickers,
        cards=tuple(cards),
        score=compute_score(category, kickers),
    )


def evaluate(cards: Sequence[Card]) -> EvaluatedHand:
    """
    Evaluate the best 5-card hand from 5, 6 or 7 cards.

    Args:
        cards: Hole cards plus board cards, in any order

    Returns:
        The highest scoring 5-card hand

    Raises:
        InvalidCardCount: If fewer than 5 or more than 7 cards are given
    """
    cards = list(cards)
    if len(cards) == 5:
        return _evaluate_five(cards)
    if len(cards) not in (6, 7):
        raise InvalidCardCount(f"Must provide 5-7 cards, got {len(cards)}")

    return max(
        (_evaluate_five(combo) for combo in combinations(cards, 5)),
        key=attrgetter("score"),
    )


def compare(a: EvaluatedHand, b: EvaluatedHand) -> int:
    """Return 1 if a wins, -1 if b wins, 0 for a split."""
    return (a.score > b.score) - (a.score < b.score)


def find_winners(hands: Sequence[EvaluatedHand]) -> list[int]:
    """Indices of every hand sharing the top score."""
    if not hands:
        return []
    best = max(hand.score for hand in hands)
    return [i for i, hand in enumerate(hands) if hand.score == best]
