"""Card, deck, and hand notation utilities."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np
from treys import Card as TreysCard


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}


class InvalidNotation(ValueError):
    """Raised for a hand notation that does not parse as rank, rank, [s|o]."""


class DuplicateCardError(ValueError):
    """Raised when the same card is supplied more than once."""


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: Rank
    suit: Suit

    def __post_init__(self):
        if self.rank not in RANK_STR:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUIT_STR:
            raise ValueError(f"Invalid suit: {self.suit}")
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '2c'."""
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=Rank(STR_RANK[rank_char]), suit=Suit(STR_SUIT[suit_char]))

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


@dataclass(frozen=True)
class Hand:
    """A two-card starting hand, stored high card first."""
    card1: Card
    card2: Card

    def __post_init__(self):
        if self.card1 == self.card2:
            raise DuplicateCardError(f"Duplicate cards detected: {self.card1}")
        # Higher rank first, suit breaks the tie for pairs
        if (self.card1.rank, self.card1.suit) < (self.card2.rank, self.card2.suit):
            first, second = self.card2, self.card1
            object.__setattr__(self, "card1", first)
            object.__setattr__(self, "card2", second)

    @property
    def cards(self) -> tuple[Card, Card]:
        return (self.card1, self.card2)

    @property
    def is_pair(self) -> bool:
        """Check if hand is a pocket pair."""
        return self.card1.rank == self.card2.rank

    @property
    def is_suited(self) -> bool:
        """Check if hand is suited."""
        return self.card1.suit == self.card2.suit

    @property
    def canonical(self) -> str:
        """
        Get canonical hand notation (e.g., 'AKs', 'QQ', '72o').

        This groups equivalent hands regardless of specific suits.
        """
        return notation_of(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __len__(self) -> int:
        return 2

    def __str__(self) -> str:
        return f"{self.card1}{self.card2}"

    def __repr__(self) -> str:
        return f"Hand({self.card1}, {self.card2})"

    @classmethod
    def from_string(cls, s: str) -> "Hand":
        """Parse hand from string like 'AsKh' or 'AKs'.

        A notation yields one representative combo of that category.
        """
        s = s.strip()
        if len(s) == 4:
            card1 = Card.from_string(s[:2])
            card2 = Card.from_string(s[2:])
            return cls(card1, card2)
        if len(s) in (2, 3):
            return expand_notation(s)[0]
        raise ValueError(f"Invalid hand string: {s}")

    def to_treys(self) -> list[int]:
        """Convert to treys library format."""
        return [self.card1.to_treys(), self.card2.to_treys()]


def make_deck() -> list[Card]:
    """All 52 cards, suit-major then ascending rank."""
    return [
        Card(Rank(rank), Suit(suit))
        for suit in range(4)
        for rank in range(2, 15)
    ]


def shuffle(deck: Sequence[Card], rng: np.random.Generator) -> list[Card]:
    """
    Return a Fisher-Yates permutation of deck.

    All swap indices come from one vectorised draw on rng, so a seeded
    generator always produces the same permutation.
    """
    cards = list(deck)
    n = len(cards)
    if n < 2:
        return cards
    # j_i is uniform on [0, i] for i = n-1 .. 1
    swaps = rng.integers(0, np.arange(n, 1, -1)).tolist()
    for i, j in zip(range(n - 1, 0, -1), swaps):
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def draw(pool: Sequence[Card], count: int, rng: np.random.Generator) -> list[Card]:
    """
    Draw count cards from pool without replacement.

    Runs only the first count steps of a forward Fisher-Yates shuffle.
    """
    n = len(pool)
    if count > n:
        raise ValueError(f"Cannot deal {count} cards, only {n} remaining")
    if count <= 0:
        return []
    cards = list(pool)
    swaps = rng.integers(np.arange(count), n).tolist()
    for i, j in enumerate(swaps):
        cards[i], cards[j] = cards[j], cards[i]
    return cards[:count]


def remove_cards(deck: Iterable[Card], to_remove: Iterable[Card]) -> list[Card]:
    """Remove specific cards from a deck."""
    dead = set(to_remove)
    return [card for card in deck if card not in dead]


def ensure_distinct(*groups: Iterable[Card]) -> None:
    """Raise DuplicateCardError if any card appears twice across groups."""
    seen: set[Card] = set()
    for group in groups:
        for card in group:
            if card in seen:
                raise DuplicateCardError(f"Duplicate cards detected: {card}")
            seen.add(card)


def parse_cards(text: str) -> list[Card]:
    """Parse 'AsKhTd', 'As Kh Td' or 'As,Kh,Td' into cards."""
    compact = text.replace(",", "").replace(" ", "")
    if len(compact) % 2:
        raise ValueError(f"Invalid card string: {text}")
    return [Card.from_string(compact[i:i + 2]) for i in range(0, len(compact), 2)]


def notation_of(cards: Sequence[Card]) -> str:
    """Canonical notation for two concrete cards: 'AKs', 'QQ', 'T9o'."""
    c1, c2 = cards
    high, low = (c1, c2) if c1.rank >= c2.rank else (c2, c1)
    r1 = RANK_STR[high.rank]
    r2 = RANK_STR[low.rank]

    if high.rank == low.rank:
        return f"{r1}{r2}"
    elif high.suit == low.suit:
        return f"{r1}{r2}s"
    else:
        return f"{r1}{r2}o"


def _parse_notation(notation: str) -> tuple[int, int, Optional[str]]:
    if not isinstance(notation, str) or len(notation) not in (2, 3):
        raise InvalidNotation(f"Invalid hand notation: {notation!r}")
    r1 = STR_RANK.get(notation[0].upper())
    r2 = STR_RANK.get(notation[1].upper())
    if r1 is None or r2 is None:
        raise InvalidNotation(f"Invalid rank in hand notation: {notation!r}")
    if r1 < r2:
        raise InvalidNotation(f"Hand notation must list the high rank first: {notation!r}")

    suffix = notation[2].lower() if len(notation) == 3 else None
    if r1 == r2:
        if suffix is not None:
            raise InvalidNotation(f"Pairs take no suited/offsuit suffix: {notation!r}")
    elif suffix not in ("s", "o"):
        raise InvalidNotation(f"Non-pair notation needs an 's' or 'o' suffix: {notation!r}")
    return r1, r2, suffix


def is_valid_notation(notation: str) -> bool:
    """Check whether a string is a well-formed hand notation."""
    try:
        _parse_notation(notation)
    except InvalidNotation:
        return False
    return True


def notation_category(notation: str) -> str:
    """Return 'pair', 'suited' or 'offsuit' for a notation."""
    r1, r2, suffix = _parse_notation(notation)
    if r1 == r2:
        return "pair"
    return "suited" if suffix == "s" else "offsuit"


def expand_notation(notation: str) -> list[Hand]:
    """
    Expand a notation into every concrete combo it covers.

    Pairs give 6 combos, suited hands 4 and offsuit hands 12.

    Raises:
        InvalidNotation: If the string is not rank, rank, optional s/o.
    """
    r1, r2, suffix = _parse_notation(notation)
    high, low = Rank(r1), Rank(r2)
    suits = list(Suit)

    if high == low:
        return [
            Hand(Card(high, s1), Card(low, s2))
            for i, s1 in enumerate(suits)
            for s2 in suits[i + 1:]
        ]
    if suffix == "s":
        return [Hand(Card(high, s), Card(low, s)) for s in suits]
    return [
        Hand(Card(high, s1), Card(low, s2))
        for s1 in suits
        for s2 in suits
        if s1 != s2
    ]


def hand_to_treys(hand: Hand, board: list[Card]) -> tuple[list[int], list[int]]:
    """Convert hand and board to treys format."""
    hand_treys = hand.to_treys()
    board_treys = [c.to_treys() for c in board]
    return hand_treys, board_treys


def get_all_hands() -> list[str]:
    """Generate all 169 unique starting hands in canonical form."""
    hands = []
    ranks = "AKQJT98765432"

    # Pairs
    for r in ranks:
        hands.append(f"{r}{r}")

    # Non-pairs
    for i, r1 in enumerate(ranks):
        for r2 in ranks[i+1:]:
            hands.append(f"{r1}{r2}s")  # Suited
            hands.append(f"{r1}{r2}o")  # Offsuit

    return hands


def parse_range(range_str: str) -> list[str]:
    """
    Parse a hand range string into list of hands.

    Examples:
        "AA" -> ["AA"]
        "AKs" -> ["AKs"]
        "TT+" -> ["TT", "JJ", "QQ", "KK", "AA"]
        "ATs+" -> ["ATs", "AJs", "AQs", "AKs"]
        "22-55" -> ["22", "33", "44", "55"]
        "A5s-A2s" -> ["A5s", "A4s", "A3s", "A2s"]
    """
    hands = []
    range_str = range_str.strip()

    try:
        # Pair plus: "TT+"
        if len(range_str) == 3 and range_str[2] == "+" and range_str[0] == range_str[1]:
            start_rank = STR_RANK[range_str[0].upper()]
            for rank in range(start_rank, 15):
                hands.append(f"{RANK_STR[rank]}{RANK_STR[rank]}")
            return hands

        # Pair range: "22-55"
        if "-" in range_str and len(range_str) == 5:
            if range_str[0] != range_str[1] or range_str[3] != range_str[4]:
                raise InvalidNotation(f"Invalid range: {range_str!r}")
            low = STR_RANK[range_str[0].upper()]
            high = STR_RANK[range_str[3].upper()]
            low, high = min(low, high), max(low, high)
            for rank in range(low, high + 1):
                hands.append(f"{RANK_STR[rank]}{RANK_STR[rank]}")
            return hands

        # Suited/offsuit plus: "ATs+"
        if len(range_str) == 4 and range_str[3] == "+":
            high_rank = STR_RANK[range_str[0].upper()]
            low_rank = STR_RANK[range_str[1].upper()]
            suffix = range_str[2].lower()
            if suffix not in ("s", "o") or low_rank >= high_rank:
                raise InvalidNotation(f"Invalid range: {range_str!r}")

            for rank in range(low_rank, high_rank):
                hands.append(f"{RANK_STR[high_rank]}{RANK_STR[rank]}{suffix}")
            return hands

        # Kicker span: "A5s-A2s"
        if "-" in range_str and len(range_str) == 7:
            start, _, end = range_str.partition("-")
            if (len(start) != 3 or len(end) != 3 or start[0] != end[0]
                    or start[2].lower() != end[2].lower()):
                raise InvalidNotation(f"Invalid range: {range_str!r}")
            high_rank = STR_RANK[start[0].upper()]
            a = STR_RANK[start[1].upper()]
            b = STR_RANK[end[1].upper()]
            suffix = start[2].lower()
            for rank in range(max(a, b), min(a, b) - 1, -1):
                hands.append(f"{RANK_STR[high_rank]}{RANK_STR[rank]}{suffix}")
            return hands
    except KeyError as exc:
        raise InvalidNotation(f"Invalid rank in range: {range_str!r}") from exc

    # Single hand
    return [range_str]


def expand_range(
    notations: Iterable[str],
    dead: Iterable[Card] = (),
) -> list[Hand]:
    """
    Expand range entries into unique concrete combos.

    Combos sharing a card with dead are dropped. Each entry may be a plain
    notation or range shorthand understood by parse_range.
    """
    dead_cards = set(dead)
    combos: list[Hand] = []
    seen: set[Hand] = set()

    for entry in notations:
        for notation in parse_range(entry):
            for combo in expand_notation(notation):
                if combo in seen:
                    continue
                if combo.card1 in dead_cards or combo.card2 in dead_cards:
                    continue
                seen.add(combo)
                combos.append(combo)

    return combos
