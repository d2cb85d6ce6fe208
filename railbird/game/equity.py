"""Equity calculation utilities."""

import logging
import math
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Callable, Iterable, Optional, Sequence

import numpy as np

from .cards import Card, draw, ensure_distinct, expand_range, make_deck, remove_cards
from .evaluator import compare, evaluate


logger = logging.getLogger(__name__)

HoleCards = Sequence[Card]

# Reference preflop all-in equities for the first hand (percent)
COMMON_EQUITIES = {
    # Pair vs pair
    "AA_vs_KK": 81.95,
    "KK_vs_QQ": 81.46,
    "AA_vs_22": 83.32,

    # Pair vs suited connectors
    "AA_vs_87s": 77.28,
    "KK_vs_JTs": 77.97,

    # Pair vs overcards
    "JJ_vs_AKs": 54.26,
    "JJ_vs_AKo": 57.02,
    "22_vs_AKs": 48.19,

    # Dominated hands
    "AKs_vs_AQs": 69.95,
    "AKo_vs_AQo": 73.51,

    # Coin flips
    "AKs_vs_QQ": 45.74,
    "AKo_vs_JJ": 43.38,

    # Suited vs unsuited
    "AKs_vs_AKo": 52.24,
}


class RangeStrategy(Enum):
    """How equity_vs_range spends its trials."""
    EXHAUSTIVE = "exhaustive"  # Fixed trial count against every combo
    SAMPLED = "sampled"        # One random combo per trial


@dataclass
class EquityConfig:
    """Configuration for equity calculations."""
    strategy: RangeStrategy = RangeStrategy.SAMPLED
    trials_per_combo: int = 100    # EXHAUSTIVE only
    total_trials: int = 5000       # SAMPLED and hand vs hand
    workers: int = 1               # Processes; 1 runs inline
    seed: Optional[int] = None

    def __post_init__(self):
        if self.trials_per_combo < 1 or self.total_trials < 1:
            raise ValueError("Trial counts must be positive")
        if self.workers < 1:
            raise ValueError("Need at least one worker")


@dataclass(frozen=True)
class EquityResult:
    """Win/tie/loss counts for the first hand over a number of trials."""
    wins: int
    ties: int
    losses: int
    trials: int

    @property
    def equity(self) -> float:
        """Equity percentage, ties counting half. Zero when nothing ran."""
        if self.trials == 0:
            return 0.0
        return (self.wins + self.ties / 2) / self.trials * 100

    def __add__(self, other: "EquityResult") -> "EquityResult":
        return EquityResult(
            wins=self.wins + other.wins,
            ties=self.ties + other.ties,
            losses=self.losses + other.losses,
            trials=self.trials + other.trials,
        )


@dataclass(frozen=True)
class RangeEquityResult(EquityResult):
    """Equity against a range, with the number of combos actually used."""
    range_size: int = 0


EMPTY_RESULT = EquityResult(0, 0, 0, 0)


def _hole(cards: Iterable[Card]) -> tuple[Card, ...]:
    hole = tuple(cards)
    if len(hole) != 2:
        raise ValueError(f"A hand must have exactly 2 cards, got {len(hole)}")
    return hole


def _check_board(board: Sequence[Card]) -> None:
    if len(board) > 5:
        raise ValueError(f"Board cannot have more than 5 cards, got {len(board)}")


def _play(
    hand_a: HoleCards,
    hand_b: HoleCards,
    board: list[Card],
    pool: list[Card],
    trials: int,
    rng: np.random.Generator,
) -> EquityResult:
    """Run trials random runouts of one matchup."""
    remaining = 5 - len(board)

    if remaining == 0:
        # Nothing left to deal: every trial has the same outcome
        outcome = compare(evaluate([*hand_a, *board]), evaluate([*hand_b, *board]))
        return EquityResult(
            wins=trials if outcome > 0 else 0,
            ties=trials if outcome == 0 else 0,
            losses=trials if outcome < 0 else 0,
            trials=trials,
        )

    wins = ties = losses = 0
    for _ in range(trials):
        runout = board + draw(pool, remaining, rng)
        outcome = compare(evaluate([*hand_a, *runout]), evaluate([*hand_b, *runout]))
        if outcome > 0:
            wins += 1
        elif outcome < 0:
            losses += 1
        else:
            ties += 1

    return EquityResult(wins, ties, losses, trials)


def _split_trials(trials: int, workers: int) -> list[int]:
    base, extra = divmod(trials, workers)
    return [base + (1 if i < extra else 0) for i in range(workers)]


def _run_parallel(
    worker: Callable[[tuple], EquityResult],
    payloads: list[tuple],
) -> EquityResult:
    """Map payloads over a process pool and sum the counters."""
    with ProcessPoolExecutor(max_workers=len(payloads)) as executor:
        results = list(executor.map(worker, payloads))
    return sum(results, EMPTY_RESULT)


# Process pool workers: module level so they pickle

def _heads_up_worker(args: tuple) -> EquityResult:
    hand_a, hand_b, board, trials, rng = args
    pool = remove_cards(make_deck(), [*hand_a, *hand_b, *board])
    return _play(hand_a, hand_b, board, pool, trials, rng)


def _exhaustive_worker(args: tuple) -> EquityResult:
    hand, combos, board, trials_per_combo, rng = args
    base_pool = remove_cards(make_deck(), [*hand, *board])
    total = EMPTY_RESULT
    for combo in combos:
        pool = remove_cards(base_pool, combo)
        total += _play(hand, combo, board, pool, trials_per_combo, rng)
    return total


def _sampled_worker(args: tuple) -> EquityResult:
    hand, combos, board, trials, rng = args
    base_pool = remove_cards(make_deck(), [*hand, *board])
    pools: dict[int, list[Card]] = {}
    total = EMPTY_RESULT

    for index in rng.integers(0, len(combos), size=trials).tolist():
        if index not in pools:
            pools[index] = remove_cards(base_pool, combos[index])
        total += _play(hand, combos[index], board, pools[index], 1, rng)

    return total


def heads_up_equity(
    hand_a: HoleCards,
    hand_b: HoleCards,
    board: Sequence[Card] = (),
    trials: int = 10000,
    rng: Optional[np.random.Generator] = None,
    workers: int = 1,
) -> EquityResult:
    """
    Estimate equity of hand_a against hand_b by Monte Carlo.

    Args:
        hand_a: First hand (counts are from its point of view)
        hand_b: Second hand
        board: Board cards (0-5)
        trials: Number of random runouts
        rng: Random source; a fresh unseeded generator if omitted
        workers: Processes to spread trials over

    Returns:
        EquityResult for hand_a

    Raises:
        DuplicateCardError: If any card is shared between hands and board
    """
    hand_a, hand_b = _hole(hand_a), _hole(hand_b)
    board = list(board)
    _check_board(board)
    ensure_distinct(hand_a, hand_b, board)
    if trials < 1:
        raise ValueError("Trial count must be positive")
    if rng is None:
        rng = np.random.default_rng()

    if workers > 1 and len(board) < 5:
        payloads = [
            (hand_a, hand_b, board, count, child)
            for count, child in zip(_split_trials(trials, workers), rng.spawn(workers))
            if count
        ]
        result = _run_parallel(_heads_up_worker, payloads)
    else:
        result = _heads_up_worker((hand_a, hand_b, board, trials, rng))

    logger.debug(
        "%s vs %s on %s: %d/%d/%d over %d trials (%.2f%%)",
        hand_a, hand_b, board, result.wins, result.ties, result.losses,
        result.trials, result.equity,
    )
    return result


def exact_equity(
    hand_a: HoleCards,
    hand_b: HoleCards,
    board: Sequence[Card] = (),
    max_runouts: int = 100_000,
) -> EquityResult:
    """
    Exact equity by enumerating every runout.

    Practical from the flop onward (at most 990 runouts); preflop has
    over 1.7 million and is refused under the default max_runouts.

    Raises:
        ValueError: If the number of runouts exceeds max_runouts
    """
    hand_a, hand_b = _hole(hand_a), _hole(hand_b)
    board = list(board)
    _check_board(board)
    ensure_distinct(hand_a, hand_b, board)

    pool = remove_cards(make_deck(), [*hand_a, *hand_b, *board])
    remaining = 5 - len(board)
    total = math.comb(len(pool), remaining)
    if total > max_runouts:
        raise ValueError(
            f"{total} runouts exceeds max_runouts={max_runouts}; use heads_up_equity"
        )

    wins = ties = losses = 0
    for runout in combinations(pool, remaining):
        full_board = board + list(runout)
        outcome = compare(evaluate([*hand_a, *full_board]), evaluate([*hand_b, *full_board]))
        if outcome > 0:
            wins += 1
        elif outcome < 0:
            losses += 1
        else:
            ties += 1

    return EquityResult(wins, ties, losses, total)


def equity_vs_range(
    hand: HoleCards,
    range_notations: Iterable[str],
    board: Sequence[Card] = (),
    config: Optional[EquityConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> RangeEquityResult:
    """
    Estimate equity of a hand against a range of hand notations.

    Combos that share a card with the hand or board are dropped before any
    simulation; range_size reports how many remain. Each remaining combo
    is weighted equally.

    Args:
        hand: Hero's hand
        range_notations: Notations or range shorthand ("AKs", "TT+", ...)
        board: Board cards (0-5)
        config: Strategy, trial counts and worker count
        rng: Random source; seeded from config.seed if omitted

    Returns:
        RangeEquityResult; all zeros when no combo survives filtering

    Raises:
        InvalidNotation: If any range entry is malformed
    """
    config = config or EquityConfig()
    hand = _hole(hand)
    board = list(board)
    _check_board(board)
    ensure_distinct(hand, board)
    if rng is None:
        rng = np.random.default_rng(config.seed)

    combos = [combo.cards for combo in expand_range(range_notations, dead=[*hand, *board])]
    if not combos:
        logger.debug("No combos left in range for %s on %s", hand, board)
        return RangeEquityResult(0, 0, 0, 0, range_size=0)

    if config.strategy is RangeStrategy.EXHAUSTIVE:
        worker = _exhaustive_worker
        if config.workers > 1:
            payloads = [
                (hand, combos[i::config.workers], board, config.trials_per_combo, child)
                for i, child in enumerate(rng.spawn(config.workers))
                if combos[i::config.workers]
            ]
        else:
            payloads = [(hand, combos, board, config.trials_per_combo, rng)]
    else:
        worker = _sampled_worker
        if config.workers > 1:
            counts = _split_trials(config.total_trials, config.workers)
            payloads = [
                (hand, combos, board, count, child)
                for count, child in zip(counts, rng.spawn(config.workers))
                if count
            ]
        else:
            payloads = [(hand, combos, board, config.total_trials, rng)]

    if len(payloads) > 1:
        total = _run_parallel(worker, payloads)
    else:
        total = worker(payloads[0])

    result = RangeEquityResult(
        wins=total.wins,
        ties=total.ties,
        losses=total.losses,
        trials=total.trials,
        range_size=len(combos),
    )
    logger.debug(
        "%s vs range of %d combos (%s): %.2f%% over %d trials",
        hand, result.range_size, config.strategy.value, result.equity, result.trials,
    )
    return result


class EquityCalculator:
    """
    Equity calculations bound to one config and one random generator.

    Each calculator owns its generator, so separate instances can run in
    separate threads without sharing random state.
    """

    def __init__(
        self,
        config: Optional[EquityConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or EquityConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

    def hand_vs_hand(
        self,
        hand1: HoleCards,
        hand2: HoleCards,
        board: Sequence[Card] = (),
        num_simulations: Optional[int] = None,
    ) -> EquityResult:
        """Monte Carlo equity of hand1 against hand2."""
        return heads_up_equity(
            hand1,
            hand2,
            board,
            trials=num_simulations or self.config.total_trials,
            rng=self.rng,
            workers=self.config.workers,
        )

    def hand_vs_range(
        self,
        hand: HoleCards,
        range_notations: Iterable[str],
        board: Sequence[Card] = (),
    ) -> RangeEquityResult:
        """Equity of hand against a range using this calculator's config."""
        return equity_vs_range(hand, range_notations, board, config=self.config, rng=self.rng)

    def exact(
        self,
        hand1: HoleCards,
        hand2: HoleCards,
        board: Sequence[Card] = (),
    ) -> EquityResult:
        """Exact equity by full enumeration of the runouts."""
        return exact_equity(hand1, hand2, board)
