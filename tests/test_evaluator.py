"""Tests for hand evaluation."""

from itertools import combinations

import numpy as np
import pytest
from treys import Evaluator

from railbird.game.cards import Rank, make_deck, parse_cards, shuffle
from railbird.game.evaluator import (
    HandCategory, InvalidCardCount, SCORE_BASE,
    compare, compute_score, evaluate, find_straight, find_winners, hand_name,
)


# Weakest and strongest example of every category, weakest category first
CATEGORY_EXTREMES = [
    (HandCategory.HIGH_CARD, "2c 3d 4h 5s 7c", "Ac Kd Qh Js 9c"),
    (HandCategory.ONE_PAIR, "2c 2d 3h 4s 5c", "Ac Ad Kh Qs Jc"),
    (HandCategory.TWO_PAIR, "3c 3d 2h 2s 4c", "Ac Ad Kh Ks Qc"),
    (HandCategory.THREE_OF_A_KIND, "2c 2d 2h 3s 4c", "Ac Ad Ah Ks Qc"),
    (HandCategory.STRAIGHT, "Ac 2d 3h 4s 5c", "Td Jd Qh Ks Ac"),
    (HandCategory.FLUSH, "2c 3c 4c 5c 7c", "Ac Kc Qc Jc 9c"),
    (HandCategory.FULL_HOUSE, "2c 2d 2h 3s 3c", "Ac Ad Ah Ks Kc"),
    (HandCategory.FOUR_OF_A_KIND, "2c 2d 2h 2s 3c", "Ac Ad Ah As Kc"),
    (HandCategory.STRAIGHT_FLUSH, "Ac 2c 3c 4c 5c", "9c Tc Jc Qc Kc"),
    (HandCategory.ROYAL_FLUSH, "Tc Jc Qc Kc Ac", "Th Jh Qh Kh Ah"),
]


class TestClassification:
    @pytest.mark.parametrize("category,weakest,strongest", CATEGORY_EXTREMES)
    def test_category(self, category, weakest, strongest):
        assert evaluate(parse_cards(weakest)).category == category
        assert evaluate(parse_cards(strongest)).category == category

    def test_category_ordering(self):
        # The strongest hand of each category loses to the weakest of the next
        for lower, higher in zip(CATEGORY_EXTREMES, CATEGORY_EXTREMES[1:]):
            top_of_lower = evaluate(parse_cards(lower[2]))
            bottom_of_higher = evaluate(parse_cards(higher[1]))
            assert compare(bottom_of_higher, top_of_lower) > 0

    def test_flush_beats_trips_regardless_of_kickers(self, cards):
        flush = evaluate(cards("7h 5h 4h 3h 2h"))
        trips = evaluate(cards("Ac Ad Ah Ks Qc"))
        assert compare(flush, trips) > 0
        assert compare(trips, flush) < 0

    def test_quads_kicker(self, cards):
        hand = evaluate(cards("9c 9d 9h 9s Ah 2c Kd"))
        assert hand.category == HandCategory.FOUR_OF_A_KIND
        assert hand.kickers == (Rank.NINE, Rank.ACE)

    def test_full_house_kickers(self, cards):
        hand = evaluate(cards("Kc Kd Kh 7s 7c"))
        assert hand.kickers == (Rank.KING, Rank.SEVEN)

    def test_full_house_from_two_trips(self, cards):
        hand = evaluate(cards("Ah Ad Ac Kh Kd Kc 2s"))
        assert hand.category == HandCategory.FULL_HOUSE
        assert hand.kickers == (Rank.ACE, Rank.KING)

    def test_flush_kickers(self, cards):
        hand = evaluate(cards("2h 9h Jh 4h Kh"))
        assert hand.category == HandCategory.FLUSH
        assert hand.kickers == (Rank.KING, Rank.JACK, Rank.NINE, Rank.FOUR, Rank.TWO)

    def test_trips_kickers(self, cards):
        hand = evaluate(cards("8c 8d 8h Ks 3c"))
        assert hand.kickers == (Rank.EIGHT, Rank.KING, Rank.THREE)

    def test_two_pair_kickers(self, cards):
        hand = evaluate(cards("4c 4d Jh Js 9c"))
        assert hand.category == HandCategory.TWO_PAIR
        assert hand.kickers == (Rank.JACK, Rank.FOUR, Rank.NINE)

    def test_best_two_pair_of_three(self, cards):
        hand = evaluate(cards("Ah Ad Kh Kd Qh Qd 2c"))
        assert hand.category == HandCategory.TWO_PAIR
        assert hand.kickers == (Rank.ACE, Rank.KING, Rank.QUEEN)

    def test_pair_kickers(self, cards):
        hand = evaluate(cards("5c 5d Ah 9s 3c"))
        assert hand.category == HandCategory.ONE_PAIR
        assert hand.kickers == (Rank.FIVE, Rank.ACE, Rank.NINE, Rank.THREE)

    def test_high_card_kickers(self, cards):
        hand = evaluate(cards("2c Jd 7h Ks 4c"))
        assert hand.kickers == (Rank.KING, Rank.JACK, Rank.SEVEN, Rank.FOUR, Rank.TWO)

    def test_name(self, cards):
        assert evaluate(cards("Kc Kd Kh 7s 7c")).name == "Full House"
        assert hand_name(HandCategory.ROYAL_FLUSH) == "Royal Flush"


class TestStraights:
    def test_wheel(self, cards):
        hand = evaluate(cards("Ah 2d 3c 4s 5h Kd 9c"))
        assert hand.category == HandCategory.STRAIGHT
        assert hand.kickers == (Rank.FIVE,)

    def test_wheel_is_lowest_straight(self, cards):
        wheel = evaluate(cards("Ah 2d 3c 4s 5h"))
        six_high = evaluate(cards("2d 3c 4s 5h 6c"))
        assert compare(six_high, wheel) > 0

    def test_ace_not_low_outside_wheel(self, cards):
        # A-K-Q-J + 2 is no straight
        hand = evaluate(cards("Ah Kd Qc Js 2h"))
        assert hand.category == HandCategory.HIGH_CARD
        assert hand.kickers[0] == Rank.ACE

    def test_longest_run_uses_top(self, cards):
        hand = evaluate(cards("4c 5d 6h 7s 8c 9d 2h"))
        assert hand.kickers == (Rank.NINE,)

    def test_find_straight(self):
        assert find_straight([14, 5, 4, 3, 2]) == Rank.FIVE
        assert find_straight([14, 13, 12, 11, 10, 5, 4]) == Rank.ACE
        assert find_straight([14, 13, 12, 11, 9]) is None

    def test_royal_vs_straight_flush(self, cards):
        royal = evaluate(cards("Th Jh Qh Kh Ah"))
        king_high = evaluate(cards("9h Th Jh Qh Kh"))
        assert royal.category == HandCategory.ROYAL_FLUSH
        assert king_high.category == HandCategory.STRAIGHT_FLUSH
        assert king_high.score < royal.score

    def test_steel_wheel(self, cards):
        hand = evaluate(cards("As 2s 3s 4s 5s"))
        assert hand.category == HandCategory.STRAIGHT_FLUSH
        assert hand.kickers == (Rank.FIVE,)


class TestBestOfSeven:
    def test_flush_over_straight(self, cards):
        hand = evaluate(cards("5h 6h 7h 8h 9d 2h Kc"))
        assert hand.category == HandCategory.FLUSH
        assert hand.kickers == (Rank.EIGHT, Rank.SEVEN, Rank.SIX, Rank.FIVE, Rank.TWO)

    def test_straight_flush_over_bigger_flush(self, cards):
        hand = evaluate(cards("5h 6h 7h 8h 9h Ah Kh"))
        assert hand.category == HandCategory.STRAIGHT_FLUSH
        assert hand.kickers == (Rank.NINE,)

    def test_full_house_over_trips(self, cards):
        hand = evaluate(cards("Qc Qd Qh 4s 4c 9d 2h"))
        assert hand.category == HandCategory.FULL_HOUSE
        assert hand.kickers == (Rank.QUEEN, Rank.FOUR)

    def test_six_of_one_suit(self, cards):
        hand = evaluate(cards("2h 4h 6h 8h Th Qh Kd"))
        assert hand.category == HandCategory.FLUSH
        assert hand.kickers[0] == Rank.QUEEN
        assert Rank.TWO not in hand.kickers

    def test_hand_has_five_cards(self, cards):
        seven = cards("Qc Qd Qh 4s 4c 9d 2h")
        hand = evaluate(seven)
        assert len(hand.cards) == 5
        assert set(hand.cards) <= set(seven)

    def test_matches_brute_force(self, rng):
        deck = make_deck()
        for _ in range(50):
            seven = shuffle(deck, rng)[:7]
            best = max(evaluate(list(five)).score for five in combinations(seven, 5))
            assert evaluate(seven).score == best

    def test_six_cards(self, cards):
        hand = evaluate(cards("Ac Ad 7h 7s 2c Kd"))
        assert hand.category == HandCategory.TWO_PAIR
        assert hand.kickers == (Rank.ACE, Rank.SEVEN, Rank.KING)


class TestScoring:
    def test_invalid_card_count(self, cards):
        with pytest.raises(InvalidCardCount):
            evaluate(cards("Ac Kd Qh Js"))
        with pytest.raises(InvalidCardCount):
            evaluate(cards("Ac Kd Qh Js 9c 8c 7c 6c"))

    def test_invalid_card_count_is_value_error(self):
        with pytest.raises(ValueError, match="5-7 cards"):
            evaluate([])

    def test_compute_score(self):
        score = compute_score(HandCategory.ONE_PAIR, [Rank.TWO, Rank.FIVE, Rank.FOUR, Rank.THREE])
        expected = 1 * SCORE_BASE ** 5 + 2 * SCORE_BASE ** 4 + 5 * SCORE_BASE ** 3 \
            + 4 * SCORE_BASE ** 2 + 3 * SCORE_BASE
        assert score == expected

    def test_full_house_tie_break(self, cards):
        sevens = evaluate(cards("Kc Kd Kh 7s 7c"))
        eights = evaluate(cards("Kc Kd Kh 8s 8c"))
        assert sevens.category == eights.category == HandCategory.FULL_HOUSE
        assert compare(eights, sevens) > 0

    def test_kicker_decides(self, cards):
        ace_kicker = evaluate(cards("Qc Qd Ah 9s 3c"))
        king_kicker = evaluate(cards("Qh Qs Kh 9d 3d"))
        assert compare(ace_kicker, king_kicker) == 1

    def test_split_flushes(self, cards):
        clubs = evaluate(cards("Ac Jc 9c 6c 2c"))
        hearts = evaluate(cards("Ah Jh 9h 6h 2h"))
        assert compare(clubs, hearts) == 0

    def test_find_winners(self, cards):
        hands = [
            evaluate(cards("Ac Jc 9c 6c 2c")),
            evaluate(cards("Kc Kd Kh 7s 7c")),
            evaluate(cards("Kc Kd Kh 7d 7h")),
        ]
        assert find_winners(hands) == [1, 2]
        assert find_winners(hands[:1]) == [0]
        assert find_winners([]) == []


class TestTreysAgreement:
    def test_same_ordering_as_treys(self):
        """Cross-check comparisons against the treys evaluator."""
        treys = Evaluator()
        rng = np.random.default_rng(99)
        deck = make_deck()

        for _ in range(300):
            dealt = shuffle(deck, rng)[:9]
            hero, villain, board = dealt[:2], dealt[2:4], dealt[4:]

            ours = compare(evaluate(hero + board), evaluate(villain + board))

            hero_rank = treys.evaluate([c.to_treys() for c in hero], [c.to_treys() for c in board])
            villain_rank = treys.evaluate([c.to_treys() for c in villain], [c.to_treys() for c in board])
            # Lower is better in treys
            theirs = (villain_rank > hero_rank) - (villain_rank < hero_rank)

            assert ours == theirs, f"{hero} vs {villain} on {board}"
