import random
from collections import Counter

import pytest

from kingsbuy.bots.costed import BuyPolicy, PolicyKind
from kingsbuy.bots.random_policy import mk_random_policy_all_kings
from kingsbuy.engine.actions import default_reorder_policy
from kingsbuy.engine.loop import play_game, play_turn, resolve_result
from kingsbuy.engine.setup import new_game
from kingsbuy.model.card import Card
from kingsbuy.model.game import GameResult, Outcome
from kingsbuy.model.policy import BuyablePiece, BuyPolicyConfig, BuyPolicyItem
from kingsbuy.utils.logging import EventLog

KING_BUYER = BuyPolicy.fixed(PolicyKind.KING_BUYER)
IDLE = BuyPolicy.fixed(PolicyKind.IDLE)


# ---------------- reorder ----------------

def test_reorder_puts_lowest_on_top(make_game):
    g = make_game(pile="9A75")
    g.players[0].queens = 2
    default_reorder_policy(g, 0)
    assert str(g.remaining_cards) == "[975A]"
    assert g.remaining_cards.draw_top_card() is Card.ACE


def test_reorder_short_pile(make_game):
    g = make_game(pile="28")
    g.players[0].queens = 3
    default_reorder_policy(g, 0)
    assert str(g.remaining_cards) == "[82]"


def test_reorder_needs_a_queen(make_game):
    g = make_game(pile="9A75")
    default_reorder_policy(g, 0)
    assert str(g.remaining_cards) == "[9A75]"


# ---------------- one turn ----------------

def test_joker_ends_match_and_is_not_kept(make_game):
    g = make_game(hands=("55", ""), pile="5J")
    assert play_turn(g, 0) is True
    assert str(g.players[0].hand) == "[55]"
    assert Card.JOKER not in list(g.remaining_cards)


def test_ace_discards_hand_while_kings_remain(make_game):
    g = make_game(hands=("99", ""), pile="5A")
    assert play_turn(g, 0) is False
    assert str(g.players[0].hand) == "[A]"


def test_ace_is_harmless_after_last_king(make_game):
    g = make_game(hands=("99", ""), pile="5A", kings=0)
    play_turn(g, 0)
    assert str(g.players[0].hand) == "[99A]"


def test_jacks_draw_extra_cards(make_game):
    g = make_game(pile="A2345")
    g.players[0].jacks = 2
    play_turn(g, 0)
    assert str(g.players[0].hand) == "[543]"
    assert str(g.remaining_cards) == "[A2]"


def test_joker_mid_draw_stops_remaining_draws(make_game):
    g = make_game(pile="3J4")
    g.players[0].jacks = 2
    assert play_turn(g, 0) is True
    assert str(g.players[0].hand) == "[4]"
    assert str(g.remaining_cards) == "[3]"


def test_buy_phase_spends_card(make_game):
    g = make_game(hands=("", ""), pile="66", policies=[KING_BUYER, IDLE])
    play_turn(g, 0)
    assert g.unbought_kings == 3
    assert g.players[0].hand.is_empty()


def test_reorder_runs_before_discarding_draw(make_game):
    # the queen holder pulls the Ace forward, then loses the hand to it
    g = make_game(hands=("0", ""), pile="A9")
    g.players[0].queens = 1
    play_turn(g, 0)
    assert str(g.players[0].hand) == "[A]"
    assert str(g.remaining_cards) == "[9]"


def test_costed_buy_increments_owned_pieces(make_game):
    pol = BuyPolicy.costed(BuyPolicyConfig([BuyPolicyItem(BuyablePiece.QUEEN, 1, 10)]))
    g = make_game(hands=("", ""), pile="4", policies=[pol, IDLE])
    play_turn(g, 0)
    assert g.players[0].queens == 1
    assert g.players[0].hand.is_empty()


# ---------------- terminal resolution ----------------

def test_paperclips_when_kings_remain(make_game):
    g = make_game(hands=("00", "A"), kings=1)
    assert resolve_result(g) == GameResult.paperclips()


def test_tie_for_highest_is_a_draw(make_game):
    g = make_game(hands=("55", "9A"), kings=0)
    assert resolve_result(g) == GameResult.draw()


def test_strict_highest_names_winner(make_game):
    g = make_game(hands=("55", "9"), kings=0)
    assert resolve_result(g) == GameResult.winner_named("p1")


def test_tie_below_the_leader_still_has_a_winner(make_game):
    g = make_game(hands=("3", "3", "9"), kings=0)
    assert resolve_result(g).winner == "p3"


# ---------------- whole matches ----------------

def _table_cards(g) -> Counter:
    c = Counter(g.remaining_cards)
    for p in g.players:
        c.update(p.hand)
    return c


@pytest.mark.parametrize("seed", range(30))
def test_match_conserves_cards_and_counters(seed):
    rng = random.Random(seed)
    policies = [mk_random_policy_all_kings(rng)[0] for _ in range(3)]
    log = EventLog()
    g = new_game(policies, rng, log=log)

    before = _table_cards(g)
    assert sum(before.values()) == 41

    for _ in range(100):
        kings = g.unbought_kings
        owned = [(p.jacks, p.queens) for p in g.players]
        seen = len(log.records)

        ended = play_turn(g, g.current_player)
        after = _table_cards(g)
        assert not (after - before)  # nothing created
        if ended:
            assert after[Card.JOKER] == 0
            break

        new = log.records[seen:]
        spent = sum(1 for r in new if r["a"] == "buy")
        discarded = sum(r["n"] for r in new if r["a"] == "discard_hand")
        assert sum((before - after).values()) == spent + discarded

        assert 0 <= g.unbought_kings <= kings
        for (j, q), p in zip(owned, g.players):
            assert p.jacks >= j and p.queens >= q

        before = after
        g.current_player = (g.current_player + 1) % len(g.players)
    else:
        pytest.fail("match never reached the Joker")


def test_play_game_logs_result():
    rng = random.Random(3)
    log = EventLog()
    g = new_game([KING_BUYER, KING_BUYER], rng, log=log)
    result = play_game(g)
    end = log.of_kind("game_end")
    assert len(end) == 1
    assert end[0]["result"] == str(result)
    assert len(log.of_kind("game_start")) == 1


def test_idle_table_never_buys_kings():
    rng = random.Random(11)
    for _ in range(50):
        assert play_game(new_game([IDLE, IDLE], rng)) == GameResult.paperclips()


def _completions(policies, seed, n):
    rng = random.Random(seed)
    done = 0
    for _ in range(n):
        g = new_game(policies, rng)
        result = play_game(g)
        if g.unbought_kings == 0:
            done += 1
            assert result.outcome in (Outcome.DRAW, Outcome.WINNER)
    return done


def test_king_buyer_meets_objective_idle_does_not():
    n = 300
    idle_only = _completions([IDLE, IDLE], 2024, n)
    second_seat = _completions([IDLE, KING_BUYER], 2024, n)
    first_seat = _completions([KING_BUYER, IDLE], 2024, n)
    assert idle_only == 0
    assert second_seat > n // 3 and second_seat > idle_only
    assert first_seat > n // 3 and first_seat > idle_only


def test_unlogged_game_plays_without_events():
    g = new_game([KING_BUYER, KING_BUYER], random.Random(3))
    assert g.log is None
    result = play_game(g)
    assert result == play_game(new_game([KING_BUYER, KING_BUYER], random.Random(3), log=EventLog()))


def test_logged_game_records_every_draw(make_game):
    log = EventLog()
    g = make_game(pile="A2345", log=log)
    g.players[0].jacks = 2
    play_turn(g, 0)
    assert [r["card"] for r in log.of_kind("draw")] == ["5", "4", "3"]
