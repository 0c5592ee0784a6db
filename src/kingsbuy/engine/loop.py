# src/kingsbuy/engine/loop.py
from __future__ import annotations
from typing import List

from kingsbuy.bots.costed import choose_buy
from kingsbuy.engine.actions import apply_buy
from kingsbuy.model.card import Card, CardList
from kingsbuy.model.game import GameResult, GameState


def _draw_phase(g: GameState, pid: int) -> bool:
    """Draw 1 + jacks cards. Returns True if the Joker came up."""
    p = g.players[pid]
    for _ in range(1 + p.jacks):
        card = g.remaining_cards.draw_top_card()
        if g.log is not None:
            g.emit({"a": "draw", "t": g.turn, "p": p.name, "card": card.symbol})
        if card is Card.JOKER:
            return True
        if card is Card.ACE and g.unbought_kings > 0:
            # prior hand is lost; the Ace itself is kept
            if g.log is not None:
                g.emit({"a": "discard_hand", "t": g.turn, "p": p.name, "n": len(p.hand)})
            p.hand = CardList()
        p.hand.place_card_on_top(card)
    return False


def play_turn(g: GameState, pid: int) -> bool:
    """One full turn for seat `pid`. Returns True when the match is over."""
    p = g.players[pid]
    p.reorder_policy(g, pid)

    if _draw_phase(g, pid):
        if g.log is not None:
            g.emit({"a": "joker", "t": g.turn, "p": p.name, "unbought_kings": g.unbought_kings})
        return True

    apply_buy(g, pid, choose_buy(g, pid, p.buy_policy))
    return False


def _advance_player(g: GameState) -> None:
    g.current_player = (g.current_player + 1) % len(g.players)
    g.turn += 1


def resolve_result(g: GameState) -> GameResult:
    if g.unbought_kings > 0:
        return GameResult.paperclips()

    scores: List[int] = [p.hand.score_hand() for p in g.players]
    best = max(scores)
    leaders = [p for p, s in zip(g.players, scores) if s == best]
    if len(leaders) >= 2:
        return GameResult.draw()
    return GameResult.winner_named(leaders[0].name)


def play_game(g: GameState) -> GameResult:
    while not play_turn(g, g.current_player):
        _advance_player(g)

    result = resolve_result(g)
    if g.log is not None:
        g.emit({"a": "game_end", "t": g.turn, "result": str(result),
                "scores": {p.name: p.hand.score_hand() for p in g.players}})
    return result
