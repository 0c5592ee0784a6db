import pytest

from kingsbuy.bots.costed import BuyPolicy, PolicyKind
from kingsbuy.engine.actions import default_reorder_policy
from kingsbuy.model.card import CardList
from kingsbuy.model.game import GameState
from kingsbuy.model.player import PlayerState


@pytest.fixture
def make_game():
    """
    Build a game by hand. Hands and the pile are symbol strings
    ("A73"); the last symbol of the pile is the next card drawn.
    """
    def _make(hands=("", ""), pile="", policies=None, kings=4, log=None):
        if policies is None:
            policies = [BuyPolicy.fixed(PolicyKind.IDLE)] * len(hands)
        players = [
            PlayerState(name=f"p{i + 1}", buy_policy=pol,
                        reorder_policy=default_reorder_policy,
                        hand=CardList.from_symbols(h))
            for i, (h, pol) in enumerate(zip(hands, policies))
        ]
        return GameState(players=players, remaining_cards=CardList.from_symbols(pile),
                         unbought_kings=kings, log=log)
    return _make
