import random
from typing import Any, Dict, Optional, Tuple

from deckhub.models import DeckState, is_card_list


DRAW = 'draw'
DISCARD = 'discard'
PEEK = 'peek'
RETURN_PEEKED = 'returnPeeked'
RESET_DECK = 'resetDeck'
UPDATE_PEEKED_CARDS = 'updatePeekedCards'


class DeckStore:
    """Owner of the shared ``DeckState``.

    ``apply`` is the only entry point that changes the state. Requests that
    are malformed or whose precondition fails leave the state untouched and
    report ``mutated=False``; nothing is raised back to the caller.

    Not thread-safe on its own: callers serialize access (see ``SessionHub``).
    """

    def __init__(self, state: Optional[DeckState] = None, rng: Optional[random.Random] = None):
        self._state = state or DeckState()
        self._rng = rng or random.Random()
        self._transitions = {
            DRAW: self._draw,
            DISCARD: self._discard,
            PEEK: self._peek,
            RETURN_PEEKED: self._return_peeked,
            RESET_DECK: self._reset_deck,
            UPDATE_PEEKED_CARDS: self._update_peeked_cards,
        }

    def snapshot(self) -> Dict[str, Any]:
        return self._state.to_dict()

    def apply(self, action_type: str, payload: Optional[Dict[str, Any]] = None) -> Tuple[bool, Dict[str, Any]]:
        transition = self._transitions.get(action_type)
        if transition is None:
            return False, self.snapshot()
        mutated = transition(payload if isinstance(payload, dict) else {})
        return mutated, self.snapshot()

    def _draw(self, payload) -> bool:
        state = self._state
        if state.draw_pile:
            card = state.draw_pile.pop(0)
            state.hand.append(card)
            state.last_action = {'type': DRAW, 'card': card}
            return True
        if state.discard_pile:
            # Empty draw pile: recycle the discards instead of drawing
            recycled = list(state.discard_pile)
            self._rng.shuffle(recycled)
            state.draw_pile = recycled
            state.discard_pile = []
            state.last_action = {'type': 'reset'}
            return True
        return False

    def _discard(self, payload) -> bool:
        state = self._state
        if not state.hand:
            return False
        state.discard_pile = state.hand + state.discard_pile
        state.hand = []
        state.last_action = {'type': DISCARD}
        return True

    def _peek(self, payload) -> bool:
        state = self._state
        count = payload.get('count') or 1
        if isinstance(count, bool):
            return False
        try:
            count = int(count)
        except (TypeError, ValueError):
            return False
        n = min(count, len(state.draw_pile))
        if n <= 0:
            return False
        revealed = state.draw_pile[:n]
        # Cards still revealed go back on top of what remains
        state.draw_pile = state.peeked_cards + state.draw_pile[n:]
        state.peeked_cards = revealed
        state.last_action = {'type': PEEK}
        return True

    def _return_peeked(self, payload) -> bool:
        state = self._state
        if not state.peeked_cards:
            return False
        state.draw_pile = state.peeked_cards + state.draw_pile
        state.peeked_cards = []
        state.last_action = {'type': RETURN_PEEKED}
        return True

    def _reset_deck(self, payload) -> bool:
        cards = payload.get('cards')
        if not is_card_list(cards):
            return False
        self._state = DeckState(draw_pile=cards, last_action={'type': 'reset'})
        return True

    def _update_peeked_cards(self, payload) -> bool:
        cards = payload.get('peekedCards')
        if not is_card_list(cards):
            return False
        self._state.peeked_cards = list(cards)
        self._state.last_action = {'type': UPDATE_PEEKED_CARDS}
        return True
