from typing import Any, Dict, List, Optional


Card = Dict[str, Any]


def is_card(value) -> bool:
    """A card is any JSON object carrying an ``id``; other keys are opaque."""
    return isinstance(value, dict) and 'id' in value


def is_card_list(value) -> bool:
    return isinstance(value, list) and all(is_card(card) for card in value)


class DeckState:
    """The single shared deck: four piles plus the last applied action.

    Every card lives in exactly one pile. The front of ``draw_pile`` is the
    next card to draw and the front of ``discard_pile`` the most recently
    discarded one.
    """

    def __init__(self, draw_pile=None, hand=None, discard_pile=None, peeked_cards=None, last_action=None):
        self.draw_pile: List[Card] = list(draw_pile or [])
        self.hand: List[Card] = list(hand or [])
        self.discard_pile: List[Card] = list(discard_pile or [])
        self.peeked_cards: List[Card] = list(peeked_cards or [])
        self.last_action: Optional[Dict[str, Any]] = last_action

    def to_dict(self):
        return {
            'drawPile': list(self.draw_pile),
            'hand': list(self.hand),
            'discardPile': list(self.discard_pile),
            'peekedCards': list(self.peeked_cards),
            'lastAction': dict(self.last_action) if self.last_action else None,
        }


class ConnectionRecord:
    def __init__(self, sid: str, now: float):
        self.sid = sid
        self.connected_at = now
        self.last_seen = now

    def touch(self, now: float) -> None:
        self.last_seen = now

    def idle_for(self, now: float) -> float:
        return max(0.0, now - self.last_seen)

    def is_stale(self, now: float, threshold: float) -> bool:
        return now - self.last_seen >= threshold
