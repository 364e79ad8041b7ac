"""
Transcript Snapshots - Plain-data views of cards shared by every game.

Snapshots are pydantic models holding copied values only, so they
never change when the live game state is mutated afterwards.
Game-specific board snapshots live in each game's transcript module.
"""

from __future__ import annotations
from pydantic import BaseModel

from .cards import Card, Rank, Suit


class CardSnapshot(BaseModel):
    """Rank, suit and face of one card. No other fields."""
    rank: Rank
    suit: Suit
    face_up: bool

    model_config = {"frozen": True}


def snapshot_card(card: Card) -> CardSnapshot:
    """Capture a card, always including its face-up state."""
    return CardSnapshot(rank=card.rank, suit=card.suit, face_up=card.face_up)
