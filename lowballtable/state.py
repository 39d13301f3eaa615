"""Game state as seen by the table view: cards, seats and the action log."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

MAX_SEATS = 6
HAND_SIZE = 5
MAX_LOG_ENTRIES = 8
MAX_LOG_LENGTH = 79


@dataclass(frozen=True)
class ViewCard:
    """A card by rank letter (A, 2-9, T, J, Q, K) and suit letter (h, d, c, s)."""

    rank: str
    suit: str


def _hidden_hand() -> List[ViewCard]:
    return [ViewCard("?", "?") for _ in range(HAND_SIZE)]


@dataclass
class ViewPlayer:
    """A seat at the table together with where it is drawn."""

    hand: List[ViewCard] = field(default_factory=_hidden_hand)
    chips: int = 0
    seat_position: int = 0
    y: int = 0
    x: int = 0
    is_active: bool = False
    is_folded: bool = False
    name: str = ""
    current_bet: int = 0
    personality: str = ""


def _empty_seats() -> List[ViewPlayer]:
    return [ViewPlayer(seat_position=seat) for seat in range(MAX_SEATS)]


@dataclass
class ViewGameState:
    """Everything the view needs to draw one moment of a hand."""

    players: List[ViewPlayer] = field(default_factory=_empty_seats)
    pot: int = 0
    current_bet: int = 0
    dealer_button: int = 0
    num_players: int = MAX_SEATS
    active_players: int = 0
    current_player: int = 0
    draw_round: int = 0
    action_log: List[str] = field(default_factory=list)
    hand_title: str = ""
    hand_description: str = ""

    @property
    def log_count(self) -> int:
        return len(self.action_log)

    @property
    def seated(self) -> List[ViewPlayer]:
        """The players taking part, in seat order."""
        return self.players[: self.num_players]

    def add_action_log(self, action: str) -> None:
        """Append a log line, keeping only the most recent entries."""
        self.action_log.append(action[:MAX_LOG_LENGTH])
        if len(self.action_log) > MAX_LOG_ENTRIES:
            del self.action_log[0]