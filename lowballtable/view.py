"""Draws a 2-7 lowball table, cards, seats and the action log onto a canvas."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from lowballtable.canvas import Canvas
from lowballtable.state import ViewCard, ViewGameState, ViewPlayer

BACKGROUND = (12, 15, 18)
TABLE_BORDER = (85, 85, 95)
FELT = (0, 80, 20)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED_SUIT = (220, 0, 0)
CARD_BACK_BG = (20, 30, 45)
CARD_BACK_FG = (120, 150, 180)
BOX_BG = (15, 20, 25)
CURRENT_FG = (255, 255, 100)
FOLDED_FG = (100, 100, 100)
HERO_FG = (150, 255, 150)
OTHER_FG = (180, 200, 220)
BET_FG = (100, 200, 255)
DEALER_FG = (255, 215, 0)
DESCRIPTION_FG = (120, 255, 120)
LOG_FG = (180, 200, 220)
TITLE_FG = (200, 220, 255)

_SUITS = {"h": "♥", "d": "♦", "c": "♣", "s": "♠"}
_FACE_RANKS = {"A": 14, "K": 13, "Q": 12, "J": 11, "T": 10}
_HIDDEN = ViewCard("?", "?")


def suit_symbol(suit: str) -> str:
    """The printed symbol for a suit letter, or '?' for an unknown suit."""
    return _SUITS.get(suit, "?")


def rank_label(rank: str) -> str:
    """The printed label for a rank letter ('T' becomes '10')."""
    return "10" if rank == "T" else rank


def ease_in_out(t: float) -> float:
    """Smoothstep easing."""
    return t * t * (3.0 - 2.0 * t)


def _rank_value(rank: str) -> int:
    if rank in _FACE_RANKS:
        return _FACE_RANKS[rank]
    return ord(rank) - ord("0")


def hand_description(hand: Sequence[ViewCard]) -> str:
    """Describe a five-card hand by 2-7 lowball standards."""
    cards = list(hand)[:5]
    is_flush = all(card.suit == cards[0].suit for card in cards)
    ranks = sorted(_rank_value(card.rank) for card in cards)
    is_straight = all(b - a == 1 for a, b in zip(ranks, ranks[1:]))
    high = ranks[4]

    if ranks == [2, 3, 4, 5, 7] and not is_flush and not is_straight:
        return "7-5-4-3-2 (THE NUTS!)"
    if is_flush or is_straight:
        return "Straight/Flush (Very Bad)"
    if high <= 8:
        return f"{high}-low (Excellent)"
    if high <= 9:
        return f"{high}-low (Good)"
    if high <= 11:
        return f"{'T' if high == 10 else 'J'}-low (Fair)"
    letter = "Q" if high == 12 else ("K" if high == 13 else "A")
    return f"{letter}-low (Poor)"


def _skipped(skip_cards: Optional[Sequence[int]], index: int) -> bool:
    return bool(skip_cards) and index < len(skip_cards) and bool(skip_cards[index])


class BeautifulView:
    """Modern minimalist table renderer drawing onto a :class:`Canvas`."""

    def __init__(self, canvas: Canvas) -> None:
        self.canvas = canvas
        self.animating_player = -1

    @property
    def dimy(self) -> int:
        return self.canvas.rows

    @property
    def dimx(self) -> int:
        return self.canvas.cols

    @property
    def is_compact(self) -> bool:
        """True on terminals too small for full-size cards and boxes."""
        return self.dimx < 100 or self.dimy < 30

    def draw_table(self, game: Optional[ViewGameState] = None) -> None:
        """Fill the background and draw the oval table with its centre title."""
        c = self.canvas
        dimy, dimx = self.dimy, self.dimx
        center_y, center_x = dimy // 2, dimx // 2
        radius_y = dimy // 3
        radius_x = int(dimx / 2.5)

        c.set_bg(*BACKGROUND)
        for y in range(dimy):
            c.put_str(y, 0, " " * dimx)

        if radius_x > 0 and radius_y > 0:
            for y in range(center_y - radius_y, center_y + radius_y + 1):
                dy = (y - center_y) / radius_y
                for x in range(center_x - radius_x, center_x + radius_x + 1):
                    dx = (x - center_x) / radius_x
                    distance = dx * dx + dy * dy
                    if distance <= 1.0:
                        c.set_bg(*(TABLE_BORDER if distance > 0.92 else FELT))
                        c.put_char(y, x, " ")

        c.set_fg(*WHITE)
        c.set_bg(*FELT)
        if dimx > 70:
            c.put_str(center_y, center_x - 11, "2-7 TRIPLE DRAW LOWBALL")
        else:
            c.put_str(center_y, center_x - 5, "2-7 LOWBALL")

    def draw_card(self, y: int, x: int, card: ViewCard, face_down: bool = False) -> None:
        """Draw a 3x5 card, face up or showing its back."""
        c = self.canvas
        if face_down:
            c.set_bg(*CARD_BACK_BG)
            c.set_fg(*CARD_BACK_FG)
            c.put_str(y, x, "┌───┐")
            c.put_str(y + 1, x, "│ ▪ │")
            c.put_str(y + 2, x, "└───┘")
            return

        c.set_bg(*WHITE)
        c.set_fg(*BLACK)
        c.put_str(y, x, "┌───┐")
        c.put_str(y + 1, x, "│   │")
        c.put_str(y + 2, x, "└───┘")

        c.set_fg(*(RED_SUIT if card.suit in ("h", "d") else BLACK))
        label = rank_label(card.rank)
        offset = (3 - (len(label) + 1)) // 2 + 1
        c.set_bg(*WHITE)
        c.put_str(y + 1, x + offset, label + suit_symbol(card.suit))

    def _player_colour(self, player: ViewPlayer, game: ViewGameState) -> tuple:
        if player.seat_position == game.current_player and not player.is_folded:
            return CURRENT_FG
        if player.is_folded:
            return FOLDED_FG
        if player.seat_position == 0:
            return HERO_FG
        return OTHER_FG

    def draw_player_box(self, player: ViewPlayer, game: ViewGameState) -> None:
        """Draw the name, chip count, bet and dealer button for one seat."""
        c = self.canvas
        c.set_bg(*BOX_BG)
        c.set_fg(*self._player_colour(player, game))

        if self.is_compact:
            c.put_str(player.y, player.x, " " * 12)
            c.put_str(player.y, player.x, f"{player.name:<4} ${player.chips}")
            if player.current_bet > 0:
                c.set_fg(*BET_FG)
                c.put_str(player.y + 1, player.x, f"(${player.current_bet})")
            return

        c.put_str(player.y, player.x, "┌─────────────┐")
        c.put_str(player.y + 1, player.x, "│             │")
        c.put_str(player.y + 2, player.x, "│             │")
        c.put_str(player.y + 3, player.x, "└─────────────┘")
        c.put_str(player.y + 1, player.x + 1, f" {player.name:<10} ")
        c.put_str(player.y + 2, player.x + 1, f" ${player.chips:<9} ")

        if player.current_bet > 0:
            c.set_fg(*BET_FG)
            c.put_str(player.y + 2, player.x + 8, f"(${player.current_bet})")

        if game.dealer_button == player.seat_position:
            c.set_fg(*DEALER_FG)
            c.put_str(player.y, player.x + 14, "D")

    def draw_player_hand(
        self,
        player: ViewPlayer,
        show_cards: bool,
        skip_cards: Optional[Sequence[int]] = None,
    ) -> None:
        """Draw a seat's cards, leaving out those flagged in ``skip_cards``."""
        if player.is_folded:
            return
        c = self.canvas
        compact = self.is_compact
        if compact:
            card_y, card_x = player.y + 2, player.x - 7
        else:
            card_y, card_x = player.y + 5, player.x - 12

        if player.seat_position == 0 and show_cards:
            card_y = self.dimy - 8
            card_x = self.dimx // 2 - 15
            if not any(_skipped(skip_cards, i) for i in range(5)):
                c.set_fg(*DESCRIPTION_FG)
                c.set_bg(*BACKGROUND)
                desc = hand_description(player.hand)
                desc_x = self.dimx // 2 - len(desc) // 2 - 1
                c.put_str(card_y - 2, desc_x, f"[{desc}]")
            for i, card in enumerate(player.hand[:5]):
                if not _skipped(skip_cards, i):
                    self.draw_card(card_y, card_x + i * 6, card, False)
            return

        for i in range(5):
            if _skipped(skip_cards, i):
                continue
            if compact:
                c.set_bg(*CARD_BACK_BG)
                c.set_fg(*CARD_BACK_FG)
                c.put_str(card_y, card_x + i * 2, "▪")
            else:
                self.draw_card(card_y, card_x + i * 4, _HIDDEN, True)

    def draw_game_info(self, game: ViewGameState) -> None:
        """Draw the pot in the middle of the table once there is one."""
        if game.pot <= 0:
            return
        c = self.canvas
        center_y, center_x = self.dimy // 2, self.dimx // 2
        c.set_bg(*FELT)
        c.put_str(center_y - 1, center_x - 8, " " * 17)
        c.set_fg(*BET_FG)
        c.put_str(center_y - 1, center_x - 5, f"POT: ${game.pot}")

    def draw_action_log(self, game: ViewGameState) -> None:
        """Show the latest log line at the bottom on large enough terminals."""
        if self.dimx < 90 or self.dimy < 30 or not game.action_log:
            return
        c = self.canvas
        c.set_bg(*BACKGROUND)
        c.set_fg(*LOG_FG)
        c.put_str(self.dimy - 2, 2, f"► {game.action_log[-1][:34]}")

    def position_players(self, game: ViewGameState) -> None:
        """Hero at the bottom centre, the others on an upper semicircle."""
        center_y, center_x = self.dimy // 2, self.dimx // 2
        radius_y = self.dimy // 3
        radius_x = int(self.dimx / 2.5)

        hero = game.players[0]
        hero.seat_position = 0
        hero.y = self.dimy - 6
        hero.x = center_x - 6

        for i, player in enumerate(game.seated[1:], start=1):
            angle = math.pi + math.pi * (i - 1) / 4.0
            player.seat_position = i
            player.y = center_y + int(radius_y * 0.8 * math.sin(angle))
            player.x = center_x + int(radius_x * 0.8 * math.cos(angle)) - 6

    def render_scene(
        self,
        game: ViewGameState,
        hide_player: int = -1,
        hide_cards: Optional[Sequence[int]] = None,
    ) -> Canvas:
        """Redraw the whole scene, optionally hiding cards of one seat."""
        self.canvas.erase()
        self.draw_table(game)
        for i, player in enumerate(game.seated):
            self.draw_player_box(player, game)
            skip = hide_cards if i == hide_player and hide_cards is not None else None
            self.draw_player_hand(player, i == 0, skip)
        self.draw_game_info(game)
        self.draw_action_log(game)

        c = self.canvas
        c.set_fg(*TITLE_FG)
        c.set_bg(*BACKGROUND)
        desc_x = int((self.dimx - len(game.hand_description)) / 2)
        c.put_str(1, desc_x, game.hand_description)
        return c