"""Scripted 2-7 triple draw lowball hand played out on a terminal table."""

from __future__ import annotations

import argparse
import shutil
import sys
import time
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, TextIO

from lowballtable.canvas import Canvas
from lowballtable.script import (
    AFTER,
    BEFORE,
    SHOWDOWN,
    WINNER,
    HandScript,
    find_winner,
    hand_events,
    perfect_lowball_script,
    setup_game,
)
from lowballtable.state import ViewCard, ViewGameState, ViewPlayer
from lowballtable.view import (
    BACKGROUND,
    CARD_BACK_BG,
    CARD_BACK_FG,
    FELT,
    WHITE,
    BeautifulView,
    ease_in_out,
)

ROUND_NAMES = ("PRE-DRAW", "DRAW 1", "DRAW 2", "DRAW 3", "SHOWDOWN")

FOLDED_FG = (80, 80, 80)
HERO_FG = (100, 200, 255)
ACTIVE_FG = (120, 255, 120)
OTHER_FG = (200, 200, 200)
DEALER_FG = (255, 80, 80)
BET_FG = (255, 120, 120)
TITLE_FG = (200, 220, 255)
ROUND_BG = (30, 45, 60)

_HIDDEN = ViewCard("?", "?")
_STEPS = 15
_DISCARD_DELAY = 0.018
_DEAL_DELAY = 0.015
_PHASE_PAUSE = 0.2


def _action_colour(action_kind: str) -> tuple:
    if "fold" in action_kind:
        return FOLDED_FG
    if "raise" in action_kind or "bet" in action_kind:
        return BET_FG
    return ACTIVE_FG


class DemoRenderer:
    """Draws the demo's table, seats, cards and round information on a canvas."""

    def __init__(self, canvas: Canvas) -> None:
        self.canvas = canvas
        self._base = BeautifulView(canvas)

    @property
    def dimy(self) -> int:
        return self.canvas.rows

    @property
    def dimx(self) -> int:
        return self.canvas.cols

    @property
    def is_compact(self) -> bool:
        return self.dimx < 100 or self.dimy < 30

    def draw_table(self) -> None:
        """Background and oval felt with the game name in the middle."""
        self._base.draw_table()

    def draw_card(self, y: int, x: int, card: ViewCard, face_down: bool = False) -> None:
        self._base.draw_card(y, x, card, face_down)

    def draw_player_box(self, player: ViewPlayer, game: ViewGameState) -> None:
        """A box with name, chips, bet or FOLD, plus the dealer button."""
        c = self.canvas
        box_y = player.y - 1
        box_x = player.x - 3

        if player.is_folded:
            c.set_fg(*FOLDED_FG)
        elif player.seat_position == 0:
            c.set_fg(*HERO_FG)
        elif game.current_player == player.seat_position:
            c.set_fg(*ACTIVE_FG)
        else:
            c.set_fg(*OTHER_FG)
        c.set_bg(*BACKGROUND)

        c.put_str(box_y, box_x, "┌─────────────┐")
        c.put_str(box_y + 1, box_x, "│             │")
        c.put_str(box_y + 2, box_x, "│             │")
        c.put_str(box_y + 3, box_x, "└─────────────┘")

        if game.dealer_button == player.seat_position:
            c.set_fg(*DEALER_FG)
            c.put_str(box_y, box_x + 15, "D")

        c.set_fg(*WHITE)
        c.put_str(box_y + 1, box_x + 1, f"{player.name:<11}")

        if player.is_folded:
            c.set_fg(*FOLDED_FG)
            c.put_str(box_y + 2, box_x + 10, "FOLD")
            return
        c.set_fg(*HERO_FG)
        c.put_str(box_y + 2, box_x + 1, f"${player.chips:<4}")
        if player.current_bet > 0:
            c.set_fg(*BET_FG)
            c.put_str(box_y + 2, box_x + 7, f"bet${player.current_bet}")

    def draw_player_hand(
        self,
        player: ViewPlayer,
        show_cards: bool,
        skip_cards: Optional[Sequence[int]] = None,
    ) -> None:
        self._base.draw_player_hand(player, show_cards, skip_cards)

    def draw_game_info(self, game: ViewGameState) -> None:
        """Hand title, current round and pot in the middle of the table."""
        c = self.canvas
        center_y, center_x = self.dimy // 2, self.dimx // 2

        if self.dimx > 80 and self.dimy > 25:
            c.set_fg(*TITLE_FG)
            c.set_bg(*FELT)
            c.put_str(center_y - 6, center_x - len(game.hand_title) // 2, game.hand_title)

        c.set_bg(*ROUND_BG)
        c.put_str(center_y - 3, center_x - 8, " " * 17)
        c.set_fg(*WHITE)
        name = ROUND_NAMES[min(max(game.draw_round, 0), len(ROUND_NAMES) - 1)]
        c.put_str(center_y - 3, center_x - len(name) // 2, name)

        c.set_bg(*FELT)
        c.put_str(center_y - 1, center_x - 8, " " * 17)
        c.set_fg(*HERO_FG)
        c.put_str(center_y - 1, center_x - 5, f"POT: ${game.pot}")

    def draw_action_log(self, game: ViewGameState) -> None:
        self._base.draw_action_log(game)

    def draw_scene(
        self,
        game: ViewGameState,
        hide_player: int = -1,
        hide_cards: Optional[Sequence[int]] = None,
    ) -> Canvas:
        """Redraw everything, optionally hiding some of one seat's cards."""
        c = self.canvas
        c.erase()
        self.draw_table()
        for i, player in enumerate(game.seated):
            self.draw_player_box(player, game)
            skip = hide_cards if i == hide_player and hide_cards is not None else None
            self.draw_player_hand(player, i == 0, skip)
        self.draw_game_info(game)
        self.draw_action_log(game)

        c.set_fg(*TITLE_FG)
        c.set_bg(*BACKGROUND)
        desc_x = int((self.dimx - len(game.hand_description)) / 2)
        c.put_str(1, desc_x, game.hand_description)
        return c


@dataclass(frozen=True)
class Frame:
    """One animation frame: already drawn on the canvas when yielded."""

    phase: str
    card_index: int
    y: int
    x: int
    delay: float


def _draw_moving_card(
    renderer: DemoRenderer, y: int, x: int, card: Optional[ViewCard], tiny: bool
) -> None:
    if tiny:
        c = renderer.canvas
        c.set_bg(*CARD_BACK_BG)
        c.set_fg(*CARD_BACK_FG)
        c.put_str(y, x, "▪")
    elif card is not None:
        renderer.draw_card(y, x, card, False)
    else:
        renderer.draw_card(y, x, _HIDDEN, True)


def replacement_frames(
    renderer: DemoRenderer,
    game: ViewGameState,
    player_idx: int,
    cards_to_replace: Sequence[int],
    old_cards: Optional[Sequence[ViewCard]] = None,
) -> Iterator[Frame]:
    """Draw discards flying to the muck and replacements arriving from the deck.

    Each yielded frame is already drawn on ``renderer.canvas``; the caller shows
    it and waits ``frame.delay`` seconds.
    """
    dimy, dimx = renderer.dimy, renderer.dimx
    deck_y, deck_x = dimy // 2, dimx // 2
    discard_y, discard_x = deck_y + 2, deck_x + 3
    compact = renderer.is_compact
    hidden = [int(bool(flag)) for flag in cards_to_replace]

    if player_idx == 0:
        card_y, card_x, spacing = dimy - 8, dimx // 2 - 15, 6
    else:
        player = game.players[player_idx]
        if compact:
            card_y, card_x, spacing = player.y + 2, player.x - 7, 2
        else:
            card_y, card_x, spacing = player.y + 5, player.x - 12, 4
    tiny = player_idx != 0 and compact

    discarded = [i for i, flag in enumerate(hidden) if flag]

    for index in discarded:
        start_x = card_x + index * spacing
        for step in range(_STEPS + 1):
            renderer.draw_scene(game, player_idx, hidden)
            eased = ease_in_out(step / _STEPS)
            curr_y = card_y + int((discard_y - card_y) * eased)
            curr_x = start_x + int((discard_x - start_x) * eased)
            shown = None
            if player_idx == 0 and old_cards is not None:
                shown = old_cards[index]
            _draw_moving_card(renderer, curr_y, curr_x, shown, tiny)
            yield Frame("discard", index, curr_y, curr_x, _DISCARD_DELAY)

    yield Frame("pause", -1, deck_y, deck_x, _PHASE_PAUSE)

    for index in discarded:
        target_x = card_x + index * spacing
        for step in range(_STEPS + 1):
            renderer.draw_scene(game, player_idx, hidden)
            eased = ease_in_out(step / _STEPS)
            curr_y = deck_y + int((card_y - deck_y) * eased)
            curr_x = deck_x + int((target_x - deck_x) * eased)
            _draw_moving_card(renderer, curr_y, curr_x, None, tiny)
            yield Frame("deal", index, curr_y, curr_x, _DEAL_DELAY)


class _Screen:
    """Pushes canvas frames to a text stream and paces them."""

    def __init__(self, renderer: DemoRenderer, stream: TextIO, speed: float) -> None:
        self.renderer = renderer
        self.stream = stream
        self.speed = speed

    def show(self) -> None:
        self.stream.write("\x1b[H" + self.renderer.canvas.to_ansi())
        self.stream.flush()

    def pause(self, seconds: float) -> None:
        if self.speed > 0:
            time.sleep(seconds / self.speed)

    def scene(self, game: ViewGameState) -> None:
        self.renderer.draw_scene(game)
        self.show()


def _flash_player(screen: _Screen, game: ViewGameState, seat: int, kind: str) -> None:
    renderer = screen.renderer
    c = renderer.canvas
    p = game.players[seat]
    for _ in range(2):
        renderer.draw_scene(game)
        c.set_fg(*_action_colour(kind))
        c.set_bg(*BACKGROUND)
        c.put_str(p.y - 1, p.x - 3, "┌─────────────┐")
        c.put_str(p.y, p.x - 3, "│             │")
        c.put_str(p.y + 1, p.x - 3, "│             │")
        c.put_str(p.y + 2, p.x - 3, "└─────────────┘")
        renderer.draw_player_box(p, game)
        screen.show()
        screen.pause(0.06)


def _celebrate_win(screen: _Screen, game: ViewGameState) -> None:
    renderer = screen.renderer
    c = renderer.canvas
    msg_y = renderer.dimy // 2 - 2
    msg_x = renderer.dimx // 2 - 10
    for _ in range(3):
        renderer.draw_scene(game)
        c.set_fg(*HERO_FG)
        c.set_bg(*FELT)
        for row in (msg_y - 1, msg_y, msg_y + 1):
            c.put_str(row, msg_x - 2, " " * 25)
        c.put_str(msg_y, msg_x, "🎉 YOU WIN! 🎉")
        c.put_str(msg_y + 1, msg_x + 2, f"Pot: ${game.pot}")
        screen.show()
        screen.pause(0.3)
        screen.scene(game)
        screen.pause(0.15)
    screen.pause(2)


def _play_hand(screen: _Screen, script: HandScript, hand_num: int) -> ViewGameState:
    renderer = screen.renderer
    game = setup_game(script, hand_num, renderer.dimy, renderer.dimx)
    screen.scene(game)
    screen.pause(2)

    for kind, action, old_hand in hand_events(game, script):
        if kind == BEFORE and action is not None:
            _flash_player(screen, game, action.player, action.kind)
        elif kind == AFTER and action is not None:
            if action.kind == "draw":
                screen.scene(game)
                if action.num_draws > 0:
                    for frame in replacement_frames(
                        renderer, game, action.player, action.cards_to_draw, old_hand
                    ):
                        if frame.phase != "pause":
                            screen.show()
                        screen.pause(frame.delay)
            screen.scene(game)
            screen.pause(0.7)
        elif kind == SHOWDOWN:
            screen.scene(game)
            screen.pause(3)
        elif kind == WINNER:
            screen.scene(game)

    if find_winner(game) == 0:
        _celebrate_win(screen, game)
    else:
        screen.pause(3)
    return game


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {text}")
    return value


def _non_negative_float(text: str) -> float:
    value = float(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number, got {text}")
    return value


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lowballtable", description="Watch a scripted hand of 2-7 triple draw."
    )
    parser.add_argument("--rows", type=_positive_int, help="screen height in rows")
    parser.add_argument("--cols", type=_positive_int, help="screen width in columns")
    parser.add_argument(
        "--speed",
        type=_non_negative_float,
        default=1.0,
        help="playback speed factor; 0 plays without pauses",
    )
    parser.add_argument(
        "--no-wait", action="store_true", help="exit without waiting for Enter"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play the scripted hand in the terminal."""
    args = _parse_args(argv)
    size = shutil.get_terminal_size((100, 30))
    rows = args.rows or size.lines
    cols = args.cols or size.columns

    renderer = DemoRenderer(Canvas(rows, cols))
    stream = sys.stdout
    screen = _Screen(renderer, stream, args.speed)

    stream.write("\x1b[?25l\x1b[2J")
    try:
        _play_hand(screen, perfect_lowball_script(), 0)

        c = renderer.canvas
        c.erase()
        c.set_fg(*HERO_FG)
        c.set_bg(*BACKGROUND)
        c.put_str(12, 28, "2-7 Triple Draw Lowball")
        c.put_str(14, 25, "Press Enter to leave the table")
        screen.show()
        if not args.no_wait and sys.stdin.isatty():
            input()
    finally:
        stream.write("\x1b[0m\x1b[?25h\n")
        stream.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())