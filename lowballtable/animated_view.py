"""Table view with frame-driven card, chip and action-flash animations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Sequence

from lowballtable.canvas import Canvas
from lowballtable.state import ViewCard, ViewGameState
from lowballtable.view import BACKGROUND, BeautifulView, ease_in_out

__all__ = [
    "AnimationKind",
    "AnimationState",
    "AnimatedView",
    "ease_out_bounce",
]

_TINY_CARD_COLOR = 0x789AB0
_CHIP_SYMBOLS = ("•", "◦", "·", "∘", "°")
_CHIP_COLORS = (0xFFFFFF, 0xFF6464, 0x64FF64, 0x6464FF, 0x323232)
_CHIP_FRAMES = 20
_CHIP_GAP = 5
_REPLACE_PHASE_FRAMES = 15
_MAX_ACTION_LENGTH = 31

_FOLD_FG = (80, 80, 80)
_AGGRESSIVE_FG = (255, 120, 120)
_PASSIVE_FG = (120, 255, 120)
_HIDDEN = ViewCard("?", "?")


def ease_out_bounce(t: float) -> float:
    """Bounce easing: overshoots the end three times with shrinking hops."""
    if t < 1.0 / 2.75:
        return 7.5625 * t * t
    if t < 2.0 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    t -= 2.625 / 2.75
    return 7.5625 * t * t + 0.984375


class AnimationKind(IntEnum):
    NONE = 0
    CARD_REPLACEMENT = 1
    CHIP_TO_POT = 2
    ACTION_FLASH = 3
    DEAL_CARDS = 4


@dataclass
class CardReplacement:
    player: int = 0
    cards_to_replace: List[int] = field(default_factory=lambda: [0] * 5)
    old_cards: Optional[List[ViewCard]] = None

    @property
    def has_old_cards(self) -> bool:
        return self.old_cards is not None


@dataclass
class ChipToPot:
    player: int = 0
    amount: int = 0
    num_chips: int = 0
    current_chip: int = 0


@dataclass
class ActionFlash:
    player: int = 0
    action_type: str = ""
    flash_count: int = 0


@dataclass
class AnimationState:
    """Which animation is running and how far along it is."""

    is_animating: bool = False
    kind: AnimationKind = AnimationKind.NONE
    frame: int = 0
    total_frames: int = 0
    card_anim: CardReplacement = field(default_factory=CardReplacement)
    chip_anim: ChipToPot = field(default_factory=ChipToPot)
    action_flash: ActionFlash = field(default_factory=ActionFlash)


def _split_rgb(color: int) -> tuple:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _chip_count(amount: int) -> int:
    num_chips = 1
    if amount >= 20:
        num_chips = 2
    if amount >= 50:
        num_chips = 3
    if amount >= 100:
        num_chips = 4
    if amount >= 200:
        num_chips = 5
    return num_chips


class AnimatedView:
    """A :class:`BeautifulView` with one running animation drawn on top."""

    def __init__(self, canvas: Canvas) -> None:
        self.base_view = BeautifulView(canvas)
        self.anim_state = AnimationState()
        self.animations_enabled = True
        self.animation_speed = 1.0

    @property
    def canvas(self) -> Canvas:
        return self.base_view.canvas

    @property
    def is_animating(self) -> bool:
        return self.anim_state.is_animating

    # ------------------------------------------------------------------
    # Starting and stepping animations
    # ------------------------------------------------------------------

    def _begin(self, kind: AnimationKind, total_frames: int) -> None:
        state = self.anim_state
        state.is_animating = True
        state.kind = kind
        state.frame = 0
        state.total_frames = total_frames

    def start_card_replacement(
        self,
        player_idx: int,
        cards_to_replace: Sequence[int],
        old_cards: Optional[Sequence[ViewCard]] = None,
    ) -> None:
        """Discarded cards fly to the muck, then replacements come from the deck."""
        if not self.animations_enabled:
            return
        flags = [int(bool(flag)) for flag in list(cards_to_replace)[:5]]
        flags += [0] * (5 - len(flags))
        self._begin(AnimationKind.CARD_REPLACEMENT, 2 * _REPLACE_PHASE_FRAMES)
        self.anim_state.card_anim = CardReplacement(
            player=player_idx,
            cards_to_replace=flags,
            old_cards=list(old_cards)[:5] if old_cards is not None else None,
        )

    def start_chip_animation(self, player_idx: int, amount: int) -> None:
        """Toss up to five chips from a seat into the pot."""
        if not self.animations_enabled:
            return
        num_chips = _chip_count(amount)
        self._begin(AnimationKind.CHIP_TO_POT, num_chips * (_CHIP_FRAMES + _CHIP_GAP))
        self.anim_state.chip_anim = ChipToPot(
            player=player_idx, amount=amount, num_chips=num_chips, current_chip=0
        )

    def start_action_flash(self, player_idx: int, action_type: str) -> None:
        """Flash a seat's box twice in a colour matching the action."""
        if not self.animations_enabled:
            return
        self._begin(AnimationKind.ACTION_FLASH, 4)
        self.anim_state.action_flash = ActionFlash(
            player=player_idx, action_type=action_type[:_MAX_ACTION_LENGTH]
        )

    def update(self) -> None:
        """Advance the running animation by one frame."""
        state = self.anim_state
        if not state.is_animating:
            return
        state.frame += 1
        if state.frame >= state.total_frames:
            state.is_animating = False
            state.kind = AnimationKind.NONE

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------

    def draw_preserving_background(
        self, y: int, x: int, symbol: str, fg_color: int
    ) -> bool:
        """Draw ``symbol`` over whatever background the cell already has."""
        c = self.canvas
        existing = c.cell_at(y, x)
        if existing is None:
            return False
        c.set_fg(*_split_rgb(fg_color))
        c.bg = existing.bg
        c.put_str(y, x, symbol)
        return True

    def position_9_players(self, game: ViewGameState) -> None:
        """Hero at the bottom, up to eight others evenly round the table."""
        dimy, dimx = self.base_view.dimy, self.base_view.dimx
        center_y = dimy // 2 - 2
        center_x = dimx // 2
        radius_y = dimy // 3
        radius_x = int(dimx / 2.5)

        hero = game.players[0]
        hero.seat_position = 0
        hero.y = dimy - 6
        hero.x = center_x - 6

        for i, player in enumerate(game.seated[1:9], start=1):
            angle = (2.0 * math.pi * (i - 1)) / 8.0 + math.pi / 2
            player.seat_position = i
            player.y = center_y + int(radius_y * 0.8 * math.sin(angle))
            player.x = center_x + int(radius_x * 0.8 * math.cos(angle)) - 6

    # ------------------------------------------------------------------
    # Rendering animations
    # ------------------------------------------------------------------

    def render_card_replacement(self, game: ViewGameState) -> None:
        anim = self.anim_state.card_anim
        player_idx = anim.player
        frame = self.anim_state.frame
        dimy, dimx = self.base_view.dimy, self.base_view.dimx

        deck_y = dimy // 2 - 2
        deck_x = dimx // 2
        discard_y = deck_y + 2
        discard_x = deck_x + 3

        if player_idx == 0:
            card_y = dimy - 8
            card_x = dimx // 2 - 15
            spacing = 6
        else:
            player = game.players[player_idx]
            card_y = player.y + 2
            card_x = player.x - 5
            spacing = 2

        discarded = [i for i, flag in enumerate(anim.cards_to_replace) if flag]

        if frame < _REPLACE_PHASE_FRAMES:
            eased = ease_in_out(frame / _REPLACE_PHASE_FRAMES)
            for index in discarded:
                start_x = card_x + index * spacing
                curr_y = card_y + int((discard_y - card_y) * eased)
                curr_x = start_x + int((discard_x - start_x) * eased)
                if player_idx == 0 and anim.old_cards is not None:
                    self.base_view.draw_card(curr_y, curr_x, anim.old_cards[index], False)
                else:
                    self.draw_preserving_background(curr_y, curr_x, "▪", _TINY_CARD_COLOR)
        else:
            eased = ease_in_out((frame - _REPLACE_PHASE_FRAMES) / _REPLACE_PHASE_FRAMES)
            for index in discarded:
                target_x = card_x + index * spacing
                curr_y = deck_y + int((card_y - deck_y) * eased)
                curr_x = deck_x + int((target_x - deck_x) * eased)
                if player_idx == 0:
                    self.base_view.draw_card(curr_y, curr_x, _HIDDEN, True)
                else:
                    self.draw_preserving_background(curr_y, curr_x, "▪", _TINY_CARD_COLOR)

    def render_chip_animation(self, game: ViewGameState) -> None:
        anim = self.anim_state.chip_anim
        frame = self.anim_state.frame
        num_chips = anim.num_chips
        player = game.players[anim.player]
        pot_y = self.base_view.dimy // 2 - 3
        pot_x = self.base_view.dimx // 2

        period = _CHIP_FRAMES + _CHIP_GAP
        current_chip = frame // period
        local_frame = frame % period
        if current_chip >= num_chips or local_frame >= _CHIP_FRAMES:
            return

        chip_value = anim.amount // num_chips
        if chip_value >= 500:
            color = _CHIP_COLORS[4]
        elif chip_value >= 100:
            color = _CHIP_COLORS[3]
        elif chip_value >= 25:
            color = _CHIP_COLORS[2]
        elif chip_value >= 5:
            color = _CHIP_COLORS[1]
        else:
            color = _CHIP_COLORS[0]

        t = local_frame / _CHIP_FRAMES
        eased = ease_in_out(t)
        start_y = player.y + 1
        start_x = player.x + 3
        offset_x = (current_chip - num_chips // 2) * 2
        offset_y = (current_chip % 2) - 1

        curr_x = start_x + int((pot_x + offset_x - start_x) * eased)
        curr_y = start_y + int((pot_y + offset_y - start_y) * eased)
        curr_y += int(-3.0 * t * (1.0 - t))

        self.draw_preserving_background(
            curr_y, curr_x, _CHIP_SYMBOLS[current_chip % len(_CHIP_SYMBOLS)], color
        )
        if local_frame > _CHIP_FRAMES - 3:
            self.draw_preserving_background(curr_y + 1, curr_x, "·", color >> 1)

    def render_action_flash(self, game: ViewGameState) -> None:
        flash = self.anim_state.action_flash
        if self.anim_state.frame % 2 != 0:
            return
        p = game.players[flash.player]
        c = self.canvas
        action = flash.action_type
        if "fold" in action:
            c.set_fg(*_FOLD_FG)
        elif "raise" in action or "bet" in action:
            c.set_fg(*_AGGRESSIVE_FG)
        else:
            c.set_fg(*_PASSIVE_FG)
        c.set_bg(*BACKGROUND)
        c.put_str(p.y - 1, p.x - 3, "┌─────────────┐")
        c.put_str(p.y, p.x - 3, "│             │")
        c.put_str(p.y + 1, p.x - 3, "│             │")
        c.put_str(p.y + 2, p.x - 3, "└─────────────┘")

    def render_scene(
        self,
        game: ViewGameState,
        hide_player: int = -1,
        hide_cards: Optional[Sequence[int]] = None,
    ) -> Canvas:
        """Draw the table, then the running animation on top of it."""
        state = self.anim_state
        if state.is_animating and state.kind == AnimationKind.CARD_REPLACEMENT:
            self.base_view.render_scene(
                game, state.card_anim.player, state.card_anim.cards_to_replace
            )
        else:
            self.base_view.render_scene(game, hide_player, hide_cards)

        if state.kind == AnimationKind.CARD_REPLACEMENT:
            self.render_card_replacement(game)
        elif state.kind == AnimationKind.CHIP_TO_POT:
            self.render_chip_animation(game)
        elif state.kind == AnimationKind.ACTION_FLASH:
            self.render_action_flash(game)
            self.base_view.draw_player_box(game.players[state.action_flash.player], game)
        return self.canvas