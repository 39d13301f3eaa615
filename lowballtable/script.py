"""Scripted 2-7 triple draw hands: the script itself and the rules that replay it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from lowballtable.state import HAND_SIZE, MAX_SEATS, ViewCard, ViewGameState
from lowballtable.view import hand_description

ACTION_KINDS = frozenset({"bet", "call", "raise", "check", "fold", "draw"})

STARTING_CHIPS = 1000
SMALL_BLIND = 10
BIG_BLIND = 20
PLAYER_NAMES = ("You", "Lisa", "Mike", "Anna", "Tom", "Sara")

BEFORE = "before"
AFTER = "after"
SHOWDOWN = "showdown"
WINNER = "winner"

UNKNOWN_CARD = ViewCard("?", "?")

HandEvent = Tuple[str, Optional["Action"], Optional[List[ViewCard]]]


@dataclass(frozen=True)
class Action:
    """One scripted move: who acts, what they do, and which cards they discard."""

    player: int
    kind: str
    amount: int = 0
    cards_to_draw: Tuple[int, ...] = (0, 0, 0, 0, 0)

    def __post_init__(self) -> None:
        if self.kind not in ACTION_KINDS:
            raise ValueError(f"unknown action {self.kind!r}")
        flags = tuple(int(bool(flag)) for flag in self.cards_to_draw)
        if len(flags) != HAND_SIZE:
            raise ValueError(f"cards_to_draw needs {HAND_SIZE} flags, got {len(flags)}")
        object.__setattr__(self, "cards_to_draw", flags)

    @property
    def num_draws(self) -> int:
        """How many cards the action discards."""
        return sum(self.cards_to_draw)


@dataclass
class HandScript:
    """A pre-arranged hand: starting cards, replacement cards and every action."""

    title: str
    description: str
    initial_hands: List[List[ViewCard]]
    draw_cards: Dict[Tuple[int, int], List[ViewCard]] = field(default_factory=dict)
    actions: List[Action] = field(default_factory=list)

    def replacement(self, player: int, draw_round: int, index: int) -> ViewCard:
        """The ``index``-th card a player receives in a draw round, if scripted."""
        cards = self.draw_cards.get((player, draw_round), [])
        return cards[index] if index < len(cards) else UNKNOWN_CARD


def _cards(text: str) -> List[ViewCard]:
    return [ViewCard(token[0], token[1]) for token in text.split()]


def perfect_lowball_script() -> HandScript:
    """The demo hand in which the hero draws to the best possible 2-7 hand."""
    flags = lambda *bits: tuple(bits)  # noqa: E731
    actions = [
        Action(3, "bet", 20),
        Action(4, "call", 20),
        Action(5, "fold"),
        Action(0, "raise", 60),
        Action(1, "fold"),
        Action(2, "fold"),
        Action(3, "call", 40),
        Action(4, "call", 40),
        Action(3, "draw", 0, flags(1, 1, 0, 0, 1)),
        Action(4, "draw", 0, flags(1, 1, 0, 0, 0)),
        Action(0, "draw", 0, flags(1, 0, 0, 0, 0)),
        Action(3, "check"),
        Action(4, "check"),
        Action(0, "bet", 40),
        Action(3, "call", 40),
        Action(4, "fold"),
    ]
    return HandScript(
        title="Hand #1: THE PERFECT LOWBALL",
        description="Watch as you draw to the best possible hand in 2-7!",
        initial_hands=[
            _cards("9h 7d 5c 3s 2h"),
            _cards("Kh Qd Jc 9s 8h"),
            _cards("As Kc Td 7h 6s"),
            _cards("Jd Th 8c 7s 4d"),
            _cards("Qc 9d 8s 6h 5d"),
            _cards("Ah Ad Ks Jh Tc"),
        ],
        draw_cards={(0, 0): _cards("4d")},
        actions=actions,
    )


def position_players_in_circle(game: ViewGameState, dimy: int, dimx: int) -> None:
    """Seat the hero at the bottom and the rest on an arc; reset stacks and bets."""
    center_y = dimy // 2 - 2
    center_x = dimx // 2
    radius_y = dimy // 3
    radius_x = dimx // 3

    for i, player in enumerate(game.seated):
        if i == 0:
            player.y = dimy - 4
            player.x = center_x
        else:
            angle = math.pi + math.pi * (i - 1) / 4.0
            player.y = center_y + int(radius_y * math.sin(angle))
            player.x = center_x + int(radius_x * math.cos(angle))
        player.seat_position = i
        player.is_active = True
        player.is_folded = False
        player.chips = STARTING_CHIPS
        player.current_bet = 0


def setup_game(script: HandScript, hand_num: int, dimy: int, dimx: int) -> ViewGameState:
    """Deal the script's starting hands and post the blinds."""
    game = ViewGameState(
        num_players=MAX_SEATS,
        active_players=MAX_SEATS,
        dealer_button=hand_num % MAX_SEATS,
    )
    position_players_in_circle(game, dimy, dimx)
    game.hand_title = script.title
    game.hand_description = script.description

    for player, name in zip(game.players, PLAYER_NAMES):
        player.name = name
    for player, hand in zip(game.players, script.initial_hands):
        player.hand = list(hand)

    sb = game.players[(game.dealer_button + 1) % MAX_SEATS]
    bb = game.players[(game.dealer_button + 2) % MAX_SEATS]
    sb.chips -= SMALL_BLIND
    sb.current_bet = SMALL_BLIND
    bb.chips -= BIG_BLIND
    bb.current_bet = BIG_BLIND
    game.pot = SMALL_BLIND + BIG_BLIND
    game.current_bet = BIG_BLIND

    game.add_action_log(f"{sb.name} posts small blind ${SMALL_BLIND}")
    game.add_action_log(f"{bb.name} posts big blind ${BIG_BLIND}")
    return game


def apply_action(game: ViewGameState, script: HandScript, action: Action) -> str:
    """Apply one action to the game, log it and return the log line."""
    player = game.players[action.player]
    game.current_player = action.player

    if action.kind == "bet":
        player.chips -= action.amount
        player.current_bet = action.amount
        game.pot += action.amount
        game.current_bet = action.amount
        message = f"{player.name} bets ${action.amount}"
    elif action.kind == "call":
        to_call = game.current_bet - player.current_bet
        player.chips -= to_call
        player.current_bet = game.current_bet
        game.pot += to_call
        message = f"{player.name} calls ${to_call}"
    elif action.kind == "raise":
        to_call = game.current_bet - player.current_bet
        player.chips -= to_call + action.amount
        player.current_bet = game.current_bet + action.amount
        game.pot += to_call + action.amount
        game.current_bet = player.current_bet
        message = f"{player.name} raises to ${game.current_bet}"
    elif action.kind == "check":
        message = f"{player.name} checks"
    elif action.kind == "fold":
        player.is_folded = True
        game.active_players -= 1
        message = f"{player.name} folds"
    else:
        draws = action.num_draws
        if draws == 0:
            message = f"{player.name} stands pat"
        else:
            plural = "" if draws == 1 else "s"
            message = f"{player.name} draws {draws} card{plural}"
        discards = [i for i, flag in enumerate(action.cards_to_draw) if flag]
        for count, index in enumerate(discards):
            player.hand[index] = script.replacement(action.player, game.draw_round, count)

    game.add_action_log(message)
    return message


def find_winner(game: ViewGameState) -> Optional[int]:
    """The first seat still in the hand, or None if everyone has folded."""
    for seat, player in enumerate(game.players):
        if not player.is_folded:
            return seat
    return None


def _draw_round_finished(
    game: ViewGameState, actions: Sequence[Action], next_idx: int, drawer: int
) -> bool:
    next_is_draw = next_idx < len(actions) and actions[next_idx].kind == "draw"
    others_in = any(
        not player.is_folded for seat, player in enumerate(game.players) if seat != drawer
    )
    return not (next_is_draw and others_in)


def hand_events(game: ViewGameState, script: HandScript) -> Iterator[HandEvent]:
    """Replay the script on ``game``, yielding each step as it happens.

    Yields ``(BEFORE, action, old_hand)`` just before an action is applied and
    ``(AFTER, action, old_hand)`` just after, where ``old_hand`` is the acting
    player's hand beforehand. Ends with ``(SHOWDOWN, None, None)`` when more
    than one player remains and ``(WINNER, None, None)`` once a winner is logged.
    """
    actions = script.actions
    action_idx = 0
    for betting_round in range(4):
        if game.active_players == 1:
            break
        while action_idx < len(actions):
            action = actions[action_idx]
            if action.kind == "draw" and betting_round < game.draw_round:
                break

            game.current_player = action.player
            old_hand = list(game.players[action.player].hand)
            yield BEFORE, action, old_hand
            apply_action(game, script, action)
            yield AFTER, action, old_hand
            action_idx += 1

            if action.kind == "draw" and _draw_round_finished(
                game, actions, action_idx, action.player
            ):
                game.draw_round += 1
                for player in game.players:
                    player.current_bet = 0
                game.current_bet = 0
                break

    if game.active_players > 1:
        game.draw_round = 4
        game.add_action_log("=== SHOWDOWN ===")
        yield SHOWDOWN, None, None

    winner = find_winner(game)
    if winner is not None:
        player = game.players[winner]
        game.add_action_log(
            f"{player.name} wins ${game.pot} with {hand_description(player.hand)}!"
        )
        yield WINNER, None, None