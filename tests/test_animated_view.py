import pytest

from lowballtable.animated_view import (
    AnimatedView,
    AnimationKind,
    ease_out_bounce,
)
from lowballtable.canvas import Canvas
from lowballtable.state import ViewCard, ViewGameState
from lowballtable.view import BeautifulView


def _game(view: AnimatedView) -> ViewGameState:
    game = ViewGameState()
    names = ["You", "Lisa", "Mike", "Anna", "Tom", "Sara"]
    for player, name in zip(game.players, names):
        player.name = name
        player.chips = 1000
    game.players[0].hand = [
        ViewCard("9", "h"),
        ViewCard("7", "d"),
        ViewCard("5", "c"),
        ViewCard("3", "s"),
        ViewCard("2", "h"),
    ]
    view.base_view.position_players(game)
    return game


@pytest.fixture
def view():
    return AnimatedView(Canvas(40, 120))


def test_ease_out_bounce_endpoints_and_range():
    assert ease_out_bounce(0.0) == pytest.approx(0.0)
    assert ease_out_bounce(1.0) == pytest.approx(1.0)
    for step in range(101):
        assert 0.0 <= ease_out_bounce(step / 100) <= 1.0 + 1e-9


@pytest.mark.parametrize(
    "amount,chips", [(10, 1), (20, 2), (50, 3), (100, 4), (200, 5), (5000, 5)]
)
def test_chip_animation_chip_count(view, amount, chips):
    view.start_chip_animation(2, amount)
    assert view.anim_state.chip_anim.num_chips == chips
    assert view.anim_state.total_frames == chips * 25
    assert view.anim_state.kind == AnimationKind.CHIP_TO_POT
    assert view.is_animating


def test_card_replacement_copies_flags(view):
    flags = [1, 0, 0, 0, 1]
    view.start_card_replacement(0, flags, None)
    flags[1] = 1
    assert view.anim_state.card_anim.cards_to_replace == [1, 0, 0, 0, 1]
    assert view.anim_state.total_frames == 30
    assert not view.anim_state.card_anim.has_old_cards


def test_disabled_animations_do_not_start(view):
    view.animations_enabled = False
    view.start_card_replacement(0, [1, 1, 1, 1, 1])
    view.start_chip_animation(1, 100)
    view.start_action_flash(1, "bet")
    assert view.is_animating is False
    assert view.anim_state.kind == AnimationKind.NONE


def test_update_finishes_after_total_frames(view):
    view.start_card_replacement(3, [1, 1, 0, 0, 0])
    for _ in range(29):
        view.update()
    assert view.is_animating
    view.update()
    assert not view.is_animating
    assert view.anim_state.kind == AnimationKind.NONE
    view.update()
    assert view.anim_state.frame == 30


def test_action_flash_truncates_action(view):
    view.start_action_flash(2, "x" * 50)
    assert view.anim_state.action_flash.action_type == "x" * 31
    assert view.anim_state.total_frames == 4


def test_draw_preserving_background_keeps_bg(view):
    c = view.canvas
    c.set_bg(1, 2, 3)
    c.put_char(5, 5, " ")
    assert view.draw_preserving_background(5, 5, "▪", 0x789AB0)
    cell = c.cell_at(5, 5)
    assert cell.char == "▪"
    assert cell.bg == (1, 2, 3)
    assert cell.fg == (0x78, 0x9A, 0xB0)


def test_draw_preserving_background_outside_canvas(view):
    assert view.draw_preserving_background(-1, 5, "▪", 0xFFFFFF) is False
    assert view.draw_preserving_background(5, 500, "▪", 0xFFFFFF) is False


def test_position_9_players_places_hero_and_seats(view):
    game = ViewGameState()
    view.position_9_players(game)
    assert game.players[0].y == view.base_view.dimy - 6
    assert game.players[0].x == view.base_view.dimx // 2 - 6
    assert [p.seat_position for p in game.seated] == list(range(game.num_players))


def test_render_without_animation_matches_base_view(view):
    game = _game(view)
    game.pot = 30
    game.add_action_log("Mike posts big blind $20")
    view.render_scene(game)
    base = BeautifulView(Canvas(40, 120))
    base.render_scene(game)
    for y in range(40):
        assert view.canvas.row_text(y) == base.canvas.row_text(y)


def test_card_replacement_shows_old_card_at_first_frame(view):
    game = _game(view)
    old = list(game.players[0].hand)
    game.players[0].hand[0] = ViewCard("4", "d")
    view.start_card_replacement(0, [1, 0, 0, 0, 0], old)
    view.render_scene(game)
    card_y = view.base_view.dimy - 8
    card_x = view.base_view.dimx // 2 - 15
    assert view.canvas.cell_at(card_y + 1, card_x + 1).char == "9"
    assert view.canvas.cell_at(card_y + 1, card_x + 6 + 1).char == "7"


def test_card_replacement_hides_new_card_until_done(view):
    game = _game(view)
    old = list(game.players[0].hand)
    game.players[0].hand[0] = ViewCard("4", "d")
    view.start_card_replacement(0, [1, 0, 0, 0, 0], old)
    for _ in range(30):
        view.update()
    view.render_scene(game)
    card_y = view.base_view.dimy - 8
    card_x = view.base_view.dimx // 2 - 15
    assert view.canvas.cell_at(card_y + 1, card_x + 1).char == "4"


def test_chip_render_first_frame_at_player(view):
    game = _game(view)
    view.start_chip_animation(2, 10)
    view.render_scene(game)
    p = game.players[2]
    cell = view.canvas.cell_at(p.y + 1, p.x + 3)
    assert cell.char == "•"
    assert cell.fg == (0xFF, 0x64, 0x64)


def test_action_flash_draws_fold_box(view):
    game = _game(view)
    view.start_action_flash(1, "fold")
    view.render_scene(game)
    p = game.players[1]
    cell = view.canvas.cell_at(p.y - 1, p.x - 3)
    assert cell.char == "┌"
    assert cell.fg == (80, 80, 80)


def test_action_flash_odd_frame_draws_no_box(view):
    game = _game(view)
    view.start_action_flash(1, "fold")
    view.update()
    view.render_scene(game)
    p = game.players[1]
    assert view.canvas.cell_at(p.y - 1, p.x - 3).char != "┌"
    assert view.canvas.cell_at(p.y, p.x).char == "┌"