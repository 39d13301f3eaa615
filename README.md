# lowballtable

A terminal table for 2-7 triple draw lowball. It replays a scripted hand on an
oval table with six seats. Discarded cards fly to the muck and replacements
come in from the deck, and every bet, call, fold and draw is written to the
action log.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Run the demo

```
lowballtable
```

The table is drawn in 24-bit ANSI colour on standard output. The command plays
the hand "Hand #1: THE PERFECT LOWBALL" from the blinds, through the draws, to
the showdown. After that it shows a closing screen and waits for Enter if
standard input is a terminal.

Options:

- `--rows N`, `--cols N`: the screen size. By default the terminal's size is
  used.
- `--speed F`: the playback speed factor. The default is 1.0, and `0` plays
  the hand with no pauses.
- `--no-wait`: exit at the end instead of waiting for Enter.

## Use it as a library

- `lowballtable.protocol` holds the binary wire format, in which all integers
  are big-endian.
  - `MessageType` and `ErrorCode` list the message and error codes.
  - `init_header(msg_type, length)` builds a `MessageHeader`. It fills in the
    magic number, the version and the current time.
  - `MessageHeader.pack()` encodes a header. `unpack_header` decodes one, and
    `verify_header` checks its magic number, version and length limit.
  - `calculate_checksum` returns the CRC-32 of a payload.
  - `pack_uint16/32/64`, `pack_string`, `pack_card` and their `unpack_*`
    counterparts write and read integers, fixed-width NUL-padded strings and
    `WireCard` values. Out-of-range values and short buffers raise
    `ValueError`.

  ```python
  from lowballtable.protocol import MessageType, init_header, unpack_header, verify_header

  data = init_header(MessageType.MSG_PING, 0).pack()
  assert verify_header(unpack_header(data))
  ```

- `lowballtable.animation` provides:
  - the easing functions `ease_linear`, `ease_in_quad`, `ease_out_quad`,
    `ease_in_out_quad`, `ease_in_cubic`, `ease_out_cubic`,
    `ease_in_out_cubic`, `ease_in_elastic`, `ease_out_elastic`,
    `ease_out_bounce` and `ease_out_back`;
  - `AnimationTransform`, which moves a point from start to end in frame
    steps;
  - `AnimationEngine`, which handles particles, bursts, screen shake, the
    winner celebration and the fold effect;
  - `CardAnimation` and `ChipAnimation`;
  - the timing helpers `frame_progress`, `frames_for_duration` and
    `is_complete`.
- `lowballtable.canvas` provides `Canvas`, an in-memory grid of `Cell`s with
  foreground and background colours. Writes outside the grid are clipped.
  `Canvas.to_ansi()` renders the grid as ANSI text.
- `lowballtable.state` defines `ViewCard`, `ViewPlayer` and `ViewGameState`.
  `ViewGameState.add_action_log` keeps the eight most recent log lines.
- `lowballtable.view` contains `BeautifulView`, which draws the table, the
  cards, the player boxes, the pot and the log onto a canvas. It also has
  `hand_description`, which rates a five-card hand by lowball standards:

  ```python
  from lowballtable.state import ViewCard
  from lowballtable.view import hand_description

  hand = [ViewCard("7", "d"), ViewCard("5", "c"), ViewCard("4", "d"),
          ViewCard("3", "s"), ViewCard("2", "h")]
  print(hand_description(hand))   # 7-5-4-3-2 (THE NUTS!)
  ```

- `lowballtable.animated_view` contains `AnimatedView`, which runs one
  animation at a time on top of the view. The animation can be a card
  replacement, chips flying to the pot, or an action flash. `update()` moves
  it on one frame, and `render_scene()` draws the scene with the animation on
  top.
- `lowballtable.script` covers the scripted hand:
  - `perfect_lowball_script()` returns the demo hand as a `HandScript` made of
    `Action`s;
  - `setup_game` deals the hand and posts the blinds;
  - `apply_action` carries out one step;
  - `hand_events` replays the whole hand as a generator of events;
  - `find_winner` names the first seat still in the hand.
- `lowballtable.demo` holds `DemoRenderer`, `replacement_frames` and the
  `main` entry point that the `lowballtable` command runs.

## What it does not do

- There is no live play. Nobody can bet or draw at the table, there are no
  computer opponents, and only the scripted hand can be shown.
- The wire format only encodes and decodes headers and fields. There is no
  server or client, and nothing opens a network connection.
- Hands are not ranked against each other. `hand_description` only describes
  a single hand, and the winner is whoever has not folded.