"""Terminal 2-7 triple draw lowball table: scripted hand replay, ANSI canvas views, animations and a binary wire format."""

__version__ = "1.0.0"
__all__ = [
    "animated_view",
    "animation",
    "canvas",
    "demo",
    "protocol",
    "script",
    "state",
    "view",
]