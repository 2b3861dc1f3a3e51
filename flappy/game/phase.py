# flappy/game/phase.py
from __future__ import annotations
from enum import Enum


class Phase(str, Enum):
    READY = "ready"      # idle float, waiting for the first input
    PLAYING = "playing"
    DYING = "dying"      # post-collision fall, no scoring/spawning
    OVER = "over"


# Legal edges of the phase graph. Resizing during a run drops back to READY.
TRANSITIONS = {
    Phase.READY: {Phase.PLAYING},
    Phase.PLAYING: {Phase.DYING, Phase.READY},
    Phase.DYING: {Phase.OVER, Phase.READY},
    Phase.OVER: {Phase.PLAYING},
}


def can_transition(current: Phase, nxt: Phase) -> bool:
    return nxt in TRANSITIONS.get(current, ())
