"""Seeded number stream and seed helpers.

The stream is a linear congruential generator with fixed constants::

    state = (state * 9301 + 49297) mod 233280
    value = state / 233280

Seeds are persisted by callers (for example in shareable URLs), so the
constants and the recurrence must never change.
"""

from __future__ import annotations

import random
import re
from typing import Optional

from .config import MAX_SEED_VALUE
from .types import InvalidSeedError

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280

_SEED_RE = re.compile(r"^[+-]?\d+$")


class SeededSequence:
    """Deterministic stream of floats in ``[0, 1)`` derived from one integer seed."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed)

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        return self._state / MODULUS

    def __repr__(self) -> str:
        return f"SeededSequence(state={self._state})"


def generate_random_seed(rng: Optional[random.Random] = None) -> int:
    """Return a fresh seed in ``[0, MAX_SEED_VALUE)`` for callers without one."""

    source = rng if rng is not None else random
    return source.randrange(MAX_SEED_VALUE)


def parse_seed(text: object) -> int:
    """Parse a seed supplied from outside the process.

    Accepts integers and decimal strings (surrounding whitespace allowed).
    Anything else raises :class:`InvalidSeedError`.
    """

    if isinstance(text, bool):
        raise InvalidSeedError(f"invalid seed {text!r}")
    if isinstance(text, int):
        return text
    if not isinstance(text, str):
        raise InvalidSeedError(f"invalid seed {text!r}")
    stripped = text.strip()
    if not _SEED_RE.match(stripped):
        raise InvalidSeedError(f"invalid seed {text!r}")
    try:
        return int(stripped)
    except ValueError as exc:
        # Digit strings past the interpreter's int conversion limit.
        raise InvalidSeedError(f"invalid seed: {exc}") from exc


__all__ = [
    "MULTIPLIER",
    "INCREMENT",
    "MODULUS",
    "SeededSequence",
    "generate_random_seed",
    "parse_seed",
]
