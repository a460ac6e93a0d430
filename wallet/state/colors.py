"""
Display color assignment.

Budgets and goals created without a color get one from a policy injected
into their store. The default policy is deterministic; the seeded random
policy reproduces the "pick any palette color" behaviour while staying
repeatable in tests.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from wallet.models.defaults import CHART_PALETTE


class ColorPolicy(ABC):
    """Chooses a display color for a new record."""

    def __init__(self, palette: Sequence[str] = CHART_PALETTE):
        if not palette:
            raise ValueError("Color palette must not be empty")
        self._palette = tuple(palette)

    @property
    def palette(self) -> tuple[str, ...]:
        return self._palette

    @abstractmethod
    def next_color(self, in_use: Sequence[str]) -> str:
        """
        Pick a color.

        Args:
            in_use: Colors already used by sibling records
        """
        pass


class CyclingColorPolicy(ColorPolicy):
    """First palette color not yet in use; rotates once all are taken."""

    def next_color(self, in_use: Sequence[str]) -> str:
        taken = set(in_use)
        for color in self._palette:
            if color not in taken:
                return color
        return self._palette[len(in_use) % len(self._palette)]


class SeededRandomColorPolicy(ColorPolicy):
    """Uniform pick from the palette, reproducible for a given seed."""

    def __init__(self, seed: Optional[int] = None, palette: Sequence[str] = CHART_PALETTE):
        super().__init__(palette)
        self._rng = random.Random(seed)

    def next_color(self, in_use: Sequence[str]) -> str:
        return self._rng.choice(self._palette)
