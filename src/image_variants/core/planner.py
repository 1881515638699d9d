"""Breakpoint selection for responsive variants."""

from typing import List, Tuple

BREAKPOINTS: Tuple[int, ...] = (400, 800, 1200)


def plan_variants(source_width: int) -> List[int]:
    """
    Select the breakpoints to generate for a source of ``source_width`` pixels.

    A breakpoint is planned iff it does not exceed the source width, so
    sources are never upscaled. The result keeps the ascending order of
    ``BREAKPOINTS`` and is empty when the source is narrower than the
    smallest breakpoint.
    """
    return [width for width in BREAKPOINTS if width <= source_width]
