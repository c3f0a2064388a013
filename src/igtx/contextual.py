"""Neighbour-aware annotations over the retained block list.

Interlinear text alternates at a regular stride (source line, gloss line,
translation line), so the gap between consecutive retained lines says
something about whether a block sits where the stride predicts. The
annotation is advisory only: block confidence is never touched.
"""
from __future__ import annotations

import re
from dataclasses import replace

from igtx.parsing_types import Block, ContextualSignal

MIN_BLOCKS = 3
STRIDE_BOOST = 0.07
ADJACENT_BOOST = 0.03
BOOST_CAP = 0.10
REGISTER_SHIFT_DENSITY = 0.10

ALTERNATION_BREAK = "igt_alternation_break"
REGISTER_SHIFT = "register_shift_detected"

_NON_ASCII_RE = re.compile(r"[^\x20-\x7E]")


def modal_gap(gaps: list[int]) -> int:
    """Most frequent gap; ties go to the value that reached the count first."""
    if not gaps:
        return 1
    counts: dict[int, int] = {}
    best, best_count = gaps[0], 1
    for gap in gaps:
        counts[gap] = counts.get(gap, 0) + 1
        if counts[gap] > best_count:
            best, best_count = gap, counts[gap]
    return best


def non_ascii_density(text: str) -> float:
    if not text:
        return 0.0
    return len(_NON_ASCII_RE.findall(text)) / len(text)


def annotate_blocks(blocks: list[Block]) -> list[Block]:
    """Attach a :class:`ContextualSignal` to every block (three or more)."""
    if len(blocks) < MIN_BLOCKS:
        return list(blocks)

    gaps = [cur.line_number - prev.line_number for prev, cur in zip(blocks, blocks[1:])]
    mode = modal_gap(gaps)
    densities = [non_ascii_density(b.clean_text) for b in blocks]

    out: list[Block] = []
    for i, block in enumerate(blocks):
        boost = 0.0
        warnings: list[str] = []
        if i > 0:
            gap = gaps[i - 1]
            if gap == mode:
                boost += STRIDE_BOOST
            elif mode > 1:
                warnings.append(ALTERNATION_BREAK)
            if mode == 1 and gap == 1:
                boost += ADJACENT_BOOST
        if 0 < i < len(blocks) - 1:
            neighbour_avg = (densities[i - 1] + densities[i + 1]) / 2
            if densities[i] == 0 and neighbour_avg > REGISTER_SHIFT_DENSITY:
                warnings.append(REGISTER_SHIFT)
        signal = ContextualSignal(
            contextual_boost=round(min(boost, BOOST_CAP), 3),
            warnings=tuple(warnings),
        )
        out.append(replace(block, contextual=signal))
    return out
