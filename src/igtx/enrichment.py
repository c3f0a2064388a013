"""Merge contract with the external semantic-enrichment collaborator.

The collaborator sees blocks in fixed-size batches of
``(block_id, line_number, clean_text)`` plus domain/document-type hints,
and answers with per-block annotations keyed by block id. Merging never
reorders, drops or duplicates blocks and never overwrites a core field;
annotations land in ``ParseReport.enrichment`` keyed by block id.

Collaborator failures are logged and re-raised; the caller decides
whether a partially enriched document is acceptable.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

from igtx.config import DEFAULT_CONFIG
from igtx.parsing_types import Block, ParseReport

log = logging.getLogger("igtx.enrichment")

DEFAULT_BATCH_SIZE = DEFAULT_CONFIG.enrichment_batch_size

# Fields computed by the pipeline; an annotation may not carry them.
CORE_FIELDS: frozenset[str] = frozenset({
    "id", "block_id", "raw_source", "raw_text", "clean_text", "confidence",
    "warnings", "line_number", "position", "structural", "contextual",
})


class EnrichmentMergeError(ValueError):
    """Raised when annotations would break block identity or core fields."""


@dataclass(frozen=True, slots=True)
class EnrichmentRequest:
    block_id: str
    line_number: int
    clean_text: str

    @classmethod
    def from_block(cls, block: Block) -> EnrichmentRequest:
        return cls(block.id, block.line_number, block.clean_text)

    def as_dict(self) -> dict[str, Any]:
        return {
            "block_id": self.block_id,
            "line_number": self.line_number,
            "clean_text": self.clean_text,
        }


@dataclass(frozen=True, slots=True)
class EnrichmentHints:
    domain: str
    document_type: str | None = None


type Annotations = Mapping[str, Mapping[str, Any]]
type Enricher = Callable[[list[EnrichmentRequest], EnrichmentHints], Awaitable[Annotations]]


def batch_requests(
    blocks: tuple[Block, ...] | list[Block],
    size: int = DEFAULT_BATCH_SIZE,
) -> Iterator[list[EnrichmentRequest]]:
    """Yield requests in block order, ``size`` at a time."""
    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    for start in range(0, len(blocks), size):
        yield [EnrichmentRequest.from_block(b) for b in blocks[start:start + size]]


def merge_enrichment(report: ParseReport, annotations: Annotations) -> ParseReport:
    """Return a copy of *report* with *annotations* attached by block id.

    Raises:
        EnrichmentMergeError: unknown block id, an id that is already
            enriched, or an annotation that names a core field.
    """
    known = {b.id for b in report.blocks}
    merged: dict[str, dict[str, Any]] = dict(report.enrichment)
    for block_id, annotation in annotations.items():
        if block_id not in known:
            raise EnrichmentMergeError(f"Annotation for unknown block id {block_id!r}")
        if block_id in merged:
            raise EnrichmentMergeError(f"Block {block_id!r} is already enriched")
        clobbered = sorted(CORE_FIELDS & set(annotation))
        if clobbered:
            raise EnrichmentMergeError(
                f"Annotation for block {block_id!r} overwrites core fields: {clobbered}"
            )
        merged[block_id] = dict(annotation)
    return replace(report, enrichment=merged)


async def enrich_report(
    report: ParseReport,
    enricher: Enricher,
    *,
    domain: str,
    document_type: str | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> ParseReport:
    """Drive *enricher* over the report's blocks one batch at a time."""
    hints = EnrichmentHints(domain=domain, document_type=document_type)
    for batch in batch_requests(report.blocks, batch_size):
        first, last = batch[0].line_number, batch[-1].line_number
        try:
            annotations = await enricher(batch, hints)
        except Exception:
            log.error("Enrichment batch failed for lines %d-%d", first, last, exc_info=True)
            raise
        batch_ids = {r.block_id for r in batch}
        stray = sorted(set(annotations) - batch_ids)
        if stray:
            raise EnrichmentMergeError(f"Enricher answered for blocks outside the batch: {stray}")
        report = merge_enrichment(report, annotations)
    return report
