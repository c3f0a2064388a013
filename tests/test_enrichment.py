"""Tests for igtx.enrichment: batching and the merge contract."""
from __future__ import annotations

import asyncio
import logging

import pytest

from igtx.document_processor import parse_document
from igtx.enrichment import (
    EnrichmentHints,
    EnrichmentMergeError,
    EnrichmentRequest,
    batch_requests,
    enrich_report,
    merge_enrichment,
)
from igtx.parsing_types import ParseReport

TWELVE_LINES = "\n".join(f"Clause {k} of the agreement binds the tenant" for k in range(12))


def twelve_block_report() -> ParseReport:
    report = parse_document(TWELVE_LINES, "legal", timestamp="T")
    assert len(report.blocks) == 12
    return report


class TestBatching:
    def test_batches_of_five(self) -> None:
        report = twelve_block_report()
        sizes = [len(b) for b in batch_requests(report.blocks, 5)]
        assert sizes == [5, 5, 2]

    def test_requests_follow_block_order(self) -> None:
        report = twelve_block_report()
        flat = [r for batch in batch_requests(report.blocks) for r in batch]
        assert [r.block_id for r in flat] == [b.id for b in report.blocks]
        assert flat[0] == EnrichmentRequest.from_block(report.blocks[0])
        assert flat[0].as_dict()["line_number"] == 1

    def test_bad_size(self) -> None:
        with pytest.raises(ValueError):
            list(batch_requests((), 0))

    def test_no_blocks_no_batches(self) -> None:
        assert list(batch_requests(())) == []


class TestMerge:
    def test_merge_keeps_blocks(self) -> None:
        report = twelve_block_report()
        first = report.blocks[0].id
        merged = merge_enrichment(report, {first: {"gloss": "x"}})
        assert merged.blocks == report.blocks
        assert merged.enrichment == {first: {"gloss": "x"}}
        assert report.enrichment == {}

    def test_unknown_block(self) -> None:
        with pytest.raises(EnrichmentMergeError, match="unknown"):
            merge_enrichment(twelve_block_report(), {"nope": {"gloss": "x"}})

    def test_already_enriched(self) -> None:
        report = twelve_block_report()
        first = report.blocks[0].id
        once = merge_enrichment(report, {first: {"gloss": "x"}})
        with pytest.raises(EnrichmentMergeError, match="already"):
            merge_enrichment(once, {first: {"gloss": "y"}})

    def test_core_field_rejected(self) -> None:
        report = twelve_block_report()
        with pytest.raises(EnrichmentMergeError, match="confidence"):
            merge_enrichment(report, {report.blocks[0].id: {"confidence": 1.0}})


class TestEnrichReport:
    def test_drives_batches_in_order(self) -> None:
        report = twelve_block_report()
        seen: list[int] = []
        hints_seen: list[EnrichmentHints] = []

        async def enricher(batch: list[EnrichmentRequest], hints: EnrichmentHints):
            seen.append(len(batch))
            hints_seen.append(hints)
            return {r.block_id: {"upper": r.clean_text.upper()} for r in batch}

        enriched = asyncio.run(
            enrich_report(report, enricher, domain="legal", document_type="Lease Agreement")
        )
        assert seen == [5, 5, 2]
        assert hints_seen[0] == EnrichmentHints("legal", "Lease Agreement")
        assert list(enriched.enrichment) == [b.id for b in report.blocks]
        assert enriched.blocks == report.blocks

    def test_partial_annotations(self) -> None:
        report = twelve_block_report()

        async def enricher(batch, hints):
            return {batch[0].block_id: {"note": "first"}}

        enriched = asyncio.run(enrich_report(report, enricher, domain="legal", batch_size=4))
        assert len(enriched.enrichment) == 3

    def test_failure_is_logged_and_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        report = twelve_block_report()

        async def enricher(batch, hints):
            raise RuntimeError("collaborator down")

        with caplog.at_level(logging.ERROR, logger="igtx.enrichment"):
            with pytest.raises(RuntimeError, match="collaborator down"):
                asyncio.run(enrich_report(report, enricher, domain="legal"))
        assert any("lines 1-5" in r.getMessage() for r in caplog.records)

    def test_stray_ids_rejected(self) -> None:
        report = twelve_block_report()
        last = report.blocks[-1].id

        async def enricher(batch, hints):
            return {last: {"note": "wrong batch"}}

        with pytest.raises(EnrichmentMergeError, match="outside the batch"):
            asyncio.run(enrich_report(report, enricher, domain="legal"))
