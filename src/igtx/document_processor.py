"""Line pipeline: normalize, score, classify, address, assemble.

The single entry point is :func:`parse_document`, which takes raw text and
returns a :class:`~igtx.parsing_types.ParseReport`:

    raw text -> NFC -> split on \\r?\\n
      -> per non-blank line: score (domain strategy) -> keep iff >= threshold
      -> clean + classify -> Block (id = hash(trimmed line + index))
    -> contextual annotations -> document_id = hash(block ids)
    -> envelope, tier assessment, custom rules, legal analysis (legal only)

Everything except the timestamp is a pure function of the arguments, so
two runs over the same input produce the same ids, scores and violations.
Malformed text never raises; invalid arguments (an unknown domain or
profile) raise ValueError.
"""
from __future__ import annotations

import datetime
import logging
from typing import Any

from igtx.config import DEFAULT_CONFIG, ParserConfig
from igtx.confidence import clean_line
from igtx.contextual import annotate_blocks
from igtx.custom_rules import CustomRuleEngine
from igtx.domain_strategy import strategy_for
from igtx.hashing import compute_block_id, compute_document_id
from igtx.io_utils import utc_now_iso
from igtx.legal.analyzer import LegalAnalyzer
from igtx.legal.document_graph import DocumentGraph
from igtx.normalization import UNICODE_NORMALIZATION, normalize_text
from igtx.parsing_types import (
    Block,
    CustomRule,
    ParseReport,
    ParseStats,
    PdfTextDiagnostics,
    SourceMetadata,
    TierAssessment,
)
from igtx.profiles import Domain, LanguageProfile, resolve_domain, resolve_profile
from igtx.tier_assessment import assess_tier

log = logging.getLogger("igtx.pipeline")

TOOL_NAME = "igtx"
TOOL_VERSION = "1.9.1"
SEGMENTATION_TYPE = "clause"


def extract_blocks(
    lines: tuple[str, ...],
    domain: Domain,
    profile: LanguageProfile,
    config: ParserConfig = DEFAULT_CONFIG,
) -> list[Block]:
    """Score every line and keep those at or above the domain threshold."""
    strategy = strategy_for(domain, profile, config)
    blocks: list[Block] = []
    for index, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed:
            continue
        line_score = strategy.score(trimmed)
        if not strategy.retains(line_score):
            continue
        clean = clean_line(trimmed)
        blocks.append(Block(
            id=compute_block_id(trimmed, index),
            raw_source=line,
            clean_text=clean,
            confidence=line_score.score,
            warnings=line_score.warnings,
            line_number=index + 1,
            structural=strategy.classify(clean),
        ))
    return blocks


def envelope_block(block: Block) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "block_id": block.id,
        "position": block.line_number,
        "raw_text": block.raw_source,
        "clean_text": block.clean_text,
        "segmentation": {"type": SEGMENTATION_TYPE, "confidence": block.confidence},
        "structural": block.structural.as_dict() if block.structural else None,
        "integrity": {"hash": block.id, "warnings": list(block.warnings)},
    }
    if block.contextual is not None:
        entry["contextual"] = block.contextual.as_dict()
    return entry


def build_envelope(
    blocks: list[Block],
    source: SourceMetadata,
    *,
    domain: Domain,
    profile: LanguageProfile,
    tier: TierAssessment,
    timestamp: str,
    normalization_flags: dict[str, bool],
    filename: str | None = None,
) -> dict[str, Any]:
    return {
        "document_id": compute_document_id(b.id for b in blocks),
        "source": source.as_dict(),
        "processing": {
            "tool": TOOL_NAME,
            "version": TOOL_VERSION,
            "deterministic": True,
            "timestamp": timestamp,
            "profile_used": str(profile),
            "domain": str(domain),
            "unicode_normalization": UNICODE_NORMALIZATION,
            "normalization_flags": dict(normalization_flags),
            "file_source": filename or "raw_input",
            "tier_assessment": tier.as_dict(),
        },
        "blocks": [envelope_block(b) for b in blocks],
    }


def parse_document(
    text: str | None,
    domain: Domain | str,
    profile: LanguageProfile | str | None = None,
    *,
    source_metadata: SourceMetadata | dict[str, Any] | None = None,
    custom_rules: list[CustomRule] | tuple[CustomRule, ...] = (),
    pdf_diagnostics: PdfTextDiagnostics | None = None,
    corpus: DocumentGraph | None = None,
    document_type: str | None = None,
    reference_date: datetime.date | None = None,
    config: ParserConfig = DEFAULT_CONFIG,
    rule_engine: CustomRuleEngine | None = None,
    timestamp: str | None = None,
    filename: str | None = None,
) -> ParseReport:
    """Run the full pipeline over one document.

    Args:
        text: Raw document text (None is treated as empty).
        domain: ``legal`` or ``linguistic``.
        profile: Language profile; resolved from the source language when unset.
        source_metadata: Provenance for the envelope.
        custom_rules: User regex rules scanned over the whole normalized text.
        pdf_diagnostics: Layout statistics from the PDF/OCR collaborator.
        corpus: Sibling documents for reference integrity (legal only).
        document_type: e.g. "Lease Agreement"; enables completeness checks.
        reference_date: Upper bound for jurat dates (legal only).
        config: Tunable thresholds and radii.
        rule_engine: Shared engine whose compiled-pattern cache is reused.
        timestamp: Override for the output timestamp (ISO string).
        filename: Recorded in the envelope as the file source.
    """
    dom = resolve_domain(domain)
    if isinstance(source_metadata, SourceMetadata):
        source = source_metadata
    else:
        source = SourceMetadata.from_dict(source_metadata)
    prof = resolve_profile(profile, source.language)
    stamp = timestamp or utc_now_iso()

    normalized = normalize_text(text)
    tier = assess_tier(normalized.text, dom, pdf_diagnostics, config=config)
    blocks = annotate_blocks(extract_blocks(normalized.lines, dom, prof, config))

    engine = rule_engine if rule_engine is not None else CustomRuleEngine(config)
    rule_run = engine.apply(normalized.text, custom_rules)

    envelope = build_envelope(
        blocks, source,
        domain=dom, profile=prof, tier=tier, timestamp=stamp,
        normalization_flags=normalized.normalization_flags, filename=filename,
    )

    legal = None
    if dom is Domain.LEGAL:
        legal = LegalAnalyzer(config).analyze(
            normalized.text,
            document_id=envelope["document_id"],
            document_type=document_type,
            corpus=corpus,
            reference_date=reference_date,
            timestamp=stamp,
        )

    extracted = len(blocks)
    average = sum(b.confidence for b in blocks) / extracted if extracted else 0.0
    stats = ParseStats(
        total_lines=len(normalized.lines),
        extracted_lines=extracted,
        average_confidence=round(average, 4),
    )
    log.debug(
        "parsed %s (%s/%s): %d/%d lines retained, %d rule matches",
        filename or "raw_input", dom, prof, extracted, stats.total_lines,
        len(rule_run.extractions),
    )
    return ParseReport(
        blocks=tuple(blocks),
        full_extracted_text="\n".join(b.clean_text for b in blocks),
        tier_assessment=tier,
        stats=stats,
        envelope=envelope,
        custom_extractions=rule_run.extractions,
        warnings=rule_run.warnings,
        legal_analysis=legal,
    )
