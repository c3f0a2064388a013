#!/usr/bin/env python3
"""Run the extraction pipeline over one text or HTML document.

Usage:
    python3 scripts/parse_document.py pleading.txt --domain legal \
      --document-type "Affirmation in Opposition" --corpus-db case.duckdb
    python3 scripts/parse_document.py transcript.txt --domain linguistic \
      --language nav --rules rules.json

Outputs the ParseReport as JSON to stdout (or --output), human messages to stderr.
Exit code 2 when legal analysis finds critical violations and
--fail-on-critical is set.
"""

import argparse
import datetime
import logging
import sys
from pathlib import Path

import orjson

from igtx.config import DEFAULT_CONFIG, ConfigError, ParserConfig
from igtx.custom_rules import CustomRuleEngine
from igtx.document_processor import parse_document
from igtx.html_text import looks_like_html, read_file, strip_html
from igtx.io_utils import dumps_report, load_json, load_jsonl, save_json
from igtx.legal.document_graph import CorpusLoadError, DocumentGraph
from igtx.parsing_types import CustomRule, PdfTextDiagnostics, SourceMetadata
from igtx.profiles import Domain, LanguageProfile


def log(msg: str) -> None:
    print(msg, file=sys.stderr)


def load_rules(path: Path) -> list[CustomRule]:
    if path.suffix.lower() == ".jsonl":
        return [CustomRule.from_dict(r) for r in load_jsonl(path)]
    data = load_json(path)
    if isinstance(data, dict):
        data = data.get("rules", [])
    return [CustomRule.from_dict(r) for r in data]


def load_corpus(args: argparse.Namespace) -> DocumentGraph | None:
    if args.corpus_db:
        return DocumentGraph.from_duckdb(Path(args.corpus_db), table=args.corpus_table)
    if args.corpus_json:
        return DocumentGraph.from_json(Path(args.corpus_json))
    return None


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Score, classify and (for legal text) consistency-check a document."
    )
    parser.add_argument("input", help="Path to a .txt or .html document ('-' for stdin)")
    parser.add_argument(
        "--domain", required=True, choices=[d.value for d in Domain],
    )
    parser.add_argument(
        "--profile", default=None, choices=[p.value for p in LanguageProfile],
        help="Language profile (default: resolved from --language)",
    )
    parser.add_argument("--language", default=None, help="ISO-639-3 source language code")
    parser.add_argument("--title", default=None, help="Source title for the envelope")
    parser.add_argument("--author", default=None, help="Source author for the envelope")
    parser.add_argument("--year", type=int, default=None, help="Source year for the envelope")
    parser.add_argument("--rules", default=None, help="JSON or JSONL file of custom rules")
    parser.add_argument("--pdf-diagnostics", default=None, help="JSON file of PDF diagnostics")
    parser.add_argument("--corpus-json", default=None, help="JSON list of sibling documents")
    parser.add_argument("--corpus-db", default=None, help="DuckDB file with a documents table")
    parser.add_argument("--corpus-table", default="documents", help="Corpus table name")
    parser.add_argument("--document-type", default=None, help='e.g. "Lease Agreement"')
    parser.add_argument(
        "--reference-date", default=None,
        help="YYYY-MM-DD; jurats dated after it are flagged",
    )
    parser.add_argument("--config", default=None, help="JSON file of parser config overrides")
    parser.add_argument(
        "--html", action="store_true",
        help="Treat input as HTML (auto-detected for .htm/.html files)",
    )
    parser.add_argument("--compact", action="store_true", help="Single-line JSON output")
    parser.add_argument(
        "--output", default=None,
        help="Write the report to this JSON file instead of stdout",
    )
    parser.add_argument(
        "--fail-on-critical", action="store_true",
        help="Exit 2 when critical legal violations are found",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if args.input == "-":
        raw = sys.stdin.read()
        filename = "stdin"
    else:
        path = Path(args.input)
        if not path.exists():
            log(f"Error: input not found at {path}")
            sys.exit(1)
        raw = read_file(path)
        filename = path.name
        if path.suffix.lower() in (".htm", ".html"):
            args.html = True

    if args.html or looks_like_html(raw):
        log("Converting HTML input to text")
        raw = strip_html(raw)

    try:
        config = ParserConfig.from_json(Path(args.config)) if args.config else DEFAULT_CONFIG
    except ConfigError as exc:
        log(f"Error: {exc}")
        sys.exit(1)

    try:
        rules = load_rules(Path(args.rules)) if args.rules else []
        diagnostics = (
            PdfTextDiagnostics.from_dict(load_json(Path(args.pdf_diagnostics)))
            if args.pdf_diagnostics else None
        )
    except (OSError, KeyError, TypeError, ValueError, orjson.JSONDecodeError) as exc:
        log(f"Error: cannot load input JSON: {exc}")
        sys.exit(1)

    try:
        corpus = load_corpus(args)
    except CorpusLoadError as exc:
        log(f"Error: {exc}")
        sys.exit(1)
    if corpus is not None:
        log(f"Loaded corpus with {len(corpus)} documents")

    reference_date = None
    if args.reference_date:
        try:
            reference_date = datetime.date.fromisoformat(args.reference_date)
        except ValueError:
            log(f"Error: --reference-date must be YYYY-MM-DD, got {args.reference_date!r}")
            sys.exit(1)

    source = SourceMetadata.from_dict({
        "title": args.title,
        "author": args.author,
        "year": args.year,
        "language": args.language,
    })

    report = parse_document(
        raw,
        args.domain,
        args.profile,
        source_metadata=source,
        custom_rules=rules,
        pdf_diagnostics=diagnostics,
        corpus=corpus,
        document_type=args.document_type,
        reference_date=reference_date,
        config=config,
        rule_engine=CustomRuleEngine(config),
        filename=filename,
    )

    for warning in report.warnings:
        log(f"Warning: {warning}")
    stats = report.stats
    log(
        f"{stats.extracted_lines}/{stats.total_lines} lines retained "
        f"(avg confidence {stats.average_confidence:.3f}); "
        f"tier: {report.tier_assessment.recommended_action}"
    )

    if args.output:
        out_path = Path(args.output)
        save_json(report.as_dict(), out_path, pretty=not args.compact)
        log(f"Wrote report to {out_path}")
    else:
        sys.stdout.buffer.write(dumps_report(report, pretty=not args.compact))
        sys.stdout.buffer.write(b"\n")

    legal = report.legal_analysis
    if legal is not None:
        log(f"Legal analysis: {len(legal.violations)} violations, {legal.critical_count} critical")
        if args.fail_on_critical and legal.critical_count:
            sys.exit(2)


if __name__ == "__main__":
    main()
