"""In-memory index of sibling case documents and reference integrity checks.

A corpus can come from memory, from a JSON list of
``{"id", "title", "content", "year"}`` objects, or from a DuckDB file
holding a ``documents(id, title, content, year)`` table. DuckDB files are
opened read-only; the graph never writes back.

Lookup is exact substring containment, no fuzzy scoring: a node matches
when the referenced year and document type each appear in its title or
content (type comparison is case-insensitive).
"""
from __future__ import annotations

import importlib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from igtx.legal.types import DocumentReference, Violation

_duckdb_mod = importlib.import_module("duckdb")

CORPUS_TABLE = "documents"


class CorpusLoadError(RuntimeError):
    """Raised when a corpus source is missing or malformed."""


@dataclass(frozen=True, slots=True)
class CorpusDocument:
    id: str
    title: str
    content: str
    year: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CorpusDocument:
        year = data.get("year")
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            year=int(year) if year not in (None, "") else None,
        )


class DocumentGraph:
    def __init__(self) -> None:
        # Insertion-ordered; re-adding an id replaces the node in place.
        self._nodes: dict[str, CorpusDocument] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._nodes

    def add_document(
        self,
        doc_id: str,
        title: str,
        content: str,
        year: int | None = None,
    ) -> None:
        self._nodes[doc_id] = CorpusDocument(doc_id, title, content, year)

    def find_document(
        self,
        *,
        year: int | None = None,
        doc_type: str | None = None,
    ) -> CorpusDocument | None:
        """First node (insertion order) whose title or content names both criteria."""
        for node in self._nodes.values():
            if year is not None:
                year_text = str(year)
                if year_text not in node.title and year_text not in node.content:
                    continue
            if doc_type:
                needle = doc_type.lower()
                if needle not in node.title.lower() and needle not in node.content.lower():
                    continue
            return node
        return None

    # ── Loaders ──────────────────────────────────────────────────────

    @classmethod
    def from_documents(cls, docs: Iterable[CorpusDocument | dict[str, Any]]) -> DocumentGraph:
        graph = cls()
        for doc in docs:
            if isinstance(doc, dict):
                doc = CorpusDocument.from_dict(doc)
            graph.add_document(doc.id, doc.title, doc.content, doc.year)
        return graph

    @classmethod
    def from_json(cls, path: Path) -> DocumentGraph:
        try:
            data = orjson.loads(path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as exc:
            raise CorpusLoadError(f"Cannot read corpus {path}: {exc}") from exc
        if not isinstance(data, list):
            raise CorpusLoadError(f"Corpus JSON must be a list of documents: {path}")
        try:
            return cls.from_documents(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise CorpusLoadError(f"Malformed corpus document in {path}: {exc}") from exc

    @classmethod
    def from_duckdb(cls, db_path: Path, *, table: str = CORPUS_TABLE) -> DocumentGraph:
        if not db_path.exists():
            raise CorpusLoadError(f"Corpus database not found: {db_path}")
        conn: Any = _duckdb_mod.connect(str(db_path), read_only=True)
        try:
            tables = {str(r[0]) for r in conn.execute("SHOW TABLES").fetchall()}
            if table not in tables:
                raise CorpusLoadError(f"Table {table!r} not found in {db_path}")
            rows = conn.execute(
                f'SELECT id, title, content, year FROM "{table}" ORDER BY id'
            ).fetchall()
        finally:
            conn.close()
        graph = cls()
        for doc_id, title, content, year in rows:
            graph.add_document(
                str(doc_id),
                title or "",
                content or "",
                int(year) if year is not None else None,
            )
        return graph


def is_checkable(ref: DocumentReference) -> bool:
    """References with neither a year nor a non-Exhibit type are never flagged."""
    return ref.year is not None or (
        ref.document_type is not None and ref.document_type != "Exhibit"
    )


class IntegrityChecker:
    def check(
        self,
        references: list[DocumentReference],
        corpus: DocumentGraph,
    ) -> list[Violation]:
        violations: list[Violation] = []
        for ref in references:
            if not is_checkable(ref):
                continue
            if corpus.find_document(year=ref.year, doc_type=ref.document_type) is not None:
                continue
            violations.append(Violation(
                constraint_id="reference_not_found",
                severity="medium",
                description=(
                    f'Text references "{ref.text}" which was not found in the case corpus'
                ),
                references=(ref,),
            ))
        return violations
