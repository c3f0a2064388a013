"""Tunable constants for the extraction pipeline, loadable from JSON.

Defaults are the production values. A config file only lists the keys it
overrides::

    {"legal_threshold": 0.4, "min_notice_days": 8}
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import orjson

from igtx.profiles import Domain


class ConfigError(ValueError):
    """Raised when a parser config payload is malformed."""


@dataclass(frozen=True, slots=True)
class ParserConfig:
    legal_threshold: float = 0.35
    linguistic_threshold: float = 0.45
    legal_score_cap: float = 0.99
    tier_trigger: float = 0.40
    tier_cap: float = 0.99
    date_context_radius: int = 50
    rule_context_radius: int = 20
    signature_lookahead: int = 200
    min_notice_days: int = 7
    enrichment_batch_size: int = 5

    def threshold_for(self, domain: Domain) -> float:
        if domain is Domain.LEGAL:
            return self.legal_threshold
        return self.linguistic_threshold

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParserConfig:
        """Apply overrides in *data* on top of the defaults."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Unknown parser config keys: {unknown}")
        overrides: dict[str, Any] = {}
        for key, raw in data.items():
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ConfigError(f"Config value for {key!r} must be numeric, got {raw!r}")
            # Field annotations are strings under postponed evaluation.
            if known[key].type == "int":
                if int(raw) != raw:
                    raise ConfigError(f"Config value for {key!r} must be an integer, got {raw!r}")
                overrides[key] = int(raw)
            else:
                overrides[key] = float(raw)
        config = replace(cls(), **overrides)
        if config.enrichment_batch_size < 1:
            raise ConfigError("enrichment_batch_size must be >= 1")
        return config

    @classmethod
    def from_json(cls, path: Path) -> ParserConfig:
        """Load overrides from a JSON object file."""
        try:
            data = orjson.loads(path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read parser config {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Parser config must be a JSON object: {path}")
        return cls.from_dict(data)


DEFAULT_CONFIG = ParserConfig()
