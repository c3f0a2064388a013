"""User-authored regex rules applied over the whole normalized text.

Rules are runtime configuration, so a bad rule is a value, not a crash:
:meth:`CustomRuleEngine.compile_rule` returns ``Ok(pattern)`` or
``Err(PatternError)``, and :meth:`CustomRuleEngine.apply` turns every
``Err`` into a warning string while the remaining rules keep running.

Flags follow the JavaScript convention the rules are authored in:

    g  report every match (without it, only the first)
    i  case-insensitive
    m  ``^``/``$`` match at line boundaries
    s  ``.`` matches newlines
    u  accepted; Python patterns are always Unicode-aware

A rule without flags behaves as ``"gi"``.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from igtx.config import DEFAULT_CONFIG, ParserConfig
from igtx.parsing_types import CustomExtraction, CustomRule, Err, Ok, Result
from igtx.textmatch import context_window

log = logging.getLogger("igtx.custom_rules")

DEFAULT_FLAGS = "gi"

_FLAG_MAP: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": re.UNICODE,
}

# "(?<name>" but not the lookbehinds "(?<=" / "(?<!". Group 1 is the run of
# escaped backslashes in front; an odd run means the paren itself is escaped.
_JS_NAMED_GROUP_RE = re.compile(r"(?<!\\)((?:\\\\)*)\(\?<(?=[A-Za-z_])")
_JS_BACKREF_RE = re.compile(r"(?<!\\)((?:\\\\)*)\\k<([A-Za-z_]\w*)>")


@dataclass(frozen=True, slots=True)
class PatternError:
    """Why a rule could not be compiled."""

    rule_id: str
    message: str
    position: int | None = None   # offset into the rule pattern, if known

    def describe(self) -> str:
        where = f" at position {self.position}" if self.position is not None else ""
        return f"Custom rule {self.rule_id!r} skipped: {self.message}{where}"


@dataclass(frozen=True, slots=True)
class CompiledRule:
    rule: CustomRule
    pattern: re.Pattern[str]
    global_scan: bool


@dataclass(frozen=True, slots=True)
class RuleRunResult:
    extractions: tuple[CustomExtraction, ...]
    warnings: tuple[str, ...]


def translate_pattern(pattern: str) -> str:
    """Rewrite JavaScript-only group syntax into its ``re`` spelling."""
    pattern = _JS_NAMED_GROUP_RE.sub(r"\1(?P<", pattern)
    return _JS_BACKREF_RE.sub(r"\1(?P=\2)", pattern)


def parse_flags(rule_id: str, flags: str | None) -> Result[tuple[re.RegexFlag, bool], PatternError]:
    """Map a JavaScript flag string to ``(re flags, global)``."""
    letters = flags if flags else DEFAULT_FLAGS
    compiled = re.RegexFlag(0)
    global_scan = False
    for ch in letters:
        if ch == "g":
            global_scan = True
        elif ch in _FLAG_MAP:
            compiled |= _FLAG_MAP[ch]
        else:
            return Err(PatternError(rule_id, f"unsupported flag {ch!r}"))
    return Ok((compiled, global_scan))


class CustomRuleEngine:
    """Compiles and runs custom rules; compiled patterns are cached.

    The cache key is ``(rule id, pattern, flags)`` so editing a rule in
    place never serves a stale pattern. One engine can be reused across
    documents; each :meth:`apply` call is otherwise independent.
    """

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._cache: dict[tuple[str, str, str], Result[CompiledRule, PatternError]] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()

    def compile_rule(self, rule: CustomRule) -> Result[CompiledRule, PatternError]:
        key = (rule.id, rule.pattern, rule.flags or "")
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        result = self._compile(rule)
        self._cache[key] = result
        return result

    def _compile(self, rule: CustomRule) -> Result[CompiledRule, PatternError]:
        if not rule.pattern:
            return Err(PatternError(rule.id, "empty pattern"))
        flags_result = parse_flags(rule.id, rule.flags)
        if isinstance(flags_result, Err):
            return flags_result
        re_flags, global_scan = flags_result.value
        try:
            pattern = re.compile(translate_pattern(rule.pattern), re_flags)
        except re.error as exc:
            return Err(PatternError(rule.id, exc.msg, exc.pos))
        except (OverflowError, RecursionError) as exc:
            return Err(PatternError(rule.id, str(exc) or type(exc).__name__))
        return Ok(CompiledRule(rule=rule, pattern=pattern, global_scan=global_scan))

    def run_rule(self, compiled: CompiledRule, text: str) -> list[CustomExtraction]:
        radius = self.config.rule_context_radius
        out: list[CustomExtraction] = []
        for m in compiled.pattern.finditer(text):
            out.append(CustomExtraction(
                rule_id=compiled.rule.id,
                rule_name=compiled.rule.name,
                match=m.group(0),
                index=m.start(),
                context=context_window(text, m.start(), m.end(), radius),
            ))
            if not compiled.global_scan:
                break
        return out

    def apply(self, text: str, rules: list[CustomRule] | tuple[CustomRule, ...]) -> RuleRunResult:
        """Run every active rule over *text*, in rule order then match order."""
        extractions: list[CustomExtraction] = []
        warnings: list[str] = []
        for rule in rules:
            if not rule.active:
                continue
            match self.compile_rule(rule):
                case Ok(value=compiled):
                    extractions.extend(self.run_rule(compiled, text))
                case Err(error=e):
                    log.warning("Invalid custom rule %s: %s", rule.id, e.message)
                    warnings.append(e.describe())
        return RuleRunResult(tuple(extractions), tuple(warnings))
