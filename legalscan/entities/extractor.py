"""Pattern-based case field extraction.

Every field is described by one ``FieldRule`` and all rules are evaluated the
same way: first match only, except rules marked ``collect_all``. A rule that
does not match leaves its field empty; nothing here raises.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from legalscan.entities.models import CaseFields

# Same-line separator between a label and its value.
_SEP = r"[^\S\n]*[:\-]?[^\S\n]*"

# Start of a line, ignoring indentation.
_LINE_START = r"(?:^|(?<=\n))[^\S\n]*"

# Free-text values also end where the next known label begins. A label word
# only counts as one when a colon follows it.
_NEXT_LABEL = (
    r"(?:(?:plaintiffs?|defendants?|claimants?|filed(?:[^\S\n]+on)?|filing\s+date|judge)"
    r"[^\S\n]*:|case\s*(?:no\b\.?|number\b|\#))"
)
_VALUE_END = rf"(?=[^\S\n]*\b{_NEXT_LABEL}|\n|$)"

JURISDICTION_NAMES: tuple[str, ...] = (
    "District of Columbia",
    "Massachusetts",
    "Pennsylvania",
    "New Jersey",
    "California",
    "Washington",
    "New York",
    "Illinois",
    "Georgia",
    "Florida",
    "Texas",
)
JURISDICTION_CODES: tuple[str, ...] = (
    "NY", "CA", "TX", "FL", "NJ", "IL", "PA", "GA", "WA", "MA", "DC",
)


def _clean(value: str) -> str | None:
    cleaned = value.strip().lstrip(":-").strip().rstrip(",;").strip()
    return cleaned or None


def _digits_only(value: str) -> str | None:
    return re.sub(r"[^\d.]", "", value) or None


@dataclass(frozen=True)
class FieldRule:
    """How one CaseFields attribute is found and normalized."""

    name: str
    pattern: re.Pattern[str]
    post_process: Callable[[str], str | None] = _clean
    collect_all: bool = False

    def apply(self, text: str) -> str | tuple[str, ...] | None:
        if self.collect_all:
            found = (self.post_process(self._value(m)) for m in self.pattern.finditer(text))
            return tuple(value for value in found if value is not None)
        match = self.pattern.search(text)
        return self.post_process(self._value(match)) if match else None

    def _value(self, match: re.Match[str]) -> str:
        return match.group(1) if self.pattern.groups else match.group(0)


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "location",
        # full names match in any case, postal codes only in capitals
        re.compile(
            r"\b(?:(?i:" + "|".join(re.escape(n) for n in JURISDICTION_NAMES) + r")"
            r"|" + "|".join(JURISDICTION_CODES) + r")\b"
        ),
    ),
    FieldRule(
        "amounts",
        re.compile(
            r"\$\s*\d+(?:,\d{3})*(?:\.\d{2})?"
            r"|\b\d+(?:,\d{3})*(?:\.\d{2})?\s*dollars\b",
            re.IGNORECASE,
        ),
        post_process=_digits_only,
        collect_all=True,
    ),
    FieldRule(
        "case_number",
        re.compile(
            r"\bcase\s*(?:no\.?|number|\#)\s*[:.]?\s*([a-z0-9]+(?:[-/][a-z0-9]+)+)",
            re.IGNORECASE,
        ),
    ),
    FieldRule(
        "plaintiffs",
        re.compile(
            rf"\bplaintiffs?\b{_SEP}(\S.*?)(?=\s+vs?\.(?:\s|$)|[^\S\n]*\b{_NEXT_LABEL}|\n|$)",
            re.IGNORECASE,
        ),
    ),
    FieldRule(
        "defendants",
        re.compile(rf"\bdefendants?\b{_SEP}(\S.*?){_VALUE_END}", re.IGNORECASE),
    ),
    FieldRule(
        "claimants",
        re.compile(rf"\bclaimants?\b{_SEP}(\S.*?){_VALUE_END}", re.IGNORECASE),
    ),
    FieldRule(
        "filing_date",
        re.compile(
            rf"\bfil(?:ed(?:[^\S\n]+on)?|ing[^\S\n]+date)\b{_SEP}(\S.*?){_VALUE_END}",
            re.IGNORECASE,
        ),
    ),
    FieldRule(
        "judge_name",
        # mid-line, "judge" is only a label when a separator follows it
        re.compile(
            rf"(?:{_LINE_START}judge\b{_SEP}|\bjudge[^\S\n]*[:\-][^\S\n]*)(\S.*?){_VALUE_END}",
            re.IGNORECASE,
        ),
    ),
)


class EntityExtractor:
    """Applies an ordered table of field rules to raw text."""

    def __init__(self, rules: Sequence[FieldRule] = FIELD_RULES) -> None:
        self._rules = tuple(rules)

    def extract_fields(self, text: str) -> CaseFields:
        values = {rule.name: rule.apply(text) for rule in self._rules}
        return CaseFields(**values)


def extract_fields(text: str) -> CaseFields:
    """Extract case fields with the default rule table."""
    return EntityExtractor().extract_fields(text)
