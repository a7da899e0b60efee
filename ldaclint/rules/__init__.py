"""
ldaclint.rules — Declarative profile rules.

A Rule pairs a human-readable clause with the check that enforces it.
A RuleTable maps property names to Rules, one table per entity type.
Tables are composed from shared Rule objects, so a rule listed in
several tables is the same object in each of them.

Every check has the signature::

    check(ctx, values, entity, graph) -> None

and reports through ctx.error / ctx.warn / ctx.info / ctx.violation.
Checks must tolerate an empty value list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Optional
from urllib.parse import urlsplit

from ldaclint.model import Literal, Reference, Severity, Value


class Modality(str, Enum):
    MUST = "MUST"
    SHOULD = "SHOULD"
    MAY = "MAY"


_MODALITY_SEVERITY = {
    Modality.MUST: Severity.ERROR,
    Modality.SHOULD: Severity.WARNING,
    Modality.MAY: Severity.INFO,
}


@dataclass(frozen=True, eq=False)
class Rule:
    clause: str
    check: Callable
    modality: Modality = Modality.MUST
    # Skipped for entities without an @id (membership, parts, dispatch)
    requires_id: bool = False

    @property
    def severity(self) -> Severity:
        return _MODALITY_SEVERITY[self.modality]


RuleTable = Mapping[str, Rule]


# ─── Value helpers ───────────────────────────────────────────────────


_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_WEB_SCHEMES = ("http", "https", "ftp", "ws", "wss")


def is_valid_url(text: Optional[str]) -> bool:
    """Syntactic URL check, as lenient as a browser URL parser.

    Needs a scheme and something after it. Web schemes also need a host,
    which may follow the colon directly (``http:example.org``). Spaces
    are allowed anywhere but the host, since parsers percent-encode them.
    """
    if not isinstance(text, str) or not text.strip():
        return False
    try:
        parts = urlsplit(text.strip())
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        return False
    if parts.scheme.lower() in _WEB_SCHEMES:
        host = parts.netloc or parts.path.lstrip("/").split("/")[0]
        return bool(host) and not re.search(r"\s", host)
    return bool(parts.netloc or parts.path)


def text_of(value: Value) -> Optional[str]:
    """String form of a value: the literal if it is a string, else the @id."""
    if isinstance(value, Reference):
        return value.id
    if isinstance(value, Literal) and value.is_string:
        return value.value
    return None


def reference_ids(values: list[Value]) -> list[str]:
    return [v.id for v in values if isinstance(v, Reference) and v.id]


def type_names(values: list[Value]) -> set[str]:
    return {t for t in (text_of(v) for v in values) if t}


def type_rule(type_name: str, quote: str = "“", unquote: str = "”") -> Rule:
    """MUST-include-this-@type rule used by the material and place tables."""

    def check(ctx, values, entity, graph):
        if type_name not in type_names(values):
            ctx.error(f"@type MUST include {quote}{type_name}{unquote}")

    return Rule(
        clause=f"MUST have a @type value of {quote}{type_name}{unquote} and MAY have other @type values",
        check=check,
    )
