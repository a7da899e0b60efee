"""
ldaclint.report — Turn a run's findings into a conformance report.

The report can be serialised to JSON or printed as a human-readable
table grouped by entity.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone

from ldaclint.model import Finding, Findings, Severity


_ICONS = {"error": "✗", "warning": "⚠", "info": "ℹ"}


@dataclass
class ConformanceReport:
    conforms: bool
    generated_at: str
    source: str
    summary: dict
    findings: list[Finding]

    @classmethod
    def from_findings(cls, findings: Findings, source: str = "<crate>") -> "ConformanceReport":
        return cls(
            conforms=findings.conforms,
            generated_at=datetime.now(timezone.utc).isoformat(),
            source=source,
            summary={
                "errors": len(findings.errors),
                "warnings": len(findings.warnings),
                "info": len(findings.infos),
                "entities": len(findings.by_entity()),
            },
            findings=list(findings),
        )

    def to_dict(self) -> dict:
        return {
            "conforms": self.conforms,
            "generated_at": self.generated_at,
            "source": self.source,
            "summary": self.summary,
            "findings": [f.to_dict() for f in self.findings],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def print_table(self, show_info: bool = False) -> str:
        """Format report as a human-readable table."""
        lines = []

        lines.append("ldaclint conformance report")
        lines.append(f"  crate: {self.source}")
        lines.append(f"  generated: {self.generated_at}")
        lines.append("")

        s = self.summary
        status = "✓ CONFORMS" if self.conforms else "✗ DOES NOT CONFORM"
        lines.append(f"  {status}")
        lines.append(
            f"  {s['errors']} errors  {s['warnings']} warnings  {s['info']} info  "
            f"across {s['entities']} entities"
        )
        lines.append("")

        shown = [
            f for f in self.findings
            if show_info or f.severity != Severity.INFO
        ]
        grouped: dict = {}
        for f in shown:
            grouped.setdefault(f.entity_id, []).append(f)

        for entity_id, items in grouped.items():
            lines.append(f"  {entity_id if entity_id is not None else '(no @id)'}")
            for f in items:
                icon = _ICONS.get(f.severity.value, "?")
                prop = f" {f.property}:" if f.property else ""
                lines.append(f"    {icon} [{f.severity.value.upper()}]{prop} {f.message}")
            lines.append("")

        return "\n".join(lines)
