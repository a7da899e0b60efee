"""
Test the conformance report and the command line entry point.
"""

import json

from ldaclint.engine import validate_profile
from ldaclint.report import ConformanceReport
from main import main


def test_report_for_conformant_crate(object_crate):
    findings = validate_profile(object_crate.root, object_crate)
    report = ConformanceReport.from_findings(findings, source=object_crate.source)

    assert report.conforms
    assert report.summary["errors"] == 0
    assert report.summary["warnings"] == 0
    assert report.summary["info"] == len(findings.infos) > 0

    d = json.loads(report.to_json())
    assert d["conforms"] is True
    assert d["source"] == "object-crate.json"
    assert all(f["severity"] == "info" for f in d["findings"])

    table = report.print_table()
    print(table)
    assert "✓ CONFORMS" in table
    assert "[INFO]" not in table
    assert "[INFO]" in report.print_table(show_info=True)


def test_report_for_failing_crate(make_crate):
    crate = make_crate({"@id": "./", "@type": "Dataset", "name": ["a", "b"]})
    report = ConformanceReport.from_findings(validate_profile("./", crate))

    assert not report.conforms
    assert report.summary["errors"] > 0
    table = report.print_table()
    assert "✗ DOES NOT CONFORM" in table
    assert "[ERROR] name: There is more than one name" in table


# ── CLI ──────────────────────────────────────────────────────────────


def test_cli_conformant(examples_dir, capsys):
    assert main([str(examples_dir / "object-crate.json")]) == 0
    assert "CONFORMS" in capsys.readouterr().out


def test_cli_json(examples_dir, capsys):
    assert main([str(examples_dir / "collection-crate.json"), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["conforms"] is True


def test_cli_failing_crate(tmp_path, capsys):
    path = tmp_path / "ro-crate-metadata.json"
    path.write_text(json.dumps({"@graph": [{"@id": "./", "@type": "Dataset"}]}))
    assert main([str(path)]) == 1
    assert "DOES NOT CONFORM" in capsys.readouterr().out


def test_cli_unreadable_crate(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 2
    assert "error:" in capsys.readouterr().err


def test_cli_local_context(examples_dir, tmp_path, capsys):
    url = "https://w3id.org/ro/crate/1.1/context"
    context_path = tmp_path / "context.json"
    context_path.write_text(json.dumps({"@context": {"@vocab": "http://schema.org/"}}))
    crate_path = tmp_path / "ro-crate-metadata.json"
    doc = json.loads((examples_dir / "object-crate.json").read_text())
    doc["@context"] = [url, doc["@context"]]
    crate_path.write_text(json.dumps(doc))

    assert main([str(crate_path), "--context", f"{url}={context_path}"]) == 0
