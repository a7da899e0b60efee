import argparse
import json
import logging
import sys
from pathlib import Path

from ldaclint.crate import Crate, CrateError
from ldaclint.engine import validate_profile
from ldaclint.report import ConformanceReport


def _local_contexts(pairs: list[str]) -> dict:
    contexts = {}
    for pair in pairs:
        url, _, path = pair.partition("=")
        if not path:
            raise SystemExit(f"--context expects URL=PATH, got {pair!r}")
        contexts[url] = json.loads(Path(path).read_text(encoding="utf-8"))
    return contexts


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Check an RO-Crate against the Language Data Commons profile."
    )
    parser.add_argument("crate", help="path to ro-crate-metadata.json")
    parser.add_argument("--json", action="store_true", help="print the report as JSON")
    parser.add_argument("--info", action="store_true", help="include info findings in the table")
    parser.add_argument(
        "--context", action="append", default=[], metavar="URL=PATH",
        help="local copy of a remote JSON-LD context (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        crate = Crate.load(args.crate, local_contexts=_local_contexts(args.context))
    except (OSError, CrateError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    root = crate.root
    findings = validate_profile(root if root is not None else "./", crate)
    report = ConformanceReport.from_findings(findings, source=crate.source)

    print(report.to_json() if args.json else report.print_table(show_info=args.info))
    return 0 if report.conforms else 1


if __name__ == "__main__":
    sys.exit(main())
