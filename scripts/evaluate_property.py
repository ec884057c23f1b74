"""Evaluate one property description from a JSON file

Usage:
    python scripts/evaluate_property.py --input property.json
    python scripts/evaluate_property.py --input property.json --output result.json
    cat property.json | python scripts/evaluate_property.py --input -

Input is a camelCase PropertyInput (same body as POST /api/evaluate).
Exit code: 0 evaluated, 2 invalid input.
"""

import argparse
import json
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from pydantic import ValidationError  # noqa: E402

from app.api.schemas import PropertyPayload  # noqa: E402
from app.models.evaluation import RuleSeverity  # noqa: E402
from app.services.rules import evaluate_property  # noqa: E402

_MARKS = {
    RuleSeverity.PASS: "OK",
    RuleSeverity.RISK: "!!",
    RuleSeverity.FAIL: "XX",
    RuleSeverity.UNKNOWN: "??",
}


def _load(path: str) -> dict:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Catalan habitability pre-validation (single property)",
    )
    parser.add_argument(
        "--input",
        required=True,
        help="PropertyInput JSON file ('-' for stdin)",
    )
    parser.add_argument(
        "--output",
        default="",
        help="Where to write the EvaluationResult JSON (not written when empty)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        prop = PropertyPayload.model_validate(_load(args.input))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read input: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print(f"Invalid property description:\n{e}", file=sys.stderr)
        return 2

    result = evaluate_property(prop)

    print("=" * 60)
    print("  Cèdula d'habitabilitat: pre-validation")
    print("=" * 60)
    print(f"  Municipality: {prop.municipality} ({prop.region})")
    print(f"  Type / use: {prop.property_type} / {prop.use_case}")
    print(f"  Ruleset: {result.ruleset_version}")
    print("=" * 60)

    for rule in result.rules:
        print(f"  [{_MARKS[rule.severity]}] {rule.rule_name} ({rule.confidence}%)")
        print(f"       {rule.message}")

    print(f"\n{'=' * 60}")
    print(f"  Overall: {result.overall_status.value.upper()} | Confidence: {result.confidence}%")
    print(
        f"  PASS: {result.count(RuleSeverity.PASS)} | RISK: {result.count(RuleSeverity.RISK)}"
        f" | FAIL: {result.count(RuleSeverity.FAIL)} | UNKNOWN: {result.count(RuleSeverity.UNKNOWN)}"
    )
    print(f"{'=' * 60}")

    if result.fix_plan:
        print("\n  --- Fix plan ---")
        for i, step in enumerate(result.fix_plan, start=1):
            print(f"  {i}. {step}")

    if result.missing_evidence:
        print("\n  --- Missing evidence ---")
        print(f"  {', '.join(result.missing_evidence)}")

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result.to_wire(), f, ensure_ascii=False, indent=2)
        print(f"\n  -> Result saved: {args.output}")

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
