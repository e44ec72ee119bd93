"""LOCAL-only CLI printing the locators implied by a report locator."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT.parent / "src"))

LOCATOR_TYPES = ["IPv4", "Hostname", "HTTP", "TCP", "UDP"]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validate a report locator and print its implied closure.",
    )
    parser.add_argument("type", choices=LOCATOR_TYPES, help="Locator type.")
    parser.add_argument("value", help="Locator value, e.g. https://example.com.")
    parser.add_argument(
        "--distinguisher",
        default="global",
        help="Distinguisher scoping the locator (default: global).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    from finding_registry.api.reason_codes import STATUS_CODES
    from finding_registry.domain.errors import RegistryError
    from finding_registry.domain.models import ReportLocator
    from finding_registry.services.locator_implication import implied_locators

    locator = ReportLocator(
        type=args.type, value=args.value, distinguisher=args.distinguisher
    )
    try:
        closure = implied_locators(locator)
    except RegistryError as exc:
        reason = exc.kind.value
        error = {
            "status": "error",
            "reason": reason,
            "status_code": STATUS_CODES[reason],
            "detail": exc.detail,
        }
        sys.stdout.write(json.dumps(error, ensure_ascii=False))
        return 1

    summary = {"locators": [item.to_mapping() for item in closure]}
    sys.stdout.write(json.dumps(summary, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
