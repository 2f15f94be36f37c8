"""
Assess every shipment in a JSON file and print the resulting alerts.

Usage:
  python scripts/assess_shipments.py data/sample_shipments.json
  python scripts/assess_shipments.py shipments.json --now 2025-11-25T00:00:00Z --status in_progress
  python scripts/assess_shipments.py shipments.json --format json
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root is on import path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import settings
from core.engine import RiskAssessor, RiskRules
from core.exceptions import AlertEngineError
from core.timeutils import parse_timestamp
from services.acknowledgement_store import AcknowledgementStore
from services.alert_service import AlertService
from services.shipment_repository import ShipmentRepository

logger = logging.getLogger("assess_shipments")


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Assess shipment delay and risk from a JSON file")
    p.add_argument("file", type=Path, nargs="?", default=settings.shipments_path,
                   help="JSON file with {\"shipments\": [...]} (default: configured seed file)")
    p.add_argument("--now", type=str, default=None, help="Reference instant, ISO-8601 (default: current time)")
    p.add_argument("--status", type=str, default="all",
                   help="all, completed, in_progress, canceled or future (default: all)")
    p.add_argument("--format", type=str, choices=["table", "json"], default="table",
                   help="Output format (default: table)")
    return p.parse_args(argv)


def render_table(alerts) -> str:
    header = f"{'SHIPMENT':<10} {'STATUS':<12} {'SEV':<7} {'SCORE':>5} {'ETA(d)':>7}  {'STAGE':<28} REASONS"
    lines = [header, "-" * len(header)]
    for alert in alerts:
        reasons = ", ".join(reason.value for reason in alert.risk_reasons) or "-"
        lines.append(
            f"{alert.shipment_id:<10} {alert.status.value:<12} {alert.severity.value:<7} "
            f"{alert.risk_score:>5} {alert.days_to_eta:>7.1f}  {alert.current_stage[:28]:<28} {reasons}"
        )
    return "\n".join(lines)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    now = None
    if args.now:
        now = parse_timestamp(args.now)
        if now is None:
            logger.error(f"Invalid --now value: {args.now}")
            return 2

    if not args.file.exists():
        logger.error(f"File not found: {args.file}")
        return 2

    service = AlertService(
        repository=ShipmentRepository.from_json_file(args.file),
        acknowledgements=AcknowledgementStore(),
        assessor=RiskAssessor(rules=RiskRules.from_settings(settings)),
    )

    try:
        alerts = service.list_shipments(status=args.status, now=now)
    except AlertEngineError as e:
        logger.error(str(e))
        return 2

    if args.format == "json":
        print(json.dumps([alert.model_dump(mode="json") for alert in alerts], indent=2))
    else:
        print(render_table(alerts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
