"""
Regenerative Blueprint Engine - command line entry point.

Usage:
    python main.py -1.2921 36.8219
    python main.py 51.5074 -0.1278 --output london.json --sequential
    python main.py --health
"""

import argparse
import json
import logging
import sys
from typing import Optional

from core.config import get_settings
from core.errors import BlueprintEngineError, DataUnavailableError, GuardrailRejection
from core.models import Coordinates
from core.service import BlueprintService

log = logging.getLogger("main")

EXIT_OK = 0
EXIT_INTERNAL = 1
EXIT_REJECTED = 2
EXIT_UNAVAILABLE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a regenerative development blueprint for a coordinate pair"
    )
    parser.add_argument("lat", type=float, nargs="?", help="Latitude in decimal degrees")
    parser.add_argument("lon", type=float, nargs="?", help="Longitude in decimal degrees")
    parser.add_argument("--output", "-o", help="Write the blueprint JSON to this file")
    parser.add_argument("--sequential", action="store_true", help="Fetch data sources one at a time")
    parser.add_argument("--log-level", default=None, help="Logging level (default: REGEN_LOG_LEVEL or INFO)")
    parser.add_argument("--health", action="store_true", help="Print the health payload and exit")
    return parser


def main(argv=None, service: Optional[BlueprintService] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or get_settings().log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    service = service or BlueprintService()

    if args.health:
        print(json.dumps(service.health(), indent=2))
        return EXIT_OK

    if args.lat is None or args.lon is None:
        parser.error("lat and lon are required unless --health is given")

    coords = Coordinates(latitude=args.lat, longitude=args.lon)
    parallel = False if args.sequential else None

    try:
        blueprint = service.run(coords, parallel=parallel)
    except GuardrailRejection as e:
        log.error(f"Rejected: {e.rejection_reason}")
        print(json.dumps({"error": "guardrail_rejection", "reason": e.rejection_reason}, indent=2))
        return EXIT_REJECTED
    except DataUnavailableError as e:
        log.error(str(e))
        print(json.dumps({"error": "data_unavailable", "message": str(e)}, indent=2))
        return EXIT_UNAVAILABLE
    except BlueprintEngineError as e:
        log.error(f"Blueprint generation failed: {e}")
        print(json.dumps({"error": "internal_error", "message": "Blueprint generation failed."}, indent=2))
        return EXIT_INTERNAL

    payload = json.dumps(blueprint.to_dict(), indent=2)
    if args.output:
        with open(args.output, "w") as f:
            f.write(payload)
        log.info(f"Blueprint written to {args.output}")
    else:
        print(payload)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
