"""Command-line entrypoint for scheduled jobs."""

import argparse
import json
import logging
from collections.abc import Sequence
from datetime import date

from dairy_ledger.app_logging import configure_logging
from dairy_ledger.containers import AppContainer, build_container

_logger = logging.getLogger(__name__)


def main(
    argv: Sequence[str] | None = None, container: AppContainer | None = None
) -> int:
    """Run a scheduled job and print its result as JSON."""
    parser = argparse.ArgumentParser(prog="dairy-ledger")
    parser.add_argument("job", choices=["carry-forward", "monthly-archive"])
    parser.add_argument("--date", type=date.fromisoformat, default=None)
    parser.add_argument("--timezone", default=None)
    args = parser.parse_args(argv)

    resolved = container or build_container()
    configure_logging(resolved.settings.log_level)
    _logger.info("Running %s job", args.job)
    if args.job == "carry-forward":
        summary = resolved.carry_forward_service.run(
            today=args.date, timezone_name=args.timezone
        )
        print(json.dumps(summary.as_dict()))
        return 1 if summary.errors else 0

    result = resolved.archive_service.run(today=args.date)
    print(json.dumps(result.as_dict()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
