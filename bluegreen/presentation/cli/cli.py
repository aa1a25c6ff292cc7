"""
CLI Module

Architectural Intent:
- Command-line interface for bluegreen
- The only place that prints outcomes and decides the process exit status
- Delegates to application use cases via composition root
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import logging
import sys
import traceback
from bluegreen import composition_root
from bluegreen.domain.entities.step import StepKind
from bluegreen.domain.errors import BlueGreenError, ConfigurationError, ProbeError
from bluegreen.domain.services.rotation_planner import RotationPlanner
from bluegreen.domain.value_objects.app_name import (
    AppName,
    previous_slot_name,
    two_back_slot_name,
)
from bluegreen.domain.value_objects.execution_outcome import (
    ExecutionOutcome,
    OutcomeStatus,
)
from bluegreen.infrastructure.config import load_config
from bluegreen.infrastructure.logging import configure_logging
from bluegreen.infrastructure.telemetry import configure_tracing

EXIT_FAILURE = 1
EXIT_INDETERMINATE = 2

PUSH_USAGE = (
    "bluegreen push application-to-replace \\\n"
    "\t-f path/to/new_manifest.yml \\\n"
    "\t-p path/to/new/path"
)


def _add_push_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("app_name", help="Application to replace")
    parser.add_argument(
        "-f", dest="manifest", default="", help="Path to an application manifest"
    )
    parser.add_argument(
        "-p", dest="path", default="", help="Path to application files"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bluegreen",
        description="Zero-downtime blue-green push with versioned rollback",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--config", default=None, help="Path to JSON config (default bluegreen.json)"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit structured JSON logs"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    push_parser = subparsers.add_parser(
        "push",
        aliases=["blue-green-push"],
        help="Push a new version over the top of an old one, keeping the "
        "previous two versions as -g1 and -g2",
        usage=PUSH_USAGE,
    )
    _add_push_arguments(push_parser)

    plan_parser = subparsers.add_parser(
        "plan", help="Show the steps a push would run, without running them"
    )
    _add_push_arguments(plan_parser)

    slots_parser = subparsers.add_parser(
        "slots", help="Show which live/-g1/-g2 slots exist"
    )
    slots_parser.add_argument("app_name", help="Base application name")

    return parser


def _rollback_summary(outcome: ExecutionOutcome, app_name: str) -> list[str]:
    if outcome.committed:
        return [
            f"The new version of {app_name} is live; retiring "
            f"{previous_slot_name(app_name)} did not finish.",
            "Nothing was rolled back.",
        ]
    if not outcome.compensations:
        return [f"Nothing to roll back; check the state of {app_name}."]
    lines = [f"Rolled back; the previous version is live again as {app_name}."]
    if outcome.completed(StepKind.EVICT_TWO_BACK):
        lines.append(
            f"The oldest kept version ({two_back_slot_name(app_name)}) was "
            "deleted before the failure and cannot be restored."
        )
    return lines


async def _push(container, args, verbose: bool) -> None:
    outcome = await container.blue_green_push.execute(
        args.app_name, args.manifest, args.path
    )

    if outcome.status == OutcomeStatus.SUCCESS:
        print()
        print("A new version of your application has successfully been pushed!")
        print()
        return

    if outcome.status == OutcomeStatus.FAILED_AND_ROLLED_BACK:
        print(f"error: {outcome.error}")
        for line in _rollback_summary(outcome, args.app_name):
            print(f"[*] {line}")
        sys.exit(EXIT_FAILURE)

    print(outcome.message)
    print(f"error: {outcome.error}")
    print(f"rollback error: {outcome.rollback_error}")
    if verbose:
        for record in outcome.records:
            status = "ok" if record.succeeded else f"FAILED ({record.error})"
            print(f"  [{record.direction.value}] {record.description}: {status}")
    sys.exit(EXIT_INDETERMINATE)


async def _plan(container, args) -> None:
    steps = await container.blue_green_push.plan(
        args.app_name, args.manifest, args.path
    )
    print(f"[*] Plan for {args.app_name}:")
    for line in RotationPlanner.describe(steps):
        print(f"  {line}")


async def _slots(container, args) -> None:
    app = AppName(args.app_name)
    state = await container.inspect_slots.execute(app)
    for name, present in (
        (app.live, state.live_exists),
        (app.previous, state.previous_exists),
        (app.two_back, state.two_back_exists),
    ):
        print(f"  {name}: {'present' if present else 'absent'}")


async def async_main():
    parser = build_parser()
    args = parser.parse_args()

    config = load_config(args.config)

    # Configure logging based on flags
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = getattr(logging, config.log_level, logging.WARNING)
    configure_logging(level=level, json_format=args.json_logs or config.log_json)

    verbose = args.verbose or args.debug

    if args.command is None:
        parser.print_help()
        return

    try:
        configure_tracing(config.telemetry)
        container = composition_root.create_container(config)

        if args.command in ("push", "blue-green-push"):
            await _push(container, args, verbose)
        elif args.command == "plan":
            await _plan(container, args)
        elif args.command == "slots":
            await _slots(container, args)
    except ConfigurationError as e:
        print(f"error: {e}")
        sys.exit(EXIT_FAILURE)
    except ProbeError as e:
        print(f"error: could not inspect application slots: {e}")
        if verbose:
            traceback.print_exc()
        sys.exit(EXIT_FAILURE)
    except BlueGreenError as e:
        print(f"error: {e}")
        if verbose:
            traceback.print_exc()
        sys.exit(EXIT_FAILURE)


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
