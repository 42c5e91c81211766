"""
Command line entry point.

    hackattic solve password_hashing
    hackattic solve reading_qr --timeout 10
    echo "...#..#" | hackattic kata almost_binary

Exit status is 0 on success and 1 on any failure.
"""

import argparse
import sys

from hackattic.challenges import SOLVERS, get_solver
from hackattic.config import Settings, settings
from hackattic.exceptions import HackatticError
from hackattic.kata import almost_binary, yes_it_fizz
from hackattic.logging_config import get_logger, setup_logging
from hackattic.services.access_token import get_access_token
from hackattic.services.http_client import ClientConfig, HTTPClient
from hackattic.services.problem_service import ProblemClient

logger = get_logger(__name__)

KATAS = {
    "almost_binary": almost_binary.run,
    "yes_it_fizz": yes_it_fizz.run,
}


def build_http_client(settings: Settings) -> HTTPClient:
    return HTTPClient(ClientConfig.from_settings(settings))


def solve(challenge: str, settings: Settings) -> int:
    access_token = get_access_token(settings)
    with build_http_client(settings) as http_client:
        solver = get_solver(challenge)(ProblemClient(http_client), settings)
        solver.run(access_token)
    logger.info("challenge_completed", challenge=challenge)
    return 0


def run_kata(kata: str) -> int:
    KATAS[kata](sys.stdin, sys.stdout)
    return 0


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hackattic", description="hackattic solvers and katas")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Fetch, solve and submit a challenge")
    solve_parser.add_argument("challenge", choices=sorted(SOLVERS))
    solve_parser.add_argument("--base-url", help="Platform base URL (default: BASE_URL)")
    solve_parser.add_argument(
        "--timeout",
        type=_positive_float,
        help=f"HTTP timeout seconds (default: {settings.http_timeout_seconds:g})",
    )

    kata_parser = subparsers.add_parser("kata", help="Run a stdin/stdout kata")
    kata_parser.add_argument("kata", choices=sorted(KATAS))
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings)

    try:
        if args.command == "kata":
            return run_kata(args.kata)

        overrides = {}
        if args.base_url:
            overrides["base_url"] = args.base_url.rstrip("/")
        if args.timeout is not None:
            overrides["http_timeout_seconds"] = args.timeout
        return solve(args.challenge, settings.model_copy(update=overrides))
    except HackatticError as e:
        logger.error("run_failed", error_type=type(e).__name__, error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
