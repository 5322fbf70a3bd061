# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0
"""
keystretch CLI - compute, verify and generate passwords

Usage:
    keystretch compute [--password P] [--hash-function SHA512] [--iterations N]
    keystretch compare <computed-result> [--password P]
    keystretch generate [--length N] [--symbols S] [--count N]

Environment Variables:
    KEYSTRETCH_SALT_LENGTH, KEYSTRETCH_HASH_FUNCTION, KEYSTRETCH_HASH_ITERATIONS,
    KEYSTRETCH_COMPARE_IN_CONSTANT_TIME, KEYSTRETCH_GENERATOR_LENGTH,
    KEYSTRETCH_GENERATOR_SYMBOLS, KEYSTRETCH_LOG_LEVEL, KEYSTRETCH_LOG_JSON

Exit status:
    0 on success or match, 1 on mismatch, 2 on invalid input
"""

import argparse
import getpass
import sys
from typing import List, Optional

from keystretch.config import get_settings
from keystretch.crypto.hash_function import parse_hash_function
from keystretch.crypto.password_algorithm import PasswordAlgorithm
from keystretch.crypto.password_generator import PasswordGenerator
from keystretch.errors import KeystretchError
from keystretch.logging_config import configure_logging, get_logger

logger = get_logger("keystretch.cli")

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def read_password(password: Optional[str]) -> str:
    """Return password, prompting for it when not given."""
    if password is not None:
        return password
    return getpass.getpass("Password: ")


def hash_function_arg(value: str):
    try:
        return parse_hash_function(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def compute(args: argparse.Namespace) -> int:
    """Print the computed result for a password."""
    algorithm = PasswordAlgorithm.from_settings(get_settings())
    if args.salt_length is not None:
        algorithm.salt_length = args.salt_length
    if args.hash_function is not None:
        algorithm.hash_function = args.hash_function
    if args.iterations is not None:
        algorithm.hash_iterations = args.iterations

    print(algorithm.compute(read_password(args.password)))
    return EXIT_OK


def compare(args: argparse.Namespace) -> int:
    """Print whether a password matches a computed result."""
    algorithm = PasswordAlgorithm.from_settings(get_settings())
    if algorithm.compare(read_password(args.password), args.computed_result):
        print("match")
        return EXIT_OK
    print("mismatch")
    return EXIT_MISMATCH


def generate(args: argparse.Namespace) -> int:
    """Print one or more random passwords."""
    generator = PasswordGenerator.from_settings(get_settings())
    if args.length is not None:
        generator.length = args.length
    if args.symbols is not None:
        generator.symbols = args.symbols

    for _ in range(args.count):
        print(generator.generate())
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keystretch",
        description="Salted, key-stretched password hashing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Hash a password (prompts for it)
  keystretch compute

  # Hash with a stronger function and more iterations
  keystretch compute --hash-function SHA512 --iterations 10000

  # Verify a stored result
  keystretch compare AAAQAK...== --password "my password"

  # Generate five 16-character passwords
  keystretch generate --length 16 --count 5
"""
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: $KEYSTRETCH_LOG_LEVEL or INFO)"
    )
    parser.add_argument(
        "--console-logs",
        action="store_true",
        help="Pretty-print logs instead of JSON"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # === compute ===
    compute_parser = subparsers.add_parser("compute", help="Hash a password")
    compute_parser.add_argument(
        "--password", "-p",
        help="Password (will be prompted if not provided)"
    )
    compute_parser.add_argument("--salt-length", type=int, help="Salt length in bytes")
    compute_parser.add_argument(
        "--hash-function",
        type=hash_function_arg,
        help="SHA256, SHA384 or SHA512"
    )
    compute_parser.add_argument("--iterations", type=int, help="Key-stretching iterations")
    compute_parser.set_defaults(func=compute)

    # === compare ===
    compare_parser = subparsers.add_parser("compare", help="Verify a password")
    compare_parser.add_argument("computed_result", help="Result printed by 'compute'")
    compare_parser.add_argument(
        "--password", "-p",
        help="Password (will be prompted if not provided)"
    )
    compare_parser.set_defaults(func=compare)

    # === generate ===
    generate_parser = subparsers.add_parser("generate", help="Generate random passwords")
    generate_parser.add_argument("--length", type=int, help="Password length")
    generate_parser.add_argument("--symbols", help="Characters to draw from")
    generate_parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of passwords (default: 1)"
    )
    generate_parser.set_defaults(func=generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        configure_logging(
            log_level=args.log_level or settings.log_level,
            json_output=False if args.console_logs else settings.log_json,
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        return args.func(args)
    except KeystretchError as e:
        logger.info("command_failed", command=args.command, error_code=e.error_code)
        print(f"error: {e.message}", file=sys.stderr)
        return EXIT_ERROR


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
