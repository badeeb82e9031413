"""
cli.py

Command-line front end.

    password-toolkit generate --length 20 --no-symbols --count 3 --report
    password-toolkit check 'Tr0ub4dor&3'
    password-toolkit audit --modulus 94 --size 50000

Nothing is written to disk and nothing leaves the process except stdout.
"""

from __future__ import annotations

from typing import List, Optional, Sequence
import argparse
import logging
import sys

from .config import DEFAULT_LENGTH, MAX_LENGTH, MIN_LENGTH
from .errors import ConfigurationError, RandomnessUnavailable
from .metrics import audit_sampler
from .passwords import GenerationOptions, PasswordGenerator
from .strength import StrengthReport, evaluate

logger = logging.getLogger(__name__)


def _length(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if not MIN_LENGTH <= value <= MAX_LENGTH:
        raise argparse.ArgumentTypeError(f"length must be between {MIN_LENGTH} and {MAX_LENGTH}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="password-toolkit",
        description="Generate passwords and estimate their strength.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="generate passwords")
    gen.add_argument("-l", "--length", type=_length, default=DEFAULT_LENGTH)
    gen.add_argument("-n", "--count", type=int, default=1)
    gen.add_argument("--no-lowercase", dest="lowercase", action="store_false")
    gen.add_argument("--no-uppercase", dest="uppercase", action="store_false")
    gen.add_argument("--no-digits", dest="digits", action="store_false")
    gen.add_argument("--no-symbols", dest="symbols", action="store_false")
    gen.add_argument("--report", action="store_true", help="print a strength summary per password")

    check = sub.add_parser("check", help="report on an existing password")
    check.add_argument("password", help="password to check, or - to read one line from stdin")

    audit = sub.add_parser("audit", help="chi-square test of the secure sampler")
    audit.add_argument("--modulus", type=int, default=94)
    audit.add_argument("--size", type=int, default=50000)
    return parser


def format_report(report: StrengthReport) -> List[str]:
    penalty = report.penalty
    lines = [
        f"Strength:   {report.tier.name} (tier {report.tier.level})",
        f"Entropy:    {report.entropy} bits "
        f"(base {penalty.base_entropy_bits:.1f}, penalties {penalty.total_penalty_bits:.1f})",
        f"Length:     {report.length}",
        f"Laptop:     {report.crack_times.consumer_label}",
        f"GPU farm:   {report.crack_times.gpu_cluster_label}",
        f"Specialist: {report.crack_times.specialized_label}",
    ]
    if penalty.reasons:
        lines.append("Patterns:   " + ", ".join(sorted(k.value for k in penalty.reasons)))
    lines.append(report.comment)
    return lines


def _cmd_generate(args: argparse.Namespace) -> int:
    options = GenerationOptions(
        lowercase=args.lowercase,
        uppercase=args.uppercase,
        digits=args.digits,
        symbols=args.symbols,
        length=args.length,
    )
    gen = PasswordGenerator()
    for pwd in gen.generate_many(options, args.count):
        print(pwd.value)
        if args.report:
            report = evaluate(pwd.value)
            print(f"  {report.tier.name}, {report.entropy} bits")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    password = args.password
    if password == "-":
        password = sys.stdin.readline().rstrip("\n")
    report = evaluate(password)
    if report is None:
        print("Nothing to check.", file=sys.stderr)
        return 1
    print("\n".join(format_report(report)))
    return 0


def _cmd_audit(args: argparse.Namespace) -> int:
    audit = audit_sampler(args.modulus, args.size)
    print(f"uniform_int({audit.n}) x {audit.size}")
    print(f"chi-square: {audit.chi_square.stat:.2f} (df={audit.chi_square.df}, p={audit.chi_square.pvalue:.4f})")
    print(f"KL vs uniform: {audit.kl_bits:.3e} bits")
    print(f"rejected draws: {audit.rejections}")
    return 0


_COMMANDS = {
    "generate": _cmd_generate,
    "check": _cmd_check,
    "audit": _cmd_audit,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return _COMMANDS[args.command](args)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except RandomnessUnavailable as exc:
        logger.critical("refusing to continue without a secure random source: %s", exc)
        return 3
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
