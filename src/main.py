"""colorogram — draw an RGB histogram or waveform scope under an image."""

import argparse
import os
import sys
from pathlib import Path

import sentry_sdk

from _version import __version__
from diagnostics import init_diagnostics
from engine.batch import Job, run_batch, sibling_output_path
from engine.pipeline import RenderConfig, ScopeMode
from scopes.normalize import Normalization
from scopes.waveform import LARGE_SCOPE_HEIGHT
from security import strip_pii

_CONSENT_PATH = "~/.colorogram/telemetry_consent"


def _init_sentry():
    """Consent-gated Sentry init. An empty DSN disables reporting."""
    consent_path = os.path.expanduser(_CONSENT_PATH)
    dsn = ""
    if os.path.exists(consent_path) and Path(consent_path).read_text().strip() == "yes":
        dsn = os.environ.get("SENTRY_DSN", "")

    sentry_sdk.init(
        dsn=dsn,
        release=f"colorogram@{__version__}",
        environment=os.environ.get("SENTRY_ENV", "development"),
        before_send=strip_pii,
        max_breadcrumbs=50,
    )


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colorogram",
        usage=(
            "colorogram <input path> <output path> [options]\n"
            "       colorogram --batch <input path> [<input path> ...] [options]"
        ),
        description="Render an RGB histogram or waveform scope beneath an image.",
    )
    parser.add_argument("paths", nargs="+", metavar="PATH")
    parser.add_argument(
        "--batch",
        action="store_true",
        help="treat every PATH as an input; write <stem>_histogram.<ext> next to each",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ScopeMode],
        default=ScopeMode.HISTOGRAM.value,
        help="histogram bars (default) or per-column waveform scope",
    )
    size = parser.add_mutually_exclusive_group()
    size.add_argument(
        "--height",
        type=_positive_int,
        default=None,
        help="scope height in pixels (default: a quarter of the image height)",
    )
    size.add_argument(
        "--tall",
        action="store_true",
        help=f"shorthand for --height {LARGE_SCOPE_HEIGHT}",
    )
    parser.add_argument(
        "--normalization",
        choices=[n.value for n in Normalization],
        default=Normalization.LOG.value,
        help="waveform brightness mapping (default: log)",
    )
    parser.add_argument("--log-level", default=None, help="override COLOROGRAM_LOG_LEVEL")
    parser.add_argument(
        "--version", action="version", version=f"colorogram {__version__}"
    )
    return parser


def build_jobs(args: argparse.Namespace, parser: argparse.ArgumentParser) -> list[Job]:
    mode = ScopeMode(args.mode)
    if args.batch:
        return [Job(p, sibling_output_path(p, mode)) for p in args.paths]

    if len(args.paths) != 2:
        parser.error("expected exactly <input path> <output path> (or use --batch)")
    return [Job(args.paths[0], args.paths[1])]


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    jobs = build_jobs(args, parser)

    init_diagnostics(level=args.log_level)
    _init_sentry()

    config = RenderConfig(
        mode=ScopeMode(args.mode),
        height=LARGE_SCOPE_HEIGHT if args.tall else args.height,
        normalization=Normalization(args.normalization),
    )
    result = run_batch(jobs, config)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
