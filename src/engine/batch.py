"""Batch runner — decode, render and encode a list of images.

A failure on one file never stops the batch: decode and validation failures
skip the file, encode failures mark it failed and move on.
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import sentry_sdk

from engine.errors import DecodeError, EncodeError
from engine.pipeline import RenderConfig, ScopeMode, render
from imaging.reader import read_image
from imaging.writer import format_for_path, save_image
from security import validate_input, validate_output_path, validate_pixel_count

logger = logging.getLogger(__name__)

OUTPUT_SUFFIXES = {
    ScopeMode.HISTOGRAM: "_histogram",
    ScopeMode.WAVEFORM: "_waveform",
}


class JobStatus(Enum):
    PENDING = "pending"
    COMPLETE = "complete"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class Job:
    """One input/output pair and how it went."""

    input_path: str
    output_path: str
    status: JobStatus = JobStatus.PENDING
    error: str | None = None


@dataclass
class BatchResult:
    jobs: list[Job] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for j in self.jobs if j.status == JobStatus.COMPLETE)

    @property
    def failed(self) -> int:
        return sum(
            1 for j in self.jobs if j.status in (JobStatus.SKIPPED, JobStatus.ERROR)
        )

    @property
    def ok(self) -> bool:
        return self.failed == 0


def sibling_output_path(input_path: str, mode: ScopeMode = ScopeMode.HISTOGRAM) -> str:
    """``photo.jpg`` -> ``photo_histogram.jpg`` next to the input."""
    p = Path(input_path)
    return str(p.with_name(f"{p.stem}{OUTPUT_SUFFIXES[mode]}{p.suffix}"))


def _report(job: Job, message: str) -> None:
    print(f"colorogram: {message}", file=sys.stderr)
    job.error = message


def _job_fields(job: Job, config: RenderConfig, started: float, source=None) -> dict:
    """Structured outcome attached to log records and Sentry events."""
    fields = {
        "input": job.input_path,
        "output": job.output_path,
        "status": job.status.value,
        "mode": config.mode.value,
        "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
    }
    if source is not None:
        fields["width"] = source.width
        fields["height"] = source.height
    return fields


def _skip(
    job: Job, message: str, config: RenderConfig, started: float, source=None
) -> Job:
    job.status = JobStatus.SKIPPED
    _report(job, message)
    logger.warning(
        "Skipped %s: %s",
        job.input_path,
        message,
        extra={"job": _job_fields(job, config, started, source)},
    )
    return job


def _fail(
    job: Job, exc: Exception, message: str, config: RenderConfig, started: float, source
) -> Job:
    job.status = JobStatus.ERROR
    fields = _job_fields(job, config, started, source)
    sentry_sdk.set_context("job", fields)
    sentry_sdk.capture_exception(exc)
    logger.exception("Failed %s", job.input_path, extra={"job": fields})
    _report(job, message)
    return job


def process(job: Job, config: RenderConfig) -> Job:
    """Run one job in place. Never raises for per-file failures.

    Validation and decode problems skip the file before anything is written;
    encode and render failures mark it ERROR and are reported to Sentry.
    """
    started = time.perf_counter()
    errors = validate_input(job.input_path)
    errors += validate_output_path(job.output_path, input_path=job.input_path)
    if errors:
        return _skip(job, "; ".join(errors), config, started)

    try:
        fmt = format_for_path(job.output_path)
        source = read_image(job.input_path)
    except (DecodeError, EncodeError) as e:
        return _skip(job, str(e), config, started)

    errors = validate_pixel_count(source.width, source.height)
    if errors:
        return _skip(job, "; ".join(errors), config, started, source)

    try:
        output = render(source, config)
        save_image(output, job.output_path, format=fmt)
    except EncodeError as e:
        return _fail(job, e, str(e), config, started, source)
    except Exception as e:
        message = f"Failed to render '{job.input_path}': {type(e).__name__}"
        return _fail(job, e, message, config, started, source)

    job.status = JobStatus.COMPLETE
    logger.info(
        "Wrote %s",
        job.output_path,
        extra={"job": _job_fields(job, config, started, source)},
    )
    return job


def run_batch(jobs: list[Job], config: RenderConfig | None = None) -> BatchResult:
    config = config or RenderConfig()
    result = BatchResult()
    for job in jobs:
        result.jobs.append(process(job, config))
    logger.info(
        "Batch finished: %d succeeded, %d failed", result.succeeded, result.failed
    )
    return result
