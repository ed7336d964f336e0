"""Input/output validation gates and PII scrubbing for colorogram."""

import json
import os
from pathlib import Path

MAX_INPUT_SIZE = 200 * 1024 * 1024  # 200 MB

# Decoded images are held in memory in full (3 bytes per pixel, plus the
# stacked output); 250 MP keeps that under ~1.5 GB.
MAX_PIXELS = 250_000_000

BLOCKED_OUTPUT_PREFIXES = (
    "/System",
    "/Library",
    "/usr",
    "/bin",
    "/sbin",
    "/etc",
    "/private/etc",
)


def _unsafe_name(name: str) -> bool:
    return ".." in name or "/" in name or "\\" in name or "\x00" in name


def validate_input(path: str) -> list[str]:
    """Validate an input image path. Returns list of errors (empty = valid).

    Checks:
    - File exists
    - Not a symlink
    - File size <= MAX_INPUT_SIZE
    """
    errors: list[str] = []
    p = Path(path)

    if not p.exists():
        errors.append(f"File '{path}' not found")
        return errors

    if p.is_symlink():
        errors.append("Symlinks are not allowed")
        return errors

    if not p.is_file():
        errors.append(f"Not a regular file: {path}")
        return errors

    size = p.stat().st_size
    if size > MAX_INPUT_SIZE:
        size_mb = size / (1024 * 1024)
        errors.append(
            f"File too large: {size_mb:.1f} MB (max {MAX_INPUT_SIZE // (1024 * 1024)} MB)"
        )

    return errors


def validate_pixel_count(width: int, height: int) -> list[str]:
    """Validate decoded image size against MAX_PIXELS. Returns list of errors."""
    errors: list[str] = []
    if width * height > MAX_PIXELS:
        errors.append(
            f"Image {width}x{height} exceeds maximum of {MAX_PIXELS} pixels"
        )
    return errors


def validate_output_path(path: str, input_path: str | None = None) -> list[str]:
    """Validate an output image path. Returns list of errors (empty = valid).

    Checks:
    - Not a system directory
    - Parent directory exists and is writable
    - Filename is safe (no traversal)
    - Does not overwrite the input image
    """
    errors: list[str] = []
    p = Path(path)

    resolved = str(p.resolve())
    for prefix in BLOCKED_OUTPUT_PREFIXES:
        if resolved == prefix or resolved.startswith(prefix + os.sep):
            errors.append(f"Cannot write to system directory: {prefix}")
            return errors

    parent = p.parent
    if not parent.exists():
        errors.append(f"Output directory does not exist: {parent}")
    elif not os.access(str(parent), os.W_OK):
        errors.append(f"Output directory is not writable: {parent}")

    if _unsafe_name(p.name):
        errors.append(f"Unsafe output filename: {p.name}")

    if input_path is not None and Path(input_path).resolve() == p.resolve():
        errors.append("Output path would overwrite the input image")

    return errors


# --- Sentry event scrubbing ---

_SECRET_WORDS = ("dsn", "token", "secret", "password")
_JOB_PATH_KEYS = ("input", "output")


def strip_pii(event: dict, hint: dict) -> dict:
    """Sentry ``before_send`` hook.

    Failures usually carry image paths, and those sit under the user's home
    directory. The home prefix becomes ``~`` everywhere in the event, paths
    in the ``job`` context are cut down to file names, and secret-looking
    ``extra`` keys are redacted.
    """
    home = os.path.expanduser("~")
    if home and home != os.sep:
        event = json.loads(json.dumps(event, default=str).replace(home, "~"))

    job = event.get("contexts", {}).get("job")
    if isinstance(job, dict):
        for key in _JOB_PATH_KEYS:
            if job.get(key):
                job[key] = os.path.basename(job[key])

    extra = event.get("extra", {})
    for key in extra:
        if any(word in key.lower() for word in _SECRET_WORDS):
            extra[key] = "<REDACTED>"
    return event
