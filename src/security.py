"""Input validation gates and PII scrubbing for image-corruptor."""

import json
import os
import re
from pathlib import Path

# Source validation
MAX_SOURCE_SIZE = 100 * 1024 * 1024  # 100 MB
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif"}

# Decoded raster cap (width * height)
MAX_PIXELS = 50_000_000


def validate_source(path: str) -> list[str]:
    """Validate a source image path. Returns list of errors (empty = valid).

    Checks:
    - File exists
    - Not a symlink
    - Extension in whitelist
    - File size <= 100 MB
    """
    errors: list[str] = []
    p = Path(path)

    if not p.exists():
        errors.append(f"File not found: {path}")
        return errors

    if p.is_symlink():
        errors.append("Symlinks are not allowed")
        return errors

    if not p.is_file():
        errors.append(f"Not a file: {path}")
        return errors

    ext = p.suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        errors.append(
            f"Extension '{ext}' not allowed. Allowed: {sorted(ALLOWED_EXTENSIONS)}"
        )

    size = p.stat().st_size
    if size > MAX_SOURCE_SIZE:
        size_mb = size / (1024 * 1024)
        errors.append(
            f"File too large: {size_mb:.1f} MB (max {MAX_SOURCE_SIZE // (1024 * 1024)} MB)"
        )

    return errors


def validate_raster_size(width: int, height: int) -> list[str]:
    """Validate decoded dimensions against the pixel cap. Returns list of errors."""
    errors: list[str] = []
    if width < 1 or height < 1:
        errors.append(f"Image has no pixels ({width}x{height})")
    elif width * height > MAX_PIXELS:
        errors.append(
            f"Image is {width}x{height} ({width * height} pixels), exceeds {MAX_PIXELS}"
        )
    return errors


# --- PII stripping for Sentry and crash dumps ---

_HOME = os.path.expanduser("~")
_USERNAME = os.path.basename(_HOME)
_PATH_PATTERN = re.compile(r"/Users/[^/\s]+|/home/[^/\s]+|C:\\Users\\[^\\\s]+")
_SENSITIVE_KEYS = {"token", "auth", "key", "secret", "password", "dsn"}


def _scrub_dict(d: dict):
    """Redact values for keys that look sensitive."""
    for key in list(d.keys()):
        if any(s in key.lower() for s in _SENSITIVE_KEYS):
            d[key] = "<REDACTED>"


def strip_pii(event: dict, hint: dict) -> dict:
    """Sentry before_send hook. Strips home paths, usernames and secrets.

    Also usable for crash dump sanitization.
    """
    event_str = json.dumps(event)
    if len(_HOME) > 1:
        event_str = event_str.replace(_HOME, "<HOME>")
    if len(_USERNAME) > 2:
        event_str = event_str.replace(_USERNAME, "<USER>")
    event_str = _PATH_PATTERN.sub("<REDACTED_PATH>", event_str)
    event = json.loads(event_str)

    _scrub_dict(event.get("extra", {}))
    for ctx in event.get("contexts", {}).values():
        if isinstance(ctx, dict):
            _scrub_dict(ctx)
    return event
