"""Diagnostics: structured logging, crash dumps, faulthandler, Sentry.

Layers:
1. Structured JSON logging with RotatingFileHandler
2. faulthandler: C-level crash tracebacks (decoder segfaults)
3. sys.excepthook: unhandled Python exceptions -> JSON crash dumps
4. Consent-gated Sentry error reporting
"""

import datetime
import faulthandler
import json
import logging
import logging.handlers
import os
import sys
import traceback
from pathlib import Path

import sentry_sdk

from _version import __version__
from security import strip_pii

logger = logging.getLogger(__name__)

APP_DIR = "~/.image-corruptor"

# Maximum crash reports to keep
MAX_CRASH_REPORTS = 5

# Maximum log age in days
MAX_LOG_AGE_DAYS = 7

LOG_FILE_NAME = "corruptor.log"


def _validate_log_dir(env_dir: str) -> str:
    """Validate APP_LOG_DIR is under ~/.image-corruptor. Returns safe path."""
    default = os.path.expanduser(f"{APP_DIR}/logs")
    if env_dir:
        resolved = os.path.realpath(env_dir)
        allowed = os.path.realpath(os.path.expanduser(APP_DIR))
        if not resolved.startswith(allowed + os.sep) and resolved != allowed:
            logger.warning("APP_LOG_DIR outside allowed prefix, using default")
            return default
        return resolved
    return default


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(log_entry)


def _cleanup_old_logs(log_dir: str):
    """Delete log files older than MAX_LOG_AGE_DAYS."""
    cutoff = datetime.datetime.now() - datetime.timedelta(days=MAX_LOG_AGE_DAYS)
    try:
        for f in Path(log_dir).glob(f"{LOG_FILE_NAME}*"):
            if f.stat().st_mtime < cutoff.timestamp():
                f.unlink(missing_ok=True)
    except OSError:
        logger.debug("Log cleanup skipped for %s", log_dir)


def _cleanup_old_crash_reports(crash_dir: str):
    """Keep only the newest MAX_CRASH_REPORTS crash files."""
    try:
        crash_files = sorted(
            Path(crash_dir).glob("crash_*.json"),
            key=lambda f: f.stat().st_mtime,
            reverse=True,
        )
        for old_file in crash_files[MAX_CRASH_REPORTS:]:
            old_file.unlink(missing_ok=True)
    except OSError:
        logger.debug("Crash report cleanup skipped for %s", crash_dir)


def setup_structured_logging(log_dir: str | None = None) -> str:
    """Configure structured JSON logging with rotation.

    Args:
        log_dir: Override log directory (validated against ~/.image-corruptor prefix).

    Returns:
        The directory logs are written to.
    """
    resolved_dir = _validate_log_dir(log_dir or os.environ.get("APP_LOG_DIR", ""))
    os.makedirs(resolved_dir, mode=0o700, exist_ok=True)

    log_path = os.path.join(resolved_dir, LOG_FILE_NAME)
    log_level = os.environ.get("APP_LOG_LEVEL", "INFO").upper()

    # Rotating handler: 10MB max, 7 backups
    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10_000_000,
        backupCount=7,
    )
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level, logging.INFO))
    root.addHandler(handler)

    _cleanup_old_logs(resolved_dir)

    return resolved_dir


def setup_faulthandler(log_dir: str):
    """Enable faulthandler for C-level crash tracebacks.

    Uses a separate file from the main log: rotation would invalidate the
    faulthandler file descriptor.
    """
    fault_path = os.path.join(log_dir, "corruptor_fault.log")
    try:
        fault_file = open(fault_path, "a", buffering=1)  # noqa: SIM115
        os.chmod(fault_path, 0o600)
        faulthandler.enable(file=fault_file, all_threads=True)
    except OSError as e:
        print(f"WARNING: Could not enable faulthandler: {e}", file=sys.stderr)


def write_crash_report(exc_type, exc_value, exc_tb, crash_dir: str | None = None) -> str:
    """Write a PII-stripped JSON crash dump. Returns the file path."""
    crash_dir = crash_dir or os.path.expanduser(f"{APP_DIR}/crash_reports")
    os.makedirs(crash_dir, mode=0o700, exist_ok=True)

    timestamp = datetime.datetime.now(tz=datetime.timezone.utc).strftime(
        "%Y%m%dT%H%M%S%fZ"
    )
    crash_path = os.path.join(crash_dir, f"crash_{timestamp}.json")

    crash_data = {
        "timestamp": timestamp,
        "exception_type": exc_type.__name__ if exc_type else "Unknown",
        "exception_message": str(exc_value),
        "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
        "python_version": sys.version,
        "platform": sys.platform,
        "version": __version__,
    }
    crash_data = strip_pii({"extra": crash_data}, {}).get("extra", crash_data)

    # Write with restricted permissions
    old_umask = os.umask(0o077)
    try:
        with open(crash_path, "w") as f:
            f.write(json.dumps(crash_data, indent=2))
    finally:
        os.umask(old_umask)

    _cleanup_old_crash_reports(crash_dir)
    return crash_path


def setup_excepthook(crash_dir: str | None = None):
    """Install sys.excepthook that writes structured crash dumps."""

    def _crash_excepthook(exc_type, exc_value, exc_tb):
        try:
            write_crash_report(exc_type, exc_value, exc_tb, crash_dir)
        except Exception:  # noqa: BLE001
            # Crash handler failed; fall through to the default hook, don't recurse
            pass
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = _crash_excepthook


def telemetry_consented() -> bool:
    consent_path = Path(os.path.expanduser(f"{APP_DIR}/telemetry_consent"))
    return consent_path.exists() and consent_path.read_text().strip() == "yes"


def init_sentry() -> bool:
    """Initialize Sentry. The DSN is only used after explicit consent.

    Returns True when events will actually be sent.
    """
    dsn = os.environ.get("SENTRY_DSN", "") if telemetry_consented() else ""
    sentry_sdk.init(
        dsn=dsn,
        release=f"image-corruptor@{__version__}",
        environment=os.environ.get("SENTRY_ENV", "development"),
        traces_sample_rate=0.1,
        before_send=strip_pii,
        max_breadcrumbs=50,
    )
    return bool(dsn)


def init_diagnostics(log_dir: str | None = None) -> str:
    """Initialize all diagnostic layers. Call once from the host application."""
    resolved_dir = setup_structured_logging(log_dir)
    setup_faulthandler(resolved_dir)
    setup_excepthook()
    reporting = init_sentry()
    logger.info(
        "Diagnostics initialized: logging=%s, faulthandler=enabled, sentry=%s",
        resolved_dir,
        "on" if reporting else "off",
    )
    return resolved_dir
