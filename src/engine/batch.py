"""Batch runner: corrupt many sources one after another.

Strictly sequential: each image is decoded, corrupted, encoded and handed to
the sink before the next one starts. The first failure aborts the batch.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable

import sentry_sdk

from engine.config import CorruptionConfig
from engine.corruptor import corrupt
from engine.determinism import derive_seed

logger = logging.getLogger(__name__)

Sink = Callable[[str, bytes, str | None], None]


class BatchStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass
class BatchJob:
    """Tracks state of a batch run."""

    status: BatchStatus = BatchStatus.IDLE
    current: int = 0
    total: int = 0
    error: str | None = None
    failed_key: str | None = None

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 0.0
        return self.current / self.total

    def to_dict(self) -> dict:
        """Return serializable status dict."""
        return {
            "status": self.status.value,
            "progress": self.progress,
            "current": self.current,
            "total": self.total,
            "error": self.error,
        }


def run_batch(
    items: Iterable[tuple],
    config: CorruptionConfig,
    sink: Sink,
    on_progress: Callable[[BatchJob], None] | None = None,
    job: BatchJob | None = None,
) -> BatchJob:
    """Corrupt every ``(source, key)`` in ``items`` and pass results to ``sink``.

    ``sink(key, data, mime_type)`` is called once per image, in order. When the
    config carries a seed, each image gets its own seed derived from it. Pass
    ``job`` to keep a handle on progress and the failure after an abort.

    Raises:
        Whatever the failing image raised. The job is marked ERROR first.
    """
    items = list(items)
    config.validate()
    if job is None:
        job = BatchJob()
    job.status = BatchStatus.RUNNING
    job.total = len(items)
    job.current = 0
    logger.info("Batch started: %d images, mode=%s", job.total, config.mode.value)

    for index, (source, key) in enumerate(items):
        image_config = config
        if config.seed is not None:
            image_config = replace(config, seed=derive_seed(config.seed, str(key), index))
        try:
            result = corrupt(source, image_config)
            sink(key, result.data, result.mime_type)
        except Exception as e:
            sentry_sdk.capture_exception(e)
            logger.exception("Batch aborted on %s", key)
            job.status = BatchStatus.ERROR
            job.error = f"{type(e).__name__}: {e}"
            job.failed_key = str(key)
            raise
        job.current = index + 1
        if on_progress is not None:
            on_progress(job)

    job.status = BatchStatus.COMPLETE
    logger.info("Batch complete: %d images", job.total)
    return job
