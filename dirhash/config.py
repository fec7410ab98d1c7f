"""Global configuration: constants and environment-driven settings."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Bytes read per call when streaming a file through the hash accumulator
CHUNK_SIZE = 65536

# Job queue capacity is QUEUE_FACTOR * workers
QUEUE_FACTOR = 2

# Environment variables read by load_config, with their defaults
_DEFAULTS: dict[str, str] = {
    "DIRHASH_WORKERS": "0",
    "DIRHASH_QUEUE_FACTOR": str(QUEUE_FACTOR),
    "DIRHASH_LOG_LEVEL": "WARNING",
    "DIRHASH_NO_COLOR": "",
}


class DirhashConfig(BaseModel):
    """Resolved runtime settings."""

    workers: int = 0
    queue_factor: int = QUEUE_FACTOR
    log_level: str = "WARNING"
    color: bool = True

    def resolved_workers(self) -> int:
        """Return the worker count, substituting the CPU count for 0."""
        if self.workers > 0:
            return self.workers
        return default_workers()


def default_workers() -> int:
    return os.cpu_count() or 1


def _positive_int(key: str, raw: str, fallback: int, *, allow_zero: bool = False) -> int:
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", key, raw)
        return fallback
    if value < 0 or (value == 0 and not allow_zero):
        logger.warning("Ignoring %s=%r: out of range", key, raw)
        return fallback
    return value


def load_config(environ: dict[str, str] | None = None) -> DirhashConfig:
    """Load merged config: defaults -> environment variables.

    Parameters
    ----------
    environ:
        Mapping to read variables from; defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    raw = {key: env.get(key, default) for key, default in _DEFAULTS.items()}

    # https://no-color.org
    no_color = raw["DIRHASH_NO_COLOR"] or env.get("NO_COLOR", "")

    level = raw["DIRHASH_LOG_LEVEL"].strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring DIRHASH_LOG_LEVEL=%r: unknown level", level)
        level = "WARNING"

    return DirhashConfig(
        workers=_positive_int("DIRHASH_WORKERS", raw["DIRHASH_WORKERS"], 0, allow_zero=True),
        queue_factor=_positive_int("DIRHASH_QUEUE_FACTOR", raw["DIRHASH_QUEUE_FACTOR"], QUEUE_FACTOR),
        log_level=level,
        color=not no_color,
    )
