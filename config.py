"""
config.py

Runtime settings for the analytics core, read from environment variables:

- STUDENT_ANALYTICS_STRICT        "1"/"0" (drop vs zero-impute bad numerics)
- STUDENT_ANALYTICS_DECIMALS      decimals shown in the regression equation
- STUDENT_ANALYTICS_SAMPLE_SIZE   records included in the dataset digest
- STUDENT_ANALYTICS_LOG_LEVEL     logging level name
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from constants import DIGEST_SAMPLE_SIZE, EQUATION_DECIMALS


ENV_PREFIX = "STUDENT_ANALYTICS_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class AnalysisConfig:
    strict: bool = True
    equation_decimals: int = EQUATION_DECIMALS
    digest_sample_size: int = DIGEST_SAMPLE_SIZE
    log_level: str = "INFO"


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX + name} must be a boolean flag, got {raw!r}")


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{ENV_PREFIX + name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{ENV_PREFIX + name} must be non-negative, got {value}")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> AnalysisConfig:
    """Build an ``AnalysisConfig`` from ``environ`` (defaults to ``os.environ``)."""
    if environ is None:
        environ = os.environ

    log_level = (environ.get(ENV_PREFIX + "LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level: {log_level!r}")

    return AnalysisConfig(
        strict=_env_bool(environ, "STRICT", True),
        equation_decimals=_env_int(environ, "DECIMALS", EQUATION_DECIMALS),
        digest_sample_size=_env_int(environ, "SAMPLE_SIZE", DIGEST_SAMPLE_SIZE),
        log_level=log_level,
    )


def configure_logging(level: str = "INFO") -> None:
    """Basic logging setup for an application embedding the core."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
