from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .logs import DEFAULT_FORMAT, parse_level

DEFAULT_JOB = "myJob"


@dataclass(frozen=True)
class Settings:
    log_level: int
    log_format: str
    default_job: str

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            log_level=parse_level(env.get("MINIBATCH_LOG_LEVEL", "INFO")),
            log_format=env.get("MINIBATCH_LOG_FORMAT", DEFAULT_FORMAT),
            default_job=env.get("MINIBATCH_JOB", DEFAULT_JOB),
        )
