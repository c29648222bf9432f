"""Bucket storage configuration models.

Provides the per-call copy options record and the immutable gsutil
configuration (path prefix, flag literals, executable).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

RELEASEBUCKET_GSUTIL_BIN_ENV = "RELEASEBUCKET_GSUTIL_BIN"

GCS_PREFIX = "gs://"


@dataclass(frozen=True)
class CopyOptions:
    """Options for a single gsutil copy.

    Attributes:
        concurrent: Run gsutil in parallel mode (``-m``).
        recursive: Copy directories recursively (``-r``).
        no_clobber: Skip objects that already exist at the destination (``-n``).
        allow_missing: Treat a missing local source as a successful no-op
            instead of an error. This lets uploads of optional build
            artifacts sit inside a loop without one absent file aborting
            the whole batch.
    """

    concurrent: bool = True
    recursive: bool = True
    no_clobber: bool = True
    allow_missing: bool = True


DEFAULT_COPY_OPTIONS = CopyOptions()


class GSUtilConfig(BaseModel):
    """Literals used to talk to gsutil.

    Flag syntax belongs to gsutil; changing the tool means changing these
    values, not the facade.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    executable: str = Field(default="gsutil", min_length=1)
    prefix: str = Field(default=GCS_PREFIX, min_length=1)
    concurrent_flag: str = Field(default="-m", min_length=1)
    recursive_flag: str = Field(default="-r", min_length=1)
    no_clobber_flag: str = Field(default="-n", min_length=1)
    copy_command: str = Field(default="cp", min_length=1)
    rsync_command: str = Field(default="rsync", min_length=1)
    list_command: str = Field(default="ls", min_length=1)

    @field_validator("*")
    @classmethod
    def no_blank_literals(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v

    @classmethod
    def from_env(cls) -> GSUtilConfig:
        """Build a config, taking the executable from RELEASEBUCKET_GSUTIL_BIN if set."""
        executable = os.environ.get(RELEASEBUCKET_GSUTIL_BIN_ENV, "").strip()
        if executable:
            return cls(executable=executable)
        return cls()
