"""releasebucket bucket storage facade.

Copies release artifacts between local disk and Google Cloud Storage by
running gsutil, and builds canonical release and marker bucket paths.

Environment Variables:
    RELEASEBUCKET_GSUTIL_BIN: gsutil executable to run (default: "gsutil")
"""

from releasebucket.storage.errors import (
    BucketOperationError,
    BucketStorageError,
    GSUtilCommandError,
    SourceNotFoundError,
    ToolNotFoundError,
)
from releasebucket.storage.gcs import (
    GCSClient,
    get_marker_path,
    get_release_path,
    normalize_gcs_path,
)
from releasebucket.storage.models import DEFAULT_COPY_OPTIONS, CopyOptions, GSUtilConfig
from releasebucket.storage.runner import CommandRunner, GSUtilRunner

__all__ = [
    "GCSClient",
    "CommandRunner",
    "GSUtilRunner",
    "CopyOptions",
    "DEFAULT_COPY_OPTIONS",
    "GSUtilConfig",
    "normalize_gcs_path",
    "get_release_path",
    "get_marker_path",
    "BucketStorageError",
    "BucketOperationError",
    "GSUtilCommandError",
    "SourceNotFoundError",
    "ToolNotFoundError",
]
