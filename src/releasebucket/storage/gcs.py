"""Google Cloud Storage copy facade.

Builds canonical bucket paths for releases and version markers, and copies
build artifacts between local disk and buckets by delegating to gsutil.
Transfer, retry, authentication and consistency are gsutil's business.

Path layout:
    release: gs://<bucket>/<build_type>[-<suffix>][/fast][/<version>]
    marker:  gs://<bucket>/<build_type>[-<suffix>]

Known asymmetries, kept as-is:
- Only copy_to_remote checks that its source exists; copy_to_local and
  copy_bucket_to_bucket let gsutil report a missing source.
- rsync_recursive does not normalize its paths; callers must pass paths
  already prefixed with gs:// (see normalize_gcs_path).
"""

from __future__ import annotations

import logging
import os
from enum import StrEnum

from releasebucket.storage.errors import (
    BucketOperationError,
    BucketStorageError,
    SourceNotFoundError,
)
from releasebucket.storage.models import (
    DEFAULT_COPY_OPTIONS,
    GCS_PREFIX,
    CopyOptions,
    GSUtilConfig,
)
from releasebucket.storage.runner import CommandRunner, GSUtilRunner

logger = logging.getLogger(__name__)


class PathType(StrEnum):
    """Kinds of bucket path the path builder can produce."""

    RELEASE = "release"
    MARKER = "marker"


def normalize_gcs_path(gcs_path: str, prefix: str = GCS_PREFIX) -> str:
    """Ensure a path starts with exactly one ``prefix``.

    Leading copies of the prefix are stripped before one is prepended, so
    the result is the same however many times it is applied. A prefix that
    occurs later in the string is left alone.
    """
    while gcs_path.startswith(prefix):
        gcs_path = gcs_path[len(prefix) :]
    return prefix + gcs_path


def _join(base: str, segment: str) -> str:
    """Join two path segments with a single slash, skipping empty ones."""
    if not segment:
        return base
    if not base:
        return segment
    segment = segment.lstrip("/")
    # A trailing slash may be the scheme separator itself, as in a bare "gs://".
    if base.endswith("/"):
        return base + segment
    return base + "/" + segment


def build_path(
    bucket: str,
    build_type: str,
    suffix: str,
    version: str,
    path_type: PathType,
    fast: bool,
) -> str:
    """Build a bucket path of the given type.

    Marker paths have no version dimension: ``version`` and ``fast`` are
    ignored for them.
    """
    gcs_path = _join(bucket, build_type)

    if suffix:
        gcs_path += "-" + suffix

    if path_type == PathType.RELEASE:
        if fast:
            gcs_path = _join(gcs_path, "fast")

        if version:
            gcs_path = _join(gcs_path, version)

    logger.info("GCS path is %s", gcs_path)

    return gcs_path


def get_release_path(
    bucket: str,
    build_type: str,
    suffix: str = "",
    version: str = "",
    fast: bool = False,
) -> str:
    """Return the bucket path to push builds to or fetch builds from.

    Example:
        >>> get_release_path("gs://bucket", "ci", "fast-build", "v1.2.3", True)
        'gs://bucket/ci-fast-build/fast/v1.2.3'
    """
    return build_path(bucket, build_type, suffix, version, PathType.RELEASE, fast)


def get_marker_path(bucket: str, build_type: str, suffix: str = "") -> str:
    """Return the bucket path where version markers are stored."""
    return build_path(bucket, build_type, suffix, "", PathType.MARKER, False)


class GCSClient:
    """Copies build artifacts to, from and between GCS buckets via gsutil.

    The client keeps no state between calls. Each operation runs at most one
    gsutil process and blocks until it exits; failures are raised, never
    retried.

    Args:
        runner: Command runner used to invoke gsutil. Defaults to a
            GSUtilRunner built from ``config``.
        config: Prefix and flag literals. Defaults to GSUtilConfig.from_env().
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        config: GSUtilConfig | None = None,
    ) -> None:
        self._config = config if config is not None else GSUtilConfig.from_env()
        self._runner = runner if runner is not None else GSUtilRunner(self._config)

    @property
    def config(self) -> GSUtilConfig:
        """Return the gsutil configuration."""
        return self._config

    def normalize_path(self, gcs_path: str) -> str:
        """Ensure the configured prefix is prepended exactly once."""
        return normalize_gcs_path(gcs_path, self._config.prefix)

    def release_path(
        self,
        bucket: str,
        build_type: str,
        suffix: str = "",
        version: str = "",
        fast: bool = False,
    ) -> str:
        """See get_release_path."""
        return get_release_path(bucket, build_type, suffix, version, fast)

    def marker_path(self, bucket: str, build_type: str, suffix: str = "") -> str:
        """See get_marker_path."""
        return get_marker_path(bucket, build_type, suffix)

    def copy_to_remote(
        self,
        src: str | os.PathLike[str],
        gcs_path: str,
        options: CopyOptions | None = None,
    ) -> None:
        """Copy a local file or directory to a bucket path.

        If ``src`` does not exist and ``options.allow_missing`` is set, the
        copy is skipped and gsutil is never run.

        Raises:
            SourceNotFoundError: If ``src`` is missing and missing sources are not allowed.
            BucketOperationError: If gsutil fails.
        """
        opts = options if options is not None else DEFAULT_COPY_OPTIONS
        src = os.fspath(src)
        logger.info("Copying %s to GCS (%s)", src, gcs_path)
        gcs_path = self.normalize_path(gcs_path)

        if not os.path.exists(src):
            logger.info("Unable to get local source directory info")

            if opts.allow_missing:
                logger.info("Source directory (%s) does not exist. Skipping GCS upload.", src)
                return

            raise SourceNotFoundError(path=src)

        self._bucket_copy(src, gcs_path, opts)

    def copy_to_local(
        self,
        gcs_path: str,
        dst: str | os.PathLike[str],
        options: CopyOptions | None = None,
    ) -> None:
        """Copy a bucket path to a local directory.

        Raises:
            BucketOperationError: If gsutil fails, including when the bucket path is absent.
        """
        opts = options if options is not None else DEFAULT_COPY_OPTIONS
        dst = os.fspath(dst)
        logger.info("Copying GCS (%s) to %s", gcs_path, dst)
        self._bucket_copy(self.normalize_path(gcs_path), dst, opts)

    def copy_bucket_to_bucket(
        self,
        src: str,
        dst: str,
        options: CopyOptions | None = None,
    ) -> None:
        """Copy between two bucket paths.

        Raises:
            BucketOperationError: If gsutil fails.
        """
        opts = options if options is not None else DEFAULT_COPY_OPTIONS
        logger.info("Copying %s to %s", src, dst)
        self._bucket_copy(self.normalize_path(src), self.normalize_path(dst), opts)

    def _copy_args(self, src: str, dst: str, opts: CopyOptions) -> list[str]:
        """Assemble gsutil arguments: [-m] cp [-r] [-n] src dst."""
        args: list[str] = []

        if opts.concurrent:
            logger.debug("Setting GCS copy to run concurrently")
            args.append(self._config.concurrent_flag)

        args.append(self._config.copy_command)
        if opts.recursive:
            logger.debug("Setting GCS copy to run recursively")
            args.append(self._config.recursive_flag)
        if opts.no_clobber:
            logger.debug("Setting GCS copy to not clobber existing files")
            args.append(self._config.no_clobber_flag)

        args.extend([src, dst])
        return args

    def _bucket_copy(self, src: str, dst: str, opts: CopyOptions) -> None:
        try:
            self._runner.run(self._copy_args(src, dst, opts))
        except BucketStorageError as e:
            raise BucketOperationError("gcs copy", cause=e) from e

    def rsync_recursive(self, src: str, dst: str) -> None:
        """Mirror ``src`` onto ``dst`` with ``gsutil -m rsync -r``.

        Paths are passed through untouched; normalize them first.

        Raises:
            BucketOperationError: If gsutil fails.
        """
        cfg = self._config
        try:
            self._runner.run(
                [cfg.concurrent_flag, cfg.rsync_command, cfg.recursive_flag, src, dst]
            )
        except BucketStorageError as e:
            raise BucketOperationError("running gsutil rsync", cause=e) from e

    def path_exists(self, gcs_path: str) -> tuple[bool, BucketStorageError | None]:
        """Check whether a bucket path exists by listing it.

        A failed listing is read as "does not exist". The underlying error is
        returned for the caller to inspect or discard; nothing is raised.

        Returns:
            Tuple of (exists, error). error is None when exists is True.
        """
        try:
            self._runner.run([self._config.list_command, gcs_path])
        except BucketStorageError as e:
            return False, e

        logger.info("Found %s", gcs_path)
        return True, None
