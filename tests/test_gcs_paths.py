"""Tests for bucket path normalization and release/marker path construction.

- Normalization prepends gs:// exactly once and is idempotent
- Release paths: <bucket>/<build_type>[-<suffix>][/fast][/<version>]
- Marker paths never carry fast or version segments
"""

from __future__ import annotations

import pytest

from releasebucket.storage.gcs import (
    GCSClient,
    PathType,
    build_path,
    get_marker_path,
    get_release_path,
    normalize_gcs_path,
)
from releasebucket.storage.models import GSUtilConfig

PATHS = [
    "",
    "bucket",
    "bucket/ci/v1.2.3",
    "gs://bucket",
    "gs://bucket/ci",
    "gs://gs://bucket",
    "gs://gs://gs://bucket/x",
    "bucket/gs://nested",
    "/leading/slash",
]


class TestNormalizeGcsPath:
    """Tests for normalize_gcs_path()."""

    def test_adds_missing_prefix(self) -> None:
        """A bare path gets the gs:// prefix."""
        assert normalize_gcs_path("bucket/ci") == "gs://bucket/ci"

    def test_keeps_existing_prefix(self) -> None:
        """An already-prefixed path is unchanged."""
        assert normalize_gcs_path("gs://bucket/ci") == "gs://bucket/ci"

    def test_collapses_repeated_prefix(self) -> None:
        """Repeated leading prefixes collapse to one."""
        assert normalize_gcs_path("gs://gs://bucket") == "gs://bucket"

    def test_prefix_inside_path_untouched(self) -> None:
        """A prefix that appears later in the path is left alone."""
        assert normalize_gcs_path("bucket/gs://nested") == "gs://bucket/gs://nested"

    def test_empty_path(self) -> None:
        """An empty path becomes the bare prefix."""
        assert normalize_gcs_path("") == "gs://"

    @pytest.mark.parametrize("path", PATHS)
    def test_idempotent(self, path: str) -> None:
        """Normalizing twice equals normalizing once."""
        once = normalize_gcs_path(path)
        assert normalize_gcs_path(once) == once

    @pytest.mark.parametrize("path", PATHS)
    def test_prefix_exactly_once_at_start(self, path: str) -> None:
        """Result starts with the prefix, and not with two of them."""
        result = normalize_gcs_path(path)
        assert result.startswith("gs://")
        assert not result.startswith("gs://gs://")

    def test_custom_prefix(self) -> None:
        """A configured prefix replaces gs://."""
        client = GCSClient(config=GSUtilConfig(prefix="s3://"))
        assert client.normalize_path("bucket") == "s3://bucket"
        assert client.normalize_path("s3://bucket") == "s3://bucket"


class TestReleasePath:
    """Tests for get_release_path()."""

    def test_minimal(self) -> None:
        """Bucket and build type only."""
        assert get_release_path("gs://bucket", "ci", "", "", False) == "gs://bucket/ci"

    def test_all_segments(self) -> None:
        """Suffix, fast and version in fixed order."""
        assert (
            get_release_path("gs://bucket", "ci", "fast-build", "v1.2.3", True)
            == "gs://bucket/ci-fast-build/fast/v1.2.3"
        )

    def test_suffix_joins_with_hyphen(self) -> None:
        """Suffix is appended to the build type, not added as a segment."""
        assert get_release_path("gs://bucket", "release", "stage") == "gs://bucket/release-stage"

    def test_fast_without_version(self) -> None:
        """Fast flag alone appends a fast segment."""
        assert get_release_path("gs://bucket", "ci", fast=True) == "gs://bucket/ci/fast"

    def test_version_without_fast(self) -> None:
        """Version alone is the final segment."""
        assert (
            get_release_path("gs://bucket", "ci", version="v1.20.0") == "gs://bucket/ci/v1.20.0"
        )

    def test_trailing_slash_on_bucket(self) -> None:
        """A trailing slash on the bucket does not double up."""
        assert get_release_path("gs://bucket/", "ci") == "gs://bucket/ci"

    def test_bare_prefix_bucket(self) -> None:
        """A bucket that is only the scheme keeps both slashes of gs://."""
        assert get_release_path("gs://", "ci", version="v1") == "gs://ci/v1"
        assert get_release_path("gs://", "ci", "x", "v1", True) == "gs://ci-x/fast/v1"

    def test_bucket_without_prefix(self) -> None:
        """The builder does not normalize; a bare bucket stays bare."""
        assert get_release_path("bucket", "ci", version="v1") == "bucket/ci/v1"

    def test_client_method_matches_function(self, client: GCSClient) -> None:
        """GCSClient.release_path delegates to get_release_path."""
        assert client.release_path("gs://b", "ci", "x", "v1", True) == get_release_path(
            "gs://b", "ci", "x", "v1", True
        )


class TestMarkerPath:
    """Tests for get_marker_path()."""

    def test_minimal(self) -> None:
        """Bucket and build type only."""
        assert get_marker_path("gs://bucket", "ci") == "gs://bucket/ci"

    def test_with_suffix(self) -> None:
        """Suffix is hyphenated onto the build type."""
        assert get_marker_path("gs://bucket", "ci", "fast-build") == "gs://bucket/ci-fast-build"

    def test_bare_prefix_bucket(self) -> None:
        """A bucket that is only the scheme keeps both slashes of gs://."""
        assert get_marker_path("gs://", "ci") == "gs://ci"
        assert get_marker_path("gs://", "ci", "stage") == "gs://ci-stage"

    def test_builder_ignores_fast_and_version_for_markers(self) -> None:
        """Marker paths drop fast and version even when the shared builder gets them."""
        path = build_path("gs://bucket", "ci", "x", "v1.2.3", PathType.MARKER, True)

        assert path == "gs://bucket/ci-x"
        assert "fast" not in path.split("/")
        assert "v1.2.3" not in path

    def test_client_method_matches_function(self, client: GCSClient) -> None:
        """GCSClient.marker_path delegates to get_marker_path."""
        assert client.marker_path("gs://b", "ci", "x") == "gs://b/ci-x"
