"""Command runner seam for gsutil.

The bucket facade never spawns processes itself; it hands an argument list
to a CommandRunner. Production code uses GSUtilRunner. Tests substitute a
recording fake.

Environment Variables:
    RELEASEBUCKET_GSUTIL_BIN: gsutil executable to run (default: "gsutil")
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence

from releasebucket.storage.errors import GSUtilCommandError, ToolNotFoundError
from releasebucket.storage.models import GSUtilConfig
from releasebucket.storage.tracing import traced_gsutil_operation

logger = logging.getLogger(__name__)


class CommandRunner(ABC):
    """Runs one external tool invocation to completion."""

    @abstractmethod
    def run(self, args: Sequence[str]) -> None:
        """Run the tool with ``args`` and block until it exits.

        Args:
            args: Arguments to pass to the tool, excluding the executable.

        Implementations must report every failure as a BucketStorageError
        subclass. The facade wraps only those; anything else escapes
        unwrapped, and path_exists would raise instead of returning False.

        Raises:
            GSUtilCommandError: If the process exits non-zero or cannot be started.
        """
        ...


class GSUtilRunner(CommandRunner):
    """Runs gsutil as a subprocess.

    There is no timeout: a hung gsutil blocks the caller until it exits.
    """

    def __init__(self, config: GSUtilConfig | None = None) -> None:
        self._config = config if config is not None else GSUtilConfig.from_env()

    @property
    def config(self) -> GSUtilConfig:
        """Return the gsutil configuration."""
        return self._config

    def is_available(self) -> bool:
        """Return True if the gsutil executable can be found on PATH."""
        return shutil.which(self._config.executable) is not None

    def preflight(self) -> None:
        """Fail early if gsutil is not installed.

        Raises:
            ToolNotFoundError: If the executable is not on PATH.
        """
        if not self.is_available():
            raise ToolNotFoundError(executable=self._config.executable)
        logger.debug("Found gsutil executable %s", self._config.executable)

    @traced_gsutil_operation
    def run(self, args: Sequence[str]) -> None:
        cmd = [self._config.executable, *args]
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise GSUtilCommandError(
                f"Unable to start {self._config.executable}: {e}",
                command_args=args,
                cause=e,
            ) from e

        output = (result.stdout or "") + (result.stderr or "")
        if output.strip():
            logger.debug("gsutil output:\n%s", output.rstrip())

        if result.returncode != 0:
            raise GSUtilCommandError(
                command_args=args,
                returncode=result.returncode,
                output=output,
            )
