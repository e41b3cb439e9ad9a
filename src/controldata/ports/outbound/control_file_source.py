"""Control file source port for raw control file access.

This outbound port defines how the decoder obtains the raw bytes of
pg_control. Implementations may read from the local file system, a
mounted backup, or an in-memory image.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Protocol


# Location of the control file relative to the data directory, fixed by the
# server.
CONTROL_FILE_RELATIVE_PATH = Path("global") / "pg_control"


def control_file_path(data_dir: str | Path) -> Path:
    """Return ``<data_dir>/global/pg_control``."""
    return Path(data_dir) / CONTROL_FILE_RELATIVE_PATH


class ControlFileSource(Protocol):
    """Protocol for reading a raw control file image.

    The source knows nothing about the layout. It only guarantees that it
    either returns exactly the number of bytes asked for or raises.
    """

    @abstractmethod
    def path_for(self, data_dir: str | Path) -> Path:
        """Return the control file path for a data directory."""
        ...

    @abstractmethod
    def read(self, data_dir: str | Path, size: int) -> bytes:
        """Read the first ``size`` bytes of the control file.

        Args:
            data_dir: Cluster data directory.
            size: Exact number of bytes required.

        Returns:
            Exactly ``size`` bytes.

        Raises:
            ControlFileIOError: If the file cannot be opened or holds fewer
                than ``size`` bytes.
        """
        ...
