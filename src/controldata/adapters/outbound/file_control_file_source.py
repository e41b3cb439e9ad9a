"""File-based control file source.

This adapter implements the ControlFileSource protocol using standard file
I/O. Every call opens its own handle, reads once and closes it, so
concurrent callers never share state.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path

from controldata.domain.exceptions import ControlFileIOError
from controldata.ports.outbound.control_file_source import control_file_path


class FileControlFileSource:
    """Reads pg_control from a data directory on the local file system."""

    def path_for(self, data_dir: str | Path) -> Path:
        """Return the control file path for a data directory."""
        return control_file_path(data_dir)

    def read(self, data_dir: str | Path, size: int) -> bytes:
        """Read the first ``size`` bytes of ``<data_dir>/global/pg_control``.

        Args:
            data_dir: Cluster data directory.
            size: Exact number of bytes required.

        Returns:
            Exactly ``size`` bytes.

        Raises:
            ControlFileIOError: If the file cannot be opened, cannot be read,
                or holds fewer than ``size`` bytes.
        """
        path = self.path_for(data_dir)

        try:
            f = open(path, "rb")
        except OSError as e:
            raise ControlFileIOError(
                f'could not open file "{path}" for reading: {e.strerror or e}'
            ) from e

        with f:
            try:
                data = f.read(size)
            except OSError as e:
                raise ControlFileIOError(
                    f'could not read file "{path}": {e.strerror or e}'
                ) from e

        if len(data) != size:
            raise ControlFileIOError(
                f'could not read file "{path}": read {len(data)} of {size} bytes'
            )

        return data


class InMemoryControlFileSource:
    """Serves control file images from memory, keyed by data directory.

    Useful for inspecting images that were copied out of a backup, and for
    exercising the decoder without touching the disk.
    """

    def __init__(self, images: dict[str, bytes] | None = None) -> None:
        self._images: dict[str, bytes] = {}
        for data_dir, image in (images or {}).items():
            self.add(data_dir, image)

    def add(self, data_dir: str | Path, image: bytes) -> None:
        """Register a raw image for a data directory."""
        self._images[os.fspath(self.path_for(data_dir))] = bytes(image)

    def path_for(self, data_dir: str | Path) -> Path:
        return control_file_path(data_dir)

    def read(self, data_dir: str | Path, size: int) -> bytes:
        path = self.path_for(data_dir)
        image = self._images.get(os.fspath(path))
        if image is None:
            missing = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
            raise ControlFileIOError(
                f'could not open file "{path}" for reading: {missing.strerror}'
            ) from missing

        if len(image) < size:
            raise ControlFileIOError(
                f'could not read file "{path}": read {len(image)} of {size} bytes'
            )

        return image[:size]
