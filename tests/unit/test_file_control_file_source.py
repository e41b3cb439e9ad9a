"""Unit tests for the control file sources."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from controldata.adapters.outbound import FileControlFileSource, InMemoryControlFileSource
from controldata.domain.entities import CONTROL_FILE_SIZE
from controldata.domain.exceptions import ControlDataError, ControlFileIOError
from controldata.ports.outbound import CONTROL_FILE_RELATIVE_PATH, control_file_path


@pytest.mark.unit
class TestControlFilePath:
    def test_relative_location(self) -> None:
        assert CONTROL_FILE_RELATIVE_PATH == Path("global") / "pg_control"

    def test_path_for(self) -> None:
        assert control_file_path("/srv/pg") == Path("/srv/pg/global/pg_control")


@pytest.mark.unit
class TestFileControlFileSource:
    """Tests for FileControlFileSource."""

    @pytest.fixture
    def source(self) -> FileControlFileSource:
        return FileControlFileSource()

    def test_read_exact_size(
        self,
        source: FileControlFileSource,
        data_dir: Path,
        sample_image: bytes,
        write_control_file: Callable,
    ) -> None:
        """Reads exactly the requested number of bytes."""
        write_control_file(data_dir, sample_image + b"\x00" * 8000)

        data = source.read(data_dir, CONTROL_FILE_SIZE)

        assert data == sample_image
        assert len(data) == CONTROL_FILE_SIZE

    def test_missing_directory(self, source: FileControlFileSource, temp_dir: Path) -> None:
        """A missing data directory is an I/O error naming the file."""
        missing = temp_dir / "nope"

        with pytest.raises(ControlFileIOError) as exc_info:
            source.read(missing, CONTROL_FILE_SIZE)

        expected_path = str(missing / "global" / "pg_control")
        assert f'could not open file "{expected_path}" for reading' in str(exc_info.value)
        assert isinstance(exc_info.value, OSError)
        assert isinstance(exc_info.value, ControlDataError)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_short_read(
        self,
        source: FileControlFileSource,
        data_dir: Path,
        sample_image: bytes,
        write_control_file: Callable,
    ) -> None:
        """A truncated file reports how much was read."""
        path = write_control_file(data_dir, sample_image[:100])

        with pytest.raises(ControlFileIOError) as exc_info:
            source.read(data_dir, CONTROL_FILE_SIZE)

        assert str(exc_info.value) == f'could not read file "{path}": read 100 of 192 bytes'

    def test_directory_in_place_of_file(self, source: FileControlFileSource, data_dir: Path) -> None:
        control_file_path(data_dir).mkdir(parents=True)

        with pytest.raises(ControlFileIOError):
            source.read(data_dir, CONTROL_FILE_SIZE)


@pytest.mark.unit
class TestInMemoryControlFileSource:
    """Tests for InMemoryControlFileSource."""

    def test_read_registered_image(self, sample_image: bytes) -> None:
        source = InMemoryControlFileSource({"/srv/pg": sample_image})
        assert source.read("/srv/pg", CONTROL_FILE_SIZE) == sample_image

    def test_path_keys_are_normalized(self, sample_image: bytes) -> None:
        """str and Path data directories address the same image."""
        source = InMemoryControlFileSource()
        source.add(Path("/srv/pg"), sample_image)
        assert source.read("/srv/pg", CONTROL_FILE_SIZE) == sample_image

    def test_missing_image(self) -> None:
        source = InMemoryControlFileSource()

        with pytest.raises(ControlFileIOError) as exc_info:
            source.read("/srv/pg", CONTROL_FILE_SIZE)

        assert "/srv/pg/global/pg_control" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_short_image(self, sample_image: bytes) -> None:
        source = InMemoryControlFileSource({"/srv/pg": sample_image[:10]})

        with pytest.raises(ControlFileIOError, match="read 10 of 192 bytes"):
            source.read("/srv/pg", CONTROL_FILE_SIZE)
