"""File system service for reading the database tree and writing artifacts."""

import asyncio
import os
from pathlib import Path

import structlog

log = structlog.stdlib.get_logger()


class FileSystemService:
    """Async file system operations with logging.

    Blocking calls run in a worker thread but are awaited one at a time;
    errors are logged with their path and re-raised unchanged.
    """

    async def list_directory(self, directory: Path) -> list[str]:
        """List entry names in a directory.

        Args:
            directory: Directory to list

        Returns:
            Entry names (files and subdirectories), in no particular order

        Raises:
            FileNotFoundError: If the directory does not exist
            NotADirectoryError: If the path is not a directory
            OSError: If the directory cannot be read
        """
        try:
            names = await asyncio.to_thread(os.listdir, directory)
        except OSError as e:
            log.error("Failed to list directory", directory=str(directory), error=str(e))
            raise

        log.debug("Listed directory", directory=str(directory), count=len(names))
        return names

    async def get_file_size(self, path: Path) -> int:
        """Get the size of a file in bytes.

        Raises:
            FileNotFoundError: If the file vanished since it was listed
            OSError: If the file cannot be stat'ed
        """
        try:
            stat = await asyncio.to_thread(path.stat)
        except OSError as e:
            log.error("Failed to get file size", path=str(path), error=str(e))
            raise
        return stat.st_size

    async def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as e:
            log.error("Failed to read file", path=str(path), error=str(e))
            raise

        log.debug("Read file", path=str(path), length=len(text))
        return text

    async def write_text(self, path: Path, text: str) -> None:
        """Write a UTF-8 text file, replacing any previous content."""
        try:
            await asyncio.to_thread(path.write_text, text, encoding="utf-8")
        except OSError as e:
            log.error("Failed to write file", path=str(path), error=str(e))
            raise

        log.debug("Wrote file", path=str(path), length=len(text))

    async def write_text_atomic(self, path: Path, text: str) -> None:
        """Write a UTF-8 text file through a temporary file and a rename.

        Readers of ``path`` see either the previous content or the new
        content, never a partial file.
        """
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            await asyncio.to_thread(temp_path.write_text, text, encoding="utf-8")
            await asyncio.to_thread(temp_path.replace, path)
        except OSError as e:
            log.error("Failed to write file", path=str(path), temp_path=str(temp_path), error=str(e))
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    log.warning("Could not remove temporary file", temp_path=str(temp_path))
            raise

        log.info("File written", path=str(path), size=len(text.encode("utf-8")))
