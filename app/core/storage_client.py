import os
import asyncio
from pathlib import Path
from typing import List, Union

from app.core.exceptions import InvalidFilenameError
from app.core.logging import get_service_logger
from app.models.schemas.validators import validate_storage_filename

logger = get_service_logger("storage_client")


class StorageClientError(Exception):
    """Base exception for local storage errors."""

    def __init__(self, message: str, filename: str, cause: Exception):
        super().__init__(message)
        self.filename = filename
        self.cause = cause


class StorageObjectNotFoundError(StorageClientError):
    """Object not found error."""

    pass


class LocalStorageClient:
    """Flat-directory file storage.

    Every name handed to the client is a single path segment inside ``root``;
    anything else is rejected before the filesystem is touched. Blocking calls
    have ``*_async`` counterparts that run on a worker thread.
    """

    def __init__(self, root: Union[str, Path], name: str = "storage"):
        self.root = Path(root)
        self.name = name
        self.logger = logger.bind(store=name)

    def ensure_directory(self) -> None:
        """Create the storage directory if it does not exist yet."""
        if not self.root.is_dir():
            self.root.mkdir(parents=True, exist_ok=True)
            self.logger.info("Created storage directory", path=str(self.root))

    @property
    def is_available(self) -> bool:
        return self.root.is_dir()

    def path_for(self, filename: str) -> Path:
        """Map a filename to its path inside the storage root.

        Raises:
            InvalidFilenameError: If the name is not a plain file name
        """
        try:
            filename = validate_storage_filename(filename)
        except ValueError as e:
            self.logger.warning("Rejected filename", filename=filename, error=str(e))
            raise InvalidFilenameError(str(e), filename=filename)

        path = self.root / filename
        # resolve() follows symlinks; the parent must still be the root itself
        if path.resolve().parent != self.root.resolve():
            raise InvalidFilenameError("Filename escapes storage directory", filename)
        return path

    def _wrap_error(
        self, action: str, filename: str, e: Union[OSError, UnicodeError]
    ) -> StorageClientError:
        error_class = (
            StorageObjectNotFoundError
            if isinstance(e, FileNotFoundError)
            else StorageClientError
        )
        return error_class(f"Failed to {action} '{filename}': {e}", filename, e)

    def write_text(self, filename: str, content: str) -> Path:
        """Encode first so an unencodable text never truncates the existing file."""
        try:
            data = content.encode("utf-8")
        except UnicodeEncodeError as e:
            raise self._wrap_error("encode", filename, e)
        return self.write_bytes(filename, data)

    def write_bytes(self, filename: str, content: bytes) -> Path:
        path = self.path_for(filename)
        try:
            path.write_bytes(content)
        except OSError as e:
            raise self._wrap_error("write", filename, e)
        self.logger.debug("Wrote file", filename=filename, size=len(content))
        return path

    def read_text(self, filename: str) -> str:
        path = self.path_for(filename)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise self._wrap_error("read", filename, e)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise self._wrap_error("decode", filename, e)

    def delete(self, filename: str) -> None:
        path = self.path_for(filename)
        try:
            path.unlink()
        except OSError as e:
            raise self._wrap_error("delete", filename, e)
        self.logger.debug("Deleted file", filename=filename)

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).exists()

    def stat(self, filename: str) -> os.stat_result:
        path = self.path_for(filename)
        try:
            return path.stat()
        except OSError as e:
            raise self._wrap_error("stat", filename, e)

    def list_names(self) -> List[str]:
        """Names of every entry in the storage directory, sorted."""
        try:
            return sorted(os.listdir(self.root))
        except OSError as e:
            raise self._wrap_error("list", str(self.root), e)

    async def write_text_async(self, filename: str, content: str) -> Path:
        return await asyncio.to_thread(self.write_text, filename, content)

    async def write_bytes_async(self, filename: str, content: bytes) -> Path:
        return await asyncio.to_thread(self.write_bytes, filename, content)

    async def read_text_async(self, filename: str) -> str:
        return await asyncio.to_thread(self.read_text, filename)

    async def delete_async(self, filename: str) -> None:
        await asyncio.to_thread(self.delete, filename)

    async def exists_async(self, filename: str) -> bool:
        return await asyncio.to_thread(self.exists, filename)

    async def stat_async(self, filename: str) -> os.stat_result:
        return await asyncio.to_thread(self.stat, filename)

    async def list_names_async(self) -> List[str]:
        return await asyncio.to_thread(self.list_names)
