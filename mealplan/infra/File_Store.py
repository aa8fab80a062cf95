"""File store: the byte-level read/write capability used by the repositories."""
import logging
import os
import shutil
import tempfile
from pathlib import Path

from mealplan.domain.errors import IoError, NotFound

logger = logging.getLogger(__name__)


class FileStore:
    """Local filesystem store.

    Timestamps are integer nanoseconds (st_mtime_ns) so equality checks are exact.
    """

    def exists(self, path) -> bool:
        return Path(path).is_file()

    def read(self, path) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            raise NotFound(f"File not found: {path}") from e
        except OSError as e:
            raise IoError(f"Failed to read {path}: {e}") from e

    def write(self, path, data: bytes) -> None:
        """Write atomically: temp file in the target directory, then move into place."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=path.suffix)
        except OSError as e:
            raise IoError(f"Failed to write {path}: {e}") from e
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
            shutil.move(tmp_path, path)
        except OSError as e:
            raise IoError(f"Failed to write {path}: {e}") from e
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning(f"Could not remove temporary file {tmp_path}")
        logger.debug(f"Wrote {len(data)} bytes to {path}")

    def last_modified(self, path) -> int:
        try:
            return os.stat(path).st_mtime_ns
        except FileNotFoundError as e:
            raise NotFound(f"File not found: {path}") from e
        except OSError as e:
            raise IoError(f"Failed to stat {path}: {e}") from e

    def set_last_modified(self, path, timestamp: int) -> None:
        try:
            os.utime(path, ns=(timestamp, timestamp))
        except FileNotFoundError as e:
            raise NotFound(f"File not found: {path}") from e
        except OSError as e:
            raise IoError(f"Failed to update timestamp of {path}: {e}") from e

    def delete(self, path) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            return
        except OSError as e:
            raise IoError(f"Failed to delete {path}: {e}") from e
