"""
Filesystem-backed upload handle.
"""
from pathlib import Path
import logging
import os
import tempfile

from ..core.interfaces import IUploadedFile

logger = logging.getLogger(__name__)


class LocalUpload(IUploadedFile):
    """An uploaded file stored on the local filesystem."""

    def __init__(self, path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_bytes(self) -> bytes:
        return self._path.read_bytes()

    def write_bytes(self, data: bytes) -> None:
        """
        Replace the file contents atomically.

        Data goes to a temporary file in the same directory which is then
        renamed over the original, so a failed write keeps the old bytes.
        """
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            if self._path.exists():
                os.chmod(temp_name, self._path.stat().st_mode & 0o7777)
            os.replace(temp_name, self._path)
        except Exception:
            Path(temp_name).unlink(missing_ok=True)
            logger.error(f"Error writing {self._path}")
            raise

    def __repr__(self) -> str:
        return f"LocalUpload({str(self._path)!r})"
