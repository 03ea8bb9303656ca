"""Receipt files on local disk, served publicly under UPLOAD_URL_PREFIX.

The record stores the public path (``/uploads/cow_purchase_<id>.jpg``); the
file lives at ``UPLOAD_DIR/<basename>``. Deletion is best-effort: failures are
logged and reported as False, never raised.
"""

import logging
import re
from pathlib import Path, PurePosixPath

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from config.settings import settings
from src.cf_common.errors import ReceiptStorageError
from src.cf_common.id_generator import generate_id

logger = logging.getLogger(__name__)

_SAFE_SUFFIX = re.compile(r"^\.[a-z0-9]{1,8}$")


def _suffix(filename: str | None) -> str:
    suffix = PurePosixPath(filename or "").suffix.lower()
    return suffix if _SAFE_SUFFIX.match(suffix) else ""


class ReceiptStorage:
    def __init__(self, upload_dir: str | Path | None = None, url_prefix: str | None = None) -> None:
        self._dir = Path(upload_dir if upload_dir is not None else settings.UPLOAD_DIR)
        self._prefix = (url_prefix if url_prefix is not None else settings.UPLOAD_URL_PREFIX).rstrip("/")

    def path_for(self, public_path: str) -> Path:
        """Map a stored public path to its file; only the basename is honoured."""
        return self._dir / PurePosixPath(public_path).name

    async def save(self, upload: UploadFile) -> str:
        # Snowflake id: millisecond timestamp in the high bits, so names still
        # sort by upload time but two uploads in one millisecond cannot collide.
        filename = f"cow_purchase_{generate_id()}{_suffix(upload.filename)}"
        content = await upload.read()
        target = self._dir / filename
        try:
            await run_in_threadpool(self._write, target, content)
        except OSError:
            logger.exception("Failed to store receipt %s", target)
            raise ReceiptStorageError() from None
        logger.info("Stored receipt %s (%d bytes)", target, len(content))
        return f"{self._prefix}/{filename}"

    async def delete(self, path: str) -> bool:
        target = self.path_for(path)
        try:
            await run_in_threadpool(target.unlink, missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete receipt %s: %s", target, exc)
            return False
        return True

    def _write(self, target: Path, content: bytes) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(content)
