"""
Local upload store adapter - Implements UploadStore protocol.

Uploaded files are streamed to a local directory under a random name
and checked against an UploadPolicy while they are written. A file
that breaks the policy is removed before the error is raised, so
callers only ever hold complete, accepted files.
"""

import logging
import secrets
from dataclasses import dataclass
from pathlib import Path

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from src.domain.exceptions import PayloadTooLargeError, UnsupportedFormatError
from src.domain.ports import Attachment

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    """Allowed MIME types and size limit for one upload field."""

    allowed_types: frozenset[str]
    max_bytes: int
    format_hint: str

    def rejection_message(self) -> str:
        return f"Formato no permitido. Sube {self.format_hint}."


class LocalUploadStore:
    """
    Implements UploadStore protocol on the local filesystem.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    async def save(self, upload: UploadFile, policy: UploadPolicy) -> Attachment:
        """
        Stream an upload to disk under the policy.

        Raises:
            UnsupportedFormatError: If the MIME type is not allowed
            PayloadTooLargeError: If the file exceeds policy.max_bytes
        """
        content_type = (upload.content_type or "").lower()
        if content_type not in policy.allowed_types:
            logger.info("Upload rejected, type %s: %s", content_type, upload.filename)
            raise UnsupportedFormatError(policy.rejection_message())

        await run_in_threadpool(self.directory.mkdir, parents=True, exist_ok=True)
        path = self.directory / secrets.token_hex(16)
        written = 0
        try:
            fh = await run_in_threadpool(path.open, "wb")
            try:
                while chunk := await upload.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > policy.max_bytes:
                        raise PayloadTooLargeError()
                    await run_in_threadpool(fh.write, chunk)
            finally:
                await run_in_threadpool(fh.close)
        except BaseException:
            await run_in_threadpool(self.discard, path)
            raise
        finally:
            await upload.close()

        logger.info("Upload stored: %s (%d bytes)", upload.filename, written)
        return Attachment(
            path=path,
            filename=Path(upload.filename or path.name).name,
            content_type=content_type,
        )

    def discard(self, path: Path) -> None:
        """Remove a stored upload. Missing files are ignored."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Could not remove upload %s: %s", path, e)
