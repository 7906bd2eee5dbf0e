"""
Upload rules.

Batch validation and storage key generation for document uploads.

Dependencies: None
System role: Upload precondition checks and collision-free key minting
"""

import re
import time
from typing import Callable, Sequence

from caritas.core.exceptions import ClientPreconditionError
from caritas.models.documents import UploadBlob


ALLOWED_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "text/plain",
    }
)

MAX_TOTAL_BYTES = 20 * 1024 * 1024

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def validate_upload_batch(
    blobs: Sequence[UploadBlob],
    max_total_bytes: int = MAX_TOTAL_BYTES,
) -> None:
    """
    Validate aggregate size and content types of an upload batch.

    Size is checked before types, so an oversized batch with a bad type
    reports the size problem.

    Args:
        blobs: Files submitted together
        max_total_bytes: Inclusive ceiling for the combined size

    Raises:
        ClientPreconditionError: If the batch is empty, too large, or has an
            unsupported content type
    """
    if not blobs:
        raise ClientPreconditionError("Please upload at least one document", field="files")

    check_total_size(sum(blob.size for blob in blobs), max_total_bytes)

    invalid = [blob for blob in blobs if blob.content_type not in ALLOWED_CONTENT_TYPES]
    if invalid:
        raise ClientPreconditionError(
            f"Unsupported file format: {invalid[0].file_name}. "
            "Please use PDF, DOC, DOCX, PPT, PPTX or TXT files.",
            field="files",
            details={"content_type": invalid[0].content_type},
        )


def check_total_size(total_bytes: int, max_total_bytes: int = MAX_TOTAL_BYTES) -> None:
    """
    Enforce the inclusive batch ceiling.

    Also called with the sizes declared by the multipart parser, before any
    file content is read into memory.

    Raises:
        ClientPreconditionError: If ``total_bytes`` exceeds the ceiling
    """
    if total_bytes > max_total_bytes:
        limit_mb = max_total_bytes // (1024 * 1024)
        raise ClientPreconditionError(
            f"Total file size exceeds {limit_mb}MB limit",
            field="files",
            details={"total_bytes": total_bytes},
        )


def validate_owner_id(owner_id: str) -> str:
    """
    Ensure an owner id is usable as a single storage key segment.

    Raises:
        ClientPreconditionError: If the id is blank, a dot segment, or
            contains a path separator
    """
    if not owner_id.strip() or owner_id in (".", "..") or "/" in owner_id or "\\" in owner_id:
        raise ClientPreconditionError(
            "Invalid user identity",
            field="owner_id",
            details={"owner_id": owner_id},
        )
    return owner_id


def sanitize_file_name(file_name: str) -> str:
    """
    Reduce a user-supplied file name to a storage-safe character set.

    Directory components are dropped and every character outside
    ``[A-Za-z0-9._-]`` becomes an underscore.

    Args:
        file_name: Original filename from user

    Returns:
        str: Safe name, ``document`` if nothing usable remains
    """
    base_name = re.split(r"[\\/]", file_name)[-1]
    safe_name = _UNSAFE_CHARS.sub("_", base_name).lstrip(".")
    if not safe_name.strip("_"):
        return "document"
    return safe_name


def build_storage_key(owner_id: str, file_name: str, epoch_millis: int) -> str:
    """
    Build an owner-scoped storage key.

    Format: {owner_id}/{epoch_millis}_{sanitized_file_name}

    Args:
        owner_id: Identity that owns the upload (first path segment)
        file_name: Original filename from user
        epoch_millis: Timestamp component in milliseconds

    Returns:
        str: Storage key
    """
    return f"{validate_owner_id(owner_id)}/{epoch_millis}_{sanitize_file_name(file_name)}"


class StorageKeyFactory:
    """
    Mints storage keys from a strictly increasing millisecond clock.

    Two keys issued by one factory never share a timestamp, so the same
    owner uploading the same file twice (even within one millisecond, or
    twice in one batch) always gets distinct keys.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last_millis = 0

    def _next_millis(self) -> int:
        now = int(self._clock() * 1000)
        # Monotonic even if the wall clock stalls or steps back.
        self._last_millis = max(now, self._last_millis + 1)
        return self._last_millis

    def new_key(self, owner_id: str, file_name: str) -> str:
        """Return a fresh key for ``file_name`` under ``owner_id``."""
        return build_storage_key(owner_id, file_name, self._next_millis())
