# 📄 File: daisy/shared/infrastructure/storage/supabase_storage.py

# 🧭 Purpose (Layman Explanation):
# This file uploads photos (for recognition or for blog posts) to cloud storage
# and deletes them again when a post no longer needs its picture.

# 🧪 Purpose (Technical Summary):
# Async wrapper over Supabase Storage buckets. Reads upload sources (paths,
# streams, bytes), resolves filename and mime type, uploads under a generated
# object id, and translates storage errors into the client error taxonomy.

# 🔗 Dependencies:
# - supabase / storage3: Storage client and StorageException
# - Pillow (through helpers): Mime type sniffing
# - pydantic: StoredFile record

# 🔄 Connected Modules / Calls From:
# Called by: RemoteGateway (upload_image, upload_blog_image, delete_blog_image)

import asyncio
from pathlib import Path
from typing import BinaryIO, Optional, Union

from pydantic import BaseModel, ConfigDict
from storage3.utils import StorageException
from supabase import Client

from daisy.shared.core.exceptions import NotFoundError, RemoteServiceError, UploadError
from daisy.shared.utils.helpers import (
    extension_for_mime_type,
    generate_id,
    resolve_filename,
    resolve_mime_type,
)
from daisy.shared.utils.logging import get_logger

logger = get_logger(__name__)

UploadSource = Union[str, Path, BinaryIO, bytes]


class StoredFile(BaseModel):
    """A file stored in a bucket. Created on upload, deleted explicitly."""

    model_config = ConfigDict(frozen=True)

    id: str
    bucket_id: str
    mime_type: str
    name: str
    size_bytes: int


def read_source(source: UploadSource) -> bytes:
    """
    Read the full content of an upload source.

    Raises:
        UploadError: If the source cannot be opened or read
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, (str, Path)):
        try:
            with open(source, "rb") as handle:
                return handle.read()
        except OSError as e:
            raise UploadError(
                f"Failed to open {source}: {e.strerror or e}",
                filename=str(source)
            ) from e

    try:
        data = source.read()
    except (OSError, ValueError) as e:
        # ValueError: read on a closed stream
        raise UploadError(f"Failed to read upload stream: {e}") from e

    if data is None:
        raise UploadError("Upload stream returned no data")
    if not isinstance(data, (bytes, bytearray)):
        raise UploadError(
            f"Upload stream must be opened in binary mode, read returned {type(data).__name__}"
        )
    return bytes(data)


class SupabaseStorageClient:
    """
    Bucket operations against Supabase Storage.

    Object ids are generated client side; the object path inside the bucket
    is the id itself.
    """

    def __init__(self, client: Client):
        self._client = client

    def _bucket(self, bucket_id: str):
        return self._client.storage.from_(bucket_id)

    async def upload(
        self,
        bucket_id: str,
        source: UploadSource,
        filename: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> StoredFile:
        """
        Upload a file to a bucket.

        Args:
            bucket_id: Target bucket
            source: Path, binary stream or raw bytes
            filename: Display name; taken from the source when omitted
            mime_type: Content type; resolved from the name or content when omitted

        Returns:
            StoredFile: The stored object

        Raises:
            UploadError: If the source is unreadable, the filename or mime type
                cannot be resolved, or the backend rejects the upload
        """
        data = await asyncio.to_thread(read_source, source)

        name = resolve_filename(source, filename)
        if not name:
            raise UploadError("Could not resolve a filename for the upload", bucket_id=bucket_id)

        content_type = resolve_mime_type(name, data, mime_type)
        if not content_type:
            raise UploadError("Could not resolve the mime type of the upload", filename=name, bucket_id=bucket_id)

        file_id = generate_id() + (Path(name).suffix.lower() or extension_for_mime_type(content_type))

        try:
            await asyncio.to_thread(
                self._bucket(bucket_id).upload,
                file_id,
                data,
                {"content-type": content_type, "upsert": "false"},
            )
        except StorageException as e:
            logger.error(f"Upload of {name} to {bucket_id} failed: {e}", extra={"bucket_id": bucket_id})
            raise UploadError(f"Storage rejected the upload: {e}", filename=name, bucket_id=bucket_id) from e

        stored = StoredFile(
            id=file_id,
            bucket_id=bucket_id,
            mime_type=content_type,
            name=name,
            size_bytes=len(data),
        )
        logger.info(
            f"Uploaded {name} as {file_id}",
            extra={"bucket_id": bucket_id, "file_id": file_id, "size_bytes": stored.size_bytes}
        )
        return stored

    async def delete(self, bucket_id: str, file_id: str) -> None:
        """
        Delete a stored object.

        Raises:
            NotFoundError: If the bucket holds no object with this id
        """
        try:
            removed = await asyncio.to_thread(self._bucket(bucket_id).remove, [file_id])
        except StorageException as e:
            logger.error(f"Delete of {file_id} from {bucket_id} failed: {e}")
            raise RemoteServiceError(str(e), service="storage", operation="delete") from e

        if not removed:
            raise NotFoundError(
                f"File not found: {file_id}",
                resource_type="file",
                resource_id=file_id,
                details={"bucket_id": bucket_id}
            )

        logger.info(f"Deleted {file_id}", extra={"bucket_id": bucket_id, "file_id": file_id})
