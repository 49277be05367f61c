# showcase/core/storage_utils.py
import uuid
from typing import Protocol

from supabase import Client

from showcase.core.config import get_settings
from showcase.core.supabase_client import supabase_admin

# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class ImageStore(Protocol):
    """Remote object store for profile images."""

    def upload(self, path: str, file_bytes: bytes, content_type: str) -> str | None:
        """Store the bytes and return a public URL (None if none was produced)."""
        ...

    def delete_url(self, url: str) -> None:
        ...


class SupabaseImageStore:
    """
    ImageStore backed by a Supabase Storage bucket.

    The client is created lazily so the app can boot without storage
    credentials; only an actual upload needs them.
    """

    def __init__(self, bucket: str, client: Client | None = None):
        self.bucket = bucket
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = supabase_admin()
        return self._client

    def upload(self, path: str, file_bytes: bytes, content_type: str) -> str | None:
        """
        Upload raw bytes and return the public URL.

        If a file already exists at this path, it will be overwritten
        thanks to the 'upsert' option.

        Raises:
            Any exception raised by Supabase client if upload fails.
        """
        self.client.storage.from_(self.bucket).upload(
            path,
            file_bytes,
            {"upsert": "true", "content-type": content_type},
        )
        return self.client.storage.from_(self.bucket).get_public_url(path) or None

    def delete_url(self, url: str) -> None:
        """
        Delete a file by its public URL.
        No-op if the URL does not belong to this bucket.
        """
        path = extract_path_from_public_url(url, self.bucket)
        if path:
            # Supabase Python client expects a list of paths.
            self.client.storage.from_(self.bucket).remove([path])


def extract_path_from_public_url(url: str, bucket: str) -> str | None:
    """
    Given a public URL, extract the object path relative to the bucket.

    Example:
        https://<proj>.supabase.co/storage/v1/object/public/assets/users/u/avatar.png
        -> 'users/u/avatar.png'
    """
    marker = f"/storage/v1/object/public/{bucket}/"
    idx = url.find(marker)
    if idx == -1:
        return None
    path = url[idx + len(marker) :]
    # get_public_url may append an empty query string
    return path.split("?", 1)[0] or None


def generate_filename(prefix: str, ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Returns:
        A filename like "<prefix>-<uuid4>.png"
    """
    return f"{prefix}-{uuid.uuid4()}.{ext}"


def get_image_store() -> ImageStore:
    """FastAPI dependency returning the configured image store."""
    return SupabaseImageStore(bucket=get_settings().STORAGE_BUCKET)


class ImageUpload:
    """An uploaded file already read into memory by the router."""

    def __init__(self, filename: str | None, content_type: str | None, data: bytes):
        self.filename = filename
        self.content_type = content_type or ""
        self.data = data
