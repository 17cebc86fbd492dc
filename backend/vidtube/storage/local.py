"""Local filesystem asset host with path validation."""

import mimetypes
import shutil
from pathlib import Path

from vidtube.exceptions import UpstreamError
from vidtube.logger import storage_logger
from vidtube.models.common import new_id
from vidtube.storage.protocol import UploadedAsset


def guess_resource_type(local_path: str, resource_type: str = "auto") -> str:
    """Resolve "auto" to video or image from the file's mime type."""
    if resource_type != "auto":
        return resource_type
    mime, _ = mimetypes.guess_type(local_path)
    return "video" if mime and mime.startswith("video/") else "image"


class LocalAssetHost:
    """Stores assets under a directory served at base_url.

    Asset ids are "<resource_type>/<random name><suffix>" relative to the
    storage root; paths are validated against the root.
    """

    def __init__(self, storage_root: str, base_url: str):
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/")
        self.storage_root.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, asset_id: str) -> Path:
        """Resolve asset_id under storage_root. Raises UpstreamError on traversal."""
        full_path = (self.storage_root / asset_id).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise UpstreamError(f"Invalid asset id: {asset_id}") from e
        return full_path

    def upload(self, local_path: str, resource_type: str = "auto") -> UploadedAsset:
        """Copy local_path into the storage root."""
        source = Path(local_path)
        kind = guess_resource_type(local_path, resource_type)
        asset_id = f"{kind}/{new_id()}{source.suffix.lower()}"
        target = self._get_full_path(asset_id)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as e:
            storage_logger.error(f"Local upload of {local_path} failed: {e}")
            raise UpstreamError("Failed to store uploaded file.") from e

        storage_logger.debug(f"Stored {local_path} as {asset_id}")
        return UploadedAsset(
            url=f"{self.base_url}/{asset_id}",
            asset_id=asset_id,
            resource_type=kind,
        )

    def delete(self, asset_id: str, resource_type: str = "image") -> bool:
        """Remove a stored asset."""
        target = self._get_full_path(asset_id)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            storage_logger.error(f"Local delete of {asset_id} failed: {e}")
            raise UpstreamError("Failed to delete asset.") from e
        return True
