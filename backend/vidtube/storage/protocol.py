"""Asset host protocol. Implementations: LocalAssetHost, S3AssetHost."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class UploadedAsset:
    """Durable location of an uploaded asset."""

    url: str
    asset_id: str
    resource_type: str = "image"
    duration: float | None = None


class AssetHost(Protocol):
    """Protocol for binary asset hosts (local directory, S3-compatible)."""

    def upload(self, local_path: str, resource_type: str = "auto") -> UploadedAsset:
        """Store the file at local_path. Raises UpstreamError on failure."""
        ...

    def delete(self, asset_id: str, resource_type: str = "image") -> bool:
        """Delete an asset. Returns True if deleted, False if it did not exist."""
        ...
