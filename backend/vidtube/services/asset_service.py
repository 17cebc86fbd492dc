"""Moves uploaded files through the temp directory to the asset host."""

import shutil
from pathlib import Path

from fastapi import UploadFile

from vidtube.exceptions import InvalidArgumentError, UpstreamError
from vidtube.logger import storage_logger
from vidtube.models.common import new_id
from vidtube.storage import AssetHost, UploadedAsset


class AssetService:
    """Service for staging uploads and talking to the asset host."""

    def __init__(self, host: AssetHost, tmp_dir: str):
        self.host = host
        self.tmp_dir = Path(tmp_dir)

    @staticmethod
    def has_file(upload: UploadFile | None) -> bool:
        return upload is not None and bool(upload.filename)

    def _stage(self, upload: UploadFile) -> Path:
        self.tmp_dir.mkdir(parents=True, exist_ok=True)
        path = self.tmp_dir / f"{new_id()}{Path(upload.filename).suffix.lower()}"
        with path.open("wb") as out:
            shutil.copyfileobj(upload.file, out)
        return path

    def upload(
        self, upload: UploadFile | None, resource_type: str = "auto", label: str = "File"
    ) -> UploadedAsset:
        """
        Stage an uploaded file locally and hand it to the asset host.

        The staged copy is removed whether or not the upload succeeds.

        Raises:
            InvalidArgumentError: No file supplied
            UpstreamError: Asset host failure
        """
        if not self.has_file(upload):
            raise InvalidArgumentError(f"{label} is required.")

        path = self._stage(upload)
        try:
            return self.host.upload(str(path), resource_type)
        finally:
            path.unlink(missing_ok=True)

    def upload_optional(
        self, upload: UploadFile | None, resource_type: str = "auto"
    ) -> UploadedAsset | None:
        """Like upload, but returns None when no file was supplied."""
        if not self.has_file(upload):
            return None
        return self.upload(upload, resource_type)

    def discard(self, *assets: UploadedAsset | None) -> None:
        """Delete freshly uploaded assets after a failed write."""
        for asset in assets:
            if asset is not None:
                self.remove(asset.asset_id, asset.resource_type)

    def remove(self, asset_id: str | None, resource_type: str = "image") -> bool:
        """
        Delete one asset after its row is gone or replaced.

        The store is already consistent at this point, so a host failure is
        logged and reported as False.
        """
        if not asset_id:
            return False
        try:
            return self.host.delete(asset_id, resource_type)
        except UpstreamError as e:
            storage_logger.error(f"Failed to delete asset {asset_id}: {e.message}")
            return False
