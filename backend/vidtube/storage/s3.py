"""S3-compatible asset host (AWS S3, MinIO, etc.)."""

import mimetypes
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from vidtube.exceptions import UpstreamError
from vidtube.logger import storage_logger
from vidtube.models.common import new_id
from vidtube.storage.local import guess_resource_type
from vidtube.storage.protocol import UploadedAsset


class S3AssetHost:
    """Stores assets as public-read objects in a bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
    ):
        """
        Initialize S3 client.

        Args:
            bucket: Bucket name
            region: AWS region
            endpoint_url: Custom endpoint (MinIO/Spaces)
            access_key: Optional; uses env/IAM if not set
            secret_key: Optional
            public_base_url: URL prefix for objects (defaults to the bucket URL)
        """
        self.bucket = bucket
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )
        if public_base_url:
            self.public_base_url = public_base_url.rstrip("/")
        elif endpoint_url:
            self.public_base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self.public_base_url = f"https://{bucket}.s3.{region}.amazonaws.com"

    def upload(self, local_path: str, resource_type: str = "auto") -> UploadedAsset:
        """Upload local_path under a fresh key."""
        kind = guess_resource_type(local_path, resource_type)
        key = f"{kind}/{new_id()}{Path(local_path).suffix.lower()}"
        content_type, _ = mimetypes.guess_type(local_path)

        try:
            self._client.upload_file(
                local_path,
                self.bucket,
                key,
                ExtraArgs={"ContentType": content_type or "application/octet-stream"},
            )
        except (BotoCoreError, ClientError) as e:
            storage_logger.error(f"S3 upload of {local_path} failed: {e}")
            raise UpstreamError("Failed to upload file to asset host.") from e

        return UploadedAsset(
            url=f"{self.public_base_url}/{key}",
            asset_id=key,
            resource_type=kind,
        )

    def delete(self, asset_id: str, resource_type: str = "image") -> bool:
        """Delete the object stored under asset_id."""
        try:
            self._client.head_object(Bucket=self.bucket, Key=asset_id)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            storage_logger.error(f"S3 head of {asset_id} failed: {e}")
            raise UpstreamError("Failed to delete asset.") from e

        try:
            self._client.delete_object(Bucket=self.bucket, Key=asset_id)
        except (BotoCoreError, ClientError) as e:
            storage_logger.error(f"S3 delete of {asset_id} failed: {e}")
            raise UpstreamError("Failed to delete asset.") from e
        return True
