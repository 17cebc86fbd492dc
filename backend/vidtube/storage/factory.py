"""Asset host factory: creates local or S3 backend from settings."""

from vidtube.config import Settings
from vidtube.storage.protocol import AssetHost


def create_asset_host(settings: Settings) -> AssetHost:
    """
    Create the asset host selected by settings.asset_backend.

    Raises:
        ValueError: Unknown backend or missing required config
    """
    backend = settings.asset_backend.lower()

    if backend == "local":
        from vidtube.storage.local import LocalAssetHost

        return LocalAssetHost(
            storage_root=settings.asset_root,
            base_url=settings.asset_base_url,
        )
    if backend == "s3":
        if not settings.s3_bucket:
            raise ValueError("S3_BUCKET required for s3 asset backend")
        from vidtube.storage.s3 import S3AssetHost

        return S3AssetHost(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
            public_base_url=settings.s3_public_base_url,
        )
    raise ValueError(f"Unknown asset backend: {backend}. Supported: 'local', 's3'")
