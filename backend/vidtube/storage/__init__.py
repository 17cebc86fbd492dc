from vidtube.storage.factory import create_asset_host
from vidtube.storage.protocol import AssetHost, UploadedAsset

__all__ = ["AssetHost", "UploadedAsset", "create_asset_host"]
