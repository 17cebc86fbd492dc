"""Shared test doubles and API helpers."""

import os
from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from vidtube.exceptions import UpstreamError
from vidtube.models.common import new_id
from vidtube.storage import UploadedAsset
from vidtube.storage.local import guess_resource_type

API = "/api/v1"
PASSWORD = "correct horse battery staple"


class RecordingAssetHost:
    """Asset host double that records every upload and delete call."""

    def __init__(self):
        self.uploads: list[str] = []
        self.deletes: list[str] = []
        self.fail_uploads = False

    def upload(self, local_path: str, resource_type: str = "auto") -> UploadedAsset:
        assert os.path.exists(local_path), "staged upload must exist while uploading"
        if self.fail_uploads:
            raise UpstreamError("Asset host unavailable")
        kind = guess_resource_type(local_path, resource_type)
        asset_id = f"{kind}/{new_id()}"
        self.uploads.append(asset_id)
        return UploadedAsset(
            url=f"https://assets.test/{asset_id}",
            asset_id=asset_id,
            resource_type=kind,
            duration=12.5 if kind == "video" else None,
        )

    def delete(self, asset_id: str, resource_type: str = "image") -> bool:
        self.deletes.append(asset_id)
        return True


def image_file(name: str = "avatar.png") -> tuple:
    return (name, b"\x89PNG fake image bytes", "image/png")


def register_user(client: TestClient, username: str, cover: bool = False) -> dict:
    """Register a user through the API and return the response data."""
    files = {"avatar": image_file()}
    if cover:
        files["coverImage"] = image_file("cover.png")
    response = client.post(
        f"{API}/users/register",
        data={
            "username": username,
            "email": f"{username}@example.com",
            "fullName": f"{username.capitalize()} Tester",
            "password": PASSWORD,
        },
        files=files,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def login_headers(client: TestClient, username: str) -> dict[str, str]:
    """Bearer headers for username; the session cookies login sets are dropped."""
    response = client.post(
        f"{API}/users/login", json={"username": username, "password": PASSWORD}
    )
    assert response.status_code == 200, response.text
    token = response.json()["data"]["accessToken"]
    client.cookies.clear()
    return {"Authorization": f"Bearer {token}"}


def make_user(client: TestClient, username: str) -> dict:
    """Registered user with auth headers under "headers"."""
    user = register_user(client, username)
    user["headers"] = login_headers(client, username)
    return user


def publish_video(client: TestClient, headers: dict, title: str = "First video") -> dict:
    response = client.post(
        f"{API}/videos/",
        data={"title": title, "description": f"All about {title.lower()}"},
        files={
            "videoFile": ("clip.mp4", b"fake mp4 bytes", "video/mp4"),
            "thumbnail": image_file("thumb.png"),
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_tweet(client: TestClient, headers: dict, content: str = "Hello there") -> dict:
    response = client.post(f"{API}/tweets/", data={"content": content}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def set_created_at(db, model, entity_id: str, minutes_ago: int) -> None:
    """Pin created_at so ordering assertions do not depend on clock resolution."""
    row = db.get(model, entity_id)
    row.created_at = datetime(2026, 1, 1) - timedelta(minutes=minutes_ago)
    db.commit()
