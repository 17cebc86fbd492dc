"""API tests for the channel dashboard and its stats cache."""

from helpers import API, publish_video
from vidtube.models import Video
from vidtube.services.dashboard_service import stats_cache_key


class FakeRedis:
    """In-memory stand-in for the redis-py client."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value):
        self.store[key] = value
        return True

    def setex(self, key, ttl, value):
        self.ttls[key] = ttl
        return self.set(key, value)

    def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0

    def ping(self):
        return True

    def close(self):
        pass


def test_stats(client, alice, bob) -> None:
    watched = publish_video(client, alice["headers"], "Watched")
    hidden = publish_video(client, alice["headers"], "Hidden")
    client.patch(f"{API}/videos/toggle/publish/{hidden['id']}", headers=alice["headers"])

    client.get(f"{API}/videos/{watched['id']}", headers=bob["headers"])
    client.get(f"{API}/videos/{watched['id']}")
    client.post(f"{API}/likes/toggle/v/{watched['id']}", headers=bob["headers"])
    client.post(f"{API}/subscriptions/channel/{alice['id']}/toggle", headers=bob["headers"])

    response = client.get(f"{API}/dashboard/stats", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalVideos": 2,
        "totalViews": 2,
        "totalSubscribers": 1,
        "totalLikes": 1,
    }

    empty = client.get(f"{API}/dashboard/stats", headers=bob["headers"]).json()["data"]
    assert empty == {"totalVideos": 0, "totalViews": 0, "totalSubscribers": 0, "totalLikes": 0}


def test_stats_require_auth(client) -> None:
    assert client.get(f"{API}/dashboard/stats").status_code == 401


def test_stats_without_cache_are_always_fresh(client, alice, video, db) -> None:
    first = client.get(f"{API}/dashboard/stats", headers=alice["headers"]).json()["data"]
    db.get(Video, video["id"]).views = 42
    db.commit()
    second = client.get(f"{API}/dashboard/stats", headers=alice["headers"]).json()["data"]

    assert first["totalViews"] == 0
    assert second["totalViews"] == 42


def test_stats_are_cached_and_invalidated(client, app, alice, video, db, settings) -> None:
    fake = FakeRedis()
    app.state.cache._client = fake

    first = client.get(f"{API}/dashboard/stats", headers=alice["headers"]).json()["data"]
    assert stats_cache_key(alice["id"]) in fake.store
    assert fake.ttls[stats_cache_key(alice["id"])] == settings.stats_cache_ttl

    db.get(Video, video["id"]).views = 42
    db.commit()
    cached = client.get(f"{API}/dashboard/stats", headers=alice["headers"]).json()["data"]
    assert cached == first

    publish_video(client, alice["headers"], "Second video")
    assert stats_cache_key(alice["id"]) not in fake.store
    fresh = client.get(f"{API}/dashboard/stats", headers=alice["headers"]).json()["data"]
    assert fresh["totalVideos"] == 2
    assert fresh["totalViews"] == 42


def test_dashboard_videos_include_unpublished(client, alice, bob, video) -> None:
    hidden = publish_video(client, alice["headers"], "Draft")
    client.patch(f"{API}/videos/toggle/publish/{hidden['id']}", headers=alice["headers"])
    client.post(f"{API}/likes/toggle/v/{video['id']}", headers=bob["headers"])
    client.post(
        f"{API}/comments/video/{video['id']}", json={"content": "Nice"}, headers=bob["headers"]
    )

    response = client.get(
        f"{API}/dashboard/videos",
        params={"sortBy": "title", "sortType": "asc"},
        headers=alice["headers"],
    )
    assert response.status_code == 200
    page = response.json()["data"]
    assert [item["title"] for item in page["items"]] == ["Draft", "First video"]
    assert page["items"][0]["isPublished"] is False
    assert page["items"][1]["likesCount"] == 1
    assert page["items"][1]["commentsCount"] == 1

    assert client.get(f"{API}/dashboard/videos", headers=bob["headers"]).json()["data"]["total"] == 0
