"""API tests for the video feed, detail page and video lifecycle."""

from sqlalchemy import func, select

from helpers import API, create_tweet, image_file, publish_video, set_created_at
from vidtube.models import Comment, Like, PlaylistVideo, Video, WatchHistoryEntry


def test_publish_video(client, alice, asset_host) -> None:
    video = publish_video(client, alice["headers"], "Cooking pasta")

    assert video["title"] == "Cooking pasta"
    assert video["ownerId"] == alice["id"]
    assert video["isPublished"] is True
    assert video["views"] == 0
    assert video["duration"] == 12.5
    assert video["videoUrl"].startswith("https://assets.test/video/")
    assert video["thumbnailUrl"].startswith("https://assets.test/image/")
    # avatar + video + thumbnail
    assert len(asset_host.uploads) == 3


def test_publish_requires_files_and_text(client, alice) -> None:
    short_title = client.post(
        f"{API}/videos/",
        data={"title": "Hi", "description": "Long enough"},
        files={
            "videoFile": ("clip.mp4", b"bytes", "video/mp4"),
            "thumbnail": image_file("thumb.png"),
        },
        headers=alice["headers"],
    )
    assert short_title.status_code == 400

    no_video = client.post(
        f"{API}/videos/",
        data={"title": "A title", "description": "Long enough"},
        files={"thumbnail": image_file("thumb.png")},
        headers=alice["headers"],
    )
    assert no_video.status_code == 400
    assert no_video.json()["message"] == "Video file is required."


def test_publish_requires_auth(client) -> None:
    response = client.post(f"{API}/videos/", data={"title": "abc", "description": "abc"})
    assert response.status_code == 401


def test_feed_is_newest_first_with_owner(client, alice, bob, db) -> None:
    old = publish_video(client, alice["headers"], "Old news")
    new = publish_video(client, bob["headers"], "New news")
    set_created_at(db, Video, old["id"], minutes_ago=10)
    set_created_at(db, Video, new["id"], minutes_ago=1)

    response = client.get(f"{API}/videos/")
    assert response.status_code == 200
    page = response.json()["data"]
    assert [item["id"] for item in page["items"]] == [new["id"], old["id"]]
    assert page["items"][0]["owner"] == {
        "id": bob["id"],
        "username": "bob",
        "fullName": "Bob Tester",
        "avatarUrl": bob["avatarUrl"],
    }
    assert page["total"] == 2
    assert page["hasNextPage"] is False


def test_feed_hides_unpublished(client, alice, video) -> None:
    client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=alice["headers"])
    page = client.get(f"{API}/videos/").json()["data"]
    assert page["items"] == []
    assert page["total"] == 0


def test_feed_search_and_owner_filter(client, alice, bob) -> None:
    publish_video(client, alice["headers"], "Guitar lesson")
    publish_video(client, alice["headers"], "Piano lesson")
    publish_video(client, bob["headers"], "Guitar solo")

    search = client.get(f"{API}/videos/", params={"query": "GUITAR"}).json()["data"]
    assert {item["title"] for item in search["items"]} == {"Guitar lesson", "Guitar solo"}

    both_terms = client.get(f"{API}/videos/", params={"query": "guitar lesson"}).json()["data"]
    assert [item["title"] for item in both_terms["items"]] == ["Guitar lesson"]

    owned = client.get(f"{API}/videos/", params={"userId": bob["id"]}).json()["data"]
    assert [item["title"] for item in owned["items"]] == ["Guitar solo"]


def test_feed_pagination(client, alice, db) -> None:
    ids = []
    for i in range(5):
        video = publish_video(client, alice["headers"], f"Episode {i}")
        set_created_at(db, Video, video["id"], minutes_ago=10 - i)
        ids.append(video["id"])

    second = client.get(f"{API}/videos/", params={"page": 2, "limit": 2}).json()["data"]
    assert [item["id"] for item in second["items"]] == [ids[2], ids[1]]
    assert second["totalPages"] == 3
    assert second["hasNextPage"] is True
    assert second["hasPrevPage"] is True
    assert second["nextPage"] == 3
    assert second["prevPage"] == 1
    assert second["pageSize"] == 2

    beyond = client.get(f"{API}/videos/", params={"page": 9, "limit": 2}).json()["data"]
    assert beyond["items"] == []
    assert beyond["hasNextPage"] is False
    assert beyond["prevPage"] == 3
    assert beyond["total"] == 5


def test_feed_limit_is_capped(client, alice, settings) -> None:
    publish_video(client, alice["headers"])
    page = client.get(f"{API}/videos/", params={"limit": 500}).json()["data"]
    assert page["pageSize"] == settings.max_page_size


def test_feed_rejects_bad_query_params(client) -> None:
    assert client.get(f"{API}/videos/", params={"limit": 0}).status_code == 400
    assert client.get(f"{API}/videos/", params={"sortBy": "passwordHash"}).status_code == 400
    assert client.get(f"{API}/videos/", params={"sortType": "up"}).status_code == 400
    assert client.get(f"{API}/videos/", params={"userId": "nope"}).status_code == 400


def test_feed_sort_by_views(client, alice, db) -> None:
    low = publish_video(client, alice["headers"], "Low views")
    high = publish_video(client, alice["headers"], "High views")
    db.get(Video, high["id"]).views = 100
    db.get(Video, low["id"]).views = 5
    db.commit()

    page = client.get(
        f"{API}/videos/", params={"sortBy": "views", "sortType": "asc"}
    ).json()["data"]
    assert [item["id"] for item in page["items"]] == [low["id"], high["id"]]


def test_video_detail_for_anonymous(client, video, db) -> None:
    response = client.get(f"{API}/videos/{video['id']}")
    assert response.status_code == 200
    detail = response.json()["data"]

    assert detail["views"] == 1
    assert detail["isLiked"] is False
    assert detail["likesCount"] == 0
    assert detail["comments"] == []
    assert detail["commentsCount"] == 0
    assert detail["owner"]["subscribersCount"] == 0
    assert detail["owner"]["isSubscribed"] is False
    assert db.scalar(select(func.count()).select_from(WatchHistoryEntry)) == 0


def test_video_detail_rollups(client, alice, bob, video, db) -> None:
    client.post(f"{API}/likes/toggle/v/{video['id']}", headers=bob["headers"])
    client.post(f"{API}/subscriptions/channel/{alice['id']}/toggle", headers=bob["headers"])
    first = client.post(
        f"{API}/comments/video/{video['id']}", json={"content": "First!"}, headers=bob["headers"]
    ).json()["data"]
    second = client.post(
        f"{API}/comments/video/{video['id']}", json={"content": "Nice"}, headers=alice["headers"]
    ).json()["data"]
    set_created_at(db, Comment, first["id"], minutes_ago=5)
    set_created_at(db, Comment, second["id"], minutes_ago=1)

    detail = client.get(f"{API}/videos/{video['id']}", headers=bob["headers"]).json()["data"]
    assert detail["likesCount"] == 1
    assert detail["isLiked"] is True
    assert detail["owner"]["subscribersCount"] == 1
    assert detail["owner"]["isSubscribed"] is True
    assert detail["commentsCount"] == 2
    assert [c["id"] for c in detail["comments"]] == [second["id"], first["id"]]
    assert detail["comments"][1]["owner"]["username"] == "bob"

    as_owner = client.get(f"{API}/videos/{video['id']}", headers=alice["headers"]).json()["data"]
    assert as_owner["isLiked"] is False
    assert as_owner["owner"]["isSubscribed"] is False


def test_views_count_every_open(client, bob, video) -> None:
    for _ in range(3):
        client.get(f"{API}/videos/{video['id']}", headers=bob["headers"])
    detail = client.get(f"{API}/videos/{video['id']}").json()["data"]
    assert detail["views"] == 4


def test_unpublished_video_visible_to_owner_only(client, alice, bob, video) -> None:
    client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=alice["headers"])

    assert client.get(f"{API}/videos/{video['id']}").status_code == 404
    assert client.get(f"{API}/videos/{video['id']}", headers=bob["headers"]).status_code == 404
    assert client.get(f"{API}/videos/{video['id']}", headers=alice["headers"]).status_code == 200


def test_video_detail_bad_and_missing_ids(client) -> None:
    assert client.get(f"{API}/videos/not-an-id").status_code == 400
    assert client.get(f"{API}/videos/{'0' * 32}").status_code == 404


def test_update_video(client, alice, bob, video, asset_host) -> None:
    forbidden = client.patch(
        f"{API}/videos/{video['id']}", data={"title": "Hijacked"}, headers=bob["headers"]
    )
    assert forbidden.status_code == 403

    old_thumbnail = video["thumbnailUrl"].rsplit("assets.test/", 1)[1]
    response = client.patch(
        f"{API}/videos/{video['id']}",
        data={"title": "Renamed video"},
        files={"thumbnail": image_file("new-thumb.png")},
        headers=alice["headers"],
    )
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["title"] == "Renamed video"
    assert updated["description"] == video["description"]
    assert updated["thumbnailUrl"] != video["thumbnailUrl"]
    assert asset_host.deletes == [old_thumbnail]


def test_update_video_needs_changes(client, alice, video) -> None:
    response = client.patch(f"{API}/videos/{video['id']}", headers=alice["headers"])
    assert response.status_code == 400


def test_toggle_publish(client, alice, bob, video) -> None:
    assert (
        client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=bob["headers"]).status_code
        == 403
    )
    off = client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=alice["headers"])
    assert off.json()["data"]["isPublished"] is False
    on = client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=alice["headers"])
    assert on.json()["data"]["isPublished"] is True


def test_delete_video_forbidden_for_non_owner(client, bob, video, asset_host, db) -> None:
    response = client.delete(f"{API}/videos/{video['id']}", headers=bob["headers"])
    assert response.status_code == 403
    assert asset_host.deletes == []
    assert db.get(Video, video["id"]) is not None


def test_delete_video_cleans_up(client, alice, bob, video, asset_host, db) -> None:
    client.post(f"{API}/likes/toggle/v/{video['id']}", headers=bob["headers"])
    comment = client.post(
        f"{API}/comments/video/{video['id']}", json={"content": "Wow"}, headers=bob["headers"]
    ).json()["data"]
    client.post(f"{API}/likes/toggle/c/{comment['id']}", headers=alice["headers"])
    playlist = client.post(
        f"{API}/playlists/", json={"name": "Faves", "description": "Best"}, headers=bob["headers"]
    ).json()["data"]
    client.patch(f"{API}/playlists/add/{video['id']}/{playlist['id']}", headers=bob["headers"])
    client.get(f"{API}/videos/{video['id']}", headers=bob["headers"])

    tweet = create_tweet(client, bob["headers"])
    client.post(f"{API}/likes/toggle/t/{tweet['id']}", headers=alice["headers"])

    response = client.delete(f"{API}/videos/{video['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["data"] == {}

    # Exactly one delete per hosted asset
    video_asset = video["videoUrl"].rsplit("assets.test/", 1)[1]
    thumbnail_asset = video["thumbnailUrl"].rsplit("assets.test/", 1)[1]
    assert sorted(asset_host.deletes) == sorted([video_asset, thumbnail_asset])

    db.expire_all()
    assert db.get(Video, video["id"]) is None
    assert db.scalar(select(func.count()).select_from(Comment)) == 0
    assert db.scalar(select(func.count()).select_from(PlaylistVideo)) == 0
    assert db.scalar(select(func.count()).select_from(WatchHistoryEntry)) == 0
    # Only the tweet like survives
    assert db.scalar(select(func.count()).select_from(Like)) == 1

    assert client.get(f"{API}/videos/{video['id']}").status_code == 404
