"""API tests for comment threads on videos and tweets."""

from sqlalchemy import func, select

from helpers import API, create_tweet, set_created_at
from vidtube.models import Comment, Like


def _comment(client, headers, path: str, content: str) -> dict:
    response = client.post(f"{API}/comments/{path}", json={"content": content}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_add_comment_to_video(client, bob, video) -> None:
    comment = _comment(client, bob["headers"], f"video/{video['id']}", "  Great video  ")
    assert comment["content"] == "Great video"
    assert comment["parentType"] == "video"
    assert comment["parentId"] == video["id"]
    assert comment["ownerId"] == bob["id"]


def test_add_comment_to_tweet(client, alice, bob) -> None:
    tweet = create_tweet(client, alice["headers"])
    comment = _comment(client, bob["headers"], f"tweet/{tweet['id']}", "Agreed")
    assert comment["parentType"] == "tweet"


def test_comment_parent_must_exist(client, bob) -> None:
    response = client.post(
        f"{API}/comments/video/{'a' * 32}", json={"content": "Hello"}, headers=bob["headers"]
    )
    assert response.status_code == 404


def test_comment_parent_id_must_be_valid(client, bob) -> None:
    response = client.post(
        f"{API}/comments/tweet/bogus", json={"content": "Hello"}, headers=bob["headers"]
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid Tweet ID."


def test_empty_comment_rejected(client, bob, video) -> None:
    response = client.post(
        f"{API}/comments/video/{video['id']}", json={"content": "   "}, headers=bob["headers"]
    )
    assert response.status_code == 400


def test_list_comments_newest_first_with_likes(client, alice, bob, video, db) -> None:
    older = _comment(client, bob["headers"], f"video/{video['id']}", "older")
    newer = _comment(client, alice["headers"], f"video/{video['id']}", "newer")
    set_created_at(db, Comment, older["id"], minutes_ago=10)
    set_created_at(db, Comment, newer["id"], minutes_ago=1)
    client.post(f"{API}/likes/toggle/c/{older['id']}", headers=alice["headers"])

    response = client.get(f"{API}/comments/video/{video['id']}", headers=alice["headers"])
    assert response.status_code == 200
    page = response.json()["data"]
    assert [item["id"] for item in page["items"]] == [newer["id"], older["id"]]
    assert page["items"][1]["likesCount"] == 1
    assert page["items"][1]["isLiked"] is True
    assert page["items"][1]["owner"]["username"] == "bob"
    assert page["items"][0]["isLiked"] is False

    anonymous = client.get(f"{API}/comments/video/{video['id']}").json()["data"]
    assert anonymous["items"][1]["isLiked"] is False


def test_comments_are_scoped_to_parent(client, alice, bob, video) -> None:
    tweet = create_tweet(client, alice["headers"])
    _comment(client, bob["headers"], f"video/{video['id']}", "on video")
    _comment(client, bob["headers"], f"tweet/{tweet['id']}", "on tweet")

    video_page = client.get(f"{API}/comments/video/{video['id']}").json()["data"]
    tweet_page = client.get(f"{API}/comments/tweet/{tweet['id']}").json()["data"]
    assert [item["content"] for item in video_page["items"]] == ["on video"]
    assert [item["content"] for item in tweet_page["items"]] == ["on tweet"]


def test_list_comments_of_missing_parent(client) -> None:
    assert client.get(f"{API}/comments/video/{'b' * 32}").status_code == 404


def test_update_comment_owner_only(client, alice, bob, video) -> None:
    comment = _comment(client, bob["headers"], f"video/{video['id']}", "typo")

    forbidden = client.patch(
        f"{API}/comments/{comment['id']}", json={"content": "edit"}, headers=alice["headers"]
    )
    assert forbidden.status_code == 403

    response = client.patch(
        f"{API}/comments/{comment['id']}", json={"content": "fixed"}, headers=bob["headers"]
    )
    assert response.status_code == 200
    assert response.json()["data"]["content"] == "fixed"


def test_delete_comment_removes_its_likes(client, alice, bob, video, db) -> None:
    comment = _comment(client, bob["headers"], f"video/{video['id']}", "bye")
    client.post(f"{API}/likes/toggle/c/{comment['id']}", headers=alice["headers"])

    assert client.delete(f"{API}/comments/{comment['id']}", headers=alice["headers"]).status_code == 403
    response = client.delete(f"{API}/comments/{comment['id']}", headers=bob["headers"])
    assert response.status_code == 200

    db.expire_all()
    assert db.get(Comment, comment["id"]) is None
    assert db.scalar(select(func.count()).select_from(Like)) == 0
    assert client.delete(f"{API}/comments/{comment['id']}", headers=bob["headers"]).status_code == 404
