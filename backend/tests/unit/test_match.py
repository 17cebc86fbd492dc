"""Tests for identifier validation, parent resolution and MatchBuilder."""

import pytest

from vidtube.composer import MatchBuilder, ParentRef, ensure_valid_id, is_valid_id, resolve_parent
from vidtube.exceptions import InvalidArgumentError
from vidtube.models import Comment, ContentType, Video
from vidtube.models.common import new_id


class TestIds:
    def test_generated_ids_are_valid(self) -> None:
        assert is_valid_id(new_id())

    def test_malformed_ids(self) -> None:
        assert not is_valid_id("not-an-id")
        assert not is_valid_id(new_id().upper())
        assert not is_valid_id(None)
        assert not is_valid_id(12345)

    def test_ensure_valid_id_names_the_field(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid Video ID"):
            ensure_valid_id("abc", "Video ID")


class TestResolveParent:
    def test_single_parent(self) -> None:
        video_id = new_id()
        assert resolve_parent(video_id=video_id) == ParentRef(ContentType.VIDEO, video_id)

    def test_no_parent_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Exactly one"):
            resolve_parent()

    def test_two_parents_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Exactly one"):
            resolve_parent(video_id=new_id(), tweet_id=new_id())

    def test_disallowed_kind_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="video or tweet"):
            resolve_parent(
                comment_id=new_id(), allowed=(ContentType.VIDEO, ContentType.TWEET)
            )

    def test_malformed_parent_id_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid Tweet ID"):
            resolve_parent(tweet_id="xyz")


class TestMatchBuilder:
    def test_empty_match_is_always_true(self) -> None:
        match = MatchBuilder(Video).build()
        assert match.clauses == ()
        assert str(match.predicate()) == "true"

    def test_each_call_adds_a_clause(self) -> None:
        match = (
            MatchBuilder(Video)
            .published()
            .owned_by(new_id())
            .search("cats  dogs")
            .build()
        )
        # published + owner + one clause per search term
        assert len(match.clauses) == 4

    def test_optional_filters_are_skipped(self) -> None:
        match = MatchBuilder(Video).published(None).owned_by(None).search("   ").build()
        assert match.clauses == ()

    def test_owner_id_is_validated(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid User ID"):
            MatchBuilder(Video).owned_by("bogus")

    def test_parent_adds_type_and_id(self) -> None:
        ref = ParentRef(ContentType.TWEET, new_id())
        match = MatchBuilder(Comment).parent(ref).build()
        assert len(match.clauses) == 2
