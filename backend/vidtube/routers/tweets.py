"""Tweets router."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from vidtube.dependencies import Assets, CurrentUser, DbSession, OptionalUser, Pagination
from vidtube.schemas import ApiResponse, Empty, PageResponse, TweetView, respond
from vidtube.services.tweet_service import TweetService

router = APIRouter(prefix="/tweets")


@router.post("/", response_model=ApiResponse[TweetView], status_code=status.HTTP_201_CREATED)
async def create_tweet(
    db: DbSession,
    assets: Assets,
    current_user: CurrentUser,
    content: Annotated[str, Form()],
    image: Annotated[UploadFile | None, File()] = None,
):
    tweet = TweetService.create(db, assets, current_user.id, content, image)
    return respond(tweet, "Tweet created successfully", status.HTTP_201_CREATED)


@router.get("/user/{user_id}", response_model=ApiResponse[PageResponse[TweetView]])
async def get_user_tweets(
    user_id: str, db: DbSession, page: Pagination, actor: OptionalUser
):
    result = TweetService.list_for_user(db, user_id, actor.id if actor else None, page)
    return respond(result.to_dict(), "User tweets fetched successfully")


@router.patch("/{tweet_id}", response_model=ApiResponse[TweetView])
async def update_tweet(
    tweet_id: str,
    db: DbSession,
    assets: Assets,
    current_user: CurrentUser,
    content: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
):
    tweet = TweetService.update(
        db, assets, current_user.id, tweet_id, content=content, image=image
    )
    return respond(tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}", response_model=ApiResponse[Empty])
async def delete_tweet(
    tweet_id: str, db: DbSession, assets: Assets, current_user: CurrentUser
):
    TweetService.delete(db, assets, current_user.id, tweet_id)
    return respond({}, "Tweet deleted successfully")
