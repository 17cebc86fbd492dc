"""Subscriptions router."""

from fastapi import APIRouter

from vidtube.dependencies import CurrentUser, DbSession, Pagination
from vidtube.schemas import (
    ApiResponse,
    OwnerSummary,
    PageResponse,
    SubscriptionStatus,
    respond,
)
from vidtube.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/subscriptions")


@router.post("/channel/{channel_id}/toggle", response_model=ApiResponse[SubscriptionStatus])
async def toggle_subscription(channel_id: str, db: DbSession, current_user: CurrentUser):
    subscribed = SubscriptionService.toggle(db, current_user.id, channel_id)
    message = "Subscribed successfully" if subscribed else "Unsubscribed successfully"
    return respond({"subscribed": subscribed}, message)


@router.get(
    "/channel/{channel_id}/subscribers",
    response_model=ApiResponse[PageResponse[OwnerSummary]],
)
async def get_channel_subscribers(channel_id: str, db: DbSession, page: Pagination):
    result = SubscriptionService.subscribers(db, channel_id, page)
    return respond(result.to_dict(), "Subscribers fetched successfully")


@router.get(
    "/subscriber/{subscriber_id}/channels",
    response_model=ApiResponse[PageResponse[OwnerSummary]],
)
async def get_subscribed_channels(subscriber_id: str, db: DbSession, page: Pagination):
    result = SubscriptionService.subscribed_channels(db, subscriber_id, page)
    return respond(result.to_dict(), "Subscribed channels fetched successfully")
