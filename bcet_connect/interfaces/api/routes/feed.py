"""Endpoints for the personalised feed and post management."""

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from bcet_connect.application.use_cases.feed import (
    MediaCleanup,
    add_comment,
    create_post,
    delete_post,
    get_feed,
    pin_post,
    toggle_like,
    update_post,
)
from bcet_connect.domain.entities import FEED_CATEGORY_ALL, FeedItem, FeedMedia, User
from bcet_connect.infrastructure.database import get_db
from bcet_connect.infrastructure.notifications import NotificationPublisher
from bcet_connect.interfaces.api.dependencies import (
    get_current_user,
    get_media_cleanup,
    get_notification_publisher,
)
from bcet_connect.interfaces.api.schemas import (
    CommentCreate,
    FeedItemRead,
    LikeResponse,
    PinRequest,
    PostCreate,
    PostUpdate,
)

router = APIRouter(prefix="/feed", tags=["feed"])


def _item_to_schema(item: FeedItem) -> FeedItemRead:
    return FeedItemRead.model_validate(item)


@router.get("/", response_model=list[FeedItemRead])
def read_feed(
    category: str = Query(FEED_CATEGORY_ALL, alias="type"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[FeedItemRead]:
    """Return the feed page visible to the authenticated user, pinned items first."""

    items = get_feed(db, current_user.id, category=category, page=page, page_size=limit)
    return [_item_to_schema(item) for item in items]


@router.post("/", response_model=FeedItemRead, status_code=status.HTTP_201_CREATED)
def create_feed_post(
    post_in: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> FeedItemRead:
    item = create_post(
        db,
        publisher,
        current_user,
        text=post_in.text,
        media=[
            FeedMedia(kind=media.kind, url=media.url, provider_id=media.provider_id)
            for media in post_in.media
        ],
        category=post_in.category,
        visibility=post_in.visibility,
        community_id=post_in.community_id,
        ref_id=post_in.ref_id,
    )
    return _item_to_schema(item)


@router.put("/{post_id}", response_model=FeedItemRead)
def update_feed_post(
    post_in: PostUpdate,
    post_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FeedItemRead:
    item = update_post(
        db, post_id, current_user, text=post_in.text, visibility=post_in.visibility
    )
    return _item_to_schema(item)


@router.put("/{post_id}/pin", response_model=FeedItemRead)
def pin_feed_post(
    body: PinRequest,
    post_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FeedItemRead:
    return _item_to_schema(pin_post(db, post_id, current_user, pinned=body.pinned))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_feed_post(
    post_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cleanup: MediaCleanup = Depends(get_media_cleanup),
) -> Response:
    delete_post(db, post_id, current_user, cleanup_media=cleanup)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/like", response_model=LikeResponse)
def like_feed_post(
    post_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> LikeResponse:
    """Toggle the authenticated user's like on a post."""

    result = toggle_like(db, publisher, post_id, current_user.id)
    return LikeResponse(liked=result.liked, likes_count=result.likes_count)


@router.post(
    "/{post_id}/comment", response_model=FeedItemRead, status_code=status.HTTP_201_CREATED
)
def comment_on_feed_post(
    comment_in: CommentCreate,
    post_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> FeedItemRead:
    item = add_comment(db, publisher, post_id, current_user.id, comment_in.text)
    return _item_to_schema(item)
