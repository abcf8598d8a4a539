"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    Path,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.websockets import WebSocketState
from sqlalchemy.orm import Session

from bcet_connect.application.use_cases.notifications import (
    broadcast_to_role,
    broadcast_to_topic,
    count_unread,
    delete_notification,
    dismiss_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    notify_broadcast,
)
from bcet_connect.domain.entities import USER_ROLES, Notification, User
from bcet_connect.domain.errors import AppError, InvalidArgument
from bcet_connect.infrastructure.database import SessionLocal, get_db
from bcet_connect.infrastructure.notifications import (
    DeliveryRegistry,
    NotificationPublisher,
    serialize_notification,
)
from bcet_connect.infrastructure.repositories import UserRepository
from bcet_connect.interfaces.api.dependencies import (
    get_current_user,
    get_notification_publisher,
    require_admin,
    resolve_current_user,
)
from bcet_connect.interfaces.api.schemas import (
    BroadcastRequest,
    BroadcastResponse,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationRead,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_POLICY_VIOLATION = 1008


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("/", response_model=NotificationListResponse)
def list_user_notifications(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, description="Page size, capped at the configured maximum"),
    only_unread: bool = Query(False),
    hide_dismissed: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationListResponse:
    """Return a newest-first page of the authenticated user's notifications."""

    result = list_notifications(
        db,
        current_user.id,
        page=page,
        page_size=limit,
        only_unread=only_unread,
        hide_dismissed=hide_dismissed,
    )
    return NotificationListResponse(
        items=[_notification_to_schema(item) for item in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        unread_count=result.unread_count,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=count_unread(db, current_user.id))


@router.post("/mark-all-read", response_model=MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> MarkAllReadResponse:
    modified = mark_all_notifications_read(db, publisher, current_user.id)
    return MarkAllReadResponse(modified=modified)


@router.post("/broadcast", response_model=BroadcastResponse, status_code=status.HTTP_201_CREATED)
def broadcast_announcement(
    body: BroadcastRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> BroadcastResponse:
    """Send a high priority announcement to everyone, or live to a role or topic."""

    if body.role is not None and body.topic is not None:
        raise InvalidArgument("Choose either a role or a topic")

    registry: DeliveryRegistry = publisher.registry
    if body.topic is not None:
        topic = body.topic.strip()
        if not topic:
            raise InvalidArgument("Topic cannot be blank")
        broadcast_to_topic(
            publisher,
            topic=topic,
            title=body.title,
            message=body.message,
            redirect_url=body.redirect_url,
        )
        return BroadcastResponse(
            recipients=registry.connection_count(topic=topic), persisted=False
        )

    if body.role is not None:
        if body.role not in USER_ROLES:
            raise InvalidArgument(f"Unknown role '{body.role}'")
        broadcast_to_role(
            publisher,
            role=body.role,
            title=body.title,
            message=body.message,
            redirect_url=body.redirect_url,
        )
        return BroadcastResponse(
            recipients=registry.connection_count(role=body.role), persisted=False
        )

    created = notify_broadcast(
        db,
        publisher,
        recipient_ids=UserRepository(db).list_active_ids(exclude=current_user.id),
        title=body.title,
        message=body.message,
        redirect_url=body.redirect_url,
        actor_id=current_user.id,
    )
    return BroadcastResponse(recipients=len(created), persisted=True)


@router.post("/{notification_id}/mark-read", response_model=NotificationRead)
def mark_read(
    notification_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> NotificationRead:
    notification = mark_notification_read(db, publisher, current_user.id, notification_id)
    return _notification_to_schema(notification)


@router.post("/{notification_id}/dismiss", response_model=NotificationRead)
def dismiss(
    notification_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    return _notification_to_schema(dismiss_notification(db, current_user.id, notification_id))


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_notification(
    notification_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    delete_notification(db, current_user.id, notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _token_from_websocket(websocket: WebSocket) -> str | None:
    token = websocket.query_params.get("token")
    if token:
        return token
    authorization = websocket.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    publisher: NotificationPublisher = websocket.app.state.notification_publisher
    registry = publisher.registry

    session = SessionLocal()
    try:
        user = resolve_current_user(_token_from_websocket(websocket), session)
        unread = count_unread(session, user.id)
    except AppError as exc:
        logger.info("Rejected notifications websocket: %s", exc.message)
        await websocket.close(code=_POLICY_VIOLATION, reason=exc.message)
        return
    finally:
        session.close()

    await websocket.accept()
    registry.register_channel(user.id, user.role, websocket)
    logger.info(
        "Notifications websocket opened for user %s (%d live)",
        user.id,
        registry.connection_count(user.id),
    )
    try:
        await websocket.send_json(
            {
                "type": "notifications:connected",
                "data": {"user_id": user.id, "unread_count": unread},
            }
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except Exception as exc:  # noqa: BLE001 - skip frames that are not JSON text
                if websocket.client_state == WebSocketState.DISCONNECTED:
                    break
                logger.debug("Ignoring unreadable frame from user %s: %r", user.id, exc)
                continue

            if not isinstance(message, dict):
                continue

            if message.get("type") == "notifications:subscribe":
                reply = _subscribe(registry, websocket, message)
            else:
                reply = _handle_client_message(user, publisher, message)
            if reply is not None:
                await websocket.send_json(reply)
    except WebSocketDisconnect:
        pass
    finally:
        registry.unregister_channel(websocket)
        logger.info("Notifications websocket closed for user %s", user.id)


def _subscribe(
    registry: DeliveryRegistry, websocket: WebSocket, message: dict[str, Any]
) -> dict[str, Any]:
    event = "notifications:subscribe"
    topics = message.get("channels")
    if not isinstance(topics, list):
        return {"type": "ack", "event": event, "success": False, "error": "channels required"}
    joined = registry.subscribe(websocket, topics)
    return {"type": "ack", "event": event, "success": True, "data": {"channels": joined}}


def _handle_client_message(
    user: User, publisher: NotificationPublisher, message: dict[str, Any]
) -> dict[str, Any] | None:
    message_type = message.get("type")
    if message_type == "ping":
        return {"type": "pong"}

    if message_type not in ("notifications:mark-read", "notifications:mark-all-read"):
        return None

    session = SessionLocal()
    try:
        if message_type == "notifications:mark-read":
            notification_id = message.get("id")
            if not isinstance(notification_id, int) or isinstance(notification_id, bool):
                raise InvalidArgument("Invalid notification id")
            updated = mark_notification_read(session, publisher, user.id, notification_id)
            return {
                "type": "ack",
                "event": message_type,
                "success": True,
                "data": serialize_notification(updated),
            }
        modified = mark_all_notifications_read(session, publisher, user.id)
        return {
            "type": "ack",
            "event": message_type,
            "success": True,
            "data": {"modified": modified},
        }
    except AppError as exc:
        return {"type": "ack", "event": message_type, "success": False, "error": exc.message}
    finally:
        session.close()
