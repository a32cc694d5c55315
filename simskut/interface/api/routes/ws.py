"""Realtime feed WebSocket.

Protocol (JSON messages):

    server -> client
        {"type": "posts", "posts": [...], "has_more": true}   initial page
        {"type": "pending", "count": 3}                      staged posts
        {"type": "merged", "posts": [...]}                   after "merge"
        {"type": "page", "posts": [...], "has_more": false}  after "load_more"
        {"type": "error", "detail": "..."}

    client -> server
        {"type": "merge"} | {"type": "load_more"}
"""

import logging

from dishka import AsyncContainer
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from simskut.application.realtime import ContainerFeedSource, FeedBuffer
from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from simskut.application.usecase.feed import PostResponse
from simskut.config import Settings
from simskut.domain.error import NotFoundError
from simskut.domain.model import FeedPostView
from simskut.domain.service import ChangeFeed
from simskut.domain.value import AppRoute
from simskut.interface.api.auth import AUTH_COOKIE, user_id_of
from simskut.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

# Application-defined close codes (4000-4999)
CLOSE_UNAUTHENTICATED = 4401
CLOSE_NOT_APPROVED = 4403


def _serialize(views: list[FeedPostView]) -> list[dict]:
    return [PostResponse.from_view(v).model_dump(mode="json") for v in views]


async def _authenticate(
    container: AsyncContainer, auth_token: str | None
) -> GetCurrentUserResponse | None:
    if not auth_token:
        return None
    async with container() as scoped:
        use_case = await scoped.get(GetCurrentUserUseCase)
        try:
            return await use_case.execute(GetCurrentUserRequest(token=auth_token))
        except (JWTError, NotFoundError):
            return None


@router.websocket("/ws/feed")
async def feed_socket(websocket: WebSocket) -> None:
    """Stream staged-post counts to one viewer.

    New posts from other users are announced as a count; the client asks
    for them with "merge" so the visible list never shifts on its own.
    """
    container: AsyncContainer = websocket.app.state.dishka_container
    user = await _authenticate(container, websocket.cookies.get(AUTH_COOKIE))
    if user is None:
        await websocket.close(code=CLOSE_UNAUTHENTICATED)
        return
    if user.route not in (AppRoute.FEED, AppRoute.ADMIN):
        await websocket.close(code=CLOSE_NOT_APPROVED)
        return

    await websocket.accept()

    settings = await container.get(Settings)
    change_feed = await container.get(ChangeFeed)

    async def send_pending() -> None:
        await websocket.send_json({"type": "pending", "count": buffer.pending_count})

    buffer = FeedBuffer(
        change_feed=change_feed,
        source=ContainerFeedSource(container),
        viewer_id=user_id_of(user),
        page_size=settings.feed.page_size,
        on_change=send_pending,
    )
    logger.info(f"Feed socket opened for {user.username}")

    try:
        buffer.start()
        initial = await buffer.load_initial()
        await websocket.send_json(
            {"type": "posts", "posts": _serialize(initial), "has_more": buffer.has_more}
        )
        await send_pending()

        while True:
            message = await websocket.receive_json()
            command = message.get("type") if isinstance(message, dict) else None

            if command == "merge":
                merged = await buffer.merge_pending()
                await websocket.send_json({"type": "merged", "posts": _serialize(merged)})
                # merge_pending only notifies when something moved
                if not merged:
                    await send_pending()
            elif command == "load_more":
                page = await buffer.load_more()
                await websocket.send_json(
                    {"type": "page", "posts": _serialize(page), "has_more": buffer.has_more}
                )
            else:
                await websocket.send_json(
                    {"type": "error", "detail": f"Unknown command: {command!r}"}
                )
    except WebSocketDisconnect:
        logger.info(f"Feed socket closed by {user.username}")
    finally:
        buffer.close()
