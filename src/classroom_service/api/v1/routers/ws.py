from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from classroom_service.api.deps import get_verifier
from classroom_service.api.v1.schemas.conversation import ConversationResponse
from classroom_service.api.v1.schemas.message import MessageResponse
from classroom_service.api.v1.schemas.notification import NotificationResponse
from classroom_service.api.v1.schemas.unread import UnreadCountsResponse
from classroom_service.application.dto.principal import Principal
from classroom_service.application.dto.unread import UnreadCounts
from classroom_service.application.exceptions import AppError
from classroom_service.config import settings
from classroom_service.infrastructure.ws.manager import ConnectionManager
from classroom_service.infrastructure.ws.outbound import OutboundQueue
from classroom_service.infrastructure.ws.protocol import (
    ChatSendData,
    ConversationRefData,
    MarkReadData,
    WsInbound,
    WsOutbound,
    error_frame,
)
from classroom_service.realtime.connection import RealtimeConnection

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])

manager = ConnectionManager()

_ENCODERS: dict[str, TypeAdapter[Any]] = {
    "unread.updated": TypeAdapter(UnreadCountsResponse),
    "notification": TypeAdapter(NotificationResponse),
    "chat.conversations": TypeAdapter(list[ConversationResponse]),
    "chat.messages": TypeAdapter(list[MessageResponse]),
    "chat.message": TypeAdapter(MessageResponse),
}

_PONG = WsOutbound(type="pong", data={}).model_dump_json()


def get_manager() -> ConnectionManager:
    return manager


def encode_payload(event_type: str, payload: Any) -> Any:
    """Turn a realtime DTO into the JSON shape of the matching HTTP schema."""
    adapter = _ENCODERS.get(event_type)
    if adapter is None:
        return payload
    return adapter.dump_python(
        adapter.validate_python(payload, from_attributes=True),
        mode="json",
    )


async def _authenticate(token: str) -> Principal | None:
    try:
        verifier = get_verifier()
        return await verifier.verify(token)
    except Exception:
        logger.debug("WS auth failed", exc_info=True)
        return None


@router.websocket("/ws")
async def ws_realtime(
    websocket: WebSocket,
    token: str = Query(...),
) -> None:
    principal = await _authenticate(token)
    if principal is None:
        await websocket.close(code=4001, reason="Authentication failed")
        return

    pkey = principal.principal_key
    outbound = OutboundQueue(websocket.send_text, settings.WS_SEND_QUEUE_SIZE)

    async def sink(event_type: str, payload: Any) -> None:
        frame = WsOutbound(type=event_type, data=encode_payload(event_type, payload))
        outbound.put(frame.model_dump_json())

    conn = RealtimeConnection(principal, websocket.app.state.uow_factory, sink)
    await manager.connect(websocket, pkey, conn)
    outbound.start(name=f"ws-writer-{pkey}")

    heartbeat_task = asyncio.create_task(
        _heartbeat(outbound), name=f"ws-heartbeat-{pkey}",
    )
    try:
        await conn.start(websocket.app.state.change_feed)
        await _read_loop(websocket, conn, outbound)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error for %s", pkey)
    finally:
        heartbeat_task.cancel()
        manager.disconnect(websocket, pkey)
        await outbound.stop()


async def _heartbeat(out: OutboundQueue) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    try:
        while True:
            await asyncio.sleep(interval)
            out.put(_PONG)
    except asyncio.CancelledError:
        pass


async def _read_loop(ws: WebSocket, conn: RealtimeConnection, out: OutboundQueue) -> None:
    while True:
        raw = await ws.receive_text()
        try:
            msg = WsInbound.model_validate_json(raw)
        except PydanticValidationError:
            out.put(error_frame("invalid_payload"))
            continue

        try:
            await _dispatch(out, conn, msg)
        except PydanticValidationError as exc:
            out.put(error_frame("invalid_data", type=msg.type, detail=str(exc)))
        except AppError as exc:
            out.put(error_frame(exc.code, type=msg.type, detail=exc.detail))
        except WebSocketDisconnect:
            raise
        except Exception:
            logger.exception("WS handler %s failed for %s", msg.type, conn.principal.user_id)
            out.put(error_frame("internal_error", type=msg.type))


async def _dispatch(out: OutboundQueue, conn: RealtimeConnection, msg: WsInbound) -> None:
    if msg.type == "ping":
        out.put(_PONG)

    elif msg.type == "unread.refresh":
        if conn.unread is None:
            _send_zero_unread(out)
        else:
            await conn.unread.refresh()

    elif msg.type == "unread.mark_read":
        data = MarkReadData.model_validate(msg.data)
        if conn.unread is None:
            _send_zero_unread(out)
        else:
            await conn.unread.mark_as_read(data.content_id, data.content_type)

    elif msg.type == "notifications.refresh":
        await conn.notifications.refresh_enrolled_classes()

    elif msg.type == "chat.refresh":
        await conn.chat.fetch_conversations()

    elif msg.type == "chat.open":
        data = ConversationRefData.model_validate(msg.data)
        await conn.chat.open_conversation(data.conversation_id)

    elif msg.type == "chat.close":
        conn.chat.close_conversation()

    elif msg.type == "chat.send":
        data = ChatSendData.model_validate(msg.data)
        sent = await conn.chat.send_message(data.content, data.conversation_id)
        if sent is None:
            out.put(error_frame("send_failed", type=msg.type))

    else:
        out.put(error_frame("unknown_type", type=msg.type))


def _send_zero_unread(out: OutboundQueue) -> None:
    frame = WsOutbound(type="unread.updated", data=encode_payload("unread.updated", UnreadCounts()))
    out.put(frame.model_dump_json())
