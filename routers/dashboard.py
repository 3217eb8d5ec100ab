# routers/dashboard.py

import asyncio
from contextlib import ExitStack
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from starlette.concurrency import run_in_threadpool

from core.credential_store import CredentialStore
from core.errors import AuthenticationError, StoreError
from core.logging_config import logger
from core.permission_helpers import section_capability
from core.record_store import RecordStore
from dependencies.auth import get_credential_store, get_record_store, record_store_for, requires_section
from models.auth import AuthContext
from models.dashboard import DashboardStats
from models.enums import Collection
from services.dashboard import compute_dashboard_stats
from services.session_resolver import SessionResolver


router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)

LIVE_COLLECTIONS = (Collection.workers, Collection.offices, Collection.work_categories)

# Custom close codes (4000-4999 are application defined)
WS_UNAUTHORIZED = 4401
WS_FORBIDDEN = 4403
WS_UNAVAILABLE = 4500


# -----------------------------------------------------
# GET /dashboard/stats
# -----------------------------------------------------
@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard counters",
    dependencies=[Depends(requires_section("dashboard"))],
)
def get_stats(store: RecordStore = Depends(get_record_store)):
    return compute_dashboard_stats(store)


# -----------------------------------------------------
# WS /dashboard/live?token=<access token>
# Pushes fresh stats after every write to workers,
# offices or categories
# -----------------------------------------------------
def _authenticate(store: Optional[RecordStore], credentials: CredentialStore, token: str) -> Optional[AuthContext]:
    if store is None:
        return None
    return SessionResolver(credentials, store).resolve_token(token)


@router.websocket("/live")
async def dashboard_live(
    websocket: WebSocket,
    token: Optional[str] = None,
    credentials: CredentialStore = Depends(get_credential_store),
):
    if not token:
        await websocket.close(code=WS_UNAUTHORIZED)
        return

    store = record_store_for(websocket.app)
    try:
        context = await run_in_threadpool(_authenticate, store, credentials, token)
    except (AuthenticationError, StoreError) as e:
        logger.warning(f"Dashboard live rejected: {e.message}")
        await websocket.close(code=WS_UNAUTHORIZED)
        return

    if context is None:
        await websocket.close(code=WS_UNAVAILABLE)
        return
    if section_capability(context.role, "dashboard") is None:
        await websocket.close(code=WS_FORBIDDEN)
        return

    await websocket.accept()

    loop = asyncio.get_running_loop()
    changes: asyncio.Queue = asyncio.Queue()

    def on_snapshot(rows):
        # Runs on whichever thread made the write
        loop.call_soon_threadsafe(changes.put_nowait, len(rows))

    async def push_stats():
        while True:
            await changes.get()
            # One recompute per burst of writes
            while not changes.empty():
                changes.get_nowait()
            stats = await run_in_threadpool(compute_dashboard_stats, store)
            await websocket.send_json(stats.model_dump(mode="json"))

    async def read_client():
        while True:
            data = await websocket.receive_text()
            if data and data.strip().lower() in {"ping", "keepalive"}:
                await websocket.send_text("pong")

    tasks = []
    with ExitStack() as stack:
        try:
            for collection in LIVE_COLLECTIONS:
                subscription = await run_in_threadpool(store.subscribe, collection, on_snapshot)
                stack.enter_context(subscription)

            tasks = [asyncio.ensure_future(push_stats()), asyncio.ensure_future(read_client())]

            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                task.result()
        except WebSocketDisconnect:
            logger.info(f"Dashboard live closed by {context.user_id}")
        except StoreError as e:
            logger.error(f"Dashboard live failed for {context.user_id}: {e.message}")
            await websocket.close(code=WS_UNAVAILABLE)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
