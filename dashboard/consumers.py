from __future__ import annotations

import asyncio
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from accounts.guard import is_permitted
from accounts.models import SUPER_ADMIN_ONLY
from accounts.session import SessionContext
from .stats import STATS_GROUP, GenerationCounter, quick_start_counts

logger = logging.getLogger(__name__)


@database_sync_to_async
def _may_watch(user) -> bool:
    ctx = SessionContext(user=user)
    ctx.resolve()
    return is_permitted(ctx, SUPER_ADMIN_ONLY)


class DashboardStatsConsumer(AsyncJsonWebsocketConsumer):
    """Pushes quick-start counts on connect and after every watched row change.

    Each refresh is tagged with a generation; a refresh that finishes after
    a newer one has started is discarded. Pending refreshes are cancelled
    on disconnect.
    """

    async def connect(self):
        self.generation = GenerationCounter()
        self._tasks: set[asyncio.Task] = set()
        self._joined = False
        if not await _may_watch(self.scope.get("user")):
            await self.close(code=4001)
            return
        await self.channel_layer.group_add(STATS_GROUP, self.channel_name)
        self._joined = True
        await self.accept()
        self.schedule_refresh()

    def schedule_refresh(self) -> asyncio.Task:
        task = asyncio.create_task(self.refresh(self.generation.next()))
        self._tasks.add(task)
        task.add_done_callback(self._refresh_done)
        return task

    def _refresh_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Stats refresh failed", exc_info=task.exception())

    async def refresh(self, generation: int) -> None:
        counts = await database_sync_to_async(quick_start_counts)()
        if not self.generation.is_current(generation):
            logger.debug("Discarding stale stats refresh %s (current %s)", generation, self.generation.value)
            return
        await self.send_json({"type": "stats", "generation": generation, "counts": counts})

    async def receive_json(self, content, **kwargs):
        if isinstance(content, dict) and content.get("action") == "refresh":
            self.schedule_refresh()

    async def stats_changed(self, event):
        self.schedule_refresh()

    async def disconnect(self, code):
        for task in list(self._tasks):
            task.cancel()
        if self._joined:
            await self.channel_layer.group_discard(STATS_GROUP, self.channel_name)
