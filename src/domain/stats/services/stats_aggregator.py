# File: domain/stats/services/stats_aggregator.py
import asyncio
from typing import Dict, Optional

from common.base_service.base_service import BaseService
from common.config.settings import settings
from common.exceptions.base_exception import AggregationFailureException, OperationCancelledException
from common.exceptions.error_handlers import report_error
from common.logging.logger import log_warning
from common.utils.validation import ensure_object_id
from domain.stats.entities.channel_stats import ChannelStats
from infrastructure.database.mongodb.repositories.entity_store import EntityStore


class StatsAggregator(BaseService):
    """
    Per-channel rollups.

    Video totals, subscriber count and like count come from three
    independent aggregations that run concurrently; a channel with no
    matching rows simply gets zeros.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    async def _video_totals(self, channel_id: str) -> Dict[str, int]:
        rows = await self.store.videos.aggregate([
            {"$match": {"owner": channel_id}},
            {"$group": {"_id": None, "total_views": {"$sum": "$views"}, "total_videos": {"$sum": 1}}},
        ])
        if not rows:
            return {"total_views": 0, "total_videos": 0}
        return {"total_views": rows[0].get("total_views") or 0, "total_videos": rows[0].get("total_videos") or 0}

    async def _subscriber_total(self, channel_id: str) -> int:
        return await self.store.subscriptions.count({"channel": channel_id})

    async def _like_total(self, channel_id: str) -> int:
        # first hop: content owned by the channel, second hop: likes on that content
        video_ids, comment_ids = await asyncio.gather(
            self.store.owned_ids("videos", channel_id),
            self.store.owned_ids("comments", channel_id),
        )
        targets = []
        if video_ids:
            targets.append({"video": {"$in": video_ids}})
        if comment_ids:
            targets.append({"comment": {"$in": comment_ids}})
        if not targets:
            return 0
        return await self.store.likes.count({"$or": targets})

    async def channel_stats(self, channel_id: str, timeout: Optional[float] = None) -> ChannelStats:
        ensure_object_id(channel_id, "channel id")
        deadline = settings.STATS_TIMEOUT_SECONDS if timeout is None else timeout
        context = {"action": "channel_stats", "entity_type": "user", "entity_id": channel_id}

        async def operation():
            tasks = [
                asyncio.create_task(self._video_totals(channel_id)),
                asyncio.create_task(self._subscriber_total(channel_id)),
                asyncio.create_task(self._like_total(channel_id)),
            ]
            try:
                video_totals, subscribers, likes = await asyncio.wait_for(asyncio.gather(*tasks), timeout=deadline)
            except asyncio.TimeoutError as e:
                log_warning("Channel stats exceeded deadline", extra={**context, "timeout": deadline})
                raise OperationCancelledException(detail="Channel stats aggregation timed out.") from e
            except Exception as e:
                report_error(exc=e, context=context, error_type="aggregation")
                raise AggregationFailureException(detail="Failed to compute channel stats.") from e
            finally:
                for task in tasks:
                    if not task.done():
                        task.cancel()

            return ChannelStats(
                total_views=video_totals["total_views"],
                total_videos=video_totals["total_videos"],
                total_subscribers=subscribers or 0,
                total_likes=likes or 0,
            )

        return await self.execute(operation, context)
