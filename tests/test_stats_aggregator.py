"""Tests for channel stats aggregation"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from common.exceptions.base_exception import (
    AggregationFailureException,
    InvalidIdentifierException,
    OperationCancelledException,
    ServiceUnavailableException,
)
from domain.relationships.services.toggle_service import RelationshipToggleManager
from domain.stats.entities.channel_stats import ChannelStats
from domain.stats.services.stats_aggregator import StatsAggregator


@pytest.fixture
def aggregator(store):
    return StatsAggregator(store)


@pytest.fixture
def manager(store):
    return RelationshipToggleManager(store)


class TestChannelStats:
    """Three concurrent rollups per channel"""

    @pytest.mark.asyncio
    async def test_empty_channel_gets_zeros(self, aggregator, seed):
        alice = await seed.user("alice")

        stats = await aggregator.channel_stats(alice)

        assert stats == ChannelStats(total_views=0, total_videos=0, total_subscribers=0, total_likes=0)

    @pytest.mark.asyncio
    async def test_totals(self, aggregator, manager, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        carol = await seed.user("carol")
        first = await seed.video(alice, views=100)
        second = await seed.video(alice, views=23)
        await seed.video(bob, views=999)
        comment = await seed.comment(alice, first)
        bobs_comment = await seed.comment(bob, first)

        await manager.toggle_subscription(bob, alice)
        await manager.toggle_subscription(carol, alice)
        await manager.toggle_video_like(bob, first)
        await manager.toggle_video_like(carol, second)
        await manager.toggle_comment_like(bob, comment)
        # likes on content alice does not own are not hers
        await manager.toggle_comment_like(alice, bobs_comment)

        stats = await aggregator.channel_stats(alice)

        assert stats.total_views == 123
        assert stats.total_videos == 2
        assert stats.total_subscribers == 2
        assert stats.total_likes == 3

    @pytest.mark.asyncio
    async def test_failed_branch_reports_aggregation_failure(self, aggregator, store, seed, monkeypatch):
        alice = await seed.user("alice")
        monkeypatch.setattr(store.subscriptions, "count", AsyncMock(side_effect=ServiceUnavailableException("down")))

        with pytest.raises(AggregationFailureException) as exc_info:
            await aggregator.channel_stats(alice)

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == "AGGREGATION_FAILURE"

    @pytest.mark.asyncio
    async def test_deadline_exceeded_is_cancelled(self, aggregator, seed, monkeypatch):
        alice = await seed.user("alice")

        async def slow_total(channel_id):
            await asyncio.sleep(5)
            return 0

        monkeypatch.setattr(aggregator, "_like_total", slow_total)

        with pytest.raises(OperationCancelledException) as exc_info:
            await aggregator.channel_stats(alice, timeout=0.05)

        assert exc_info.value.error_code == "CANCELLED"

    @pytest.mark.asyncio
    async def test_malformed_channel_id(self, aggregator):
        with pytest.raises(InvalidIdentifierException):
            await aggregator.channel_stats("channel-1")
