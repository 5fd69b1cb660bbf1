"""Tests for the joined, paginated read views"""

import pytest
from bson import ObjectId

from common.exceptions.base_exception import (
    BadRequestException,
    InvalidIdentifierException,
    InvalidPaginationException,
    InvalidSortException,
    NotFoundException,
)
from domain.relationships.services.toggle_service import RelationshipToggleManager
from domain.views.services.view_composer import ViewComposer, ViewKind


@pytest.fixture
def composer(store):
    return ViewComposer(store)


@pytest.fixture
def manager(store):
    return RelationshipToggleManager(store)


class TestVideoFeed:
    """Video feed with owner join"""

    @pytest.mark.asyncio
    async def test_third_page_of_twenty_five(self, composer, seed):
        alice = await seed.user("alice")
        for minute in range(25):
            await seed.video(alice, title=f"Video {minute}", minute=minute)

        result = await composer.video_feed(page=3, limit=10)

        assert result["meta"] == {"total": 25, "page": 3, "limit": 10, "pages": 3}
        assert [item["title"] for item in result["items"]] == ["Video 4", "Video 3", "Video 2", "Video 1", "Video 0"]

    @pytest.mark.asyncio
    async def test_owner_is_joined_as_summary(self, composer, seed):
        alice = await seed.user("alice")
        await seed.video(alice, title="Hello")

        [item] = (await composer.video_feed())["items"]

        assert item["owner"] == {"id": alice, "username": "alice", "full_name": "Alice", "avatar": "https://img.test/alice.png"}
        assert "email" not in item["owner"]

    @pytest.mark.asyncio
    async def test_deleted_owner_keeps_row_with_null_owner(self, composer, store, seed):
        alice = await seed.user("alice")
        await seed.video(alice, title="Orphan")
        await store.users.delete_one({"_id": alice})

        result = await composer.video_feed()

        assert result["meta"]["total"] == 1
        assert result["items"][0]["owner"] is None

    @pytest.mark.asyncio
    async def test_query_is_matched_as_literal_text(self, composer, seed):
        alice = await seed.user("alice")
        await seed.video(alice, title="Dance (tutorial)", minute=1)
        await seed.video(alice, title="Cooking pasta", minute=2)

        result = await composer.video_feed(query="(tutorial")

        assert [item["title"] for item in result["items"]] == ["Dance (tutorial)"]

    @pytest.mark.asyncio
    async def test_filter_by_owner_and_sort_by_views(self, composer, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        await seed.video(alice, title="Low", views=5)
        await seed.video(alice, title="High", views=500)
        await seed.video(bob, title="Other", views=1000)

        result = await composer.video_feed(owner=alice, sort_by="views", sort_type="desc")

        assert [item["title"] for item in result["items"]] == ["High", "Low"]
        assert result["meta"]["total"] == 2

    @pytest.mark.asyncio
    async def test_invalid_pagination_rejected_before_store_access(self, composer, store, monkeypatch):
        async def fail(*args, **kwargs):
            raise AssertionError("store must not be touched")

        monkeypatch.setattr(store.videos, "count", fail)
        monkeypatch.setattr(store.videos, "find_with_pagination", fail)

        with pytest.raises(InvalidPaginationException):
            await composer.video_feed(page=0)

    @pytest.mark.asyncio
    async def test_unknown_sort_field_rejected(self, composer):
        with pytest.raises(InvalidSortException):
            await composer.video_feed(sort_by="owner_password")

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, composer, seed):
        alice = await seed.user("alice")
        await seed.video(alice)

        result = await composer.video_feed(page=5)

        assert result["items"] == []
        assert result["meta"]["total"] == 1


class TestVideoById:
    """Single video detail"""

    @pytest.mark.asyncio
    async def test_detail_includes_owner_and_updated_at(self, composer, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice, title="Detail")

        detail = await composer.video_by_id(video)

        assert detail["id"] == video
        assert detail["owner"]["username"] == "alice"
        assert detail["updated_at"] is not None

    @pytest.mark.asyncio
    async def test_missing_video(self, composer):
        with pytest.raises(NotFoundException):
            await composer.video_by_id(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_malformed_id(self, composer):
        with pytest.raises(InvalidIdentifierException):
            await composer.video_by_id("123")


class TestChannelVideos:
    """Dashboard listing of a channel's own uploads"""

    @pytest.mark.asyncio
    async def test_publish_filter(self, composer, seed):
        alice = await seed.user("alice")
        await seed.video(alice, title="Public", minute=1)
        await seed.video(alice, title="Draft", minute=2, is_published=False)

        everything = await composer.channel_videos(alice)
        drafts = await composer.channel_videos(alice, is_published=False)

        assert everything["meta"]["total"] == 2
        assert [item["title"] for item in drafts["items"]] == ["Draft"]


class TestVideoComments:
    """Comments of a video"""

    @pytest.mark.asyncio
    async def test_comments_newest_first_with_owner(self, composer, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        video = await seed.video(alice)
        await seed.comment(alice, video, "first", minute=1)
        await seed.comment(bob, video, "second", minute=2)

        result = await composer.video_comments(video)

        assert [item["content"] for item in result["items"]] == ["second", "first"]
        assert result["items"][0]["owner"]["username"] == "bob"

    @pytest.mark.asyncio
    async def test_comments_of_missing_video(self, composer):
        with pytest.raises(NotFoundException):
            await composer.video_comments(str(ObjectId()))


class TestLikedVideos:
    """Videos liked by a user"""

    @pytest.mark.asyncio
    async def test_deleted_videos_are_skipped_and_not_counted(self, composer, manager, store, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        kept = await seed.video(bob, title="Kept")
        gone = await seed.video(bob, title="Gone")
        await manager.toggle_video_like(alice, kept)
        await manager.toggle_video_like(alice, gone)
        await store.videos.delete_one({"_id": gone})

        result = await composer.liked_videos(alice)

        assert result["meta"]["total"] == 1
        [item] = result["items"]
        assert item["video"]["title"] == "Kept"
        assert item["video"]["owner"]["username"] == "bob"

    @pytest.mark.asyncio
    async def test_comment_likes_are_not_listed(self, composer, manager, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice)
        comment = await seed.comment(alice, video)
        await manager.toggle_comment_like(alice, comment)

        result = await composer.liked_videos(alice)

        assert result["items"] == []
        assert result["meta"]["total"] == 0


class TestPlaylists:
    """Playlist views"""

    @pytest.mark.asyncio
    async def test_members_keep_order_and_missing_ones_are_dropped(self, composer, store, seed):
        alice = await seed.user("alice")
        first = await seed.video(alice, title="First")
        second = await seed.video(alice, title="Second")
        third = await seed.video(alice, title="Third")
        playlist = await seed.playlist(alice, videos=[third, first, second])
        await store.videos.delete_one({"_id": first})

        result = await composer.playlist_with_videos(playlist)

        assert [item["title"] for item in result["items"]] == ["Third", "Second"]
        assert result["meta"]["total"] == 2
        assert result["playlist"]["video_count"] == 2
        assert result["playlist"]["owner"]["username"] == "alice"

    @pytest.mark.asyncio
    async def test_members_reversed_on_desc(self, composer, seed):
        alice = await seed.user("alice")
        first = await seed.video(alice, title="First")
        second = await seed.video(alice, title="Second")
        playlist = await seed.playlist(alice, videos=[first, second])

        result = await composer.playlist_with_videos(playlist, sort_type="desc")

        assert [item["title"] for item in result["items"]] == ["Second", "First"]

    @pytest.mark.asyncio
    async def test_missing_playlist(self, composer):
        with pytest.raises(NotFoundException):
            await composer.playlist_with_videos(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_user_playlists_embed_video_cards(self, composer, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice, title="Inside")
        await seed.playlist(alice, name="Mine", videos=[video])

        result = await composer.user_playlists(alice)

        [playlist] = result["items"]
        assert playlist["name"] == "Mine"
        assert playlist["video_count"] == 1
        assert playlist["videos"][0]["title"] == "Inside"


class TestSubscriptionViews:
    """Subscribers of a channel and channels of a subscriber"""

    @pytest.mark.asyncio
    async def test_subscribers_of_channel(self, composer, manager, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        carol = await seed.user("carol")
        await manager.toggle_subscription(bob, alice)
        await manager.toggle_subscription(carol, alice)
        await manager.toggle_subscription(alice, bob)

        result = await composer.channel_subscribers(alice)

        assert result["meta"]["total"] == 2
        assert {item["subscriber"]["username"] for item in result["items"]} == {"bob", "carol"}

    @pytest.mark.asyncio
    async def test_channels_of_subscriber(self, composer, manager, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        await manager.toggle_subscription(bob, alice)

        result = await composer.subscribed_channels(bob)

        [item] = result["items"]
        assert item["channel"]["id"] == alice
        assert item["subscription_id"]


class TestComposeView:
    """Dispatch by view kind"""

    @pytest.mark.asyncio
    async def test_dispatch_with_filters(self, composer, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice)
        await seed.comment(alice, video, "hello")

        result = await composer.compose_view(ViewKind.VIDEO_COMMENTS, {"video_id": video}, page="1", limit="5")

        assert result["meta"]["limit"] == 5
        assert result["items"][0]["content"] == "hello"

    @pytest.mark.asyncio
    async def test_video_by_id_dispatch(self, composer, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice)

        result = await composer.compose_view("video_by_id", {"video_id": video})

        assert result["id"] == video

    @pytest.mark.asyncio
    async def test_unknown_view(self, composer):
        with pytest.raises(BadRequestException):
            await composer.compose_view("trending")

    @pytest.mark.asyncio
    async def test_unsupported_filter(self, composer):
        with pytest.raises(BadRequestException):
            await composer.compose_view(ViewKind.VIDEO_FEED, {"colour": "red"})
