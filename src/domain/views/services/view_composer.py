# File: domain/views/services/view_composer.py
import asyncio
import re
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from common.base_service.base_service import BaseService
from common.exceptions.base_exception import BadRequestException, NotFoundException
from common.utils.pagination import PageRequest, SortSpec, normalize_pagination, normalize_sort, paginate_response
from common.utils.validation import ensure_object_id
from domain.views.entities.projections import (
    ChannelVideo,
    CommentView,
    LikedVideo,
    PlaylistView,
    SubscribedChannelView,
    SubscriberView,
    UserSummary,
    VideoCard,
    VideoDetail,
)
from domain.views.services.joins import (
    Cardinality,
    JoinMode,
    JoinSpec,
    apply_join,
    apply_nested_join,
    owner_join,
)
from infrastructure.database.mongodb.repositories.entity_store import EntityStore
from infrastructure.database.mongodb.repository import MongoRepository

PageInput = Union[int, str, None]

VIDEO_SORT_FIELDS = ("created_at", "updated_at", "title", "views", "duration")
COMMENT_SORT_FIELDS = ("created_at", "updated_at")
PLAYLIST_SORT_FIELDS = ("created_at", "updated_at", "name")
EDGE_SORT_FIELDS = ("created_at",)

VIDEO_CARD_FIELDS = {
    "title": 1,
    "description": 1,
    "video_file": 1,
    "thumbnail": 1,
    "duration": 1,
    "views": 1,
    "is_published": 1,
    "owner": 1,
    "created_at": 1,
}

PLAYLIST_VIDEOS_JOIN = JoinSpec(
    local_field="videos",
    collection="videos",
    as_field="videos",
    projection=VIDEO_CARD_FIELDS,
    cardinality=Cardinality.MANY,
    mode=JoinMode.INNER,
)


class ViewKind(str, Enum):
    VIDEO_FEED = "video_feed"
    VIDEO_BY_ID = "video_by_id"
    VIDEO_COMMENTS = "video_comments"
    LIKED_VIDEOS = "liked_videos"
    PLAYLIST_WITH_VIDEOS = "playlist_with_videos"
    USER_PLAYLISTS = "user_playlists"
    CHANNEL_SUBSCRIBERS = "channel_subscribers"
    SUBSCRIBED_CHANNELS = "subscribed_channels"
    CHANNEL_VIDEOS = "channel_videos"


def _user_summary(doc: Optional[Dict[str, Any]]) -> Optional[UserSummary]:
    if not doc:
        return None
    return UserSummary(
        id=doc["_id"],
        username=doc.get("username"),
        full_name=doc.get("full_name"),
        avatar=doc.get("avatar"),
    )


def _video_fields(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": doc["_id"],
        "title": doc.get("title", ""),
        "description": doc.get("description"),
        "video_file": doc.get("video_file"),
        "thumbnail": doc.get("thumbnail"),
        "duration": doc.get("duration") or 0,
        "views": doc.get("views") or 0,
        "is_published": doc.get("is_published", True),
        "owner": _user_summary(doc.get("owner")),
        "created_at": doc.get("created_at"),
    }


def _video_card(doc: Dict[str, Any]) -> VideoCard:
    return VideoCard(**_video_fields(doc))


class ViewComposer(BaseService):
    """
    Builds the read views of the content graph.

    Each view runs a filtered primary read, attaches the related documents
    through declared joins, projects the public fields and paginates.
    Identifier, pagination and sort input is validated before any query.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    async def compose_view(
        self,
        view_kind: Union[ViewKind, str],
        filters: Optional[Dict[str, Any]] = None,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        try:
            kind = ViewKind(view_kind)
        except ValueError:
            raise BadRequestException(detail=f"Unknown view '{view_kind}'.")

        filters = dict(filters or {})
        if kind is ViewKind.VIDEO_BY_ID:
            return await self.video_by_id(filters.get("video_id"))

        handler = getattr(self, kind.value)
        try:
            return await handler(**filters, page=page, limit=limit, sort_by=sort_by, sort_type=sort_type)
        except TypeError as e:
            raise BadRequestException(detail=f"Unsupported filters for {kind.value}: {sorted(filters)}") from e

    # --- helpers ---------------------------------------------------------

    @staticmethod
    async def _read_page(
        repo: MongoRepository,
        match: Dict[str, Any],
        page_request: PageRequest,
        sort: SortSpec,
        projection: Optional[Dict[str, Any]] = None,
    ) -> Tuple[int, List[Dict[str, Any]]]:
        # total is counted on the filter alone, before skip/limit
        total, rows = await asyncio.gather(
            repo.count(match),
            repo.find_with_pagination(match, skip=page_request.skip, limit=page_request.take, sort=sort, projection=projection),
        )
        return total, rows

    async def _require_video(self, video_id: str) -> Dict[str, Any]:
        video = await self.store.get_video(video_id)
        if not video:
            raise NotFoundException(detail="Video not found.")
        return video

    # --- videos ----------------------------------------------------------

    async def video_feed(
        self,
        query: Optional[str] = None,
        owner: Optional[str] = None,
        is_published: Optional[bool] = None,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        page_request = normalize_pagination(page, limit)
        sort = normalize_sort(sort_by, sort_type, VIDEO_SORT_FIELDS)

        match: Dict[str, Any] = {}
        if owner is not None:
            match["owner"] = ensure_object_id(owner, "user id")
        if query:
            pattern = re.escape(query.strip())
            match["$or"] = [
                {"title": {"$regex": pattern, "$options": "i"}},
                {"description": {"$regex": pattern, "$options": "i"}},
            ]
        if is_published is not None:
            match["is_published"] = is_published

        async def operation():
            total, rows = await self._read_page(self.store.videos, match, page_request, sort, VIDEO_CARD_FIELDS)
            rows = await apply_join(self.store, rows, owner_join())
            items = [_video_card(row).model_dump() for row in rows]
            return paginate_response(items, total, page_request)

        return await self.execute(operation, {"action": "video_feed", "entity_type": "video", "query": query, "owner": owner})

    async def video_by_id(self, video_id: str) -> Dict[str, Any]:
        ensure_object_id(video_id, "video id")

        async def operation():
            video = await self._require_video(video_id)
            [video] = await apply_join(self.store, [video], owner_join())
            return VideoDetail(**_video_fields(video), updated_at=video.get("updated_at")).model_dump()

        return await self.execute(operation, {"action": "video_by_id", "entity_type": "video", "entity_id": video_id})

    async def channel_videos(
        self,
        owner: str,
        is_published: Optional[bool] = None,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        ensure_object_id(owner, "user id")
        page_request = normalize_pagination(page, limit)
        sort = normalize_sort(sort_by, sort_type, VIDEO_SORT_FIELDS)

        match: Dict[str, Any] = {"owner": owner}
        if is_published is not None:
            match["is_published"] = is_published

        async def operation():
            total, rows = await self._read_page(self.store.videos, match, page_request, sort)
            items = [
                ChannelVideo(
                    id=row["_id"],
                    title=row.get("title", ""),
                    video_file=row.get("video_file"),
                    thumbnail=row.get("thumbnail"),
                    duration=row.get("duration") or 0,
                    views=row.get("views") or 0,
                    is_published=row.get("is_published", True),
                    created_at=row.get("created_at"),
                    updated_at=row.get("updated_at"),
                ).model_dump()
                for row in rows
            ]
            return paginate_response(items, total, page_request)

        return await self.execute(operation, {"action": "channel_videos", "entity_type": "user", "entity_id": owner})

    # --- comments --------------------------------------------------------

    async def video_comments(
        self,
        video_id: str,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        ensure_object_id(video_id, "video id")
        page_request = normalize_pagination(page, limit)
        sort = normalize_sort(sort_by, sort_type, COMMENT_SORT_FIELDS)

        async def operation():
            await self._require_video(video_id)
            total, rows = await self._read_page(self.store.comments, {"video": video_id}, page_request, sort)
            rows = await apply_join(self.store, rows, owner_join())
            items = [
                CommentView(
                    id=row["_id"],
                    content=row["content"],
                    video=row["video"],
                    owner=_user_summary(row.get("owner")),
                    created_at=row.get("created_at"),
                    updated_at=row.get("updated_at"),
                ).model_dump()
                for row in rows
            ]
            return paginate_response(items, total, page_request)

        return await self.execute(operation, {"action": "video_comments", "entity_type": "video", "entity_id": video_id})

    # --- likes -----------------------------------------------------------

    async def liked_videos(
        self,
        user_id: str,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        ensure_object_id(user_id, "user id")
        page_request = normalize_pagination(page, limit)
        sort = normalize_sort(sort_by, sort_type, EDGE_SORT_FIELDS)

        async def operation():
            likes = await self.store.likes.find(
                {"liked_by": user_id, "video": {"$ne": None}},
                {"video": 1, "created_at": 1},
                sort=sort,
            )
            # likes of deleted videos have nothing to show and do not count
            existing = await self.store.videos.find_by_ids([like["video"] for like in likes], {"_id": 1})
            resolvable = [like for like in likes if like["video"] in existing]

            rows = await apply_join(self.store, page_request.slice(resolvable), JoinSpec(
                local_field="video",
                collection="videos",
                as_field="video",
                projection=VIDEO_CARD_FIELDS,
                mode=JoinMode.INNER,
            ))
            rows = await apply_nested_join(self.store, rows, "video", owner_join())
            items = [
                LikedVideo(
                    like_id=row["_id"],
                    liked_at=row.get("created_at"),
                    video=_video_card(row["video"]),
                ).model_dump()
                for row in rows
            ]
            return paginate_response(items, len(resolvable), page_request)

        return await self.execute(operation, {"action": "liked_videos", "entity_type": "user", "entity_id": user_id})

    # --- playlists -------------------------------------------------------

    async def playlist_with_videos(
        self,
        playlist_id: str,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        ensure_object_id(playlist_id, "playlist id")
        page_request = normalize_pagination(page, limit)
        # members keep playlist order; only the direction is selectable
        direction = normalize_sort(sort_by, sort_type, ("position",), default_field="position", default_type="asc")[0][1]

        async def operation():
            playlist = await self.store.get_playlist(playlist_id)
            if not playlist:
                raise NotFoundException(detail="Playlist not found.")

            member_ids = list(playlist.get("videos") or [])
            if direction < 0:
                member_ids.reverse()
            existing = await self.store.videos.find_by_ids(member_ids, {"_id": 1})
            resolvable = [video_id for video_id in member_ids if video_id in existing]

            [row] = await apply_join(self.store, [{**playlist, "videos": page_request.slice(resolvable)}], PLAYLIST_VIDEOS_JOIN)
            [row] = await apply_nested_join(self.store, [row], "videos", owner_join())
            [row] = await apply_join(self.store, [row], owner_join())

            header = PlaylistView(
                id=row["_id"],
                name=row["name"],
                description=row.get("description"),
                owner=_user_summary(row.get("owner")),
                video_count=len(resolvable),
                created_at=row.get("created_at"),
                updated_at=row.get("updated_at"),
            ).model_dump(exclude={"videos"})
            items = [_video_card(video).model_dump() for video in row["videos"]]
            return {**paginate_response(items, len(resolvable), page_request), "playlist": header}

        return await self.execute(operation, {"action": "playlist_with_videos", "entity_type": "playlist", "entity_id": playlist_id})

    async def user_playlists(
        self,
        user_id: str,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        ensure_object_id(user_id, "user id")
        page_request = normalize_pagination(page, limit)
        sort = normalize_sort(sort_by, sort_type, PLAYLIST_SORT_FIELDS)

        async def operation():
            total, rows = await self._read_page(self.store.playlists, {"owner": user_id}, page_request, sort)
            rows = await apply_join(self.store, rows, PLAYLIST_VIDEOS_JOIN)
            rows = await apply_nested_join(self.store, rows, "videos", owner_join())
            rows = await apply_join(self.store, rows, owner_join())
            items = [
                PlaylistView(
                    id=row["_id"],
                    name=row["name"],
                    description=row.get("description"),
                    owner=_user_summary(row.get("owner")),
                    videos=[_video_card(video) for video in row["videos"]],
                    video_count=len(row["videos"]),
                    created_at=row.get("created_at"),
                    updated_at=row.get("updated_at"),
                ).model_dump()
                for row in rows
            ]
            return paginate_response(items, total, page_request)

        return await self.execute(operation, {"action": "user_playlists", "entity_type": "user", "entity_id": user_id})

    # --- subscriptions ---------------------------------------------------

    async def channel_subscribers(
        self,
        channel_id: str,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        ensure_object_id(channel_id, "channel id")
        page_request = normalize_pagination(page, limit)
        sort = normalize_sort(sort_by, sort_type, EDGE_SORT_FIELDS)

        async def operation():
            total, rows = await self._read_page(self.store.subscriptions, {"channel": channel_id}, page_request, sort)
            rows = await apply_join(self.store, rows, owner_join("subscriber"))
            items = [
                SubscriberView(
                    subscription_id=row["_id"],
                    subscriber=_user_summary(row.get("subscriber")),
                    subscribed_at=row.get("created_at"),
                ).model_dump()
                for row in rows
            ]
            return paginate_response(items, total, page_request)

        return await self.execute(operation, {"action": "channel_subscribers", "entity_type": "user", "entity_id": channel_id})

    async def subscribed_channels(
        self,
        subscriber_id: str,
        page: PageInput = None,
        limit: PageInput = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        ensure_object_id(subscriber_id, "subscriber id")
        page_request = normalize_pagination(page, limit)
        sort = normalize_sort(sort_by, sort_type, EDGE_SORT_FIELDS)

        async def operation():
            total, rows = await self._read_page(self.store.subscriptions, {"subscriber": subscriber_id}, page_request, sort)
            rows = await apply_join(self.store, rows, owner_join("channel"))
            items = [
                SubscribedChannelView(
                    subscription_id=row["_id"],
                    channel=_user_summary(row.get("channel")),
                    subscribed_at=row.get("created_at"),
                ).model_dump()
                for row in rows
            ]
            return paginate_response(items, total, page_request)

        return await self.execute(operation, {"action": "subscribed_channels", "entity_type": "user", "entity_id": subscriber_id})
