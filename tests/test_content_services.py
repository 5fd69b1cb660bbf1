"""Tests for video, comment and playlist write services"""

from unittest.mock import AsyncMock

import pytest
from bson import ObjectId

from common.exceptions.base_exception import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    MediaUploadException,
    NotFoundException,
)
from domain.comments.services.comment_service import CommentService
from domain.playlists.services.playlist_service import PlaylistService
from domain.videos.services.video_service import VideoService
from infrastructure.external.media.cloudinary_client import MediaUploader, MediaUploadResult


class TestVideoService:
    """Publishing and editing videos"""

    @pytest.fixture
    def service(self, store, mock_uploader):
        return VideoService(store, mock_uploader)

    @pytest.mark.asyncio
    async def test_publish_stores_uploaded_urls(self, service, store, seed, mock_uploader):
        alice = await seed.user("alice")

        video = await service.publish_video(alice, " Title ", "Description", "/tmp/clip.mp4", "/tmp/thumb.png")

        assert video["title"] == "Title"
        assert video["video_file"] == "https://media.test/clip.mp4"
        assert video["thumbnail"] == "https://media.test/thumb.png"
        assert video["duration"] == 42.0
        assert video["owner"] == alice
        assert video["is_published"] is True
        assert mock_uploader.upload.await_count == 2
        assert await store.videos.count({}) == 1

    @pytest.mark.asyncio
    async def test_failed_upload_writes_nothing(self, store, seed):
        alice = await seed.user("alice")
        uploader = AsyncMock(spec=MediaUploader)
        uploader.upload.side_effect = [
            MediaUploadResult(url="https://media.test/clip.mp4"),
            MediaUploadException(detail="Media upload failed."),
        ]
        service = VideoService(store, uploader)

        with pytest.raises(MediaUploadException):
            await service.publish_video(alice, "Title", "Description", "/tmp/clip.mp4", "/tmp/thumb.png")

        assert await store.videos.count({}) == 0

    @pytest.mark.asyncio
    async def test_publish_requires_both_files(self, service, seed, mock_uploader):
        alice = await seed.user("alice")

        with pytest.raises(BadRequestException):
            await service.publish_video(alice, "Title", "Description", "/tmp/clip.mp4", None)

        mock_uploader.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_publish_requires_title(self, service, seed):
        alice = await seed.user("alice")

        with pytest.raises(BadRequestException):
            await service.publish_video(alice, "   ", "Description", "/tmp/clip.mp4", "/tmp/thumb.png")

    @pytest.mark.asyncio
    async def test_rejected_publish_removes_staged_files(self, service, tmp_path, mock_uploader):
        video_file = tmp_path / "clip.mp4"
        thumbnail = tmp_path / "thumb.png"
        video_file.write_bytes(b"video")
        thumbnail.write_bytes(b"png")

        with pytest.raises(NotFoundException):
            await service.publish_video(str(ObjectId()), "Title", "Description", video_file, thumbnail)

        assert not video_file.exists()
        assert not thumbnail.exists()
        mock_uploader.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_publish_input_removes_staged_files(self, service, seed, tmp_path):
        alice = await seed.user("alice")
        video_file = tmp_path / "clip.mp4"
        thumbnail = tmp_path / "thumb.png"
        video_file.write_bytes(b"video")
        thumbnail.write_bytes(b"png")

        with pytest.raises(BadRequestException):
            await service.publish_video(alice, "", "Description", video_file, thumbnail)

        assert not video_file.exists()
        assert not thumbnail.exists()

    @pytest.mark.asyncio
    async def test_forbidden_update_removes_staged_thumbnail(self, service, seed, tmp_path, mock_uploader):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        video = await seed.video(alice)
        thumbnail = tmp_path / "new.png"
        thumbnail.write_bytes(b"png")

        with pytest.raises(ForbiddenException):
            await service.update_video(bob, video, thumbnail_path=thumbnail)

        assert not thumbnail.exists()
        mock_uploader.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_by_owner(self, service, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice, title="Old")

        updated = await service.update_video(alice, video, title="New", thumbnail_path="/tmp/new.png")

        assert updated["title"] == "New"
        assert updated["thumbnail"] == "https://media.test/new.png"

    @pytest.mark.asyncio
    async def test_update_by_stranger_is_forbidden(self, service, store, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        video = await seed.video(alice, title="Mine")

        with pytest.raises(ForbiddenException):
            await service.update_video(bob, video, title="Hijacked")

        assert (await store.get_video(video))["title"] == "Mine"

    @pytest.mark.asyncio
    async def test_missing_video_reported_before_ownership(self, service, seed):
        bob = await seed.user("bob")

        with pytest.raises(NotFoundException):
            await service.delete_video(bob, str(ObjectId()))

    @pytest.mark.asyncio
    async def test_update_without_changes(self, service, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice)

        with pytest.raises(BadRequestException):
            await service.update_video(alice, video)

    @pytest.mark.asyncio
    async def test_delete_and_toggle_publish(self, service, store, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice)

        toggled = await service.toggle_publish_status(alice, video)
        assert toggled["is_published"] is False

        assert await service.delete_video(alice, video) is True
        assert await store.get_video(video) is None


class TestCommentService:
    """Adding and editing comments"""

    @pytest.fixture
    def service(self, store):
        return CommentService(store)

    @pytest.mark.asyncio
    async def test_add_comment_returns_owner_summary(self, service, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice)

        comment = await service.add_comment(alice, video, "  First!  ")

        assert comment["content"] == "First!"
        assert comment["video"] == video
        assert comment["owner"]["id"] == alice
        assert comment["owner"]["username"] == "alice"

    @pytest.mark.asyncio
    async def test_comment_on_missing_video(self, service, seed):
        alice = await seed.user("alice")

        with pytest.raises(NotFoundException):
            await service.add_comment(alice, str(ObjectId()), "Hello")

    @pytest.mark.asyncio
    async def test_empty_comment_rejected(self, service, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice)

        with pytest.raises(BadRequestException):
            await service.add_comment(alice, video, "")

    @pytest.mark.asyncio
    async def test_only_owner_edits_and_deletes(self, service, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        video = await seed.video(alice)
        comment = await seed.comment(alice, video, "Original")

        with pytest.raises(ForbiddenException):
            await service.update_comment(bob, comment, "Changed")
        with pytest.raises(ForbiddenException):
            await service.delete_comment(bob, comment)

        updated = await service.update_comment(alice, comment, "Changed")
        assert updated["content"] == "Changed"
        assert await service.delete_comment(alice, comment) is True


class TestPlaylistService:
    """Playlist management"""

    @pytest.fixture
    def service(self, store):
        return PlaylistService(store)

    @pytest.mark.asyncio
    async def test_create_and_duplicate_name(self, service, seed):
        alice = await seed.user("alice")

        playlist = await service.create_playlist(alice, "Road trip", "Songs")
        assert playlist["name"] == "Road trip"
        assert playlist["videos"] == []

        with pytest.raises(ConflictException):
            await service.create_playlist(alice, "Road trip", "Again")

    @pytest.mark.asyncio
    async def test_same_name_allowed_for_other_owner(self, service, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        await service.create_playlist(alice, "Mix", "A")

        playlist = await service.create_playlist(bob, "Mix", "B")

        assert playlist["owner"] == bob

    @pytest.mark.asyncio
    async def test_adding_twice_keeps_one_member(self, service, seed):
        alice = await seed.user("alice")
        video = await seed.video(alice)
        playlist = await seed.playlist(alice)

        await service.add_video_to_playlist(alice, playlist, video)
        updated = await service.add_video_to_playlist(alice, playlist, video)

        assert updated["videos"] == [video]

    @pytest.mark.asyncio
    async def test_remove_member(self, service, seed):
        alice = await seed.user("alice")
        first = await seed.video(alice)
        second = await seed.video(alice)
        playlist = await seed.playlist(alice, videos=[first, second])

        updated = await service.remove_video_from_playlist(alice, playlist, first)

        assert updated["videos"] == [second]

    @pytest.mark.asyncio
    async def test_adding_missing_video(self, service, seed):
        alice = await seed.user("alice")
        playlist = await seed.playlist(alice)

        with pytest.raises(NotFoundException):
            await service.add_video_to_playlist(alice, playlist, str(ObjectId()))

    @pytest.mark.asyncio
    async def test_stranger_cannot_modify(self, service, seed):
        alice = await seed.user("alice")
        bob = await seed.user("bob")
        video = await seed.video(bob)
        playlist = await seed.playlist(alice)

        with pytest.raises(ForbiddenException):
            await service.add_video_to_playlist(bob, playlist, video)
        with pytest.raises(ForbiddenException):
            await service.delete_playlist(bob, playlist)

    @pytest.mark.asyncio
    async def test_rename_to_taken_name(self, service, seed):
        alice = await seed.user("alice")
        await seed.playlist(alice, name="Taken")
        other = await seed.playlist(alice, name="Other")

        with pytest.raises(ConflictException):
            await service.update_playlist(alice, other, name="Taken")

    @pytest.mark.asyncio
    async def test_blank_rename_rejected(self, service, store, seed):
        alice = await seed.user("alice")
        playlist = await seed.playlist(alice, name="Keep")

        with pytest.raises(BadRequestException):
            await service.update_playlist(alice, playlist, name="")
        with pytest.raises(BadRequestException):
            await service.update_playlist(alice, playlist, description="   ")

        assert (await store.get_playlist(playlist))["name"] == "Keep"
