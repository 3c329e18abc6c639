"""Tests for the content service facade and its data sources."""
import asyncio
import json
import random
import time

import httpx
import pytest

from fyla.errors import NETWORK_ERROR_MESSAGE, ErrorKind, ServiceError
from fyla.feature_flags import FeatureFlag
from fyla.mock_data import MockDataGenerator, MockDelay
from fyla.models import CreateCommentRequest, CreatePostRequest, FeedResponse, LikeToggleResponse
from fyla.services.content import ContentService, MockContentDataSource, RemoteContentDataSource


@pytest.fixture
def content(make_service):
    def _create(handler=None, delay=None):
        return make_service(ContentService, RemoteContentDataSource, MockContentDataSource, handler, delay)
    return _create


class TestDispatch:
    """Test flag-driven dispatch."""

    @pytest.mark.asyncio
    async def test_real_flag_calls_api(self, content):
        """With the flag on, get_feed should GET /content/feed with paging params."""
        feed_json = {"posts": [], "stories": [], "totalCount": 0, "page": 2, "pageSize": 5, "hasNextPage": False}
        service = content(lambda request: httpx.Response(200, json=feed_json))

        feed = await service.get_feed(page=2, page_size=5, token="tok")

        assert isinstance(feed, FeedResponse)
        request = service.requests[0]
        assert request.url.path == "/api/content/feed"
        assert request.url.params["page"] == "2"
        assert request.url.params["pageSize"] == "5"
        assert request.headers["Authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_mock_flag_never_calls_api(self, content, flags):
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)
        service = content()

        feed = await service.get_feed()

        assert len(feed.posts) == 10
        assert service.requests == []
        assert service.uses_real_api is False

    @pytest.mark.asyncio
    async def test_flag_change_applies_to_next_call_only(self, content, flags):
        """A call already dispatched keeps its source; the next call uses the new one."""
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)
        service = content(lambda request: httpx.Response(200, json={"posts": []}),
                          delay=MockDelay(50))

        pending = asyncio.ensure_future(service.get_feed())
        await asyncio.sleep(0)
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, True)
        await pending
        assert service.requests == []

        await service.get_feed()
        assert len(service.requests) == 1

    @pytest.mark.asyncio
    async def test_mock_path_waits_for_min_delay(self, content, flags):
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)
        service = content(delay=MockDelay(60))

        started = time.perf_counter()
        await service.get_likes_count("post_1")

        assert time.perf_counter() - started >= 0.055


class TestShapeEquivalence:
    """Both sources return the same DTO types."""

    @pytest.mark.asyncio
    async def test_feed_shape(self, content, flags):
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)
        mock_feed = await content().get_feed()

        payload = mock_feed.model_dump(by_alias=True, mode="json")
        service = content(lambda request: httpx.Response(200, json=payload))
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, True)
        real_feed = await service.get_feed()

        assert type(real_feed) is type(mock_feed)
        assert real_feed.model_dump() == mock_feed.model_dump()


class TestErrors:
    """Transport failures surface as ServiceError."""

    @pytest.mark.asyncio
    async def test_server_error_becomes_service_error(self, content):
        service = content(lambda request: httpx.Response(500, json={"message": "Database unavailable"}))

        with pytest.raises(ServiceError) as exc_info:
            await service.get_feed()

        assert exc_info.value.kind == ErrorKind.SERVER
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Database unavailable"

    @pytest.mark.asyncio
    async def test_default_message_when_server_gives_none(self, content):
        service = content(lambda request: httpx.Response(400))

        with pytest.raises(ServiceError) as exc_info:
            await service.create_post("tok", CreatePostRequest(content="hello"))

        assert exc_info.value.message == "Content operation failed"

    @pytest.mark.asyncio
    async def test_not_found(self, content):
        service = content(lambda request: httpx.Response(404, json={"message": "Post not found"}))

        with pytest.raises(ServiceError) as exc_info:
            await service.get_post("post_404")

        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_network_failure(self, content):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        service = content(handler)

        with pytest.raises(ServiceError) as exc_info:
            await service.get_feed()

        assert exc_info.value.kind == ErrorKind.NETWORK
        assert exc_info.value.message == NETWORK_ERROR_MESSAGE
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_malformed_body(self, content):
        service = content(lambda request: httpx.Response(200, json={"posts": "not-a-list"}))

        with pytest.raises(ServiceError) as exc_info:
            await service.get_feed()

        assert exc_info.value.kind == ErrorKind.MALFORMED

    @pytest.mark.asyncio
    async def test_undecodable_body(self, content):
        service = content(lambda request: httpx.Response(
            200, content=b"not gzip at all", headers={"Content-Encoding": "gzip"},
        ))

        with pytest.raises(ServiceError) as exc_info:
            await service.get_feed()

        assert exc_info.value.kind == ErrorKind.MALFORMED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page, page_size", [(0, 10), (1, 0)])
    async def test_invalid_paging_rejected(self, content, page, page_size):
        service = content(lambda request: httpx.Response(200, json={"posts": []}))

        with pytest.raises(ServiceError) as exc_info:
            await service.get_feed(page=page, page_size=page_size)

        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_failed_remote_call_does_not_fall_back_to_mock(self, content):
        service = content(lambda request: httpx.Response(503))

        with pytest.raises(ServiceError):
            await service.get_feed()

        assert len(service.requests) == 1


class TestRemoteContent:

    @pytest.mark.asyncio
    async def test_toggle_like_fills_missing_count(self, content):
        """When the like endpoint omits the count, it is read from /likes/count."""
        def handler(request):
            if request.url.path.endswith("/like"):
                return httpx.Response(200, json={"isLiked": True})
            return httpx.Response(200, json={"likesCount": 13})

        service = content(handler)

        result = await service.toggle_like("tok", 42)

        assert result == LikeToggleResponse(is_liked=True, likes_count=13)
        assert [r.url.path for r in service.requests] == ["/api/content/42/like", "/api/content/42/likes/count"]

    @pytest.mark.asyncio
    async def test_add_comment_posts_camel_case_body(self, content):
        def handler(request):
            body = json.loads(request.content)
            return httpx.Response(201, json={
                "id": 9, "postId": 42, "userId": 3, "comment": body["comment"],
                "createdAt": "2025-03-10T12:00:00Z",
            })

        service = content(handler)

        comment = await service.add_comment("tok", 42, CreateCommentRequest(comment="Love it"))

        assert comment.id == "9"
        assert comment.post_id == "42"
        assert comment.comment == "Love it"
        assert service.requests[0].url.path == "/api/content/42/comments"

    @pytest.mark.asyncio
    async def test_delete_post(self, content):
        service = content(lambda request: httpx.Response(204))

        assert await service.delete_post("tok", "17") is None
        assert service.requests[0].method == "DELETE"


class TestMockContent:
    """Mock content keeps state between calls."""

    @pytest.mark.asyncio
    async def test_toggle_like_twice_with_seeded_rng(self, flags, no_delay):
        """(True, N+1) then (False, N) for a seeded generator."""
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)
        expected_n = MockDataGenerator(random.Random(99)).likes_count()
        source = MockContentDataSource(MockDataGenerator(random.Random(99)), no_delay)
        service = ContentService(flags, remote=None, mock=source)

        first = await service.toggle_like("tok", "post_42")
        second = await service.toggle_like("tok", "post_42")

        assert (first.is_liked, first.likes_count) == (True, expected_n + 1)
        assert (second.is_liked, second.likes_count) == (False, expected_n)

    @pytest.mark.asyncio
    async def test_like_state_visible_in_post(self, content, flags):
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)
        service = content()

        liked = await service.toggle_like("tok", "post_3")
        post = await service.get_post("post_3")

        assert post.is_liked_by_current_user is True
        assert post.likes_count == liked.likes_count

    @pytest.mark.asyncio
    async def test_created_post_is_readable(self, content, flags):
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)
        service = content()

        created = await service.create_post("tok", CreatePostRequest(content="Fresh look"))
        fetched = await service.get_post(created.id)

        assert fetched.content == "Fresh look"
        assert fetched.likes_count == 0

    @pytest.mark.asyncio
    async def test_comments_belong_to_post(self, content, flags):
        flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)
        service = content()

        comments = await service.get_comments("post_8")
        added = await service.add_comment("tok", "post_8", CreateCommentRequest(comment="So good"))

        assert all(c.post_id == "post_8" for c in comments)
        assert added.comment == "So good"
