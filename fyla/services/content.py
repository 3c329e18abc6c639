"""Content feed service: posts, likes and comments."""
import itertools
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from fyla.feature_flags import FeatureFlag
from fyla.models.content import (
    Comment,
    ContentId,
    CreateCommentRequest,
    CreatePostRequest,
    FeedResponse,
    LikeToggleResponse,
    Post,
)
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade


class ContentDataSource(ABC):

    @abstractmethod
    async def get_feed(self, page: int, page_size: int, token: Optional[str]) -> FeedResponse: ...

    @abstractmethod
    async def get_post(self, post_id: ContentId, token: Optional[str]) -> Post: ...

    @abstractmethod
    async def create_post(self, token: str, request: CreatePostRequest) -> Post: ...

    @abstractmethod
    async def update_post(self, token: str, post_id: ContentId, request: CreatePostRequest) -> Post: ...

    @abstractmethod
    async def delete_post(self, token: str, post_id: ContentId) -> None: ...

    @abstractmethod
    async def get_provider_content(self, provider_id: int, page: int, page_size: int,
                                   token: Optional[str]) -> FeedResponse: ...

    @abstractmethod
    async def toggle_like(self, token: str, post_id: ContentId) -> LikeToggleResponse: ...

    @abstractmethod
    async def get_likes_count(self, post_id: ContentId) -> int: ...

    @abstractmethod
    async def get_comments(self, post_id: ContentId, page: int, page_size: int) -> List[Comment]: ...

    @abstractmethod
    async def add_comment(self, token: str, post_id: ContentId, request: CreateCommentRequest) -> Comment: ...

    @abstractmethod
    async def update_comment(self, token: str, comment_id: ContentId, request: CreateCommentRequest) -> Comment: ...

    @abstractmethod
    async def delete_comment(self, token: str, comment_id: ContentId) -> None: ...


class RemoteContentDataSource(RemoteDataSource, ContentDataSource):
    default_error_message = "Content operation failed"

    async def get_feed(self, page, page_size, token):
        data = await self._request("GET", "/content/feed", params={"page": page, "pageSize": page_size}, token=token)
        return self._parse(FeedResponse, data)

    async def get_post(self, post_id, token):
        data = await self._request("GET", f"/content/{post_id}", token=token)
        return self._parse(Post, data)

    async def create_post(self, token, request):
        data = await self._request("POST", "/content", body=request.to_api(), token=token)
        return self._parse(Post, data)

    async def update_post(self, token, post_id, request):
        data = await self._request("PUT", f"/content/{post_id}", body=request.to_api(), token=token)
        return self._parse(Post, data)

    async def delete_post(self, token, post_id):
        await self._request("DELETE", f"/content/{post_id}", token=token)

    async def get_provider_content(self, provider_id, page, page_size, token):
        data = await self._request(
            "GET",
            f"/content/provider/{provider_id}",
            params={"page": page, "pageSize": page_size},
            token=token,
        )
        return self._parse(FeedResponse, data)

    async def toggle_like(self, token, post_id):
        data = await self._request("POST", f"/content/{post_id}/like", body={}, token=token)
        result = self._parse(LikeToggleResponse, data)
        # The like endpoint only reports isLiked on some backend versions
        if result.likes_count is None:
            result.likes_count = await self.get_likes_count(post_id)
        return result

    async def get_likes_count(self, post_id):
        data: Any = await self._request("GET", f"/content/{post_id}/likes/count")
        if isinstance(data, dict):
            data = data.get("likesCount", data.get("count"))
        return self._parse(int, data)

    async def get_comments(self, post_id, page, page_size):
        data = await self._request(
            "GET", f"/content/{post_id}/comments", params={"page": page, "pageSize": page_size},
        )
        return self._parse(List[Comment], data)

    async def add_comment(self, token, post_id, request):
        data = await self._request("POST", f"/content/{post_id}/comments", body=request.to_api(), token=token)
        return self._parse(Comment, data)

    async def update_comment(self, token, comment_id, request):
        data = await self._request("PUT", f"/content/comments/{comment_id}", body=request.to_api(), token=token)
        return self._parse(Comment, data)

    async def delete_comment(self, token, comment_id):
        await self._request("DELETE", f"/content/comments/{comment_id}", token=token)


class MockContentDataSource(MockDataSource, ContentDataSource):
    """In-memory content. Likes and created posts persist for the life of the instance."""

    def __init__(self, generator, delay):
        super().__init__(generator, delay)
        self._likes: Dict[str, Tuple[bool, int]] = {}
        self._posts: Dict[str, Post] = {}
        self._ids = itertools.count(10_001)

    def _like_state(self, post_id: str) -> Tuple[bool, int]:
        if post_id not in self._likes:
            self._likes[post_id] = (False, self.generator.likes_count())
        return self._likes[post_id]

    def _with_like_state(self, post: Post) -> Post:
        liked, count = self._like_state(post.id)
        return post.model_copy(update={"is_liked_by_current_user": liked, "likes_count": count})

    async def get_feed(self, page, page_size, token):
        await self._simulate()
        feed = self.generator.feed(page, page_size)
        feed.posts = [self._with_like_state(post) for post in feed.posts]
        return feed

    async def get_post(self, post_id, token):
        await self._simulate()
        post = self._posts.get(str(post_id)) or self.generator.post(str(post_id))
        return self._with_like_state(post)

    async def create_post(self, token, request):
        await self._simulate()
        post = self.generator.post(f"post_{next(self._ids)}").model_copy(
            update={"content": request.content, "image_url": request.image_url, "comments_count": 0},
        )
        self._likes[post.id] = (False, 0)
        self._posts[post.id] = post
        return self._with_like_state(post)

    async def update_post(self, token, post_id, request):
        await self._simulate()
        post = self._posts.get(str(post_id)) or self.generator.post(str(post_id))
        post = post.model_copy(update={
            "content": request.content,
            "image_url": request.image_url or post.image_url,
        })
        self._posts[post.id] = post
        return self._with_like_state(post)

    async def delete_post(self, token, post_id):
        await self._simulate()
        self._posts.pop(str(post_id), None)
        self._likes.pop(str(post_id), None)

    async def get_provider_content(self, provider_id, page, page_size, token):
        await self._simulate()
        feed = self.generator.feed(page, page_size, provider_id=provider_id, total_count=12)
        feed.posts = [self._with_like_state(post) for post in feed.posts]
        return feed

    async def toggle_like(self, token, post_id):
        await self._simulate()
        liked, count = self._like_state(str(post_id))
        liked = not liked
        count = count + 1 if liked else max(0, count - 1)
        self._likes[str(post_id)] = (liked, count)
        return LikeToggleResponse(is_liked=liked, likes_count=count)

    async def get_likes_count(self, post_id):
        await self._simulate()
        return self._like_state(str(post_id))[1]

    async def get_comments(self, post_id, page, page_size):
        await self._simulate()
        return self.generator.comments(str(post_id), page, page_size)

    async def add_comment(self, token, post_id, request):
        await self._simulate()
        return self.generator.comment(str(post_id), f"comment_{next(self._ids)}", request.comment)

    async def update_comment(self, token, comment_id, request):
        await self._simulate()
        comment = self.generator.comment(None, str(comment_id), request.comment)
        return comment.model_copy(update={"updated_at": comment.created_at})

    async def delete_comment(self, token, comment_id):
        await self._simulate()


class ContentService(ServiceFacade[ContentDataSource]):
    """Posts, likes and comments."""

    flag = FeatureFlag.USE_REAL_CONTENT_API

    async def get_feed(self, page: int = 1, page_size: int = 10, token: Optional[str] = None) -> FeedResponse:
        self._check_paging(page, page_size)
        return await self._source().get_feed(page, page_size, token)

    async def get_post(self, post_id: ContentId, token: Optional[str] = None) -> Post:
        return await self._source().get_post(post_id, token)

    async def create_post(self, token: str, request: CreatePostRequest) -> Post:
        return await self._source().create_post(token, request)

    async def update_post(self, token: str, post_id: ContentId, request: CreatePostRequest) -> Post:
        return await self._source().update_post(token, post_id, request)

    async def delete_post(self, token: str, post_id: ContentId) -> None:
        await self._source().delete_post(token, post_id)

    async def get_provider_content(self, provider_id: int, page: int = 1, page_size: int = 10,
                                   token: Optional[str] = None) -> FeedResponse:
        self._check_paging(page, page_size)
        return await self._source().get_provider_content(provider_id, page, page_size, token)

    async def toggle_like(self, token: str, post_id: ContentId) -> LikeToggleResponse:
        """
        Like or unlike a post.

        Returns:
            New like state and like count
        """
        return await self._source().toggle_like(token, post_id)

    async def get_likes_count(self, post_id: ContentId) -> int:
        return await self._source().get_likes_count(post_id)

    async def get_comments(self, post_id: ContentId, page: int = 1, page_size: int = 20) -> List[Comment]:
        self._check_paging(page, page_size)
        return await self._source().get_comments(post_id, page, page_size)

    async def add_comment(self, token: str, post_id: ContentId, request: CreateCommentRequest) -> Comment:
        return await self._source().add_comment(token, post_id, request)

    async def update_comment(self, token: str, comment_id: ContentId, request: CreateCommentRequest) -> Comment:
        return await self._source().update_comment(token, comment_id, request)

    async def delete_comment(self, token: str, comment_id: ContentId) -> None:
        await self._source().delete_comment(token, comment_id)
