"""Chat service: conversations and messages over REST.

Real-time delivery (the SignalR hub) is not handled here; this module only
covers the request/response endpoints.
"""
import datetime as dt
import itertools
from abc import ABC, abstractmethod
from typing import Dict, List, Set

from fyla.feature_flags import FeatureFlag
from fyla.models.chat import (
    BackendConversation,
    BackendMessage,
    Conversation,
    ConversationListResponse,
    CreateMessageRequest,
    Message,
    MessagesResponse,
)
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade


class ChatDataSource(ABC):

    @abstractmethod
    async def get_conversations(self, token: str, page: int, limit: int) -> ConversationListResponse: ...

    @abstractmethod
    async def get_messages(self, token: str, conversation_id: int, page: int, limit: int) -> MessagesResponse: ...

    @abstractmethod
    async def send_message(self, token: str, request: CreateMessageRequest) -> Message: ...

    @abstractmethod
    async def mark_as_read(self, token: str, conversation_id: int) -> None: ...

    @abstractmethod
    async def create_or_get_conversation(self, token: str, participant_id: int) -> Conversation: ...


class RemoteChatDataSource(RemoteDataSource, ChatDataSource):
    default_error_message = "Chat operation failed"

    async def get_conversations(self, token, page, limit):
        data = await self._request("GET", "/chat/conversations", token=token)
        conversations = [c.to_conversation() for c in self._parse(List[BackendConversation], data or [])]
        # the endpoint returns every conversation; paginate locally
        start = (page - 1) * limit
        return ConversationListResponse(
            conversations=conversations[start:start + limit],
            total=len(conversations),
            has_more=start + limit < len(conversations),
        )

    async def get_messages(self, token, conversation_id, page, limit):
        data = await self._request(
            "GET",
            f"/chat/conversations/{conversation_id}/messages",
            params={"page": page, "pageSize": limit},
            token=token,
        )
        backend = self._parse(List[BackendMessage], data or [])
        messages = [m.to_message(conversation_id) for m in backend]
        messages.reverse()
        return MessagesResponse(messages=messages, total=len(messages), has_more=len(messages) >= limit)

    async def send_message(self, token, request):
        conversation_id = request.conversation_id
        if conversation_id is None:
            conversation = await self.create_or_get_conversation(token, request.receiver_id)
            conversation_id = conversation.id
        data = await self._request(
            "POST",
            "/chat/messages",
            body={"conversationId": conversation_id, "content": request.content},
            token=token,
        )
        return self._parse(BackendMessage, data).to_message(conversation_id)

    async def mark_as_read(self, token, conversation_id):
        await self._request("PUT", f"/chat/conversations/{conversation_id}/read", token=token)

    async def create_or_get_conversation(self, token, participant_id):
        data = await self._request(
            "POST", "/chat/conversations", body={"otherUserId": participant_id}, token=token,
        )
        return self._parse(BackendConversation, data).to_conversation()


class MockChatDataSource(MockDataSource, ChatDataSource):

    CURRENT_USER_ID = 1

    def __init__(self, generator, delay):
        super().__init__(generator, delay)
        self._conversations: Dict[int, Conversation] = {}
        self._read: Set[int] = set()
        self._message_ids = itertools.count(50_001)
        self._conversation_ids = itertools.count(101)

    async def get_conversations(self, token, page, limit):
        await self._simulate()
        response = self.generator.conversations(page, limit)
        for conversation in response.conversations:
            if conversation.id in self._read:
                conversation.unread_count = 0
        return response

    async def get_messages(self, token, conversation_id, page, limit):
        await self._simulate()
        return self.generator.messages(conversation_id, page, limit)

    def _conversation_with(self, participant_id: int) -> Conversation:
        if participant_id not in self._conversations:
            conversation = self.generator.conversation(
                next(self._conversation_ids), self.CURRENT_USER_ID, participant_id,
            )
            self._conversations[participant_id] = conversation.model_copy(
                update={"last_message": None, "unread_count": 0},
            )
        return self._conversations[participant_id]

    async def send_message(self, token, request):
        await self._simulate()
        conversation_id = request.conversation_id
        if conversation_id is None:
            conversation_id = self._conversation_with(request.receiver_id).id
        return Message(
            id=next(self._message_ids),
            conversation_id=conversation_id,
            sender_id=self.CURRENT_USER_ID,
            receiver_id=request.receiver_id,
            content=request.content,
            message_type=request.message_type,
            is_read=False,
            sent_at=dt.datetime.now(dt.timezone.utc),
        )

    async def mark_as_read(self, token, conversation_id):
        await self._simulate()
        self._read.add(conversation_id)

    async def create_or_get_conversation(self, token, participant_id):
        await self._simulate()
        return self._conversation_with(participant_id)


class ChatService(ServiceFacade[ChatDataSource]):
    """Conversations and messages."""

    flag = FeatureFlag.USE_REAL_CHAT_API

    async def get_conversations(self, token: str, page: int = 1, limit: int = 20) -> ConversationListResponse:
        self._check_paging(page, limit)
        return await self._source().get_conversations(token, page, limit)

    async def get_messages(self, token: str, conversation_id: int, page: int = 1,
                           limit: int = 50) -> MessagesResponse:
        """Messages of one conversation, most recent first."""
        self._check_paging(page, limit)
        return await self._source().get_messages(token, conversation_id, page, limit)

    async def send_message(self, token: str, request: CreateMessageRequest) -> Message:
        return await self._source().send_message(token, request)

    async def mark_as_read(self, token: str, conversation_id: int) -> None:
        await self._source().mark_as_read(token, conversation_id)

    async def create_or_get_conversation(self, token: str, participant_id: int) -> Conversation:
        return await self._source().create_or_get_conversation(token, participant_id)
