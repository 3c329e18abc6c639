"""Chat DTOs.

The backend stores conversations between user1/user2 and messages with a
createdAt timestamp. The client shape names the participants client/provider
and calls the timestamp sentAt. BackendConversation and BackendMessage parse
the wire format and convert into the client shape.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from fyla.models.appointments import UserSummary
from fyla.models.base import ApiModel


class MessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    LOCATION = "location"
    APPOINTMENT_REQUEST = "appointment_request"
    APPOINTMENT_CONFIRMATION = "appointment_confirmation"
    APPOINTMENT_CANCELLATION = "appointment_cancellation"
    SYSTEM = "system"


class ChatUser(UserSummary):
    is_online: bool = False


class Message(ApiModel):
    id: int
    conversation_id: int
    sender_id: int
    receiver_id: int
    content: str
    message_type: MessageType = MessageType.TEXT
    is_read: bool = False
    sent_at: datetime
    read_at: Optional[datetime] = None
    sender: Optional[ChatUser] = None
    receiver: Optional[ChatUser] = None


class Conversation(ApiModel):
    id: int
    client_id: int
    provider_id: int
    last_message: Optional[Message] = None
    unread_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None
    client: Optional[ChatUser] = None
    provider: Optional[ChatUser] = None


class CreateMessageRequest(ApiModel):
    conversation_id: Optional[int] = None
    receiver_id: int
    content: str = Field(min_length=1)
    message_type: MessageType = MessageType.TEXT


class ConversationListResponse(ApiModel):
    conversations: List[Conversation] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False


class MessagesResponse(ApiModel):
    messages: List[Message] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False


class BackendMessage(ApiModel):
    id: int
    conversation_id: Optional[int] = None
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool = False
    created_at: datetime
    sender: Optional[ChatUser] = None

    def to_message(self, conversation_id: Optional[int] = None) -> Message:
        return Message(
            id=self.id,
            conversation_id=self.conversation_id if self.conversation_id is not None else conversation_id or 0,
            sender_id=self.sender_id,
            receiver_id=self.receiver_id,
            content=self.content,
            is_read=self.is_read,
            sent_at=self.created_at,
            sender=self.sender,
        )


class BackendConversation(ApiModel):
    id: int
    user1_id: int = Field(alias="user1Id")
    user2_id: int = Field(alias="user2Id")
    user1: Optional[ChatUser] = None
    user2: Optional[ChatUser] = None
    last_message: Optional[BackendMessage] = None
    unread_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_conversation(self) -> Conversation:
        return Conversation(
            id=self.id,
            client_id=self.user1_id,
            provider_id=self.user2_id,
            last_message=self.last_message.to_message(self.id) if self.last_message else None,
            unread_count=self.unread_count,
            created_at=self.created_at,
            updated_at=self.updated_at,
            client=self.user1,
            provider=self.user2,
        )
