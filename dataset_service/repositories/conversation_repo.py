# repositories/conversation_repo.py
import time
from typing import Iterable, List, Optional
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from models.conversation import (
    Message,
    MessageCreate,
    ToolCall,
    ToolCallInput,
    TrainingConversation,
)
from repositories.base import BaseRepository


def build_tool_calls(tool_calls: Iterable[ToolCallInput]) -> List[ToolCall]:
    return [
        ToolCall(
            tool_call_id=tc.id or f"call_{uuid4().hex[:24]}",
            type=tc.type or "function",
            function_name=tc.function.name,
            function_arguments=tc.function.arguments_text(),
        )
        for tc in tool_calls
    ]


def build_message(data: MessageCreate, order: int) -> Message:
    return Message(
        role=data.role.value,
        content=data.content,
        name=data.name,
        tool_call_id=data.tool_call_id,
        order=order,
        tool_calls=build_tool_calls(data.tool_calls),
    )


class ConversationRepository(BaseRepository):
    def get_all_by_dataset(self, dataset_id: int) -> List[TrainingConversation]:
        return (
            self.db.query(TrainingConversation)
            .options(selectinload(TrainingConversation.messages).selectinload(Message.tool_calls))
            .filter(TrainingConversation.dataset_id == dataset_id)
            .order_by(TrainingConversation.created_at.desc(), TrainingConversation.id.desc())
            .all()
        )

    def get_by_public_id(self, conversation_id: str) -> Optional[TrainingConversation]:
        return (
            self.db.query(TrainingConversation)
            .filter(TrainingConversation.conversation_id == conversation_id)
            .first()
        )

    def create(self, dataset_id: int, title: Optional[str] = None, description: Optional[str] = None,
               tags: Optional[List[str]] = None, messages: Iterable[MessageCreate] = ()) -> TrainingConversation:
        conversation = TrainingConversation(
            dataset_id=dataset_id,
            title=title or f"Conversation {int(time.time() * 1000)}",
            description=description,
            tags=list(tags or []),
            messages=[build_message(m, order) for order, m in enumerate(messages)],
        )
        self.db.add(conversation)
        self._commit(conversation)
        return conversation

    def update(self, conversation: TrainingConversation, **fields) -> TrainingConversation:
        for key, value in fields.items():
            setattr(conversation, key, value)
        self._commit(conversation)
        return conversation

    def delete(self, conversation: TrainingConversation) -> None:
        self.db.delete(conversation)
        self._commit()


class MessageRepository(BaseRepository):
    def get_by_id(self, message_id: int) -> Optional[Message]:
        return self.db.query(Message).filter(Message.id == message_id).first()

    def get_all_by_conversation(self, conversation_id: int) -> List[Message]:
        return (
            self.db.query(Message)
            .options(selectinload(Message.tool_calls))
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.order, Message.id)
            .all()
        )

    def next_order(self, conversation_id: int) -> int:
        # Not safe under concurrent writers; two inserts may share an order
        current = self.db.query(func.max(Message.order)).filter(
            Message.conversation_id == conversation_id
        ).scalar()
        return 0 if current is None else current + 1

    def create(self, conversation_id: int, data: MessageCreate) -> Message:
        message = build_message(data, self.next_order(conversation_id))
        message.conversation_id = conversation_id
        self.db.add(message)
        self._commit(message)
        return message

    def update(self, message: Message, tool_calls: Optional[List[ToolCallInput]] = None, **fields) -> Message:
        for key, value in fields.items():
            setattr(message, key, value)
        if tool_calls is not None:
            # delete-orphan cascade drops the previous calls
            message.tool_calls = build_tool_calls(tool_calls)
        self._commit(message)
        return message

    def delete(self, message: Message) -> None:
        self.db.delete(message)
        self._commit()
