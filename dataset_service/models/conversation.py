# models/conversation.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from utils.db_manager import Base
from utils.validators import Validators
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from enum import Enum
from uuid import uuid4
import json


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class Conversation(Base):
    """
    Legacy conversation record, only counted in dataset summaries
    """
    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, index=True)
    dataset_id = Column(Integer, ForeignKey("datasets.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    dataset = relationship("Dataset", back_populates="conversations")


class TrainingConversation(Base):
    """
    A fine-tuning example: an ordered list of messages inside a dataset
    """
    __tablename__ = "training_conversations"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid4()))
    dataset_id = Column(Integer, ForeignKey("datasets.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255))
    description = Column(Text)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    dataset = relationship("Dataset", back_populates="training_conversations")
    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="[Message.order, Message.id]",
    )


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(Integer, ForeignKey("training_conversations.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # system, user, assistant or tool
    content = Column(Text)
    # Sort key only: gaps and duplicates are allowed
    order = Column(Integer, nullable=False, default=0)
    name = Column(String(255))
    tool_call_id = Column(String(255))
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    conversation = relationship("TrainingConversation", back_populates="messages")
    tool_calls = relationship(
        "ToolCall",
        back_populates="message",
        cascade="all, delete-orphan",
        order_by="ToolCall.id",
    )


class ToolCall(Base):
    __tablename__ = "tool_calls"

    id = Column(Integer, primary_key=True, index=True)
    message_id = Column(Integer, ForeignKey("messages.id", ondelete="CASCADE"), nullable=False, index=True)
    tool_call_id = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False, default="function")
    function_name = Column(String(255), nullable=False)
    # JSON text, kept exactly as received
    function_arguments = Column(Text, nullable=False, default="{}")
    created_at = Column(DateTime, default=func.now())

    message = relationship("Message", back_populates="tool_calls")


# Conversation schemas
class ToolCallFunction(BaseModel):
    name: str
    arguments: Union[str, Dict[str, Any], List[Any], None] = None

    @field_validator('name', mode="before")
    @classmethod
    def name_required(cls, v):
        return Validators.require_string(v, "Tool call function name is required.")

    def arguments_text(self) -> str:
        """Objects are JSON-encoded, strings are stored untouched."""
        if self.arguments is None:
            return "{}"
        if isinstance(self.arguments, str):
            return self.arguments
        return json.dumps(self.arguments)

class ToolCallInput(BaseModel):
    id: Optional[str] = None
    type: Optional[str] = None
    function: ToolCallFunction

class MessageCreate(BaseModel):
    role: MessageRole
    content: Optional[str] = None
    tool_calls: List[ToolCallInput] = Field(default_factory=list)
    name: Optional[str] = None
    tool_call_id: Optional[str] = None

class MessageUpdate(BaseModel):
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCallInput]] = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    order: Optional[int] = None

class ConversationCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    messages: List[MessageCreate] = Field(default_factory=list)

class ConversationUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator('title', mode="before")
    @classmethod
    def title_not_blank(cls, v):
        if v is None:
            return v
        return Validators.require_string(v, "Title must be a non-empty string.")

class ToolCallResponse(BaseModel):
    id: int
    tool_call_id: str
    type: str
    function_name: str
    function_arguments: str

    class Config:
        from_attributes = True

class MessageResponse(BaseModel):
    id: int
    role: str
    content: Optional[str] = None
    order: int
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    created_at: datetime
    tool_calls: List[ToolCallResponse] = []

    class Config:
        from_attributes = True

class ConversationResponse(BaseModel):
    id: int
    conversation_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
    messages: List[MessageResponse] = []

    class Config:
        from_attributes = True
