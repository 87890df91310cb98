# models/dataset.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from utils.db_manager import Base
from utils.validators import Validators
from pydantic import BaseModel, ValidationInfo, field_validator
from typing import Optional
from datetime import datetime
from uuid import uuid4

DEFAULT_PURPOSE = "fine-tune"
DEFAULT_STATUS = "draft"

class Dataset(Base):
    __tablename__ = "datasets"

    id = Column(Integer, primary_key=True, index=True)
    dataset_id = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid4()))
    workspace_id = Column(Integer, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255))
    description = Column(Text)
    purpose = Column(String(50), nullable=False, default=DEFAULT_PURPOSE)
    model = Column(String(100))
    status = Column(String(50), nullable=False, default=DEFAULT_STATUS)
    export_count = Column(Integer, nullable=False, default=0)
    last_export_at = Column(DateTime)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    workspace = relationship("Workspace", back_populates="datasets")
    conversations = relationship(
        "Conversation",
        back_populates="dataset",
        cascade="all, delete-orphan",
    )
    training_conversations = relationship(
        "TrainingConversation",
        back_populates="dataset",
        cascade="all, delete-orphan",
        order_by="[desc(TrainingConversation.created_at), desc(TrainingConversation.id)]",
    )


# Dataset schemas
class DatasetCreate(BaseModel):
    workspace_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    purpose: Optional[str] = None
    model: Optional[str] = None

    @field_validator('workspace_id', mode="before")
    @classmethod
    def workspace_id_required(cls, v):
        return Validators.require_string(
            v, "Workspace ID is required and must be a non-empty string."
        )

    @field_validator('name', 'description', 'purpose', 'model', mode="before")
    @classmethod
    def optional_text(cls, v, info: ValidationInfo):
        return Validators.optional_string(v, f"{info.field_name} must be a string or null.")

class DatasetUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    purpose: Optional[str] = None
    model: Optional[str] = None
    status: Optional[str] = None

    @field_validator('purpose', 'status', mode="before")
    @classmethod
    def not_blank(cls, v, info: ValidationInfo):
        if v is None:
            return v
        return Validators.require_string(v, f"{info.field_name} must be a non-empty string.")

class DatasetResponse(BaseModel):
    id: int
    dataset_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    purpose: str
    model: Optional[str] = None
    status: str
    export_count: int
    last_export_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class DatasetSummary(DatasetResponse):
    total_conversations: int = 0
    legacy_conversations: int = 0
    training_conversations: int = 0

class DeletedDataset(BaseModel):
    id: int
    dataset_id: str
    name: Optional[str] = None
    workspace_id: str
    conversations_deleted: int
