# models/workspace.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from utils.db_manager import Base
from utils.validators import Validators
from pydantic import BaseModel, field_validator
from typing import List
from datetime import datetime
from uuid import uuid4

from models.dataset import DatasetResponse
from models.tool import ToolResponse

class Workspace(Base):
    __tablename__ = "workspaces"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid4()))
    workspace_name = Column(String(255), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="workspaces")
    datasets = relationship(
        "Dataset",
        back_populates="workspace",
        cascade="all, delete-orphan",
        order_by="desc(Dataset.id)",
    )
    tools = relationship(
        "Tool",
        back_populates="workspace",
        cascade="all, delete-orphan",
        order_by="Tool.id",
    )


# Workspace schemas
class WorkspaceCreate(BaseModel):
    workspace_name: str

    @field_validator('workspace_name', mode="before")
    @classmethod
    def name_required(cls, v):
        return Validators.require_string(
            v, "Workspace name is required and must be a non-empty string."
        )

class WorkspaceUpdate(WorkspaceCreate):
    pass

class WorkspaceResponse(BaseModel):
    id: int
    workspace_id: str
    workspace_name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class WorkspaceSummary(WorkspaceResponse):
    dataset_count: int = 0
    tool_count: int = 0

class WorkspaceDetail(WorkspaceResponse):
    datasets: List[DatasetResponse] = []
    tools: List[ToolResponse] = []
