# models/tool.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from utils.db_manager import Base
from utils.validators import Validators
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Literal, Optional, Union
from datetime import datetime

class Tool(Base):
    __tablename__ = "tools"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    tool_name = Column(String(255), nullable=False)
    description = Column(Text)
    # JSON Schema as text; never validated on write
    parameters = Column(Text)
    api_url = Column(String(2048))
    usage_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    workspace = relationship("Workspace", back_populates="tools")


# Tool schemas
class ParameterDefinition(BaseModel):
    name: str
    type: Literal["string", "number", "integer", "boolean", "array", "object"] = "string"
    description: Optional[str] = None
    is_required: bool = False
    enum_values: Optional[str] = None

class ToolBase(BaseModel):
    tool_name: str
    description: Optional[str] = None
    parameters: Union[str, Dict[str, Any], None] = None
    api_url: Optional[str] = None

    @field_validator('tool_name', mode="before")
    @classmethod
    def name_required(cls, v):
        return Validators.require_string(v, "Tool name is required.")

    @field_validator('description', mode="before")
    @classmethod
    def description_text(cls, v):
        return Validators.optional_string(v, "Description must be a string or null.")

    @field_validator('api_url', mode="before")
    @classmethod
    def api_url_format(cls, v):
        v = Validators.optional_string(v, "API URL must be a string or null.")
        is_valid, message = Validators.validate_url(v)
        if not is_valid:
            raise ValueError(message)
        return v

class ToolCreate(ToolBase):
    structured_parameters: List[ParameterDefinition] = Field(default_factory=list)

class ToolUpdate(ToolBase):
    pass

class ToolResponse(BaseModel):
    id: int
    tool_name: str
    description: Optional[str] = None
    parameters: Optional[str] = None
    api_url: Optional[str] = None
    usage_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ToolExecuteRequest(BaseModel):
    tool_id: int
    args: Dict[str, Any]
