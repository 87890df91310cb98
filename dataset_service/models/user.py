# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from utils.db_manager import Base
from utils.validators import Validators
from pydantic import BaseModel, field_validator
from datetime import datetime

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False)
    # Not a credential, only the lookup key for the calling client
    ip_address = Column(String(45), nullable=False, index=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    workspaces = relationship("Workspace", back_populates="user", cascade="all, delete-orphan")


# User schemas
class UserRegister(BaseModel):
    username: str

    @field_validator('username', mode="before")
    @classmethod
    def username_required(cls, v):
        return Validators.require_string(v, "Username is required.")

class UserResponse(BaseModel):
    id: int
    username: str
    ip_address: str
    created_at: datetime

    class Config:
        from_attributes = True
