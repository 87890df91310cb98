# api/conversation_routes.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from utils.db_manager import get_db
from models.user import User
from models.conversation import (
    ConversationCreate, ConversationUpdate, ConversationResponse,
    MessageCreate, MessageResponse
)
from repositories.conversation_repo import ConversationRepository, MessageRepository
from services.access_service import AccessService
from api.middleware import get_current_user

router = APIRouter()

# Training conversations
@router.get("/{dataset_id}/conversations", response_model=List[ConversationResponse])
def get_conversations(
    dataset_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List training conversations of a dataset, newest first, with ordered messages
    """
    dataset = AccessService(db, current_user).dataset(dataset_id)
    return ConversationRepository(db).get_all_by_dataset(dataset.id)

@router.post("/{dataset_id}/conversations", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
def create_conversation(
    dataset_id: str,
    conversation_data: ConversationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Create a training conversation; initial messages are numbered from 0
    """
    dataset = AccessService(db, current_user).dataset(dataset_id)
    return ConversationRepository(db).create(
        dataset_id=dataset.id,
        title=conversation_data.title,
        description=conversation_data.description,
        tags=conversation_data.tags,
        messages=conversation_data.messages
    )

@router.get("/{dataset_id}/conversations/{conversation_id}", response_model=ConversationResponse)
def get_conversation(
    dataset_id: str,
    conversation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return AccessService(db, current_user).conversation(dataset_id, conversation_id)

@router.put("/{dataset_id}/conversations/{conversation_id}", response_model=ConversationResponse)
def update_conversation(
    dataset_id: str,
    conversation_id: str,
    conversation_data: ConversationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Update title, description or tags
    """
    conversation = AccessService(db, current_user).conversation(dataset_id, conversation_id)
    update_data = {
        k: v for k, v in conversation_data.model_dump(exclude_unset=True).items()
        if not (k == "tags" and v is None)
    }
    return ConversationRepository(db).update(conversation, **update_data)

@router.delete("/{dataset_id}/conversations/{conversation_id}")
def delete_conversation(
    dataset_id: str,
    conversation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    conversation = AccessService(db, current_user).conversation(dataset_id, conversation_id)
    ConversationRepository(db).delete(conversation)
    return {"success": True, "conversation_id": conversation_id}

# Messages
@router.get("/{dataset_id}/conversations/{conversation_id}/messages", response_model=List[MessageResponse])
def get_messages(
    dataset_id: str,
    conversation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Messages of a conversation sorted by their order field
    """
    conversation = AccessService(db, current_user).conversation(dataset_id, conversation_id)
    return MessageRepository(db).get_all_by_conversation(conversation.id)

@router.post(
    "/{dataset_id}/conversations/{conversation_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED
)
def add_message(
    dataset_id: str,
    conversation_id: str,
    message_data: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Append a message; its order is one past the current highest
    """
    conversation = AccessService(db, current_user).conversation(dataset_id, conversation_id)
    return MessageRepository(db).create(conversation.id, message_data)
