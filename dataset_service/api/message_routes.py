# api/message_routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from utils.db_manager import get_db
from models.user import User
from models.conversation import MessageUpdate, MessageResponse
from repositories.conversation_repo import MessageRepository
from services.access_service import AccessService
from api.middleware import get_current_user

router = APIRouter()

@router.put("/{message_id}", response_model=MessageResponse)
def update_message(
    message_id: int,
    message_data: MessageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Edit a message. Sending tool_calls replaces all existing calls.
    """
    message = AccessService(db, current_user).message(message_id)
    update_data = message_data.model_dump(exclude_unset=True, exclude={"tool_calls"})
    if update_data.get("order", 0) is None:
        del update_data["order"]

    return MessageRepository(db).update(
        message,
        tool_calls=message_data.tool_calls,
        **update_data
    )

@router.delete("/{message_id}")
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    message = AccessService(db, current_user).message(message_id)
    MessageRepository(db).delete(message)
    return {"success": True}
