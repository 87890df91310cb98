# services/access_service.py
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from models.conversation import Message, TrainingConversation
from models.dataset import Dataset
from models.tool import Tool
from models.user import User
from models.workspace import Workspace
from repositories.conversation_repo import ConversationRepository, MessageRepository
from repositories.dataset_repo import DatasetRepository
from repositories.tool_repo import ToolRepository
from repositories.workspace_repo import WorkspaceRepository

class AccessService:
    """
    Resolve records by id and check that they sit in a workspace owned by the caller.
    Unknown records raise 404, records in someone else's workspace raise 403.
    """

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    def _check_owner(self, workspace: Workspace, message: str):
        if workspace.user_id != self.user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)

    def workspace(self, workspace_id: str) -> Workspace:
        workspace = WorkspaceRepository(self.db).get_by_public_id(workspace_id)
        if not workspace:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Workspace with ID '{workspace_id}' not found."
            )
        self._check_owner(workspace, "You are not authorized to access this workspace.")
        return workspace

    def dataset(self, dataset_id: str) -> Dataset:
        dataset = DatasetRepository(self.db).get_by_public_id(dataset_id)
        if not dataset:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Dataset with ID '{dataset_id}' not found."
            )
        self._check_owner(dataset.workspace, "You are not authorized to access this dataset.")
        return dataset

    def conversation(self, dataset_id: str, conversation_id: str) -> TrainingConversation:
        dataset = self.dataset(dataset_id)
        conversation = ConversationRepository(self.db).get_by_public_id(conversation_id)
        if not conversation or conversation.dataset_id != dataset.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Conversation with ID '{conversation_id}' not found."
            )
        return conversation

    def message(self, message_id: int) -> Message:
        message = MessageRepository(self.db).get_by_id(message_id)
        if not message:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Message with ID '{message_id}' not found."
            )
        self._check_owner(
            message.conversation.dataset.workspace,
            "You are not authorized to modify this message."
        )
        return message

    def tool(self, tool_id: int) -> Tool:
        tool = ToolRepository(self.db).get_by_id(tool_id)
        if not tool:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Tool not found."
            )
        self._check_owner(tool.workspace, "You are not authorized to access this tool.")
        return tool
