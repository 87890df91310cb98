from repositories.user_repo import UserRepository
from repositories.workspace_repo import WorkspaceRepository
from repositories.dataset_repo import DatasetRepository
from repositories.conversation_repo import ConversationRepository, MessageRepository
from repositories.tool_repo import ToolRepository

# Export all repositories
__all__ = [
    'UserRepository',
    'WorkspaceRepository',
    'DatasetRepository',
    'ConversationRepository',
    'MessageRepository',
    'ToolRepository'
]
