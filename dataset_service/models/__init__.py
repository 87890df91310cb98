from models.user import User
from models.dataset import Dataset
from models.tool import Tool
from models.workspace import Workspace
from models.conversation import Conversation, TrainingConversation, Message, ToolCall, MessageRole

# Export all models
__all__ = [
    'User',
    'Workspace',
    'Dataset',
    'Conversation',
    'TrainingConversation',
    'Message',
    'ToolCall',
    'MessageRole',
    'Tool'
]
