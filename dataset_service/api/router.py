from fastapi import APIRouter
from .user_routes import router as user_router
from .workspace_routes import router as workspace_router
from .dataset_routes import router as dataset_router
from .conversation_routes import router as conversation_router
from .message_routes import router as message_router
from .tool_routes import router as tool_router, workspace_tools_router
router = APIRouter()

# Register sub-routers
router.include_router(user_router, prefix="/users", tags=["Users"])
router.include_router(workspace_router, prefix="/workspaces", tags=["Workspaces"])
router.include_router(workspace_tools_router, prefix="/workspaces", tags=["Tools"])
router.include_router(dataset_router, prefix="/datasets", tags=["Datasets"])
router.include_router(conversation_router, prefix="/datasets", tags=["Conversations"])
router.include_router(message_router, prefix="/messages", tags=["Messages"])
router.include_router(tool_router, prefix="/tools", tags=["Tools"])
