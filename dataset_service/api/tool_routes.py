# api/tool_routes.py
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from utils.db_manager import get_db
from utils.parameter_schema import build_parameters_schema, parameters_to_text
from models.user import User
from models.tool import ToolCreate, ToolUpdate, ToolResponse, ToolExecuteRequest
from repositories.tool_repo import ToolRepository
from services.access_service import AccessService
from services.tool_executor import ToolExecutor, ToolExecutionError, get_tool_executor
from api.middleware import get_current_user

# Mounted under /tools
router = APIRouter()
# Mounted under /workspaces
workspace_tools_router = APIRouter()

logger = logging.getLogger("dataset_service.api.tools")

@workspace_tools_router.get("/{workspace_id}/tools", response_model=List[ToolResponse])
def get_tools(
    workspace_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List the tools of a workspace, newest first
    """
    workspace = AccessService(db, current_user).workspace(workspace_id)
    return ToolRepository(db).get_all_by_workspace(workspace.id)

@workspace_tools_router.post("/{workspace_id}/tools", response_model=ToolResponse, status_code=status.HTTP_201_CREATED)
def create_tool(
    workspace_id: str,
    tool_data: ToolCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Create a tool. Parameters come either as a JSON Schema (object or string)
    or as parameter-builder rows that are turned into one.
    """
    workspace = AccessService(db, current_user).workspace(workspace_id)

    parameters = tool_data.parameters
    if parameters is None and tool_data.structured_parameters:
        parameters = build_parameters_schema(tool_data.structured_parameters)

    return ToolRepository(db).create(
        workspace_id=workspace.id,
        tool_name=tool_data.tool_name,
        description=tool_data.description,
        parameters=parameters_to_text(parameters),
        api_url=tool_data.api_url
    )

@router.post("/execute")
def execute_tool(
    request_data: ToolExecuteRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    executor: ToolExecutor = Depends(get_tool_executor)
) -> Any:
    """
    Call the tool's API URL with the given args and relay its JSON reply
    """
    tool = AccessService(db, current_user).tool(request_data.tool_id)

    if not tool.api_url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tool does not have an API URL configured."
        )

    try:
        result = executor.execute(tool, request_data.args)
    except ToolExecutionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    ToolRepository(db).increment_usage(tool)
    return result

@router.put("/{tool_id}")
def update_tool(
    tool_id: int,
    tool_data: ToolUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Replace a tool's name, description, parameters and API URL
    """
    tool = AccessService(db, current_user).tool(tool_id)

    updated_tool = ToolRepository(db).update(
        tool,
        tool_name=tool_data.tool_name,
        description=tool_data.description,
        parameters=parameters_to_text(tool_data.parameters),
        api_url=tool_data.api_url
    )

    return {"success": True, "tool": ToolResponse.model_validate(updated_tool)}

@router.delete("/{tool_id}", response_model=ToolResponse)
def delete_tool(
    tool_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    tool = AccessService(db, current_user).tool(tool_id)
    deleted = ToolResponse.model_validate(tool)
    ToolRepository(db).delete(tool)
    logger.info(f"User {current_user.id} deleted tool {tool_id}")
    return deleted
