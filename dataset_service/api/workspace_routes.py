# api/workspace_routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from utils.db_manager import get_db
from models.user import User
from models.workspace import (
    WorkspaceCreate, WorkspaceUpdate,
    WorkspaceResponse, WorkspaceSummary, WorkspaceDetail
)
from repositories.workspace_repo import WorkspaceRepository
from services.access_service import AccessService
from api.middleware import get_current_user

router = APIRouter()
logger = logging.getLogger("dataset_service.api.workspaces")

@router.post("", response_model=WorkspaceResponse, status_code=status.HTTP_201_CREATED)
def create_workspace(
    workspace_data: WorkspaceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Create a workspace owned by the caller
    """
    workspace_repo = WorkspaceRepository(db)
    return workspace_repo.create(workspace_data.workspace_name, current_user.id)

@router.get("", response_model=List[WorkspaceSummary])
def get_workspaces(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List the caller's workspaces with dataset and tool counts
    """
    workspace_repo = WorkspaceRepository(db)
    return [
        WorkspaceSummary(
            **WorkspaceResponse.model_validate(workspace).model_dump(),
            dataset_count=dataset_count,
            tool_count=tool_count
        )
        for workspace, dataset_count, tool_count in workspace_repo.get_all_by_user(current_user.id)
    ]

@router.get("/{workspace_id}", response_model=WorkspaceDetail)
def get_workspace(
    workspace_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get a workspace with its datasets and tools
    """
    return AccessService(db, current_user).workspace(workspace_id)

@router.put("/{workspace_id}", response_model=WorkspaceResponse)
def rename_workspace(
    workspace_id: str,
    workspace_data: WorkspaceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Rename a workspace
    """
    workspace = AccessService(db, current_user).workspace(workspace_id)
    return WorkspaceRepository(db).rename(workspace, workspace_data.workspace_name)

@router.delete("/{workspace_id}")
def delete_workspace(
    workspace_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Delete a workspace together with its datasets and tools
    """
    workspace = AccessService(db, current_user).workspace(workspace_id)
    WorkspaceRepository(db).delete(workspace)
    logger.info(f"User {current_user.id} deleted workspace {workspace_id}")

    return {
        "success": True,
        "message": f"Workspace with ID '{workspace_id}' deleted successfully."
    }
