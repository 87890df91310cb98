# repositories/workspace_repo.py
from typing import List, Optional, Tuple

from sqlalchemy import func, select

from models.dataset import Dataset
from models.tool import Tool
from models.workspace import Workspace
from repositories.base import BaseRepository

class WorkspaceRepository(BaseRepository):
    def get_by_public_id(self, workspace_id: str) -> Optional[Workspace]:
        return self.db.query(Workspace).filter(Workspace.workspace_id == workspace_id).first()

    def get_all_by_user(self, user_id: int) -> List[Tuple[Workspace, int, int]]:
        """Workspaces owned by the user with their dataset and tool counts, newest first"""
        dataset_count = (
            select(func.count(Dataset.id))
            .where(Dataset.workspace_id == Workspace.id)
            .correlate(Workspace)
            .scalar_subquery()
        )
        tool_count = (
            select(func.count(Tool.id))
            .where(Tool.workspace_id == Workspace.id)
            .correlate(Workspace)
            .scalar_subquery()
        )
        return (
            self.db.query(Workspace, dataset_count, tool_count)
            .filter(Workspace.user_id == user_id)
            .order_by(Workspace.created_at.desc(), Workspace.id.desc())
            .all()
        )

    def create(self, workspace_name: str, user_id: int) -> Workspace:
        workspace = Workspace(workspace_name=workspace_name, user_id=user_id)
        self.db.add(workspace)
        self._commit(workspace)
        return workspace

    def rename(self, workspace: Workspace, workspace_name: str) -> Workspace:
        workspace.workspace_name = workspace_name
        self._commit(workspace)
        return workspace

    def delete(self, workspace: Workspace) -> None:
        self.db.delete(workspace)
        self._commit()
