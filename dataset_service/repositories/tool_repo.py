# repositories/tool_repo.py
from typing import List, Optional

from models.tool import Tool
from repositories.base import BaseRepository

class ToolRepository(BaseRepository):
    def get_by_id(self, tool_id: int) -> Optional[Tool]:
        return self.db.query(Tool).filter(Tool.id == tool_id).first()

    def get_all_by_workspace(self, workspace_id: int) -> List[Tool]:
        return (
            self.db.query(Tool)
            .filter(Tool.workspace_id == workspace_id)
            .order_by(Tool.created_at.desc(), Tool.id.desc())
            .all()
        )

    def create(self, workspace_id: int, tool_name: str, description: Optional[str] = None,
               parameters: Optional[str] = None, api_url: Optional[str] = None) -> Tool:
        tool = Tool(
            workspace_id=workspace_id,
            tool_name=tool_name,
            description=description,
            parameters=parameters,
            api_url=api_url,
        )
        self.db.add(tool)
        self._commit(tool)
        return tool

    def update(self, tool: Tool, **fields) -> Tool:
        for key, value in fields.items():
            setattr(tool, key, value)
        self._commit(tool)
        return tool

    def increment_usage(self, tool: Tool) -> None:
        self.db.query(Tool).filter(Tool.id == tool.id).update(
            {Tool.usage_count: Tool.usage_count + 1},
            synchronize_session=False,
        )
        self._commit()

    def delete(self, tool: Tool) -> None:
        self.db.delete(tool)
        self._commit()
