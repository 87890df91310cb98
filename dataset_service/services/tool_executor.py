import logging
from typing import Any, Optional

import requests

from config import settings
from models.tool import Tool

logger = logging.getLogger("dataset_service.tool_executor")


class ToolExecutionError(Exception):
    """The tool endpoint could not be reached or answered badly"""

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class ToolExecutor:
    def __init__(self, timeout: float = settings.TOOL_EXECUTION_TIMEOUT):
        self.timeout = timeout

    def execute(self, tool: Tool, args: Any) -> Any:
        """
        POST `args` as JSON to the tool's API URL and return the decoded JSON reply
        """
        try:
            response = requests.post(
                tool.api_url,
                json=args,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Tool {tool.id} request to {tool.api_url} failed: {e}")
            raise ToolExecutionError(f"External API request failed: {e}") from e

        if not response.ok:
            logger.warning(f"Tool {tool.id} upstream returned {response.status_code}")
            raise ToolExecutionError(
                f"External API Error: {response.status_code} {response.text}",
                upstream_status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ToolExecutionError(
                "External API returned a non-JSON response.",
                upstream_status=response.status_code,
            ) from e


# Dependency
def get_tool_executor() -> ToolExecutor:
    return ToolExecutor()
