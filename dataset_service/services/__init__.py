from services.access_service import AccessService
from services.export_service import export_dataset, ExportFile, InvalidExportFormat
from services.tool_executor import ToolExecutor, ToolExecutionError, get_tool_executor

# Export all services
__all__ = [
    'AccessService',
    'export_dataset',
    'ExportFile',
    'InvalidExportFormat',
    'ToolExecutor',
    'ToolExecutionError',
    'get_tool_executor'
]
