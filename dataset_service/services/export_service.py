"""
Dataset export to the OpenAI chat fine-tuning format.

Every training conversation becomes one record::

    {"messages": [...], "tools": [...], "parallel_tool_calls": false}

`json` renders the list of records indented, `jsonl` renders one compact
record per line.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from models.conversation import Message, MessageRole, TrainingConversation
from models.dataset import Dataset
from models.tool import Tool

logger = logging.getLogger("dataset_service.export_service")

EXPORT_FORMATS = {
    "json": "application/json",
    "jsonl": "application/jsonl",
}
DEFAULT_FORMAT = "json"


class InvalidExportFormat(ValueError):
    pass


@dataclass
class ExportFile:
    body: str
    content_type: str
    filename: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Content-Disposition": f'attachment; filename="{self.filename}"'}


def validate_format(export_format: str) -> str:
    if export_format not in EXPORT_FORMATS:
        raise InvalidExportFormat("Invalid format. Must be 'json' or 'jsonl'.")
    return export_format


def export_filename(dataset_id: str, export_format: str) -> str:
    safe_id = re.sub(r"[^a-z0-9]", "_", dataset_id, flags=re.IGNORECASE).lower()
    return f"dataset_{safe_id}.{export_format}"


def parse_tool_parameters(tool: Tool) -> Any:
    """Stored JSON Schema text, or {} when it is missing or does not parse"""
    if not tool.parameters:
        return {}
    try:
        return json.loads(tool.parameters)
    except ValueError as e:
        logger.warning(f"Failed to parse parameters for tool {tool.id}: {e}")
        return {}


def export_tool(tool: Tool) -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": tool.tool_name,
            "description": tool.description,
            "parameters": parse_tool_parameters(tool),
        },
    }


def export_message(message: Message) -> Dict[str, Any]:
    item: Dict[str, Any] = {"role": message.role, "content": message.content}

    if message.role == MessageRole.ASSISTANT.value and message.tool_calls:
        item["tool_calls"] = [
            {
                "id": tc.tool_call_id,
                "type": "function",
                "function": {
                    "name": tc.function_name,
                    "arguments": tc.function_arguments,
                },
            }
            for tc in message.tool_calls
        ]

    if message.role == MessageRole.TOOL.value:
        item["tool_call_id"] = message.tool_call_id
        item["name"] = message.name

    return item


def export_conversation(conversation: TrainingConversation, tools: List[Dict[str, Any]]) -> Dict[str, Any]:
    messages = sorted(conversation.messages, key=lambda m: (m.order, m.id))
    return {
        "messages": [export_message(m) for m in messages],
        "tools": tools,
        "parallel_tool_calls": False,
    }


def build_records(conversations: Iterable[TrainingConversation], tools: Iterable[Tool]) -> List[Dict[str, Any]]:
    exported_tools = [export_tool(t) for t in tools]
    return [export_conversation(c, exported_tools) for c in conversations]


def render(records: List[Dict[str, Any]], export_format: str) -> str:
    if export_format == "jsonl":
        return "\n".join(
            json.dumps(record, ensure_ascii=False, separators=(",", ":"))
            for record in records
        )
    return json.dumps(records, ensure_ascii=False, indent=2)


def export_dataset(dataset: Dataset, export_format: str) -> ExportFile:
    """Build the download for a dataset loaded with its workspace tools and conversations"""
    records = build_records(dataset.training_conversations, dataset.workspace.tools)
    logger.info(
        f"Exporting dataset {dataset.dataset_id}: {len(records)} conversations as {export_format}"
    )
    return ExportFile(
        body=render(records, export_format),
        content_type=EXPORT_FORMATS[export_format],
        filename=export_filename(dataset.dataset_id, export_format),
    )
