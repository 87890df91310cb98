import json
from typing import Any, Dict, Iterable, Optional


def build_parameters_schema(definitions: Iterable[Any]) -> Optional[Dict[str, Any]]:
    """
    Turn parameter-builder rows into a JSON Schema object.

    Each row needs ``name``, ``type``, ``description``, ``is_required`` and
    ``enum_values`` (comma separated, honoured for strings only). Rows with a
    blank name are skipped. Returns None when no property survives.
    """
    properties: Dict[str, Any] = {}
    required = []

    for definition in definitions:
        name = (definition.name or "").strip()
        if not name:
            continue

        prop: Dict[str, Any] = {"type": definition.type}
        description = (definition.description or "").strip()
        if description:
            prop["description"] = description

        if definition.type == "string" and definition.enum_values:
            values = [v.strip() for v in definition.enum_values.split(",") if v.strip()]
            if values:
                prop["enum"] = values

        properties[name] = prop
        if definition.is_required:
            required.append(name)

    if not properties:
        return None

    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def parameters_to_text(parameters: Any) -> Optional[str]:
    """Objects are JSON-encoded; strings are stored verbatim."""
    if parameters is None:
        return None
    if isinstance(parameters, str):
        return parameters
    return json.dumps(parameters, indent=2)
