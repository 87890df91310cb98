import json
from unittest.mock import MagicMock, patch

import requests

from models.tool import Tool

def tools_url(workspace):
    return f"/workspaces/{workspace.workspace_id}/tools"

def upstream_response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.text = text
    if payload is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response

# ---------- CRUD ----------

def test_create_tool_with_schema_object(client, user_headers, test_workspace):
    schema = {"type": "object", "properties": {"order_id": {"type": "string"}}}
    res = client.post(
        tools_url(test_workspace),
        json={"tool_name": "lookup_order", "description": "Find an order", "parameters": schema},
        headers=user_headers
    )
    assert res.status_code == 201
    data = res.json()
    assert data["tool_name"] == "lookup_order"
    assert json.loads(data["parameters"]) == schema
    assert data["usage_count"] == 0

def test_create_tool_keeps_parameter_string(client, user_headers, test_workspace):
    res = client.post(
        tools_url(test_workspace),
        json={"tool_name": "raw", "parameters": '{"type":"object"}'},
        headers=user_headers
    )
    assert res.status_code == 201
    assert res.json()["parameters"] == '{"type":"object"}'

def test_create_tool_from_structured_parameters(client, user_headers, test_workspace):
    res = client.post(
        tools_url(test_workspace),
        json={
            "tool_name": "set_unit",
            "structured_parameters": [
                {"name": "unit", "type": "string", "description": "Unit", "is_required": True, "enum_values": "c, f,"},
                {"name": "precise", "type": "boolean"},
                {"name": "  ", "type": "number"}
            ]
        },
        headers=user_headers
    )
    assert res.status_code == 201
    assert json.loads(res.json()["parameters"]) == {
        "type": "object",
        "properties": {
            "unit": {"type": "string", "description": "Unit", "enum": ["c", "f"]},
            "precise": {"type": "boolean"}
        },
        "required": ["unit"]
    }

def test_create_tool_requires_name(client, user_headers, test_workspace):
    res = client.post(tools_url(test_workspace), json={"tool_name": ""}, headers=user_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Tool name is required."

def test_create_tool_rejects_bad_url(client, user_headers, test_workspace):
    res = client.post(
        tools_url(test_workspace),
        json={"tool_name": "broken", "api_url": "not a url"},
        headers=user_headers
    )
    assert res.status_code == 400

def test_list_tools_newest_first(client, user_headers, test_workspace, weather_tool, db):
    db.add(Tool(workspace_id=test_workspace.id, tool_name="newer_tool"))
    db.commit()

    res = client.get(tools_url(test_workspace), headers=user_headers)
    assert res.status_code == 200
    assert [t["tool_name"] for t in res.json()] == ["newer_tool", "get_weather"]

def test_update_tool(client, user_headers, weather_tool):
    res = client.put(
        f"/tools/{weather_tool.id}",
        json={"tool_name": " get_forecast ", "description": None, "parameters": None, "api_url": None},
        headers=user_headers
    )
    assert res.status_code == 200
    tool = res.json()["tool"]
    assert tool["tool_name"] == "get_forecast"
    assert tool["description"] is None
    assert tool["api_url"] is None

def test_update_tool_unknown(client, user_headers):
    res = client.put("/tools/424242", json={"tool_name": "x"}, headers=user_headers)
    assert res.status_code == 404
    assert res.json()["error"] == "Tool not found."

def test_update_tool_not_owned(client, other_headers, weather_tool):
    res = client.put(f"/tools/{weather_tool.id}", json={"tool_name": "x"}, headers=other_headers)
    assert res.status_code == 403

def test_delete_tool(client, db, user_headers, weather_tool):
    res = client.delete(f"/tools/{weather_tool.id}", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["tool_name"] == "get_weather"

    db.expire_all()
    assert db.query(Tool).count() == 0

# ---------- Execution ----------

def test_execute_tool_relays_upstream_json(client, db, user_headers, weather_tool):
    with patch("services.tool_executor.requests.post") as mock_post:
        mock_post.return_value = upstream_response(payload={"temperature": 21})
        res = client.post(
            "/tools/execute",
            json={"tool_id": weather_tool.id, "args": {"location": "Hanoi"}},
            headers=user_headers
        )

    assert res.status_code == 200
    assert res.json() == {"temperature": 21}
    args, kwargs = mock_post.call_args
    assert args[0] == "https://tools.example.com/weather"
    assert kwargs["json"] == {"location": "Hanoi"}

    db.expire_all()
    assert db.query(Tool).filter_by(id=weather_tool.id).first().usage_count == 1

def test_execute_tool_upstream_error(client, user_headers, weather_tool):
    with patch("services.tool_executor.requests.post") as mock_post:
        mock_post.return_value = upstream_response(status_code=500, text="boom")
        res = client.post(
            "/tools/execute",
            json={"tool_id": weather_tool.id, "args": {}},
            headers=user_headers
        )

    assert res.status_code == 502
    assert res.json()["error"] == "External API Error: 500 boom"

def test_execute_tool_connection_failure(client, user_headers, weather_tool):
    with patch("services.tool_executor.requests.post") as mock_post:
        mock_post.side_effect = requests.ConnectionError("refused")
        res = client.post(
            "/tools/execute",
            json={"tool_id": weather_tool.id, "args": {"location": "Hue"}},
            headers=user_headers
        )

    assert res.status_code == 502

def test_execute_tool_without_url(client, db, user_headers, test_workspace):
    tool = Tool(workspace_id=test_workspace.id, tool_name="offline")
    db.add(tool)
    db.commit()
    db.refresh(tool)

    res = client.post("/tools/execute", json={"tool_id": tool.id, "args": {}}, headers=user_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Tool does not have an API URL configured."

def test_execute_unknown_tool(client, user_headers):
    res = client.post("/tools/execute", json={"tool_id": 999, "args": {}}, headers=user_headers)
    assert res.status_code == 404

def test_execute_requires_args(client, user_headers, weather_tool):
    res = client.post("/tools/execute", json={"tool_id": weather_tool.id}, headers=user_headers)
    assert res.status_code == 400
