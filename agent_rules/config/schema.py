from typing import Any


CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "default_agents": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
        },
        "agents": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "enabled": {"type": "boolean"},
                    "output_path": {"type": "string", "minLength": 1},
                    "output_path_config": {"type": "string", "minLength": 1},
                },
            },
        },
        "gitignore": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
            },
        },
    },
}


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)
