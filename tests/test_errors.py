from pathlib import Path

from agent_rules.errors import (
    AgentRulesError,
    InvalidAgentError,
    InvalidConfigSchemaError,
    format_error,
)


def test_format_error_without_context() -> None:
    assert format_error("Something broke") == "[agent-rules] Something broke"


def test_format_error_with_context() -> None:
    assert (
        format_error("Something broke", "try again")
        == "[agent-rules] Something broke (Context: try again)"
    )


def test_invalid_agent_error_carries_structured_fields() -> None:
    error = InvalidAgentError("Invalid agent specified", ["x", "y"], ["a", "b"])

    assert isinstance(error, AgentRulesError)
    assert error.invalid_names == ["x", "y"]
    assert error.valid_identifiers == ["a", "b"]
    assert error.message == "Invalid agent specified: x, y"
    assert error.context == "Valid agents are: a, b"


def test_config_errors_include_path() -> None:
    error = InvalidConfigSchemaError(Path("/p/agent-rules.toml"), "bad value")

    assert error.path == Path("/p/agent-rules.toml")
    assert str(error) == (
        "[agent-rules] Invalid config schema (bad value): /p/agent-rules.toml"
    )
