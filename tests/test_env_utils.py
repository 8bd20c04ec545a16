"""
Tests for token lookup and ${VAR} template expansion.
"""
from linear_mcp_client.env_utils import expand_env_mapping, expand_env_template, get_api_token


def test_get_api_token():
    assert get_api_token({"LINEAR_API_TOKEN": "abc"}) == "abc"
    assert get_api_token({"LINEAR_API_TOKEN": ""}) == ""
    assert get_api_token({}) == ""


def test_get_api_token_reads_process_env(monkeypatch):
    monkeypatch.setenv("LINEAR_API_TOKEN", "from-env")
    assert get_api_token() == "from-env"


def test_expand_env_template():
    env = {"LINEAR_API_TOKEN": "abc", "HOST": "example.com"}

    assert expand_env_template("${LINEAR_API_TOKEN}", env) == "abc"
    assert expand_env_template("https://${HOST}/v${MISSING}", env) == "https://example.com/v"
    assert expand_env_template("plain", env) == "plain"
    assert expand_env_template("$HOST", env) == "$HOST"


def test_expand_env_mapping_leaves_input_untouched():
    values = {"LINEAR_API_TOKEN": "${LINEAR_API_TOKEN}"}

    assert expand_env_mapping(values, {}) == {"LINEAR_API_TOKEN": ""}
    assert values == {"LINEAR_API_TOKEN": "${LINEAR_API_TOKEN}"}
