"""Shared fixtures for decoder tests"""

import pytest


@pytest.fixture
def completion_payload():
    """A minimal, valid chat.completion body"""
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {
                    "role": "assistant",
                    "content": "Hi there"
                }
            }
        ],
        "usage": {
            "prompt_tokens": 5,
            "completion_tokens": 2,
            "total_tokens": 7
        }
    }


@pytest.fixture
def tool_call_payload(completion_payload):
    """Body where the assistant answers with a tool call and no content"""
    completion_payload["choices"][0]["finish_reason"] = "tool_calls"
    completion_payload["choices"][0]["message"] = {
        "role": "assistant",
        "tool_calls": [{
            "id": "call_1",
            "type": "function",
            "function": {
                "name": "get_weather",
                "arguments": "{\"city\":\"Paris\"}"
            }
        }]
    }
    return completion_payload
