"""
tests/helpers.py
Canned service replies shared by the test modules.
"""

import json

import httpx

ACCESS_TOKEN = "3485a96fb27744db83e78b8c4bc9e7b7"
REQUEST_URL = "https://api.api.ai/v1/query?v=20150910"


def ok_body(speech: str = "Hi there!", **extra) -> dict:
    body = {
        "id": "2d2d947b-6ccd-4615-8f16-59b8bfc0fa6b",
        "timestamp": "2016-01-08T12:25:47.521Z",
        "result": {
            "source": "agent",
            "resolvedQuery": "hello",
            "action": "greeting",
            "actionIncomplete": False,
            "parameters": {},
            "contexts": [],
            "metadata": {"intentId": "a6b1b3e0", "intentName": "hello", "webhookUsed": "false"},
            "fulfillment": {"speech": speech},
            "score": 1.0,
        },
        "status": {"code": 200, "errorType": "success"},
    }
    body.update(extra)
    return body


def json_response(body, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))
