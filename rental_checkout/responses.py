"""Serverless response envelopes: ``{statusCode, headers, body}``."""

import json
from typing import Any, TypedDict

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
}
JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


class Response(TypedDict):
    statusCode: int
    headers: dict[str, str]
    body: str


def _headers(content_type: str) -> dict[str, str]:
    return {**CORS_HEADERS, "Content-Type": content_type}


def json_response(status: int, payload: dict[str, Any]) -> Response:
    return {
        "statusCode": status,
        "headers": _headers(JSON_CONTENT_TYPE),
        "body": json.dumps(payload, ensure_ascii=False),
    }


def text_response(status: int, text: str) -> Response:
    return {
        "statusCode": status,
        "headers": _headers(TEXT_CONTENT_TYPE),
        "body": text,
    }


def error_response(status: int, message: str) -> Response:
    return json_response(status, {"error": message})
