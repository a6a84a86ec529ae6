"""ChatCompletionレスポンスのデコーダ。

生のJSON(bytes/str)またはパース済みのdictを受け取り、
`ChatCompletionObject`のツリーを返すか`DecodeError`を送出します。
デコーダは読み取り専用の設定しか持たないため、スレッド間で共有できます。
"""

from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Union

import orjson
from pydantic import ValidationError

from .config import DecoderSettings, settings as default_settings
from .errors import ROOT_PATH, DecodeError, MalformedContainer, MissingField, TypeMismatch
from .schemas import ChatCompletionObject

logger = logging.getLogger(__name__)

Payload = Union[bytes, bytearray, memoryview, str, Mapping[str, Any]]

_CONTAINER_ERRORS = {
    "model_type",
    "model_attributes_type",
    "dict_type",
    "list_type",
    "tuple_type",
    "iterable_type",
}

_EXPECTED_KINDS = {
    "int_type": "integer",
    "int_parsing": "integer",
    "int_from_float": "integer",
    "string_type": "string",
    "int_or_string_type": "integer or string",
}


def json_kind(value: Any) -> str:
    """Pythonの値をJSON上の型名に対応付ける。"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def format_path(loc: tuple) -> str:
    """pydanticの`loc`を`choices[0].message.role`形式に変換する。"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or ROOT_PATH


def to_decode_error(exc: ValidationError) -> DecodeError:
    """ValidationErrorの最初のエラーを`DecodeError`の各種別に変換する。"""
    first = exc.errors(include_url=False)[0]
    path = format_path(first["loc"])
    error_type = first["type"]
    if error_type == "missing":
        return MissingField(path)
    if error_type in _CONTAINER_ERRORS:
        return MalformedContainer(path)
    expected = _EXPECTED_KINDS.get(error_type, error_type)
    return TypeMismatch(path, expected, json_kind(first.get("input")))


class ChatCompletionDecoder:
    def __init__(self, settings: Optional[DecoderSettings] = None):
        self.settings = settings or default_settings

    def decode(self, payload: Payload) -> ChatCompletionObject:
        """ペイロードを`ChatCompletionObject`にデコードする。

        必須フィールドの欠落や型の不一致があれば、最初に見つかった失敗を
        `DecodeError`として送出し、部分的なオブジェクトは返さない。
        """
        data = self._load(payload)
        try:
            completion = ChatCompletionObject.model_validate(data)
        except ValidationError as e:
            error = to_decode_error(e)
            logger.debug(
                "Chat completion decode failed: %s",
                error,
                extra={"field_path": error.path, "error_kind": type(error).__name__},
            )
            raise error from e

        self._diagnose(completion)
        return completion

    def _load(self, payload: Payload) -> Any:
        if isinstance(payload, (bytes, bytearray, memoryview, str)):
            try:
                return orjson.loads(payload)
            except orjson.JSONDecodeError as e:
                logger.debug("Chat completion body is not valid JSON: %s", e)
                raise MalformedContainer(ROOT_PATH) from e
        return payload

    def _diagnose(self, completion: ChatCompletionObject) -> None:
        extra = {"completion_id": completion.id}
        if self.settings.warn_on_unexpected_object and completion.object != self.settings.expected_object:
            logger.warning(
                "Unexpected object type %r (expected %r)",
                completion.object,
                self.settings.expected_object,
                extra=extra,
            )
        usage = completion.usage
        if self.settings.warn_on_usage_mismatch and usage.total_tokens != usage.prompt_tokens + usage.completion_tokens:
            logger.warning(
                "Token usage does not add up: prompt=%d completion=%d total=%d",
                usage.prompt_tokens,
                usage.completion_tokens,
                usage.total_tokens,
                extra=extra,
            )
        logger.debug(
            "Decoded chat completion (model=%s, choices=%d)",
            completion.model,
            len(completion.choices),
            extra=extra,
        )


_default_decoder = ChatCompletionDecoder()


def decode_chat_completion(payload: Payload) -> ChatCompletionObject:
    """既定の設定でデコードする。"""
    return _default_decoder.decode(payload)
