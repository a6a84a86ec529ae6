"""ChatCompletionレスポンスのデコード用スキーマ定義。

OpenAI互換APIが返す`chat.completion`オブジェクトを、不変(frozen)な
Pydanticモデルのツリーとして表現します。属性名はワイヤ上のキー名と
一致させており、各モデルのフィールド宣言がそのままキー対応表になります。
"""

from __future__ import annotations
from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt, StrictStr
from pydantic_core import PydanticCustomError


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class IntValue(_Record):
    """整数として送られてきた値。"""
    kind: Literal["int"] = "int"
    value: StrictInt


class StringValue(_Record):
    """文字列として送られてきた値。"""
    kind: Literal["string"] = "string"
    value: StrictStr


def _tag_int_or_string(value: Any) -> Any:
    """生の整数/文字列をタグ付きの値に包む。それ以外の型は拒否する。"""
    if isinstance(value, (IntValue, StringValue)):
        return value
    # bool is a subclass of int
    if isinstance(value, int) and not isinstance(value, bool):
        return IntValue(value=value)
    if isinstance(value, str):
        return StringValue(value=value)
    raise PydanticCustomError("int_or_string_type", "Input should be a valid integer or string")


# finish_reason has been sent as both an integer and a string upstream
IntOrStringValue = Annotated[Union[IntValue, StringValue], BeforeValidator(_tag_int_or_string)]


class FunctionCall(_Record):
    """モデルが呼び出しを要求した関数。

    `arguments`はモデルが生成したJSONテキストそのもので、妥当なJSONである
    保証はありません。利用側で検証してから使ってください。
    """
    name: StrictStr
    arguments: StrictStr


class ToolCall(_Record):
    """モデルが生成したツール呼び出し。現状`type`は`function`のみ。"""
    id: Optional[StrictStr] = None
    type: Optional[StrictStr] = None
    function: FunctionCall

    @classmethod
    def create(cls, id: str, function: FunctionCall, type: str = "function") -> "ToolCall":
        """プログラムから組み立てる場合のコンストラクタ。`id`は必須。"""
        return cls(id=id, type=type, function=function)


class ChatMessage(_Record):
    """モデルが生成したメッセージ。"""
    content: Optional[StrictStr] = None
    tool_calls: Optional[Tuple[ToolCall, ...]] = None
    function_call: Optional[FunctionCall] = Field(
        default=None,
        deprecated="`function_call` is deprecated and replaced by `tool_calls`",
    )
    role: StrictStr


class ChatChoice(_Record):
    """生成された選択肢の一つ。"""
    finish_reason: IntOrStringValue
    index: StrictInt
    message: ChatMessage


class ChatUsage(_Record):
    """トークン使用量。`total_tokens`と内訳の整合性は検証しない。"""
    completion_tokens: StrictInt
    prompt_tokens: StrictInt
    total_tokens: StrictInt


class ChatCompletionObject(_Record):
    """チャット補完レスポンス(`object`は通常`chat.completion`)。"""
    id: StrictStr
    choices: Tuple[ChatChoice, ...]
    created: StrictInt
    model: StrictStr
    system_fingerprint: Optional[StrictStr] = None
    object: StrictStr
    usage: ChatUsage
