"""デコード失敗を表す例外。

いずれも`DecodeError`の派生で、失敗したフィールドのパス(例:
`choices[0].message.role`)を保持します。通信エラー(タイムアウトやHTTP
エラー)とは区別して「レスポンスの形が想定外」として扱ってください。
"""

from __future__ import annotations

ROOT_PATH = "$"


class DecodeError(ValueError):
    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class MissingField(DecodeError):
    """必須キーが存在しない。"""

    def __init__(self, path: str):
        super().__init__(path, "required field is missing")


class TypeMismatch(DecodeError):
    """値は存在するが型が異なる。"""

    def __init__(self, path: str, expected_kind: str, actual_kind: str):
        super().__init__(path, f"expected {expected_kind}, got {actual_kind}")
        self.expected_kind = expected_kind
        self.actual_kind = actual_kind


class MalformedContainer(DecodeError):
    """配列/オブジェクトであるべき位置の構造が壊れている。"""

    def __init__(self, path: str):
        super().__init__(path, "malformed array or object")
