"""構造化(JSON)ログの設定。

ライブラリ本体は`logging.getLogger(__name__)`に出力するだけで、ハンドラの
設定はアプリケーション側が`setup_logging()`を呼んだ場合にのみ行われます。
"""

import logging
import sys
from datetime import datetime, timezone

import orjson

_EXTRA_FIELDS = ("completion_id", "field_path", "error_kind")


class JSONFormatter(logging.Formatter):
    """1レコードを1行のJSONに整形する。"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return orjson.dumps(log_data, default=str).decode()


def setup_logging(log_level: str = "WARNING") -> None:
    """ルートロガーにJSON形式の標準出力ハンドラを設定する。"""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
