"""ms_requester のロガー"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

LIBRARY_NAME = "ms_requester"


def get_logger(name: str) -> Any:
    """ライブラリ内部のイベントログ用ロガーを返す。

    すべてのイベントに library=ms_requester を付与する。structlog の設定は
    初回利用時に解決されるため、import 時に呼び出してよい。
    """
    return structlog.get_logger(name, library=LIBRARY_NAME)


def new_logger(level: str = "INFO", format: str = "json") -> structlog.stdlib.BoundLogger:
    """アプリケーション側でリクエスターのログ出力を設定する。

    token_acquired / token_refreshed / token_invalidated などのイベントを
    標準 logging 経由で JSON（または console 形式）で出力する。

    Args:
        level: ログレベル ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: 出力形式 ("json" or "text")
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    logging.getLogger(LIBRARY_NAME).setLevel(level.upper())

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.stdlib.get_logger(LIBRARY_NAME, library=LIBRARY_NAME)
