# logger.py
"""
로깅 설정 및 logger 객체 반환 함수

    - 모든 모듈 로거는 "recetas" 로거의 자식 (핸들러는 부모 한 곳에만 부착)
    - 터미널 출력만 사용, 기본 레벨은 LOG_LEVEL 환경변수
    - 애플리케이션 기동 시 configure_logging(settings)로 레벨/형식을 다시 적용
"""
import json
import logging
import os
from datetime import datetime
from typing import Optional

ROOT_LOGGER_NAME = "recetas"
TEXT_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"

_NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "sqlalchemy.dialects", "sqlalchemy.orm")


class ColoredFormatter(logging.Formatter):
    """레벨명에 색을 입히는 텍스트 포맷터"""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        # record는 다른 핸들러와 공유되므로 levelname을 복원한다
        plain = record.levelname
        color = self.LEVEL_COLORS.get(plain)
        if color:
            record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


class JSONFormatter(logging.Formatter):
    """한 줄 JSON 포맷터 (log_with_context의 필드를 최상위로 펼침)"""

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        context = getattr(record, "context", None)
        if context:
            entry.update(context)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _env_json_format() -> bool:
    return os.getenv("LOG_JSON_FORMAT", "false").lower() == "true"


def configure_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> logging.Logger:
    """
    "recetas" 부모 로거의 레벨/핸들러 (재)설정
    - 인자를 생략하면 환경변수 값 사용
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    if json_format is None:
        json_format = _env_json_format()

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level, logging.INFO))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if json_format else ColoredFormatter(TEXT_FORMAT))
    root.addHandler(handler)
    return root


def get_logger(name: str = "app") -> logging.Logger:
    """
    모듈별 logger 반환 (recetas.<name>)
    부모 로거가 아직 설정되지 않았으면 환경변수 기준으로 설정
    """
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_with_context(logger: logging.Logger, level: str, message: str, **kwargs):
    """컨텍스트 필드와 함께 로깅 (JSON 형식에서는 필드로, 텍스트 형식에서는 메시지만)"""
    log_method = getattr(logger, level.lower(), logger.info)
    log_method(message, extra={"context": kwargs})
