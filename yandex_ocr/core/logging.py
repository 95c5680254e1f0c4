import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from yandex_ocr.core.config import settings

# 日志目录和文件
LOG_DIR = Path("logs")
LOG_FILE = LOG_DIR / "yandex_ocr.log"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str | None = None):
    """配置全局日志系统：同时输出到控制台和文件"""

    LOG_DIR.mkdir(exist_ok=True)
    log_level = _resolve_level(level or settings.log_level)

    # 格式：时间 | 级别 | 模块名:行号 | 内容
    log_format = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s")

    # 5MB 一个文件，保留 5 个备份
    file_handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(log_format)
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_format)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 清除旧的 handlers (避免重复打印)
    root_logger.handlers = []
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # 强制接管 Uvicorn 的日志
    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logger = logging.getLogger(logger_name)
        logger.handlers = [file_handler, console_handler]
        logger.propagate = False

    # httpx logs every request at INFO, including query strings
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    logging.info("Logging initialized. Logs will be written to: %s", LOG_FILE.absolute())
