"""
Настройка логирования:
- пишем в файл logs/shop_admin.log с ротацией;
- если нет прав на запись, остаёмся только с выводом в консоль
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from shop_admin.core.config import Config


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str | None = None,
    logs_dir: str | None = None,
) -> list[logging.Handler]:
    """
    Настройка root logger

    Args:
        level: Уровень логирования (по умолчанию Config.LOG_LEVEL)
        logs_dir: Директория логов (по умолчанию Config.LOGS_DIR)

    Returns:
        Список установленных обработчиков
    """
    log_formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)

    handlers: list[logging.Handler] = [console_handler]

    log_file_path = Path(logs_dir or Config.LOGS_DIR) / "shop_admin.log"
    try:
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_file_path),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(log_formatter)
        handlers.insert(0, file_handler)
    except (PermissionError, OSError) as e:
        sys.stderr.write(f"[logging] WARNING: cannot use file logging at {log_file_path}: {e}\n")

    log_level = getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(level=log_level, handlers=handlers)

    logging.getLogger("shop_admin").setLevel(log_level)
    # SQL и драйвер БД слишком шумные
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    if log_level == logging.DEBUG:
        logging.getLogger(__name__).info("DEBUG режим включен (LOG_LEVEL=DEBUG)")

    return handlers
