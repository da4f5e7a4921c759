# === FILE: a11y_scout/logger.py ===
"""Логирование A11yScout.

* Один именованный логгер проекта :data:`logger`::

      from a11y_scout.logger import logger
      logger.info("Аудит: %s", url)

* :func:`init_logging` — настройка из CLI (уровень, формат, общий лог-файл).
* :func:`run_log` — на время запуска дублирует записи в ``audit.log``
  внутри каталога запуска, чтобы у каждого отчёта был свой журнал.
"""
from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Iterator, Union

LOGGER_NAME: Final[str] = "A11yScout"
RUN_LOG_NAME: Final[str] = "audit.log"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(message)s"

_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def _rotating(file: Union[str, Path], fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(str(file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Заменяет обработчики логгера: stdout и, при указании, общий ротируемый файл."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console)
    if log_file is not None:
        logger.addHandler(_rotating(log_file, log_format))

    logger.setLevel(level)
    logger.propagate = False
    return logger


@contextmanager
def run_log(run_dir: Union[str, Path], log_format: str = DEFAULT_FORMAT) -> Iterator[Path]:
    """Пишет журнал запуска в ``<run_dir>/audit.log``; обработчик снимается на выходе."""
    path = Path(run_dir) / RUN_LOG_NAME
    handler = _rotating(path, log_format)
    logger.addHandler(handler)
    try:
        yield path
    finally:
        logger.removeHandler(handler)
        handler.close()


init_logging()

__all__ = ["logger", "init_logging", "run_log", "LOGGER_NAME", "RUN_LOG_NAME"]
