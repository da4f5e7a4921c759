# File: a11y_scout/utils.py
"""a11y_scout.utils: Утилитарные функции для работы с URL, именами файлов и форматированием."""

from __future__ import annotations

import re
from typing import Collection, List, Sequence
from urllib.parse import urlparse, urlsplit

from a11y_scout.logger import logger

__all__: Sequence[str] = (
    "extract_host",
    "url_path",
    "is_sitemap_url",
    "looks_like_sitemap",
    "sanitize_filename",
    "sanitize_anchor",
    "format_percent",
    "remove_duplicates",
)

_RESERVED_CHARS_RE = re.compile(r"[/:?#\[\]@!$&'()*+,;=]")


def extract_host(url: str) -> str:
    """Возвращает authority (netloc) из URL без дополнительных проверок."""
    return urlparse(url).netloc


def url_path(url: str) -> str:
    """Возвращает pathname URL; пустой путь считается корнем ``/``."""
    return urlsplit(url).path or "/"


def is_sitemap_url(url: str) -> bool:
    """Проверяет, что вход CLI указывает на XML-документ (а не на страницу)."""
    return url_path(url).lower().endswith(".xml")


def looks_like_sitemap(loc: str) -> bool:
    """Фильтр записей sitemapindex: путь содержит "sitemap" и оканчивается на ".xml"."""
    path = url_path(loc)
    return "sitemap" in path and path.endswith(".xml")


def sanitize_filename(path: str) -> str:
    """Заменяет зарезервированные символы URL на ``_`` (имя JSON-файла страницы)."""
    return _RESERVED_CHARS_RE.sub("_", path)


def sanitize_anchor(path: str) -> str:
    """Якорь секции отчёта: путь без символов ``/``."""
    return path.replace("/", "") or "index"


def format_percent(score: float) -> str:
    """0.875 -> ``"87.50%"``."""
    return f"{score * 100:.2f}%"


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
