# File: a11y_scout/errors.py
"""a11y_scout.errors: Иерархия ошибок A11yScout."""

from __future__ import annotations

from pathlib import Path
from typing import Union

__all__ = (
    "A11yScoutError",
    "FetchError",
    "ParseError",
    "AuditError",
    "EmptyResultError",
    "BrowserError",
    "StructuralWarning",
)


class A11yScoutError(Exception):
    """Базовый класс для всех ошибок проекта."""


class FetchError(A11yScoutError):
    """Не удалось загрузить sitemap (сетевая ошибка или статус не 2xx)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ParseError(A11yScoutError):
    """Некорректный XML sitemap или JSON-результат страницы."""

    def __init__(self, source: Union[str, Path], reason: str) -> None:
        super().__init__(f"Failed to parse {source}: {reason}")
        self.source = str(source)
        self.reason = reason


class AuditError(A11yScoutError):
    """Аудит конкретного URL завершился ошибкой."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Audit failed for {url}: {reason}")
        self.url = url
        self.reason = reason


class BrowserError(A11yScoutError):
    """Не удалось запустить браузер для аудита (нет Chromium, ошибка Playwright)."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Browser failed to start: {reason}")
        self.reason = reason


class EmptyResultError(A11yScoutError):
    """В каталоге запуска нет ни одного результата для агрегации."""

    def __init__(self, run_dir: Union[str, Path]) -> None:
        super().__init__(f"No page results to report in {run_dir}")
        self.run_dir = str(run_dir)


class StructuralWarning(UserWarning):
    """Результат аудита не содержит ожидаемой категории accessibility/score.

    Никогда не выбрасывается: сохраняется рядом с PageRecord как диагностика.
    """

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
