# File: a11y_scout/storage.py
"""a11y_scout.storage: Каталог запуска (Run) и хранение JSON-результатов по страницам."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from a11y_scout.errors import ParseError
from a11y_scout.logger import logger
from a11y_scout.utils import sanitize_filename, url_path

__all__ = ("RUN_DIR_FORMAT", "SUMMARY_NAME", "REPORT_NAME", "Run", "LoadResult", "result_filename")

RUN_DIR_FORMAT = "%Y-%m-%dT%H-%M-%S"
SUMMARY_NAME = "report.json"
REPORT_NAME = "report.html"


def result_filename(url: str) -> str:
    """Имя JSON-файла страницы: pathname с заменой зарезервированных символов на ``_``."""
    return f"{sanitize_filename(url_path(url))}.json"


@dataclass(slots=True)
class LoadResult:
    """Прочитанные результаты страниц и файлы, которые прочитать не удалось."""

    results: List[Dict[str, Any]] = field(default_factory=list)
    failures: List[ParseError] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Run:
    """Один запуск: каталог с артефактами и время старта, которое его именует."""

    root: Path
    started_at: datetime

    @classmethod
    def create(cls, reports_dir: Union[str, Path], now: Optional[datetime] = None) -> Run:
        started_at = (now or datetime.now()).replace(microsecond=0)
        root = Path(reports_dir) / started_at.strftime(RUN_DIR_FORMAT)
        root.mkdir(parents=True, exist_ok=True)
        logger.info("Каталог запуска: %s", root)
        return cls(root=root, started_at=started_at)

    @classmethod
    def open(cls, directory: Union[str, Path]) -> Run:
        """Открывает существующий каталог запуска; время берётся из имени каталога."""
        root = Path(directory)
        if not root.is_dir():
            raise FileNotFoundError(f"Run directory not found: {root}")
        try:
            started_at = datetime.strptime(root.name, RUN_DIR_FORMAT)
        except ValueError:
            started_at = datetime.fromtimestamp(root.stat().st_mtime).replace(microsecond=0)
            logger.debug("Run directory %s is not timestamp-named, using mtime", root)
        return cls(root=root, started_at=started_at)

    @property
    def report_path(self) -> Path:
        return self.root / REPORT_NAME

    @property
    def summary_path(self) -> Path:
        return self.root / SUMMARY_NAME

    def save_result(self, url: str, raw: Dict[str, Any]) -> Path:
        """Сохраняет сырой результат аудита страницы в отдельный JSON-файл."""
        path = self.root / result_filename(url)
        with path.open("w", encoding="utf-8") as f:
            json.dump(raw, f, ensure_ascii=False, indent=2)
        logger.debug("Saved %s -> %s", url, path)
        return path

    def result_files(self, order: Optional[Iterable[str]] = None) -> List[Path]:
        """JSON-файлы страниц: сначала в порядке *order* (URL), затем остальные по имени."""
        available = sorted(
            p for p in self.root.glob("*.json") if p.is_file() and p.name != SUMMARY_NAME
        )
        if order is None:
            return available
        by_name = {p.name: p for p in available}
        ordered: List[Path] = []
        for url in order:
            path = by_name.pop(result_filename(url), None)
            if path is not None:
                ordered.append(path)
        ordered.extend(p for p in available if p.name in by_name)
        return ordered

    def load_results(self, order: Optional[Iterable[str]] = None) -> LoadResult:
        """Читает все результаты страниц; битый JSON пропускается и попадает в failures."""
        loaded = LoadResult()
        for path in self.result_files(order):
            raw, error = _read_result(path)
            if error is not None:
                logger.warning("Skipping %s: %s", path.name, error.reason)
                loaded.failures.append(error)
                continue
            loaded.results.append(raw)
        return loaded


def _read_result(path: Path) -> Tuple[Dict[str, Any], Optional[ParseError]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return {}, ParseError(path, str(exc))
    if not isinstance(data, dict):
        return {}, ParseError(path, f"top level must be an object, got {type(data).__name__}")
    return data, None
