# File: a11y_scout/aggregator.py
"""a11y_scout.aggregator: Модуль агрегатора результатов аудита в отчёт по сайту."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from a11y_scout.errors import ParseError
from a11y_scout.extractor import FailingCheck, PageRecord, extract
from a11y_scout.logger import logger
from a11y_scout.storage import Run
from a11y_scout.utils import extract_host

__all__ = ("SiteReport", "aggregate", "collect_records")


@dataclass(slots=True)
class SiteReport:
    """Отчёт по сайту: оценки и проваленные проверки по страницам, средняя оценка."""

    host: str
    site_average: float
    report_timestamp: str
    page_scores: Dict[str, float] = field(default_factory=dict)
    page_failing_checks: Dict[str, Dict[str, FailingCheck]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "site_average": self.site_average,
            "report_timestamp": self.report_timestamp,
            "page_scores": dict(self.page_scores),
            "page_failing_checks": {
                path: {check_id: check.to_dict() for check_id, check in checks.items()}
                for path, checks in self.page_failing_checks.items()
            },
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление SiteReport."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate(
    host_url: str, records: Sequence[PageRecord], started_at: datetime
) -> Optional[SiteReport]:
    """Собирает SiteReport; для пустого набора записей возвращает None.

    Средняя оценка — обычное арифметическое среднее без весов.
    Порядок ключей совпадает с порядком записей.
    """
    if not records:
        return None

    page_scores: Dict[str, float] = {}
    page_failing_checks: Dict[str, Dict[str, FailingCheck]] = {}
    for record in records:
        page_scores[record.path] = record.score
        page_failing_checks[record.path] = record.failing_checks

    return SiteReport(
        host=extract_host(host_url),
        site_average=sum(r.score for r in records) / len(records),
        report_timestamp=started_at.replace(microsecond=0).isoformat(),
        page_scores=page_scores,
        page_failing_checks=page_failing_checks,
    )


def collect_records(
    run: Run, order: Optional[Iterable[str]] = None
) -> Tuple[List[PageRecord], List[ParseError]]:
    """Перечитывает сохранённые результаты запуска и превращает их в PageRecord."""
    loaded = run.load_results(order)
    records = [extract(raw) for raw in loaded.results]
    logger.info(
        "Прочитано %d результатов, пропущено %d файлов", len(records), len(loaded.failures)
    )
    return records, loaded.failures
