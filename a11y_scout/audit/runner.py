# File: a11y_scout/audit/runner.py
"""a11y_scout.audit.runner: Последовательный запуск аудита по списку URL."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from a11y_scout.errors import AuditError
from a11y_scout.logger import logger

__all__ = ("AuditFn", "ResultHook", "AuditOutcome", "run_all")

RawAuditResult = Dict[str, Any]
AuditFn = Callable[[str], Awaitable[RawAuditResult]]
ResultHook = Callable[[str, RawAuditResult], Any]


@dataclass(slots=True)
class AuditOutcome:
    """Итог аудита одного URL: либо result, либо error."""

    url: str
    result: Optional[RawAuditResult] = None
    error: Optional[AuditError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def run_all(
    urls: Iterable[str],
    audit_fn: AuditFn,
    on_result: Optional[ResultHook] = None,
) -> List[AuditOutcome]:
    """Вызывает ``audit_fn(url)`` по одному URL за раз, в исходном порядке.

    Ошибка одного URL превращается в AuditError и не прерывает обработку остальных.
    ``on_result`` (сохранение результата) завершается до перехода к следующему URL.
    """
    outcomes: List[AuditOutcome] = []
    start = time.monotonic()
    for url in urls:
        logger.info("Аудит: %s", url)
        try:
            result = await audit_fn(url)
        except asyncio.CancelledError:
            raise
        except AuditError as exc:
            logger.warning("%s", exc)
            outcomes.append(AuditOutcome(url=url, error=exc))
            continue
        except Exception as exc:
            error = AuditError(url, f"{type(exc).__name__}: {exc}")
            logger.warning("%s", error)
            outcomes.append(AuditOutcome(url=url, error=error))
            continue

        if on_result is not None:
            persisted = on_result(url, result)
            if asyncio.iscoroutine(persisted):
                await persisted
        outcomes.append(AuditOutcome(url=url, result=result))

    failed = sum(1 for o in outcomes if not o.ok)
    logger.info(
        "Завершено: %d страниц за %.2f с, ошибок: %d",
        len(outcomes), time.monotonic() - start, failed,
    )
    return outcomes
