# File: a11y_scout/engine.py
"""a11y_scout.engine: Orchestration layer: sitemap → аудит → агрегация → отчёт."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from a11y_scout.aggregator import SiteReport, aggregate, collect_records
from a11y_scout.audit.lighthouse import LighthouseAuditor
from a11y_scout.audit.runner import AuditFn, AuditOutcome, run_all
from a11y_scout.config import AuditConfig
from a11y_scout.crawler.fetcher import Fetcher
from a11y_scout.crawler.sitemap import SitemapResolver
from a11y_scout.errors import EmptyResultError, FetchError, ParseError
from a11y_scout.logger import logger, run_log
from a11y_scout.report.html_report import write_html
from a11y_scout.report.json_report import render_json
from a11y_scout.storage import Run
from a11y_scout.utils import is_sitemap_url

__all__ = ["Engine", "AuditSummary", "BuiltReport"]

SitemapError = Union[FetchError, ParseError]


@dataclass(slots=True)
class BuiltReport:
    """Итог генерации отчёта для каталога запуска."""

    report: SiteReport
    html_path: Path
    json_path: Path
    skipped_files: List[ParseError] = field(default_factory=list)


@dataclass(slots=True)
class AuditSummary:
    """Результат полного запуска: каталог, исходы аудита, отчёт и ошибки sitemap."""

    run: Run
    urls: List[str]
    outcomes: List[AuditOutcome]
    built: BuiltReport
    sitemap_errors: List[SitemapError] = field(default_factory=list)


class Engine:
    """Фасад для CLI и тестов: один объект на конфигурацию, каждый запуск — свой Run."""

    def __init__(self, config: AuditConfig) -> None:
        self.config = config

    async def discover(self, url: str) -> Tuple[List[str], List[SitemapError]]:
        """URL для аудита и ошибки пропущенных веток sitemap.

        Для одиночной страницы возвращается ``([url], [])``.
        """
        errors: List[SitemapError] = []
        if not is_sitemap_url(url):
            urls = [url]
        else:
            async with Fetcher(self.config) as fetcher:
                resolver = SitemapResolver(fetcher)
                urls = await resolver.resolve(url)
                errors = list(resolver.errors)

        if self.config.max_pages is not None and len(urls) > self.config.max_pages:
            logger.info("Limiting %d URLs to max_pages=%d", len(urls), self.config.max_pages)
            urls = urls[: self.config.max_pages]
        return urls, errors

    async def audit(self, run: Run, urls: Iterable[str], auditor: AuditFn) -> List[AuditOutcome]:
        """Аудит каждого URL; результат сохраняется в каталог запуска до перехода к следующему."""
        return await run_all(urls, auditor, on_result=run.save_result)

    def build_report(
        self,
        run: Run,
        site_url: str,
        order: Optional[Iterable[str]] = None,
    ) -> BuiltReport:
        """Перечитывает результаты запуска и пишет report.html и report.json.

        Raises:
            EmptyResultError: если в каталоге нет ни одного пригодного результата.
        """
        records, skipped = collect_records(run, order)
        report = aggregate(site_url, records, run.started_at)
        if report is None:
            raise EmptyResultError(run.root)

        html_path = write_html(report, run, self.config.template_dir)
        json_path = render_json(report, run.summary_path)
        logger.info("Средняя оценка %s: %.4f (%d страниц)", report.host, report.site_average, len(records))
        return BuiltReport(report=report, html_path=html_path, json_path=json_path, skipped_files=skipped)

    async def start_audit(self, url: str, auditor: Optional[AuditFn] = None) -> AuditSummary:
        """Полный запуск. Без *auditor* используется LighthouseAuditor на весь запуск.

        Журнал запуска дублируется в ``audit.log`` каталога запуска.
        """
        urls, sitemap_errors = await self.discover(url)
        run = Run.create(self.config.reports_dir)

        with run_log(run.root):
            logger.info("Запуск %s: %d URL из %s", run.root.name, len(urls), url)
            for error in sitemap_errors:
                logger.warning("Ветка sitemap пропущена: %s", error)

            if auditor is not None:
                outcomes = await self.audit(run, urls, auditor)
            else:
                async with LighthouseAuditor(self.config) as lighthouse:
                    outcomes = await self.audit(run, urls, lighthouse)

            built = self.build_report(run, url, order=urls)

        return AuditSummary(
            run=run,
            urls=urls,
            outcomes=outcomes,
            built=built,
            sitemap_errors=sitemap_errors,
        )
