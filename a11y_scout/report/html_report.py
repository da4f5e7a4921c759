# File: a11y_scout/report/html_report.py
"""a11y_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Union

from jinja2 import Environment, FileSystemLoader, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from a11y_scout.aggregator import SiteReport
from a11y_scout.extractor import FailingCheck
from a11y_scout.storage import Run
from a11y_scout.utils import format_percent, sanitize_anchor

__all__ = (
    "TEMPLATE_NAME",
    "NodeView",
    "CheckView",
    "SummaryRow",
    "PageSection",
    "ReportView",
    "render_description",
    "build_view",
    "render_html",
    "write_html",
)

TEMPLATE_NAME = "report.html.j2"

_MD_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")


@dataclass(slots=True)
class NodeView:
    selector: str
    snippet: str
    explanation: str


@dataclass(slots=True)
class CheckView:
    id: str
    title: str
    description: Markup
    nodes: List[NodeView] = field(default_factory=list)


@dataclass(slots=True)
class SummaryRow:
    path: str
    anchor: str
    score: str
    has_details: bool


@dataclass(slots=True)
class PageSection:
    path: str
    anchor: str
    score: str
    checks: List[CheckView] = field(default_factory=list)


@dataclass(slots=True)
class ReportView:
    """Значения для подстановки в шаблон отчёта."""

    site: str
    average: str
    timestamp: str
    summary_rows: List[SummaryRow] = field(default_factory=list)
    sections: List[PageSection] = field(default_factory=list)


def render_description(text: str) -> Markup:
    """Экранирует описание и превращает первую Markdown-ссылку ``[label](url)`` в <a>."""
    escaped = str(escape(text))
    return Markup(_MD_LINK_RE.sub(r'<a href="\2" target="_blank" rel="noopener">\1</a>', escaped, count=1))


def _check_view(check: FailingCheck) -> CheckView:
    return CheckView(
        id=check.id,
        title=check.title,
        description=render_description(check.description),
        nodes=[NodeView(n.selector, n.snippet, n.explanation) for n in check.nodes],
    )


def _unique_anchor(base: str, used: Set[str]) -> str:
    """'/about' и '/about/' дают один якорь; повторы получают суффикс -2, -3, ..."""
    anchor, n = base, 1
    while anchor in used:
        n += 1
        anchor = f"{base}-{n}"
    used.add(anchor)
    return anchor


def build_view(report: SiteReport) -> ReportView:
    """Строит view-модель отчёта.

    * В сводную таблицу попадают только страницы со score < 1.0.
    * Секция с деталями есть только у страниц с хотя бы одной проваленной проверкой.
    * Порядок: от худшей оценки к лучшей; при равенстве — порядок обнаружения.
    """
    ordered = sorted(report.page_scores.items(), key=lambda item: item[1])

    view = ReportView(
        site=report.host,
        average=format_percent(report.site_average),
        timestamp=report.report_timestamp,
    )
    used: Set[str] = set()
    for path, score in ordered:
        checks = report.page_failing_checks.get(path) or {}
        anchor = _unique_anchor(sanitize_anchor(path), used)
        if score < 1.0:
            view.summary_rows.append(
                SummaryRow(path=path, anchor=anchor, score=format_percent(score), has_details=bool(checks))
            )
        if checks:
            view.sections.append(
                PageSection(
                    path=path,
                    anchor=anchor,
                    score=format_percent(score),
                    checks=[_check_view(c) for c in checks.values()],
                )
            )
    return view


def _environment(template_dir: Optional[Union[Path, str]]) -> Environment:
    loader = (
        FileSystemLoader(str(template_dir))
        if template_dir is not None
        else PackageLoader("a11y_scout", "templates")
    )
    return Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def render_html(report: SiteReport, template_dir: Optional[Union[Path, str]] = None) -> str:
    """Рендерит HTML-отчёт из шаблона и возвращает его текст.

    Args:
        report: объект SiteReport.
        template_dir: директория с пользовательским ``report.html.j2``;
            по умолчанию используется шаблон из пакета.
    """
    template = _environment(template_dir).get_template(TEMPLATE_NAME)
    return template.render(report=build_view(report))


def write_html(
    report: SiteReport,
    run: Run,
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Сохраняет report.html в каталог запуска.

    Пример:
    ```python
    from a11y_scout.report.html_report import write_html
    html_path = write_html(report, run)
    ```
    """
    output_path = run.report_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html(report, template_dir), encoding="utf-8")
    return output_path
