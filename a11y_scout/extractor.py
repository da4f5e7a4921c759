# File: a11y_scout/extractor.py
"""a11y_scout.extractor: Преобразование сырого результата Lighthouse в компактный PageRecord."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from a11y_scout.errors import StructuralWarning
from a11y_scout.logger import logger
from a11y_scout.utils import url_path

__all__ = (
    "DisplayMode",
    "AffectedNode",
    "FailingCheck",
    "PageRecord",
    "display_mode_of",
    "is_failing_check",
    "extract",
)


class DisplayMode(str, Enum):
    """Значения ``scoreDisplayMode`` в аудитах Lighthouse."""

    BINARY = "binary"
    NOT_APPLICABLE = "notApplicable"
    INFORMATIVE = "informative"
    MANUAL = "manual"
    NUMERIC = "numeric"
    ERROR = "error"


@dataclass(slots=True)
class AffectedNode:
    """Элемент DOM, на котором провалилась проверка."""

    selector: str = ""
    snippet: str = ""
    explanation: str = ""


@dataclass(slots=True)
class FailingCheck:
    """Отфильтрованная проваленная проверка."""

    id: str
    title: str
    description: str = ""
    nodes: List[AffectedNode] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "nodes": [
                {"selector": n.selector, "snippet": n.snippet, "explanation": n.explanation}
                for n in self.nodes
            ],
        }


@dataclass(slots=True)
class PageRecord:
    """Нормализованный результат одной страницы."""

    path: str
    score: float
    failing_checks: Dict[str, FailingCheck] = field(default_factory=dict)
    warnings: List[StructuralWarning] = field(default_factory=list)


def display_mode_of(audit: Mapping[str, Any]) -> Optional[DisplayMode]:
    """Возвращает DisplayMode аудита или None для отсутствующего/неизвестного значения."""
    try:
        return DisplayMode(audit.get("scoreDisplayMode"))
    except ValueError:
        return None


def is_failing_check(audit: Mapping[str, Any]) -> bool:
    """Единственное правило включения: режим ``binary`` и score == 0.

    Режимы notApplicable, informative, manual (и прочие) исключаются всегда,
    независимо от значения score.
    """
    if display_mode_of(audit) is not DisplayMode.BINARY:
        return False
    score = audit.get("score")
    return isinstance(score, (int, float)) and not isinstance(score, bool) and score == 0


def _nodes_of(audit: Mapping[str, Any]) -> List[AffectedNode]:
    details = audit.get("details")
    if not isinstance(details, Mapping):
        return []
    nodes: List[AffectedNode] = []
    for item in details.get("items") or []:
        node = item.get("node") if isinstance(item, Mapping) else None
        if not isinstance(node, Mapping):
            continue
        nodes.append(
            AffectedNode(
                selector=str(node.get("selector") or ""),
                snippet=str(node.get("snippet") or ""),
                explanation=str(node.get("explanation") or ""),
            )
        )
    return nodes


def _accessibility_score(raw: Mapping[str, Any]) -> Optional[float]:
    categories = raw.get("categories")
    if not isinstance(categories, Mapping):
        return None
    category = categories.get("accessibility")
    if not isinstance(category, Mapping):
        return None
    score = category.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return None
    return float(score)


def extract(raw: Mapping[str, Any]) -> PageRecord:
    """Собирает PageRecord из сырого результата аудита.

    Отсутствие categories.accessibility.score не фатально: страница учитывается
    со score 0, а к записи прикладывается StructuralWarning.
    """
    page_url = raw.get("requestedUrl") or raw.get("finalUrl") or "/"
    path = url_path(str(page_url))

    record = PageRecord(path=path, score=0.0)

    score = _accessibility_score(raw)
    if score is None:
        warning = StructuralWarning(path, "no categories.accessibility.score in audit result")
        logger.warning("Structural warning: %s", warning)
        record.warnings.append(warning)
    else:
        record.score = score

    audits = raw.get("audits")
    if isinstance(audits, Mapping):
        for check_id, audit in audits.items():
            if not isinstance(audit, Mapping) or not is_failing_check(audit):
                continue
            record.failing_checks[check_id] = FailingCheck(
                id=str(audit.get("id") or check_id),
                title=str(audit.get("title") or check_id),
                description=str(audit.get("description") or ""),
                nodes=_nodes_of(audit),
            )
    return record
