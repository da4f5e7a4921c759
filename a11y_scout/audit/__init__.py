"""a11y_scout.audit: Запуск аудита страниц и обёртка над Lighthouse."""

from .runner import AuditOutcome, run_all

__all__ = ["AuditOutcome", "run_all"]
