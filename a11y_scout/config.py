# === FILE: a11y_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации A11yScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class AuditConfig(BaseModel):
    """Конфигурация одного запуска аудита."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    reports_dir: Path = Field(Path("reports"), description="Корень для каталогов запусков.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на загрузку sitemap (секунд).")
    user_agent: str = Field("A11yScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(2, ge=0, description="Число повторных попыток при 5xx/429.")
    max_pages: Optional[int] = Field(None, ge=1, description="Лимит числа проверяемых страниц.")

    consent_selector: Optional[str] = Field(
        "#ccc-close", description="CSS-селектор кнопки закрытия cookie-баннера."
    )
    lighthouse_command: List[str] = Field(
        default_factory=lambda: ["npx", "lighthouse"],
        min_length=1,
        description="Команда запуска Lighthouse CLI.",
    )
    headless: bool = Field(True, description="Запускать браузер без окна.")
    navigation_timeout: float = Field(30.0, gt=0, description="Таймаут навигации (секунд).")
    audit_timeout: float = Field(120.0, gt=0, description="Таймаут одного аудита Lighthouse (секунд).")

    template_dir: Optional[Path] = Field(
        None, description="Папка с пользовательским Jinja2-шаблоном report.html.j2."
    )

    @field_validator("consent_selector", mode="before")
    def _blank_selector_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.

    Без пути используется configs/default.yaml, а если его нет — значения по умолчанию.
    Явно указанный, но отсутствующий файл приводит к FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return AuditConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return AuditConfig(**data)


__all__ = ["AuditConfig", "load_config", "ValidationError"]
