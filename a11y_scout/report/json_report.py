# a11y_scout/report/json_report.py

"""
Генерация JSON-сводки для проекта A11yScout.

Сериализация объекта SiteReport в файл.
"""
import json
from pathlib import Path

from a11y_scout.aggregator import SiteReport


def render_json(report: SiteReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект SiteReport с результатами аудита
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)

    return output
