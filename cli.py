# cli.py

"""
Точка входа для запуска A11yScout без установки пакета.

Пример запуска:
    python cli.py audit https://example.com/sitemap.xml
    python cli.py --config configs/default.yaml report reports/2024-07-24T10-34-20
"""
from a11y_scout.cli import cli


if __name__ == '__main__':
    cli()
