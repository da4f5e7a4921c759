# File: a11y_scout/parser/sitemap_parser.py
"""a11y_scout.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Union

from lxml import etree

from a11y_scout.errors import ParseError

__all__ = ("SitemapDocument", "parse_sitemap")

SitemapKind = Literal["urlset", "sitemapindex", "unknown"]

_ENTRY_TAG = {"urlset": "url", "sitemapindex": "sitemap"}


@dataclass(slots=True)
class SitemapDocument:
    """Разобранный sitemap: тип корневого элемента и значения <loc> в порядке документа."""

    kind: SitemapKind
    locs: List[str] = field(default_factory=list)


def parse_sitemap(xml_content: Union[str, bytes], source: str = "<sitemap>") -> SitemapDocument:
    """Разбирает XML sitemap и возвращает его тип и список URL из тегов <loc>.

    Args:
        xml_content: содержимое sitemap.xml (str или bytes).
        source: URL документа, используется в сообщениях об ошибках.

    Returns:
        SitemapDocument; для неизвестного корня ``kind == "unknown"`` и пустой список.

    Raises:
        ParseError: если документ не является корректным XML.

    Пример:
    ```python
    from a11y_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        doc = parse_sitemap(f.read())
    print(doc.kind, doc.locs)
    ```
    """
    if isinstance(xml_content, str):
        xml_content = xml_content.encode("utf-8")

    parser = etree.XMLParser(ns_clean=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml_content, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise ParseError(source, str(exc)) from exc
    if root is None:
        raise ParseError(source, "empty document")

    kind = etree.QName(root).localname
    if kind not in _ENTRY_TAG:
        return SitemapDocument(kind="unknown")

    locs = root.findall(f"{{*}}{_ENTRY_TAG[kind]}/{{*}}loc")
    return SitemapDocument(
        kind=kind,
        locs=[loc.text.strip() for loc in locs if loc.text and loc.text.strip()],
    )
