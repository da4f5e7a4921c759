# === FILE: a11y_scout/crawler/sitemap.py ===
"""Рекурсивный обход sitemap / sitemapindex в плоский список URL страниц."""
from __future__ import annotations

from typing import List, Set, Union

from a11y_scout.crawler.fetcher import Fetcher
from a11y_scout.errors import FetchError, ParseError
from a11y_scout.logger import logger
from a11y_scout.parser.sitemap_parser import parse_sitemap
from a11y_scout.utils import looks_like_sitemap, remove_duplicates

__all__ = ("SitemapResolver",)


class SitemapResolver:
    """Обход в глубину по графу sitemap-индексов с множеством посещённых узлов.

    Ошибка корневого sitemap пробрасывается вызывающему; ошибки вложенных
    sitemap копятся в :attr:`errors`, а соседние записи продолжают обрабатываться.
    """

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher
        self.errors: List[Union[FetchError, ParseError]] = []

    async def resolve(self, sitemap_url: str) -> List[str]:
        self.errors = []
        visited: Set[str] = set()
        pages: List[str] = []
        await self._walk(sitemap_url, visited, pages, root=True)
        unique = remove_duplicates(pages)
        logger.info("Sitemap %s: найдено %d страниц", sitemap_url, len(unique))
        return unique

    async def _walk(self, url: str, visited: Set[str], pages: List[str], root: bool = False) -> None:
        if url in visited:
            logger.debug("Sitemap already visited, skipping: %s", url)
            return
        visited.add(url)

        try:
            body = await self.fetcher.fetch_text(url)
            doc = parse_sitemap(body, source=url)
        except (FetchError, ParseError) as exc:
            if root:
                raise
            logger.warning("Пропуск ветки sitemap %s: %s", url, exc)
            self.errors.append(exc)
            return

        if doc.kind == "urlset":
            pages.extend(doc.locs)
        elif doc.kind == "sitemapindex":
            for loc in doc.locs:
                if not looks_like_sitemap(loc):
                    logger.debug("Skipping non-sitemap entry %s in %s", loc, url)
                    continue
                await self._walk(loc, visited, pages)
        else:
            logger.debug("%s is neither urlset nor sitemapindex", url)
