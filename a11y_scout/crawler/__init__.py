"""a11y_scout.crawler: Загрузка sitemap и рекурсивный обход sitemap-индексов."""

from .fetcher import Fetcher
from .sitemap import SitemapResolver

__all__ = ["Fetcher", "SitemapResolver"]
