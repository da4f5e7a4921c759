"""a11y_scout.parser: Разбор XML-документов sitemap."""

from .sitemap_parser import SitemapDocument, parse_sitemap

__all__ = ["SitemapDocument", "parse_sitemap"]
