"""
1.0 Sitemap Model Module
Dataclasses shared by the normalizer, the renderer and the generator.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

# 1.1 Sitemap protocol constants
SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
CHANGE_FREQUENCIES = ("always", "hourly", "daily", "weekly", "monthly", "yearly", "never")
MAX_URLS_PER_SITEMAP = 50000

Priority = Union[int, float]


@dataclass
class SitemapReference:
    """One <sitemap> entry of the sitemap index."""
    loc: str
    lastmod: Optional[str] = None


@dataclass
class SitemapIndex:
    sitemaps: List[SitemapReference] = field(default_factory=list)


@dataclass
class SitemapUrl:
    """One <url> entry of a URL set. None means the element is omitted."""
    loc: str
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    priority: Optional[Priority] = None


@dataclass
class Sitemap:
    urlset: List[SitemapUrl] = field(default_factory=list)


@dataclass
class NormalizedModel:
    """
    Fully resolved output of a normalization pass.

    `sitemaps` keeps the group order of the configuration mapping.
    """
    index: SitemapIndex
    sitemaps: Dict[str, Sitemap] = field(default_factory=dict)


@dataclass
class Artifact:
    """A named text blob handed to the asset sink."""
    name: str
    content: str

    @property
    def size(self) -> int:
        # Byte length of the UTF-8 encoded document, not the character count
        return len(self.content.encode("utf-8"))

    def source(self) -> str:
        return self.content
