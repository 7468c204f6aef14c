"""
2.0 Configuration Normalizer Module
Turns a sitemap configuration into a fully resolved, ordered model.

Precedence for every optional field, lowest to highest:
    1. built-in blank defaults (None)
    2. the matching `defaults` section of the configuration
    3. the value given on the group or URL itself

A field that is None at every layer stays None and is later omitted from
the rendered XML. Locations are always computed and cannot be overridden.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote, urljoin

from sitemap_builder.errors import ConfigurationError
from sitemap_builder.models import (
    NormalizedModel,
    Sitemap,
    SitemapIndex,
    SitemapReference,
    SitemapUrl,
)

logger = logging.getLogger(__name__)

# 2.1 Built-in blank defaults
SITEMAP_FIELDS = ("lastmod",)
URL_FIELDS = ("lastmod", "changefreq", "priority")


def merge_layers(fields, *layers: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    2.2 Resolve `fields` across `layers`, later layers winning.

    A layer that is None, or a value that is None, does not override
    what a lower layer provided.
    """
    merged: Dict[str, Any] = {name: None for name in fields}
    for layer in layers:
        if not layer:
            continue
        for name in fields:
            value = layer.get(name)
            if value is not None:
                merged[name] = value
    return merged


def resolve_location(basename: str, location: str) -> str:
    """
    2.3 Resolve a location against the base URL.

    Relative references are joined onto `basename`; absolute ones
    replace it entirely.
    """
    return urljoin(basename, location)


def sitemap_location(basename: str, name: str) -> str:
    # Percent-encode the name for the URL only; artifact names keep it as given
    return resolve_location(basename, f"./sitemaps/{quote(name, safe='/%')}.xml")


def normalize(config: Dict[str, Any]) -> NormalizedModel:
    """
    2.4 Build the sitemap index and every URL set from `config`.

    Groups and URLs keep the insertion order of the configuration
    mappings so identical input always produces identical output.

    Raises:
        ConfigurationError: if `basename` is missing or blank.
    """
    basename = config.get("basename")
    if not isinstance(basename, str) or not basename.strip():
        raise ConfigurationError("options.basename is required. e.g. https://example.com")

    defaults = config.get("defaults") or {}
    sitemap_defaults = defaults.get("sitemap")
    url_defaults = defaults.get("url")

    index = SitemapIndex()
    sitemaps: Dict[str, Sitemap] = {}

    for name, group in (config.get("sitemapindex") or {}).items():
        group = group or {}

        # 2.4.1 Index entry for the group
        fields = merge_layers(SITEMAP_FIELDS, sitemap_defaults, group)
        index.sitemaps.append(SitemapReference(loc=sitemap_location(basename, name), **fields))

        # 2.4.2 URL entries of the group
        sitemap = Sitemap()
        for location, meta in (group.get("urlset") or {}).items():
            fields = merge_layers(URL_FIELDS, url_defaults, meta)
            sitemap.urlset.append(SitemapUrl(loc=resolve_location(basename, location), **fields))
        sitemaps[name] = sitemap
        logger.debug(f"Normalized sitemap '{name}' with {len(sitemap.urlset)} URLs")

    return NormalizedModel(index=index, sitemaps=sitemaps)
