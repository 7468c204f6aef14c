import copy
import json
import logging
import math
import os
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from sitemap_builder.errors import ConfigurationError
from sitemap_builder.models import CHANGE_FREQUENCIES, MAX_URLS_PER_SITEMAP

logger = logging.getLogger(__name__)

CONFIG_FILE_PATH = "sitemap.config.json"

DEFAULT_OPTIONS: Dict[str, Any] = {
    "basename": None,
    "sitemapindex": {},
    "defaults": {
        "sitemap": {
            "lastmod": None,
        },
        "url": {
            "lastmod": None,
            "changefreq": None,
            "priority": None,
        },
    },
}


def load_config(path: str = CONFIG_FILE_PATH) -> Dict[str, Any]:
    """Loads and validates the sitemap configuration from a JSON file."""
    if not os.path.exists(path):
        raise ConfigurationError(f"Configuration file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error decoding JSON from {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read configuration file {path}: {e}") from e
    logger.info(f"Successfully loaded configuration from {path}")
    options = merge_options(config_data)
    validate_config(options)
    return options


def merge_options(user_options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Layers user options over DEFAULT_OPTIONS.

    Nested mappings are merged key by key. A user value of None never
    replaces a default. Neither argument is mutated.
    """
    if user_options is None:
        user_options = {}
    if not isinstance(user_options, dict):
        raise ConfigurationError("Configuration must be a dictionary.")
    return _deep_merge(DEFAULT_OPTIONS, user_options)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        # None only defers to an existing default; user-only keys such as sitemap names are kept
        if value is None and key in merged:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def validate_config(config: Dict[str, Any]) -> None:
    """Validates the structure and content of the configuration."""
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration must be a dictionary.")

    basename = config.get("basename")
    if not isinstance(basename, str) or not basename.strip():
        raise ConfigurationError("options.basename is required. e.g. https://example.com")
    parsed = urlparse(basename)
    if not parsed.scheme or not parsed.netloc:
        logger.warning(f"options.basename '{basename}' is not an absolute URL; locations may not resolve as expected.")

    defaults = _require_mapping(config.get("defaults", {}), "defaults")
    sitemap_defaults = _require_mapping(defaults.get("sitemap", {}), "defaults.sitemap")
    _check_lastmod(sitemap_defaults.get("lastmod"), "defaults.sitemap.lastmod")
    url_defaults = _require_mapping(defaults.get("url", {}), "defaults.url")
    _check_url_meta(url_defaults, "defaults.url")

    sitemapindex = _require_mapping(config.get("sitemapindex", {}), "sitemapindex")
    if not sitemapindex:
        logger.warning("'sitemapindex' is empty. Only an empty sitemap index will be generated.")

    for name, group in sitemapindex.items():
        group_path = f"sitemapindex.{name}"
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Sitemap names must be non-empty strings, got {name!r}.")
        if any(segment in ("", ".", "..") for segment in name.replace("\\", "/").split("/")):
            raise ConfigurationError(f"Sitemap name {name!r} must not contain empty, '.' or '..' path segments.")
        group = _require_mapping(group, group_path)
        _check_lastmod(group.get("lastmod"), f"{group_path}.lastmod")

        urlset = _require_mapping(group.get("urlset", {}), f"{group_path}.urlset")
        if len(urlset) > MAX_URLS_PER_SITEMAP:
            logger.warning(
                f"Sitemap '{name}' lists {len(urlset)} URLs; the sitemap protocol allows at most {MAX_URLS_PER_SITEMAP} per file."
            )
        for location, meta in urlset.items():
            url_path = f"{group_path}.urlset[{location!r}]"
            if not isinstance(location, str):
                raise ConfigurationError(f"URL keys must be strings, got {location!r} in {group_path}.urlset.")
            _check_url_meta(_require_mapping(meta, url_path), url_path)

    logger.debug("Configuration validation successful.")


def _require_mapping(value: Any, path: str) -> Dict[str, Any]:
    # Absent (None) sections behave like empty ones
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{path}' must be a mapping, got {type(value).__name__}.")
    return value


def _check_lastmod(value: Any, path: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ConfigurationError(f"'{path}' must be a date string, got {value!r}.")


def _check_url_meta(meta: Dict[str, Any], path: str) -> None:
    _check_lastmod(meta.get("lastmod"), f"{path}.lastmod")

    changefreq = meta.get("changefreq")
    if changefreq is not None and changefreq not in CHANGE_FREQUENCIES:
        raise ConfigurationError(
            f"'{path}.changefreq' must be one of {', '.join(CHANGE_FREQUENCIES)}, got {changefreq!r}."
        )

    priority = meta.get("priority")
    if priority is None:
        return
    if isinstance(priority, bool) or not isinstance(priority, (int, float)):
        raise ConfigurationError(f"'{path}.priority' must be a number, got {priority!r}.")
    if not math.isfinite(priority):
        raise ConfigurationError(f"'{path}.priority' must be a finite number, got {priority!r}.")
    if not 0 <= priority <= 1:
        logger.warning(f"'{path}.priority' is {priority}; sitemap priorities are conventionally between 0 and 1.")
