"""
CONFIG TESTS - loading, defaulting and validation of sitemap options.
"""

import json
import logging

import pytest

from sitemap_builder.config import DEFAULT_OPTIONS, load_config, merge_options, validate_config
from sitemap_builder.errors import ConfigurationError

# =============================================================================
# 1. LOADING
# =============================================================================

def test_load_config_reads_and_merges_defaults(tmp_path, example_config):
    path = tmp_path / "sitemap.config.json"
    path.write_text(json.dumps(example_config), encoding="utf-8")

    options = load_config(str(path))

    assert options["basename"] == "https://example.com"
    assert list(options["sitemapindex"]) == ["main"]
    assert options["defaults"]["url"] == {"lastmod": None, "changefreq": None, "priority": None}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(str(tmp_path / "missing.json"))


def test_load_config_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{basename: ", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="decoding JSON"):
        load_config(str(path))


def test_load_config_validates(tmp_path):
    path = tmp_path / "no_basename.json"
    path.write_text(json.dumps({"sitemapindex": {}}), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="basename is required"):
        load_config(str(path))

# =============================================================================
# 2. MERGING
# =============================================================================

def test_merge_options_none_never_overrides():
    options = merge_options({
        "basename": "https://example.com",
        "defaults": {"url": {"priority": 0.5, "changefreq": None}, "sitemap": None},
    })
    assert options["defaults"]["url"]["priority"] == 0.5
    assert options["defaults"]["url"]["changefreq"] is None
    assert options["defaults"]["sitemap"] == {"lastmod": None}


def test_merge_options_does_not_mutate_inputs(example_config):
    snapshot = json.dumps(example_config, sort_keys=True)
    options = merge_options(example_config)
    options["sitemapindex"]["main"]["urlset"]["/new"] = {}
    options["defaults"]["url"]["priority"] = 0.1

    assert json.dumps(example_config, sort_keys=True) == snapshot
    assert DEFAULT_OPTIONS["defaults"]["url"]["priority"] is None


def test_merge_options_keeps_group_order():
    options = merge_options({"basename": "https://example.com", "sitemapindex": {"b": {}, "a": {}}})
    assert list(options["sitemapindex"]) == ["b", "a"]


def test_merge_options_rejects_non_mapping():
    with pytest.raises(ConfigurationError):
        merge_options(["https://example.com"])

# =============================================================================
# 3. VALIDATION
# =============================================================================

@pytest.mark.parametrize("basename", [None, "", "   ", 42])
def test_basename_required(basename):
    with pytest.raises(ConfigurationError, match="basename is required"):
        validate_config(merge_options({"basename": basename}))


def test_relative_basename_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="sitemap_builder.config"):
        validate_config(merge_options({"basename": "example.com", "sitemapindex": {"main": {}}}))
    assert "not an absolute URL" in caplog.text


def test_unknown_changefreq_rejected():
    options = merge_options({
        "basename": "https://example.com",
        "sitemapindex": {"main": {"urlset": {"/": {"changefreq": "fortnightly"}}}},
    })
    with pytest.raises(ConfigurationError, match="changefreq"):
        validate_config(options)


def test_unknown_default_changefreq_rejected():
    options = merge_options({"basename": "https://example.com", "defaults": {"url": {"changefreq": "often"}}})
    with pytest.raises(ConfigurationError, match="defaults.url.changefreq"):
        validate_config(options)


@pytest.mark.parametrize("priority", ["0.5", True, [1]])
def test_non_numeric_priority_rejected(priority):
    options = merge_options({
        "basename": "https://example.com",
        "sitemapindex": {"main": {"urlset": {"/": {"priority": priority}}}},
    })
    with pytest.raises(ConfigurationError, match="priority"):
        validate_config(options)


def test_out_of_range_priority_only_warns(caplog):
    options = merge_options({
        "basename": "https://example.com",
        "sitemapindex": {"main": {"urlset": {"/": {"priority": 1.5}}}},
    })
    with caplog.at_level(logging.WARNING, logger="sitemap_builder.config"):
        validate_config(options)
    assert "conventionally between 0 and 1" in caplog.text


def test_non_string_lastmod_rejected():
    options = merge_options({
        "basename": "https://example.com",
        "sitemapindex": {"main": {"lastmod": 20240101}},
    })
    with pytest.raises(ConfigurationError, match="sitemapindex.main.lastmod"):
        validate_config(options)


@pytest.mark.parametrize("sitemapindex", [["main"], {"main": "urls"}, {"main": {"urlset": ["/"]}}])
def test_non_mapping_sections_rejected(sitemapindex):
    options = merge_options({"basename": "https://example.com", "sitemapindex": sitemapindex})
    with pytest.raises(ConfigurationError, match="must be a mapping"):
        validate_config(options)


def test_missing_urlset_is_empty():
    validate_config(merge_options({"basename": "https://example.com", "sitemapindex": {"main": {"urlset": None}}}))


def test_oversized_urlset_warns(caplog):
    urlset = {f"/page/{i}": {} for i in range(50001)}
    options = merge_options({"basename": "https://example.com", "sitemapindex": {"big": {"urlset": urlset}}})
    with caplog.at_level(logging.WARNING, logger="sitemap_builder.config"):
        validate_config(options)
    assert "at most 50000" in caplog.text


def test_null_group_kept_as_empty_sitemap():
    options = merge_options({"basename": "https://example.com", "sitemapindex": {"main": None, "blog": {}}})
    validate_config(options)
    assert list(options["sitemapindex"]) == ["main", "blog"]


@pytest.mark.parametrize("name", ["../../escaped", "..", "a/../b", "./main", "a//b"])
def test_path_segment_sitemap_names_rejected(name):
    options = merge_options({"basename": "https://example.com", "sitemapindex": {name: {}}})
    with pytest.raises(ConfigurationError, match="path segments"):
        validate_config(options)


@pytest.mark.parametrize("priority", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_priority_rejected(priority):
    options = merge_options({
        "basename": "https://example.com",
        "sitemapindex": {"main": {"urlset": {"/": {"priority": priority}}}},
    })
    with pytest.raises(ConfigurationError, match="finite"):
        validate_config(options)


def test_non_finite_priority_from_json_rejected(tmp_path):
    path = tmp_path / "sitemap.config.json"
    path.write_text(
        '{"basename": "https://example.com", "defaults": {"url": {"priority": NaN}}}',
        encoding="utf-8",
    )
    with pytest.raises(ConfigurationError, match="defaults.url.priority"):
        load_config(str(path))
