"""
Exception types raised by the sitemap builder.

Every failure is fatal for the generation pass that raised it: no
artifacts from that pass are handed to the sink.
"""


class SitemapBuilderError(Exception):
    """Base class for all sitemap builder errors."""


class ConfigurationError(SitemapBuilderError):
    """Required configuration is missing or malformed."""


class TemplateLoadError(SitemapBuilderError):
    """A sitemap template could not be read or parsed."""


class RenderError(SitemapBuilderError):
    """A normalized entry could not be serialized to XML."""
