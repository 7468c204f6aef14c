"""
Sitemap Builder - Source Package

Modules:
- config: Configuration loading, defaulting and validation
- normalizer: Resolves configuration into sitemap index and URL set models
- templates: Loads the XML document skeletons
- renderer: Serializes the models to sitemap XML documents
- generator: Build-step adapter delivering documents to an asset sink
- main: Command line entry point writing documents to a directory
"""

__version__ = "1.0.0"

from sitemap_builder.errors import (
    ConfigurationError,
    RenderError,
    SitemapBuilderError,
    TemplateLoadError,
)
from sitemap_builder.generator import SitemapGenerator
from sitemap_builder.models import Artifact
from sitemap_builder.normalizer import normalize
from sitemap_builder.renderer import SitemapRenderer

__all__ = [
    "Artifact",
    "ConfigurationError",
    "RenderError",
    "SitemapBuilderError",
    "SitemapGenerator",
    "SitemapRenderer",
    "TemplateLoadError",
    "normalize",
]
