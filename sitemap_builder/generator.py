"""
6.0 Sitemap Generator Module
Build-step adapter around the normalizer and the renderer.

Usage:
    from sitemap_builder import SitemapGenerator

    generator = SitemapGenerator({
        "basename": "https://example.com",
        "sitemapindex": {"main": {"urlset": {"/": {"priority": 1.0}, "/about": {}}}},
    })
    for artifact in generator.generate():
        print(artifact.name, artifact.size)

    # Or hand the documents to a build tool's asset store
    generator.emit(lambda name, content: assets.__setitem__(name, content))
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from sitemap_builder.config import merge_options, validate_config
from sitemap_builder.models import Artifact
from sitemap_builder.normalizer import normalize
from sitemap_builder.renderer import SitemapRenderer
from sitemap_builder.templates import TEMPLATE_DIR, load_templates

logger = logging.getLogger(__name__)

AssetSink = Callable[[str, str], Any]


class SitemapGenerator:
    """
    7.0 SitemapGenerator Class
    Holds validated options and loaded templates. Each call to generate()
    or emit() is an independent pass over the same options.
    """

    def __init__(self, options: Dict[str, Any], template_dir: str = TEMPLATE_DIR):
        """
        7.1 Initialize the generator.

        Raises:
            ConfigurationError: if the options are invalid.
            TemplateLoadError: if a template cannot be loaded.
        """
        self.options = merge_options(options)
        validate_config(self.options)
        self.renderer = SitemapRenderer(load_templates(template_dir))
        logger.info(
            f"SitemapGenerator initialized for {self.options['basename']} "
            f"with {len(self.options['sitemapindex'])} sitemaps"
        )

    def generate(self) -> List[Artifact]:
        """7.2 Run one pass and return the rendered artifacts."""
        model = normalize(self.options)
        artifacts = self.renderer.render(model)
        url_count = sum(len(sitemap.urlset) for sitemap in model.sitemaps.values())
        logger.info(f"Generated {len(artifacts)} sitemap files covering {url_count} URLs")
        return artifacts

    def emit(self, sink: AssetSink, done: Optional[Callable[[], Any]] = None) -> List[Artifact]:
        """
        7.3 Run one pass and hand every artifact to `sink(name, content)`.

        Every document is rendered before the sink is called, so a failing
        pass delivers nothing. `done` is called once all artifacts are
        delivered.
        """
        artifacts = self.generate()
        for artifact in artifacts:
            logger.debug(f"Adding: {artifact.name}")
            sink(artifact.name, artifact.content)
        logger.debug("Done.")
        if done is not None:
            done()
        return artifacts
