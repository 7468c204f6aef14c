"""
3.0 Sitemap Renderer Module
Serializes a NormalizedModel into sitemap index and URL set documents.

Documents are built with lxml on a copy of the loaded templates, so reserved
characters in locations and dates are escaped by the XML library. Output is
laid out one entry per line:

    <?xml version="1.0" encoding="UTF-8"?>
    <urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
      <url><loc>https://example.com/</loc><priority>1</priority></url>
    </urlset>
"""

import copy
import logging
import posixpath
from typing import Dict, List, Optional, Sequence, Tuple

from lxml import etree

from sitemap_builder.errors import RenderError
from sitemap_builder.models import (
    Artifact,
    NormalizedModel,
    Priority,
    Sitemap,
    SitemapIndex,
)
from sitemap_builder.templates import load_templates

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
INDEX_ARTIFACT_NAME = "sitemap.xml"
ENTRY_INDENT = "  "


def sitemap_artifact_name(name: str) -> str:
    return posixpath.join("/sitemaps/", f"{name}.xml")


def format_priority(priority: Priority) -> str:
    """Integral priorities drop the fractional part: 1.0 -> '1'."""
    value = float(priority)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class SitemapRenderer:
    """
    4.0 SitemapRenderer Class
    Stateless apart from the template roots it was constructed with.
    """

    def __init__(self, templates: Optional[Dict[str, etree._Element]] = None):
        """
        4.1 Initialize the renderer.

        Args:
            templates: Template roots keyed by 'sitemapindex' and 'urlset'.
                       Loaded from the packaged templates when omitted.
        """
        self.templates = templates if templates is not None else load_templates()

    def render(self, model: NormalizedModel) -> List[Artifact]:
        """
        4.2 Render every artifact of a generation pass.

        Returns `sitemap.xml` first, then one `/sitemaps/<name>.xml` per
        sitemap in model order.
        """
        artifacts = [Artifact(INDEX_ARTIFACT_NAME, self.render_index(model.index))]
        for name, sitemap in model.sitemaps.items():
            artifacts.append(Artifact(sitemap_artifact_name(name), self.render_urlset(sitemap)))
        return artifacts

    def render_index(self, index: SitemapIndex) -> str:
        rows = [
            (
                "sitemap",
                [("loc", reference.loc), ("lastmod", reference.lastmod)],
            )
            for reference in index.sitemaps
        ]
        return self._render_document("sitemapindex", rows)

    def render_urlset(self, sitemap: Sitemap) -> str:
        rows = []
        for url in sitemap.urlset:
            priority = None if url.priority is None else format_priority(url.priority)
            rows.append((
                "url",
                [
                    ("loc", url.loc),
                    ("lastmod", url.lastmod),
                    ("changefreq", url.changefreq),
                    ("priority", priority),
                ],
            ))
        return self._render_document("urlset", rows)

    # =========================================================================
    # 5.0 SERIALIZATION HELPERS
    # =========================================================================

    def _render_document(self, template: str, rows: Sequence[Tuple[str, List[Tuple[str, Optional[str]]]]]) -> str:
        try:
            root = copy.deepcopy(self.templates[template])
        except KeyError:
            raise RenderError(f"No '{template}' template available to the renderer.") from None

        namespace = etree.QName(root.tag).namespace
        root.text = "\n" + ENTRY_INDENT if rows else "\n"

        entry = None
        for tag, children in rows:
            entry = etree.SubElement(root, self._qualify(namespace, tag))
            entry.tail = "\n" + ENTRY_INDENT
            for child_tag, value in children:
                if value is None:
                    if child_tag == "loc":
                        raise RenderError(f"<{tag}> entry has no location.")
                    continue
                child = etree.SubElement(entry, self._qualify(namespace, child_tag))
                try:
                    child.text = value
                except (TypeError, ValueError) as e:
                    raise RenderError(f"Cannot serialize <{child_tag}> value {value!r}: {e}") from e
        if entry is not None:
            entry.tail = "\n"

        body = etree.tostring(root, encoding="unicode")
        return f"{XML_DECLARATION}\n{body}\n"

    @staticmethod
    def _qualify(namespace: Optional[str], tag: str) -> str:
        return f"{{{namespace}}}{tag}" if namespace else tag
