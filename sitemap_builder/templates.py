import logging
import os
from typing import Dict

from lxml import etree

from sitemap_builder.errors import TemplateLoadError
from sitemap_builder.models import SITEMAP_NAMESPACE

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

# Template file name -> expected root element
TEMPLATE_ROOTS = {
    "sitemap.xml": "sitemapindex",
    "urlset.xml": "urlset",
}


def read_template(name: str, template_dir: str = TEMPLATE_DIR) -> bytes:
    """Reads a template resource by name."""
    path = os.path.join(template_dir, name)
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise TemplateLoadError(f"Could not read template '{name}' from {template_dir}: {e}") from e


def load_template(name: str, template_dir: str = TEMPLATE_DIR) -> etree._Element:
    """
    Loads a named XML skeleton and returns its root element.

    The root must be the element listed in TEMPLATE_ROOTS for `name`, in the
    sitemap namespace. Entries are appended to a copy of it at render time.
    """
    if name not in TEMPLATE_ROOTS:
        raise TemplateLoadError(f"Unknown template '{name}'. Expected one of: {', '.join(TEMPLATE_ROOTS)}")

    source = read_template(name, template_dir)
    try:
        parser = etree.XMLParser(remove_blank_text=True)
        root = etree.fromstring(source, parser=parser)
    except etree.XMLSyntaxError as e:
        raise TemplateLoadError(f"Template '{name}' is not well-formed XML: {e}") from e

    qname = etree.QName(root.tag)
    expected = TEMPLATE_ROOTS[name]
    if qname.localname != expected or qname.namespace != SITEMAP_NAMESPACE:
        raise TemplateLoadError(
            f"Template '{name}' must have a <{expected}> root in namespace {SITEMAP_NAMESPACE}, got '{root.tag}'."
        )

    logger.debug(f"Loaded template '{name}'")
    return root


def load_templates(template_dir: str = TEMPLATE_DIR) -> Dict[str, etree._Element]:
    """Loads every template the renderer needs, keyed by root element name."""
    return {root: load_template(name, template_dir) for name, root in TEMPLATE_ROOTS.items()}
