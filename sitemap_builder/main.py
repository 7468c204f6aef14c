"""
8.0 Command Line Entry Point
Generates the sitemap files for a configuration and writes them to a
directory, standing in for a build pipeline's asset output.

Run: python -m sitemap_builder.main --config sitemap.config.json --output-dir dist
"""

import argparse
import logging
import os
import sys
from datetime import datetime, timezone
from typing import List, Optional

from sitemap_builder.config import CONFIG_FILE_PATH, load_config
from sitemap_builder.errors import SitemapBuilderError
from sitemap_builder.generator import SitemapGenerator

logger = logging.getLogger(__name__)


class DirectorySink:
    """
    8.1 Asset sink that writes each artifact below `output_dir`.

    Artifact names are relative to the output root, so '/sitemaps/main.xml'
    lands in '<output_dir>/sitemaps/main.xml'.
    """

    def __init__(self, output_dir: str):
        self.output_dir = output_dir
        self.written: List[str] = []

    def __call__(self, name: str, content: str) -> None:
        path = os.path.join(self.output_dir, *name.lstrip("/").split("/"))
        root = os.path.realpath(self.output_dir)
        if os.path.commonpath([root, os.path.realpath(path)]) != root:
            raise SitemapBuilderError(f"Refusing to write '{name}' outside of {self.output_dir}")
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        self.written.append(path)
        logger.info(f"Wrote {path}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    8.2 CLI entry point. Returns the process exit status.
    """
    parser = argparse.ArgumentParser(
        description="Generate a sitemap index and per-group URL sets from a JSON configuration"
    )
    parser.add_argument(
        "--config", "-c",
        default=CONFIG_FILE_PATH,
        help=f"Path to the JSON configuration (default: {CONFIG_FILE_PATH})"
    )
    parser.add_argument(
        "--output-dir", "-o",
        default="dist",
        help="Directory the sitemap files are written to (default: dist)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    logger.info("=" * 60)
    logger.info("Starting sitemap generation")
    logger.info(f"Run timestamp: {datetime.now(timezone.utc).isoformat()}")
    logger.info("=" * 60)

    try:
        options = load_config(args.config)
        generator = SitemapGenerator(options)
        sink = DirectorySink(args.output_dir)
        generator.emit(sink)
    except SitemapBuilderError as e:
        logger.error(f"Sitemap generation failed: {type(e).__name__}: {e}")
        return 1

    logger.info("=" * 60)
    logger.info(f"Sitemap generation completed: {len(sink.written)} files in {args.output_dir}")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
