"""Static asset copying for Folio.

Stylesheets are copied to ``<output>/styles`` on every build. The optional
public directory is copied into the output root, so ``public/favicon.ico``
ends up at ``/favicon.ico``.

Key components:
- AssetPipeline: Copies styles and public files after pages are written.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from .config import SiteConfig
from .utils import copy_tree


class StylesNotFoundError(FileNotFoundError):
    """Raised when the styles directory is missing."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Styles directory not found: {path}")


class AssetPipeline:
    """Copies static assets into the output directory.

    Attributes:
        styles_dir: Directory of stylesheets, always copied.
        public_dir: Directory of public files, copied when present.
        output_dir: Directory where the site is built.
    """

    def __init__(self, config: SiteConfig, output_dir: Path | None = None):
        """Initialize the asset pipeline.

        Args:
            config: Site configuration.
            output_dir: Optional override for the configured output directory.
        """
        self.styles_dir = config.styles_dir
        self.public_dir = config.public_dir
        self.output_dir = output_dir or config.output_dir

    def run(self) -> None:
        """Copy styles, then public files."""
        self.copy_styles()
        self.copy_public()

    def copy_styles(self) -> None:
        """Copy the styles directory recursively to ``<output>/styles``.

        Raises:
            StylesNotFoundError: If the styles directory does not exist.
        """
        print("Copying: /styles/")
        if not self.styles_dir.is_dir():
            raise StylesNotFoundError(self.styles_dir)
        copy_tree(self.styles_dir, self.output_dir / "styles")

    def copy_public(self) -> None:
        """Copy each entry of the public directory into the output root."""
        if not self.public_dir.is_dir():
            return
        print("Copying: /public/ assets")
        for entry in sorted(self.public_dir.iterdir()):
            dest = self.output_dir / entry.name
            if entry.is_dir():
                copy_tree(entry, dest)
            else:
                shutil.copy2(entry, dest)
