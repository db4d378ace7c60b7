"""Site configuration for Folio.

All filesystem locations and site-wide strings live on a single SiteConfig
instance that is handed to each component when it is constructed. Defaults
match the conventional project layout::

    content/posts/     Markdown posts
    src/templates/     base.html, home.html, blog.html, post.html, ...
    src/styles/        stylesheets copied to dist/styles
    public/            optional files copied to the output root
    dist/              build output

A ``folio.yaml`` file at the project root may override any of the values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "folio.yaml"

DEFAULT_AUTHOR = "Mohanad Elhag"

DEFAULT_CONFIG: dict[str, Any] = {
    "content_dir": "content/posts",
    "templates_dir": "src/templates",
    "styles_dir": "src/styles",
    "public_dir": "public",
    "output_dir": "dist",
    "author": DEFAULT_AUTHOR,
    "site_description": (
        "Personal blog and portfolio of a frontend engineer rebuilding fundamentals."
    ),
    "recent_posts": 3,
    "port": 3000,
}

_PATH_KEYS = ("content_dir", "templates_dir", "styles_dir", "public_dir", "output_dir")


def default_pages(author: str, site_description: str) -> dict[str, dict[str, str]]:
    """Return the title/description pair used for each fixed page."""
    return {
        "home": {
            "title": f"{author} - Frontend Engineer",
            "description": site_description,
        },
        "blog": {
            "title": f"Blog - {author}",
            "description": "Blog posts about frontend development and learning.",
        },
        "about": {
            "title": f"About - {author}",
            "description": "About me - a frontend engineer rebuilding fundamentals.",
        },
        "experiments": {
            "title": f"Experiments - {author}",
            "description": "Web experiments and demos.",
        },
    }


@dataclass
class SiteConfig:
    """Configuration for a single site build.

    Attributes:
        project_root: Directory every relative path is resolved against.
        content_dir: Directory holding the Markdown posts.
        templates_dir: Directory holding the ``<name>.html`` templates.
        styles_dir: Stylesheet directory, copied to ``<output>/styles``.
        public_dir: Optional directory copied into the output root.
        output_dir: Directory the site is written to (wiped on each build).
        author: Name used in page titles.
        site_description: Description of the home page.
        recent_posts: Number of post cards shown on the home page (negative values become 0).
        port: Default dev server port.
        pages: Title and description for home, blog, about and experiments.
    """

    project_root: Path = field(default_factory=Path.cwd)
    content_dir: Path | None = None
    templates_dir: Path | None = None
    styles_dir: Path | None = None
    public_dir: Path | None = None
    output_dir: Path | None = None
    author: str = DEFAULT_AUTHOR
    site_description: str = DEFAULT_CONFIG["site_description"]
    recent_posts: int = 3
    port: int = 3000
    pages: dict[str, dict[str, str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.project_root = Path(self.project_root)
        self.recent_posts = max(0, int(self.recent_posts))
        for key in _PATH_KEYS:
            value = getattr(self, key)
            if value is None:
                value = DEFAULT_CONFIG[key]
            path = Path(value)
            if not path.is_absolute():
                path = self.project_root / path
            setattr(self, key, path)
        merged = default_pages(self.author, self.site_description)
        for name, values in self.pages.items():
            if isinstance(values, dict):
                merged.setdefault(name, {}).update(
                    {key: str(value) for key, value in values.items()}
                )
        self.pages = merged

    def page_meta(self, name: str) -> dict[str, str]:
        """Return a copy of the title/description mapping for a fixed page."""
        return dict(self.pages.get(name, {"title": self.author, "description": ""}))


def load_config(project_root: Path) -> SiteConfig:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        SiteConfig with defaults applied for anything the file leaves out.
    """
    config_path = project_root / CONFIG_FILENAME
    values: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                values.update(loaded)
    known = {name for name in SiteConfig.__dataclass_fields__ if name != "project_root"}
    kwargs = {key: value for key, value in values.items() if key in known}
    if "port" in kwargs:
        kwargs["port"] = int(kwargs["port"])
    if not isinstance(kwargs.get("pages", {}), dict):
        kwargs.pop("pages")
    return SiteConfig(project_root=project_root, **kwargs)
