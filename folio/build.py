"""Site building functionality for Folio.

This module contains the orchestration that turns posts and templates into the
output tree. A build is a single linear pass:

    clean output -> load posts -> home -> blog index -> each post
    -> about -> experiments -> styles -> public

Key functions and classes:
- build_site: Build the whole site for a project root.
- SiteBuilder: Renders and writes every page for a given configuration.
- BuildError: A build failure tied to the file that caused it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .assets import AssetPipeline, StylesNotFoundError
from .config import SiteConfig, load_config
from .pages import NO_POSTS_MESSAGE, PageComposer, render_post_cards
from .posts import Post, PostLoadError, PostRepository
from .templates import TemplateLoader, TemplateNotFoundError
from .utils import ensure_clean_dir, format_date

STATIC_PAGES = ("about", "experiments")


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        posts: Posts that were built, newest first.
        pages: URL paths of every page written, in write order.
        output_dir: Directory where the site was built.
    """

    posts: list[Post]
    output_dir: Path
    pages: list[str] = field(default_factory=list)


class SiteBuilder:
    """Renders every page of the site and writes it to disk.

    Attributes:
        config: Site configuration.
        output_dir: Directory the site is written to.
        loader: Template loader for the templates directory.
        composer: Base layout composer.
        repository: Post repository.
    """

    def __init__(
        self,
        config: SiteConfig,
        output_dir: Path | None = None,
        repository: PostRepository | None = None,
    ):
        self.config = config
        self.output_dir = output_dir or config.output_dir
        self.loader = TemplateLoader(config.templates_dir)
        self.composer = PageComposer(self.loader)
        self.repository = repository or PostRepository(config)
        self._written: list[str] = []

    def build(self, clean_output: bool = True) -> BuildResult:
        """Run a full build.

        Args:
            clean_output: Whether to wipe the output directory first.

        Returns:
            BuildResult with the posts and the pages written.
        """
        print("Building site...\n")
        if clean_output:
            ensure_clean_dir(self.output_dir)
        else:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        self._written = []

        posts = self.repository.get_posts()
        print(f"Found {len(posts)} posts")

        self.build_home(posts)
        self.build_blog_index(posts)
        for post in posts:
            self.build_post(post)
        for name in STATIC_PAGES:
            self.build_static_page(name)

        AssetPipeline(self.config, self.output_dir).run()
        print(f"\nBuild complete! Output in {self._display_output_dir()}")
        return BuildResult(
            posts=posts, output_dir=self.output_dir, pages=list(self._written)
        )

    def build_home(self, posts: list[Post]) -> None:
        recent = render_post_cards(posts[: self.config.recent_posts])
        body = self.loader.render("home", {"posts": recent})
        self._write_page("/", body, self.config.page_meta("home"))

    def build_blog_index(self, posts: list[Post]) -> None:
        cards = render_post_cards(posts) or NO_POSTS_MESSAGE
        body = self.loader.render("blog", {"posts": cards})
        self._write_page("/blog/", body, self.config.page_meta("blog"))

    def build_post(self, post: Post) -> None:
        body = self.loader.render(
            "post",
            {
                "title": post.title,
                "date": post.date,
                "formattedDate": format_date(post.date),
                "content": post.content,
            },
        )
        page_data = {
            "title": f"{post.title} - {self.config.author}",
            "description": post.description,
        }
        self._write_page(f"/blog/{post.slug}/", body, page_data)

    def build_static_page(self, name: str) -> None:
        body = self.loader.read(name)
        self._write_page(f"/{name}/", body, self.config.page_meta(name))

    def _write_page(self, url: str, body: str, page_data: dict[str, str]) -> None:
        """Wrap a body in the base layout and write ``<url>/index.html``.

        Args:
            url: URL path of the page, with leading and trailing slash.
            body: Page body HTML.
            page_data: Title and description for the layout.
        """
        url_path = url.strip("/")
        display = f"/{url_path}/index.html" if url_path else "/index.html"
        print(f"Building: {display}")
        html = self.composer.compose(body, page_data)
        target_dir = self.output_dir / url_path
        target_dir.mkdir(parents=True, exist_ok=True)
        with open(target_dir / "index.html", "w", encoding="utf-8") as f:
            f.write(html)
        self._written.append(url)

    def _display_output_dir(self) -> str:
        try:
            rel = self.output_dir.relative_to(self.config.project_root)
        except ValueError:
            return str(self.output_dir)
        return f"/{rel.as_posix()}"


def build_site(
    project_root: Path,
    config: SiteConfig | None = None,
    clean_output: bool = True,
    output_dir_override: Path | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        config: Optional configuration; loaded from folio.yaml when omitted.
        clean_output: Whether to wipe the output directory before building.
        output_dir_override: Optional path to write the build output instead of config output_dir.

    Returns:
        BuildResult containing the posts, pages written and output directory.

    Raises:
        BuildError: If a template, post or the styles directory is missing or malformed.
    """
    config = config or load_config(project_root)
    builder = SiteBuilder(config, output_dir=output_dir_override)
    try:
        return builder.build(clean_output=clean_output)
    except TemplateNotFoundError as exc:
        raise BuildError(
            exc.path, f"Template not found: {exc.path.name}", exc
        ) from exc
    except PostLoadError as exc:
        raise BuildError(exc.source_path, exc.message, exc) from exc
    except StylesNotFoundError as exc:
        raise BuildError(exc.path, "Styles directory not found", exc) from exc
