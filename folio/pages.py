"""Page composition for Folio.

Every output page is a body fragment wrapped in the shared ``base`` layout.
Post cards are the summary fragments listed on the home and blog pages.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime

from .posts import Post
from .templates import TemplateLoader, render_template
from .utils import format_date

BASE_TEMPLATE = "base"

NO_POSTS_MESSAGE = "<p>No posts yet.</p>"

POST_CARD_TEMPLATE = """
    <li class="post-card">
      <h3><a href="/blog/{{slug}}/">{{title}}</a></h3>
      <p class="post-meta">{{formattedDate}}</p>
      <p class="post-description">{{description}}</p>
    </li>
  """


def render_post_card(post: Post) -> str:
    """Render the summary card for a post.

    Args:
        post: Post to summarise.

    Returns:
        ``<li class="post-card">`` fragment linking to ``/blog/<slug>/``.
    """
    return render_template(
        POST_CARD_TEMPLATE,
        {
            "slug": post.slug,
            "title": post.title,
            "formattedDate": format_date(post.date),
            "description": post.description,
        },
    )


def render_post_cards(posts: Iterable[Post]) -> str:
    return "\n".join(render_post_card(post) for post in posts)


class PageComposer:
    """Wraps page bodies in the base layout.

    Attributes:
        loader: Template loader used to read the base layout.
    """

    def __init__(self, loader: TemplateLoader):
        self.loader = loader

    def compose(self, body: str, page_data: Mapping[str, str]) -> str:
        """Render the base layout around a body fragment.

        ``content`` and ``year`` are always injected and win over any
        same-named keys in ``page_data``.

        Args:
            body: Page body HTML, inserted verbatim.
            page_data: Page-level values such as title and description.

        Returns:
            Complete HTML document.

        Raises:
            TemplateNotFoundError: If the base layout is missing.
        """
        base = self.loader.read(BASE_TEMPLATE)
        data = {
            **page_data,
            "content": body,
            "year": str(datetime.now().year),
        }
        return render_template(base, data)
