import shutil
from datetime import datetime
from pathlib import Path

import pytest

from folio.assets import AssetPipeline, StylesNotFoundError
from folio.build import BuildError, BuildResult, SiteBuilder, build_site
from folio.config import SiteConfig

TEMPLATES = {
    "base": (
        "<html><head><title>{{title}}</title>"
        '<meta name="description" content="{{description}}"></head>'
        "<body>{{content}}<footer>&copy; {{year}}</footer></body></html>"
    ),
    "home": "<section class=\"home\"><ul>{{posts}}</ul></section>",
    "blog": "<section class=\"blog\"><ul>{{posts}}</ul></section>",
    "post": (
        "<article><h1>{{title}}</h1>"
        '<time datetime="{{date}}">{{formattedDate}}</time>{{content}}</article>'
    ),
    "about": "<section>About {{title}}</section>",
    "experiments": "<section>Experiments</section>",
}


def create_project(tmp_path: Path, posts: int = 4) -> Path:
    project = tmp_path
    templates = project / "src" / "templates"
    templates.mkdir(parents=True)
    for name, source in TEMPLATES.items():
        (templates / f"{name}.html").write_text(source, encoding="utf-8")
    styles = project / "src" / "styles"
    (styles / "components").mkdir(parents=True)
    (styles / "main.css").write_text("body{}", encoding="utf-8")
    (styles / "components" / "card.css").write_text(".post-card{}", encoding="utf-8")

    content = project / "content" / "posts"
    content.mkdir(parents=True)
    for index in range(1, posts + 1):
        (content / f"post-{index}.md").write_text(
            f"---\ntitle: Post {index}\ndate: 2025-01-{index:02d}\n"
            f"description: Summary {index}\n---\nBody of post {index}\n",
            encoding="utf-8",
        )
    return project


def read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def test_build_site_writes_full_tree(tmp_path, capsys):
    project = create_project(tmp_path)
    result = build_site(project)
    out = project / "dist"

    assert isinstance(result, BuildResult)
    assert result.output_dir == out
    assert [p.slug for p in result.posts] == ["post-4", "post-3", "post-2", "post-1"]
    assert result.pages == [
        "/",
        "/blog/",
        "/blog/post-4/",
        "/blog/post-3/",
        "/blog/post-2/",
        "/blog/post-1/",
        "/about/",
        "/experiments/",
    ]
    for rel in [
        "index.html",
        "blog/index.html",
        "blog/post-1/index.html",
        "about/index.html",
        "experiments/index.html",
        "styles/main.css",
        "styles/components/card.css",
    ]:
        assert (out / rel).is_file(), rel

    logged = capsys.readouterr().out
    assert "Building site..." in logged
    assert "Found 4 posts" in logged
    assert "Building: /index.html" in logged
    assert "Building: /blog/post-1/index.html" in logged
    assert "Copying: /styles/" in logged
    assert "Build complete! Output in /dist" in logged
    assert logged.index("Building: /experiments/index.html") < logged.index("Copying: /styles/")


def test_home_page_shows_three_recent(tmp_path):
    project = create_project(tmp_path)
    build_site(project)
    home = read(project / "dist" / "index.html")

    assert home.count('<li class="post-card">') == 3
    assert '<a href="/blog/post-4/">Post 4</a>' in home
    assert '<a href="/blog/post-2/">Post 2</a>' in home
    assert "/blog/post-1/" not in home
    assert "<title>Mohanad Elhag - Frontend Engineer</title>" in home
    assert f"&copy; {datetime.now().year}" in home


def test_blog_index_lists_all_posts(tmp_path):
    project = create_project(tmp_path)
    build_site(project)
    blog = read(project / "dist" / "blog" / "index.html")
    assert blog.count('<li class="post-card">') == 4
    assert "<title>Blog - Mohanad Elhag</title>" in blog
    assert "January 3, 2025" in blog
    assert "Summary 3" in blog


def test_post_page_content(tmp_path):
    project = create_project(tmp_path)
    build_site(project)
    page = read(project / "dist" / "blog" / "post-2" / "index.html")
    assert "<title>Post 2 - Mohanad Elhag</title>" in page
    assert '<meta name="description" content="Summary 2">' in page
    assert "<h1>Post 2</h1>" in page
    assert '<time datetime="2025-01-02">January 2, 2025</time>' in page
    assert "<p>Body of post 2</p>" in page


def test_static_pages_are_passthrough(tmp_path):
    project = create_project(tmp_path)
    build_site(project)
    about = read(project / "dist" / "about" / "index.html")
    # the body is inserted verbatim and never re-scanned
    assert "<section>About {{title}}</section>" in about
    assert "<title>About - Mohanad Elhag</title>" in about
    experiments = read(project / "dist" / "experiments" / "index.html")
    assert "<title>Experiments - Mohanad Elhag</title>" in experiments


def test_zero_posts(tmp_path, capsys):
    project = create_project(tmp_path, posts=0)
    result = build_site(project)
    assert result.posts == []
    home = read(project / "dist" / "index.html")
    blog = read(project / "dist" / "blog" / "index.html")
    assert '<li class="post-card">' not in home
    assert "<p>No posts yet.</p>" in blog
    assert "Found 0 posts" in capsys.readouterr().out


def test_missing_content_dir_still_builds(tmp_path, capsys):
    project = create_project(tmp_path, posts=0)
    (project / "content" / "posts").rmdir()
    build_site(project)
    assert "<p>No posts yet.</p>" in read(project / "dist" / "blog" / "index.html")
    assert "No content/posts directory found" in capsys.readouterr().out


def test_output_dir_recreated(tmp_path):
    project = create_project(tmp_path)
    stale = project / "dist" / "blog" / "removed-post" / "index.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")
    build_site(project)
    assert not stale.exists()


def test_missing_template_fails(tmp_path):
    project = create_project(tmp_path)
    (project / "src" / "templates" / "experiments.html").unlink()
    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert excinfo.value.source_path == project / "src" / "templates" / "experiments.html"
    assert "Template not found" in excinfo.value.message


def test_missing_base_template_fails(tmp_path):
    project = create_project(tmp_path)
    (project / "src" / "templates" / "base.html").unlink()
    with pytest.raises(BuildError):
        build_site(project)


def test_malformed_post_aborts_build(tmp_path):
    project = create_project(tmp_path)
    bad = project / "content" / "posts" / "bad.md"
    bad.write_text("---\ntitle: [oops\n---\nbody", encoding="utf-8")
    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert excinfo.value.source_path == bad
    assert not (project / "dist" / "index.html").exists()


def test_missing_styles_fails(tmp_path):
    project = create_project(tmp_path)
    shutil.rmtree(project / "src" / "styles")
    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert excinfo.value.message == "Styles directory not found"
    # pages are written before assets are copied
    assert (project / "dist" / "about" / "index.html").exists()


def test_public_assets_copied_to_root(tmp_path, capsys):
    project = create_project(tmp_path)
    public = project / "public"
    (public / "images").mkdir(parents=True)
    (public / "favicon.ico").write_bytes(b"icon")
    (public / "images" / "me.png").write_bytes(b"png")
    build_site(project)
    out = project / "dist"
    assert (out / "favicon.ico").read_bytes() == b"icon"
    assert (out / "images" / "me.png").read_bytes() == b"png"
    assert "Copying: /public/ assets" in capsys.readouterr().out


def test_asset_pipeline_without_public(tmp_path, capsys):
    project = create_project(tmp_path)
    out = tmp_path / "out"
    AssetPipeline(SiteConfig(project_root=project), out).run()
    assert (out / "styles" / "main.css").exists()
    assert "public" not in capsys.readouterr().out


def test_asset_pipeline_missing_styles(tmp_path):
    with pytest.raises(StylesNotFoundError):
        AssetPipeline(SiteConfig(project_root=tmp_path), tmp_path / "out").copy_styles()


def test_output_override_and_custom_config(tmp_path):
    project = create_project(tmp_path)
    (project / "folio.yaml").write_text(
        "author: Jane\nrecent_posts: 1\n", encoding="utf-8"
    )
    staging = tmp_path / "staging"
    result = build_site(project, output_dir_override=staging)
    assert result.output_dir == staging
    home = read(staging / "index.html")
    assert home.count('<li class="post-card">') == 1
    assert "<title>Jane - Frontend Engineer</title>" in home
    assert not (project / "dist").exists()


def test_negative_recent_posts_shows_no_cards(tmp_path):
    project = create_project(tmp_path)
    (project / "folio.yaml").write_text("recent_posts: -1\n", encoding="utf-8")
    build_site(project)
    home = read(project / "dist" / "index.html")
    blog = read(project / "dist" / "blog" / "index.html")
    assert '<li class="post-card">' not in home
    assert blog.count('<li class="post-card">') == 4


def test_site_builder_with_explicit_config(tmp_path):
    project = create_project(tmp_path, posts=1)
    config = SiteConfig(project_root=project, output_dir=tmp_path / "site-out")
    result = SiteBuilder(config).build()
    assert result.output_dir == tmp_path / "site-out"
    assert (tmp_path / "site-out" / "blog" / "post-1" / "index.html").exists()
