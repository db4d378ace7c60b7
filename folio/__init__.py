"""Folio static site generator.

This package builds a small personal blog from Markdown posts and flat HTML templates.
Templates use ``{{placeholder}}`` substitution only; there are no loops, conditionals or partials.

The main entry point is the CLI module, which provides commands for building the site,
running the development server and creating new posts.

Layout of the pipeline:
- templates: placeholder rendering and template loading
- posts: loading Markdown posts into Post records
- pages: post cards and base layout composition
- assets: copying styles and public files
- build: orchestration of a full site build
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
