"""marc static site generator.

This package renders a directory of Markdown documents into HTML files
placed next to their sources. Each document may start with a ``---``
fenced preamble of ``key: value`` lines, and every page is rendered through
one shared Jinja2 layout that can list all documents, newest first.

The main entry point is the CLI module, which builds a site directory.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
