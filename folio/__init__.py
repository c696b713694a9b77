"""Folio personal-site toolkit.

This package holds the build-time pieces of a personal website: typed content
collections for blog posts, projects and work history, the site configuration
model, and a batch image optimizer.

The main entry point is the CLI module, which provides commands for scaffolding
a site, checking its content and optimizing images.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
