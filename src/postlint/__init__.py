"""postlint — lint and index a folder of dated Markdown blog posts."""

__version__ = "0.1.0"
