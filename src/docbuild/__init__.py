"""docbuild: compile a directory of Markdown sources with an external compiler."""

__version__ = "0.3.0"
