"""gist-todo: a personal task list kept in sync with a private GitHub Gist."""

__version__ = "0.1.0"
