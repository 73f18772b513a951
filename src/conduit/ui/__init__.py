from .render import DEFAULT_LAYOUT, render, templates

__all__ = ["DEFAULT_LAYOUT", "render", "templates"]
