from .summary import render_change_set

__all__ = ["render_change_set"]
