from .settings import ConfigDialog

__all__ = ["ConfigDialog"]
