from .settings import LabelCase, Settings, get_settings

__all__ = ["LabelCase", "Settings", "get_settings"]
