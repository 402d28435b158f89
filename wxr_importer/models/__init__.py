from .aggregate import WXRImport
from .entity import Entity

__all__ = ["Entity", "WXRImport"]
