from .entities import Chapter, Resolution, VideoPlan

__all__ = ["Chapter", "Resolution", "VideoPlan"]
