import lanetruth.utils.decorators

from .decorators import apply_hooks


__all__ = ["apply_hooks"]
