from .misc import format_duration, now_iso

__all__ = ["format_duration", "now_iso"]
