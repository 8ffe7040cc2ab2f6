import math
from datetime import datetime


# Simply returns the current local time as an ISO8601 string with timezone offset.
def now_iso():
    return datetime.now().astimezone().isoformat()


# Renders elapsed seconds as HH:MM:SS.mmm. Whole seconds are split with integer division/modulo and the
# milliseconds are taken from the fractional part separately, so they are truncated rather than rounded.
# Hours are not capped at two digits, and negative values clamp to zero.
def format_duration(seconds):
    seconds = max(0.0, float(seconds))
    whole = int(seconds)
    ms = math.floor((seconds % 1) * 1000)

    hours = whole // 3600
    minutes = (whole // 60) % 60
    secs = whole % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"
