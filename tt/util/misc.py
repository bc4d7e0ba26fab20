import math


# Formats a seconds value as MM:SS.CC. Minutes are not capped at 59 and grow past two digits on very long runs.
# Centiseconds are truncated, never rounded, so 65.256 -> "01:05.25".
def format_elapsed(seconds):
    seconds = max(0.0, float(seconds))
    fraction, whole = math.modf(seconds)
    centis = int(fraction * 100)
    minutes, secs = divmod(int(whole), 60)
    return f"{minutes:02d}:{secs:02d}.{centis:02d}"


# Splits free-form pasted text into task names: one per line, surrounding whitespace trimmed, blank lines dropped.
def split_task_lines(text):
    return [line.strip() for line in text.splitlines() if line.strip()]
