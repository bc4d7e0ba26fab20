"""Task Timer: a stopwatch that walks through a pasted task list one lap at a time."""

__version__ = "1.0.0"
