from .misc import format_elapsed, split_task_lines

__all__ = ["format_elapsed", "split_task_lines"]
