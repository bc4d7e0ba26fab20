"""Task/timer state machine: pure logic, no UI.

The controller owns the elapsed time, the running flag, the parsed task list,
the active task pointer and the lap history. The presentation layer calls one of
the two dispatchers (or ``parse_tasks``) and then re-reads state to redraw; the
controller never pushes updates.

Ticks come from a tick source created through an injected factory::

    factory(interval_seconds, callback) -> source   # source.start(), source.stop()

The source calls ``callback(delta_seconds)`` periodically. Without a factory the
controller still works, with ``tick()`` driven by hand.
"""

import copy
from dataclasses import dataclass, field
from tt.common.logger import log
from tt.util import format_elapsed, split_task_lines

COMPLETION_MESSAGE = "All tasks completed!"
DEFAULT_TICK_INTERVAL = 0.01


@dataclass
class TimerState:
    """Everything the view needs to draw itself."""
    elapsed: float = 0.0
    running: bool = False
    tasks: list = field(default_factory=list)
    current_task_index: int = 0
    laps: list = field(default_factory=list)  # most recent first


@dataclass(frozen=True)
class LapEntry:
    number: int         # 1-based task number this lap closed
    elapsed: float
    task: str | None    # None when no task lines up with this lap


class TaskTimerController:

    def __init__(self, tick_source_factory=None, interval=DEFAULT_TICK_INTERVAL):
        self._state = TimerState()
        self._tick_source_factory = tick_source_factory
        self.interval = interval
        self._tick_source = None
        # Bumped on every start and stop. Callbacks carry the generation they were created under, so anything
        # delivered by a cancelled source is recognisably stale.
        self._generation = 0

    # ------------------------------------------------------------------ #
    #  Read accessors                                                      #
    # ------------------------------------------------------------------ #

    @property
    def state(self):
        return copy.deepcopy(self._state)

    @property
    def elapsed(self):
        return self._state.elapsed

    @property
    def running(self):
        return self._state.running

    @property
    def tasks(self):
        return list(self._state.tasks)

    @property
    def current_task_index(self):
        return self._state.current_task_index

    @property
    def laps(self):
        return list(self._state.laps)

    @property
    def formatted_time(self):
        return format_elapsed(self._state.elapsed)

    @property
    def primary_label(self):
        return "Stop" if self._state.running else "Start"

    @property
    def secondary_label(self):
        return "Lap" if self._state.running else "Reset"

    @property
    def has_tick_source(self):
        return self._tick_source is not None

    def current_task_label(self):
        s = self._state
        if s.current_task_index < len(s.tasks):
            return s.tasks[s.current_task_index]
        return COMPLETION_MESSAGE

    def lap_entries(self):
        """Pair each lap with the task it closed, newest first.

        The lap at position ``i`` closed task number ``len(laps) - i``, i.e.
        ``tasks[len(laps) - i - 1]`` when that index exists.
        """
        s = self._state
        count = len(s.laps)
        entries = []
        for i, value in enumerate(s.laps):
            task_index = count - i - 1
            task = s.tasks[task_index] if 0 <= task_index < len(s.tasks) else None
            entries.append(LapEntry(number=count - i, elapsed=value, task=task))
        return entries

    # ------------------------------------------------------------------ #
    #  Dispatchers (what the two buttons call)                             #
    # ------------------------------------------------------------------ #

    def dispatch_primary(self):
        if self._state.running:
            self.stop()
        else:
            self.start()

    def dispatch_secondary(self):
        if self._state.running:
            self.lap()
            self.advance_task()
        else:
            self.reset()

    # ------------------------------------------------------------------ #
    #  Operations                                                          #
    # ------------------------------------------------------------------ #

    # Replaces the task list with the non-blank, trimmed lines of `text`. Existing laps are kept and pair with the new
    # list by position (see lap_entries). Refused while running, so the active task pointer never jumps mid-run.
    def parse_tasks(self, text):
        if self._state.running:
            log.warning("Ignored task list update while the timer is running")
            return False
        self._state.tasks = split_task_lines(text)
        self._state.current_task_index = 0
        log.debug(f"Parsed {len(self._state.tasks)} tasks")
        return True

    def start(self):
        if self._state.running:
            return
        self._state.running = True
        self._generation += 1
        if self._tick_source_factory is not None:
            generation = self._generation
            self._tick_source = self._tick_source_factory(
                self.interval, lambda delta: self._on_source_tick(generation, delta)
            )
            self._tick_source.start()
        log.debug(f"Started timer at {self.formatted_time} (generation {self._generation})")

    def stop(self):
        if not self._state.running:
            return
        self._generation += 1
        if self._tick_source is not None:
            self._tick_source.stop()
            self._tick_source = None
        self._state.running = False
        log.debug(f"Stopped timer at {self.formatted_time}")

    def tick(self, delta):
        if not self._state.running:
            return
        self._state.elapsed += max(0.0, delta)

    def _on_source_tick(self, generation, delta):
        if generation != self._generation:
            return
        self.tick(delta)

    def lap(self):
        if not self._state.running:
            log.warning("Ignored lap while the timer is stopped")
            return
        self._state.laps.insert(0, self._state.elapsed)
        log.debug(f"Recorded lap {len(self._state.laps)} at {self.formatted_time}")

    # Moves to the next task. Finishing the last task (or lapping with no tasks at all) stops the timer and parks the
    # index one past the end, which reads as the completion message.
    def advance_task(self):
        s = self._state
        if s.current_task_index >= len(s.tasks) - 1:
            self.stop()
            s.current_task_index = len(s.tasks)
            log.info(f"All tasks completed at {self.formatted_time}")
        else:
            s.current_task_index += 1
            log.debug(f"Advanced to task {s.current_task_index + 1} of {len(s.tasks)}")

    def reset(self):
        if self._state.running:
            log.warning("Ignored reset while the timer is running")
            return
        self._state.elapsed = 0.0
        self._state.laps.clear()
        self._state.current_task_index = 0
        log.debug("Reset timer to 00:00.00")
