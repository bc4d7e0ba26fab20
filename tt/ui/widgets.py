"""Widget builders for the main window: task input, timer controls and lap rows.

Each builder returns a (container, widget_dict) tuple. The widget_dict maps
logical names to sub-widgets for later updates.
"""

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from tt.util import format_elapsed

START_COLOR = "#34C759"
STOP_COLOR = "#FF3B30"
SECONDARY_COLOR = "#007AFF"
TASK_COLOR = "#007AFF"


class TaskInput(QPlainTextEdit):
    """Plain text box that reports pastes separately from ordinary typing."""

    pasted = Signal()

    def insertFromMimeData(self, source):
        super().insertFromMimeData(source)
        if source.hasText():
            self.pasted.emit()


def _control_button_css(color):
    return (f"QPushButton {{ background-color: {color}; color: white; border-radius: 10px; }}"
            f"QPushButton:disabled {{ background-color: #C7C7CC; }}")


def build_task_input(font_family, on_process, on_paste, on_text_changed):
    """Build the task entry box plus its Process Tasks button.

    Returns (container, widget_dict).
    """
    rc = QWidget()
    lay = QVBoxLayout(rc)
    lay.setContentsMargins(0, 0, 0, 0)

    text_edit = TaskInput()
    text_edit.setFont(QFont(font_family, 12))
    text_edit.setFixedHeight(100)
    text_edit.setPlaceholderText("One task per line...")
    text_edit.pasted.connect(on_paste)
    text_edit.textChanged.connect(on_text_changed)
    lay.addWidget(text_edit)

    process_btn = QPushButton("Process Tasks")
    process_btn.setFont(QFont(font_family, 12))
    process_btn.setEnabled(False)
    process_btn.clicked.connect(lambda _=False: on_process())
    lay.addWidget(process_btn, 0, Qt.AlignHCenter)

    return rc, {"input": text_edit, "process": process_btn, "container": rc}


def build_current_task(font_family):
    """Build the "Current Task:" header and the task label under it.

    Returns (container, widget_dict).
    """
    rc = QWidget()
    lay = QVBoxLayout(rc)
    lay.setContentsMargins(0, 0, 0, 0)

    header_font = QFont(font_family, 14)
    header_font.setBold(True)
    header = QLabel("Current Task:")
    header.setFont(header_font)
    header.setAlignment(Qt.AlignCenter)
    lay.addWidget(header)

    task_lbl = QLabel("")
    task_lbl.setFont(QFont(font_family, 16))
    task_lbl.setAlignment(Qt.AlignCenter)
    task_lbl.setWordWrap(True)
    task_lbl.setStyleSheet(f"color: {TASK_COLOR};")
    lay.addWidget(task_lbl)

    return rc, {"header": header, "task": task_lbl, "container": rc}


def build_controls(font_family, on_primary, on_secondary):
    """Build the large time readout and the two context-sensitive buttons.

    Returns (container, widget_dict).
    """
    rc = QWidget()
    lay = QVBoxLayout(rc)
    lay.setContentsMargins(0, 0, 0, 0)

    time_font = QFont("monospace", 40)
    time_font.setStyleHint(QFont.Monospace)
    time_font.setBold(True)
    time_lbl = QLabel(format_elapsed(0))
    time_lbl.setFont(time_font)
    time_lbl.setAlignment(Qt.AlignCenter)
    lay.addWidget(time_lbl)

    btn_font = QFont(font_family, 18)
    primary_btn = QPushButton("Start")
    primary_btn.setFont(btn_font)
    primary_btn.setFixedSize(100, 50)
    primary_btn.setStyleSheet(_control_button_css(START_COLOR))
    primary_btn.clicked.connect(lambda _=False: on_primary())

    secondary_btn = QPushButton("Reset")
    secondary_btn.setFont(btn_font)
    secondary_btn.setFixedSize(100, 50)
    secondary_btn.setStyleSheet(_control_button_css(SECONDARY_COLOR))
    secondary_btn.clicked.connect(lambda _=False: on_secondary())

    btn_row = QHBoxLayout()
    btn_row.setSpacing(30)
    btn_row.addStretch(1)
    btn_row.addWidget(primary_btn)
    btn_row.addWidget(secondary_btn)
    btn_row.addStretch(1)
    lay.addLayout(btn_row)

    return rc, {"time": time_lbl, "primary": primary_btn, "secondary": secondary_btn, "container": rc}


def style_primary_button(button, running):
    button.setText("Stop" if running else "Start")
    button.setStyleSheet(_control_button_css(STOP_COLOR if running else START_COLOR))


def build_lap_row(font_family, entry):
    """Build one row of the lap list from a LapEntry.

    Returns (container, widget_dict).
    """
    rc = QWidget()
    rc.setObjectName("lapRow")
    rc.setStyleSheet("#lapRow { border-bottom: 1px solid #D1D1D6; }")
    lay = QVBoxLayout(rc)
    lay.setContentsMargins(8, 4, 8, 4)
    lay.setSpacing(2)

    top = QHBoxLayout()
    label_font = QFont(font_family, 12)
    label_font.setBold(True)
    number_lbl = QLabel(f"Task {entry.number}:")
    number_lbl.setFont(label_font)
    top.addWidget(number_lbl)
    top.addStretch(1)

    time_font = QFont("monospace", 12)
    time_font.setStyleHint(QFont.Monospace)
    time_lbl = QLabel(format_elapsed(entry.elapsed))
    time_lbl.setFont(time_font)
    top.addWidget(time_lbl)
    lay.addLayout(top)

    task_lbl = None
    if entry.task is not None:
        task_lbl = QLabel(entry.task)
        task_lbl.setFont(QFont(font_family, 10))
        task_lbl.setStyleSheet(f"color: {TASK_COLOR};")
        lay.addWidget(task_lbl)

    return rc, {"number": number_lbl, "time": time_lbl, "task": task_lbl, "container": rc}
