"""Settings dialog for Task Timer: tabbed sidebar layout."""

from PySide6.QtCore import Qt, QUrl
from PySide6.QtGui import QDesktopServices, QFont, QFontDatabase
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QSpinBox,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)
from tt.common.setup import PATHS
from tt.core.config import MIN_TICK_INTERVAL_MS, MAX_TICK_INTERVAL_MS

# Small settings dialog with a left sidebar for the General and Timer pages. Opens from the gear button in the main
# window.
class ConfigDialog(QDialog):

    def __init__(self, parent, cfg):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)

        # Output attributes, read by MainWindow after the dialog closes
        self.chosen_always_on_top = cfg.get("always_on_top", False)
        self.chosen_confirm_reset = cfg.get("confirm_reset", False)
        self.chosen_font = cfg.get("font", "Calibri")
        self.chosen_tick_interval_ms = cfg.get("tick_interval_ms", 10)
        self.chosen_monotonic_ticks = cfg.get("monotonic_ticks", True)
        self.settings_changed = False

        outer = QVBoxLayout(self)
        body = QHBoxLayout()

        self._tab_list = QListWidget()
        self._tab_list.setFixedWidth(120)
        self._tab_list.setFont(QFont("Calibri", 12))
        self._tab_list.addItem("General")
        self._tab_list.addItem("Timer")
        self._tab_list.setCurrentRow(0)
        self._tab_list.currentRowChanged.connect(self._on_tab_changed)
        body.addWidget(self._tab_list)

        self._stack = QStackedWidget()
        self._stack.addWidget(self._build_general_page(cfg))
        self._stack.addWidget(self._build_timer_page(cfg))
        body.addWidget(self._stack, 1)
        outer.addLayout(body, 1)

        # Bottom row: restart indicator + Apply
        btn_row = QHBoxLayout()
        self._restart_lbl = QLabel("* Takes effect on next Start")
        self._restart_lbl.setFont(QFont("Calibri", 10))
        self._restart_lbl.setStyleSheet("color: #888888;")
        self._restart_lbl.setVisible(False)
        btn_row.addWidget(self._restart_lbl)
        btn_row.addStretch()
        apply_btn = QPushButton("Apply")
        apply_btn.setFont(QFont("Calibri", 12))
        apply_btn.clicked.connect(self._apply)
        btn_row.addWidget(apply_btn)
        outer.addLayout(btn_row)

        self._initial_tick_interval_ms = self.chosen_tick_interval_ms
        self._initial_monotonic_ticks = self.chosen_monotonic_ticks

    def _on_tab_changed(self, index):
        self._stack.setCurrentIndex(index)

    # Tick settings only reach the controller when the next tick source is created
    def _check_restart_needed(self):
        changed = (self._tick_interval.value() != self._initial_tick_interval_ms
                   or (self._tick_mode.currentText() == "Measured") != self._initial_monotonic_ticks)
        self._restart_lbl.setVisible(changed)

    @staticmethod
    def _row(text, tooltip, widget):
        row = QHBoxLayout()
        lbl = QLabel(text)
        lbl.setFont(QFont("Calibri", 12, QFont.Bold))
        lbl.setToolTip(tooltip)
        widget.setMinimumWidth(200)
        widget.setToolTip(tooltip)
        row.addWidget(lbl)
        row.addWidget(widget)
        return row

    # ------------------------------------------------------------------ #
    #  General page                                                        #
    # ------------------------------------------------------------------ #

    def _build_general_page(self, cfg):
        page = QWidget()
        lay = QVBoxLayout(page)
        lay.setSpacing(12)

        self._always_on_top = QComboBox()
        self._always_on_top.addItems(["Always On Top", "Normal Window"])
        self._always_on_top.setCurrentText(
            "Always On Top" if cfg.get("always_on_top", False) else "Normal Window")
        lay.addLayout(self._row(
            "Window Behavior:",
            "Always On Top: stays above other windows while you work through tasks.\n\nNormal Window: behaves like a normal window.",
            self._always_on_top))

        self._confirm_reset = QComboBox()
        self._confirm_reset.addItems(["Yes", "No"])
        self._confirm_reset.setCurrentText("Yes" if cfg.get("confirm_reset", False) else "No")
        lay.addLayout(self._row(
            "Confirm Reset:",
            "Whether to ask before Reset clears the elapsed time and all laps.",
            self._confirm_reset))

        self._font = QComboBox()
        families = QFontDatabase.families()
        current_font = cfg.get("font", "Calibri")
        if current_font not in families:
            self._font.addItem(current_font)
        self._font.addItems(families)
        self._font.setCurrentText(current_font)
        lay.addLayout(self._row("Program Font:", "Font used by task and lap labels.", self._font))

        sep = QFrame()
        sep.setFrameShape(QFrame.HLine)
        sep.setFrameShadow(QFrame.Sunken)
        lay.addWidget(sep)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        folder_btn = QPushButton("Open Data Folder")
        folder_btn.setFont(QFont("Calibri", 11))
        folder_btn.clicked.connect(
            lambda: QDesktopServices.openUrl(QUrl.fromLocalFile(str(PATHS.data)))
        )
        btn_row.addWidget(folder_btn)
        lay.addLayout(btn_row)

        lay.addStretch()
        return page

    # ------------------------------------------------------------------ #
    #  Timer page                                                          #
    # ------------------------------------------------------------------ #

    def _build_timer_page(self, cfg):
        page = QWidget()
        lay = QVBoxLayout(page)
        lay.setSpacing(12)

        self._tick_interval = QSpinBox()
        self._tick_interval.setRange(MIN_TICK_INTERVAL_MS, MAX_TICK_INTERVAL_MS)
        self._tick_interval.setValue(cfg.get("tick_interval_ms", 10))
        self._tick_interval.setSuffix(" ms")
        self._tick_interval.valueChanged.connect(self._check_restart_needed)
        lay.addLayout(self._row(
            "Tick Interval:",
            "How often the time display advances while running.",
            self._tick_interval))

        self._tick_mode = QComboBox()
        self._tick_mode.addItems(["Measured", "Nominal"])
        self._tick_mode.setCurrentText("Measured" if cfg.get("monotonic_ticks", True) else "Nominal")
        self._tick_mode.currentTextChanged.connect(self._check_restart_needed)
        lay.addLayout(self._row(
            "Tick Timing:",
            "Measured: each tick adds the real time since the last one.\n\nNominal: each tick adds exactly one tick interval, even if it fired late.",
            self._tick_mode))

        lay.addStretch()
        return page

    def _apply(self):
        self.chosen_always_on_top = self._always_on_top.currentText() == "Always On Top"
        self.chosen_confirm_reset = self._confirm_reset.currentText() == "Yes"
        self.chosen_font = self._font.currentText()
        self.chosen_tick_interval_ms = self._tick_interval.value()
        self.chosen_monotonic_ticks = self._tick_mode.currentText() == "Measured"
        self.settings_changed = True
        self.accept()

    # Settings dict matching the keys tt.core.config saves
    def chosen_settings(self):
        return {
            "tick_interval_ms": self.chosen_tick_interval_ms,
            "monotonic_ticks": self.chosen_monotonic_ticks,
            "always_on_top": self.chosen_always_on_top,
            "confirm_reset": self.chosen_confirm_reset,
            "font": self.chosen_font,
        }
