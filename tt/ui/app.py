import ctypes
import sys
from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QApplication,
    QDialog,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)
from tt.common.logger import log
from tt.core import config
from tt.core.controller import TaskTimerController
from tt.ui.dialogs import ConfigDialog
from tt.ui.ticker import QtTickSource
from tt.ui.widgets import (
    build_controls,
    build_current_task,
    build_lap_row,
    build_task_input,
    style_primary_button,
)


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the task timer. Every handler calls into the controller and then redraws from its state; the
# controller itself never pushes anything to the view.
class MainWindow(QMainWindow):

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Task Timer")

        # -- Settings --
        s = config.load_settings()
        self.font_family = s["font"]
        self.always_on_top = s["always_on_top"]
        self.confirm_reset = s["confirm_reset"]
        self.tick_interval_ms = s["tick_interval_ms"]
        self.monotonic_ticks = s["monotonic_ticks"]

        if self.always_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        # -- Controller --
        self.controller = TaskTimerController(
            tick_source_factory=self._make_tick_source,
            interval=config.tick_interval_seconds(s),
        )

        # -- Build UI --
        central = QWidget()
        self.setCentralWidget(central)
        self._main_lay = QVBoxLayout(central)
        self._main_lay.setSpacing(20)
        self._build_ui()
        self._render()
        QTimer.singleShot(0, self.adjustSize)

    # Tick sources are built per Start, so setting changes apply from the next run
    def _make_tick_source(self, interval, callback):
        return QtTickSource(interval, lambda delta: self._on_tick(callback, delta),
                            parent=self, monotonic=self.monotonic_ticks)

    # ------------------------------------------------------------------ #
    #  Layout                                                              #
    # ------------------------------------------------------------------ #

    def _build_ui(self):
        while self._main_lay.count():
            item = self._main_lay.takeAt(0)
            w = item.widget()
            if w:
                w.hide()
                w.deleteLater()

        input_box, self._input_w = build_task_input(
            self.font_family,
            on_process=self._on_process,
            on_paste=self._on_paste,
            on_text_changed=self._on_text_changed,
        )
        self._main_lay.addWidget(input_box)

        current_box, self._current_w = build_current_task(self.font_family)
        self._main_lay.addWidget(current_box)

        controls_box, self._controls_w = build_controls(
            self.font_family,
            on_primary=self._on_primary,
            on_secondary=self._on_secondary,
        )
        self._main_lay.addWidget(controls_box)

        # Lap list
        self._laps_widget = QWidget()
        self._laps_lay = QVBoxLayout(self._laps_widget)
        self._laps_lay.setContentsMargins(0, 0, 0, 0)
        self._laps_lay.setSpacing(0)
        self._laps_lay.addStretch(1)
        self._laps_scroll = QScrollArea()
        self._laps_scroll.setWidgetResizable(True)
        self._laps_scroll.setMaximumHeight(200)
        self._laps_scroll.setWidget(self._laps_widget)
        self._main_lay.addWidget(self._laps_scroll)
        self._rendered_laps = None
        self._lap_rows = []

        # Footer: settings
        footer = QWidget()
        f_lay = QHBoxLayout(footer)
        f_lay.setContentsMargins(0, 0, 0, 0)
        f_lay.addStretch(1)
        cfg_btn = QPushButton("\u2699")
        cfg_btn.setToolTip("Settings")
        cfg_btn.setFixedSize(32, 32)
        cfg_btn.clicked.connect(self._on_config)
        f_lay.addWidget(cfg_btn)
        self._main_lay.addWidget(footer)

    # ------------------------------------------------------------------ #
    #  Rendering                                                           #
    # ------------------------------------------------------------------ #

    def _render(self):
        c = self.controller
        running = c.running

        self._input_w["process"].setEnabled(
            bool(self._input_w["input"].toPlainText().strip()) and not running)

        self._current_w["container"].setVisible(bool(c.tasks))
        self._current_w["task"].setText(c.current_task_label())

        self._controls_w["time"].setText(c.formatted_time)
        style_primary_button(self._controls_w["primary"], running)
        self._controls_w["secondary"].setText(c.secondary_label)

        self._render_laps()

    # Lap rows are only rebuilt when the laps or their task pairing change, not on every tick
    def _render_laps(self):
        entries = self.controller.lap_entries()
        key = tuple(entries)
        if key == self._rendered_laps:
            return
        self._rendered_laps = key
        self._lap_rows = []

        while self._laps_lay.count() > 1:
            item = self._laps_lay.takeAt(0)
            w = item.widget()
            if w:
                w.hide()
                w.deleteLater()
        for idx, entry in enumerate(entries):
            row, widget_dict = build_lap_row(self.font_family, entry)
            self._lap_rows.append(widget_dict)
            self._laps_lay.insertWidget(idx, row)
        self._laps_scroll.setVisible(bool(entries))

    # ------------------------------------------------------------------ #
    #  Handlers                                                            #
    # ------------------------------------------------------------------ #

    def _on_tick(self, callback, delta):
        callback(delta)
        self._controls_w["time"].setText(self.controller.formatted_time)

    def _on_text_changed(self):
        self._input_w["process"].setEnabled(
            bool(self._input_w["input"].toPlainText().strip()) and not self.controller.running)

    def _on_process(self):
        if self.controller.parse_tasks(self._input_w["input"].toPlainText()):
            log.info(f"Loaded {len(self.controller.tasks)} tasks")
        self._render()

    # Pasting a list processes it right away, same as pressing Process Tasks
    def _on_paste(self):
        self._on_process()

    def _on_primary(self):
        self.controller.dispatch_primary()
        self._render()

    def _on_secondary(self):
        c = self.controller
        if not c.running and self.confirm_reset and c.laps:
            if QMessageBox.question(
                    self, "Confirm", "Reset the timer and clear all laps?"
            ) != QMessageBox.Yes:
                return
        c.dispatch_secondary()
        self._render()

    # ------------------------------------------------------------------ #
    #  Settings dialog                                                     #
    # ------------------------------------------------------------------ #

    def _settings_dict(self):
        return {
            "tick_interval_ms": self.tick_interval_ms,
            "monotonic_ticks": self.monotonic_ticks,
            "always_on_top": self.always_on_top,
            "confirm_reset": self.confirm_reset,
            "font": self.font_family,
        }

    def _on_config(self):
        dlg = ConfigDialog(self, self._settings_dict())
        if dlg.exec() != QDialog.Accepted or not dlg.settings_changed:
            return

        old_aot = self.always_on_top
        old_font = self.font_family
        chosen = dlg.chosen_settings()
        self.tick_interval_ms = chosen["tick_interval_ms"]
        self.monotonic_ticks = chosen["monotonic_ticks"]
        self.always_on_top = chosen["always_on_top"]
        self.confirm_reset = chosen["confirm_reset"]
        self.font_family = chosen["font"]
        self.controller.interval = config.tick_interval_seconds(chosen)

        try:
            config.save_settings(self._settings_dict())
        except OSError as e:
            log.warning("Failed to save settings", exc_info=True)
            QMessageBox.warning(self, "Save Error", f"Failed to save settings:\n{e}")

        if self.font_family != old_font:
            typed = self._input_w["input"].toPlainText()
            self._build_ui()
            self._input_w["input"].setPlainText(typed)
            self._render()
            QTimer.singleShot(0, self.adjustSize)

        if self.always_on_top != old_aot:
            if sys.platform == "win32":
                hwnd = int(self.winId())
                flag = -1 if self.always_on_top else -2
                ctypes.windll.user32.SetWindowPos(
                    hwnd, flag, 0, 0, 0, 0, 0x0013)
            else:
                self.setWindowFlag(
                    Qt.WindowStaysOnTopHint, self.always_on_top)
                self.show()

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self.controller.stop()
        log.info(f"Closing with {len(self.controller.laps)} laps recorded at {self.controller.formatted_time}")
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())
