import sys
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QActionGroup, QFont
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from sw.common.logger import log
from sw.core import config
from sw.core.controller import StopwatchController

_BUTTON_SIZE = 72
_TICK_RATES = (30, 60, 120)

# Round buttons, the radius is half the fixed button size.
_STYLESHEET = f"""
QPushButton {{
    border-radius: {_BUTTON_SIZE // 2}px;
    border: 1px solid #8a8a8a;
    background-color: #f2f2f2;
}}
QPushButton:pressed {{
    background-color: #d6d6d6;
}}
"""


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the stopwatch. Shows the elapsed label, the three control buttons and the lap list, and acts
# as the controller's observer.
class MainWindow(QMainWindow):

    def __init__(self, controller=None):
        super().__init__()
        self.setWindowTitle("Stopwatch")

        # -- Load settings --
        self._settings_state = config.load_settings()
        s = self._settings_state["settings"]
        self.always_on_top = s["always_on_top"]
        self.confirm_reset = s["confirm_reset"]

        if self.always_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        if controller is None:
            controller = StopwatchController(tick_hz=s["tick_hz"], parent=self)
        self.controller = controller

        # -- Build UI --
        central = QWidget()
        self.setCentralWidget(central)
        main_lay = QVBoxLayout(central)

        self.elapsed_label = QLabel()
        self.elapsed_label.setAlignment(Qt.AlignCenter)
        label_font = QFont()
        label_font.setPointSize(32)
        label_font.setStyleHint(QFont.Monospace)
        self.elapsed_label.setFont(label_font)
        main_lay.addWidget(self.elapsed_label)

        btn_lay = QHBoxLayout()
        self.reset_button = self._make_button("Reset", self._on_reset)
        self.play_button = self._make_button("Play", self._on_play_toggle)
        self.lap_button = self._make_button("Lap", self._on_lap)
        for btn in (self.reset_button, self.play_button, self.lap_button):
            btn_lay.addWidget(btn)
        main_lay.addLayout(btn_lay)

        self.lap_list = QListWidget()
        main_lay.addWidget(self.lap_list)

        self._build_menu(self.controller.tick_hz)
        self.setStyleSheet(_STYLESHEET)
        self.controller.set_observer(self)
        self._reload_laps()
        QTimer.singleShot(0, self.adjustSize)

    def _make_button(self, text, slot):
        btn = QPushButton(text)
        btn.setFixedSize(_BUTTON_SIZE, _BUTTON_SIZE)
        btn.clicked.connect(slot)
        return btn

    # ------------------------------------------------------------------ #
    #  Settings menu                                                       #
    # ------------------------------------------------------------------ #

    # Every setting in settings.json gets a menu entry. Changes apply immediately and are written out on close.
    def _build_menu(self, tick_hz):
        menu = self.menuBar().addMenu("Settings")

        self.always_on_top_action = QAction("Always on top", self, checkable=True)
        self.always_on_top_action.setChecked(self.always_on_top)
        self.always_on_top_action.toggled.connect(self._on_always_on_top_toggled)
        menu.addAction(self.always_on_top_action)

        self.confirm_reset_action = QAction("Confirm reset", self, checkable=True)
        self.confirm_reset_action.setChecked(self.confirm_reset)
        self.confirm_reset_action.toggled.connect(self._on_confirm_reset_toggled)
        menu.addAction(self.confirm_reset_action)

        rate_menu = menu.addMenu("Refresh rate")
        self._tick_rate_group = QActionGroup(self)
        self._tick_rate_group.setExclusive(True)
        self.tick_rate_actions = {}
        # A hand-edited rate that isn't a preset still shows up as the checked entry
        for hz in sorted(set(_TICK_RATES) | {tick_hz}):
            action = QAction(f"{hz} Hz", self, checkable=True)
            action.setChecked(hz == tick_hz)
            action.triggered.connect(lambda _checked=False, hz=hz: self._on_tick_rate_chosen(hz))
            self._tick_rate_group.addAction(action)
            rate_menu.addAction(action)
            self.tick_rate_actions[hz] = action

    def _on_always_on_top_toggled(self, checked):
        self.always_on_top = checked
        self._settings_state["settings"]["always_on_top"] = checked
        was_visible = self.isVisible()
        self.setWindowFlag(Qt.WindowStaysOnTopHint, checked)
        # Changing window flags hides the window
        if was_visible:
            self.show()
        log.info(f"Always on top set to {checked}")

    def _on_confirm_reset_toggled(self, checked):
        self.confirm_reset = checked
        self._settings_state["settings"]["confirm_reset"] = checked
        log.info(f"Confirm reset set to {checked}")

    def _on_tick_rate_chosen(self, hz):
        self._settings_state["settings"]["tick_hz"] = hz
        self.controller.set_tick_hz(hz)

    # ------------------------------------------------------------------ #
    #  Observer                                                            #
    # ------------------------------------------------------------------ #

    # Ticks are delivered on the GUI thread already, so the label can be set directly.
    def timer_update(self, formatted_elapsed):
        self.elapsed_label.setText(formatted_elapsed)

    # ------------------------------------------------------------------ #
    #  Button handlers                                                     #
    # ------------------------------------------------------------------ #

    def _on_play_toggle(self):
        if self.controller.running:
            self.controller.pause()
            self.play_button.setText("Play")
        else:
            self.controller.play()
            self.play_button.setText("Pause")
        self._reload_laps()

    def _on_reset(self):
        if self.confirm_reset and self.controller.laps:
            answer = QMessageBox.question(self, "Reset", "Reset the stopwatch and clear all laps?")
            if answer != QMessageBox.Yes:
                return
        self.controller.reset()
        self.play_button.setText("Play")
        self._reload_laps()

    def _on_lap(self):
        self.controller.record()
        self._reload_laps()

    def _reload_laps(self):
        self.lap_list.clear()
        self.lap_list.addItems(self.controller.lap_rows())

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self.controller.shutdown()
        try:
            config.save_settings(self._settings_state)
        except OSError as e:
            log.exception("Failed to save settings on exit")
            QMessageBox.warning(self, "Save Error",
                                f"Failed to save settings:\n{e}")
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv=None):
    app = QApplication(sys.argv if argv is None else argv)
    window = MainWindow()
    window.show()
    return app.exec()
