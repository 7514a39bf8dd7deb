import logging
from typing import Optional

from PySide6.QtCore import QElapsedTimer, QObject, QTimer, Signal, Slot

from spring_lab.model.spring_lab_model import SpringLabModel

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16  # about 60 FPS


class FrameDriver(QObject):
    """
    Drives a SpringLabModel from a Qt timer, once per frame.

    The elapsed wall-clock time between two timeouts is handed to
    `SpringLabModel.step` unchanged, so a long stall (window hidden, debugger
    break) shows up as a dt above one second and is dropped by the model.
    Listeners (a view, a recorder) connect to `stepped` instead of polling.
    """

    stepped = Signal(float)           # model time after the tick
    playing_changed = Signal(bool)

    def __init__(self, model: SpringLabModel, interval_ms: int = FRAME_INTERVAL_MS,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.model = model
        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self._on_timeout)
        self._clock = QElapsedTimer()

    @property
    def is_running(self) -> bool:
        return self.timer.isActive()

    def start(self) -> None:
        self._clock.start()
        self.timer.start()
        logger.info(f"Frame driver started ({self.timer.interval()} ms interval).")

    def stop(self) -> None:
        self.timer.stop()
        self._clock.invalidate()
        logger.info("Frame driver stopped.")

    @Slot()
    def _on_timeout(self) -> None:
        dt = self._clock.restart() / 1000.0
        self.advance(dt)

    def advance(self, dt: float) -> None:
        """Runs one model tick of `dt` seconds and notifies listeners."""
        self.model.step(dt)
        self.stepped.emit(self.model.time)

    def toggle_pause_resume(self) -> None:
        self.set_playing(not self.model.playing)

    def set_playing(self, playing: bool) -> None:
        if playing == self.model.playing:
            return
        self.model.set_playing(playing)
        logger.info(f"Simulation {'resumed' if playing else 'paused'}.")
        self.playing_changed.emit(self.model.playing)

    def step_forward(self) -> None:
        """Advances one frame while paused (manual frame advance)."""
        was_playing = self.model.playing
        self.model.step_forward()
        self.stepped.emit(self.model.time)
        if was_playing:
            self.playing_changed.emit(False)
