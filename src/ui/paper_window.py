"""
Main window: the sheet of paper, its crumple/burn animation and the
file drop zone.
"""
import math
import mimetypes
import random
import time
from pathlib import Path
from typing import List, Tuple
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFileDialog
)
from PyQt5.QtCore import Qt, QPointF, QRectF, QTimer, pyqtSignal
from PyQt5.QtGui import QPainter, QPen, QColor, QFont, QPolygonF, QBrush, QImage, QPixmap
import numpy as np

from ..core.effects import (
    AudioCue, EffectDispatcher, ShakePulse, Spark, SparksBurst, SparksClear
)
from ..core.game import MESSAGES
from ..core.gesture_classifier import GestureSample
from ..core.types import PaperState


CRUMPLE_LEVELS = {
    PaperState.ACTIVE: 0,
    PaperState.CRUMPLED_1: 1,
    PaperState.CRUMPLED_2: 2,
}

AUDIO_LABELS = {
    AudioCue.CRUMPLE_SOUND: "*crunch*",
    AudioCue.BURN_SOUND: "*whoosh*",
    AudioCue.MUSIC_START: "music on",
    AudioCue.MUSIC_STOP: "music off",
}


class PaperCanvas(QWidget):
    """Draws the paper (flat, crumpled, burning or ashes), sparks and shake."""

    clicked = pyqtSignal()

    def __init__(self, burn_ms: int = 2500, parent=None):
        super().__init__(parent)
        self.setMinimumSize(400, 400)
        self._burn_seconds = max(burn_ms, 1) / 1000.0
        self._state = PaperState.IDLE
        self._file_name = ""

        self._shake_until = 0.0
        self._sparks: Tuple[Spark, ...] = ()
        self._sparks_started = 0.0
        self._burn_started = 0.0

        # ~60 fps repaint while something is moving
        self._anim_timer = QTimer(self)
        self._anim_timer.timeout.connect(self._tick)

    def set_state(self, state: PaperState):
        if state == PaperState.BURNING:
            self._burn_started = time.perf_counter()
        self._state = state
        self._ensure_animating()
        self.update()

    def set_file_name(self, name: str):
        self._file_name = name
        self.update()

    def shake(self, duration_ms: int):
        self._shake_until = time.perf_counter() + duration_ms / 1000.0
        self._ensure_animating()

    def set_sparks(self, sparks: Tuple[Spark, ...]):
        self._sparks = sparks
        self._sparks_started = time.perf_counter()
        self._ensure_animating()
        self.update()

    def _ensure_animating(self):
        if not self._anim_timer.isActive():
            self._anim_timer.start(16)

    def _tick(self):
        busy = (
            time.perf_counter() < self._shake_until
            or bool(self._sparks)
            or self._state == PaperState.BURNING
        )
        if not busy:
            self._anim_timer.stop()
        self.update()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.clicked.emit()

    def _paper_rect(self) -> QRectF:
        w, h = self.width(), self.height()
        pw = min(w * 0.5, h * 0.6 / 1.3)
        ph = pw * 1.3
        return QRectF((w - pw) / 2, (h - ph) / 2, pw, ph)

    def _crumpled_outline(self, rect: QRectF, level: int) -> QPolygonF:
        """Jagged outline that shrinks and roughens with each crumple."""
        rng = random.Random(level)  # Stable shape per level
        shrink = 1.0 - 0.2 * level
        cx, cy = rect.center().x(), rect.center().y()
        rx, ry = rect.width() / 2 * shrink, rect.height() / 2 * shrink
        if level >= 3:
            ry = rx  # Balled up
        points = []
        n = 8 + level * 6
        for i in range(n):
            angle = 2 * math.pi * i / n
            jitter = 1.0 - rng.uniform(0, 0.12 * level)
            points.append(QPointF(cx + math.cos(angle) * rx * jitter,
                                  cy + math.sin(angle) * ry * jitter))
        return QPolygonF(points)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(30, 30, 36))

        now = time.perf_counter()
        if now < self._shake_until:
            painter.translate(random.uniform(-6, 6), random.uniform(-6, 6))

        rect = self._paper_rect()

        if self._state == PaperState.IDLE:
            pen = QPen(QColor(180, 180, 190), 2, Qt.DashLine)
            painter.setPen(pen)
            painter.setBrush(Qt.NoBrush)
            painter.drawRoundedRect(rect, 12, 12)
            painter.setFont(QFont("Sans", 14))
            painter.drawText(rect, Qt.AlignCenter | Qt.TextWordWrap, MESSAGES[PaperState.IDLE])
            return

        if self._state == PaperState.ASHES:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(70, 70, 70))
            base = QRectF(rect.center().x() - rect.width() * 0.25, rect.bottom() - 30,
                          rect.width() * 0.5, 24)
            painter.drawEllipse(base)
            return

        level = CRUMPLE_LEVELS.get(self._state, 3)

        fill = QColor(250, 248, 240)
        if self._state == PaperState.BURNING:
            # Fade from paper white to charcoal while burning
            t = min(1.0, (now - self._burn_started) / self._burn_seconds)
            fill = QColor(int(250 - 200 * t), int(248 - 210 * t), int(240 - 220 * t))

        painter.setPen(QPen(QColor(120, 120, 120), 1))
        painter.setBrush(QBrush(fill))
        if level == 0:
            painter.drawRect(rect)
        else:
            outline = self._crumpled_outline(rect, level)
            painter.drawPolygon(outline)
            # Creases
            painter.setPen(QPen(QColor(160, 160, 160), 1))
            pts = [outline.at(i) for i in range(outline.count())]
            for i in range(0, len(pts) - 3, 3):
                painter.drawLine(pts[i], pts[i + 3])

        if self._file_name and level < 3:
            painter.setPen(QColor(40, 40, 40))
            painter.setFont(QFont("Sans", 12))
            painter.drawText(rect.adjusted(12, 12, -12, -12),
                             Qt.AlignTop | Qt.AlignHCenter | Qt.TextWordWrap, self._file_name)

        self._paint_sparks(painter, now)

    def _paint_sparks(self, painter: QPainter, now: float):
        if not self._sparks:
            return
        w, h = self.width(), self.height()
        elapsed = now - self._sparks_started
        painter.setPen(Qt.NoPen)
        for spark in self._sparks:
            local = elapsed - spark.delay
            if local < 0:
                continue
            p = (local % spark.duration) / spark.duration
            x = spark.x / 100.0 * w + spark.tx * p
            y = spark.y / 100.0 * h + spark.ty * p
            alpha = int(255 * (1.0 - p))
            painter.setBrush(QColor(255, 160 + int(80 * (1.0 - p)), 40, alpha))
            r = 3.0 * spark.scale
            painter.drawEllipse(QPointF(x, y), r, r)


class PaperWindow(QMainWindow, EffectDispatcher):
    """
    Top-level window. Receives effect cues from the paper state machine
    and forwards user actions (file chosen, reset) as signals.
    """

    file_selected = pyqtSignal(str, str)  # name, mime type
    reset_requested = pyqtSignal()

    def __init__(
        self,
        width: int = 900,
        height: int = 700,
        show_preview: bool = True,
        burn_ms: int = 2500,
        parent=None,
    ):
        super().__init__(parent)
        self._state = PaperState.IDLE
        self._burn_ms = burn_ms
        self.setWindowTitle("PaperBurn")
        self.resize(width, height)
        self.setAcceptDrops(True)
        self._setup_ui(show_preview)

    def _setup_ui(self, show_preview: bool):
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        self.setCentralWidget(central)

        self.canvas = PaperCanvas(self._burn_ms)
        self.canvas.clicked.connect(self._handle_canvas_click)
        layout.addWidget(self.canvas, stretch=1)

        self.message_label = QLabel(MESSAGES[PaperState.IDLE])
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setFont(QFont("Sans", 16, QFont.Bold))
        layout.addWidget(self.message_label)

        bottom = QHBoxLayout()
        self.gesture_label = QLabel("Gesture: NONE  Proximity: 0.00")
        bottom.addWidget(self.gesture_label)

        self.audio_label = QLabel("")
        bottom.addWidget(self.audio_label, stretch=1)

        self.webcam_preview = QLabel()
        self.webcam_preview.setFixedSize(160, 90)
        self.webcam_preview.setScaledContents(True)
        self.webcam_preview.setVisible(show_preview)
        bottom.addWidget(self.webcam_preview)

        self.reset_button = QPushButton("Reset")
        self.reset_button.clicked.connect(lambda: self.reset_requested.emit())
        bottom.addWidget(self.reset_button)
        layout.addLayout(bottom)

    # --- EffectDispatcher ---

    def state_changed(self, state: PaperState) -> None:
        self._state = state
        self.canvas.set_state(state)
        self.message_label.setText(MESSAGES[state])
        if state == PaperState.IDLE:
            self.canvas.set_file_name("")

    def play_audio(self, cue: AudioCue) -> None:
        # Audio synthesis is not implemented; show the cue instead
        self.audio_label.setText(AUDIO_LABELS[cue])

    def animate(self, cue) -> None:
        if isinstance(cue, ShakePulse):
            self.canvas.shake(cue.duration_ms)
        elif isinstance(cue, SparksBurst):
            self.canvas.set_sparks(cue.sparks)
        elif isinstance(cue, SparksClear):
            self.canvas.set_sparks(())

    # --- Inputs ---

    def show_sample(self, sample: GestureSample):
        """Update the gesture readout."""
        self.gesture_label.setText(
            f"Gesture: {sample.type.name}  Proximity: {sample.proximity:.2f}"
        )

    def set_webcam_frame(self, frame: np.ndarray):
        """
        Update the webcam preview.

        Args:
            frame: BGR numpy array with landmarks from HandTracker
        """
        if frame is None:
            self.webcam_preview.clear()
            return
        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        qimg = QImage(rgb.data, w, h, ch * w, QImage.Format_RGB888)
        self.webcam_preview.setPixmap(QPixmap.fromImage(qimg))

    def _handle_canvas_click(self):
        if self._state == PaperState.IDLE:
            path, _ = QFileDialog.getOpenFileName(self, "Choose a file to destroy")
            if path:
                self._select_path(Path(path))
        elif self._state == PaperState.ASHES:
            self.reset_requested.emit()

    def _select_path(self, path: Path):
        mime_type = mimetypes.guess_type(path.name)[0] or ""
        self.canvas.set_file_name(path.name)
        self.file_selected.emit(path.name, mime_type)

    def dragEnterEvent(self, event):
        if self._state == PaperState.IDLE and event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        if self._state != PaperState.IDLE:
            return
        urls: List = event.mimeData().urls()
        local = [Path(u.toLocalFile()) for u in urls if u.isLocalFile()]
        if local:
            self._select_path(local[0])
            event.acceptProposedAction()
