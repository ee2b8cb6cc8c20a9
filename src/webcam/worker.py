"""
Background worker for MediaPipe hand tracking and gesture classification.
Runs in a separate QThread to avoid blocking the UI.
"""
import time
import threading
from typing import Optional, Tuple
import numpy as np
from PyQt5.QtCore import QObject, pyqtSignal

from ..core.frames import FrameGate
from ..core.gesture_classifier import GestureSample, InvalidInput, classify
from .hand_tracker import HandTracker, HandLandmarks


class WebcamWorker(QObject):
    """
    Worker class that handles the camera -> classifier loop.

    Each camera frame is classified at most once; the resulting
    GestureSample is emitted for the game loop on the UI thread.
    """
    # Signals
    sample_ready = pyqtSignal(object)  # Emits GestureSample
    frame_ready = pyqtSignal(object)   # Emits numpy array (BGR frame with landmarks)
    error = pyqtSignal(str)

    PREVIEW_INTERVAL = 1.0 / 15

    def __init__(self, config, tracker: Optional[HandTracker] = None, parent=None):
        super().__init__(parent)
        self._config = config
        self._tracker = tracker
        self._is_running = False

        # Latest (frame_id, frame, landmarks) from the capture thread
        self._latest: Tuple[int, Optional[np.ndarray], Optional[HandLandmarks]] = (0, None, None)
        self._latest_lock = threading.Lock()
        self._capture_thread: Optional[threading.Thread] = None
        self._frames = FrameGate()
        self._last_preview_time = 0.0

    def _capture_loop(self):
        """Background thread to pull camera frames as fast as possible."""
        while self._is_running:
            try:
                self.capture()
            except Exception as e:
                print(f"Capture thread error: {e}")
                time.sleep(0.1) # Cool down on error

    def capture(self):
        """Read one frame from the tracker and publish it if it is new."""
        latest = self._tracker.read()
        with self._latest_lock:
            # A failed read repeats the old id; keep the frame it belongs to
            if latest[0] != self._latest[0]:
                self._latest = latest

    def poll(self) -> bool:
        """
        Classify the latest captured frame unless it was already handled.

        Returns:
            True if a new frame was processed.
        """
        with self._latest_lock:
            frame_id, frame, landmarks = self._latest

        if not self._frames.accept(frame_id):
            return False

        self._process_frame(landmarks)

        now = time.perf_counter()
        if self._config.ui.show_preview and now - self._last_preview_time >= self.PREVIEW_INTERVAL:
            preview = self._tracker.get_frame_with_landmarks(frame, landmarks)
            if preview is not None:
                self.frame_ready.emit(preview)
            self._last_preview_time = now
        return True

    def start_process(self):
        """Main processing loop. Runs in worker thread."""
        if self._tracker is None:
            self._tracker = HandTracker(self._config)

        if not self._tracker.start():
            self.error.emit("Could not open camera")
            return

        self._is_running = True

        self._capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._capture_thread.start()

        poll_interval = 1.0 / (self._config.camera.fps * 2)

        try:
            while self._is_running:
                loop_start = time.perf_counter()

                self.poll()

                elapsed = time.perf_counter() - loop_start
                sleep_time = poll_interval - elapsed
                if sleep_time > 0:
                    time.sleep(sleep_time)

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._capture_thread:
                self._capture_thread.join(timeout=1.0)
            if self._tracker:
                self._tracker.stop()

    def _process_frame(self, landmarks: Optional[HandLandmarks]):
        """Classify one new frame and emit its sample."""
        if landmarks is None:
            self.sample_ready.emit(GestureSample.none())
            return
        try:
            sample = classify(landmarks, self._config.gestures)
        except InvalidInput as e:
            print(f"Skipping frame: {e}")
            return
        self.sample_ready.emit(sample)

    def stop_process(self):
        """Signal the loop to stop and release resources in worker thread."""
        self._is_running = False
