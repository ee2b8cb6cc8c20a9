"""
PaperBurn - Crumple and burn a virtual sheet of paper with hand gestures

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="PaperBurn - Gesture-driven paper destruction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run in an OpenCV window with landmark overlay instead of the UI",
    )

    parser.add_argument(
        "--no-preview",
        action="store_true",
        help="Hide the webcam preview in the UI",
    )

    return parser.parse_args()


def run_webcam_debug(config):
    """
    Run the game in an OpenCV window - camera feed with landmarks and state.
    Keys: 'o' puts a demo file on the table, 'r' resets, 'q' quits.
    """
    import time
    import cv2
    from src.core import ConsoleEffects, FrameGate, ManualScheduler, PaperGame
    from src.webcam import HandTracker

    tracker = HandTracker(config)
    scheduler = ManualScheduler()
    game = PaperGame(config, scheduler, ConsoleEffects())

    print("Starting webcam debug mode...")
    print("Keys: 'o' load demo file, 'r' reset, 'q' quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not open camera")
        return 1

    start = time.perf_counter()
    frames = FrameGate()

    try:
        while True:
            # Timed transitions run on the loop's clock
            scheduler.advance_to((time.perf_counter() - start) * 1000)

            frame_id, frame, landmarks = tracker.read()
            preview = None
            if frames.accept(frame_id):
                game.process_landmarks(landmarks)
                preview = tracker.get_frame_with_landmarks(frame, landmarks)

            if preview is not None:
                sample = game.last_sample
                info_lines = [
                    f"Gesture: {sample.type.name}",
                    f"Proximity: {sample.proximity:.2f}",
                    f"Paper: {game.state.name}",
                    game.message,
                ]
                for i, line in enumerate(info_lines):
                    cv2.putText(
                        preview, line, (10, 30 + i * 30),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 255, 0), 2
                    )
                cv2.imshow("PaperBurn Debug", preview)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('o'):
                game.load_file("demo.txt", "text/plain")
            elif key == ord('r'):
                game.reset()

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_webcam_mode(config):
    """Run PaperBurn with the PyQt5 window (camera work on a QThread)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from src.core import PaperGame
    from src.ui import PaperWindow, QtScheduler
    from src.webcam import WebcamWorker

    app = QApplication(sys.argv)

    window = PaperWindow(
        width=config.ui.window_width,
        height=config.ui.window_height,
        show_preview=config.ui.show_preview,
        burn_ms=config.paper.burn_ms,
    )
    scheduler = QtScheduler(window)
    game = PaperGame(config, scheduler, window)
    window.show()

    # Setup background worker and thread
    thread = QThread()
    worker = WebcamWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    def handle_sample(sample):
        """Runs on the UI thread, once per classified camera frame."""
        event = game.process_sample(sample)
        window.show_sample(sample)
        if event is not None and config.ui.debug_overlay:
            print(f"Intent: {event.name} -> {game.state.name}")

    def handle_file(name, mime_type):
        if game.load_file(name, mime_type):
            print(f"Action: Loaded {name} ({mime_type or 'unknown type'})")

    def handle_reset():
        game.reset()
        print("Action: Reset")

    # Connect signals (Use QueuedConnection to ensure game updates happen in main thread)
    thread.started.connect(worker.start_process)
    worker.sample_ready.connect(handle_sample, Qt.QueuedConnection)
    worker.frame_ready.connect(window.set_webcam_frame, Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)
    window.file_selected.connect(handle_file)
    window.reset_requested.connect(handle_reset)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main():
    """Main entry point."""
    args = parse_args()

    from src.core import load_config
    config = load_config(args.config)

    if args.no_preview:
        config.ui.show_preview = False
    if args.debug:
        config.ui.debug_overlay = True

    print(f"PaperBurn starting...")
    print(f"  Camera: {config.camera.device_id} ({config.camera.width}x{config.camera.height})")
    print(f"  Hold frames: {config.gestures.hold_frames}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_webcam_mode(config)


if __name__ == "__main__":
    sys.exit(main())
