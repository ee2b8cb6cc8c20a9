"""
PaperBurn Webcam Module

Hand tracking with MediaPipe and the background classification worker.
"""
from .hand_tracker import HandTracker, HandLandmarks
from .worker import WebcamWorker

__all__ = [
    'HandTracker',
    'HandLandmarks',
    'WebcamWorker',
]
