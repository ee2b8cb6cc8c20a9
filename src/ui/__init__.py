"""
PaperBurn UI Module

PyQt5 window for the paper and the Qt timer scheduler.
"""
from .paper_window import PaperWindow, PaperCanvas
from .qt_scheduler import QtScheduler

__all__ = [
    'PaperWindow',
    'PaperCanvas',
    'QtScheduler',
]
