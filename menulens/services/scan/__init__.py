"""Scan simulator service."""

from .classifier import SAMPLE_MENU, Classifier, MockMenuClassifier
from .service import ScanSimulator

__all__ = ["SAMPLE_MENU", "Classifier", "MockMenuClassifier", "ScanSimulator"]
