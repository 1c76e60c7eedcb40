"""Reporting utilities for matnet."""

from .metrics import CsvSink, HistoryCapture, JsonlSink
from .plots import LossCurve
from .summary import write_summary

__all__ = ["CsvSink", "HistoryCapture", "JsonlSink", "LossCurve", "write_summary"]
