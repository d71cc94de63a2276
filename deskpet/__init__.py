"""Desktop pet companion logic: gestures, affinity, status texts, music files and XiaoZhi protocol."""

__version__ = "0.1.0"