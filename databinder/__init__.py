"""
databinder: command-line driver for Android data binding.

Turns layout XML resources into processed resources plus layout-info
metadata, and layout-info metadata into generated binding base classes plus
exportable class-info for downstream modules.
"""

__version__ = "1.0.0"
__author__ = "databinder Team"
