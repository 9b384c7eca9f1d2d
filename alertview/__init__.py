"""
Alert graph view layer.

Render projection, interaction state and presentation view models.
Reads alertgraph contracts; never mutates them.
"""

LOGGER_NAMES = ("alertgraph", "alertview")
