"""Drawing backends for the layout engine.

``reportlab_backend`` produces PDF bytes; ``recording`` keeps the drawing
operations in memory for inspection and dry runs.
"""

from .recording import RecordingCanvas, RecordingTableRenderer
from .reportlab_backend import ReportLabCanvas, ReportLabTableRenderer

__all__ = [
    "RecordingCanvas",
    "RecordingTableRenderer",
    "ReportLabCanvas",
    "ReportLabTableRenderer",
]
