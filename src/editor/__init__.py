"""Editor-side state that sits between a UI and :class:`store.PaletteStore`.

``ColorEditor`` holds the current pick color and an optional in-progress
chip edit; ``GenerationWorkflow`` holds the pending "pick a target palette"
intent and the palette modification session.
"""

from .color_editor import ColorEditor, EditingChip
from .workflow import GenerationWorkflow, ModificationSession, PendingIntent

__all__ = [
    "ColorEditor",
    "EditingChip",
    "GenerationWorkflow",
    "ModificationSession",
    "PendingIntent",
]
