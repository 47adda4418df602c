"""
Content component - localized section documents.
"""

from .component import (
    run_get_all_sections,
    run_get_content,
    run_get_section_editor,
    run_update_content,
    seed_content,
)
from .models import SectionEditorOutput, UpdateContentInput

__all__ = [
    "run_get_all_sections",
    "run_get_content",
    "run_get_section_editor",
    "run_update_content",
    "seed_content",
    "SectionEditorOutput",
    "UpdateContentInput",
]
