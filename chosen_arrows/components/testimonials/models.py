"""
Testimonials component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass

from chosen_arrows.components.actions import ActionOutput


@dataclass(frozen=True)
class TestimonialInput:
    name: str
    role: str
    content: str
    avatar_initials: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class TestimonialOutput(ActionOutput):
    testimonial_id: str | None = None
