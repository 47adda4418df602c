"""
Testimonials component.
"""

from .component import (
    derive_initials,
    run_create_testimonial,
    run_delete_testimonial,
    run_get_testimonial,
    run_get_testimonials,
    run_reorder_testimonials,
    run_update_testimonial,
)
from .models import TestimonialInput, TestimonialOutput

__all__ = [
    "derive_initials",
    "run_create_testimonial",
    "run_delete_testimonial",
    "run_get_testimonial",
    "run_get_testimonials",
    "run_reorder_testimonials",
    "run_update_testimonial",
    "TestimonialInput",
    "TestimonialOutput",
]
