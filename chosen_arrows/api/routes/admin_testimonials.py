"""
Admin Testimonials API.
"""

from typing import Any

from fastapi import APIRouter, Depends

from chosen_arrows.api.deps import get_db, get_gate, get_revalidator
from chosen_arrows.api.responses import output_body
from chosen_arrows.api.schemas import (
    ReorderRequest,
    TestimonialCreateRequest,
    TestimonialUpdateRequest,
)
from chosen_arrows.components.auth import AdminGatePort
from chosen_arrows.components.testimonials import (
    TestimonialInput,
    run_create_testimonial,
    run_delete_testimonial,
    run_get_testimonials,
    run_reorder_testimonials,
    run_update_testimonial,
)
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.core.ports.revalidation import RevalidatorPort
from chosen_arrows.domain.entities import Testimonial

router = APIRouter()


@router.get("", response_model=list[Testimonial])
def list_testimonials(db: DataPort = Depends(get_db)) -> list[Testimonial]:
    """Active and inactive, in display order."""
    return run_get_testimonials(db=db, admin=True)


@router.post("", status_code=201)
def create_testimonial(
    body: TestimonialCreateRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    inp = TestimonialInput(**body.model_dump())
    return output_body(run_create_testimonial(inp, db=db, gate=gate, revalidator=revalidator))


# Declared before /{testimonial_id} so "reorder" is not taken for an id
@router.put("/reorder")
def reorder_testimonials(
    body: ReorderRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    return output_body(
        run_reorder_testimonials(body.ids, db=db, gate=gate, revalidator=revalidator)
    )


@router.patch("/{testimonial_id}")
def update_testimonial(
    testimonial_id: str,
    body: TestimonialUpdateRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    result = run_update_testimonial(
        testimonial_id,
        body.model_dump(exclude_unset=True),
        db=db,
        gate=gate,
        revalidator=revalidator,
    )
    return output_body(result)


@router.delete("/{testimonial_id}")
def delete_testimonial(
    testimonial_id: str,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    return output_body(
        run_delete_testimonial(testimonial_id, db=db, gate=gate, revalidator=revalidator)
    )
