"""
Mapping of component results onto HTTP responses.
"""

from dataclasses import asdict
from typing import Any

from fastapi import HTTPException, status

from chosen_arrows.components.actions import ActionOutput
from chosen_arrows.components.auth import UNAUTHORIZED


def raise_for_output(output: ActionOutput) -> None:
    """Raise the HTTPException matching a failed component result."""
    if output.success:
        return
    error = output.error or "Request failed"
    if error == UNAUTHORIZED:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=error)
    if output.field_errors:
        raise HTTPException(
            status_code=422,
            detail={"error": error, "field_errors": output.field_errors},
        )
    if error.lower().endswith("not found"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)


def output_body(output: ActionOutput) -> dict[str, Any]:
    raise_for_output(output)
    body = asdict(output)
    body.pop("field_errors", None)
    body.pop("error", None)
    return body
