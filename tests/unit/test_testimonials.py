"""
Tests for the testimonials component.
"""

from __future__ import annotations

import pytest

from chosen_arrows.components import testimonials
from chosen_arrows.components.auth import UNAUTHORIZED


@pytest.fixture
def create(db, admin_gate, tick):
    def _create(name: str, **overrides) -> str:
        tick()
        out = testimonials.run_create_testimonial(
            testimonials.TestimonialInput(
                name=name,
                role=overrides.pop("role", "Donor"),
                content=overrides.pop("content", "Wonderful work."),
                **overrides,
            ),
            db=db,
            gate=admin_gate,
        )
        assert out.success, out
        return out.testimonial_id

    return _create


@pytest.mark.parametrize(
    ("name", "expected"),
    [("Sarah Mwangi", "SM"), ("jean paul sartre", "JP"), ("Cher", "C"), ("  ", "")],
)
def test_derive_initials(name: str, expected: str) -> None:
    assert testimonials.derive_initials(name) == expected


class TestCreate:
    def test_defaults(self, db, create) -> None:
        first = create("Sarah Mwangi")
        second = create("David Otieno")

        rows = {r["id"]: r for r in db.select("testimonials")}
        assert rows[first]["display_order"] == 0
        assert rows[second]["display_order"] == 1
        assert rows[first]["avatar_initials"] == "SM"
        assert rows[first]["is_active"] is True
        assert rows[first]["created_by"] == "admin-1"

    def test_explicit_values_kept(self, db, create) -> None:
        testimonial_id = create(
            "Sarah Mwangi", avatar_initials="S", display_order=7, is_active=False
        )

        row = db.select("testimonials", eq={"id": testimonial_id})[0]
        assert (row["avatar_initials"], row["display_order"], row["is_active"]) == ("S", 7, False)

    def test_validation(self, db, admin_gate) -> None:
        out = testimonials.run_create_testimonial(
            testimonials.TestimonialInput(name="", role="Donor", content=" ", display_order=-1),
            db=db,
            gate=admin_gate,
        )

        assert out.error == "Invalid testimonial"
        assert set(out.field_errors) == {"name", "content", "display_order"}

    def test_requires_admin(self, db, anon_gate, revalidator) -> None:
        out = testimonials.run_create_testimonial(
            testimonials.TestimonialInput(name="A", role="B", content="C"),
            db=db,
            gate=anon_gate,
            revalidator=revalidator,
        )

        assert out.error == UNAUTHORIZED
        assert revalidator.paths == []


class TestQueries:
    def test_order_and_active_filter(self, db, create, admin_gate) -> None:
        a = create("Alpha One")
        b = create("Beta Two")
        hidden = create("Gamma Three", is_active=False)
        testimonials.run_update_testimonial(a, {"display_order": 5}, db=db, gate=admin_gate)

        assert [t.id for t in testimonials.run_get_testimonials(db=db)] == [b, hidden, a]
        assert [t.id for t in testimonials.run_get_testimonials(db=db, active_only=True)] == [b, a]
        assert len(testimonials.run_get_testimonials(db=db, active_only=True, admin=True)) == 3

    def test_ties_newest_first(self, db, create) -> None:
        older = create("Alpha One", display_order=0)
        newer = create("Beta Two", display_order=0)

        assert [t.id for t in testimonials.run_get_testimonials(db=db)] == [newer, older]

    def test_backend_error(self, db, create) -> None:
        create("Alpha One")
        db.fail_on("select", "testimonials")

        assert testimonials.run_get_testimonials(db=db) == []


class TestUpdateDeleteReorder:
    def test_rename_rederives_initials(self, db, create, admin_gate, revalidator) -> None:
        testimonial_id = create("Sarah Mwangi")

        out = testimonials.run_update_testimonial(
            testimonial_id,
            {"name": "Grace Wanjiru"},
            db=db,
            gate=admin_gate,
            revalidator=revalidator,
        )

        assert out.success
        assert testimonials.run_get_testimonial(testimonial_id, db=db).avatar_initials == "GW"
        assert revalidator.paths == ["/admin/testimonials", "/"]

    def test_update_missing(self, db, admin_gate) -> None:
        out = testimonials.run_update_testimonial(
            "missing", {"role": "Mentor"}, db=db, gate=admin_gate
        )

        assert out.error == "Testimonial not found"

    def test_delete(self, db, create, admin_gate) -> None:
        testimonial_id = create("Sarah Mwangi")

        assert testimonials.run_delete_testimonial(testimonial_id, db=db, gate=admin_gate).success
        assert testimonials.run_get_testimonial(testimonial_id, db=db) is None

    def test_reorder_assigns_indexes(self, db, create, admin_gate) -> None:
        ids = [create(name) for name in ("Alpha One", "Beta Two", "Gamma Three")]

        out = testimonials.run_reorder_testimonials(list(reversed(ids)), db=db, gate=admin_gate)

        assert out.success
        assert [t.id for t in testimonials.run_get_testimonials(db=db)] == list(reversed(ids))

    def test_reorder_stops_at_first_failure(self, db, create, admin_gate, revalidator) -> None:
        ids = [create(name) for name in ("Alpha One", "Beta Two", "Gamma Three")]
        db.fail_on("update", "testimonials", skip=1, message="timeout")

        out = testimonials.run_reorder_testimonials(
            [ids[2], ids[1], ids[0]], db=db, gate=admin_gate, revalidator=revalidator
        )

        assert not out.success
        assert out.error == "timeout"
        orders = {r["id"]: r["display_order"] for r in db.select("testimonials")}
        # first update applied, the rest untouched
        assert orders == {ids[0]: 0, ids[1]: 1, ids[2]: 0}
        assert revalidator.paths == []
