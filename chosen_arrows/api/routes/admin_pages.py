"""
Admin HTML pages: login form, logout and dashboard.

Every admin page except the login form sits behind ``admin_route_guard``,
which runs the admin gate and redirects to the login page on failure.
"""

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse

from chosen_arrows.api.deps import (
    get_clock,
    get_db,
    get_gate,
    get_identity,
    get_privileged_db,
    get_rules,
)
from chosen_arrows.api.html import escape_html, render_document, render_list
from chosen_arrows.api.routes.auth import set_session_cookie
from chosen_arrows.components.audit import run_get_dashboard_stats
from chosen_arrows.components.auth import AdminGatePort, LoginInput, run_admin_login
from chosen_arrows.core.ports.db import DataPort, PrivilegedDataPort
from chosen_arrows.core.ports.identity import IdentityPort
from chosen_arrows.core.ports.time import TimePort
from chosen_arrows.domain.entities import AdminPrincipal
from chosen_arrows.rules.models import Rules

router = APIRouter()


def admin_route_guard(
    gate: AdminGatePort = Depends(get_gate),
    rules: Rules = Depends(get_rules),
) -> AdminPrincipal:
    result = gate.check()
    if result.user is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail=result.error,
            headers={"Location": rules.auth.login_path},
        )
    return result.user


def _login_page(error: str | None = None, email: str = "") -> str:
    message = f'<p role="alert">{escape_html(error)}</p>' if error else ""
    body = f"""<main>
        <h1>Admin Login</h1>
        {message}
        <form method="post" action="/admin/login">
            <label>Email
                <input type="email" name="email" value="{escape_html(email)}" required />
            </label>
            <label>Password <input type="password" name="password" required /></label>
            <button type="submit">Sign in</button>
        </form>
    </main>"""
    head = '<title>Admin Login</title>\n    <meta name="robots" content="noindex" />'
    return render_document(head, body)


@router.get("/login", response_class=HTMLResponse)
def login_form() -> HTMLResponse:
    return HTMLResponse(content=_login_page())


@router.post("/login", response_class=HTMLResponse, response_model=None)
def login_submit(
    email: str = Form(...),
    password: str = Form(...),
    identity: IdentityPort = Depends(get_identity),
    privileged: PrivilegedDataPort = Depends(get_privileged_db),
    clock: TimePort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse | RedirectResponse:
    """Sign in and redirect to the dashboard; failures re-render the form."""
    result = run_admin_login(
        LoginInput(email=email, password=password),
        identity=identity,
        privileged=privileged,
        clock=clock,
        dashboard_path=rules.auth.dashboard_path,
    )
    if not result.success or not result.token:
        return HTMLResponse(content=_login_page(result.error, email), status_code=400)

    response = RedirectResponse(
        url=result.redirect_to or rules.auth.dashboard_path,
        status_code=status.HTTP_303_SEE_OTHER,
    )
    set_session_cookie(response, result.token, rules)
    return response


@router.get("/logout")
def logout(rules: Rules = Depends(get_rules)) -> RedirectResponse:
    response = RedirectResponse(url=rules.auth.login_path, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(key=rules.auth.cookie_name)
    return response


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    admin: AdminPrincipal = Depends(admin_route_guard),
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    stats = run_get_dashboard_stats(
        db=db, gate=gate, recent_limit=rules.audit.recent_activity_limit
    )
    counters = []
    activity = []
    if stats is not None:
        counters = [
            f"Active campaigns: {stats.active_campaigns}",
            f"Content sections: {stats.content_sections}",
            f"Active testimonials: {stats.active_testimonials}",
        ]
        activity = [
            f"{escape_html(entry.action)} {escape_html(entry.table_name)} "
            f"<time>{escape_html(str(entry.created_at or ''))}</time>"
            for entry in stats.recent_activity
        ]
    body = f"""<main>
        <h1>Dashboard</h1>
        <p>Signed in as {escape_html(admin.full_name or admin.id)} ({escape_html(admin.role)})</p>
        {render_list(counters)}
        <h2>Recent activity</h2>
        {render_list(activity, tag="ol")}
        <a href="/admin/logout">Sign out</a>
    </main>"""
    return HTMLResponse(content=render_document("<title>Dashboard | Admin</title>", body))
