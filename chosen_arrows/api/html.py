"""
HTML rendering helpers shared by the SSR and admin page routes.
"""

from collections.abc import Iterable

from chosen_arrows.components.metadata import PageSeo


def escape_html(text: str | None) -> str:
    """Escape HTML special characters."""
    return (
        (text or "")
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def render_meta_tags_html(seo: PageSeo) -> str:
    """Render PageSeo to the ``<head>`` tags: title, meta tags and canonical link."""
    html_parts: list[str] = [f"<title>{escape_html(seo.title)}</title>"]

    for tag in seo.to_meta_tags():
        if tag.property:
            html_parts.append(
                f'<meta property="{escape_html(tag.property)}" '
                f'content="{escape_html(tag.content)}" />'
            )
        elif tag.name:
            html_parts.append(
                f'<meta name="{escape_html(tag.name)}" content="{escape_html(tag.content)}" />'
            )

    html_parts.append(f'<link rel="canonical" href="{escape_html(seo.canonical_url)}" />')
    return "\n    ".join(html_parts)


def render_document(head: str, body: str, *, language: str = "en") -> str:
    return f"""<!DOCTYPE html>
<html lang="{escape_html(language)}">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    {head}
</head>
<body>
    {body}
</body>
</html>"""


def render_ssr_page(seo: PageSeo, body_content: str = "") -> str:
    """Complete page with full head metadata."""
    return render_document(render_meta_tags_html(seo), body_content, language=seo.language)


def render_list(items: Iterable[str], tag: str = "ul") -> str:
    rendered = "".join(f"<li>{item}</li>" for item in items)
    return f"<{tag}>{rendered}</{tag}>" if rendered else ""
