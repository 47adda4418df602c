"""
Tests for the rendered-page cache.
"""

from __future__ import annotations

from chosen_arrows.adapters.page_cache import PageCache


def test_get_put_per_language() -> None:
    cache = PageCache()
    cache.put("/about", "en", "<p>About</p>")

    assert cache.get("/about", "en") == "<p>About</p>"
    assert cache.get("/about", "fr") is None


def test_revalidate_drops_every_language_of_a_path() -> None:
    cache = PageCache()
    cache.put("/about", "en", "en")
    cache.put("/about", "fr", "fr")
    cache.put("/contact", "en", "contact")

    cache.revalidate_path("/about")

    assert cache.get("/about", "en") is None
    assert cache.get("/about", "fr") is None
    assert cache.get("/contact", "en") == "contact"


def test_revalidate_root_drops_everything() -> None:
    cache = PageCache()
    cache.put("/about", "en", "about")
    cache.put("/mentorship", "zh", "mentorship")

    cache.revalidate_path("/")

    assert cache.get("/about", "en") is None
    assert cache.get("/mentorship", "zh") is None


def test_failing_listener_is_skipped() -> None:
    cache = PageCache()
    seen: list[str] = []

    def broken(path: str) -> None:
        raise RuntimeError("webhook down")

    cache.on_revalidate(broken)
    cache.on_revalidate(seen.append)

    cache.revalidate_path("/campaigns")

    assert seen == ["/campaigns"]


def test_render_overtaken_by_revalidation_is_not_stored() -> None:
    cache = PageCache()
    generation = cache.generation("/about")

    cache.revalidate_path("/about")

    assert cache.put("/about", "en", "<stale>", since=generation) is False
    assert cache.get("/about", "en") is None


def test_root_revalidation_overtakes_every_render() -> None:
    cache = PageCache()
    generation = cache.generation("/contact")

    cache.revalidate_path("/")

    assert cache.put("/contact", "en", "<stale>", since=generation) is False


def test_other_paths_do_not_invalidate_a_render() -> None:
    cache = PageCache()
    generation = cache.generation("/about")

    cache.revalidate_path("/campaigns")

    assert cache.put("/about", "en", "<fresh>", since=generation) is True
    assert cache.get("/about", "en") == "<fresh>"
