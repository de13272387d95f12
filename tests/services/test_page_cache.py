"""
Tests for the path-keyed page cache.
"""

from dashboard.services.page_cache import PageCache


def test_get_returns_what_was_set():
    cache = PageCache()
    cache.set("/dashboard/invoices", {"count": 1})

    assert cache.get("/dashboard/invoices") == {"count": 1}
    assert cache.get("/dashboard/customers") is None


def test_revalidate_evicts_every_variant_of_a_path():
    cache = PageCache()
    cache.set("/dashboard/invoices", "page-1", variant="limit=10&offset=0")
    cache.set("/dashboard/invoices", "page-2", variant="limit=10&offset=10")
    cache.set("/dashboard", "home")

    cache.revalidate_path("/dashboard/invoices")

    assert cache.get("/dashboard/invoices", "limit=10&offset=0") is None
    assert cache.get("/dashboard/invoices", "limit=10&offset=10") is None
    assert cache.get("/dashboard") == "home"


def test_revalidate_unknown_path_is_noop():
    cache = PageCache()

    cache.revalidate_path("/nothing/here")

    assert cache.get("/nothing/here") is None


def test_revalidate_only_touches_its_own_instance():
    worker_a = PageCache()
    worker_b = PageCache()
    worker_a.set("/dashboard/invoices", "listing")
    worker_b.set("/dashboard/invoices", "listing")

    worker_a.revalidate_path("/dashboard/invoices")

    assert worker_a.get("/dashboard/invoices") is None
    assert worker_b.get("/dashboard/invoices") == "listing"
