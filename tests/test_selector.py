from conftest import make_pod
from pod_restarter.selector import select_targets


def test_selects_only_matching_names_in_order():
    pods = [
        make_pod("web-1"),
        make_pod("database-0"),
        make_pod("cache"),
        make_pod("orders-database-7d9f"),
        make_pod("Database-upper"),
    ]

    selected = select_targets(pods, "database")

    assert [p.metadata.name for p in selected] == ["database-0", "orders-database-7d9f"]


def test_match_is_literal():
    pods = [make_pod("db.primary"), make_pod("dbxprimary")]

    selected = select_targets(pods, "db.primary")

    assert [p.metadata.name for p in selected] == ["db.primary"]


def test_no_candidates():
    assert select_targets([make_pod("web")], "database") == []
    assert select_targets([], "database") == []
