"""Assertions shared by the test modules."""

from cardboard.core.service import BoardService


def assert_dense(service):
    """Orders are 0..n-1 on both levels, and the store agrees with memory."""
    assert [c.order for c in service.columns] == list(range(len(service.columns)))
    for column in service.columns:
        assert [t.order for t in column.tasks] == list(range(len(column.tasks)))
        assert all(t.column_id == column.id for t in column.tasks)

    fresh = BoardService()
    fresh.load()
    assert fresh.columns == service.columns


def layout_of(service):
    """Column titles mapped to their card titles, in order."""
    return [(c.title, [t.title for t in c.tasks]) for c in service.columns]
