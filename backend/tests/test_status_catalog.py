import pytest
from sqlalchemy.exc import OperationalError

from taskify.core.exceptions import NotFoundError, StoreError
from taskify.models import TaskStatus
from taskify.services.status_catalog import StatusCatalog


@pytest.mark.asyncio
async def test_list_statuses_sorted_by_sort_order(db_session, statuses):
    catalog = StatusCatalog(db_session)

    result = await catalog.list_statuses()

    assert [s.name for s in result] == ["Incomplete", "In Progress", "Done"]


@pytest.mark.asyncio
async def test_default_status_uses_initial_label(db_session, statuses):
    catalog = StatusCatalog(db_session)

    default = await catalog.default_status()

    assert default.id == statuses["Incomplete"].id


@pytest.mark.asyncio
async def test_default_status_falls_back_to_first_by_sort_order(db_session):
    db_session.add_all([
        TaskStatus(name="Shipped", sort_order=5),
        TaskStatus(name="Backlog", sort_order=3),
    ])
    await db_session.commit()

    default = await StatusCatalog(db_session).default_status()

    assert default.name == "Backlog"


@pytest.mark.asyncio
async def test_default_status_respects_configured_label(db_session, statuses):
    catalog = StatusCatalog(db_session, initial_status_name="In Progress")

    default = await catalog.default_status()

    assert default.name == "In Progress"


@pytest.mark.asyncio
async def test_default_status_empty_catalog(db_session):
    with pytest.raises(NotFoundError):
        await StatusCatalog(db_session).default_status()


@pytest.mark.asyncio
async def test_get_status_unknown_id(db_session, statuses):
    with pytest.raises(NotFoundError):
        await StatusCatalog(db_session).get_status("missing")


@pytest.mark.asyncio
async def test_list_statuses_database_failure(db_session, monkeypatch):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT task_statuses", {}, Exception("connection refused"))

    monkeypatch.setattr(db_session, "execute", failing_execute)

    with pytest.raises(StoreError):
        await StatusCatalog(db_session).list_statuses()
