from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from simplytodo.db.config import build_engine
from simplytodo.db.init import init_db
from simplytodo.recurrence import Daily, RuleSpec, TaskTemplate


@pytest.fixture()
def engine():
    db_engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(db_engine)
    yield db_engine
    SQLModel.metadata.drop_all(db_engine)
    db_engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def make_rule():
    def _make(recurrence=None, start=date(2026, 3, 1), end=None, **kwargs) -> RuleSpec:
        template = kwargs.pop("template", None) or TaskTemplate(
            text="Water the plants",
            importance=kwargs.pop("importance", 3),
            time_of_day=kwargs.pop("time_of_day", None),
        )
        return RuleSpec(
            owner_id=kwargs.pop("owner_id", "user-1"),
            name=kwargs.pop("name", "Plants"),
            template=template,
            start_date=start,
            end_date=end,
            recurrence=recurrence or Daily(),
            **kwargs,
        )

    return _make
