"""apply_query_options (SQL translation) and serialize (row shaping), no database."""

from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.models import Course, Exam, User
from eduhub.infrastructure.persistence.query import (
    apply_query_options,
    serialize,
    serialize_many,
)


def _sql(options: QueryOptions, model=Exam) -> str:
    stmt = apply_query_options(select(model), model, options)
    return str(
        stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True})
    )


def test_where_equality_ignores_unknown_fields() -> None:
    sql = _sql(QueryOptions(where={"business_id": 3, "no_such_column": 1}))
    assert "exam.business_id = 3" in sql
    assert "no_such_column" not in sql


def test_where_accepts_sql_expressions() -> None:
    sql = _sql(QueryOptions(where={"search": Exam.code.is_not(None)}))
    assert "exam.code IS NOT NULL" in sql
    assert "search" not in sql


def test_order_and_paging() -> None:
    sql = _sql(QueryOptions(order_by={"name": "desc"}, skip=20, take=10))
    assert "ORDER BY exam.name DESC" in sql
    assert "LIMIT 10" in sql
    assert "OFFSET 20" in sql


def test_order_by_unknown_column_is_dropped() -> None:
    assert "ORDER BY" not in _sql(QueryOptions(order_by={"password": "asc"}))


def _exam_with_course() -> Exam:
    exam = Exam(id=1, name="JEE", business_id=1, status="ACTIVE")
    exam.courses = [Course(id=2, name="Physics", status="ACTIVE")]
    return exam


def test_serialize_renders_loaded_relations_and_cuts_cycles() -> None:
    data = serialize(_exam_with_course())
    assert data == {
        "id": 1,
        "name": "JEE",
        "business_id": 1,
        "status": "ACTIVE",
        "courses": [{"id": 2, "name": "Physics", "status": "ACTIVE"}],
    }


def test_serialize_select_projects_fields() -> None:
    opts = QueryOptions(select={"id": True, "name": True, "missing": True})
    assert serialize(_exam_with_course(), opts) == {"id": 1, "name": "JEE"}


def test_serialize_never_renders_password_hash() -> None:
    user = User(
        id=5,
        name="Asha",
        email="asha@example.com",
        password_hash="secret-hash",
        role="ADMIN",
        status="ACTIVE",
    )
    data = serialize(user, QueryOptions(select={"id": True, "password_hash": True}))
    assert data == {"id": 5}
    assert "password_hash" not in serialize_many([user])[0]
