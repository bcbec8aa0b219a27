"""Dialect-aware INSERT ... ON CONFLICT helpers.

Postgres runs in production and SQLite in development and tests; both
understand ``ON CONFLICT``, but SQLAlchemy exposes it through each dialect's
own ``insert`` construct.
"""

from sqlalchemy.dialects import postgresql, sqlite

_DIALECT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


def dialect_insert(session, model):
    """Return an insert construct for ``model`` that supports ``on_conflict_*``."""
    dialect = session.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[dialect](model)
    except KeyError:
        raise NotImplementedError(f"ON CONFLICT is not supported for dialect '{dialect}'")


def insert_ignore_conflict(session, model, key, values):
    """INSERT a row, silently keeping the existing one if ``key`` collides."""
    stmt = dialect_insert(session, model).values(**values)
    stmt = stmt.on_conflict_do_nothing(index_elements=list(key))
    return session.execute(stmt)


def upsert(session, model, key, values, update_fields):
    """INSERT a row or overwrite ``update_fields`` on the row matching ``key``."""
    stmt = dialect_insert(session, model).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=list(key),
        set_={field: stmt.excluded[field] for field in update_fields},
    )
    return session.execute(stmt)
