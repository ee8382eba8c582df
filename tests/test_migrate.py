"""Migration runner tests on SQLite."""

from sqlalchemy import inspect, text

from bookstore import migrate


def test_applies_each_file_once(engine):
    assert migrate.run(engine) == ["001_create_books.sql"]
    assert migrate.run(engine) == []

    assert "books" in inspect(engine).get_table_names()
    with engine.connect() as conn:
        checksum = conn.execute(
            text("SELECT checksum FROM schema_migrations WHERE filename = :f"),
            {"f": "001_create_books.sql"},
        ).scalar()
    sql = (migrate.MIGRATIONS_DIR / "001_create_books.sql").read_text()
    assert checksum == migrate.sha256(sql)


def test_no_migrations(engine, tmp_path):
    assert migrate.run(engine, migrations_dir=tmp_path) == []
