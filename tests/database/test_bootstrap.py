from src.nurse_payroll.nurse_payroll.database.bootstrap import (
    _strip_create_db_and_use,
    _strip_line_comments,
    iter_sql_statements,
)


def test_split_ignores_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");  "

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
    ]


def test_split_handles_escaped_quote():
    sql = r"INSERT INTO t VALUES ('it\'s;fine'); SELECT 1"

    assert list(iter_sql_statements(sql)) == [r"INSERT INTO t VALUES ('it\'s;fine')", "SELECT 1"]


def test_create_database_and_use_lines_are_dropped():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\n-- comment\nCREATE TABLE a (id INT);\n"

    cleaned = _strip_line_comments(_strip_create_db_and_use(sql))

    assert list(iter_sql_statements(cleaned)) == ["CREATE TABLE a (id INT)"]
