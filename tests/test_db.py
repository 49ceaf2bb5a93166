"""
Tests for migrations and the transaction helper.
"""

import sqlite3

import pytest

from leadprovider_api.app.core import db


def test_migrations_are_recorded_once(db_path):
    db.init_db()
    db.init_db()
    conn = sqlite3.connect(db_path)
    try:
        versions = [row[0] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    finally:
        conn.close()
    assert versions == [version for version, _ in db.MIGRATIONS]
    assert {"users", "cart_items", "orders", "order_items"} <= tables


def test_relative_database_url_resolves_inside_package(monkeypatch):
    monkeypatch.setattr(db.settings, "database_url", "some.db")
    path = db.get_database_path()
    assert path.endswith("some.db")
    assert "leadprovider_api" in path


def test_transaction_commits_on_success(count_rows):
    with db.transaction() as cursor:
        cursor.execute("INSERT INTO users (email, password_hash) VALUES ('t@x.com', 'h')")
    assert count_rows("users") == 1


def test_transaction_rolls_back_on_error(count_rows):
    with pytest.raises(RuntimeError):
        with db.transaction() as cursor:
            cursor.execute("INSERT INTO users (email, password_hash) VALUES ('t@x.com', 'h')")
            raise RuntimeError("boom")
    assert count_rows("users") == 0


def test_cart_pair_is_unique():
    conn = db.get_connection()
    try:
        conn.execute("INSERT INTO users (email, password_hash) VALUES ('t@x.com', 'h')")
        conn.execute("INSERT INTO cart_items (user_id, service_id) VALUES (1, 1)")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO cart_items (user_id, service_id) VALUES (1, 1)")
    finally:
        conn.close()


def test_order_status_is_constrained():
    conn = db.get_connection()
    try:
        conn.execute("INSERT INTO users (email, password_hash) VALUES ('t@x.com', 'h')")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO orders (user_id, status) VALUES (1, 'shipped')")
    finally:
        conn.close()
