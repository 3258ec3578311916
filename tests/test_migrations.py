import os
import subprocess
import unittest
from pathlib import Path

import psycopg
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import make_url


class MigrationTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_url_raw = os.getenv("DATABASE_URL", "")
        if not db_url_raw.startswith("postgresql"):
            raise unittest.SkipTest("Migration test requires PostgreSQL DATABASE_URL")

        cls.project_root = Path(__file__).resolve().parents[1]
        cls.base_url = make_url(db_url_raw)
        cls.test_db_name = f"{cls.base_url.database}_migration_test"
        cls.test_url = cls.base_url.set(database=cls.test_db_name)
        cls.admin_url = cls.base_url.set(database="postgres")

        cls._recreate_database()
        cls._run_alembic("upgrade", "head")

        cls.engine = create_engine(cls.test_url)
        cls.inspector = inspect(cls.engine)

    @classmethod
    def tearDownClass(cls):
        if hasattr(cls, "engine"):
            cls.engine.dispose()
        if hasattr(cls, "admin_url") and hasattr(cls, "test_db_name"):
            cls._drop_database()

    @classmethod
    def _admin_dsn(cls):
        return cls.admin_url.render_as_string(hide_password=False).replace("+psycopg", "")

    @classmethod
    def _terminate_backends(cls, conn):
        conn.execute(
            "SELECT pg_terminate_backend(pid) "
            "FROM pg_stat_activity "
            "WHERE datname = %s AND pid <> pg_backend_pid()",
            (cls.test_db_name,),
        )

    @classmethod
    def _recreate_database(cls):
        with psycopg.connect(cls._admin_dsn(), autocommit=True) as conn:
            cls._terminate_backends(conn)
            conn.execute(f'DROP DATABASE IF EXISTS "{cls.test_db_name}"')
            conn.execute(f'CREATE DATABASE "{cls.test_db_name}"')

    @classmethod
    def _drop_database(cls):
        with psycopg.connect(cls._admin_dsn(), autocommit=True) as conn:
            cls._terminate_backends(conn)
            conn.execute(f'DROP DATABASE IF EXISTS "{cls.test_db_name}"')

    @classmethod
    def _run_alembic(cls, *args):
        env = os.environ.copy()
        env["DATABASE_URL"] = cls.test_url.render_as_string(hide_password=False)
        env["PYTHONPATH"] = str(cls.project_root)
        subprocess.run(
            ["alembic", *args],
            cwd=cls.project_root,
            env=env,
            check=True,
            capture_output=True,
            text=True,
        )

    def test_upgrade_head_creates_expected_tables(self):
        expected = {"topics", "news", "news_topics", "alembic_version"}
        tables = set(self.inspector.get_table_names())
        self.assertTrue(expected.issubset(tables), f"Missing tables: {expected - tables}")

    def test_news_topics_has_foreign_keys_and_unique_pair(self):
        fks = {fk["referred_table"] for fk in self.inspector.get_foreign_keys("news_topics")}
        self.assertEqual(fks, {"news", "topics"})
        uniques = self.inspector.get_unique_constraints("news_topics")
        self.assertIn(["news_id", "topic_id"], [u["column_names"] for u in uniques])

    def test_soft_delete_columns_exist(self):
        for table in ("topics", "news"):
            columns = {c["name"]: c for c in self.inspector.get_columns(table)}
            self.assertIn("deleted_at", columns)
            self.assertTrue(columns["deleted_at"]["nullable"])

    def test_alembic_version_is_set(self):
        with self.engine.connect() as conn:
            version = conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one()
        self.assertEqual(version, "0001_init")
