from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from newsdesk.core.config import settings
from newsdesk.core.logging_config import configure_logging
from newsdesk.data.topics_seed import DEFAULT_TOPICS
from newsdesk.db.session import SessionLocal
from newsdesk.models.topic import Topic
from newsdesk.services.slug import slugify

_LOG = logging.getLogger(__name__)

SEED_TARGETS = ("all", "topics")


def seed_topics(db: Session, names: list[str] | None = None) -> tuple[int, int]:
    """Insert every name that has no active topic yet. Returns ``(created, skipped)``."""
    created = 0
    skipped = 0
    seen: set[str] = set()

    for raw in names if names is not None else DEFAULT_TOPICS:
        name = str(raw).strip()
        if not name or name in seen:
            continue
        seen.add(name)
        existing = db.execute(
            select(Topic.id).where(Topic.name == name, Topic.deleted_at.is_(None)).limit(1)
        ).first()
        if existing is not None:
            skipped += 1
            continue
        db.add(Topic(name=name, slug=slugify(name)))
        created += 1

    db.commit()
    return created, skipped


def run_seeder(db: Session, target: str) -> dict[str, tuple[int, int]]:
    target = str(target or "").strip().lower()
    if target not in SEED_TARGETS:
        raise ValueError(f"unknown seed target: {target}")
    results: dict[str, tuple[int, int]] = {}
    # "all" and "topics" coincide until more tables get default rows.
    results["topics"] = seed_topics(db)
    return results


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Insert default rows into the newsdesk database.")
    parser.add_argument("target", nargs="?", default="all", help="all | topics")
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        results = run_seeder(db, args.target)
        total = db.execute(select(func.count(Topic.id)).where(Topic.deleted_at.is_(None))).scalar_one()
    except ValueError as exc:
        _LOG.error("%s", exc)
        return 2
    finally:
        db.close()

    for table, (created, skipped) in results.items():
        print(f"{table} seed done: created={created}, skipped={skipped}, total={total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
