#!/usr/bin/env python3
"""Check that the readiness results tables exist, printing their DDL if not."""
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.db.supabase_client import get_supabase

RESULTS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS {table} (
    id BIGSERIAL PRIMARY KEY,
    assessment_id TEXT NOT NULL,
    user_id TEXT,
    algorithm_version TEXT NOT NULL,
    suite TEXT NOT NULL,
    computed_at TIMESTAMPTZ NOT NULL,
    response_count INTEGER NOT NULL DEFAULT 0,
    scores JSONB NOT NULL DEFAULT '{{}}'::jsonb,
    indices JSONB NOT NULL DEFAULT '{{}}'::jsonb,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
);

-- NULLS NOT DISTINCT so anonymous submissions are deduplicated too (Postgres 15+)
CREATE UNIQUE INDEX IF NOT EXISTS {table}_assessment_user_version_key
    ON {table} (assessment_id, user_id, algorithm_version) NULLS NOT DISTINCT;
"""


def check_tables():
    settings = get_settings()
    tables = [settings.ENTERPRISE_RESULTS_TABLE, settings.AI_READINESS_RESULTS_TABLE]

    try:
        supabase = get_supabase()
    except RuntimeError as e:
        print(f"❌ {e}")
        sys.exit(1)

    missing = []
    for table in tables:
        print(f"🔍 Checking {table}...")
        try:
            supabase.table(table).select('assessment_id, user_id, algorithm_version').limit(1).execute()
            print(f"✅ {table} exists")
        except Exception as e:
            print(f"❌ {table} not usable: {e}")
            missing.append(table)

    if missing:
        print("💡 Run this SQL in your Supabase SQL editor:")
        for table in missing:
            print(RESULTS_TABLE_DDL.format(table=table))
        sys.exit(1)


if __name__ == "__main__":
    check_tables()
