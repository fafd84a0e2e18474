#!/usr/bin/env python3
"""Report which storage backend the TripMatch API will use with the current environment."""

import sys
from pathlib import Path

TEMPLATE = """# Supabase configuration (leave empty to run on in-memory stores)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
TRIPMATCH_SUPABASE_URL=https://your-project-id.supabase.co
TRIPMATCH_SUPABASE_KEY=your-service-role-key-here

# auto | supabase | memory
TRIPMATCH_STORAGE_BACKEND=auto

# API configuration
TRIPMATCH_API_PREFIX=/api
# JSON array or comma-separated list
# TRIPMATCH_FRONTEND_ALLOWED_ORIGINS=http://localhost:8081,http://localhost:19006

# Route snapshots are written under <data root>/active_routes
TRIPMATCH_DATA_ROOT=./data

# Route optimization defaults
TRIPMATCH_FUEL_COST_PER_KM=0.8
TRIPMATCH_MAX_STOPS_PER_ROUTE=8
TRIPMATCH_MAX_TOTAL_DURATION_MINUTES=480
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-6:] if len(value) > 30 else value


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("TripMatch environment check")
    print("=" * 60)

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env at {env_file}; edit it and run this again.")
        return 1

    sys.path.insert(0, str(project_root / "src"))
    from tripmatch.config import settings

    print(f"Data root:        {settings.data_root}")
    print(f"Storage backend:  {settings.storage_backend}")
    print(f"Supabase URL:     {settings.supabase_url or 'not set'}")
    print(f"Supabase key:     {_mask(settings.supabase_key) if settings.supabase_key else 'not set'}")
    print(f"Allowed origins:  {', '.join(settings.frontend_allowed_origins) or 'none'}")
    print()

    if settings.storage_backend == "supabase" and not settings.supabase_configured:
        print("ERROR: storage backend is 'supabase' but TRIPMATCH_SUPABASE_URL / TRIPMATCH_SUPABASE_KEY are missing")
        return 1
    if settings.supabase_configured:
        print("Supabase is configured; trips and driver profiles will be read from the database.")
    else:
        print("Supabase is not configured; the API will run on in-memory stores.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
