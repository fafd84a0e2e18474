import os
import tempfile

# Settings are read once at import time; keep test runs off real storage.
os.environ.setdefault("TRIPMATCH_STORAGE_BACKEND", "memory")
os.environ.setdefault("TRIPMATCH_DATA_ROOT", tempfile.mkdtemp(prefix="tripmatch-tests-"))
os.environ.setdefault("TRIPMATCH_SUPABASE_URL", "")
os.environ.setdefault("TRIPMATCH_SUPABASE_KEY", "")
