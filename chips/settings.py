import os
from pathlib import Path

def _load_env_from_file():
    # Load chips/.env into process env for local/dev. Real environment
    # variables take precedence and are never overridden.
    env_path = Path(__file__).with_name('.env')
    if not env_path.exists():
        return
    for raw in env_path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        key = k.strip()
        val = v.strip().strip('"').strip("'")
        os.environ.setdefault(key, val)

def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")

_load_env_from_file()

DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite:///./dev.db"
SESSION_SECRET = os.getenv("SESSION_SECRET", "dev-secret-change-me")
# In local dev over HTTP, secure cookies won't persist; make this configurable.
SECURE_COOKIES = _flag("SECURE_COOKIES")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(24 * 3600)))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
