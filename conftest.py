"""Root conftest: loads .env.test before any module imports."""
from __future__ import annotations

import os
from pathlib import Path

_FALLBACKS = {
    "POSTGRES_USER": "classroom",
    "POSTGRES_PASSWORD": "classroom",
    "POSTGRES_DB": "classroom_test",
    "JWT_SECRET": "test-secret-for-classroom-service-0123456789",
    "JWT_VERIFY_MODE": "hs256",
}

_env_test = Path(__file__).resolve().parent / ".env.test"
if _env_test.exists():
    for line in _env_test.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip())

# Settings() is built at import time; make sure the required keys exist
for _key, _value in _FALLBACKS.items():
    os.environ.setdefault(_key, _value)
