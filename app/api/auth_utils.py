from functools import lru_cache
from typing import Optional

from app.core.security import get_password_hash, verify_password


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return get_password_hash("not-a-real-password")


def constant_time_verify(password_hash: Optional[str], password: str) -> bool:
    if password_hash:
        return verify_password(password, password_hash)
    # Dummy verification to equalize timing
    verify_password(password, _dummy_hash())
    return False
