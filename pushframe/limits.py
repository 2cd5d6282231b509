# pushframe/limits.py
from slowapi import Limiter
from slowapi.util import get_remote_address

from pushframe.deps import get_settings

# shared by main.py and the routers
limiter = Limiter(key_func=get_remote_address)

def rate_limit() -> str:
    return get_settings().PUSH_RATE_LIMIT
