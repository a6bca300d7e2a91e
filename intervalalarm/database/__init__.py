"""Database package."""

from .db import get_session, init_db
from .models import AlarmSession

__all__ = ["get_session", "init_db", "AlarmSession"]
