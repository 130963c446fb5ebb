# app/db/engine.py

from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.settings import get_settings


@lru_cache
def get_engine(url: Optional[str] = None) -> Engine:
    # echo=True if you want to see SQL printed in the terminal
    db_url = url or get_settings().database_url
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(db_url, future=True, connect_args=connect_args)
