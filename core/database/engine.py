"""Database connection and engine management."""

import re
from typing import Any
from urllib.parse import urlparse

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url


def sanitize_connection_string(connection_string: str) -> str:
    """Sanitize a database connection string by removing passwords for logging.

    Args:
        connection_string: The database connection string

    Returns:
        Sanitized connection string with password replaced by ***
    """
    try:
        parsed = urlparse(connection_string)
        if parsed.password:
            return connection_string.replace(parsed.password, "***")
    except ValueError:
        # Malformed netloc (e.g. an invalid port); fall through to the regex
        pass

    # Matches :password@ patterns
    return re.sub(r"://([^:/@]+):([^@/]+)@", r"://\1:***@", connection_string)


def create_database_engine(connection_string: str) -> Engine:
    """Create a SQLAlchemy engine for the given database URL.

    Args:
        connection_string: The database connection string (SQLAlchemy URL)

    Returns:
        SQLAlchemy Engine instance
    """
    connect_args: dict[str, Any] = {}

    if make_url(connection_string).get_backend_name() == "sqlite":
        connect_args = {"check_same_thread": False}

    return create_engine(connection_string, connect_args=connect_args, echo=False)
