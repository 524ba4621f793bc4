"""
Utility module for talking to Supabase.
Creates the per-request client and wraps row reads and writes so that every
backend failure reaches the callers as a BackendError.
"""
import logging
from typing import List, Dict, Any, Optional
from flask import current_app, g
from supabase import Client, create_client
from ..config import Config
from ..errors import BackendError

# Initialize logging
logger = logging.getLogger(__name__)


def supabase_init(url: Optional[str] = None, key: Optional[str] = None) -> Client:
    """
    Create a Supabase client
    @param url: Supabase project URL, defaults to Config.SUPABASE_URL
    @param key: anon key, defaults to Config.SUPABASE_KEY
    @returns: Client
    """
    try:
        return create_client(url or Config.SUPABASE_URL, key or Config.SUPABASE_KEY)
    except Exception as e:
        logger.error(f"Error initializing Supabase client: {str(e)}")
        raise BackendError.from_exception(e)


def get_supabase() -> Client:
    """
    Return the Supabase client of the current request, creating it on first use
    """
    if 'supabase' not in g:
        factory = current_app.config.get('SUPABASE_CLIENT_FACTORY')
        if factory is None:
            g.supabase = supabase_init(
                current_app.config.get('SUPABASE_URL'),
                current_app.config.get('SUPABASE_KEY')
            )
        else:
            g.supabase = factory()
    return g.supabase


def execute(query, description: str):
    """
    Execute a prepared query builder
    @param query: postgrest request builder
    @param description: what the query does, for the logs
    @returns: the APIResponse, or None for an empty maybe_single() result
    @raises: BackendError with the backend-provided message
    """
    try:
        return query.execute()
    except Exception as e:
        logger.error(f"Error while trying to {description}: {str(e)}")
        raise BackendError.from_exception(e)


def fetch_rows(query, description: str) -> List[Dict[str, Any]]:
    response = execute(query, description)
    rows = response.data if response is not None else None
    return rows or []


def fetch_one(query, description: str) -> Optional[Dict[str, Any]]:
    """
    Execute a maybe_single() query
    @returns: the row, or None when there is none
    """
    response = execute(query, description)
    # Depending on the postgrest version an empty result is None or data=None
    if response is None:
        return None
    return response.data or None


def insert_row(supabase_client: Client, table: str, record: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Insert one record into a Supabase table
    @returns: the inserted rows as returned by Supabase
    """
    response = execute(
        supabase_client.table(table).insert(record),
        f"insert into {table}"
    )
    logger.info(f"Inserted record into {table}")
    return response.data or []


def update_rows(
    supabase_client: Client,
    table: str,
    values: Dict[str, Any],
    match: Dict[str, Any]
) -> List[Dict[str, Any]]:
    """
    Update the rows of a table matching every column in match
    @returns: the updated rows as returned by Supabase
    """
    query = supabase_client.table(table).update(values)
    for column, value in match.items():
        query = query.eq(column, value)
    response = execute(query, f"update {table}")

    if not response.data:
        logger.warning(f"No rows of {table} matched {match}")
    return response.data or []
