"""Database clients and utilities."""

from .supabase import execute_query, get_supabase_client

__all__ = ["execute_query", "get_supabase_client"]
