# admin_api/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from admin_api.core.config import get_settings


def supabase_public() -> Client:
    """
    Create a Supabase client with the anon/public key.

    Use cases:
      - operator sign-in / sign-out against Supabase Auth

    Not cached: a client holds the session it signed in with, and requests
    from different operators must not share one.

    Note: This client still respects RLS.
    """
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


@lru_cache
def supabase_admin() -> Client:
    """
    Create a Supabase client with the service role key.

    Use cases:
      - uploading product / facet / banner images
      - deleting stored objects when rows go away

    WARNING:
      - Never expose service role key to frontend.

    Raises:
        RuntimeError: if SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    settings = get_settings()
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("Missing SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
