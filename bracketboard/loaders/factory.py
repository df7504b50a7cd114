from bracketboard.config.settings import AppSettings
from bracketboard.models.enums import DataSource

from .base_loader import BaseLoader
from .file_loader import FileLoader
from .http_loader import HttpLoader
from .supabase_loader import SupabaseLoader


def build_loader(app_settings: AppSettings) -> BaseLoader:
    """Creates the loader matching ``app_settings.data_source``."""
    if app_settings.data_source == DataSource.HTTP:
        return HttpLoader(
            app_settings.teams_location,
            app_settings.matches_location,
            timeout=app_settings.request_timeout_seconds,
        )
    if app_settings.data_source == DataSource.SUPABASE:
        return SupabaseLoader(
            str(app_settings.supabase_url) if app_settings.supabase_url else "",
            app_settings.supabase_key or "",
            teams_table=app_settings.teams_table,
            matches_table=app_settings.matches_table,
        )
    return FileLoader(app_settings.teams_location, app_settings.matches_location)
