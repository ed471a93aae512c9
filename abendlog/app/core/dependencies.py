"""FastAPI dependencies for the single-user view controller and the log loader."""

from fastapi import Request

from abendlog.app.core.config import Settings, get_settings
from abendlog.app.services.log_loader import LogLoader
from abendlog.app.services.log_store import LogStore
from abendlog.app.services.sample_data import sample_log_entries
from abendlog.app.services.view_controller import ViewController


def build_controller(settings: Settings) -> ViewController:
    """Create the controller and its store, seeded with samples if configured."""
    store = LogStore(sample_log_entries() if settings.seed_sample_logs else ())
    return ViewController(store)


def get_controller(request: Request) -> ViewController:
    """The process-wide controller lives on app.state."""
    return request.app.state.controller


def get_log_loader() -> LogLoader:
    settings = get_settings()
    return LogLoader(
        settings.resolved_log_source_url,
        timeout=settings.log_source_timeout_seconds,
    )
