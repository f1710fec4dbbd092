"""ETL utilities."""

from moviehub.etl.utils.logger import configure_from_settings, setup_logger

__all__ = ["setup_logger", "configure_from_settings"]
