from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .core.config import EngineConfig
from .punches.repository import PunchRepository
from .requests.repository import RequestRepository
from .schedules.repository import HolidayRepository, ScheduleRepository

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def create_engine(
    *,
    schedules: ScheduleRepository,
    punches: PunchRepository,
    holidays: HolidayRepository,
    requests: RequestRepository,
) -> Container:
    """Load settings (.env + APP_ENV settings module) and wire the services."""
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    config = EngineConfig.from_settings(settings)
    if bool(getattr(settings, "DEBUG", False)):
        logger.debug(
            "settings=%s tolerance=%s day=%s-%s tz=%s",
            settings_module,
            config.default_tolerance_minutes,
            config.day_start.strftime("%H:%M"),
            config.night_start.strftime("%H:%M"),
            config.local_timezone,
        )

    return build_container(
        config=config,
        schedules=schedules,
        punches=punches,
        holidays=holidays,
        requests=requests,
    )
