"""
Services package exports.
"""
from .schedule_service import ScheduleService, games_on_day

__all__ = ["ScheduleService", "games_on_day"]
