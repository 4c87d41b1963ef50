# game_threads/cli.py
"""
Command-line entry point: one reconciliation pass, then exit.

Exit status is 0 after a completed pass (including the "week has not
started" early exit) and 1 on any fatal error. State is written only after a
successful pass.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import Optional

import click

from .config import AppConfig, get_profile
from .discord_client import DiscordClient
from .errors import GameThreadsError
from .handlers.reconcile_handler import ReconcileHandler
from .services.schedule_service import ScheduleService
from .sportradar_client import SportradarClient
from .state import load_state, save_state

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(debug: bool) -> logging.Logger:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stdout,
    )
    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO)
    # basicConfig is a no-op when the root logger already has handlers
    logger = logging.getLogger("game_threads")
    logger.setLevel(level)
    return logger


def build_handler(cfg: AppConfig, logger: logging.Logger) -> ReconcileHandler:
    """Wire the real collaborators from configuration."""
    schedule = ScheduleService(
        client=SportradarClient(cfg.api_base, cfg.api_key),
        schedule_path=cfg.profile.schedule_path,
        tz_name=cfg.tz,
    )
    chat = DiscordClient(cfg.bot_token)
    return ReconcileHandler(config=cfg, schedule=schedule, chat=chat, logger=logger)


@click.command(name="game-threads")
@click.option("--debug", is_flag=True, default=False, help="Verbose logging.")
@click.option("--state-file", type=click.Path(dir_okay=False), default=None, help="Override GAME_THREADS_STATE_FILE.")
@click.option("--league", default=None, help="League profile key (nfl, nba); overrides GAME_THREADS_LEAGUE.")
def main(debug: bool, state_file: Optional[str], league: Optional[str]) -> None:
    """Keep one Discord thread per game week and post the daily schedule into it."""
    try:
        cfg = AppConfig(profile=get_profile(league)) if league else AppConfig()
    except GameThreadsError as e:
        configure_logging(debug)
        logging.getLogger("game_threads").error("failed to load configuration: %s", e)
        sys.exit(1)

    logger = configure_logging(debug or cfg.debug)
    path = state_file or cfg.state_file

    logger.debug("| == [START] loading configuration ==")
    logger.debug("|   league = %s", cfg.profile.key)
    logger.debug("|    token = %s", cfg.masked_token())
    logger.debug("|  channel = %s", cfg.channel_id)
    logger.debug("|    guild = %s", cfg.guild_id)
    logger.debug("|    state = %s", path)
    logger.debug("| ==  [DONE] loading configuration ==")

    try:
        state = load_state(path)
    except GameThreadsError as e:
        logger.error("failed to read state: %s", e)
        sys.exit(1)

    now = datetime.now(cfg.app_tz)
    handler = build_handler(cfg, logger)

    try:
        state = handler.run(state, now.date(), now)
    except GameThreadsError as e:
        logger.error("reconciliation failed: %s", e)
        sys.exit(1)

    try:
        save_state(path, state)
    except GameThreadsError as e:
        logger.error("failed to write out the state: %s", e)
        sys.exit(1)

    logger.debug("done")


if __name__ == "__main__":
    main()
