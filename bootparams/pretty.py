"""Utility functions for prettifying the console"""
import logging
from rich import console
from rich.logging import RichHandler
from rich.traceback import install

FORMAT = "%(message)s"

r_console = console.Console()
r_print = r_console.print


def setup(log_level=None):
    """sets up the environment for rich"""
    if not log_level:
        log_level = "INFO"

    install(console=r_console)
    logging.basicConfig(
        level=log_level, format=FORMAT,
        handlers=[RichHandler(console=r_console)]
    )
    r_logger = logging.getLogger("rich")

    return r_print, r_console, r_logger
