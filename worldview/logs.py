import logging

from rich.console import Console
from rich.logging import RichHandler

from worldview import config

console = Console()


def setup_logging(level=None, to_file=False):
    """Route log records through rich, or into the log file while urwid owns the screen."""
    level = level or config.log_level
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if to_file:
        handler = logging.FileHandler(config.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root.addHandler(handler)
    root.setLevel(level)
    return root
