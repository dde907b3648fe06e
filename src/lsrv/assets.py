"""Discovery of the default page templates bundled with lsrv."""

from importlib.resources import files
from pathlib import Path


def get_templates_dir() -> Path:
    """Return path to the bundled default templates.

    Returns:
        Path to the directory containing view.html and edit.html.

    Raises:
        FileNotFoundError: If the templates are not bundled.
    """
    templates = files("lsrv").joinpath("templates")
    if not templates.is_dir():
        msg = "Bundled templates not found. Reinstall lsrv."
        raise FileNotFoundError(msg)
    return Path(str(templates))
