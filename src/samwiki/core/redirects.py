"""Loading of the ``redirects.conf`` mapping."""

import logging
from pathlib import Path

import yaml

from samwiki.core.errors import RedirectsError

logger = logging.getLogger(__name__)

REDIRECTS_FILE = "redirects.conf"


def load_redirects(root: Path) -> dict[str, str]:
    """Read ``source: destination`` pairs from the wiki root.

    Returns an empty mapping when the file does not exist.
    """
    path = root / REDIRECTS_FILE
    if not path.exists():
        return {}

    logger.info("Redirects config found")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RedirectsError(f"Error open redirects file: {e}") from e
    except yaml.YAMLError as e:
        raise RedirectsError(f"Error decoding redirects file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RedirectsError("Error decoding redirects file: expected a mapping")
    for src, dst in data.items():
        if dst is None or isinstance(dst, (dict, list)):
            raise RedirectsError(f"Error decoding redirects file: bad target for {src!r}")
    return {str(src): str(dst) for src, dst in data.items()}
