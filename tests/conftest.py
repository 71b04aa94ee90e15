import logging
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def isolate_logging():
    """Restore root logging after tests that let the CLI configure it.

    The CLI installs a RichHandler on the root logger; without this the
    handler outlives the CliRunner streams it was bound to.
    """
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    logging.root.handlers.clear()
    logging.root.addHandler(logging.NullHandler())

    yield

    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)


@pytest.fixture
def make_png(tmp_path: Path) -> Callable[..., Path]:
    """Write a small solid-colour PNG and return its path."""
    from PIL import Image

    def _make(name: str = "page.png", size: tuple[int, int] = (40, 60), color: str = "white") -> Path:
        path = tmp_path / "images" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path, format="PNG")
        return path

    return _make
