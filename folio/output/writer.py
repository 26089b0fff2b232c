"""PageWriter — prepares the output tree and writes rendered pages."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from folio.config.models import OutputConfig
from folio.errors import IoError

logger = logging.getLogger(__name__)


class PageWriter:
    """Writes rendered HTML into the output tree.

    Handles cleaning the previous build, copying static assets and creating
    destination directories on demand.
    """

    def __init__(self, config: OutputConfig) -> None:
        self.config = config
        self.base_dir = Path(config.base_dir)

    def prepare(self, static_dir: str | Path | None = None) -> Path:
        """Reset the output directory and seed it with static assets.

        Returns the output root.
        """
        try:
            if self.config.clean and self.base_dir.exists():
                shutil.rmtree(self.base_dir)
                logger.debug("removed previous build %s", self.base_dir)

            static = Path(static_dir) if static_dir else None
            if static is not None and static.is_dir():
                shutil.copytree(static, self.base_dir, dirs_exist_ok=True)
                logger.info("copied static files from %s", static)
            else:
                self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IoError(e.filename or self.base_dir, e) from e
        return self.base_dir

    def write(self, dest: Path, html: str) -> Path:
        """Write one page, creating parent directories as needed."""
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(html, encoding="utf-8")
        except OSError as e:
            raise IoError(dest, e) from e
        logger.debug("wrote %s (%d bytes)", dest, len(html))
        return dest
