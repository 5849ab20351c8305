"""Environment-driven configuration and logging setup for the portfolio build."""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file so local overrides work without exporting variables
load_dotenv()

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

SRC_DIR = Path(os.getenv("PORTFOLIO_SRC_DIR", "src"))
PUBLIC_DIR = Path(os.getenv("PORTFOLIO_PUBLIC_DIR", "public"))
DIST_DIR = Path(os.getenv("PORTFOLIO_DIST_DIR", "dist"))
DATA_FILE = Path(os.getenv("PORTFOLIO_DATA_FILE", str(SRC_DIR / "data" / "projects.json")))
BASE_PATH = os.getenv("PORTFOLIO_BASE_PATH", "")  # e.g. "/my-portfolio" for a GitHub Pages subpath
FETCH_TIMEOUT = float(os.getenv("PORTFOLIO_FETCH_TIMEOUT", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


@dataclass
class BuildConfig:
    src_dir: Path = SRC_DIR
    public_dir: Path = PUBLIC_DIR
    dist_dir: Path = DIST_DIR
    data_file: Path = DATA_FILE
    base_path: str = BASE_PATH

    @property
    def styles_dir(self) -> Path:
        return self.src_dir / "styles"

    def normalised_base_path(self) -> str:
        """Base path with a leading slash and no trailing slash, or ''."""
        base = self.base_path.strip().strip("/")
        return f"/{base}" if base else ""


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def configure_logging(level: str = LOG_LEVEL, log_file: Optional[Path] = None):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
