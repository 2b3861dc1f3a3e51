# flappy/game/storage.py
from __future__ import annotations
import logging
from pathlib import Path
from .config import BEST_SCORE_FILE

logger = logging.getLogger(__name__)


class BestScoreStore:
    """Best score kept as a single integer in a text file."""
    def __init__(self, path: str | Path = BEST_SCORE_FILE):
        self.path = Path(path)

    def load_best(self) -> int:
        """Return the stored best, 0 if missing or unreadable."""
        try:
            text = self.path.read_text(encoding="utf-8").strip()
            return max(0, int(text or 0))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as e:
            logger.warning("could not read best score from %s: %s", self.path, e)
            return 0

    def save_best(self, score: int):
        """Overwrite the stored best. Failures are logged and dropped."""
        try:
            self.path.write_text(str(int(score)), encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.warning("could not save best score to %s: %s", self.path, e)


class MemoryBestStore:
    """Session-only store for headless runs."""
    def __init__(self, best: int = 0):
        self.best = int(best)
        self.writes = 0

    def load_best(self) -> int:
        return self.best

    def save_best(self, score: int):
        self.best = int(score)
        self.writes += 1
