# storage.py
import json
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

KEY = "high_score"


class HighScoreStore:
    """
    Single-slot high score persistence ("high_score" -> int) in a JSON file.

    Failures never propagate: a missing or broken file reads as 0 and a
    failed write is logged, so the game keeps its best score in memory only.
    path=None gives a purely in-memory store.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        self._memory = 0

    def load(self) -> int:
        if self.path is None:
            return self._memory
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read high score from {self.path}: {e}")
            return 0

        value = data.get(KEY) if isinstance(data, dict) else None
        # bool is an int subclass; reject it along with negatives
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.warning(f"Ignoring malformed high score file {self.path}")
            return 0
        return value

    def save(self, score: int) -> None:
        self._memory = score
        if self.path is None:
            return
        try:
            self.path.write_text(json.dumps({KEY: score}, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not save high score to {self.path}: {e}")
            return
        logger.debug(f"Saved high score {score} to {self.path}")
