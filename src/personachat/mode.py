"""Persisted demo/live toggle."""

from pathlib import Path
from typing import Union

from loguru import logger

from .schemas import DataMode


class ModeFlag:
    """
    Demo-mode switch stored as ``"true"`` / ``"false"`` in a small file.

    Read once at startup and handed to the façade; nothing else consults it.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def read(self) -> DataMode:
        """Current mode. A missing or unreadable flag means live mode."""
        try:
            raw = self.path.read_text(encoding="utf-8").strip().lower()
        except FileNotFoundError:
            return DataMode.LIVE
        except OSError as e:
            logger.warning(f"Could not read mode flag {self.path}: {e}")
            return DataMode.LIVE
        return DataMode.DEMO if raw == "true" else DataMode.LIVE

    def write(self, mode: DataMode) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("true" if mode == DataMode.DEMO else "false", encoding="utf-8")
        logger.info(f"Data mode set to {mode.value}")

    def enable_demo(self) -> None:
        self.write(DataMode.DEMO)

    def disable_demo(self) -> None:
        self.write(DataMode.LIVE)
