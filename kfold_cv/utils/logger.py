#!filepath: kfold_cv/utils/logger.py
import os
import sys
import json
from functools import wraps
from time import perf_counter
from loguru import logger
from typing import Callable


class Logging:
    """
    Project-wide logger
    ---------------------------------------
    - daily rotating file sink
    - retention window
    - stderr sink for WARNING and above
    - function-level catch decorator
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    def _configure(self) -> None:
        """
        Reset every loguru sink and install ours.
        """
        logger.remove()

        logger.add(
            sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            enqueue=True,
            backtrace=True,
            diagnose=True,
        )

        logger.add(
            sink=sys.stderr,
            level="WARNING",
            format="{level} | {message}",
        )

    def reconfigure(
        self,
        log_dir: str,
        rotation: str,
        retention: str,
        log_level: str,
    ) -> None:
        """Re-point the shared logger at a LogConfig (called by workflows)."""
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    # ----------- log methods -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- decorator ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_outputs: bool = False,
        log_time: bool = True,
    ) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):

                if log_inputs:
                    logger.info(
                        f"[CALL] {func.__name__} args={args}, "
                        f"kwargs={json.dumps(kwargs, ensure_ascii=False, default=str)}"
                    )

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_outputs:
                    logger.info(f"[RETURN] {func.__name__} result={result}")

                if log_time:
                    cost = perf_counter() - start
                    logger.info(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


# shared instance; workflows call logs.reconfigure(...) with the loaded LogConfig
logs = Logging()
