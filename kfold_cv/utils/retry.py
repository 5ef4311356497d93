#!filepath: kfold_cv/utils/retry.py
import time
import random
from typing import Callable, Tuple, Type

from kfold_cv.utils.logger import logs


class Retry:
    """
    Synchronous retry helper with exponential backoff and jitter.

    Only idempotent calls go through here (resource fetches while polling).
    Resource creation is never retried.
    """

    @staticmethod
    def run(
        func: Callable,
        *args,
        exceptions: Tuple[Type[Exception], ...] = (Exception,),
        max_attempts: int = 3,
        delay: float = 1.0,
        backoff: float = 2.0,
        jitter: bool = True,
        **kwargs,
    ):
        attempt = 1
        while attempt <= max_attempts:

            try:
                return func(*args, **kwargs)

            except exceptions as e:
                if attempt == max_attempts:
                    logs.error(
                        f"[Retry] {func.__name__} failed after {max_attempts} attempts"
                    )
                    raise

                wait = delay * (backoff ** (attempt - 1))
                if jitter:
                    wait = wait * random.uniform(0.8, 1.2)

                logs.warning(
                    f"[Retry] attempt {attempt}/{max_attempts} of {func.__name__} failed: {e}. "
                    f"retrying in {wait:.2f}s"
                )
                time.sleep(wait)

                attempt += 1

