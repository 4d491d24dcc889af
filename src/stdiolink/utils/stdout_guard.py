from __future__ import annotations

import contextlib
import logging
import os
import sys


class StdoutGuard(contextlib.AbstractContextManager):
    """
    Keep stdout reserved for transport frames while active.

    - print-style output is redirected to stderr
    - logs go to stderr
    """

    def __init__(self, level: str | None = None) -> None:
        self._orig_stdout = sys.stdout
        # Configure root logger only once
        if not logging.getLogger().handlers:
            logging.basicConfig(
                stream=sys.stderr,
                level=(level or os.environ.get("STDIOLINK_LOG_LEVEL", "INFO")).upper(),
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            )

    def __enter__(self) -> StdoutGuard:
        sys.stdout = sys.stderr
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        sys.stdout = self._orig_stdout
        return False
