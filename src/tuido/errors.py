"""Error taxonomy for tuido.

Every error here is recoverable at the mode controller boundary. None of them
terminate the application.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class TuidoError(Exception):
    """Base class for all recoverable tuido errors."""


class InputRejected(TuidoError):
    """Committed text was not acceptable (e.g. empty todo text)."""


class PersistenceFailure(TuidoError):
    """Loading or saving the todo store failed."""


class ExportFailure(TuidoError):
    """Exporting the list to another format failed."""


class CommandUnrecognized(TuidoError):
    """A ``:`` command did not match any known command."""


@contextmanager
def report_errors(on_error: Callable[[str], None]) -> Iterator[None]:
    """Route any TuidoError raised inside the block to ``on_error``.

    Example:
        with report_errors(self._set_message):
            store.save(items)
    """
    try:
        yield
    except TuidoError as e:
        logger.info("%s: %s", type(e).__name__, e)
        on_error(str(e))
