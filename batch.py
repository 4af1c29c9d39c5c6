"""
Batch lifecycle for the spreadsheet host.

A ``BatchContext`` owns one started host and the optional batch password.
It is started once, shared by every file of the batch and ended exactly
once, after which a garbage-collection pass reclaims the proxies of an
external host process.

Usage::

    with BatchContext.start(prompt_password=True) as batch:
        workbook = batch.host.open_workbook(path, password=batch.password)
"""

from __future__ import annotations

import gc
import getpass
import logging
from typing import Callable, Optional

from errors import HostStartError
from hosts.factory import get_spreadsheet_host
from hosts.service import SpreadsheetHost

logger = logging.getLogger(__name__)

PASSWORD_PROMPT = "Workbook password (leave empty for none): "


class BatchContext:
    def __init__(self, host: SpreadsheetHost, password: Optional[str] = None):
        self.host: Optional[SpreadsheetHost] = host
        self.password = password

    @classmethod
    def start(
        cls,
        prompt_password: bool = False,
        host_kind: Optional[str] = None,
        host_factory: Callable[[Optional[str]], SpreadsheetHost] = get_spreadsheet_host,
        prompt: Callable[[str], str] = getpass.getpass,
    ) -> "BatchContext":
        """
        Start a host and, if asked, prompt once for the batch password.

        An empty answer means "no password".  Raises ``HostStartError``
        when the host cannot be started.
        """
        password: Optional[str] = None
        if prompt_password:
            password = prompt(PASSWORD_PROMPT) or None
            if password is None:
                logger.info("No password supplied; protected workbooks will fail to open")

        try:
            host = host_factory(host_kind)
        except Exception as exc:
            logger.error("Could not start spreadsheet host", exc_info=True)
            raise HostStartError(f"Could not start spreadsheet host: {exc}") from exc

        logger.info("Started %s host", host.name)
        return cls(host, password)

    @property
    def active(self) -> bool:
        return self.host is not None

    def end(self) -> None:
        if self.host is None:
            logger.debug("Batch already ended")
            return
        host, self.host = self.host, None
        try:
            host.quit()
        finally:
            del host
            gc.collect()
            logger.info("Spreadsheet host released")

    def __enter__(self) -> "BatchContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.end()
