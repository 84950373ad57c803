"""Caller options shared by the catalog operations."""
from typing import Callable, Optional
from pydantic import BaseModel

class Options(BaseModel):
    """Options supplied by the host application."""
    debug: bool = False
    # Called with a user-facing message before a syntax error is raised.
    error_reporter: Optional[Callable[[str], None]] = None

    def report_error(self, message: str) -> None:
        """Forward an error message to the host, if it asked for one."""
        if self.error_reporter is not None:
            self.error_reporter(message)
