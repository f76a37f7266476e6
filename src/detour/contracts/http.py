"""Client-wide HTTP constants and the file upload descriptor."""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import PurePath
from typing import BinaryIO

USER_AGENT_HEADER = "User-Agent"
DEFAULT_USER_AGENT = "detour/0.1"
CONTENT_TYPE_HEADER = "Content-Type"

PLAIN_TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"
XML_CONTENT_TYPE = "text/xml; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Same default hop limit as most browsers and Go's net/http.
DEFAULT_MAX_REDIRECTS = 10


@dataclass(frozen=True)
class UploadFile:
    """A file to send as one part of a multipart request body.

    When reader is None the file at file_path is opened at send time and
    closed once the request completes. The filename sent on the wire is
    always the base name of file_path.
    """

    param_name: str
    file_path: str
    reader: BinaryIO | None = None

    @property
    def filename(self) -> str:
        return PurePath(self.file_path).name

    def as_httpx_file(self, stack: ExitStack) -> tuple[str, tuple[str, BinaryIO]]:
        """Return an entry for httpx's ``files=`` argument.

        Args:
            stack: Owns any file handle opened here

        Returns:
            (param_name, (filename, binary stream)) tuple
        """
        reader = self.reader
        if reader is None:
            reader = stack.enter_context(open(self.file_path, "rb"))
        return self.param_name, (self.filename, reader)
