"""Response sinks — where rendered problem details are written.

The calling service owns the sink. Anything with a status, headers and a
byte body fits; errors raised by a sink are never caught here.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ResponseSink(Protocol):
    """Minimal HTTP response writer."""

    def set_status(self, status_code: int) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...

    def write(self, body: bytes) -> None: ...


class ResponseRecorder:
    """In-memory sink that records what was written to it.

    Used to buffer a response before handing it to a web framework, and in
    tests to inspect the rendered output.
    """

    def __init__(self):
        self.status_code: Optional[int] = None
        self.headers: dict[str, str] = {}
        self.body = bytearray()

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code

    def set_header(self, name: str, value: str) -> None:
        self.headers[name.lower()] = value

    def write(self, body: bytes) -> None:
        self.body.extend(body)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower())

    @property
    def written(self) -> bool:
        return self.status_code is not None or bool(self.headers) or bool(self.body)

    def text(self) -> str:
        return self.body.decode("utf-8")
