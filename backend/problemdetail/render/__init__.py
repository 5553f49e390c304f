"""Problem detail rendering — JSON and XML onto a response sink."""

from problemdetail.render.encoders import XML_NAMESPACE
from problemdetail.render.renderer import (
    Encoding,
    problem_members,
    render,
    render_bytes,
    write_json,
    write_xml,
)
from problemdetail.render.sink import ResponseRecorder, ResponseSink

__all__ = [
    "Encoding",
    "XML_NAMESPACE",
    "ResponseRecorder",
    "ResponseSink",
    "problem_members",
    "render",
    "render_bytes",
    "write_json",
    "write_xml",
]
