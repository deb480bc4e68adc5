from ._body import AssembledBody, BodyKind, MultipartForm, assemble_body, classify_body
from ._errors import handle_errors
from ._headers import find_header, merge_headers
from ._path_template import PathTemplate, join_url, parameter_names, substitute
from ._request_spec import RequestInit, RequestSpec
from ._ssl_context import get_httpx_client_kwargs

__all__ = [
    "AssembledBody",
    "BodyKind",
    "MultipartForm",
    "PathTemplate",
    "RequestInit",
    "RequestSpec",
    "assemble_body",
    "classify_body",
    "find_header",
    "get_httpx_client_kwargs",
    "handle_errors",
    "join_url",
    "merge_headers",
    "parameter_names",
    "substitute",
]
