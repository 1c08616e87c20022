"""Streaming and file-download responses."""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Callable, Mapping
from http import HTTPStatus
from typing import BinaryIO

from werkzeug.wrappers import Response
from werkzeug.wsgi import FileWrapper

from responsekit.core.errors import DownloadNotFoundError
from responsekit.support.content_type import ContentType, from_file_path
from responsekit.support.headers import Headers, HeaderValue, apply_headers, content_disposition

log = logging.getLogger(__name__)


class StreamResponseBuilder:
    """Build responses whose body is written by a callback or read from disk."""

    def __init__(self, response_class: type[Response] = Response) -> None:
        self.response_class = response_class

    def stream(
        self,
        writer: Callable[[BinaryIO], object],
        status: int = HTTPStatus.OK,
        content_type: str = ContentType.OCTET_STREAM,
        headers: Mapping[str, HeaderValue] | None = None,
    ) -> Response:
        """Let ``writer`` fill a binary sink and use its content as the body.

        Parameters
        ----------
        writer:
            Callable receiving a writable binary buffer.
        status:
            HTTP status code.
        content_type:
            ``Content-Type`` header value, used verbatim.
        headers:
            Extra headers, merged like :meth:`ResponseBuilder.make` does.
        """

        sink = io.BytesIO()
        writer(sink)
        response = self.response_class(sink.getvalue(), status=int(status), content_type=content_type)
        return apply_headers(response, headers)

    def file(
        self,
        path: str | os.PathLike[str],
        download_name: str | None = None,
        content_type: str | None = None,
        as_attachment: bool = True,
    ) -> Response:
        """Serve the file at ``path``.

        :param path: File to send.
        :param download_name: Name offered to the client; defaults to the
            file's base name.
        :param content_type: Explicit type; guessed from the extension when
            ``None``.
        :param as_attachment: ``attachment`` disposition when ``True``,
            ``inline`` otherwise.
        :raises DownloadNotFoundError: The file is missing or unreadable.
        """

        filename = os.fspath(path)
        if not os.path.isfile(filename) or not os.access(filename, os.R_OK):
            log.warning("Download target %s is missing or unreadable", filename)
            raise DownloadNotFoundError(filename, download_name)

        handle = open(filename, "rb")  # noqa: SIM115 - closed by the response
        response = self.response_class(
            FileWrapper(handle),
            status=HTTPStatus.OK,
            content_type=content_type or from_file_path(filename),
        )
        response.call_on_close(handle.close)
        response.headers[Headers.CONTENT_DISPOSITION] = content_disposition(
            download_name or os.path.basename(filename),
            inline=not as_attachment,
        )
        response.headers[Headers.CONTENT_LENGTH] = str(os.path.getsize(filename))
        return response


__all__ = ["StreamResponseBuilder"]
