"""Servicio de ficheros (`/files`, `/assets`)."""

from __future__ import annotations

import logging
import mimetypes
from typing import IO
from urllib.parse import quote

from directus_sdk.core.domain.models import DirectusFile
from directus_sdk.core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


class FilesService:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def upload_file(
        self,
        file_name: str,
        content: bytes | IO[bytes],
        *,
        title: str | None = None,
        folder: str | None = None,
        content_type: str | None = None,
    ) -> DirectusFile | None:
        """Sube un fichero como multipart (campo `file`).

        Directus exige que los campos de texto (`title`, `folder`) vayan antes
        que el binario; httpx serializa `data` antes que `files`.
        """

        logger.debug("Uploading file: %s", file_name)

        mime = content_type or mimetypes.guess_type(file_name)[0] or "application/octet-stream"
        fields: dict[str, str] = {}
        if title:
            fields["title"] = title
        if folder:
            fields["folder"] = folder

        data = await self._transport.send_multipart(
            "/files",
            files={"file": (file_name, content, mime)},
            data=fields or None,
        )
        return DirectusFile.model_validate(data) if data is not None else None

    async def get_file(self, file_id: str) -> DirectusFile | None:
        logger.debug("Getting file metadata: %s", file_id)

        data = await self._transport.get(f"/files/{quote(file_id, safe='')}")
        return DirectusFile.model_validate(data) if data is not None else None

    async def download_file(self, file_id: str) -> bytes:
        """Descarga el binario original desde `/assets/{id}`."""

        logger.debug("Downloading file: %s", file_id)

        response = await self._transport.request_raw("GET", f"/assets/{quote(file_id, safe='')}")
        return response.content

    async def delete_file(self, file_id: str) -> None:
        logger.debug("Deleting file: %s", file_id)

        await self._transport.delete(f"/files/{quote(file_id, safe='')}")
