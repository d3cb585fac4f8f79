from __future__ import annotations

import logging

import requests

from vfolders.domain.errors import BlobStoreError
from vfolders.domain.models import FilePage, FileRecord, FileUpload
from vfolders.ports.blob_store_port import BlobStorePort

logger = logging.getLogger(__name__)


class HttpBlobStoreAdapter(BlobStorePort):
    _UPLOADS_PATH = "/api/v1/uploads"

    def __init__(self, base_url: str, access_token: str = "", timeout: float = 20) -> None:
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._timeout = timeout

    def list_files(
        self,
        page: int = 1,
        limit: int = 100,
        search: str | None = None,
        mime_type: str | None = None,
    ) -> FilePage:
        params: dict[str, str | int] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        if mime_type:
            params["mimeType"] = mime_type
        response = self._request("GET", self._UPLOADS_PATH, context="list files", params=params)
        payload = _json(response, context="list files")
        files = [_parse_file(item) for item in _extract_items(payload)]
        files = [file_record for file_record in files if file_record.file_id]
        pagination = _extract_pagination(payload)
        return FilePage(
            files=files,
            page=_as_int(pagination.get("page"), page),
            limit=_as_int(pagination.get("limit"), limit),
            total=_as_int(pagination.get("total"), len(files)),
        )

    def get_file(self, file_id: str) -> FileRecord:
        response = self._request(
            "GET", f"{self._UPLOADS_PATH}/{file_id}", context="fetch file"
        )
        payload = _json(response, context="fetch file")
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        record = _parse_file(payload)
        if not record.file_id:
            raise BlobStoreError(f"File not found: {file_id}", status_code=404)
        return record

    def upload_files(self, uploads: list[FileUpload]) -> list[FileRecord]:
        multipart = [
            ("files", (upload.filename, upload.content, upload.mime_type)) for upload in uploads
        ]
        response = self._request(
            "POST", self._UPLOADS_PATH, context="upload files", files=multipart, timeout=120
        )
        payload = _json(response, context="upload files")
        records = [_parse_file(item) for item in _extract_items(payload)]
        logger.info("Uploaded %s file(s) to blob store", len(records))
        return [record for record in records if record.file_id]

    def delete_file(self, file_id: str) -> None:
        self._request("DELETE", f"{self._UPLOADS_PATH}/{file_id}", context="delete file")
        logger.info("Deleted file from blob store: %s", file_id)

    def _request(self, method: str, path: str, context: str, **kwargs) -> requests.Response:
        kwargs.setdefault("timeout", self._timeout)
        try:
            response = requests.request(
                method,
                f"{self._base_url}{path}",
                headers=self._auth_header(),
                **kwargs,
            )
        except requests.RequestException as exc:
            raise BlobStoreError(f"Network error while attempting to {context}.") from exc
        self._raise_for_status(response, context=context)
        return response

    def _auth_header(self) -> dict[str, str]:
        if not self._access_token:
            return {}
        return {"Authorization": f"Bearer {self._access_token}"}

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code in (401, 403):
            raise BlobStoreError(
                f"Auth failed while attempting to {context}.", status_code=response.status_code
            )
        if response.status_code == 404:
            raise BlobStoreError(
                f"Resource not found while attempting to {context}.", status_code=404
            )
        if response.status_code >= 400:
            raise BlobStoreError(
                f"Blob store error {response.status_code} while attempting to {context}.",
                status_code=response.status_code,
            )


def _json(response: requests.Response, context: str) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise BlobStoreError(f"Invalid response while attempting to {context}.") from exc


def _extract_items(payload: object) -> list[dict]:
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(payload.get("files"), list):
            items = payload["files"]
        elif isinstance(data, list):
            items = data
        elif isinstance(data, dict) and isinstance(data.get("files"), list):
            items = data["files"]
        else:
            items = []
    else:
        items = []
    return [item for item in items if isinstance(item, dict)]


def _extract_pagination(payload: object) -> dict:
    if not isinstance(payload, dict):
        return {}
    for candidate in (payload.get("pagination"), (payload.get("data") or {})):
        if isinstance(candidate, dict) and isinstance(candidate.get("pagination"), dict):
            return candidate["pagination"]
        if isinstance(candidate, dict) and "total" in candidate:
            return candidate
    if "total" in payload:
        return payload
    return {}


def _parse_file(item: object) -> FileRecord:
    if not isinstance(item, dict):
        return FileRecord(file_id="", name="", mime_type="", size=0, url="")
    file_id = item.get("id") or item.get("_id") or item.get("uploadId") or ""
    original_name = item.get("originalName")
    name = original_name or item.get("filename") or item.get("name") or str(file_id)
    return FileRecord(
        file_id=str(file_id),
        name=str(name),
        mime_type=str(item.get("mimeType") or item.get("mimetype") or ""),
        size=_as_int(item.get("size"), 0),
        url=str(item.get("url") or ""),
        original_name=str(original_name) if original_name else None,
        updated_at=item.get("updatedAt"),
    )


def _as_int(value: object, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
