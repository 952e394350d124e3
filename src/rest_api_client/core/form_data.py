"""
Multipart form-data payloads and the bracket-path serializer.

Nested values are flattened into PHP/Rails style field names::

    {"a": [1, 2], "b": {"c": True}}

becomes::

    a[]=1
    a[]=2
    b['c']=true
"""
import logging
import secrets
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import httpx

logger = logging.getLogger("rest_api_client.form_data")

MULTIPART_FORM_DATA = "multipart/form-data"


def _is_file_like(value: Any) -> bool:
    return hasattr(value, "read") and not isinstance(value, (str, bytes))


class FormData:
    """
    Ordered multipart form fields.

    Repeated field names are kept as separate parts in append order. The
    wire encoding is produced by httpx; the boundary is fixed per instance
    so ``get_headers()`` and ``encode()`` always agree.
    """

    def __init__(self, boundary: Optional[str] = None):
        self._fields: List[Tuple[str, Any]] = []
        self._boundary = boundary or secrets.token_hex(16)
        self._encoded: Optional[bytes] = None

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def fields(self) -> List[Tuple[str, Any]]:
        return list(self._fields)

    def append(self, name: str, value: Any) -> None:
        self._fields.append((name, value))
        self._encoded = None

    def get_headers(self) -> Dict[str, str]:
        return {"Content-Type": f"{MULTIPART_FORM_DATA}; boundary={self._boundary}"}

    def _httpx_files(self) -> List[Tuple[str, Any]]:
        files = []
        for name, value in self._fields:
            if _is_file_like(value):
                files.append((name, value))
            elif isinstance(value, bytes):
                files.append((name, (None, value)))
            else:
                files.append((name, (None, str(value))))
        return files

    def encode(self) -> bytes:
        """Encode fields to a multipart body."""
        if self._encoded is None and not self._fields:
            # httpx encodes no files as an empty body; keep it valid multipart
            self._encoded = f"--{self._boundary}--\r\n".encode()
        elif self._encoded is None:
            request = httpx.Request(
                "POST",
                "http://localhost/",
                headers=self.get_headers(),
                files=self._httpx_files(),
            )
            self._encoded = request.read()
            logger.debug(
                f"FormData.encode: {len(self._fields)} fields, {len(self._encoded)} bytes, "
                f"boundary={self._boundary}"
            )
        return self._encoded

    getvalue = encode

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FormData(fields={[name for name, _ in self._fields]!r})"


def serialize_to_form_data(
    value: Any,
    form_data: Optional[FormData] = None,
    path: str = "",
) -> FormData:
    """
    Append ``value`` to ``form_data`` under bracket-path keys.

    - None: nothing is appended
    - bool: ``"true"`` / ``"false"``
    - list/tuple: each item under ``path[]``; an empty one appends ``path[]=""``
    - date/datetime: ISO-8601 string
    - mapping: each item under ``path['key']``, or ``key`` at the top level
    - anything else (str, number, bytes, file object): appended as-is
    """
    if form_data is None:
        form_data = FormData()

    if value is None:
        return form_data

    # bool before everything else, it is also an int
    if isinstance(value, bool):
        form_data.append(path, "true" if value else "false")
    elif isinstance(value, (list, tuple)):
        key = f"{path}[]"
        if not value:
            form_data.append(key, "")
        for item in value:
            serialize_to_form_data(item, form_data, key)
    elif isinstance(value, (datetime, date)):
        form_data.append(path, value.isoformat())
    elif isinstance(value, Mapping):
        for prop, item in value.items():
            key = f"{path}['{prop}']" if path else str(prop)
            serialize_to_form_data(item, form_data, key)
    else:
        form_data.append(path, value)

    return form_data
