"""Backend gateways that persist the predefined class list.

Two gateways implement the same async contract:

- ``AjaxBackend`` posts to the WordPress ``admin-ajax.php`` endpoint. The
  plugin registers ``qcs_save_classes`` and ``qcs_delete_class``; loading
  (``qcs_get_classes``) and batch import (``qcs_import_classes``) need a
  server that adds those two actions. admin-ajax answers a bare ``0`` for
  an action nobody registered, which surfaces as ``BackendError``.
- ``FileBackend`` keeps the list in a local JSON file and applies the same
  sanitization the endpoint applies.

Gateways raise ``TransportError`` / ``AuthorizationError`` /
``ValidationError``; turning those into user-facing outcomes is the
caller's job (see ``ClassStore.save``).
"""

import json
from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

import httpx
from pydantic import ValidationError as PydanticValidationError

from quickclass.models.class_entry import ClassList, parse_class_list
from quickclass.models.config import BackendConfig
from quickclass.services.exceptions import (
    AuthorizationError,
    BackendError,
    TransportError,
    ValidationError,
)
from quickclass.services.file_operations import atomic_write
from quickclass.services.sanitize import parse_import_text, sanitize_classes
from quickclass.utils.logging import get_logger


logger = get_logger(__name__)

# Registered by the plugin
ACTION_SAVE = "qcs_save_classes"
ACTION_DELETE = "qcs_delete_class"

# Server-side additions the stock plugin does not register
ACTION_GET = "qcs_get_classes"
ACTION_IMPORT = "qcs_import_classes"

# Error payloads the plugin sends when the user lacks manage_options
PERMISSION_DENIED_MESSAGES = {"Geen toegang"}


@runtime_checkable
class BackendGateway(Protocol):
    """Persists and returns the canonical class list."""

    async def load_initial(self) -> ClassList:
        """Return the stored list snapshot for session start."""
        ...

    async def save(self, candidate: ClassList) -> ClassList:
        """Persist a candidate list and return the canonical sanitized list."""
        ...

    async def batch_import(self, raw_text: str) -> tuple[str, ClassList]:
        """Import raw bulk text; return (message, canonical list)."""
        ...


class AjaxBackend:
    """
    Gateway for the plugin's admin-ajax endpoint.

    Requests are form-encoded POSTs carrying ``action`` and ``nonce``.
    Responses use the WordPress JSON envelope
    ``{"success": bool, "data": ...}``.

    No client-side timeout is set: a request runs until the server answers
    or the connection fails.
    """

    def __init__(
        self,
        config: BackendConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the ajax gateway.

        Args:
            config: Backend configuration (ajax_url, nonce, cookies)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        if config.ajax_url is None:
            raise ValueError("AjaxBackend requires backend.ajax_url")
        self.config = config
        self.url = str(config.ajax_url)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=None,
            transport=self._transport,
            cookies=self.config.cookies,
        )

    async def _post(self, action: str, fields: Optional[dict[str, str]] = None) -> Any:
        """
        POST an action and unwrap the JSON envelope.

        Args:
            action: admin-ajax action name
            fields: Extra form fields

        Returns:
            The ``data`` member of a successful response

        Raises:
            TransportError: Network failure, non-200 status, or unparsable body
            AuthorizationError: Nonce/capability rejection
            BackendError: Any other application-level rejection
        """
        form = {"action": action, "nonce": self.config.nonce}
        if fields:
            form.update(fields)

        logger.debug("backend_request", action=action, num_fields=len(form))

        try:
            async with self._client() as client:
                response = await client.post(self.url, data=form)
        except httpx.HTTPError as e:
            logger.warning("backend_transport_error", action=action, error=str(e))
            raise TransportError(f"Request to {self.url} failed: {e}") from e

        if response.status_code in (401, 403):
            raise AuthorizationError(f"Access denied ({response.status_code})")
        if response.status_code != 200:
            raise TransportError(f"Unexpected status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError("Response is not valid JSON") from e

        # check_ajax_referer() answers a bare -1 on nonce failure
        if payload == -1:
            raise AuthorizationError("Invalid or expired nonce")

        # admin-ajax.php answers a bare 0 when no handler is registered
        if type(payload) is int and payload == 0:
            logger.warning("backend_action_not_registered", action=action)
            raise BackendError(f"Action {action} is not available on the server")

        if not isinstance(payload, dict):
            raise TransportError("Response is not a JSON object")

        if not payload.get("success"):
            message = payload.get("data")
            if isinstance(message, str) and message in PERMISSION_DENIED_MESSAGES:
                raise AuthorizationError(message)
            raise BackendError(str(message) if message else "Request rejected")

        logger.debug("backend_response", action=action)
        return payload.get("data")

    @staticmethod
    def _classes_from(data: Any) -> ClassList:
        if isinstance(data, dict):
            data = data.get("classes", [])
        if not isinstance(data, list):
            raise TransportError("Response does not contain a class list")
        try:
            return parse_class_list(data)
        except PydanticValidationError as e:
            raise TransportError("Response contains an invalid class list") from e

    async def load_initial(self) -> ClassList:
        """Fetch the stored class list."""
        return self._classes_from(await self._post(ACTION_GET))

    async def save(self, candidate: ClassList) -> ClassList:
        """Send the candidate list; return the canonical list the server stored."""
        fields: dict[str, str] = {}
        for index, entry in enumerate(candidate):
            fields[f"classes[{index}][class]"] = entry.class_name
            fields[f"classes[{index}][description]"] = entry.description

        data = await self._post(ACTION_SAVE, fields)
        return self._classes_from(data)

    async def batch_import(self, raw_text: str) -> tuple[str, ClassList]:
        """Forward raw import text; return the server message and canonical list."""
        data = await self._post(ACTION_IMPORT, {"raw": raw_text})
        message = data.get("message", "") if isinstance(data, dict) else ""
        return message, self._classes_from(data)

    async def delete(self, index: int) -> ClassList:
        """Remove the stored entry at ``index`` and return the remaining list."""
        data = await self._post(ACTION_DELETE, {"index": str(index)})
        return self._classes_from(data)


class FileBackend:
    """
    Gateway that stores the class list as JSON on the local disk.

    The file holds a JSON array of ``{"class", "description"}`` objects,
    the same shape as the plugin's stored option.
    """

    def __init__(self, path: Path):
        """
        Initialize the file gateway.

        Args:
            path: JSON file to read and write (created on first save)
        """
        self.path = path

    def _read(self) -> ClassList:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error("file_backend_invalid_json", path=str(self.path), error=str(e))
            raise TransportError(f"Class store is not valid JSON: {self.path}") from e
        except OSError as e:
            raise TransportError(f"Cannot read class store: {e}") from e

        if not isinstance(data, list):
            raise TransportError(f"Class store must hold a JSON array: {self.path}")

        return sanitize_classes(data)

    def _write(self, classes: ClassList) -> None:
        content = json.dumps(
            [entry.to_payload() for entry in classes],
            indent=2,
            ensure_ascii=False,
        )
        try:
            atomic_write(self.path, content + "\n")
        except OSError as e:
            raise TransportError(f"Cannot write class store: {e}") from e

    async def load_initial(self) -> ClassList:
        """Read the stored class list (empty when the file does not exist)."""
        classes = self._read()
        logger.info("file_backend_loaded", path=str(self.path), count=len(classes))
        return classes

    async def save(self, candidate: ClassList) -> ClassList:
        """Sanitize and store the candidate list, replacing what was stored."""
        canonical = sanitize_classes(entry.to_payload() for entry in candidate)
        self._write(canonical)
        logger.info("file_backend_saved", path=str(self.path), count=len(canonical))
        return canonical

    async def batch_import(self, raw_text: str) -> tuple[str, ClassList]:
        """Append parsed import lines to the stored list."""
        imported = parse_import_text(raw_text)
        if not imported:
            raise ValidationError("Geen geldige classes gevonden")

        canonical = self._read() + imported
        self._write(canonical)
        logger.info(
            "file_backend_imported",
            path=str(self.path),
            imported=len(imported),
            total=len(canonical),
        )
        return f"{len(imported)} classes geïmporteerd!", canonical

    async def delete(self, index: int) -> ClassList:
        """Remove the stored entry at ``index`` and return the remaining list."""
        classes = self._read()
        if not 0 <= index < len(classes):
            raise ValidationError("Class niet gevonden")

        del classes[index]
        self._write(classes)
        return classes


def create_backend(config: BackendConfig) -> BackendGateway:
    """Build the gateway selected by ``backend.kind``."""
    if config.kind == "ajax":
        return AjaxBackend(config)
    return FileBackend(config.path)
