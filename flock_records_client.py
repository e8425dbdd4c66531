"""Flock Records API client.

A small synchronous wrapper around the Flock Records HTTP API, meant for
scripts and front ends that submit daily observations or browse stored
flocks.  It uses the ``requests`` library internally.

The client exposes one method per endpoint:

* :meth:`save_record` – save (create or replace) a day's observations.
* :meth:`list_flocks` – fetch every flock with its daily records.
* :meth:`get_flock` – fetch a single flock.
* :meth:`update_record` – change selected fields of an existing record.
* :meth:`delete_record` – remove a day's record.

Every method returns a ``(data, error)`` tuple.  On success ``error`` is
``None``; on failure ``data`` is ``None`` and ``error`` is a dictionary
with ``status_code`` and ``message`` keys.  Failures are logged, never
raised.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class FlockRecordsClient:
    """Client for the Flock Records API."""

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        """Perform an HTTP request and return ``(data, error)``."""
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                    if not isinstance(message, str):
                        message = str(message)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------
    def save_record(self, flock_id: str, day: int, **fields: Any) -> Result:
        """Save a day's observations.

        ``fields`` are sent as-is and should use the API's camelCase
        names, e.g. ``breederName``, ``initialChickCount``, ``feedKg``.
        """
        body = {"flockId": flock_id, "day": day, **fields}
        return self._request("POST", "/api/records/save", json_body=body)

    def update_record(self, flock_id: str, day: int, **patch: Any) -> Result:
        body = {"flockId": flock_id, "day": day, **patch}
        return self._request("PUT", "/api/records/update", json_body=body)

    def delete_record(self, flock_id: str, day: int) -> Result:
        return self._request("DELETE", "/api/records/delete", json_body={"flockId": flock_id, "day": day})

    # ------------------------------------------------------------------
    # Flocks
    # ------------------------------------------------------------------
    def list_flocks(self) -> Tuple[Optional[List[Dict[str, Any]]], Optional[Dict[str, Any]]]:
        return self._request("GET", "/api/flock/all-data")

    def get_flock(self, flock_id: str) -> Result:
        path = f"/api/flock/data/{quote(flock_id, safe='')}"
        return self._request("GET", path)
