import requests
from typing import Iterable, List, Union

from loguru import logger

from models import LoggedSet


class StoreError(RuntimeError):
    """Raised when the hosted store cannot be reached or rejects a request."""


class StoreClient:
    """REST client for a hosted PostgREST-style table of logged sets.

    Exposes the same ``fetch_sets``/``add_many``/``fetch_detail``/``update``/
    ``delete`` operations as :class:`db.LoggedSetRepository` so services can
    use either store.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        table: str = "workout_raw_records",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json"}
        if api_key:
            self.headers["apikey"] = api_key
            self.headers["Authorization"] = f"Bearer {api_key}"

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _request(self, method: str, **kwargs) -> requests.Response:
        headers = dict(self.headers)
        headers.update(kwargs.pop("headers", {}))
        try:
            resp = self.session.request(
                method, self.table_url, headers=headers, timeout=self.timeout, **kwargs
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Store request {} {} failed: {}", method, self.table_url, e)
            raise StoreError(str(e)) from e
        return resp

    def fetch_sets(self) -> List[LoggedSet]:
        resp = self._request(
            "GET", params={"select": "*", "order": "created_at.asc"}
        )
        return [LoggedSet(**row) for row in resp.json()]

    def fetch_detail(self, set_id: Union[int, str]) -> LoggedSet:
        resp = self._request("GET", params={"select": "*", "id": f"eq.{set_id}"})
        rows = resp.json()
        if not rows:
            raise ValueError("set not found")
        return LoggedSet(**rows[0])

    def add_many(self, records: Iterable[LoggedSet]) -> List[LoggedSet]:
        payload = [r.to_row() for r in records]
        resp = self._request(
            "POST",
            json=payload,
            params={"select": "*"},
            headers={"Prefer": "return=representation"},
        )
        added = [LoggedSet(**row) for row in resp.json()]
        logger.info("Inserted {} logged sets into {}", len(added), self.table)
        return added

    def update(self, set_id: Union[int, str], record: LoggedSet) -> LoggedSet:
        resp = self._request(
            "PATCH",
            json=record.to_row(),
            params={"id": f"eq.{set_id}", "select": "*"},
            headers={"Prefer": "return=representation"},
        )
        rows = resp.json()
        if not rows:
            raise ValueError("set not found")
        logger.info("Updated logged set {}", set_id)
        return LoggedSet(**rows[0])

    def delete(self, set_id: Union[int, str]) -> None:
        resp = self._request(
            "DELETE",
            params={"id": f"eq.{set_id}", "select": "id"},
            headers={"Prefer": "return=representation"},
        )
        if not resp.json():
            raise ValueError("set not found")
        logger.info("Deleted logged set {}", set_id)
