"""HTTP client for the loan calculator API."""

import logging

import httpx

from loancalc.api.schemas import PaymentQuote, ScheduleRequest, ScheduleResponse
from loancalc.config import settings

logger = logging.getLogger(__name__)


class ScheduleClient:
    """Posts loan requests to a running API and parses the responses.

    Pass ``client`` to reuse an existing ``httpx.Client`` (e.g. a test client).
    """

    def __init__(self, base_url: str | None = None, client: httpx.Client | None = None, timeout: float = 30.0):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def _post(self, path: str, req: ScheduleRequest) -> dict:
        resp = self._client.post(path, json=req.model_dump(mode="json"))
        if resp.status_code >= 400:
            logger.warning("API request to %s failed with %s: %s", path, resp.status_code, resp.text)
        resp.raise_for_status()
        return resp.json()

    def schedule(self, req: ScheduleRequest) -> ScheduleResponse:
        return ScheduleResponse.model_validate(self._post("/api/v1/schedule", req))

    def payment(self, req: ScheduleRequest) -> PaymentQuote:
        return PaymentQuote.model_validate(self._post("/api/v1/payment", req))

    def health(self) -> bool:
        try:
            resp = self._client.get("/health")
        except httpx.HTTPError as e:
            logger.warning("Health check against %s failed: %s", self.base_url, e)
            return False
        return resp.status_code == 200 and resp.json().get("status") == "ok"

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ScheduleClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
