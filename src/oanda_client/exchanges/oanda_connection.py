"""
Connection and transport for the OANDA v20 REST API.

Usage::

    from oanda_client.exchanges.oanda_connection import OandaConnection

    conn = OandaConnection("101-004-1234567-001", token, live=False)
    body = conn.request("/instruments/EUR_USD/candles?count=3&granularity=M1")

One call is one HTTP round trip. There are no retries and no timeout beyond
the ``requests`` default: transport failures propagate as the ``requests``
exception that caused them, and bodies carrying OANDA's ``errorMessage``
marker raise :class:`~oanda_client.core.exceptions.OandaAPIError`.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import requests

from oanda_client.core.exceptions import OandaAPIError

PRACTICE_HOST = "https://api-fxpractice.oanda.com/v3"
LIVE_HOST = "https://api-fxtrade.oanda.com/v3"

DEFAULT_USER_AGENT = "oanda-client-python/0.1.0"
CONTENT_TYPE = "application/json"

# Substring OANDA puts in every error body.
API_ERROR_MARKER = "errorMessage"

logger = logging.getLogger(__name__)


def check_api_error(body: str, route: str, status_code: Optional[int] = None) -> None:
    """Raise :class:`OandaAPIError` when *body* contains the API error marker."""
    if API_ERROR_MARKER in body:
        raise OandaAPIError(route, body, status_code)


class OandaConnection:
    """
    Holds the host, account and auth headers shared by every call.

    Nothing on the connection is modified after ``__init__``.

    Parameters
    ----------
    account_id : str
        v20 account identifier, substituted into ``/accounts/...`` paths.
    token : str
        Personal access token, sent as ``Authorization: Bearer <token>``.
    live : bool
        Use the live trading host instead of the practice host.
    host : str, optional
        Override the base URL (useful for testing).
    user_agent : str
        Value of the ``User-Agent`` header.
    strict_decoding : bool
        Raise ``DecodeError`` on undecodable response bodies instead of
        logging and returning an empty record.
    session : requests.Session, optional
        Session to issue requests through; one is built when omitted.
    """

    def __init__(
        self,
        account_id: str,
        token: str,
        live: bool = False,
        *,
        host: Optional[str] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        strict_decoding: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.account_id = account_id
        self.host = host or (LIVE_HOST if live else PRACTICE_HOST)
        self.strict_decoding = strict_decoding
        self._headers = {
            "User-Agent": user_agent,
            "Authorization": "Bearer " + token,
            "Content-Type": CONTENT_TYPE,
        }
        self._session = session or self._build_session()

    @property
    def headers(self) -> dict:
        return dict(self._headers)

    def create_url(self, endpoint: str) -> str:
        return self.host + endpoint

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def request(self, endpoint: str) -> str:
        """GET *endpoint* and return the raw response body."""
        return self._make_request("GET", endpoint)

    def update(self, endpoint: str, body: Union[str, bytes]) -> str:
        """PUT the JSON *body* to *endpoint* and return the raw response body."""
        return self._make_request("PUT", endpoint, body)

    def _make_request(self, method: str, endpoint: str, body: Union[str, bytes, None] = None) -> str:
        logger.debug(f"{method} {endpoint}")
        response = self._session.request(
            method,
            self.create_url(endpoint),
            data=body,
            headers=self._headers,
        )
        text = response.text
        try:
            check_api_error(text, endpoint, response.status_code)
        except OandaAPIError:
            logger.warning(f"OANDA API error on {method} {endpoint} (status={response.status_code})")
            raise
        return text

    @staticmethod
    def _build_session() -> requests.Session:
        session = requests.Session()
        adapter = requests.adapters.HTTPAdapter(pool_connections=4, pool_maxsize=8)
        session.mount("https://", adapter)
        return session
