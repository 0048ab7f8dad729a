from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests


@dataclass
class ApiConfig:
    base_url: str
    token: str = ""
    timeout_seconds: int = 30


class ApiConnection:
    """Singleton-like HTTP session factory for the REST backend.

    Note: One ``requests.Session`` is shared by the process so keep-alive
    connections are reused across page renders.
    """

    _instance: Optional["ApiConnection"] = None

    def __init__(self, config: ApiConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @classmethod
    def get_instance(cls, config: ApiConfig) -> "ApiConnection":
        if cls._instance is None:
            cls._instance = ApiConnection(config)
        return cls._instance

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def timeout(self) -> int:
        return int(self._config.timeout_seconds)

    def build_url(self, path: str) -> str:
        path = str(path or "")
        if not path.startswith("/"):
            path = "/" + path
        return f"{self._config.base_url.rstrip('/')}{path}"

    def auth_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers
