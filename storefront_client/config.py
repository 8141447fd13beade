from pydantic import BaseModel, Field
from typing import Optional
import os

DEFAULT_GRAPHQL_URL = "http://localhost:8080/v1/graphql"


def to_ws_url(http_url: str) -> str:
    if http_url.startswith('https://'):
        return 'wss://' + http_url[len('https://'):]
    if http_url.startswith('http://'):
        return 'ws://' + http_url[len('http://'):]
    return http_url


class ClientConfig(BaseModel):
    graphql_url: str = DEFAULT_GRAPHQL_URL
    graphql_ws_url: Optional[str] = None
    game: str = "LOTR"
    page_size: int = Field(48, ge=1)
    request_timeout: float = 10.0
    connect_timeout: float = 5.0

    @property
    def ws_url(self) -> str:
        return self.graphql_ws_url or to_ws_url(self.graphql_url)

    @classmethod
    def from_env(cls, environ=None) -> "ClientConfig":
        """Read STOREFRONT_* variables; unset ones keep their defaults."""
        environ = os.environ if environ is None else environ
        names = {
            "graphql_url": "STOREFRONT_GRAPHQL_URL",
            "graphql_ws_url": "STOREFRONT_GRAPHQL_WS_URL",
            "game": "STOREFRONT_GAME",
            "page_size": "STOREFRONT_PAGE_SIZE",
            "request_timeout": "STOREFRONT_REQUEST_TIMEOUT",
            "connect_timeout": "STOREFRONT_CONNECT_TIMEOUT",
        }
        values = {field: environ[var] for field, var in names.items() if environ.get(var)}
        return cls(**values)
