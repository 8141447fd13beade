"""Data sources: the (data, loading, error) triple behind every page.

`StaticSource` runs a one-shot query each time it is asked; `LiveSource`
keeps a subscription open and hands back whatever the server pushed last.
Pages treat both the same way.
"""
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable
import json
import threading

from client_logs.loggers import fetch_logger
from storefront_client.errors import GraphQLError


@dataclass(frozen=True)
class FetchResult:
    data: Any = None
    loading: bool = False
    error: Optional[GraphQLError] = None


def _select(data: Optional[dict], root_field: Optional[str]):
    if root_field is None or data is None:
        return data
    return data.get(root_field)


@runtime_checkable
class DataSource(Protocol):
    def execute(self, document: str, variables: dict) -> FetchResult:
        ...


class StaticSource:
    """One request per call; the result never changes after it is returned."""

    def __init__(self, client, root_field: Optional[str] = None, logger=fetch_logger):
        self.client = client
        self.root_field = root_field
        self.logger = logger

    def execute(self, document: str, variables: dict) -> FetchResult:
        try:
            data = self.client.execute(document, variables)
        except GraphQLError as e:
            self.logger.error("query_failed", root_field=self.root_field, error=e.message)
            return FetchResult(error=e)
        return FetchResult(data=_select(data, self.root_field))


class LiveSource:
    """Subscription-backed source.

    The first call for a given (document, variables) pair starts the
    subscription and reports `loading`; later calls return the latest
    frame. Changing the variables restarts the subscription.
    """

    def __init__(self, subscriptions, root_field: Optional[str] = None,
                 connect_timeout: float = 5.0, logger=fetch_logger):
        self.subscriptions = subscriptions
        self.root_field = root_field
        self.connect_timeout = connect_timeout
        self.logger = logger
        self._lock = threading.Lock()
        self._key = None
        self._result = FetchResult(loading=True)
        self.updates = 0

    def execute(self, document: str, variables: dict) -> FetchResult:
        key = (document, json.dumps(variables, sort_keys=True, default=str))
        with self._lock:
            if key == self._key:
                return self._result
            self._key = key
            self._result = FetchResult(loading=True)
            self.updates = 0

        def _on_data(data):
            self._publish(key, FetchResult(data=_select(data, self.root_field)))

        def _on_error(error):
            self.logger.error("subscription_failed", root_field=self.root_field, error=error.message)
            self._publish(key, FetchResult(error=error))

        response = self.subscriptions.subscribe(
            document, variables, on_data=_on_data, on_error=_on_error, timeout=self.connect_timeout
        )
        if not response.get('connected'):
            self.logger.warning("subscription_not_acknowledged", root_field=self.root_field)
        return self.snapshot()

    def _publish(self, key, result: FetchResult):
        with self._lock:
            # frames for a superseded subscription are dropped
            if key != self._key:
                return
            self._result = result
            self.updates += 1

    def snapshot(self) -> FetchResult:
        with self._lock:
            return self._result

    def close(self):
        with self._lock:
            self._key = None
            self._result = FetchResult(loading=True)
        self.subscriptions.unsubscribe()
