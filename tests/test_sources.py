"""Tests for the static and live data sources."""
from unittest.mock import MagicMock

from storefront_client.errors import GraphQLError
from storefront_client.sources import DataSource, FetchResult, LiveSource, StaticSource


class FakeSubscriptions:
    """Records subscribe calls and lets the test push frames."""

    def __init__(self, connected=True):
        self.connected = connected
        self.calls = []
        self.unsubscribed = 0

    def subscribe(self, document, variables, on_data, on_error=None, timeout=5.0):
        self.calls.append({"document": document, "variables": variables,
                           "on_data": on_data, "on_error": on_error})
        return {"connected": self.connected}

    def unsubscribe(self):
        self.unsubscribed += 1

    def push(self, data, call=-1):
        self.calls[call]["on_data"](data)

    def fail(self, error, call=-1):
        self.calls[call]["on_error"](error)


def test_both_sources_are_data_sources():
    assert isinstance(StaticSource(MagicMock()), DataSource)
    assert isinstance(LiveSource(FakeSubscriptions()), DataSource)


def test_static_source_returns_data():
    client = MagicMock()
    client.execute.return_value = {"card_details_aggregate": {"aggregate": {"count": 3}}}
    source = StaticSource(client, root_field="card_details_aggregate", logger=MagicMock())
    result = source.execute("query", {"where": {}})
    assert result == FetchResult(data={"aggregate": {"count": 3}}, loading=False, error=None)
    client.execute.assert_called_once_with("query", {"where": {}})


def test_static_source_returns_error():
    client = MagicMock()
    error = GraphQLError("boom")
    client.execute.side_effect = error
    logger = MagicMock()
    result = StaticSource(client, logger=logger).execute("query", {})
    assert result.error is error
    assert result.data is None
    logger.error.assert_called_once()


def test_live_source_loading_until_first_frame():
    subs = FakeSubscriptions()
    source = LiveSource(subs, root_field="card_details", logger=MagicMock())
    first = source.execute("subscription", {"limit": 10})
    assert first.loading is True
    assert first.data is None

    subs.push({"card_details": [{"id": "a"}]})
    result = source.execute("subscription", {"limit": 10})
    assert result == FetchResult(data=[{"id": "a"}])
    assert len(subs.calls) == 1


def test_live_source_updates_more_than_once():
    subs = FakeSubscriptions()
    source = LiveSource(subs, root_field="card_details", logger=MagicMock())
    source.execute("subscription", {"limit": 10})
    subs.push({"card_details": [{"id": "a"}]})
    subs.push({"card_details": [{"id": "a"}, {"id": "b"}]})
    assert source.snapshot().data == [{"id": "a"}, {"id": "b"}]
    assert source.updates == 2


def test_live_source_restarts_on_new_variables():
    subs = FakeSubscriptions()
    source = LiveSource(subs, root_field="card_details", logger=MagicMock())
    source.execute("subscription", {"offset": 0})
    subs.push({"card_details": [{"id": "page1"}]})

    assert source.execute("subscription", {"offset": 48}).loading is True
    assert len(subs.calls) == 2

    # late frame from the first subscription is dropped
    subs.push({"card_details": [{"id": "stale"}]}, call=0)
    assert source.snapshot().loading is True

    subs.push({"card_details": [{"id": "page2"}]})
    assert source.snapshot().data == [{"id": "page2"}]


def test_live_source_reports_errors():
    subs = FakeSubscriptions()
    logger = MagicMock()
    source = LiveSource(subs, logger=logger)
    source.execute("subscription", {})
    subs.fail(GraphQLError("permission denied"))
    result = source.snapshot()
    assert result.error.message == "permission denied"
    assert result.loading is False
    logger.error.assert_called_once()


def test_live_source_warns_when_not_acknowledged():
    logger = MagicMock()
    LiveSource(FakeSubscriptions(connected=False), logger=logger).execute("subscription", {})
    logger.warning.assert_called_once()


def test_live_source_close():
    subs = FakeSubscriptions()
    source = LiveSource(subs, logger=MagicMock())
    source.execute("subscription", {})
    source.close()
    assert subs.unsubscribed == 1
    # next execute subscribes again
    source.execute("subscription", {})
    assert len(subs.calls) == 2
