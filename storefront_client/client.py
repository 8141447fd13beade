import requests
import json
import threading
import time
import uuid
import websocket

from client_logs.loggers import fetch_logger
from client_logs.middleware import RequestLoggingHook
from storefront_client.errors import GraphQLError

WS_PROTOCOL = "graphql-transport-ws"


class GraphQLClient:
    """One-shot GraphQL queries over HTTP."""

    def __init__(self, base_url: str, timeout: float = 10.0, logger=fetch_logger):
        self.base_url = base_url
        self.timeout = timeout
        self.logger = logger
        self.session = requests.Session()
        self.session.hooks["response"].append(RequestLoggingHook(logger))

    def execute(self, document: str, variables: dict = None) -> dict:
        """POST the document and return the `data` member of the response.

        Raises GraphQLError for transport failures, non-JSON bodies, HTTP
        errors and responses carrying an `errors` list.
        """
        payload = {"query": document, "variables": variables or {}}
        try:
            response = self.session.post(self.base_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise GraphQLError(str(e)) from e

        try:
            body = response.json()
        except ValueError as e:
            raise GraphQLError(f"Invalid response from {self.base_url} (HTTP {response.status_code})") from e

        if isinstance(body, dict) and body.get("errors"):
            raise GraphQLError.from_payload(body["errors"])
        if not response.ok:
            raise GraphQLError(f"HTTP {response.status_code} from {self.base_url}")
        if not isinstance(body, dict):
            raise GraphQLError(f"Unexpected response from {self.base_url}")
        return body.get("data") or {}


class SubscriptionClient:
    """Live GraphQL results over a websocket, one subscription at a time.

    Speaks the `graphql-transport-ws` sub-protocol. The socket runs on a
    background thread, so `on_data` and `on_error` are called from that
    thread.
    """

    def __init__(self, ws_url: str, logger=fetch_logger):
        self.ws_url = ws_url
        self.logger = logger
        self.is_connected = False
        self._ws_app = None
        self._ws_thread = None
        self._subscription_id = None
        self._payload = None
        self._on_data = None
        self._on_error = None

    def subscribe(self, document: str, variables: dict, on_data, on_error=None, timeout: float = 5.0):
        """Open a socket and start streaming results for `document`.

        - `on_data`: callable receiving the `data` dict of every result frame.
        - `on_error` (optional): callable receiving a GraphQLError.
        - `timeout`: seconds to wait for the server to acknowledge the connection.

        Any previous subscription is stopped first.
        """
        self.unsubscribe()
        self._subscription_id = str(uuid.uuid4())
        self._payload = {"query": document, "variables": variables}
        self._on_data = on_data
        self._on_error = on_error

        def _on_open(ws):
            ws.send(json.dumps({"type": "connection_init", "payload": {}}))

        def _on_message(ws, message):
            if ws is not self._ws_app:
                return
            self._handle_message(ws, message)

        def _on_close(ws, close_status_code, close_msg):
            if ws is not self._ws_app:
                return
            self.is_connected = False
            self.logger.info("subscription_closed", code=close_status_code, reason=close_msg)

        def _on_error(ws, error):
            if ws is not self._ws_app:
                return
            self.logger.error("subscription_socket_error", error=str(error))
            self._emit_error(GraphQLError(str(error)))

        self._ws_app = websocket.WebSocketApp(
            self.ws_url,
            subprotocols=[WS_PROTOCOL],
            on_open=_on_open,
            on_message=_on_message,
            on_close=_on_close,
            on_error=_on_error,
        )
        ws_app = self._ws_app

        def _run():
            # run_forever blocks; run in background thread
            try:
                ws_app.run_forever()
            except Exception as e:
                self.logger.error("subscription_run_forever_exited", error=str(e))

        self._ws_thread = threading.Thread(target=_run, daemon=True)
        self._ws_thread.start()

        # wait for the ack or timeout
        start = time.time()
        while not self.is_connected and (time.time() - start) < timeout:
            time.sleep(0.05)

        self.logger.info("subscription_started", id=self._subscription_id, connected=self.is_connected)
        return {'connected': self.is_connected, 'id': self._subscription_id}

    def _handle_message(self, ws, message):
        """Dispatch one protocol frame from the server."""
        try:
            data = json.loads(message)
        except json.JSONDecodeError:
            self.logger.warning("subscription_bad_frame", frame=str(message)[:200])
            return

        msg_type = data.get('type')

        if msg_type == 'connection_ack':
            self.is_connected = True
            ws.send(json.dumps({
                "id": self._subscription_id,
                "type": "subscribe",
                "payload": self._payload,
            }))

        elif msg_type == 'next':
            if data.get('id') != self._subscription_id:
                return
            payload = data.get('payload') or {}
            if payload.get('errors'):
                self._emit_error(GraphQLError.from_payload(payload['errors']))
            elif self._on_data:
                self._on_data(payload.get('data') or {})

        elif msg_type == 'error':
            if data.get('id') != self._subscription_id:
                return
            self._emit_error(GraphQLError.from_payload(data.get('payload')))

        elif msg_type == 'complete':
            self.logger.info("subscription_completed", id=data.get('id'))

        elif msg_type == 'ping':
            ws.send(json.dumps({"type": "pong"}))

    def _emit_error(self, error: GraphQLError):
        if self._on_error:
            self._on_error(error)

    def unsubscribe(self):
        """Stop the current subscription and close its socket."""
        if not self._ws_app:
            return {'error': 'not_subscribed'}
        if self.is_connected and self._subscription_id:
            try:
                self._ws_app.send(json.dumps({"id": self._subscription_id, "type": "complete"}))
            except websocket.WebSocketException as e:
                self.logger.warning("subscription_complete_not_sent", error=str(e))
        self._ws_app.close()
        self._ws_app = None
        self.is_connected = False
        self._on_data = None
        self._on_error = None
        return {'stopped': True}
