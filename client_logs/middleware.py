import uuid

class RequestLoggingHook:
    """`requests` response hook that logs every GraphQL round trip.

    Installed on a session with ``session.hooks["response"].append(hook)``.
    """

    def __init__(self, logger):
        self.logger = logger

    def __call__(self, response, *args, **kwargs):
        req_id = str(uuid.uuid4())[:8]
        request = response.request
        duration = response.elapsed.total_seconds() if response.elapsed is not None else 0.0

        self.logger.info("request_completed",
            req_id=req_id,
            method=request.method if request is not None else None,
            url=response.url,
            status=response.status_code,
            duration_ms=round(duration * 1000, 2),
            content_type=response.headers.get("content-type"),
        )
        return response
