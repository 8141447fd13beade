class GraphQLError(Exception):
    """A failed GraphQL round trip: transport error, HTTP error or an `errors` payload.

    `message` is what the pages show to the user, verbatim.
    """

    def __init__(self, message: str, errors: list = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    @classmethod
    def from_payload(cls, errors) -> "GraphQLError":
        if isinstance(errors, list) and errors:
            first = errors[0]
            message = first.get("message") if isinstance(first, dict) else str(first)
            return cls(message or "Unknown GraphQL error", errors)
        if isinstance(errors, dict):
            return cls(errors.get("message") or "Unknown GraphQL error", [errors])
        return cls(str(errors) or "Unknown GraphQL error")
