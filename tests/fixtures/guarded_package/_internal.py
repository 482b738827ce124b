"""Private module; skipped when walking the package."""


class InternalHelper:
    def __init__(self, payload: str) -> None:
        self.payload = payload
