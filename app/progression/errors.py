class ProgressionError(Exception):
    """Base class for errors raised by the progression engine."""


class NotFound(ProgressionError):
    pass


class SessionNotFound(NotFound):
    def __init__(self, session_id: int) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class SuggestionNotFound(NotFound):
    def __init__(self, suggestion_id: int) -> None:
        super().__init__(f"Suggestion {suggestion_id} not found")
        self.suggestion_id = suggestion_id


class SuggestionAlreadyResponded(ProgressionError):
    def __init__(self, suggestion_id: int, status: str) -> None:
        super().__init__(f"Suggestion {suggestion_id} already {status}")
        self.suggestion_id = suggestion_id
        self.status = status


class SessionStateError(ProgressionError):
    def __init__(self, session_id: int, status: str) -> None:
        super().__init__(f"Session {session_id} is {status}")
        self.session_id = session_id
        self.status = status
