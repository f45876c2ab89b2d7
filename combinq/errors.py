class NotReversibleError(TypeError):
    """raised by rev() when an adaptor has no well-defined back end"""
    pass


class CaptureLimitExceeded(ValueError):
    """raised when a materializing capture drains more elements than allowed"""

    def __init__(self, limit: int):
        super().__init__(f"source produced more than {limit} elements during capture")
        self.limit = limit
