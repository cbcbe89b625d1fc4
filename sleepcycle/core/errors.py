# sleepcycle/core/errors.py


class SleepEngineError(ValueError):
    """Base class for input validation failures raised by the engine"""


class InvalidTimeFormat(SleepEngineError):
    """Raised when a time string is not a valid 24-hour HH:MM value"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid time '{value}'. Use HH:MM in 24-hour format (00:00-23:59)")


class UnknownAgeProfile(SleepEngineError):
    """Raised when an age profile id is not in the catalog"""

    def __init__(self, profile_id, known=None):
        self.profile_id = profile_id
        message = f"Unknown age profile '{profile_id}'"
        if known:
            message += f". Must be one of: {', '.join(known)}"
        super().__init__(message)


class InvalidDuration(SleepEngineError):
    """Raised when a nap duration is not a positive number of minutes"""

    def __init__(self, duration):
        self.duration = duration
        super().__init__(f"Duration must be a positive number of minutes, got {duration}")
