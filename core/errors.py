"""Validation errors raised by the metrics engine.

All of these are caller-correctable input problems. They subclass ValueError
so generic callers can still catch them as bad values.
"""


class MetricsError(ValueError):
    """Base class for every metrics validation failure."""

    field = None

    # Short message that the UI can show as-is.
    user_message = "Please check the values you entered."


class InvalidInputError(MetricsError):
    """Non-positive height/weight/age, unknown unit, or a negative BMI."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field

    @property
    def user_message(self) -> str:
        if self.field:
            return f"Enter a valid {self.field.replace('_', ' ')}."
        return "Please check the values you entered."


class UnsupportedSexError(MetricsError):
    """BMR requested for a sex outside {male, female}."""

    field = "sex"
    user_message = "Select male or female to estimate your BMR."

    def __init__(self, value):
        super().__init__(f"BMR formula has no branch for sex={value!r}")
        self.value = value
