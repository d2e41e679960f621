"""Failure taxonomy carried inside Result values."""


class WeatherError(Exception):
    """Base class for every failure the repository can report."""


class UnknownWeatherCode(WeatherError):
    def __init__(self, code: int):
        super().__init__(f"Unknown weatherCode {code}")
        self.code = code


class MappingFailure(WeatherError):
    """A well-formed payload carried a weather code outside the static table."""

    def __init__(self, cause: UnknownWeatherCode):
        super().__init__(f"Could not map remote payload: {cause}")
        self.cause = cause
        self.__cause__ = cause


class RemoteFetchFailure(WeatherError):
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause
