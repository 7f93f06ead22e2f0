from typing import Optional


class OsuError(Exception):
    """Base class for everything the client raises."""


class BuildingClient(OsuError):
    def __init__(self, cause: Exception):
        super().__init__("error while building the http client")
        self.cause = cause


class RequestError(OsuError):
    def __init__(self, cause: Exception):
        super().__init__(f"error while requesting data: {cause}")
        self.cause = cause


class ChunkingResponse(OsuError):
    def __init__(self, cause: Exception):
        super().__init__("failed to chunk the response")
        self.cause = cause


class ServiceUnavailable(OsuError):
    def __init__(self, body: Optional[str] = None):
        super().__init__(
            "api may be temporarily unavailable (received 503): "
            f"{body if body is not None else 'error while parsing body'}"
        )
        self.body = body


class ResponseError(OsuError):
    def __init__(self, status: int, body: str, error):
        super().__init__(f"response error, status {status}: {error}")
        self.status = status
        self.body = body
        self.error = error


class ParsingError(OsuError):
    def __init__(self, body: str, cause: Exception):
        super().__init__(f"could not deserialize response: {body}")
        self.body = body
        self.cause = cause


class InvalidMultiplayerMatch(OsuError):
    def __init__(self, body: Optional[str] = None):
        super().__init__(
            "either the specified multiplayer match id was invalid "
            "or the match was private"
        )
        self.body = body


class ModParsingError(OsuError, ValueError):
    def __init__(self, value: str | int):
        if isinstance(value, int):
            message = f"can not parse u32 `{value}` into GameMods"
        else:
            message = f"error while parsing string `{value}` into GameMods"
        super().__init__(message)
        self.value = value


class EnumParsingError(OsuError, ValueError):
    def __init__(self, enum_name: str, value):
        super().__init__(f"could not parse `{value}` into {enum_name}")
        self.enum_name = enum_name
        self.value = value


class GradeParsingError(EnumParsingError):
    def __init__(self, value):
        super().__init__("Grade", value)


class ApprovalStatusParsingError(EnumParsingError):
    def __init__(self, value):
        super().__init__("ApprovalStatus", value)
