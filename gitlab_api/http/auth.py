"""Token credentials and how they are delivered to GitLab."""

import enum
from dataclasses import dataclass, field


class TokenType(enum.Enum):
    """Kind of token, with its query parameter and header names."""

    PRIVATE_TOKEN = ("private_token", "PRIVATE-TOKEN")
    ACCESS_TOKEN = ("access_token", "Authorization")
    JOB_TOKEN = ("job_token", "JOB-TOKEN")

    def __init__(self, param_name: str, header_name: str):
        self.param_name = param_name
        self.header_name = header_name

    def header_value(self, token: str) -> str:
        # OAuth2 access tokens travel as bearer tokens
        if self is TokenType.ACCESS_TOKEN:
            return f"Bearer {token}"
        return token


class AuthMethod(enum.Enum):
    HEADER = "header"
    URL_PARAMETER = "url_parameter"


@dataclass(frozen=True)
class Credentials:
    """Immutable token credentials shared by every request of a client."""

    token: str | None = field(default=None, repr=False)
    token_type: TokenType = TokenType.PRIVATE_TOKEN
    auth_method: AuthMethod = AuthMethod.HEADER

    def headers(self) -> dict[str, str]:
        if not self.token or self.auth_method is not AuthMethod.HEADER:
            return {}
        return {self.token_type.header_name: self.token_type.header_value(self.token)}

    def params(self) -> dict[str, str]:
        if not self.token or self.auth_method is not AuthMethod.URL_PARAMETER:
            return {}
        return {self.token_type.param_name: self.token}

    def __repr__(self) -> str:
        masked = "***" if self.token else None
        return f"Credentials(token={masked!r}, token_type={self.token_type.name}, auth_method={self.auth_method.name})"
