"""Request and error-response payloads exchanged with the Share service.

Field aliases are the service's camelCase (requests) and PascalCase (error
responses) wire names and must not change.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# The readings call always asks for the single newest value of the last ten minutes
LATEST_READINGS_MINUTES = 10
LATEST_READINGS_MAX_COUNT = 1


class SharePayload(BaseModel):
    """Base for outgoing request bodies."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")


class AccountIdLookup(SharePayload):
    account_name: str = Field(..., alias="accountName")
    password: str = Field(..., alias="password")
    application_id: str = Field(..., alias="applicationId")


class SessionIdLookup(SharePayload):
    account_id: str = Field(..., alias="accountId")
    password: str = Field(..., alias="password")
    application_id: str = Field(..., alias="applicationId")


class LatestReadingsRequest(SharePayload):
    session_id: str = Field(..., alias="sessionId")
    minutes: int = Field(LATEST_READINGS_MINUTES, alias="minutes")
    max_count: int = Field(LATEST_READINGS_MAX_COUNT, alias="maxCount")


class ErrorResponse(BaseModel):
    """Body the service sends with a non-2xx status."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    code: Optional[str] = Field(None, alias="Code")
    message: Optional[str] = Field(None, alias="Message")
