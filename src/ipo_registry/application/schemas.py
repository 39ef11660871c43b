from pydantic import BaseModel, Field, field_validator

from src.ipo_registry.domain.models import Client

# Indian PAN: five letters, four digits, one letter
_PAN_PATTERN = r"^[A-Z]{5}[0-9]{4}[A-Z]$"


class ClientCreateRequest(BaseModel):
    trading_code: str = Field(..., min_length=1, max_length=32)
    client_name: str = Field(..., min_length=1, max_length=200)
    pan: str = Field(..., pattern=_PAN_PATTERN)
    dp_id: str = Field(..., min_length=1, max_length=32)
    upi_handle: str = Field(..., min_length=3, max_length=100)
    mobile: str | None = None
    email: str | None = None
    group_code: str | None = None
    bank_name: str | None = None
    branch: str | None = None
    asba_account: str | None = None
    broker_code: str | None = None  # administrators only

    @field_validator("upi_handle")
    @classmethod
    def upi_has_handler(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("upi_handle must look like name@handler")
        return v


class ClientUpdateRequest(BaseModel):
    client_name: str | None = Field(None, min_length=1, max_length=200)
    pan: str | None = Field(None, pattern=_PAN_PATTERN)
    dp_id: str | None = Field(None, min_length=1, max_length=32)
    upi_handle: str | None = Field(None, min_length=3, max_length=100)
    mobile: str | None = None
    email: str | None = None
    group_code: str | None = None
    bank_name: str | None = None
    branch: str | None = None
    asba_account: str | None = None


class ClientResponse(BaseModel):
    id: str
    trading_code: str
    client_name: str
    pan: str
    dp_id: str
    upi_handle: str
    broker_code: str
    mobile: str | None = None
    email: str | None = None
    group_code: str | None = None
    bank_name: str | None = None
    branch: str | None = None
    asba_account: str | None = None

    @classmethod
    def from_domain(cls, client: Client) -> "ClientResponse":
        return cls(
            id=client.id,
            trading_code=client.trading_code,
            client_name=client.client_name,
            pan=client.pan,
            dp_id=client.dp_id,
            upi_handle=client.upi_handle,
            broker_code=client.broker_code,
            mobile=client.mobile,
            email=client.email,
            group_code=client.group_code,
            bank_name=client.bank_name,
            branch=client.branch,
            asba_account=client.asba_account,
        )
