"""Typed models for generation requests and generated secrets."""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union
from urllib.parse import quote

import pydantic
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from credkit.errors import ResponseShapeError

KEY_LENGTHS = (2048, 3072, 4096)


class SecretType(str, Enum):
    PASSWORD = "password"
    SSH = "ssh"
    RSA = "rsa"
    CERTIFICATE = "certificate"


class GenerationParameters(BaseModel):
    """
    Base class for the per-type parameter bags.

    Only fields the caller explicitly set are serialized, so the server
    applies its own defaults to everything else. An explicit ``False`` is
    sent; an unset flag is not.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PasswordParameters(GenerationParameters):
    length: Optional[int] = None
    exclude_upper: Optional[bool] = None
    exclude_lower: Optional[bool] = None
    exclude_number: Optional[bool] = None
    exclude_special: Optional[bool] = None
    only_hex: Optional[bool] = None


class RsaParameters(GenerationParameters):
    key_length: Optional[int] = None


class SshParameters(GenerationParameters):
    key_length: Optional[int] = None
    ssh_comment: Optional[str] = None


class CertificateParameters(GenerationParameters):
    common_name: Optional[str] = None
    organization: Optional[str] = None
    organization_unit: Optional[str] = None
    locality: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    # Order and duplicates are kept as given
    alternative_names: Optional[list[str]] = None
    key_length: Optional[int] = None
    duration: Optional[int] = None
    ca: Optional[str] = None


PARAMETERS_BY_TYPE: dict[SecretType, type[GenerationParameters]] = {
    SecretType.PASSWORD: PasswordParameters,
    SecretType.SSH: SshParameters,
    SecretType.RSA: RsaParameters,
    SecretType.CERTIFICATE: CertificateParameters,
}


class GenerateRequest(BaseModel):
    """Body of ``POST /api/v1/data/{name}``."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: SecretType
    overwrite: bool = True
    parameters: Optional[GenerationParameters] = None

    @property
    def path(self) -> str:
        return "/api/v1/data/" + quote(self.name.lstrip("/"), safe="/")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "overwrite": self.overwrite,
        }
        parameters = self.parameters.to_payload() if self.parameters is not None else {}
        if parameters:
            payload["parameters"] = parameters
        return payload


class GeneratedSecretBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str
    # Shown to humans, never part of the JSON rendering
    name: Optional[str] = Field(default=None, exclude=True)
    updated_at: str


class PasswordSecret(GeneratedSecretBase):
    type: Literal["password"]
    value: str


class KeyPairSecret(GeneratedSecretBase):
    public_key: str
    private_key: str


class SshSecret(KeyPairSecret):
    type: Literal["ssh"]


class RsaSecret(KeyPairSecret):
    type: Literal["rsa"]


class CertificateSecret(GeneratedSecretBase):
    type: Literal["certificate"]
    ca: str
    certificate: str
    private_key: str


GeneratedSecret = Annotated[
    Union[PasswordSecret, SshSecret, RsaSecret, CertificateSecret],
    Field(discriminator="type"),
]

_secret_adapter = TypeAdapter(GeneratedSecret)


def parse_secret(payload: Any) -> GeneratedSecretBase:
    """
    Build the typed secret described by a decoded success response.

    Args:
        payload: Decoded JSON body of a 2xx response

    Returns:
        One of PasswordSecret, SshSecret, RsaSecret or CertificateSecret.

    Raises:
        ResponseShapeError: If the body does not match any known secret type.
    """
    if not isinstance(payload, dict):
        msg = "The server response is not a JSON object."
        raise ResponseShapeError(msg)

    secret_type = payload.get("type")
    if not isinstance(secret_type, str) or secret_type not in {t.value for t in SecretType}:
        msg = f"The server returned an unsupported secret type: {secret_type!r}."
        raise ResponseShapeError(msg)

    try:
        return _secret_adapter.validate_python(payload)
    except pydantic.ValidationError as e:
        missing = ", ".join(str(err["loc"][-1]) for err in e.errors())
        msg = f"The server returned a malformed {secret_type} secret (check: {missing})."
        raise ResponseShapeError(msg) from e
