"""Construction of secret generation requests."""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

import pydantic

from credkit.errors import MissingNameError, ValidationError
from credkit.models import PARAMETERS_BY_TYPE, GenerateRequest, GenerationParameters, SecretType

logger = logging.getLogger(__name__)


def resolve_secret_type(secret_type: Union[SecretType, str, None]) -> SecretType:
    """Return the secret type to generate, defaulting to a password."""
    if secret_type is None or secret_type == "":
        return SecretType.PASSWORD
    try:
        return SecretType(secret_type)
    except ValueError:
        allowed = ", ".join(t.value for t in SecretType)
        msg = f"Unknown secret type '{secret_type}'. Valid types: {allowed}"
        raise ValidationError(msg) from None


def build_parameters(
    secret_type: SecretType,
    parameters: Union[GenerationParameters, Mapping[str, Any], None],
) -> GenerationParameters:
    """
    Validate a parameter bag against the fields of a secret type.

    Args:
        secret_type: Type whose parameter bag should be used
        parameters: Parameter model or mapping of explicitly set fields

    Returns:
        The parameter model for the type, tracking which fields were set.

    Raises:
        ValidationError: If a field does not belong to the type or has a bad value.
    """
    model = PARAMETERS_BY_TYPE[secret_type]

    if isinstance(parameters, GenerationParameters):
        if isinstance(parameters, model):
            return parameters
        parameters = parameters.model_dump(exclude_unset=True)

    try:
        return model.model_validate(dict(parameters or {}))
    except pydantic.ValidationError as e:
        raise ValidationError(_describe(e, secret_type)) from e


def _describe(error: pydantic.ValidationError, secret_type: SecretType) -> str:
    foreign = [str(err["loc"][0]) for err in error.errors() if err["type"] == "extra_forbidden"]
    if foreign:
        return f"Parameters not supported for type '{secret_type.value}': {', '.join(foreign)}"

    err = error.errors()[0]
    field = ".".join(str(part) for part in err["loc"])
    return f"Invalid value for '{field}': {err['msg']}"


def build_generate_request(
    name: Optional[str],
    secret_type: Union[SecretType, str, None] = None,
    overwrite: bool = True,
    parameters: Union[GenerationParameters, Mapping[str, Any], None] = None,
) -> GenerateRequest:
    """
    Build the request asking the server to generate a secret.

    Args:
        name: Name of the secret to generate
        secret_type: password, ssh, rsa or certificate (default: password)
        overwrite: Replace an existing secret of the same name (default: True)
        parameters: Type-specific generation parameters; only set fields are sent

    Returns:
        An immutable GenerateRequest.

    Raises:
        ValidationError: If the name is empty, the type is unknown or a
            parameter does not fit the type.
    """
    if not name:
        raise MissingNameError
    if not name.strip("/"):
        msg = f"name required: '{name}' does not name a secret"
        raise MissingNameError(msg)

    resolved = resolve_secret_type(secret_type)
    request = GenerateRequest(
        name=name,
        type=resolved,
        overwrite=overwrite,
        parameters=build_parameters(resolved, parameters),
    )
    logger.debug("Built %s generation request for %s", resolved.value, name)
    return request
