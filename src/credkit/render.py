"""Rendering of generated secrets for terminals and scripts."""

import json

from credkit.errors import ResponseShapeError
from credkit.models import (
    CertificateSecret,
    GeneratedSecretBase,
    KeyPairSecret,
    PasswordSecret,
)

LABEL_WIDTH = 15


def render_secret(secret: GeneratedSecretBase, json_mode: bool = False) -> str:
    """
    Render a generated secret.

    Args:
        secret: Secret parsed from the server response
        json_mode: Emit a JSON object instead of the labelled layout

    Returns:
        The text to print, without a trailing newline.
    """
    if json_mode:
        return json.dumps(secret.model_dump(mode="json"), indent=2)
    return "\n".join(_line(label, value) for label, value in _human_fields(secret))


def _human_fields(secret: GeneratedSecretBase) -> list[tuple[str, str]]:
    fields = [("Type", secret.type)]
    if secret.name:
        fields.append(("Name", secret.name))

    if isinstance(secret, PasswordSecret):
        fields.append(("Value", secret.value))
    elif isinstance(secret, KeyPairSecret):
        fields.append(("Public Key", secret.public_key))
        fields.append(("Private Key", secret.private_key))
    elif isinstance(secret, CertificateSecret):
        fields.append(("Ca", secret.ca))
        fields.append(("Certificate", secret.certificate))
        fields.append(("Private Key", secret.private_key))
    else:
        msg = f"Cannot render secret of type {secret.type!r}."
        raise ResponseShapeError(msg)

    fields.append(("Updated", secret.updated_at))
    return fields


def _line(label: str, value: str) -> str:
    return f"{label + ':':<{LABEL_WIDTH}}{value}"
