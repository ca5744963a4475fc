"""Generate command for creating secrets on the server."""

import sys
from typing import Any, Optional

import click

from credkit.client import CredkitClient
from credkit.config import load_config
from credkit.errors import CredkitError, MissingNameError, ValidationError
from credkit.models import KEY_LENGTHS
from credkit.render import render_secret
from credkit.request import build_generate_request

MISSING_NAME_FLAG = "the required flag `-n, --name' was not specified"


def collect_parameters(**options: Any) -> dict[str, Any]:
    """
    Keep only the options the user actually passed.

    Unpassed flags arrive from click as False, unpassed values as None and
    unpassed repeatable options as an empty tuple; none of them are sent.
    """
    parameters: dict[str, Any] = {}
    for key, value in options.items():
        if value is None or value is False or value == ():
            continue
        parameters[key] = list(value) if isinstance(value, tuple) else value
    return parameters


def check_key_length(key_length: Optional[int]) -> None:
    if key_length is not None and key_length not in KEY_LENGTHS:
        allowed = ", ".join(str(k) for k in KEY_LENGTHS)
        msg = f"Invalid key length {key_length}. Valid lengths: {allowed}"
        raise ValidationError(msg)


@click.command()
@click.option("--name", "-n", help="Name of the secret to generate (required)")
@click.option("--type", "-t", "secret_type", help="Type of secret: password, ssh, rsa, certificate (default: password)")
@click.option("--no-overwrite", "-O", is_flag=True, help="Do not replace a secret that already exists")
@click.option("--length", "-l", type=int, help="[Password] Length of the generated value")
@click.option("--exclude-special", "-S", is_flag=True, help="[Password] Exclude special characters")
@click.option("--exclude-number", "-N", is_flag=True, help="[Password] Exclude numbers")
@click.option("--exclude-upper", "-U", is_flag=True, help="[Password] Exclude upper case letters")
@click.option("--exclude-lower", "-L", is_flag=True, help="[Password] Exclude lower case letters")
@click.option("--only-hex", "-H", is_flag=True, help="[Password] Use only hexadecimal characters")
@click.option("--common-name", "-c", help="[Certificate] Common name")
@click.option("--organization", "-o", help="[Certificate] Organization")
@click.option("--organization-unit", "-u", help="[Certificate] Organization unit")
@click.option("--locality", "-i", help="[Certificate] Locality/city")
@click.option("--state", "-s", help="[Certificate] State/province")
@click.option("--country", "-y", help="[Certificate] Country")
@click.option(
    "--alternative-name",
    "-a",
    "alternative_names",
    multiple=True,
    help="[Certificate] Alternative name; repeat for several",
)
@click.option("--key-length", "-k", type=int, help="[Certificate, SSH, RSA] Bit length of the key: 2048, 3072 or 4096")
@click.option("--duration", "-d", type=int, help="[Certificate] Valid duration in days")
@click.option("--ssh-comment", "-m", help="[SSH] Comment appended to the public key")
@click.option("--ca", help="[Certificate] Name of the CA secret used to sign the certificate")
@click.option("--output-json", is_flag=True, help="Print the generated secret as JSON")
@click.pass_context
def generate(
    ctx: click.Context,
    name: Optional[str],
    secret_type: Optional[str],
    no_overwrite: bool,
    output_json: bool,
    **options: Any,
):
    """Generate a secret on the server and print it."""
    try:
        if name is None:
            raise MissingNameError(MISSING_NAME_FLAG)
        check_key_length(options.get("key_length"))

        request = build_generate_request(
            name,
            secret_type=secret_type,
            overwrite=not no_overwrite,
            parameters=collect_parameters(**options),
        )

        obj = ctx.ensure_object(dict)
        config = load_config(obj.get("config_file"))
        with CredkitClient.from_config(config, transport=obj.get("transport")) as client:
            secret = client.generate(request)

        click.echo(render_secret(secret, json_mode=output_json))
    except CredkitError as e:
        click.echo(str(e), err=True)
        sys.exit(e.exit_code)
