"""Encoder configuration."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from mozlog_json.core.kv import KVList

GCP_ENV_VAR = "MOZLOG_GCP"


def gcp_from_env(environ: Mapping[str, str] | None = None) -> bool:
    """Read the GCP toggle from the environment.

    Only the exact string ``"true"`` enables GCP mode. Any other value,
    including an unset variable, keeps the MozLog defaults.
    """
    if environ is None:
        environ = os.environ
    return environ.get(GCP_ENV_VAR, "false") == "true"


@dataclass(frozen=True)
class EncoderConfig:
    """Immutable settings of a built encoder.

    Attributes:
        newlines: Write a newline after every record.
        pretty: Pretty-print the JSON output.
        gcp: Use the Google Cloud severity scale and key.
        nested_values: Write Nested values as JSON trees instead of strings.
        values: Static attribute sources written into every envelope, in order.
    """

    newlines: bool = True
    pretty: bool = False
    gcp: bool = False
    nested_values: bool = False
    values: tuple[KVList, ...] = ()
