"""
Environment Utilities - Token-Lookup und ${VAR}-Expansion.
"""
from __future__ import annotations

import os
import re
from typing import Dict, Mapping, Optional

TOKEN_ENV_VAR = "LINEAR_API_TOKEN"

_TEMPLATE_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def get_api_token(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Liest LINEAR_API_TOKEN aus der Umgebung.

    Returns:
        Den Token oder "" wenn nicht gesetzt
    """
    env = os.environ if environ is None else environ
    return env.get(TOKEN_ENV_VAR, "")


def expand_env_template(value: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Ersetzt ``${NAME}`` durch den Wert aus der Umgebung.

    Nicht gesetzte Variablen werden zu "" expandiert. Text ohne Template
    bleibt unverändert.
    """
    env = os.environ if environ is None else environ
    return _TEMPLATE_PATTERN.sub(lambda match: env.get(match.group(1), ""), value)


def expand_env_mapping(
    values: Mapping[str, str], environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    return {key: expand_env_template(value, environ) for key, value in values.items()}
