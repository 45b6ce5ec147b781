from __future__ import annotations

import os
from enum import StrEnum
from typing import Final

from dotenv import load_dotenv

from tool_bridge.errors import UnsupportedProviderFamilyError

load_dotenv()

class ProviderFamily(StrEnum):
    CONVERSE_STREAM = "converse_stream"
    INVOKE_STREAM = "invoke_stream"

FAMILY_ENV_VAR: Final[str] = "TOOL_BRIDGE_PROVIDER_FAMILY"

# Model id fragments that are served through the Converse grammar
_CONVERSE_MARKERS: Final[tuple[str, ...]] = (
    "claude-3-7",
    "claude-sonnet-4",
    "claude-opus-4",
    "claude-haiku-4",
)
_CONVERSE_VENDOR_PREFIXES: Final[tuple[str, ...]] = ("amazon.", "meta.", "mistral.", "cohere.")
_REGION_PREFIXES: Final[frozenset[str]] = frozenset({"us", "eu", "apac", "global"})


def coerce_family(family: ProviderFamily | str) -> ProviderFamily:
    """Return *family* as a ProviderFamily or raise UnsupportedProviderFamilyError."""
    try:
        return ProviderFamily(family)
    except ValueError:
        raise UnsupportedProviderFamilyError(family) from None


def default_family() -> ProviderFamily:
    """Return the family configured in the environment, Converse if unset."""
    value = os.environ.get(FAMILY_ENV_VAR, "").strip()
    if not value:
        return ProviderFamily.CONVERSE_STREAM
    return coerce_family(value.lower())


def family_for_model(model_id: str) -> ProviderFamily:
    """Pick the streaming grammar a model deployment speaks."""
    bare = model_id.lower().split(":", 1)[0]
    if any(marker in bare for marker in _CONVERSE_MARKERS):
        return ProviderFamily.CONVERSE_STREAM
    # Cross-region inference profiles look like "us.anthropic.claude-..."
    region, _, rest = bare.partition(".")
    vendor = rest if region in _REGION_PREFIXES else bare
    if vendor.startswith(_CONVERSE_VENDOR_PREFIXES):
        return ProviderFamily.CONVERSE_STREAM
    if "anthropic.claude" in bare or bare.startswith("claude"):
        return ProviderFamily.INVOKE_STREAM
    return default_family()

__all__ = [
    "ProviderFamily",
    "FAMILY_ENV_VAR",
    "coerce_family",
    "default_family",
    "family_for_model",
]
