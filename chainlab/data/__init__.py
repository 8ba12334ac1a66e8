"""
Static fixture tables for the diagrams

- types: 레코드 dataclass
- fixtures: YAML 로더
"""

from .types import Step, StepValue, BridgeHack, PriceFeed, ILReference, EcdsaDisplayValues
from .fixtures import (
    load_fixture,
    bridge_hacks,
    price_feeds,
    il_reference,
    ecdsa_display_values,
    fixture_steps,
)
