"""
Named parameter bundles for quick scenario selection.

Presets are plain configuration records consumed by the CLI and the web
app. They are not part of the pricing contract.
"""

from dataclasses import dataclass

from options_analytics.utils.exceptions import ValidationError
from options_analytics.utils.types import PricingParams


@dataclass(frozen=True)
class Preset:
    """A named set of {S, K, T, r, sigma}."""
    id: str
    name: str
    S: float
    K: float
    T: float
    r: float
    sigma: float

    def params(self) -> PricingParams:
        return PricingParams(S=self.S, K=self.K, T=self.T, r=self.r, sigma=self.sigma)


PRESETS: tuple[Preset, ...] = (
    Preset("aapl", "AAPL-like (Tech Blue-chip)", S=175, K=180, T=0.25, r=0.053, sigma=0.28),
    Preset("meme", "Meme Stock (High Vol)", S=20, K=25, T=0.08, r=0.053, sigma=0.95),
    Preset("atm-expiry", "Near Expiry ATM", S=100, K=100, T=0.014, r=0.053, sigma=0.20),
    Preset("leap", "LEAPS Deep ITM", S=150, K=100, T=2.0, r=0.053, sigma=0.22),
    Preset("otm-put", "Far OTM Protective Put", S=100, K=75, T=0.5, r=0.053, sigma=0.22),
    Preset("vix-spike", "VIX Spike (Crash Mode)", S=100, K=100, T=0.1, r=0.053, sigma=1.20),
)

DEFAULT_PARAMS = PricingParams(S=100.0, K=100.0, T=0.5, r=0.05, sigma=0.20)


def get_preset(preset_id: str) -> Preset:
    """
    Look up a preset by id.

    Raises:
        ValidationError: If no preset has that id
    """
    for preset in PRESETS:
        if preset.id == preset_id:
            return preset
    known = ", ".join(p.id for p in PRESETS)
    raise ValidationError(f"Unknown preset '{preset_id}'. Known presets: {known}")
