from typing import Any, Dict, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import InvalidInputError

PROVIDER_ALIASES = {
    "auto": "auto",
    "google": "google",
    "ors": "openrouteservice",
    "openrouteservice": "openrouteservice",
    "osrm": "osrm",
    "haversine": "haversine",
}

Profile = Literal["driving", "walking", "cycling"]


class RoutingOptions(BaseModel):
    """
    Per-call configuration. Credentials are read-only and never cached.
    Accepts snake_case names or the camelCase keys used by JS callers
    (googleApiKey, openRouteServiceApiKey, ...).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    provider: str = "auto"
    profile: Profile = "driving"
    roundtrip: bool = False
    google_api_key: Optional[str] = Field(default=None, alias="googleApiKey")
    openrouteservice_api_key: Optional[str] = Field(
        default=None, alias="openRouteServiceApiKey"
    )
    osrm_base_url: Optional[str] = Field(default=None, alias="osrmBaseUrl")
    timeout_s: Optional[float] = Field(default=None, gt=0, alias="timeoutS")

    @field_validator("provider", mode="before")
    @classmethod
    def _canonical_provider(cls, v: Any) -> str:
        key = str(v or "auto").lower().strip()
        if key not in PROVIDER_ALIASES:
            raise ValueError(
                f"unknown provider {v!r}; expected one of {sorted(PROVIDER_ALIASES)}"
            )
        return PROVIDER_ALIASES[key]

    @field_validator("profile", mode="before")
    @classmethod
    def _lower_profile(cls, v: Any) -> Any:
        return str(v).lower().strip() if v is not None else "driving"


def coerce_options(
    options: Union[RoutingOptions, Dict[str, Any], None] = None,
) -> RoutingOptions:
    if options is None:
        return RoutingOptions()
    if isinstance(options, RoutingOptions):
        return options
    try:
        return RoutingOptions.model_validate(dict(options))
    except (TypeError, ValueError, ValidationError) as e:
        raise InvalidInputError(f"invalid routing options: {e}") from e
