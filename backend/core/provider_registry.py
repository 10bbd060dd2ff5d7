# core/provider_registry.py
from __future__ import annotations
from typing import Callable, Dict, List, Optional

from adapters.online.google_adapter import GoogleAdapter
from adapters.online.openrouteservice_adapter import ORSAdapter
from adapters.online.osrm_adapter import OSRMAdapter
from core.interfaces import RoutingProvider
from models.options import RoutingOptions

# A factory returns None when the options lack what the provider needs (e.g. a key).
ProviderFactory = Callable[[RoutingOptions], Optional[RoutingProvider]]

# fixed preference order for provider="auto"
PREFERENCE = ["google", "openrouteservice", "osrm"]


class ProviderRegistry:
    _factories: Dict[str, ProviderFactory] = {}

    @classmethod
    def register(cls, name: str, factory: ProviderFactory) -> None:
        key = name.lower().strip()
        if key in cls._factories:
            raise ValueError(f"Provider '{name}' is already registered.")
        cls._factories[key] = factory

    @classmethod
    def get(cls, name: str, options: RoutingOptions) -> Optional[RoutingProvider]:
        key = name.lower().strip()
        if key not in cls._factories:
            raise ValueError(f"Provider '{name}' is not registered.")
        return cls._factories[key](options)

    @classmethod
    def list_providers(cls) -> List[str]:
        return sorted(cls._factories.keys())


_registered = False


def _google(options: RoutingOptions) -> Optional[RoutingProvider]:
    if not options.google_api_key:
        return None
    return GoogleAdapter(api_key=options.google_api_key, timeout=options.timeout_s)


def _ors(options: RoutingOptions) -> Optional[RoutingProvider]:
    if not options.openrouteservice_api_key:
        return None
    return ORSAdapter(api_key=options.openrouteservice_api_key, timeout=options.timeout_s)


def _osrm(options: RoutingOptions) -> Optional[RoutingProvider]:
    return OSRMAdapter(base_url=options.osrm_base_url, timeout=options.timeout_s)


def register_providers() -> None:
    global _registered
    if _registered:
        return
    for name, factory in (("google", _google), ("openrouteservice", _ors), ("osrm", _osrm)):
        if name not in ProviderRegistry._factories:
            ProviderRegistry.register(name, factory)
    _registered = True


def build_chain(options: RoutingOptions) -> List[RoutingProvider]:
    """
    auto      -> every provider whose credentials are present, in PREFERENCE order
    explicit  -> just that provider (empty when its credential is missing)
    haversine -> empty; callers go straight to the math fallback
    """
    register_providers()
    if options.provider == "haversine":
        return []
    names = PREFERENCE if options.provider == "auto" else [options.provider]
    chain: List[RoutingProvider] = []
    for name in names:
        provider = ProviderRegistry.get(name, options)
        if provider is not None:
            chain.append(provider)
    return chain
