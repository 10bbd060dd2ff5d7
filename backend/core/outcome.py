# core/outcome.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

from core.exceptions import ProviderError, UnsupportedCapabilityError
from core.interfaces import RoutingProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

OK = "ok"
FAILED = "failed"
UNSUPPORTED = "unsupported"


@dataclass
class Outcome(Generic[T]):
    """Result of one provider step: ok, failed or unsupported."""

    status: str
    provider: str
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == OK


@dataclass
class ChainResult(Generic[T]):
    value: Optional[T] = None
    provider: Optional[str] = None
    # every step in the order it was taken
    steps: List[Outcome] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.provider is not None

    @property
    def tried(self) -> List[str]:
        return [s.provider for s in self.steps]


async def attempt(
    provider: RoutingProvider,
    capability: str,
    call: Callable[[RoutingProvider], Awaitable[T]],
) -> Outcome[T]:
    if not provider.supports(capability):
        return Outcome(UNSUPPORTED, provider.name)
    try:
        value = await call(provider)
    except UnsupportedCapabilityError:
        return Outcome(UNSUPPORTED, provider.name)
    except ProviderError as e:
        return Outcome(FAILED, provider.name, error=e.message)
    except Exception as e:
        # anything else out of an adapter is still that provider's failure
        return Outcome(FAILED, provider.name, error=f"{type(e).__name__}: {e}")
    return Outcome(OK, provider.name, value=value)


async def walk_chain(
    chain: Sequence[RoutingProvider],
    capability: str,
    call: Callable[[RoutingProvider], Awaitable[Any]],
) -> ChainResult:
    """
    Try providers strictly in order; stop at the first success.
    Cancellation of the caller is not an Exception and propagates untouched.
    """
    result: ChainResult = ChainResult()
    for provider in chain:
        outcome = await attempt(provider, capability, call)
        result.steps.append(outcome)
        if outcome.ok:
            result.value = outcome.value
            result.provider = outcome.provider
            return result
        if outcome.status == UNSUPPORTED:
            logger.debug("%s: %s unsupported, skipping", provider.name, capability)
        else:
            logger.warning(
                "%s: %s failed, advancing chain (%s)",
                provider.name,
                capability,
                outcome.error,
            )
    return result
