"""
Host environment description and feature probes.

The flags are read once, when a ListenRuntime is created, and stay fixed for
the life of that runtime.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from listenkit.config.settings import Settings, get_settings
from listenkit.core.types.event_types import EnvironmentFeature


class HostEnvironment(BaseModel):
    """Objects and version information supplied by the embedding host"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    window: Optional[Any] = Field(
        default=None, description="Global object that fires the unload signal"
    )
    document: Optional[Any] = Field(
        default=None, description="Root node of the host tree"
    )
    script_engine_version: Optional[float] = Field(
        default=None, description="major + minor / 10 of a legacy script engine"
    )


def has(
    feature: Union[EnvironmentFeature, str],
    environment: HostEnvironment,
    settings: Optional[Settings] = None,
) -> Any:
    """Evaluate a single host feature flag."""
    feature = EnvironmentFeature(feature)
    if feature == EnvironmentFeature.DOM_ADD_EVENT_LISTENER:
        # Without a host document there is no legacy event model to patch
        if environment.document is None:
            return True
        return callable(getattr(environment.document, "add_event_listener", None))
    if feature == EnvironmentFeature.CONFIG_ALLOW_LEAKS:
        return (settings or get_settings()).allow_leaks
    return environment.script_engine_version


def needs_leak_teardown(
    environment: HostEnvironment, settings: Optional[Settings] = None
) -> bool:
    """True on script engines older than 5.7 unless leaks are explicitly allowed."""
    version = has(EnvironmentFeature.JSCRIPT, environment, settings)
    if version is None or version >= 5.7:
        return False
    return not has(EnvironmentFeature.CONFIG_ALLOW_LEAKS, environment, settings)
