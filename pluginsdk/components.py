"""Component values reconstructed from plugin responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AccessInfo:
    """Raw value returned by an access-info function, for decoding elsewhere."""

    any_message: Any = None

    def proto(self) -> Any:
        """Return the encoded message."""
        return self.any_message


@dataclass
class Artifact:
    """An artifact produced by a build or registry push."""

    any_message: Any = None
    any_json: str = ""
    labels_val: dict[str, str] = field(default_factory=dict)
    template_val: dict[str, Any] = field(default_factory=dict)

    def proto(self) -> Any:
        return self.any_message

    def labels(self) -> dict[str, str]:
        return self.labels_val

    def template_data(self) -> dict[str, Any]:
        return self.template_val

    def to_json(self) -> str:
        """Return the JSON form of the encoded message."""
        return self.any_json


@dataclass
class Deployment:
    """A deployment; ``deployment`` carries the ``url`` reported by the plugin."""

    any_message: Any = None
    any_json: str = ""
    deployment: Any = None
    template_val: dict[str, Any] = field(default_factory=dict)

    def proto(self) -> Any:
        return self.any_message

    def url(self) -> str:
        """Return the deployment URL, or an empty string when unknown."""
        if self.deployment is None:
            return ""
        return self.deployment.url

    def template_data(self) -> dict[str, Any]:
        return self.template_val

    def to_json(self) -> str:
        return self.any_json

    def __str__(self) -> str:
        return ""


@dataclass
class Release:
    """A release; ``release`` carries the ``url`` reported by the plugin."""

    any_message: Any = None
    any_json: str = ""
    release: Any = None
    template_val: dict[str, Any] = field(default_factory=dict)

    def proto(self) -> Any:
        return self.any_message

    def url(self) -> str:
        return self.release.url

    def template_data(self) -> dict[str, Any]:
        return self.template_val

    def to_json(self) -> str:
        return self.any_json


@dataclass
class RunningTask:
    """A task started by a task launcher."""

    any_message: Any = None

    def proto(self) -> Any:
        return self.any_message