"""Extractor settings and activation policies.

Settings can be given explicitly or picked up from ``HLEXTRACT_*``
environment variables.  Whether extraction runs at all is decided by an
activation policy:

* :class:`EnabledByDefault`: always run;
* :class:`EnabledByEnv`: run only when an environment variable is set;
* :class:`DisabledByEnv`: run unless an environment variable is set.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, TypeVar, Union

from .exceptions import ConfigurationError
from .extractor import DEFAULT_END_TOKEN, DEFAULT_START_TOKEN

T = TypeVar("T")

DEFAULT_OUTPUT_DIR = Path("target") / "hlextract"

_ENV_FIELDS = {
    "HLEXTRACT_START_TOKEN": "start_token",
    "HLEXTRACT_END_TOKEN": "end_token",
    "HLEXTRACT_DIRECTORY": "directory",
    "HLEXTRACT_PROJECT_DIR": "project_dir",
    "HLEXTRACT_OUTPUT_DIR": "output_dir",
}


# ---------------------------------------------------------------------------
# Activation policies
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EnabledByDefault:
    """Extraction always runs."""

    def is_active(self, environ: Mapping[str, str] | None = None) -> bool:
        return True

    def __str__(self) -> str:
        return "<hl-enabled-by-default>"


@dataclass(frozen=True, slots=True)
class EnabledByEnv:
    """Extraction runs only when the environment variable *name* is set."""

    name: str

    def is_active(self, environ: Mapping[str, str] | None = None) -> bool:
        env = os.environ if environ is None else environ
        return self.name in env

    def __str__(self) -> str:
        return f"<hl-enabled-by-env: {self.name}>"


@dataclass(frozen=True, slots=True)
class DisabledByEnv:
    """Extraction runs unless the environment variable *name* is set."""

    name: str

    def is_active(self, environ: Mapping[str, str] | None = None) -> bool:
        env = os.environ if environ is None else environ
        return self.name not in env

    def __str__(self) -> str:
        return f"<hl-disabled-by-env: {self.name}>"


Activation = Union[EnabledByDefault, EnabledByEnv, DisabledByEnv]


def activated(
    activation: Activation,
    default: T,
    func: Callable[[], T],
    environ: Mapping[str, str] | None = None,
) -> T:
    """Return ``func()`` when *activation* is active, else *default*.

    *func* is not called when extraction is disabled.
    """
    if activation.is_active(environ):
        return func()
    return default


def parse_activation(text: str) -> Activation:
    """Parse an activation policy from its command-line form.

    Accepted forms are ``"default"``, ``"enabled-by-env:NAME"`` and
    ``"disabled-by-env:NAME"``.

    Raises:
        ConfigurationError: If *text* is not one of the accepted forms.
    """
    text = text.strip()
    if text == "default":
        return EnabledByDefault()

    kind, sep, name = text.partition(":")
    name = name.strip()
    if sep and name:
        if kind == "enabled-by-env":
            return EnabledByEnv(name)
        if kind == "disabled-by-env":
            return DisabledByEnv(name)

    msg = f"Invalid activation '{text}': expected 'default', 'enabled-by-env:NAME' or 'disabled-by-env:NAME'"
    raise ConfigurationError(msg)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ExtractorSettings:
    """Validated extraction settings.

    Attributes:
        start_token: Substring marking the line before a sample.
        end_token: Exact line content ending a sample.
        directory: Directory scanned for documents.
        project_dir: Root of the build; relative output paths start here.
        output_dir: Directory receiving the generated sources.
        include: File name globs of the documents to scan.
        exclude: File and directory name globs to skip.
        activation: Policy deciding whether extraction runs.
        encoding: Text encoding of the documents.
    """

    start_token: str = DEFAULT_START_TOKEN
    end_token: str = DEFAULT_END_TOKEN
    directory: Path = field(default_factory=lambda: Path("."))
    project_dir: Path = field(default_factory=lambda: Path("."))
    output_dir: Path = DEFAULT_OUTPUT_DIR
    include: tuple[str, ...] = ("*.md",)
    exclude: tuple[str, ...] = ()
    activation: Activation = field(default_factory=EnabledByDefault)
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if not self.start_token:
            msg = "start_token must not be empty"
            raise ConfigurationError(msg)
        if not self.end_token:
            msg = "end_token must not be empty"
            raise ConfigurationError(msg)
        if not self.include:
            msg = "include must contain at least one pattern"
            raise ConfigurationError(msg)
        object.__setattr__(self, "directory", Path(self.directory))
        object.__setattr__(self, "project_dir", Path(self.project_dir))
        object.__setattr__(self, "output_dir", Path(self.output_dir))

    @property
    def resolved_output_dir(self) -> Path:
        """Output directory, relative paths taken from :attr:`project_dir`."""
        if self.output_dir.is_absolute():
            return self.output_dir
        return self.project_dir / self.output_dir

    def is_active(self, environ: Mapping[str, str] | None = None) -> bool:
        return self.activation.is_active(environ)

    def with_overrides(self, **overrides: Any) -> ExtractorSettings:
        """Return a copy with the non-``None`` *overrides* applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> ExtractorSettings:
        """Build settings from ``HLEXTRACT_*`` environment variables.

        Recognised variables:
            ``HLEXTRACT_START_TOKEN``, ``HLEXTRACT_END_TOKEN``,
            ``HLEXTRACT_DIRECTORY``, ``HLEXTRACT_PROJECT_DIR``,
            ``HLEXTRACT_OUTPUT_DIR``.

        Explicit, non-``None`` *overrides* take precedence over the
        environment.

        Raises:
            ConfigurationError: If the resulting settings are invalid.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for var, name in _ENV_FIELDS.items():
            value = env.get(var)
            if value is not None:
                values[name] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
