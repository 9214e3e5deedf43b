"""Options declarations for radio button host types.

Synopsis:
Load, once per host type, which radio button sets exist and which values each
set accepts. Sources are YAML: either one file with a top-level section per
type name, or a directory with one ``<type_name>.yml`` file per type.

Glossary:
- Type name: snake_case host class name used to key declarations.
- Declaration: Immutable mapping of choice name to legal values.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import yaml

from ..errors import OptionsConfigurationError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yml", ".yaml")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def type_name_for(host_cls) -> str:
    """Return the declaration key for a host class (``AdminUser`` -> ``admin_user``)."""
    return _CAMEL_BOUNDARY.sub("_", host_cls.__name__).lower()


# --- OptionsDeclaration ---
# Purpose: Read-only view of the choices declared for one host type.
@dataclass(frozen=True)
class OptionsDeclaration:
    type_name: str
    choices: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        frozen = {name: tuple(values) for name, values in dict(self.choices).items()}
        object.__setattr__(self, "choices", MappingProxyType(frozen))

    @property
    def choice_names(self) -> tuple[str, ...]:
        return tuple(self.choices)

    @property
    def is_empty(self) -> bool:
        return not self.choices

    def options_for(self, name: str) -> tuple[str, ...]:
        return self.choices.get(name, ())

    def is_legal(self, name: str, value: Any) -> bool:
        if name not in self.choices:
            return False
        return value is None or value in self.choices[name]

    def errors_for(self, values: Mapping[str, Any]) -> list[str]:
        """Describe every stored pair that the declaration does not allow."""
        errors = []
        for name, value in values.items():
            if name not in self.choices:
                errors.append(f"{name!r} is not a radio button set for {self.type_name}")
            elif not self.is_legal(name, value):
                allowed = ", ".join(self.choices[name])
                errors.append(f"{value!r} is not a valid option for {name!r} (allowed: {allowed})")
        return errors

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(values) for name, values in self.choices.items()}

    def __contains__(self, name) -> bool:
        return name in self.choices

    def __iter__(self) -> Iterator[str]:
        return iter(self.choices)

    def __len__(self) -> int:
        return len(self.choices)


class OptionsRegistry:
    """Write-once store of options declarations keyed by host type name."""

    def __init__(self, source: str | os.PathLike | None = None):
        self.source = os.fspath(source) if source is not None else None
        self._declarations: dict[str, OptionsDeclaration] = {}
        self._file_cache: dict[str, Any] | None = None

    def load(self, type_name: str, inline: Mapping[str, Any] | None = None) -> OptionsDeclaration:
        """Load the declaration for ``type_name``; later calls return the first result."""
        existing = self._declarations.get(type_name)
        if existing is not None:
            if inline:
                logger.warning(
                    "Ignoring inline radio button options for %s; declaration already loaded",
                    type_name,
                )
            return existing

        raw_section, origin = self._read_section(type_name)
        choices = _normalize_section(raw_section, type_name=type_name, source=origin)
        if inline:
            choices.update(_normalize_section(inline, type_name=type_name, source="inline"))

        declaration = OptionsDeclaration(type_name=type_name, choices=choices)
        self._declarations[type_name] = declaration
        logger.info(
            "Loaded %d radio button set(s) for %s from %s",
            len(declaration),
            type_name,
            origin or "inline options",
        )
        return declaration

    def get(self, type_name: str) -> OptionsDeclaration:
        declaration = self._declarations.get(type_name)
        if declaration is None:
            return OptionsDeclaration(type_name=type_name)
        return declaration

    def is_loaded(self, type_name: str) -> bool:
        return type_name in self._declarations

    def type_names(self) -> tuple[str, ...]:
        return tuple(self._declarations)

    def available_type_names(self) -> tuple[str, ...]:
        """Type names the configured source declares, loaded or not."""
        if not self.source:
            return ()
        if os.path.isdir(self.source):
            names = []
            for entry in sorted(os.listdir(self.source)):
                stem, suffix = os.path.splitext(entry)
                if suffix in _YAML_SUFFIXES:
                    names.append(stem)
            return tuple(names)
        return tuple(self._read_file_sections())

    def __contains__(self, type_name) -> bool:
        return type_name in self._declarations

    def _read_section(self, type_name: str) -> tuple[Any, str | None]:
        if not self.source:
            return None, None

        if os.path.isdir(self.source):
            for suffix in _YAML_SUFFIXES:
                path = os.path.join(self.source, f"{type_name}{suffix}")
                if os.path.exists(path):
                    return _read_yaml(path, type_name=type_name), path
            logger.debug("No radio button options file for %s in %s", type_name, self.source)
            return None, None

        sections = self._read_file_sections()
        if type_name not in sections:
            logger.debug("No radio button options section for %s in %s", type_name, self.source)
            return None, None
        return sections[type_name], self.source

    def _read_file_sections(self) -> dict[str, Any]:
        if self._file_cache is None:
            if not os.path.exists(self.source):
                logger.debug("Radio button options file %s not found", self.source)
                self._file_cache = {}
            else:
                content = _read_yaml(self.source)
                if content is None:
                    content = {}
                if not isinstance(content, dict):
                    raise OptionsConfigurationError(
                        "Options file must map type names to radio button sets",
                        source=self.source,
                    )
                self._file_cache = content
        return self._file_cache


def _read_yaml(path: str, *, type_name: str | None = None) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise OptionsConfigurationError(
            f"Unparsable radio button options: {exc}", source=path, type_name=type_name
        ) from exc
    except OSError as exc:
        raise OptionsConfigurationError(
            f"Unreadable radio button options: {exc}", source=path, type_name=type_name
        ) from exc


def _normalize_section(section: Any, *, type_name: str, source: str | None) -> dict[str, tuple[str, ...]]:
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise OptionsConfigurationError(
            "Radio button sets must be a mapping of set name to options",
            source=source,
            type_name=type_name,
        )

    choices: dict[str, tuple[str, ...]] = {}
    for name, options in section.items():
        if not isinstance(options, (list, tuple)):
            raise OptionsConfigurationError(
                f"Options for {name!r} must be a list of values",
                source=source,
                type_name=type_name,
            )
        values = []
        for option in options:
            if option is None or isinstance(option, (list, tuple, Mapping)):
                raise OptionsConfigurationError(
                    f"Option {option!r} for {name!r} must be a scalar value",
                    source=source,
                    type_name=type_name,
                )
            value = str(option).lower() if isinstance(option, bool) else str(option)
            if value not in values:
                values.append(value)
        choices[str(name)] = tuple(values)
    return choices
