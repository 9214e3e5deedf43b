"""Attach radio buttons to a host model.

Synopsis:
``attach_radio_buttons`` is the single declaration call a host model makes. It
loads the host's options declaration, registers the one-to-one polymorphic
relationship to ``RadioButtonData`` and stores a ``RadioButtonProvider`` on the
host class as ``radio_buttons``.

Glossary:
- Host: Mapped ``db.Model`` subclass with a single-column primary key.
- Accessor: Property named after a declared choice that reads/writes it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import current_app, has_app_context
from sqlalchemy import and_
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper, foreign

from .errors import RadioButtonsConfigurationError
from .extensions import db
from .models.radio_button_data import RadioButtonData
from .services.options_registry import OptionsRegistry, type_name_for
from .services.radio_button_service import RadioButtonProvider

logger = logging.getLogger(__name__)

PROVIDER_ATTRIBUTE = "radio_buttons"
EXTENSION_KEY = "radio_buttons"


def attach_radio_buttons(
    host_cls,
    registry: Optional[OptionsRegistry] = None,
    *,
    type_name: Optional[str] = None,
    options: Optional[Mapping[str, Any]] = None,
    relationship_key: str = "radio_button_data",
    define_accessors: bool = True,
    validate_on_write: Optional[bool] = None,
) -> RadioButtonProvider:
    """Give ``host_cls`` radio buttons and return its provider.

    The options declaration is loaded here, so a malformed options source
    fails the attachment instead of the first access. Sets whose names are
    not valid identifiers (``eye-color``) get no accessor; reach them through
    the provider's ``get_choice``/``set_choice``.
    """
    mapper = sa_inspect(host_cls, raiseerr=False)
    if not isinstance(mapper, Mapper):
        raise RadioButtonsConfigurationError(f"{host_cls!r} is not a mapped model")
    if PROVIDER_ATTRIBUTE in host_cls.__dict__:
        raise RadioButtonsConfigurationError(
            f"Radio buttons are already attached to {host_cls.__name__}"
        )
    if len(mapper.primary_key) != 1:
        raise RadioButtonsConfigurationError(
            f"{host_cls.__name__} needs a single-column primary key for radio buttons"
        )
    if hasattr(host_cls, relationship_key):
        raise RadioButtonsConfigurationError(
            f"{host_cls.__name__}.{relationship_key} already exists"
        )

    registry = registry if registry is not None else _registry_from_app()
    declaration = registry.load(type_name or type_name_for(host_cls), inline=options)
    accessor_names = _accessor_names(host_cls, declaration.choice_names) if define_accessors else ()

    pk_attr = getattr(host_cls, mapper.get_property_by_column(mapper.primary_key[0]).key)
    setattr(
        host_cls,
        relationship_key,
        db.relationship(
            RadioButtonData,
            primaryjoin=and_(
                pk_attr == foreign(RadioButtonData.model_id),
                RadioButtonData.model_type == host_cls.__name__,
            ),
            uselist=False,
            cascade="all, delete-orphan",
            overlaps=relationship_key,
        ),
    )

    provider = RadioButtonProvider(
        host_cls,
        declaration,
        relationship_key=relationship_key,
        validate_on_write=validate_on_write,
    )
    setattr(host_cls, PROVIDER_ATTRIBUTE, provider)

    for name in accessor_names:
        setattr(host_cls, name, _accessor(provider, name))

    logger.debug(
        "Attached radio buttons to %s (%s)",
        host_cls.__name__,
        ", ".join(declaration.choice_names) or "no sets declared",
    )
    return provider


def _registry_from_app() -> OptionsRegistry:
    if has_app_context() and EXTENSION_KEY in current_app.extensions:
        return current_app.extensions[EXTENSION_KEY]
    raise RadioButtonsConfigurationError(
        "No options registry given and no application registry is available"
    )


def _accessor_names(host_cls, choice_names) -> list[str]:
    names = []
    for name in choice_names:
        if not name.isidentifier():
            logger.warning(
                "No accessor for radio button set %r on %s; not a valid attribute name",
                name,
                host_cls.__name__,
            )
            continue
        if hasattr(host_cls, name):
            raise RadioButtonsConfigurationError(
                f"Radio button set {name!r} clashes with {host_cls.__name__}.{name}"
            )
        names.append(name)
    return names


def _accessor(provider: RadioButtonProvider, name: str) -> property:
    def getter(host):
        return provider.get_choice(host, name)

    def setter(host, value):
        provider.set_choice(host, name, value)

    return property(getter, setter, doc=f"Selected {name!r} radio button value.")
