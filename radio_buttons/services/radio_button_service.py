from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from flask import current_app, has_app_context
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import object_session
from sqlalchemy.orm.attributes import set_committed_value

from ..errors import InvalidChoiceError
from ..extensions import db
from ..models.radio_button_data import ChoiceMap, RadioButtonData
from .options_registry import OptionsDeclaration

logger = logging.getLogger(__name__)

VALIDATE_ON_WRITE_CONFIG_KEY = "RADIO_BUTTONS_VALIDATE_ON_WRITE"


@dataclass(frozen=True)
class RadioButtonSet:
    """One declared radio button set with the host's current selection."""

    name: str
    options: tuple[str, ...]
    selected: Optional[str] = None

    def is_selected(self, option: str) -> bool:
        return self.selected is not None and self.selected == option


class RadioButtonProvider:
    """Reads and writes the radio button choices of one host type.

    Each host instance owns at most one ``RadioButtonData`` row. Only
    ``get_or_create`` and ``set_choice`` may create that row; every other
    accessor leaves storage untouched when no row exists yet.
    """

    def __init__(
        self,
        host_cls,
        declaration: OptionsDeclaration,
        *,
        relationship_key: str = "radio_button_data",
        validate_on_write: Optional[bool] = None,
    ):
        self.host_cls = host_cls
        self.declaration = declaration
        self.relationship_key = relationship_key
        self.model_type = host_cls.__name__
        self._validate_on_write = validate_on_write

    @property
    def validate_on_write(self) -> bool:
        if self._validate_on_write is not None:
            return self._validate_on_write
        if has_app_context():
            return bool(current_app.config.get(VALIDATE_ON_WRITE_CONFIG_KEY, False))
        return False

    @property
    def choice_names(self) -> tuple[str, ...]:
        return self.declaration.choice_names

    def record_for(self, host) -> Optional[RadioButtonData]:
        return getattr(host, self.relationship_key)

    def get_or_create(self, host) -> ChoiceMap:
        """Return the host's choice map, persisting an empty record if none exists."""
        record = self.record_for(host)
        if record is not None:
            return record.data

        host_id = self._host_id(host)
        if host_id is None:
            # Unsaved host: the record is saved along with it through the relationship.
            record = RadioButtonData(model_type=self.model_type, data={})
            setattr(host, self.relationship_key, record)
            logger.debug("Built radio button data for unsaved %s", self.model_type)
            return record.data

        session = object_session(host) or db.session
        record = self._insert_if_absent(session, host_id)
        set_committed_value(host, self.relationship_key, record)
        return record.data

    def find(self, host) -> Optional[ChoiceMap]:
        record = self.record_for(host)
        return record.data if record is not None else None

    def get_choice(self, host, name: str, default: Any = None) -> Any:
        choices = self.find(host)
        if choices is None:
            return default
        return choices.get(name, default)

    def set_choice(self, host, name: str, value: Any, validate: Optional[bool] = None) -> None:
        should_validate = self.validate_on_write if validate is None else validate
        if should_validate:
            value_to_check = value if value is None else str(value)
            errors = self.declaration.errors_for({name: value_to_check})
            if errors:
                raise InvalidChoiceError(errors)
        self.get_or_create(host)[name] = value

    def clear_choice(self, host, name: str) -> None:
        choices = self.find(host)
        if choices is not None:
            choices.pop(name, None)

    def errors(self, host) -> list[str]:
        choices = self.find(host)
        if not choices:
            return []
        return self.declaration.errors_for(choices)

    def validate(self, host) -> None:
        errors = self.errors(host)
        if errors:
            raise InvalidChoiceError(errors)

    def button_sets(self, host) -> list[RadioButtonSet]:
        choices = self.find(host) or {}
        return [
            RadioButtonSet(name=name, options=options, selected=choices.get(name))
            for name, options in self.declaration.choices.items()
        ]

    @staticmethod
    def _host_id(host):
        identity = sa_inspect(host).identity
        return identity[0] if identity is not None else None

    def _insert_if_absent(self, session, host_id) -> RadioButtonData:
        record = RadioButtonData(model_type=self.model_type, model_id=host_id, data={})
        try:
            with session.begin_nested():
                session.add(record)
        except IntegrityError:
            existing = session.execute(
                db.select(RadioButtonData).filter_by(model_type=self.model_type, model_id=host_id)
            ).scalar_one_or_none()
            if existing is None:
                raise
            logger.info(
                "Radio button data for %s#%s was created concurrently; reusing existing row",
                self.model_type,
                host_id,
            )
            return existing

        logger.debug("Created radio button data for %s#%s", self.model_type, host_id)
        return record
