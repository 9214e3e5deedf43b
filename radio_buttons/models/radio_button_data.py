"""Radio button choice persistence model.

Synopsis:
Store the selected radio button values of one host record in a single JSON
mapping column. Rows point back at their host through a polymorphic pair of
columns (host class name plus host primary key) instead of a foreign key, so a
single table serves every host type.

Glossary:
- Host: Persisted record type that has radio buttons attached.
- Choice map: Mapping of choice name to the selected value.
- Discriminator: Host class name stored in ``model_type``.
"""

from __future__ import annotations

from sqlalchemy.ext.mutable import MutableDict

from ..extensions import db
from .mixins import TimestampMixin


def _coerce_key(key) -> str:
    return key if isinstance(key, str) else str(key)


def _coerce_value(value):
    if value is None or isinstance(value, str):
        return value
    return str(value)


# --- ChoiceMap ---
# Purpose: Change-tracked mapping with hstore-like string semantics.
# Inputs: Choice names and values; non-string scalars are stringified.
# Outputs: Mutations flag the owning row dirty for the next flush.
class ChoiceMap(MutableDict):
    @classmethod
    def coerce(cls, key, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            choice_map = cls()
            dict.update(
                choice_map,
                {_coerce_key(k): _coerce_value(v) for k, v in value.items()},
            )
            return choice_map
        return super().coerce(key, value)

    def __setitem__(self, key, value):
        super().__setitem__(_coerce_key(key), _coerce_value(value))

    def setdefault(self, key, value=None):
        return super().setdefault(_coerce_key(key), _coerce_value(value))

    def update(self, *args, **kwargs):
        for key, value in dict(*args, **kwargs).items():
            self[key] = value


# --- RadioButtonData model ---
# Purpose: Hold the choice map of exactly one host instance.
# Inputs: Host discriminator/id pair plus the JSON choice map.
# Outputs: One row per host instance, enforced by a unique constraint.
class RadioButtonData(TimestampMixin, db.Model):
    __tablename__ = "radio_button_data"
    __table_args__ = (
        db.UniqueConstraint("model_type", "model_id", name="uq_radio_button_data_model"),
    )

    id = db.Column(db.Integer, primary_key=True)
    model_type = db.Column(db.String(128), nullable=False)
    model_id = db.Column(db.Integer, nullable=False, index=True)
    data = db.Column(ChoiceMap.as_mutable(db.JSON), nullable=False, default=dict)

    @classmethod
    def for_host(cls, model_type: str, model_id: int):
        return cls.query.filter_by(model_type=model_type, model_id=model_id).first()

    # --- String representation ---
    # Purpose: Provide readable model identity in logs/debug output.
    # Inputs: None.
    # Outputs: "<RadioButtonData Type#id>" string.
    def __repr__(self) -> str:
        return f"<RadioButtonData {self.model_type}#{self.model_id}>"
