"""Attaching radio buttons to host models."""

import logging

import pytest

from radio_buttons import attach_radio_buttons, capability
from radio_buttons.errors import OptionsConfigurationError, RadioButtonsConfigurationError
from radio_buttons.extensions import db
from radio_buttons.models import RadioButtonData
from radio_buttons.services import OptionsRegistry, RadioButtonProvider
from tests.models import Person, registry


class Gadget(db.Model):
    __tablename__ = "test_gadget"

    id = db.Column(db.Integer, primary_key=True)
    colour = db.Column(db.String(32))


class BrokenOptionsHost(db.Model):
    __tablename__ = "test_broken_options_host"

    id = db.Column(db.Integer, primary_key=True)


class CompositeKeyHost(db.Model):
    __tablename__ = "test_composite_key_host"

    tenant_id = db.Column(db.Integer, primary_key=True)
    local_id = db.Column(db.Integer, primary_key=True)


class AppRegistryHost(db.Model):
    __tablename__ = "test_app_registry_host"

    id = db.Column(db.Integer, primary_key=True)


class Gauge(db.Model):
    __tablename__ = "test_gauge"

    id = db.Column(db.Integer, primary_key=True)


class NotAModel:
    pass


def test_attach_stores_provider_handle_on_host():
    provider = Person.radio_buttons

    assert isinstance(provider, RadioButtonProvider)
    assert provider.host_cls is Person
    assert provider.model_type == "Person"
    assert provider.declaration is registry.get("person")
    assert registry.is_loaded("person")


def test_accessors_read_without_creating_and_write_through(app):
    with app.app_context():
        person = Person(name="Ada")
        db.session.add(person)
        db.session.commit()
        person_id = person.id

        assert person.gender is None
        assert db.session.query(RadioButtonData).count() == 0

        person.gender = "female"
        person.eye_color = "brown"
        db.session.commit()
        db.session.remove()

        reloaded = db.session.get(Person, person_id)
        assert reloaded.gender == "female"
        assert reloaded.eye_color == "brown"


def test_accessor_clash_is_rejected_before_attaching(tmp_path):
    fresh = OptionsRegistry(tmp_path / "missing.yml")

    with pytest.raises(RadioButtonsConfigurationError, match="colour"):
        attach_radio_buttons(Gadget, fresh, options={"colour": ["red", "blue"]})

    assert "radio_buttons" not in Gadget.__dict__
    assert not hasattr(Gadget, "radio_button_data")

    provider = attach_radio_buttons(
        Gadget,
        fresh,
        type_name="gadget_without_accessors",
        options={"colour": ["red", "blue"]},
        define_accessors=False,
    )
    assert provider.choice_names == ("colour",)

    with pytest.raises(RadioButtonsConfigurationError, match="already attached"):
        attach_radio_buttons(Gadget, fresh)


def test_malformed_options_fail_the_attachment(tmp_path):
    source = tmp_path / "sets.yml"
    source.write_text("broken_options_host:\n  mode: [on, off\n", encoding="utf-8")

    with pytest.raises(OptionsConfigurationError):
        attach_radio_buttons(BrokenOptionsHost, OptionsRegistry(source))

    assert "radio_buttons" not in BrokenOptionsHost.__dict__


def test_hosts_must_be_mapped_with_single_primary_key():
    with pytest.raises(RadioButtonsConfigurationError, match="not a mapped model"):
        attach_radio_buttons(NotAModel, registry)

    with pytest.raises(RadioButtonsConfigurationError, match="single-column primary key"):
        attach_radio_buttons(CompositeKeyHost, registry)


def test_attach_without_registry_requires_application_registry(app):
    with pytest.raises(RadioButtonsConfigurationError, match="No options registry"):
        attach_radio_buttons(AppRegistryHost)

    with app.app_context():
        provider = attach_radio_buttons(AppRegistryHost)

    assert provider.declaration.is_empty
    assert app.extensions["radio_buttons"].is_loaded("app_registry_host")


def test_non_identifier_sets_get_no_accessor(tmp_path, caplog, monkeypatch):
    monkeypatch.setattr(capability.logger, "disabled", False)
    fresh = OptionsRegistry(tmp_path / "missing.yml")

    with caplog.at_level(logging.WARNING, logger="radio_buttons.capability"):
        provider = attach_radio_buttons(
            Gauge,
            fresh,
            options={"eye-color": ["blue", "green"], "tint": ["dark", "light"]},
        )

    assert provider.choice_names == ("eye-color", "tint")
    assert "tint" in Gauge.__dict__
    assert "eye-color" not in Gauge.__dict__
    assert any("eye-color" in record.getMessage() for record in caplog.records)
