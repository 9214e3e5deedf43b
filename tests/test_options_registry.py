"""Options registry loading and declaration behavior."""

import pytest

from radio_buttons.errors import OptionsConfigurationError
from radio_buttons.services.options_registry import (
    OptionsDeclaration,
    OptionsRegistry,
    type_name_for,
)
from tests.models import OPTIONS_PATH


def _write(path, content):
    path.write_text(content, encoding="utf-8")
    return path


def test_single_file_sections_load_per_type():
    registry = OptionsRegistry(OPTIONS_PATH)

    person = registry.load("person")

    assert person.type_name == "person"
    assert person.choice_names == ("gender", "eye_color")
    assert person.options_for("gender") == ("male", "female")
    assert registry.is_loaded("person")
    assert not registry.is_loaded("vehicle")


def test_directory_source_reads_one_file_per_type(tmp_path):
    _write(tmp_path / "person.yml", "gender: [male, female]\n")
    _write(tmp_path / "vehicle.yaml", "body: [sedan]\n")

    registry = OptionsRegistry(tmp_path)

    assert registry.load("person").options_for("gender") == ("male", "female")
    assert registry.load("vehicle").options_for("body") == ("sedan",)
    assert registry.available_type_names() == ("person", "vehicle")


def test_missing_section_or_file_yields_empty_declaration(tmp_path):
    registry = OptionsRegistry(OPTIONS_PATH)
    company = registry.load("company")
    assert company.is_empty
    assert len(company) == 0

    missing_file = OptionsRegistry(tmp_path / "nope.yml").load("person")
    assert missing_file.is_empty

    no_source = OptionsRegistry().load("person")
    assert no_source.is_empty


def test_empty_options_file_is_tolerated(tmp_path):
    registry = OptionsRegistry(_write(tmp_path / "empty.yml", ""))
    assert registry.load("person").is_empty


def test_scalar_options_are_stringified(tmp_path):
    source = _write(
        tmp_path / "sets.yml",
        "survey:\n  answer: [yes, no]\n  rating: [1, 2, 2, 3]\n",
    )

    survey = OptionsRegistry(source).load("survey")

    assert survey.options_for("answer") == ("true", "false")
    assert survey.options_for("rating") == ("1", "2", "3")


def test_malformed_yaml_fails_fast(tmp_path):
    source = _write(tmp_path / "broken.yml", "person:\n  gender: [male, female\n")

    with pytest.raises(OptionsConfigurationError) as excinfo:
        OptionsRegistry(source).load("person")

    assert excinfo.value.source == str(source)
    assert "Unparsable" in str(excinfo.value)


@pytest.mark.parametrize(
    "content",
    [
        "person: [male, female]\n",
        "person:\n  gender: male\n",
        "person:\n  gender:\n    male: true\n",
        "person:\n  gender: [[male], female]\n",
        "- person\n",
    ],
)
def test_malformed_structure_fails_fast(tmp_path, content):
    source = _write(tmp_path / "sets.yml", content)

    with pytest.raises(OptionsConfigurationError):
        OptionsRegistry(source).load("person")


def test_load_is_write_once(tmp_path):
    source = _write(tmp_path / "sets.yml", "person:\n  gender: [male, female]\n")
    registry = OptionsRegistry(source)

    first = registry.load("person")
    _write(source, "person:\n  gender: [other]\n")
    second = registry.load("person", inline={"mood": ["happy"]})

    assert second is first
    assert second.options_for("gender") == ("male", "female")
    assert "mood" not in second


def test_inline_options_merge_over_file_sections():
    registry = OptionsRegistry(OPTIONS_PATH)

    vehicle = registry.load(
        "vehicle",
        inline={"fuel": ["petrol", "diesel"], "body": ["coupe"]},
    )

    assert vehicle.options_for("fuel") == ("petrol", "diesel")
    assert vehicle.options_for("body") == ("coupe",)


def test_get_returns_empty_declaration_for_unloaded_type():
    registry = OptionsRegistry(OPTIONS_PATH)

    declaration = registry.get("person")

    assert declaration.is_empty
    assert not registry.is_loaded("person")
    assert registry.type_names() == ()


def test_declaration_is_read_only():
    declaration = OptionsDeclaration("person", {"gender": ["male", "female"]})

    with pytest.raises(TypeError):
        declaration.choices["gender"] = ("other",)
    with pytest.raises(AttributeError):
        declaration.type_name = "company"

    assert declaration.as_dict() == {"gender": ["male", "female"]}


def test_errors_for_reports_unknown_sets_and_values():
    declaration = OptionsDeclaration("person", {"gender": ["male", "female"]})

    errors = declaration.errors_for({"gender": "unknown", "hair": "red"})

    assert len(errors) == 2
    assert "'unknown' is not a valid option for 'gender'" in errors[0]
    assert "'hair' is not a radio button set for person" in errors[1]
    assert declaration.errors_for({"gender": "male"}) == []
    assert declaration.is_legal("gender", None)


def test_type_name_for_uses_snake_case():
    class AdminUser:
        pass

    class HTTPRequestLog:
        pass

    assert type_name_for(AdminUser) == "admin_user"
    assert type_name_for(HTTPRequestLog) == "http_request_log"


def test_unreadable_source_fails_fast(tmp_path):
    (tmp_path / "person.yml").mkdir()

    with pytest.raises(OptionsConfigurationError) as excinfo:
        OptionsRegistry(tmp_path).load("person")

    assert "Unreadable" in str(excinfo.value)
    assert excinfo.value.type_name == "person"
