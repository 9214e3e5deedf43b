from .options_registry import OptionsDeclaration, OptionsRegistry, type_name_for
from .radio_button_service import RadioButtonProvider, RadioButtonSet

__all__ = [
    "OptionsDeclaration",
    "OptionsRegistry",
    "RadioButtonProvider",
    "RadioButtonSet",
    "type_name_for",
]
