"""Models package - imports all models for the application"""
from ..extensions import db
from .mixins import TimestampMixin
from .radio_button_data import ChoiceMap, RadioButtonData

__all__ = ["db", "TimestampMixin", "ChoiceMap", "RadioButtonData"]
