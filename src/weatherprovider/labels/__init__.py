from .base import ConditionLabelResolver, LabelResourceError
from .resources import ResourceLabelResolver, load_label_tables

__all__ = [
    "ConditionLabelResolver",
    "LabelResourceError",
    "ResourceLabelResolver",
    "load_label_tables",
]
