"""Fill PowerPoint template decks written with $/variable/ placeholders."""

from .api import fill_template_file, save_presentation
from .cli import run_cli
from .data_mapper import build_mapper
from .errors import DataValidationError, ImageReplacementError, TemplateError
from .images import ImageFormat, ImageReplacementMode, image_dimension, resize_image
from .inspection import VariableOccurrence, list_template_variables
from .mapper import PptImageMapper, PptMapper, TemplateMapping
from .templates import process, process_presentation, remove_at_positions
from .validation import validate_data, validate_data_file
from .variables import PptVariable, find_variables, parse, replace_text_variables

__all__ = [
    "DataValidationError",
    "ImageFormat",
    "ImageReplacementError",
    "ImageReplacementMode",
    "PptImageMapper",
    "PptMapper",
    "PptVariable",
    "TemplateError",
    "TemplateMapping",
    "VariableOccurrence",
    "build_mapper",
    "fill_template_file",
    "find_variables",
    "image_dimension",
    "list_template_variables",
    "parse",
    "process",
    "process_presentation",
    "remove_at_positions",
    "replace_text_variables",
    "resize_image",
    "run_cli",
    "save_presentation",
    "validate_data",
    "validate_data_file",
]
