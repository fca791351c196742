from .formatting import DEFAULT_PRECISION, PrintOptions, format_value, tensor_to_string

__all__ = [
    "DEFAULT_PRECISION",
    "PrintOptions",
    "format_value",
    "tensor_to_string",
]
