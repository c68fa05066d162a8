"""Services package"""

from .input_service import InputService, get_input_service

__all__ = [
    "InputService",
    "get_input_service",
]
