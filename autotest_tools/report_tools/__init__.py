from .allure_utils import attach_file, attach_text

__all__ = [
    "attach_file",
    "attach_text",
]
