from __future__ import annotations


class ValidationError(ValueError):
    """An entity field failed validation."""


class EmptyNameError(ValidationError):
    def __init__(self) -> None:
        super().__init__("name cannot be empty")


class EmptyTitleError(ValidationError):
    def __init__(self) -> None:
        super().__init__("title cannot be empty")


class EmptyLanguageError(ValidationError):
    def __init__(self) -> None:
        super().__init__("language cannot be empty")


class EmptyCodeError(ValidationError):
    def __init__(self) -> None:
        super().__init__("code cannot be empty")
