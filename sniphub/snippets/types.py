class MatchError(Exception): ...


class ValidationError(Exception): ...


class DuplicateSnippet(ValidationError):
    def __init__(self, name: str, filetype: str) -> None:
        super().__init__(name, filetype)
        self.name, self.filetype = name, filetype


class ContextError(Exception): ...
