from typing import Protocol


class ContextValidator(Protocol):
    async def check(self, context: str) -> bool: ...
