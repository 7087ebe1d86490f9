from typing import Any


class Agent:
    """A model-backed task the API delegates one request to."""

    name: str = "base"
    description: str = "Base agent"

    async def run(self, context: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement run()")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
