"""Fatal error kinds raised while building the documentation model."""


class DocletError(Exception):
    """Base class for errors that abort a documentation run."""


class MalformedDeclaration(DocletError):
    """The API model is structurally inconsistent (e.g. an orphan member)."""

    def __init__(self, name: str, reason: str) -> None:
        """Record the offending declaration name and what is wrong with it."""
        super().__init__(f"Malformed declaration {name!r}: {reason}")
        self.name = name
        self.reason = reason


class DuplicateDeclaration(DocletError):
    """Two declarations map to the same qualified name."""

    def __init__(self, qualified_name: str) -> None:
        """Record the colliding qualified name."""
        super().__init__(f"Duplicate declaration: {qualified_name}")
        self.qualified_name = qualified_name
