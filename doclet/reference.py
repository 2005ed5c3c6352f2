"""Cross references and their two possible resolution outcomes."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResolvedLink:
    """A reference that points at a known entity."""

    target: str  # qualified name of the target entity


@dataclass(frozen=True)
class Unresolved:
    """A reference kept as literal text because nothing matched."""

    text: str


Resolution = ResolvedLink | Unresolved


@dataclass(eq=False)
class Reference:
    """A textual target attached to a tag or an inline ``{@link}``.

    Only ``resolution`` changes after extraction; the resolver sets it to
    exactly one of ``ResolvedLink`` or ``Unresolved``.
    """

    text: str
    label: str = ""
    resolution: Resolution | None = field(default=None, compare=False)

    @property
    def is_resolved(self) -> bool:
        """True once the resolver found a target."""
        return isinstance(self.resolution, ResolvedLink)

    @property
    def target(self) -> str | None:
        """Qualified name of the resolved target, if any."""
        if isinstance(self.resolution, ResolvedLink):
            return self.resolution.target
        return None

    @property
    def display(self) -> str:
        """Text shown for the reference: its label, else the literal target."""
        return self.label or self.text.lstrip("#")
