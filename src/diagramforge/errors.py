"""Exception hierarchy for diagramforge."""


class DiagramError(Exception):
    """Base class for all diagramforge errors."""


class RenderError(DiagramError):
    """A renderer rejected a declaration. Aborts the whole render."""


class DuplicateIdentityError(RenderError):
    """An identity was declared twice where the renderer forbids it."""

    def __init__(self, kind: str, identity: str):
        self.kind = kind
        self.identity = identity
        super().__init__(f"{kind} '{identity}' is already declared")


class InvalidIdentityError(RenderError):
    """An identity is empty or contains characters the renderer cannot emit."""

    def __init__(self, identity: str, reason: str):
        self.identity = identity
        self.reason = reason
        super().__init__(f"invalid identity {identity!r}: {reason}")


class UnknownParentError(RenderError):
    """A declaration referenced a subgraph that was never declared."""

    def __init__(self, parent_id: str, identity: str):
        self.parent_id = parent_id
        self.identity = identity
        super().__init__(f"cannot declare '{identity}': unknown parent '{parent_id}'")


class GroupCycleError(DiagramError):
    """Attaching a group would make it its own ancestor."""


class IdentityGenerationError(DiagramError):
    """The random source failed while generating an identity."""


class DescriptionError(DiagramError):
    """A diagram description file could not be loaded or built."""
