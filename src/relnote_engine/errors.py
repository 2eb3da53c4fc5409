"""Exceptions raised while checking and merging fragments."""


class RelnoteError(Exception):
    """Base class for all relnote errors."""


class FragmentError(RelnoteError, ValueError):
    """A fragment is not well-formed."""


class EmptyContentError(FragmentError):
    def __init__(self) -> None:
        super().__init__("empty content")


class MissingLeadingHeadingError(FragmentError):
    def __init__(self) -> None:
        super().__init__("does not start with a heading")


class EmptyHeadingTextError(FragmentError):
    def __init__(self) -> None:
        super().__init__("starts with an empty heading")


class NonMatchingLeadingHeadingError(FragmentError):
    def __init__(self, heading: str) -> None:
        self.heading = heading
        super().__init__(
            f"starts with a non-matching heading {heading!r} (text begins with a '+')"
        )


class IncompleteSectionError(FragmentError):
    def __init__(self, heading: str) -> None:
        self.heading = heading
        super().__init__(f"section with heading {heading!r} needs a TODO or a sentence")


class DuplicateLinkReferenceError(RelnoteError, ValueError):
    def __init__(self, key: str, filename: str) -> None:
        self.key = key
        self.filename = filename
        super().__init__(f"duplicate link reference {key!r}; second in {filename}")


class UnknownBlockError(RelnoteError, TypeError):
    """A block or inline of an unrecognized type reached the merge code.

    Indicates a defect in the document adapter, never bad input.
    """

    def __init__(self, node: object) -> None:
        name = getattr(node, "type", None) or type(node).__name__
        super().__init__(f"unknown block type {name}")
