"""Errors raised while comparing or scoring texts."""


class ComparisonError(ValueError):
    """Base class for input problems that halt the comparison pipeline."""


class EmptyInput(ComparisonError):
    """No documents, no methods, or nothing left after tokenisation."""


class UnknownMethod(ComparisonError):
    """A method name that the similarity/distance or readability provider does not know."""

    def __init__(self, method, known=()):
        self.method = method
        self.known = tuple(known)
        msg = f'unknown method {method!r}'
        if self.known:
            msg += f' (expected one of: {", ".join(self.known)})'
        super().__init__(msg)


class MissingReferenceGroup(ComparisonError, LookupError):
    """The reference group is not among the compared groups."""

    def __init__(self, reference, groups=()):
        self.reference = reference
        self.groups = list(groups)
        super().__init__(f'reference group {reference!r} not found among {len(self.groups)} groups')
