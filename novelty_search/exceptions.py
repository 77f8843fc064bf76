class NoveltyArchiveError(Exception):
    """Base for all novelty archive exceptions."""

    pass


class ConfigurationError(NoveltyArchiveError, ValueError, TypeError):
    """Malformed construction arguments."""

    pass


class ProtocolError(NoveltyArchiveError, RuntimeError):
    """Operations called out of record -> compute -> finalize order."""

    pass


class BehaviorShapeError(NoveltyArchiveError, ValueError, TypeError):
    """Behavior or genome of the wrong type or dimensionality."""

    pass
