"""Exception types raised while reading association inputs."""


class ApiDocsError(Exception):
    """Base exception for malformed association inputs."""


class AstFormatError(ApiDocsError):
    """The AST description cannot be turned into declarations."""


class CorpusFormatError(ApiDocsError):
    """A documentation corpus file is not a valid module index."""
