"""Session-scoped store of resolved comment texts."""

import logging

logger = logging.getLogger(__name__)


class CommentCache:
    """Maps unique per-overload identifiers to resolved comment text.

    Entries are written once: a later store under an existing key keeps the
    first text. Synthesized overloads, interface mirrors and property
    accessors that share an identifier read the text back from here.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self.entries: dict[str, str] = {}

    def __contains__(self, usr: object) -> bool:
        return usr in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, usr: str | None) -> str | None:
        """Return the cached text for an identifier, if any."""
        if usr is None:
            return None
        return self.entries.get(usr)

    def store(self, usr: str, text: str) -> bool:
        """Record text for an identifier; return False if it was already set."""
        existing = self.entries.get(usr)
        if existing is not None:
            if existing != text:
                logger.debug("Keeping first comment cached for %s", usr)
            return False
        self.entries[usr] = text
        return True

    def reset(self) -> None:
        """Forget every entry."""
        self.entries.clear()
