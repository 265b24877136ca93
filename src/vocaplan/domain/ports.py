"""
Ports (interfaces) for the engine's external collaborators.

Application code depends on these abstractions; storage and catalogs
live outside the core.
"""

from abc import ABC, abstractmethod


class WordCatalog(ABC):
    """
    Port for resolving word ids to their text.

    Implementations:
        - RecordStore: words loaded alongside records from a file.
    """

    @abstractmethod
    def lookup(self, word_id: int) -> str | None:
        """
        Return the text of a word, or None if the id is unknown.
        """
        pass
