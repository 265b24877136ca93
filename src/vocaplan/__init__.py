"""vocaplan: adaptive exposure and scheduling engine for vocabulary flashcards."""

from vocaplan.consts import VERSION

__version__ = VERSION
