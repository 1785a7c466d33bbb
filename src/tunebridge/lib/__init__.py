"""Domain-specific library modules.

Modules here provide the matching logic used to decide whether entities
from different providers denote the same work.

Consumers should import directly from submodules::

    from tunebridge.lib.normalize import normalize_title
    from tunebridge.lib.equivalence import songs_equivalent
"""
