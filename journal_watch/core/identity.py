"""User id to user name resolution."""

import pwd
from typing import Callable, Dict, Optional


def _lookup_name(uid: int) -> str:
    return pwd.getpwuid(uid).pw_name


class IdentityResolver:
    """Maps numeric user id strings to display names.

    Never fails: anything that cannot be resolved comes back unchanged.
    Resolved names are cached, so the cache is bounded by the identity
    database. Ids that fail to resolve are looked up again next time.
    """

    def __init__(self, lookup: Optional[Callable[[int], str]] = None):
        self._lookup = lookup or _lookup_name
        self._cache: Dict[int, str] = {}

    def resolve(self, id_string: str) -> str:
        # Plain decimal only: no sign, whitespace or underscores
        if not (id_string.isascii() and id_string.isdigit()):
            return id_string
        uid = int(id_string)

        if uid in self._cache:
            return self._cache[uid]

        try:
            name = self._lookup(uid)
        except (KeyError, OverflowError, OSError):
            # No entry, or an id the database cannot represent
            return id_string

        if not name:
            return id_string
        self._cache[uid] = name
        return name
