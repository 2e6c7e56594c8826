"""
Bitmask severity levels

Every level is a single-bit flag, so any combination of levels is a mask
that can tag a message or act as a logger's acceptance filter.
"""

from typing import Dict, Iterator, List, Optional, Sequence

ALL = "ALL"

# Registered in this order, giving INFO=1, SUCCESS=2, WARNING=4, ERROR=8
DEFAULT_LEVELS = ("INFO", "SUCCESS", "WARNING", "ERROR")


class LevelSet:
    """
    Growing set of named levels.

    Bits are handed out in declaration order and never reassigned. A removed
    level leaves its bit permanently unused so old masks keep their meaning.
    The synthetic name "ALL" is not stored; it is computed on every lookup.
    """

    def __init__(self, skip_default: bool = False, custom: Sequence[str] = ()):
        """
        Initialize level set.

        Args:
            skip_default: Do not pre-register INFO, SUCCESS, WARNING, ERROR
            custom: Extra level names registered after the defaults
        """
        self._levels: Dict[str, int] = {}
        self._next_index = 0

        if not skip_default:
            for name in DEFAULT_LEVELS:
                self.add(name)
        for name in custom:
            self.add(name)

    def add(self, name: str) -> int:
        """
        Register a level.

        Args:
            name: Level name (case-insensitive)

        Returns:
            Bit assigned to the level, or 0 for the reserved name "ALL"
        """
        name = name.upper()
        if name == ALL:
            return 0
        if name in self._levels:
            return self._levels[name]

        bit = 1 << self._next_index
        self._next_index += 1
        self._levels[name] = bit
        return bit

    def remove(self, name: str) -> bool:
        """Forget a level. Its bit is not reused."""
        return self._levels.pop(name.upper(), None) is not None

    def get(self, *names: str) -> int:
        """
        Combine levels into a mask.

        Unknown names contribute 0, so the result matches any of the
        known levels given.

        Example:
            levels.get("INFO", "ERROR")  # 0b1001
            levels.get("ALL")            # every registered bit
        """
        mask = 0
        for name in names:
            name = name.upper()
            if name == ALL:
                mask |= self._all_mask()
            else:
                mask |= self._levels.get(name, 0)
        return mask

    def names(self) -> List[str]:
        """Registered level names in insertion order."""
        return list(self._levels)

    def name_of(self, mask: int) -> Optional[str]:
        """First registered level whose bit is set in mask."""
        for name, bit in self._levels.items():
            if mask & bit:
                return name
        return None

    def copy(self) -> "LevelSet":
        """Independent level set with the same names and bits."""
        clone = LevelSet(skip_default=True)
        clone._levels = dict(self._levels)
        clone._next_index = self._next_index
        return clone

    def _all_mask(self) -> int:
        mask = 0
        for bit in self._levels.values():
            mask |= bit
        return mask

    def __len__(self) -> int:
        return len(self._levels)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._levels

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        """String representation."""
        return f"LevelSet({self._levels})"
